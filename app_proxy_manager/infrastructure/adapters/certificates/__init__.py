"""Certificate adapters."""

from .pfx import PfxRepackager, repackage

__all__ = ["PfxRepackager", "repackage"]
