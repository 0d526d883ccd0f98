"""Configuration loading."""

from .declarations import load_declarations, parse_declarations
from .settings import Settings, load_settings

__all__ = ["Settings", "load_declarations", "load_settings", "parse_declarations"]
