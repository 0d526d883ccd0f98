"""Application ports - Interfaces for external adapters."""

from .certificate_repackager import CertificateRepackager
from .directory_gateway import DirectoryGateway
from .secret_store import SecretStore

__all__ = [
    "CertificateRepackager",
    "DirectoryGateway",
    "SecretStore",
]
