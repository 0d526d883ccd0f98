"""Infrastructure adapters."""

from .certificates import PfxRepackager
from .entra_id import EntraIdCredentials, GraphClient, GraphDirectoryGateway, MsalTokenProvider
from .key_vault import KeyVaultSecretStore

__all__ = [
    "EntraIdCredentials",
    "GraphClient",
    "GraphDirectoryGateway",
    "KeyVaultSecretStore",
    "MsalTokenProvider",
    "PfxRepackager",
]
