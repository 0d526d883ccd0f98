"""Microsoft Entra ID adapters."""

from .gateway import GraphDirectoryGateway
from .graph_client import GraphClient
from .token_provider import AccessTokenProvider, EntraIdCredentials, MsalTokenProvider

__all__ = [
    "AccessTokenProvider",
    "EntraIdCredentials",
    "GraphClient",
    "GraphDirectoryGateway",
    "MsalTokenProvider",
]
