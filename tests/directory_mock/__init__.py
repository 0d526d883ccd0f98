"""In-memory Entra ID directory for integration testing.

Provides implementations of the directory gateway and secret store ports
that keep their state in memory, so use cases can be exercised end to end
without Graph or Key Vault connectivity.

Key Features:
- Applications, service principals, groups and app role assignments
- Paginated assignment listings with a configurable page size
- Visibility delay simulating eventual consistency after creation
- Rejection of enabled app role removal, as the real directory does
- Error injection per gateway operation
- Call log for asserting on the requests a use case made

Usage:
    from directory_mock import InMemoryDirectory

    directory = InMemoryDirectory()
    directory.add_group("Staff")
    provisioner = ApplicationProvisioner(directory, waiter)
"""

from .directory import GatewayCall, InMemoryDirectory
from .secret_store import InMemorySecretStore

__all__ = ["GatewayCall", "InMemoryDirectory", "InMemorySecretStore"]
