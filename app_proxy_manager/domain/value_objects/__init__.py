"""Domain value objects - Immutable objects defined by their attributes."""

from .permission_catalog import MICROSOFT_GRAPH_APP_ID, PermissionCatalog
from .resource_access import ResourceAccess
from .resource_access_type import ResourceAccessType
from .rotation_policy import RotationPolicy

__all__ = [
    "MICROSOFT_GRAPH_APP_ID",
    "PermissionCatalog",
    "ResourceAccess",
    "ResourceAccessType",
    "RotationPolicy",
]
