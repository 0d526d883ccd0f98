"""Domain services."""

from .app_role_planner import (
    BASELINE_USER_ROLE,
    disable_all,
    effective_app_roles,
    removed_role_ids,
    requires_disable,
)
from .credential_rotation import CredentialRotationAnalyzer
from .resource_access_merger import merge_required_resource_access

__all__ = [
    "BASELINE_USER_ROLE",
    "CredentialRotationAnalyzer",
    "disable_all",
    "effective_app_roles",
    "merge_required_resource_access",
    "removed_role_ids",
    "requires_disable",
]
