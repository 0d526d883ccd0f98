"""Domain entities - Objects with identity and lifecycle."""

from .app_role import AppRole, AppRoleDeclaration
from .credential import KeyCredential, PasswordCredential, parse_graph_datetime
from .declaration import (
    ApplicationDeclaration,
    KeyVaultSecretReference,
    OnPremisesPublishing,
    OptionalClaim,
    default_on_premises_flags,
)
from .directory_object import ApplicationAndServicePrincipalId

__all__ = [
    "AppRole",
    "AppRoleDeclaration",
    "ApplicationAndServicePrincipalId",
    "ApplicationDeclaration",
    "KeyCredential",
    "KeyVaultSecretReference",
    "OnPremisesPublishing",
    "OptionalClaim",
    "PasswordCredential",
    "default_on_premises_flags",
    "parse_graph_datetime",
]
