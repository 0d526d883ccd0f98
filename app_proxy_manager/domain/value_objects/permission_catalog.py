"""Permission catalog snapshot of a resource application."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Self

from .resource_access import ResourceAccess
from .resource_access_type import ResourceAccessType

logger = logging.getLogger(__name__)

MICROSOFT_GRAPH_APP_ID = "00000003-0000-0000-c000-000000000000"


@dataclass(frozen=True, slots=True)
class PermissionCatalog:
    """
    Published app roles and delegated scopes of a resource application.

    A catalog is an immutable snapshot fetched once per reconciliation, so
    resolving names against it needs no network access.
    """

    resource_app_id: str
    app_roles: Mapping[str, str] = field(default_factory=dict)
    scopes: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_service_principal(cls, raw: dict[str, Any]) -> Self:
        """Build a catalog from a Graph service principal with roles and scopes selected."""
        return cls(
            resource_app_id=raw.get("appId", ""),
            app_roles={role["value"]: role["id"] for role in raw.get("appRoles") or [] if role.get("value")},
            scopes={
                scope["value"]: scope["id"]
                for scope in raw.get("oauth2PermissionScopes") or []
                if scope.get("value")
            },
        )

    def find_role(self, name: str) -> str | None:
        """Find an application permission by exact value."""
        return self.app_roles.get(name)

    def find_scope(self, name: str) -> str | None:
        """Find a delegated permission by value, ignoring case."""
        wanted = name.lower()
        for value, scope_id in self.scopes.items():
            if value.lower() == wanted:
                return scope_id
        return None

    def resolve(self, names: Iterable[str]) -> list[ResourceAccess]:
        """
        Resolve permission names to resource access entries.

        Application permissions come first, delegated scopes second. A name
        published as both kinds yields both entries. Repeated names, or scopes
        differing only in case, resolve to a single entry. Names missing from
        the catalog are dropped with a warning.

        Args:
            names: Human-readable permission names such as ``Group.Create``.

        Returns:
            Resource access entries for every resolvable name.
        """
        names = list(names)
        roles: list[ResourceAccess] = []
        scopes: list[ResourceAccess] = []

        for name in names:
            role_id = self.find_role(name)
            scope_id = self.find_scope(name)
            if role_id:
                roles.append(ResourceAccess(id=role_id, type=ResourceAccessType.ROLE))
            if scope_id:
                scopes.append(ResourceAccess(id=scope_id, type=ResourceAccessType.SCOPE))
            if not role_id and not scope_id:
                logger.warning(
                    "Permission %r could not be found in the catalog of %s, skipping",
                    name,
                    self.resource_app_id,
                )

        # Graph rejects an entry listing the same permission twice
        return list(dict.fromkeys(roles + scopes))
