"""Two-phase app role updates."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ...domain.entities import AppRole, AppRoleDeclaration
from ...domain.services import disable_all, effective_app_roles, removed_role_ids, requires_disable
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppRoleUpdate:
    """Outcome of an app role update."""

    roles: tuple[AppRole, ...]
    removed_ids: tuple[str, ...]
    disabled_first: bool


class AppRoleLifecycleManager:
    """
    Replaces an application's app roles without tripping over live assignments.

    The directory refuses to delete an enabled role, so when a role is going
    away every stored role is first disabled with its identity unchanged, and
    only then is the desired list written. Additions and edits skip the
    disable phase, since disabling briefly suspends access enforcement.
    """

    def __init__(self, gateway: DirectoryGateway) -> None:
        """Initialize the manager."""
        self._gateway = gateway

    async def apply(self, application_id: str, declared: Sequence[AppRoleDeclaration]) -> AppRoleUpdate:
        """
        Converge the application's role list to the declared roles.

        Args:
            application_id: Object id of the application registration.
            declared: Declared roles; the baseline User role is always added.

        Returns:
            What was written and whether the disable phase ran.
        """
        desired = effective_app_roles(declared)

        application = await self._gateway.read_application(application_id)
        current = [AppRole.from_graph(raw) for raw in application.get("appRoles") or []]

        disabled_first = requires_disable(current, desired)
        if disabled_first:
            await self._write(application_id, disable_all(current), "disabling app roles")
            logger.info("Temporarily disabled app roles of %s to allow updates", application_id)

        await self._write(application_id, desired, "updating app roles")
        logger.info("Updated %d app roles of application %s", len(desired), application_id)

        return AppRoleUpdate(
            roles=tuple(desired),
            removed_ids=tuple(removed_role_ids(current, desired)),
            disabled_first=disabled_first,
        )

    async def _write(self, application_id: str, roles: Sequence[AppRole], description: str) -> None:
        await self._gateway.update_application(
            application_id,
            {"appRoles": [role.to_graph() for role in roles]},
            description=description,
        )
