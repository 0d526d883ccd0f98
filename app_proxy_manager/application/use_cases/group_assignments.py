"""Idempotent group app role assignments."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ...domain.entities import AppRoleDeclaration
from ..exceptions import AppRoleNotFoundError, GroupNotFoundError
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)


class GroupAssignmentReconciler:
    """
    Ensures groups hold app roles on a resource service principal.

    Existing assignments are checked across every page before anything is
    created, so repeating a call never produces a duplicate assignment.
    """

    def __init__(self, gateway: DirectoryGateway) -> None:
        """Initialize the reconciler."""
        self._gateway = gateway

    async def resolve_group_id(self, group_name: str) -> str:
        """
        Resolve a group display name to the id of its security group.

        Raises:
            GroupNotFoundError: If no group, or more than one, matches.
        """
        group_ids = await self._gateway.find_security_group_ids(group_name)
        if len(group_ids) != 1:
            msg = f"Error finding group id, does the group {group_name} exist?"
            if group_ids:
                msg = f"Error finding group id, {len(group_ids)} security groups are named {group_name}"
            raise GroupNotFoundError(msg)
        return group_ids[0]

    async def assignment_exists(self, principal_id: str, resource_id: str, role_id: str) -> bool:
        """Check every page of the principal's assignments for the role on the resource."""
        async for page in self._gateway.iter_group_app_role_assignments(principal_id):
            for assignment in page:
                if assignment.get("appRoleId") == role_id and assignment.get("resourceId") == resource_id:
                    return True
        return False

    async def ensure_assigned(self, principal_id: str, resource_id: str, role_id: str) -> bool:
        """
        Make sure the group holds the role on the resource.

        Returns:
            True if an assignment was created, False if it already existed.
        """
        if await self.assignment_exists(principal_id, resource_id, role_id):
            logger.info("Group role assignment already exists, skipping")
            return False

        await self._gateway.create_group_app_role_assignment(principal_id, resource_id, role_id)
        logger.info("Added role %s on %s for group %s", role_id, resource_id, principal_id)
        return True

    async def assign_app_roles(self, resource_id: str, declared: Sequence[AppRoleDeclaration]) -> int:
        """
        Grant every declared role to each of its groups.

        Returns:
            Number of assignments created.
        """
        created = 0
        for role in declared:
            for group_name in role.groups:
                group_id = await self.resolve_group_id(group_name)
                if await self.ensure_assigned(group_id, resource_id, role.id):
                    created += 1
                logger.info("Processed group %s for app role %s", group_name, role.display_name)
        return created

    async def assign_default_role(self, resource_id: str, group_names: Sequence[str]) -> int:
        """
        Grant the service principal's first published role to each group.

        Returns:
            Number of assignments created.

        Raises:
            AppRoleNotFoundError: If the service principal publishes no role.
        """
        if not group_names:
            return 0

        roles = await self._gateway.list_service_principal_app_roles(resource_id)
        if not roles:
            msg = f"Service principal {resource_id} has no app role to assign"
            raise AppRoleNotFoundError(msg)
        role_id = roles[0]["id"]

        created = 0
        for group_name in group_names:
            group_id = await self.resolve_group_id(group_name)
            if await self.ensure_assigned(group_id, resource_id, role_id):
                created += 1
                logger.info("Assigned group %s", group_name)
        return created
