"""Reconciliation of the Graph API permissions an application requests."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ...domain.services import merge_required_resource_access
from ...domain.value_objects import MICROSOFT_GRAPH_APP_ID, ResourceAccess
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)


class ResourceAccessReconciler:
    """
    Sets the permissions an application requests from a resource application.

    Deals with the `requiredResourceAccess` property of the application:
    entries for other resources are preserved, the entry for the target
    resource is replaced.
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        *,
        resource_app_id: str = MICROSOFT_GRAPH_APP_ID,
    ) -> None:
        """Initialize the reconciler for one resource application."""
        self._gateway = gateway
        self._resource_app_id = resource_app_id

    async def reconcile(self, application_id: str, permission_names: Sequence[str]) -> list[ResourceAccess]:
        """
        Make the application request exactly the resolvable ``permission_names``.

        Args:
            application_id: Object id of the application.
            permission_names: Names such as ``Group.Create`` or ``offline_access``.

        Returns:
            The resource access entries written, empty when nothing was done.
        """
        if not permission_names:
            logger.info("No API permissions to grant for application %s", application_id)
            return []

        logger.info("Granting API permissions %s to application %s", list(permission_names), application_id)
        catalog = await self._gateway.get_permission_catalog(self._resource_app_id)
        desired = catalog.resolve(permission_names)
        if not desired:
            logger.warning("None of the permissions %s could be resolved, leaving them unchanged", list(permission_names))
            return []

        application = await self._gateway.read_application(application_id)
        current = application.get("requiredResourceAccess") or []
        merged = merge_required_resource_access(current, self._resource_app_id, desired)

        await self._gateway.update_application(
            application_id,
            {"requiredResourceAccess": merged},
            description="granting API permissions",
        )
        return desired
