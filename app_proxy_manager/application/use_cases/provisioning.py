"""Find-or-create of the application and service principal pair."""

from __future__ import annotations

import logging

from ...domain.entities import ApplicationAndServicePrincipalId
from ..exceptions import AmbiguousApplicationError, ServicePrincipalMissingError
from ..ports import DirectoryGateway
from .waiter import EventualConsistencyWaiter

logger = logging.getLogger(__name__)


class ApplicationProvisioner:
    """
    Converges a display name to exactly one application and service principal.

    The display name is the idempotency key: repeated calls return the same
    pair instead of creating duplicates.
    """

    def __init__(self, gateway: DirectoryGateway, waiter: EventualConsistencyWaiter) -> None:
        """Initialize the provisioner."""
        self._gateway = gateway
        self._waiter = waiter

    async def find_existing(self, display_name: str) -> str | None:
        """
        Look up an application by exact display name.

        Returns:
            The application object id, or None when there is none.

        Raises:
            AmbiguousApplicationError: If several applications share the name.
        """
        application_ids = await self._gateway.find_application_ids(display_name)
        if len(application_ids) > 1:
            msg = f"Found {len(application_ids)} applications named {display_name}, aborting"
            raise AmbiguousApplicationError(msg)
        return application_ids[0] if application_ids else None

    async def find_or_create(self, display_name: str) -> ApplicationAndServicePrincipalId:
        """
        Return the object pair for ``display_name``, creating it when missing.

        Raises:
            AmbiguousApplicationError: If the name matches several objects.
            ServicePrincipalMissingError: If the application exists but its
                service principal does not. This is never repaired here.
            ObjectNotVisibleError: If a created application never becomes readable.
        """
        application_id = await self.find_existing(display_name)

        if application_id:
            logger.info("Found existing application %s (%s)", display_name, application_id)
            service_principal_id = await self._find_service_principal(display_name)
            return ApplicationAndServicePrincipalId(
                application_id=application_id,
                service_principal_id=service_principal_id,
            )

        logger.info("Creating application %s", display_name)
        created = await self._gateway.instantiate_application(display_name)
        await self._waiter.wait_for_application(created.application_id)
        logger.info("Created application %s (%s)", display_name, created.application_id)
        return created

    async def _find_service_principal(self, display_name: str) -> str:
        service_principal_ids = await self._gateway.find_service_principal_ids(display_name)
        if not service_principal_ids:
            msg = f"Found application {display_name} but no service principal, aborting"
            raise ServicePrincipalMissingError(msg)
        if len(service_principal_ids) > 1:
            msg = f"Found {len(service_principal_ids)} service principals named {display_name}, aborting"
            raise AmbiguousApplicationError(msg)
        return service_principal_ids[0]
