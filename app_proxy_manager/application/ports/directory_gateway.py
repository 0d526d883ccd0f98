"""Port for the directory graph - driven/secondary port."""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any, Protocol

from ...domain.entities import ApplicationAndServicePrincipalId
from ...domain.value_objects import PermissionCatalog


class DirectoryGateway(Protocol):
    """
    Port for reading and writing identity objects in the directory.

    Pure transport: implementations carry no reconciliation policy. Every
    non-success response is raised as DirectoryOperationError.
    """

    async def find_application_ids(self, display_name: str) -> list[str]:
        """Object ids of applications whose display name matches exactly."""
        ...

    async def find_service_principal_ids(self, display_name: str) -> list[str]:
        """Object ids of service principals whose display name matches exactly."""
        ...

    async def instantiate_application(self, display_name: str) -> ApplicationAndServicePrincipalId:
        """Create an application and its service principal from the non-gallery template."""
        ...

    async def read_application(self, application_id: str) -> dict[str, Any]:
        """Read an application object."""
        ...

    async def update_application(
        self,
        application_id: str,
        body: dict[str, Any],
        *,
        description: str,
        beta: bool = False,
    ) -> None:
        """PATCH an application object."""
        ...

    async def delete_application(self, application_id: str) -> None:
        """Delete an application object."""
        ...

    async def fetch_logo(self, url: str) -> tuple[bytes, str]:
        """Download a logo, returning its bytes and content type."""
        ...

    async def set_logo(self, application_id: str, content: bytes, content_type: str) -> None:
        """Upload the logo of an application."""
        ...

    async def add_password(self, application_id: str, display_name: str) -> dict[str, Any]:
        """Add a client secret; the response carries `secretText`."""
        ...

    async def read_service_principal(self, service_principal_id: str) -> dict[str, Any]:
        """Read a service principal object."""
        ...

    async def update_service_principal(
        self,
        service_principal_id: str,
        body: dict[str, Any],
        *,
        description: str,
    ) -> None:
        """PATCH a service principal object."""
        ...

    async def list_service_principal_app_roles(self, service_principal_id: str) -> list[dict[str, Any]]:
        """App roles published by a service principal."""
        ...

    async def add_token_signing_certificate(
        self,
        service_principal_id: str,
        display_name: str,
        end_date_time: datetime,
    ) -> dict[str, Any]:
        """Create a self-signed SAML signing certificate; the response carries `thumbprint`."""
        ...

    async def find_security_group_ids(self, display_name: str) -> list[str]:
        """Object ids of security-enabled groups whose display name matches exactly."""
        ...

    def iter_group_app_role_assignments(self, group_id: str) -> AsyncIterator[list[dict[str, Any]]]:
        """Pages of a group's app role assignments, following continuation links."""
        ...

    async def create_group_app_role_assignment(
        self,
        group_id: str,
        resource_id: str,
        app_role_id: str,
    ) -> dict[str, Any]:
        """Grant an app role on a resource service principal to a group."""
        ...

    async def get_permission_catalog(self, resource_app_id: str) -> PermissionCatalog:
        """Snapshot of the app roles and scopes a resource application publishes."""
        ...
