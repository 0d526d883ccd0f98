"""Directory gateway implementation on top of Microsoft Graph."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from typing import Any, ClassVar

from ....application.exceptions import DirectoryOperationError
from ....domain.entities import ApplicationAndServicePrincipalId
from ....domain.value_objects import PermissionCatalog
from .graph_client import GraphClient

logger = logging.getLogger(__name__)


def odata_literal(value: str) -> str:
    """Quote a string for use inside an OData filter expression."""
    return "'" + value.replace("'", "''") + "'"


def format_graph_datetime(value: datetime) -> str:
    """Format an aware datetime the way the Graph API expects it."""
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


class GraphDirectoryGateway:
    """
    DirectoryGateway implementation using Microsoft Graph API.

    Pure transport: every method maps onto one Graph request (or one
    paginated listing) and carries no reconciliation policy.
    """

    # Non-gallery application template used by "Create your own application"
    NON_GALLERY_TEMPLATE_ID: ClassVar[str] = "8adf8e6e-67b2-4cf2-a259-e3dc5476c621"
    DEFAULT_LOGO_CONTENT_TYPE: ClassVar[str] = "image/png"

    def __init__(self, client: GraphClient) -> None:
        """
        Initialize the gateway.

        Args:
            client: Authenticated Graph API client.
        """
        self._client = client

    async def _find_ids(self, collection: str, filter_expression: str, description: str) -> list[str]:
        body = await self._client.request(
            "GET",
            f"/{collection}",
            description=description,
            # Two results are enough to tell "one" from "ambiguous"
            params={"$filter": filter_expression, "$select": "id", "$top": "2"},
        )
        return [item["id"] for item in body.get("value", [])]

    async def find_application_ids(self, display_name: str) -> list[str]:
        """Find applications with exactly this display name."""
        return await self._find_ids(
            "applications",
            f"displayName eq {odata_literal(display_name)}",
            "searching for application",
        )

    async def find_service_principal_ids(self, display_name: str) -> list[str]:
        """Find service principals with exactly this display name."""
        return await self._find_ids(
            "servicePrincipals",
            f"displayName eq {odata_literal(display_name)}",
            "searching for service principal",
        )

    async def find_security_group_ids(self, display_name: str) -> list[str]:
        """Find security-enabled groups with exactly this display name."""
        return await self._find_ids(
            "groups",
            f"displayName eq {odata_literal(display_name)} and securityEnabled eq true",
            "finding group id",
        )

    async def instantiate_application(self, display_name: str) -> ApplicationAndServicePrincipalId:
        """Create an application and its service principal from the non-gallery template."""
        body = await self._client.request(
            "POST",
            f"/applicationTemplates/{self.NON_GALLERY_TEMPLATE_ID}/instantiate",
            description="creating application",
            json={"displayName": display_name},
        )
        return ApplicationAndServicePrincipalId(
            application_id=body["application"]["id"],
            service_principal_id=body["servicePrincipal"]["id"],
        )

    async def read_application(self, application_id: str) -> dict[str, Any]:
        """Read an application object."""
        logger.debug("Retrieving application %s", application_id)
        return await self._client.request(
            "GET",
            f"/applications/{application_id}",
            description="retrieving application",
        )

    async def update_application(
        self,
        application_id: str,
        body: dict[str, Any],
        *,
        description: str,
        beta: bool = False,
    ) -> None:
        """PATCH an application, on the beta endpoint when requested."""
        await self._client.request(
            "PATCH",
            f"/applications/{application_id}",
            description=description,
            json=body,
            beta=beta,
        )

    async def delete_application(self, application_id: str) -> None:
        """Delete an application."""
        logger.info("Deleting application %s", application_id)
        await self._client.request(
            "DELETE",
            f"/applications/{application_id}",
            description="deleting application",
        )

    async def fetch_logo(self, url: str) -> tuple[bytes, str]:
        """Download a logo and its content type."""
        response = await self._client.download(url, description="downloading logo")
        content_type = response.headers.get("content-type") or self.DEFAULT_LOGO_CONTENT_TYPE
        return response.content, content_type

    async def set_logo(self, application_id: str, content: bytes, content_type: str) -> None:
        """Upload the application logo."""
        await self._client.request(
            "PUT",
            f"/applications/{application_id}/logo",
            description="setting logo",
            content=content,
            content_type=content_type,
        )

    async def add_password(self, application_id: str, display_name: str) -> dict[str, Any]:
        """Add a client password and return it with its secret text."""
        return await self._client.request(
            "POST",
            f"/applications/{application_id}/addPassword",
            description="adding client password",
            json={"passwordCredential": {"displayName": display_name}},
        )

    async def read_service_principal(self, service_principal_id: str) -> dict[str, Any]:
        """Read a service principal object."""
        logger.debug("Retrieving service principal %s", service_principal_id)
        return await self._client.request(
            "GET",
            f"/servicePrincipals/{service_principal_id}",
            description="reading service principal",
        )

    async def update_service_principal(
        self,
        service_principal_id: str,
        body: dict[str, Any],
        *,
        description: str,
    ) -> None:
        """PATCH a service principal."""
        await self._client.request(
            "PATCH",
            f"/servicePrincipals/{service_principal_id}",
            description=description,
            json=body,
        )

    async def list_service_principal_app_roles(self, service_principal_id: str) -> list[dict[str, Any]]:
        """List the app roles a service principal publishes."""
        body = await self._client.request(
            "GET",
            f"/servicePrincipals/{service_principal_id}",
            description="finding app roles",
            params={"$select": "id,appRoles"},
        )
        return body.get("appRoles") or []

    async def add_token_signing_certificate(
        self,
        service_principal_id: str,
        display_name: str,
        end_date_time: datetime,
    ) -> dict[str, Any]:
        """Create a SAML token signing certificate on a service principal."""
        return await self._client.request(
            "POST",
            f"/servicePrincipals/{service_principal_id}/addTokenSigningCertificate",
            description="adding SAML signing certificate",
            json={"displayName": display_name, "endDateTime": format_graph_datetime(end_date_time)},
        )

    async def iter_group_app_role_assignments(self, group_id: str) -> AsyncIterator[list[dict[str, Any]]]:
        """Yield the group's app role assignments page by page."""
        async for page in self._client.iter_pages(
            f"/groups/{group_id}/appRoleAssignments",
            description="listing group app role assignments",
        ):
            yield page

    async def create_group_app_role_assignment(
        self,
        group_id: str,
        resource_id: str,
        app_role_id: str,
    ) -> dict[str, Any]:
        """Grant an app role on a resource to a group."""
        return await self._client.request(
            "POST",
            f"/groups/{group_id}/appRoleAssignments",
            description="assigning app role to group",
            json={"principalId": group_id, "resourceId": resource_id, "appRoleId": app_role_id},
        )

    async def get_permission_catalog(self, resource_app_id: str) -> PermissionCatalog:
        """Fetch the app roles and delegated scopes of a resource application."""
        description = "getting resource permission catalog"
        body = await self._client.request(
            "GET",
            "/servicePrincipals",
            description=description,
            params={
                "$filter": f"appId eq {odata_literal(resource_app_id)}",
                "$select": "id,appId,appRoles,oauth2PermissionScopes",
            },
        )
        service_principals = body.get("value", [])
        if not service_principals:
            raise DirectoryOperationError(description, 404, {"resourceAppId": resource_app_id})

        catalog = PermissionCatalog.from_service_principal(service_principals[0])
        logger.info(
            "Loaded %d app roles and %d scopes of %s",
            len(catalog.app_roles),
            len(catalog.scopes),
            resource_app_id,
        )
        return catalog
