"""Single-PATCH configuration steps of an application."""

from __future__ import annotations

import logging

from ...domain.entities import ApplicationDeclaration
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)

HIDE_APP_TAG = "HideApp"


class ApplicationConfigurator:
    """Writes the declared settings that map directly onto object properties."""

    def __init__(self, gateway: DirectoryGateway) -> None:
        """Initialize the configurator."""
        self._gateway = gateway

    async def update_application_config(self, application_id: str, declaration: ApplicationDeclaration) -> None:
        """Set identifier URIs, redirect URIs, home page and visibility tag."""
        await self._gateway.update_application(
            application_id,
            {
                "identifierUris": list(declaration.identifier_urls),
                "web": {
                    "redirectUris": list(declaration.redirect_urls),
                    "homePageUrl": declaration.external_url,
                },
                "tags": [HIDE_APP_TAG] if declaration.hide_app else [],
            },
            description="updating application config",
        )

    async def set_logo(self, application_id: str, logo_url: str | None) -> bool:
        """Upload the logo found at ``logo_url``; does nothing without one."""
        if not logo_url:
            return False

        content, content_type = await self._gateway.fetch_logo(logo_url)
        await self._gateway.set_logo(application_id, content, content_type)
        logger.info("Set logo of application %s from %s", application_id, logo_url)
        return True

    async def set_on_premises_publishing(self, application_id: str, declaration: ApplicationDeclaration) -> None:
        """Write the App Proxy publishing settings."""
        await self._gateway.update_application(
            application_id,
            {"onPremisesPublishing": declaration.on_premises_publishing.to_graph()},
            description="setting onPremisesPublishing",
            beta=True,
        )

    async def set_user_assignment_required(self, service_principal_id: str, required: bool) -> None:
        """Toggle whether users need a role assignment to sign in."""
        await self._gateway.update_service_principal(
            service_principal_id,
            {"appRoleAssignmentRequired": required},
            description="updating servicePrincipal config",
        )

    async def add_optional_claims(self, application_id: str, declaration: ApplicationDeclaration) -> bool:
        """Set group membership claims and SAML optional claims when either is declared."""
        if not declaration.optional_claims and not declaration.group_membership_claims:
            return False

        optional_claims = (
            {"saml2Token": [claim.to_graph() for claim in declaration.optional_claims]}
            if declaration.optional_claims
            else {}
        )
        await self._gateway.update_application(
            application_id,
            {
                "groupMembershipClaims": declaration.group_membership_claims,
                "optionalClaims": optional_claims,
            },
            description="adding optional claims",
        )
        return True

    async def add_saml_uris(self, application_id: str, declaration: ApplicationDeclaration) -> None:
        """Set the SAML entity ids and reply URLs."""
        await self._gateway.update_application(
            application_id,
            {
                "identifierUris": list(declaration.identifier_urls),
                "web": {"redirectUris": list(declaration.redirect_urls)},
            },
            description="adding SAML config",
        )
