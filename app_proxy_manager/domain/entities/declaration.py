"""Declared state of an application published through App Proxy."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .app_role import AppRoleDeclaration

SAML_SSO_MODE = "saml"


def default_on_premises_flags() -> dict[str, Any]:
    """Publishing flags applied to every application unless overridden."""
    return {
        "externalAuthenticationType": "aadPreAuthentication",
        "isHttpOnlyCookieEnabled": True,
        "isOnPremPublishingEnabled": True,
        "isPersistentCookieEnabled": True,
        "isSecureCookieEnabled": True,
        "isTranslateHostHeaderEnabled": True,
        "isTranslateLinksInBodyEnabled": False,
    }


@dataclass(frozen=True, slots=True)
class KeyVaultSecretReference:
    """Location of a secret in Azure Key Vault."""

    key_vault_name: str
    name: str


@dataclass(frozen=True, slots=True)
class OptionalClaim:
    """A SAML token optional claim."""

    name: str
    additional_properties: tuple[str, ...] = ()

    def to_graph(self) -> dict[str, Any]:
        """Serialize to the Graph API `optionalClaim` shape."""
        return {"name": self.name, "additionalProperties": list(self.additional_properties)}


@dataclass(frozen=True, slots=True)
class OnPremisesPublishing:
    """App Proxy publishing settings."""

    external_url: str
    internal_url: str
    overrides: Mapping[str, Any] = field(default_factory=dict)

    def to_graph(self) -> dict[str, Any]:
        """Serialize to the Graph API `onPremisesPublishing` shape."""
        return {
            "externalUrl": self.external_url,
            "internalUrl": self.internal_url,
            **default_on_premises_flags(),
            **self.overrides,
        }


@dataclass(frozen=True, slots=True)
class ApplicationDeclaration:
    """Everything the configuration file says about one application."""

    name: str
    on_premises_publishing: OnPremisesPublishing
    redirect_urls: tuple[str, ...] = ()
    identifier_urls: tuple[str, ...] = ()
    logo_url: str | None = None
    app_role_assignment_required: bool = True
    app_role_assignments: tuple[str, ...] = ()
    tls: KeyVaultSecretReference | None = None
    preferred_single_sign_on_mode: str | None = None
    optional_claims: tuple[OptionalClaim, ...] = ()
    group_membership_claims: str | None = None
    graph_api_permissions: tuple[str, ...] = ()
    app_roles: tuple[AppRoleDeclaration, ...] = ()
    client_secret: KeyVaultSecretReference | None = None
    hide_app: bool = False

    @property
    def external_url(self) -> str:
        """Public URL of the published application."""
        return self.on_premises_publishing.external_url

    @property
    def is_saml(self) -> bool:
        """Check if the application uses SAML single sign-on."""
        return (self.preferred_single_sign_on_mode or "").lower() == SAML_SSO_MODE
