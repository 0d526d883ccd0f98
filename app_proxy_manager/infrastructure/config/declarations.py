"""Declaration file loading with validation.

The file is YAML with a top-level ``apps`` list. Input is validated with
pydantic at the boundary and converted into frozen domain declarations.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ...application.exceptions import ConfigurationError
from ...domain.entities import (
    ApplicationDeclaration,
    AppRoleDeclaration,
    KeyVaultSecretReference,
    OnPremisesPublishing,
    OptionalClaim,
)

logger = logging.getLogger(__name__)

MAX_DECLARATION_FILE_SIZE_BYTES = 1024 * 1024


class KeyVaultSecretModel(BaseModel):
    """Reference to a Key Vault secret."""

    model_config = {"extra": "ignore"}

    key_vault_name: Annotated[str, Field(min_length=1)]
    name: Annotated[str, Field(min_length=1)]

    def to_domain(self) -> KeyVaultSecretReference:
        return KeyVaultSecretReference(key_vault_name=self.key_vault_name, name=self.name)


class OptionalClaimModel(BaseModel):
    """A SAML token claim with its additional properties."""

    model_config = {"extra": "ignore"}

    name: Annotated[str, Field(min_length=1)]
    additional_properties: list[str] = Field(default_factory=list, alias="additionalProperties")


class AppRoleModel(BaseModel):
    """A custom app role and the groups that receive it."""

    model_config = {"extra": "ignore"}

    id: Annotated[str, Field(min_length=1)]
    value: str
    display_name: str = Field(alias="displayName")
    description: str = ""
    groups: list[str] = Field(default_factory=list)


class ApplicationModel(BaseModel):
    """One entry of the ``apps`` list."""

    model_config = {"extra": "ignore"}

    name: Annotated[str, Field(min_length=1)]
    external_url: Annotated[str, Field(min_length=1, alias="externalUrl")]
    internal_url: Annotated[str, Field(min_length=1, alias="internalUrl")]
    logo_url: str | None = Field(None, alias="logoUrl")
    redirect_urls: list[str] | None = Field(None, alias="redirectUrls")
    identifier_urls: list[str] | None = Field(None, alias="identifierUrls")
    user_assignment_required: bool = Field(True, alias="userAssignmentRequired")
    app_role_assignments: list[str] = Field(default_factory=list, alias="appRoleAssignments")
    tls: KeyVaultSecretModel | None = None
    preferred_single_sign_on_mode: str | None = Field(None, alias="preferredSingleSignOnMode")
    optional_claims: list[OptionalClaimModel] = Field(default_factory=list, alias="optionalClaims")
    group_membership_claims: str | None = Field(None, alias="groupMembershipClaims")
    graph_api_permissions: list[str] = Field(default_factory=list, alias="graphApiPermissions")
    app_roles: list[AppRoleModel] = Field(default_factory=list, alias="appRoles")
    client_secret: KeyVaultSecretModel | None = Field(None, alias="clientSecret")
    hide_app: bool = Field(False, alias="hideApp")
    on_premises_publishing: dict[str, Any] = Field(default_factory=dict, alias="onPremisesPublishing")

    def to_domain(self) -> ApplicationDeclaration:
        """Convert into the domain declaration, applying defaults."""
        return ApplicationDeclaration(
            name=self.name,
            on_premises_publishing=OnPremisesPublishing(
                external_url=self.external_url,
                internal_url=self.internal_url,
                overrides=dict(self.on_premises_publishing),
            ),
            redirect_urls=tuple(self.redirect_urls if self.redirect_urls is not None else [self.external_url]),
            identifier_urls=tuple(self.identifier_urls if self.identifier_urls is not None else [self.external_url]),
            logo_url=self.logo_url,
            app_role_assignment_required=self.user_assignment_required,
            app_role_assignments=tuple(self.app_role_assignments),
            tls=self.tls.to_domain() if self.tls else None,
            preferred_single_sign_on_mode=self.preferred_single_sign_on_mode,
            optional_claims=tuple(
                OptionalClaim(name=claim.name, additional_properties=tuple(claim.additional_properties))
                for claim in self.optional_claims
            ),
            group_membership_claims=self.group_membership_claims,
            graph_api_permissions=tuple(self.graph_api_permissions),
            app_roles=tuple(
                AppRoleDeclaration(
                    id=role.id,
                    value=role.value,
                    display_name=role.display_name,
                    description=role.description,
                    groups=tuple(role.groups),
                )
                for role in self.app_roles
            ),
            client_secret=self.client_secret.to_domain() if self.client_secret else None,
            hide_app=self.hide_app,
        )


class DeclarationFileModel(BaseModel):
    """Root of the declaration file."""

    model_config = {"extra": "ignore"}

    apps: list[ApplicationModel] = Field(default_factory=list)


def parse_declarations(raw_data: Any, source: str = "<string>") -> list[ApplicationDeclaration]:
    """
    Validate already-decoded YAML content.

    Raises:
        ConfigurationError: If the content does not describe a list of applications.
    """
    if not isinstance(raw_data, dict):
        msg = f"Declaration file must contain a YAML mapping: {source}"
        raise ConfigurationError(msg)

    try:
        parsed = DeclarationFileModel.model_validate(raw_data)
    except ValidationError as e:
        # Format pydantic validation errors for readability
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"  - {loc}: {error['msg']}")

        error_list = "\n".join(errors)
        msg = f"Validation failed for {source}:\n{error_list}"
        raise ConfigurationError(msg) from e

    names = [app.name for app in parsed.apps]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        msg = f"Application names must be unique in {source}: {', '.join(duplicates)}"
        raise ConfigurationError(msg)

    return [app.to_domain() for app in parsed.apps]


def load_declarations(path: Path) -> list[ApplicationDeclaration]:
    """
    Load and validate application declarations from a YAML file.

    Raises:
        ConfigurationError: If the file cannot be read or fails validation.
    """
    if not path.exists():
        msg = f"Declaration file not found: {path}"
        raise ConfigurationError(msg)

    try:
        file_size = path.stat().st_size
    except OSError as e:
        msg = f"Failed to stat declaration file {path}: {e}"
        raise ConfigurationError(msg) from e

    if file_size > MAX_DECLARATION_FILE_SIZE_BYTES:
        msg = f"Declaration file exceeds maximum size of {MAX_DECLARATION_FILE_SIZE_BYTES} bytes: {path}"
        raise ConfigurationError(msg)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Failed to read declaration file {path}: {e}"
        raise ConfigurationError(msg) from e

    try:
        raw_data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise ConfigurationError(msg) from e

    declarations = parse_declarations(raw_data, str(path))
    logger.info("Loaded %d application declarations from %s", len(declarations), path)
    return declarations
