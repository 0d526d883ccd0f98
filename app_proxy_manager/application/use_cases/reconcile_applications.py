"""Use case reconciling every declared application."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ...domain.entities import ApplicationAndServicePrincipalId, ApplicationDeclaration
from .app_roles import AppRoleLifecycleManager
from .client_secret import ClientSecretRotator
from .configure import ApplicationConfigurator
from .group_assignments import GroupAssignmentReconciler
from .provisioning import ApplicationProvisioner
from .resource_access import ResourceAccessReconciler
from .signing_certificate import SigningCertificateRotator
from .tls_certificate import TlsCertificateInstaller

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplicationOutcome:
    """Result of reconciling one application."""

    name: str
    ids: ApplicationAndServicePrincipalId | None = None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """Check if the application was reconciled without error."""
        return self.error is None


@dataclass(frozen=True, slots=True)
class RunResult:
    """Result of a reconciliation run."""

    outcomes: tuple[ApplicationOutcome, ...]

    @property
    def success(self) -> bool:
        """Check if every application was reconciled."""
        return all(outcome.success for outcome in self.outcomes)

    @property
    def failed(self) -> list[ApplicationOutcome]:
        """Applications whose reconciliation failed."""
        return [outcome for outcome in self.outcomes if not outcome.success]


class ReconcileApplications:
    """
    Use case converging the directory to the declared applications.

    Applications are handled one at a time. A failure is logged and recorded
    for that application only; the run moves on to the next one.
    """

    def __init__(
        self,
        *,
        provisioner: ApplicationProvisioner,
        configurator: ApplicationConfigurator,
        assignments: GroupAssignmentReconciler,
        tls_installer: TlsCertificateInstaller,
        signing_certificates: SigningCertificateRotator,
        resource_access: ResourceAccessReconciler,
        client_secrets: ClientSecretRotator,
        app_roles: AppRoleLifecycleManager,
    ) -> None:
        """Initialize the use case with its collaborators."""
        self._provisioner = provisioner
        self._configurator = configurator
        self._assignments = assignments
        self._tls_installer = tls_installer
        self._signing_certificates = signing_certificates
        self._resource_access = resource_access
        self._client_secrets = client_secrets
        self._app_roles = app_roles

    async def execute(self, declarations: Sequence[ApplicationDeclaration]) -> RunResult:
        """
        Reconcile every declaration in order.

        Returns:
            RunResult with one outcome per declaration.
        """
        logger.info("Processing %d application(s)", len(declarations))
        outcomes: list[ApplicationOutcome] = []

        for declaration in declarations:
            try:
                ids = await self.reconcile(declaration)
            except Exception as e:
                logger.exception("Failed to reconcile application %s", declaration.name)
                outcomes.append(ApplicationOutcome(name=declaration.name, error=e))
            else:
                logger.info("Reconciled application %s (%s)", declaration.name, ids.application_id)
                outcomes.append(ApplicationOutcome(name=declaration.name, ids=ids))

        result = RunResult(outcomes=tuple(outcomes))
        if not result.success:
            logger.error(
                "%d of %d application(s) failed: %s",
                len(result.failed),
                len(outcomes),
                [outcome.name for outcome in result.failed],
            )
        return result

    async def reconcile(self, declaration: ApplicationDeclaration) -> ApplicationAndServicePrincipalId:
        """Run every step for one application; each step depends on the previous ones."""
        ids = await self._provisioner.find_or_create(declaration.name)
        application_id = ids.application_id
        service_principal_id = ids.service_principal_id

        await self._configurator.update_application_config(application_id, declaration)
        await self._configurator.set_logo(application_id, declaration.logo_url)
        await self._configurator.set_on_premises_publishing(application_id, declaration)

        await self._configurator.set_user_assignment_required(
            service_principal_id, declaration.app_role_assignment_required
        )
        await self._assignments.assign_default_role(service_principal_id, declaration.app_role_assignments)

        await self._tls_installer.install(application_id, declaration.tls)

        if declaration.is_saml:
            await self._signing_certificates.enable_saml(service_principal_id, declaration.name)

        await self._configurator.add_optional_claims(application_id, declaration)
        await self._resource_access.reconcile(application_id, declaration.graph_api_permissions)
        await self._client_secrets.ensure_client_secret(application_id, declaration.client_secret)

        if declaration.app_roles:
            await self._app_roles.apply(application_id, declaration.app_roles)
            await self._assignments.assign_app_roles(service_principal_id, declaration.app_roles)

        if declaration.is_saml:
            await self._configurator.add_saml_uris(application_id, declaration)

        return ids
