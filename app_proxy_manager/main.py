#!/usr/bin/env python3
"""
Azure App Proxy Manager

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import click
import httpx
from azure.identity.aio import ClientSecretCredential

from . import __version__
from .application.exceptions import ConfigurationError
from .application.use_cases import (
    AppRoleLifecycleManager,
    ApplicationConfigurator,
    ApplicationProvisioner,
    ClientSecretRotator,
    EventualConsistencyWaiter,
    GroupAssignmentReconciler,
    ReconcileApplications,
    ResourceAccessReconciler,
    RunResult,
    SigningCertificateRotator,
    TlsCertificateInstaller,
)
from .domain.entities import ApplicationDeclaration
from .domain.services import CredentialRotationAnalyzer
from .infrastructure.adapters import (
    GraphClient,
    GraphDirectoryGateway,
    KeyVaultSecretStore,
    MsalTokenProvider,
    PfxRepackager,
)
from .infrastructure.config import Settings, load_declarations, load_settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components. Graph
    adapters share one HTTP client and one token provider for the run, the
    secret store owns its Key Vault clients until `aclose`.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        """Initialize container with settings and the shared HTTP client."""
        self._settings = settings
        self._http_client = http_client
        self._token_provider = MsalTokenProvider(settings.credentials)
        self._secret_store: KeyVaultSecretStore | None = None

    def create_gateway(self) -> GraphDirectoryGateway:
        """Create the directory gateway adapter."""
        client = GraphClient(self._token_provider, http_client=self._http_client)
        return GraphDirectoryGateway(client)

    def create_secret_store(self) -> KeyVaultSecretStore:
        """Create the Key Vault secret store adapter."""
        if self._secret_store is None:
            credentials = self._settings.credentials
            credential = ClientSecretCredential(
                credentials.tenant_id, credentials.client_id, credentials.client_secret
            )
            self._secret_store = KeyVaultSecretStore(credential)
        return self._secret_store

    async def aclose(self) -> None:
        """Release the resources created by the container."""
        if self._secret_store is not None:
            await self._secret_store.aclose()
            self._secret_store = None

    def create_reconcile_use_case(self) -> ReconcileApplications:
        """Create the main use case with all dependencies."""
        gateway = self.create_gateway()
        secret_store = self.create_secret_store()
        waiter = EventualConsistencyWaiter(
            gateway,
            max_attempts=self._settings.wait_max_attempts,
            interval_seconds=self._settings.wait_interval_seconds,
        )

        return ReconcileApplications(
            provisioner=ApplicationProvisioner(gateway, waiter),
            configurator=ApplicationConfigurator(gateway),
            assignments=GroupAssignmentReconciler(gateway),
            tls_installer=TlsCertificateInstaller(gateway, secret_store, PfxRepackager()),
            signing_certificates=SigningCertificateRotator(
                gateway, CredentialRotationAnalyzer(self._settings.signing_certificate_policy)
            ),
            resource_access=ResourceAccessReconciler(gateway),
            client_secrets=ClientSecretRotator(
                gateway, secret_store, CredentialRotationAnalyzer(self._settings.client_secret_policy)
            ),
            app_roles=AppRoleLifecycleManager(gateway),
        )


async def run(settings: Settings, declarations: list[ApplicationDeclaration]) -> RunResult:
    """Reconcile the declared applications against the directory."""
    async with httpx.AsyncClient(timeout=settings.graph_timeout_seconds) as http_client:
        container = ApplicationContainer(settings, http_client)
        try:
            use_case = container.create_reconcile_use_case()
            return await use_case.execute(declarations)
        finally:
            await container.aclose()


async def async_main(config_path: Path, log_level: str | None = None) -> int:
    """
    Async entry point.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    try:
        logger.info("Azure App Proxy Manager %s starting...", __version__)

        settings = load_settings()
        logging.getLogger().setLevel((log_level or settings.log_level).upper())

        declarations = load_declarations(config_path)
        logger.info("Processing %s", [declaration.name for declaration in declarations])

        result = await run(settings, declarations)
        return 0 if result.success else 1

    except (ValueError, ConfigurationError) as e:
        logger.error("Configuration error: %s", e)
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1


@click.command()
@click.version_option(version=__version__, prog_name="azure-app-proxy-manager")
@click.option(
    "--config",
    "-c",
    "config_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL",
)
def main(config_path: Path, log_level: str | None) -> None:
    """Create and update App Proxy applications from a declaration file."""
    try:
        exit_code = asyncio.run(async_main(config_path, log_level))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
