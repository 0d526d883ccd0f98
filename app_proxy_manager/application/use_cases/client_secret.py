"""Client secret rotation into Key Vault."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ...domain.entities import KeyVaultSecretReference, PasswordCredential
from ...domain.services import CredentialRotationAnalyzer
from ..ports import DirectoryGateway, SecretStore

logger = logging.getLogger(__name__)


class ClientSecretRotator:
    """Adds a client secret when the current one is about to expire and stores it in Key Vault."""

    def __init__(
        self,
        gateway: DirectoryGateway,
        secret_store: SecretStore,
        analyzer: CredentialRotationAnalyzer,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize the rotator."""
        self._gateway = gateway
        self._secret_store = secret_store
        self._analyzer = analyzer
        self._clock = clock

    async def ensure_client_secret(
        self,
        application_id: str,
        reference: KeyVaultSecretReference | None,
    ) -> bool:
        """
        Make sure the application has a client secret named after the Key Vault secret.

        Returns:
            True if a new secret was generated and stored.
        """
        if reference is None:
            return False

        application = await self._gateway.read_application(application_id)
        credentials = [PasswordCredential.from_graph(raw) for raw in application.get("passwordCredentials") or []]

        if not self._analyzer.needs_new_client_secret(credentials, reference.name, self._clock()):
            logger.info("Client secret %s of %s is still valid, skipping", reference.name, application_id)
            return False

        logger.info("Adding client secret %s to application %s", reference.name, application_id)
        result = await self._gateway.add_password(application_id, reference.name)
        await self._secret_store.set_secret(reference.key_vault_name, reference.name, result["secretText"])
        logger.info("Stored client secret %s in key vault %s", reference.name, reference.key_vault_name)
        return True
