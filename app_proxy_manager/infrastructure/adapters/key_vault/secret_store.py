"""Azure Key Vault secrets via the Key Vault SDK."""

from __future__ import annotations

import logging
from collections.abc import Callable

from azure.core.credentials_async import AsyncTokenCredential
from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError
from azure.keyvault.secrets.aio import SecretClient

from ....application.exceptions import SecretNotFoundError, SecretStoreError

logger = logging.getLogger(__name__)


def vault_url(vault_name: str) -> str:
    return f"https://{vault_name}.vault.azure.net"


class KeyVaultSecretStore:
    """
    SecretStore implementation using the Key Vault data plane.

    One SecretClient is opened per vault and kept for the run. The credential
    is shared by every client and closed together with them.
    """

    def __init__(
        self,
        credential: AsyncTokenCredential,
        *,
        client_factory: Callable[[str], SecretClient] | None = None,
    ) -> None:
        """
        Initialize the secret store.

        Args:
            credential: Async Azure credential for the vault scope.
            client_factory: Builds the client for a vault name; defaults to SecretClient.
        """
        self._credential = credential
        self._client_factory = client_factory or self._create_client
        self._clients: dict[str, SecretClient] = {}

    def _create_client(self, vault_name: str) -> SecretClient:
        return SecretClient(vault_url=vault_url(vault_name), credential=self._credential)

    def _get_client(self, vault_name: str) -> SecretClient:
        if vault_name not in self._clients:
            self._clients[vault_name] = self._client_factory(vault_name)
        return self._clients[vault_name]

    async def aclose(self) -> None:
        """Close every vault client and the credential."""
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
        await self._credential.close()

    async def get_secret(self, vault_name: str, secret_name: str) -> str:
        try:
            secret = await self._get_client(vault_name).get_secret(secret_name)
        except ResourceNotFoundError as e:
            msg = f"Secret {vault_name}/{secret_name} not found"
            raise SecretNotFoundError(msg) from e
        except HttpResponseError as e:
            msg = f"Error reading secret {vault_name}/{secret_name}: status {e.status_code}, {e.message}"
            raise SecretStoreError(msg) from e
        except AzureError as e:
            msg = f"Error reading secret {vault_name}/{secret_name}: {e}"
            raise SecretStoreError(msg) from e

        if not secret.value:
            msg = f"Secret {vault_name}/{secret_name} has no value"
            raise SecretNotFoundError(msg)

        logger.info("Read secret %s from %s", secret_name, vault_name)
        return secret.value

    async def set_secret(self, vault_name: str, secret_name: str, value: str) -> None:
        try:
            await self._get_client(vault_name).set_secret(secret_name, value)
        except HttpResponseError as e:
            msg = f"Error storing secret {vault_name}/{secret_name}: status {e.status_code}, {e.message}"
            raise SecretStoreError(msg) from e
        except AzureError as e:
            msg = f"Error storing secret {vault_name}/{secret_name}: {e}"
            raise SecretStoreError(msg) from e

        logger.info("Stored secret %s in %s", secret_name, vault_name)
