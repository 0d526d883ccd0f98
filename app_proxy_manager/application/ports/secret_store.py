"""Port for secret storage - driven/secondary port."""

from typing import Protocol


class SecretStore(Protocol):
    """
    Port for reading and writing secrets in a vault.

    Used for TLS certificates (PFX, base64) and generated client secrets.
    """

    async def get_secret(self, vault_name: str, secret_name: str) -> str:
        """
        Read the current value of a secret.

        Raises:
            SecretNotFoundError: If the secret has no value.
            SecretStoreError: If the vault request fails.
        """
        ...

    async def set_secret(self, vault_name: str, secret_name: str, value: str) -> None:
        """
        Store a new version of a secret.

        Raises:
            SecretStoreError: If the vault request fails.
        """
        ...
