"""In-memory Key Vault."""

from __future__ import annotations

from app_proxy_manager.application.exceptions import SecretNotFoundError


class InMemorySecretStore:
    """SecretStore keeping every version of each secret."""

    def __init__(self) -> None:
        self.versions: dict[tuple[str, str], list[str]] = {}

    def put(self, vault_name: str, secret_name: str, value: str) -> None:
        """Seed a secret value."""
        self.versions.setdefault((vault_name, secret_name), []).append(value)

    async def get_secret(self, vault_name: str, secret_name: str) -> str:
        values = self.versions.get((vault_name, secret_name))
        if not values or not values[-1]:
            msg = f"Secret {vault_name}/{secret_name} has no value"
            raise SecretNotFoundError(msg)
        return values[-1]

    async def set_secret(self, vault_name: str, secret_name: str, value: str) -> None:
        self.put(vault_name, secret_name, value)
