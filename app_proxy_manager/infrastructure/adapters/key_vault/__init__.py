"""Azure Key Vault adapters."""

from .secret_store import KeyVaultSecretStore

__all__ = ["KeyVaultSecretStore"]
