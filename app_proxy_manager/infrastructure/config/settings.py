"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...domain.value_objects import RotationPolicy
from ..adapters.entra_id.token_provider import EntraIdCredentials


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.environ.get(key, str(default)))


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class Settings:
    """Application settings container."""

    # Azure/Entra ID
    azure_tenant_id: str = field(default_factory=lambda: _env_str("AZURE_TENANT_ID"))
    azure_client_id: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_ID"))
    azure_client_secret: str = field(default_factory=lambda: _env_str("AZURE_CLIENT_SECRET"))

    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))
    graph_timeout_seconds: float = field(default_factory=lambda: _env_float("GRAPH_TIMEOUT_SECONDS", 30.0))

    # Waiting for new applications to become visible
    wait_max_attempts: int = field(default_factory=lambda: _env_int("WAIT_MAX_ATTEMPTS", 30))
    wait_interval_seconds: float = field(default_factory=lambda: _env_float("WAIT_INTERVAL_SECONDS", 2.0))

    # Credential rotation
    signing_cert_min_validity_days: int = field(
        default_factory=lambda: _env_int("SIGNING_CERT_MIN_VALIDITY_DAYS", 10)
    )
    signing_cert_validity_days: int = field(default_factory=lambda: _env_int("SIGNING_CERT_VALIDITY_DAYS", 365))
    client_secret_min_validity_days: int = field(
        default_factory=lambda: _env_int("CLIENT_SECRET_MIN_VALIDITY_DAYS", 10)
    )

    def validate(self) -> None:
        """Validate required settings."""
        missing: list[str] = []

        if not self.azure_tenant_id:
            missing.append("AZURE_TENANT_ID")
        if not self.azure_client_id:
            missing.append("AZURE_CLIENT_ID")
        if not self.azure_client_secret:
            missing.append("AZURE_CLIENT_SECRET")

        if missing:
            msg = f"Missing required environment variables: {', '.join(missing)}"
            raise ValueError(msg)

        if self.wait_max_attempts < 1:
            msg = "WAIT_MAX_ATTEMPTS must be at least 1"
            raise ValueError(msg)

        # Building the policies validates their bounds
        _ = self.signing_certificate_policy
        _ = self.client_secret_policy

    @cached_property
    def credentials(self) -> EntraIdCredentials:
        """Get the client credentials used for Graph and Key Vault."""
        return EntraIdCredentials(
            tenant_id=self.azure_tenant_id,
            client_id=self.azure_client_id,
            client_secret=self.azure_client_secret,
        )

    @cached_property
    def signing_certificate_policy(self) -> RotationPolicy:
        """Get the SAML signing certificate rotation policy."""
        return RotationPolicy(
            min_remaining_days=self.signing_cert_min_validity_days,
            validity_days=self.signing_cert_validity_days,
        )

    @cached_property
    def client_secret_policy(self) -> RotationPolicy:
        """Get the client secret rotation policy."""
        # Secret lifetime is chosen by the directory, only the renewal window applies
        return RotationPolicy(min_remaining_days=self.client_secret_min_validity_days)


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
