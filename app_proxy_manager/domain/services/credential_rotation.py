"""Domain service deciding when credentials need a successor."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from ..entities import KeyCredential, PasswordCredential
from ..value_objects import RotationPolicy


class CredentialRotationAnalyzer:
    """Domain service comparing credential expiries with a rotation policy."""

    def __init__(self, policy: RotationPolicy) -> None:
        """Initialize analyzer with a rotation policy."""
        self._policy = policy

    @property
    def policy(self) -> RotationPolicy:
        """The policy this analyzer applies."""
        return self._policy

    def needs_new_signing_certificate(
        self,
        key_credentials: Iterable[KeyCredential],
        now: datetime | None = None,
    ) -> bool:
        """
        Check if a service principal needs a new signing certificate.

        True when there is no certificate at all, or when none of them is
        valid beyond the policy's minimum remaining validity.
        """
        deadline = self._policy.renewal_deadline(now or datetime.now(UTC))
        return not any(credential.is_valid_beyond(deadline) for credential in key_credentials)

    def needs_new_client_secret(
        self,
        password_credentials: Iterable[PasswordCredential],
        display_name: str,
        now: datetime | None = None,
    ) -> bool:
        """Check if no secret named ``display_name`` stays valid long enough."""
        deadline = self._policy.renewal_deadline(now or datetime.now(UTC))
        return not any(
            credential.display_name == display_name and credential.is_valid_beyond(deadline)
            for credential in password_credentials
        )
