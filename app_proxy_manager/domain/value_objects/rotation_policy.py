"""Credential rotation policy value object."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..exceptions import InvalidRotationPolicyError


@dataclass(frozen=True, slots=True)
class RotationPolicy:
    """When a credential must be replaced and how long its successor lives (in days)."""

    min_remaining_days: int = 10
    validity_days: int = 365

    def __post_init__(self) -> None:
        """Validate the policy windows."""
        if not (0 < self.min_remaining_days < self.validity_days):
            msg = (
                f"Rotation policy must be: 0 < min_remaining_days({self.min_remaining_days}) "
                f"< validity_days({self.validity_days})"
            )
            raise InvalidRotationPolicyError(msg)

    def renewal_deadline(self, now: datetime) -> datetime:
        """Credentials expiring on or before this instant need a successor."""
        return now + timedelta(days=self.min_remaining_days)

    def new_expiry(self, now: datetime) -> datetime:
        """Expiry to request for a freshly created credential."""
        return now + timedelta(days=self.validity_days)
