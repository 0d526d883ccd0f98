"""Expiring credentials attached to applications and service principals."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Self

logger = logging.getLogger(__name__)


def parse_graph_datetime(value: str | None) -> datetime | None:
    """Parse an ISO datetime string from the Graph API into an aware datetime."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Failed to parse datetime: %s", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class KeyCredential:
    """A certificate credential, such as a SAML token signing certificate."""

    key_id: str
    display_name: str | None
    end_date_time: datetime | None
    usage: str | None = None
    thumbprint: str | None = None

    def is_valid_beyond(self, deadline: datetime) -> bool:
        """Check if the credential stays valid past the given instant."""
        return self.end_date_time is not None and self.end_date_time > deadline

    @classmethod
    def from_graph(cls, raw: dict[str, Any]) -> Self:
        """Build from a Graph API `keyCredential` item."""
        return cls(
            key_id=raw.get("keyId", ""),
            display_name=raw.get("displayName"),
            end_date_time=parse_graph_datetime(raw.get("endDateTime")),
            usage=raw.get("usage"),
            thumbprint=raw.get("customKeyIdentifier"),
        )


@dataclass(frozen=True, slots=True)
class PasswordCredential:
    """A client secret registered on an application."""

    key_id: str
    display_name: str | None
    end_date_time: datetime | None

    def is_valid_beyond(self, deadline: datetime) -> bool:
        """Check if the secret stays valid past the given instant."""
        return self.end_date_time is not None and self.end_date_time > deadline

    @classmethod
    def from_graph(cls, raw: dict[str, Any]) -> Self:
        """Build from a Graph API `passwordCredential` item."""
        return cls(
            key_id=raw.get("keyId", ""),
            display_name=raw.get("displayName"),
            end_date_time=parse_graph_datetime(raw.get("endDateTime")),
        )
