"""Access tokens for Microsoft Entra ID protected APIs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import ClassVar, Protocol

import msal

logger = logging.getLogger(__name__)


class AccessTokenProvider(Protocol):
    """Anything able to hand out bearer tokens for a scope."""

    async def get_token(self, scope: str) -> str:
        """Return a valid access token for ``scope``."""
        ...


@dataclass(frozen=True, slots=True)
class EntraIdCredentials:
    """Client credentials of the app registration running the reconciliation."""

    tenant_id: str
    client_id: str
    client_secret: str


@dataclass(frozen=True, slots=True)
class _CachedToken:
    token: str
    expires_at: datetime


class MsalTokenProvider:
    """
    Acquires tokens with the client credentials flow.

    One token is cached per scope and refreshed shortly before it expires,
    so a run shares a single Graph token across every application.
    """

    AUTHORITY_BASE: ClassVar[str] = "https://login.microsoftonline.com"
    REFRESH_MARGIN: ClassVar[timedelta] = timedelta(minutes=5)

    def __init__(self, credentials: EntraIdCredentials) -> None:
        """Initialize the provider."""
        self._credentials = credentials
        self._msal_app: msal.ConfidentialClientApplication | None = None
        self._tokens: dict[str, _CachedToken] = {}

    def _get_msal_app(self) -> msal.ConfidentialClientApplication:
        """Get or create MSAL application instance."""
        if self._msal_app is None:
            authority = f"{self.AUTHORITY_BASE}/{self._credentials.tenant_id}"
            self._msal_app = msal.ConfidentialClientApplication(
                client_id=self._credentials.client_id,
                client_credential=self._credentials.client_secret,
                authority=authority,
            )
        return self._msal_app

    async def get_token(self, scope: str) -> str:
        """Acquire access token using client credentials flow."""
        cached = self._tokens.get(scope)
        if cached and datetime.now(UTC) < cached.expires_at:
            return cached.token

        app = self._get_msal_app()
        result = app.acquire_token_for_client(scopes=[scope])

        if "access_token" not in result:
            error = result.get("error_description", result.get("error", "Unknown error"))
            msg = f"Failed to acquire access token: {error}"
            raise RuntimeError(msg)

        expires_in = result.get("expires_in", 3600)
        self._tokens[scope] = _CachedToken(
            token=result["access_token"],
            expires_at=datetime.now(UTC) + timedelta(seconds=expires_in) - self.REFRESH_MARGIN,
        )
        logger.debug("Acquired access token for %s", scope)
        return result["access_token"]
