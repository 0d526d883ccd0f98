"""SAML token signing certificate rotation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime

from ...domain.entities import KeyCredential
from ...domain.entities.declaration import SAML_SSO_MODE
from ...domain.services import CredentialRotationAnalyzer
from ..ports import DirectoryGateway

logger = logging.getLogger(__name__)


class SigningCertificateRotator:
    """
    Keeps a SAML service principal supplied with a usable signing certificate.

    The directory has no single rotate-and-activate call: a certificate is
    created first and then made the preferred signing key by thumbprint.
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        analyzer: CredentialRotationAnalyzer,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        """Initialize the rotator."""
        self._gateway = gateway
        self._analyzer = analyzer
        self._clock = clock

    async def enable_saml(self, service_principal_id: str, subject_name: str) -> str | None:
        """Switch the service principal to SAML and make sure it can sign tokens."""
        await self._gateway.update_service_principal(
            service_principal_id,
            {"preferredSingleSignOnMode": SAML_SSO_MODE},
            description="enabling SAML single sign-on",
        )
        return await self.ensure_signing_certificate(service_principal_id, subject_name)

    async def ensure_signing_certificate(self, service_principal_id: str, subject_name: str) -> str | None:
        """
        Create and prefer a new signing certificate when none stays valid long enough.

        Args:
            service_principal_id: Object id of the service principal.
            subject_name: Common name of the certificate subject.

        Returns:
            Thumbprint of the new certificate, or None if no rotation was needed.
        """
        service_principal = await self._gateway.read_service_principal(service_principal_id)
        key_credentials = [KeyCredential.from_graph(raw) for raw in service_principal.get("keyCredentials") or []]

        now = self._clock()
        if not self._analyzer.needs_new_signing_certificate(key_credentials, now):
            logger.info("Signing certificate of %s is still valid, skipping", service_principal_id)
            return None

        logger.info("Creating new signing certificate for %s", service_principal_id)
        certificate = await self._gateway.add_token_signing_certificate(
            service_principal_id,
            f"CN={subject_name}",
            self._analyzer.policy.new_expiry(now),
        )
        thumbprint = certificate["thumbprint"]

        logger.info("Making new signing certificate %s active", thumbprint)
        await self._gateway.update_service_principal(
            service_principal_id,
            {"preferredTokenSigningKeyThumbprint": thumbprint},
            description="setting preferred signing certificate",
        )
        return thumbprint
