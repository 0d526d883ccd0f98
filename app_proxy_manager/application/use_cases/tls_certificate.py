"""Custom domain TLS certificate upload for App Proxy."""

from __future__ import annotations

import logging

from ...domain.entities import KeyVaultSecretReference
from ..ports import CertificateRepackager, DirectoryGateway, SecretStore

logger = logging.getLogger(__name__)

# App Proxy only accepts a PFX with a password; any value will do.
PLACEHOLDER_PFX_PASSWORD = "password"


class TlsCertificateInstaller:
    """Uploads the custom domain certificate of an App Proxy application."""

    def __init__(
        self,
        gateway: DirectoryGateway,
        secret_store: SecretStore,
        repackager: CertificateRepackager,
    ) -> None:
        """Initialize the installer."""
        self._gateway = gateway
        self._secret_store = secret_store
        self._repackager = repackager

    async def install(self, application_id: str, reference: KeyVaultSecretReference | None) -> bool:
        """
        Upload the certificate referenced in Key Vault, if any.

        Key Vault strips the password on import, so the PFX is re-packaged
        under a placeholder password before upload.

        Returns:
            True if a certificate was uploaded.
        """
        if reference is None:
            return False

        logger.info("Setting TLS certificate %s/%s", reference.key_vault_name, reference.name)
        pfx = await self._secret_store.get_secret(reference.key_vault_name, reference.name)
        pfx_base64 = self._repackager.repackage(pfx, PLACEHOLDER_PFX_PASSWORD)

        body = {
            "onPremisesPublishing": {
                "verifiedCustomDomainKeyCredential": {
                    "type": "X509CertAndPassword",
                    "value": pfx_base64,
                },
                "verifiedCustomDomainPasswordCredential": {
                    "value": PLACEHOLDER_PFX_PASSWORD,
                },
            },
        }
        await self._gateway.update_application(
            application_id,
            body,
            description="setting tls certificate",
            beta=True,
        )
        return True
