"""Tests for TlsCertificateInstaller."""

from __future__ import annotations

import pytest
from directory_mock import InMemoryDirectory, InMemorySecretStore

from app_proxy_manager.application.exceptions import SecretNotFoundError
from app_proxy_manager.application.use_cases import PLACEHOLDER_PFX_PASSWORD, TlsCertificateInstaller
from app_proxy_manager.domain.entities import KeyVaultSecretReference

REFERENCE = KeyVaultSecretReference(key_vault_name="kv-certs", name="contoso-tls")


class RecordingRepackager:
    """Repackager returning a marker instead of a real container."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def repackage(self, pfx_base64: str, new_password: str) -> str:
        self.calls.append((pfx_base64, new_password))
        return f"repacked({pfx_base64})"


@pytest.fixture
def repackager() -> RecordingRepackager:
    """A recording repackager."""
    return RecordingRepackager()


@pytest.fixture
def installer(
    directory: InMemoryDirectory, secret_store: InMemorySecretStore, repackager: RecordingRepackager
) -> TlsCertificateInstaller:
    """Installer backed by in-memory stores."""
    return TlsCertificateInstaller(directory, secret_store, repackager)


class TestTlsCertificateInstaller:
    """Tests for TlsCertificateInstaller."""

    @pytest.mark.asyncio
    async def test_not_declared(self, directory: InMemoryDirectory, installer: TlsCertificateInstaller) -> None:
        """Nothing happens without a declared certificate."""
        assert await installer.install("app", None) is False
        assert directory.calls == []

    @pytest.mark.asyncio
    async def test_uploads_repackaged_certificate(
        self,
        directory: InMemoryDirectory,
        secret_store: InMemorySecretStore,
        repackager: RecordingRepackager,
        installer: TlsCertificateInstaller,
    ) -> None:
        """The Key Vault PFX is repackaged and sent through the beta endpoint."""
        ids = directory.add_application("app")
        secret_store.put("kv-certs", "contoso-tls", "UEZY")

        assert await installer.install(ids.application_id, REFERENCE) is True

        assert repackager.calls == [("UEZY", PLACEHOLDER_PFX_PASSWORD)]
        call = directory.calls_to("update_application")[0]
        assert call.beta is True
        publishing = call.body["onPremisesPublishing"]
        assert publishing["verifiedCustomDomainKeyCredential"] == {"type": "X509CertAndPassword", "value": "repacked(UEZY)"}
        assert publishing["verifiedCustomDomainPasswordCredential"] == {"value": "password"}

    @pytest.mark.asyncio
    async def test_missing_secret(self, directory: InMemoryDirectory, installer: TlsCertificateInstaller) -> None:
        """A missing Key Vault secret fails the step before any write."""
        ids = directory.add_application("app")
        with pytest.raises(SecretNotFoundError):
            await installer.install(ids.application_id, REFERENCE)
        assert directory.calls_to("update_application") == []
