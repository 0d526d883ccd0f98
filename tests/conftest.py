"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import NoEncryption, pkcs12
from cryptography.x509.oid import NameOID
from directory_mock import InMemoryDirectory, InMemorySecretStore

from app_proxy_manager.application.use_cases import EventualConsistencyWaiter
from app_proxy_manager.domain.entities import ApplicationDeclaration, OnPremisesPublishing
from app_proxy_manager.domain.value_objects import MICROSOFT_GRAPH_APP_ID, PermissionCatalog


@pytest.fixture
def now() -> datetime:
    """A fixed reference instant."""
    return datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def directory() -> InMemoryDirectory:
    """An empty in-memory directory."""
    return InMemoryDirectory()


@pytest.fixture
def secret_store() -> InMemorySecretStore:
    """An empty in-memory Key Vault."""
    return InMemorySecretStore()


@pytest.fixture
def sleeps() -> list[float]:
    """Delays requested by the waiter under test."""
    return []


@pytest.fixture
def waiter(directory: InMemoryDirectory, sleeps: list[float]) -> EventualConsistencyWaiter:
    """A waiter that records its pauses instead of sleeping."""

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return EventualConsistencyWaiter(directory, max_attempts=5, interval_seconds=2.0, sleep=fake_sleep)


@pytest.fixture
def graph_catalog() -> PermissionCatalog:
    """A slice of the Microsoft Graph permission catalog."""
    return PermissionCatalog(
        resource_app_id=MICROSOFT_GRAPH_APP_ID,
        app_roles={
            "Group.Create": "bf7b1a76-6e77-406b-b258-bf5c7720e98f",
            "User.Read.All": "df021288-bdef-4463-88db-98f22de89214",
        },
        scopes={
            "offline_access": "7427e0e9-2fba-42fe-b0c0-848c9e6a8182",
            "User.Read": "e1fe6dd8-ba31-4d61-89e7-88639da4683d",
            "User.Read.All": "a154be20-db9c-4678-8ab7-66f6cc099a59",
        },
    )


@pytest.fixture
def declaration() -> ApplicationDeclaration:
    """A minimal App Proxy application."""
    return ApplicationDeclaration(
        name="contoso-app",
        on_premises_publishing=OnPremisesPublishing(
            external_url="https://contoso-app.msappproxy.net/",
            internal_url="http://contoso-app.internal/",
        ),
        redirect_urls=("https://contoso-app.msappproxy.net/",),
        identifier_urls=("https://contoso-app.msappproxy.net/",),
    )


def _self_signed(common_name: str) -> tuple[rsa.RSAPrivateKey, x509.Certificate]:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    issued = datetime.now(UTC)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(issued)
        .not_valid_after(issued + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    return key, certificate


@pytest.fixture(scope="session")
def tls_key_and_certificate() -> tuple[rsa.RSAPrivateKey, x509.Certificate]:
    """Key pair and certificate of the custom domain."""
    return _self_signed("contoso-app.example.com")


@pytest.fixture(scope="session")
def ca_certificate() -> x509.Certificate:
    """A chain certificate bundled next to the leaf."""
    return _self_signed("Contoso Issuing CA")[1]


@pytest.fixture(scope="session")
def passwordless_pfx(
    tls_key_and_certificate: tuple[rsa.RSAPrivateKey, x509.Certificate],
    ca_certificate: x509.Certificate,
) -> str:
    """Base64 PFX without a password, the way Key Vault exports certificates."""
    key, certificate = tls_key_and_certificate
    der = pkcs12.serialize_key_and_certificates(b"tls", key, certificate, [ca_certificate], NoEncryption())
    return base64.b64encode(der).decode("ascii")
