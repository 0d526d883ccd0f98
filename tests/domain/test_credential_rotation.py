"""Tests for CredentialRotationAnalyzer domain service."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from app_proxy_manager.domain.entities import KeyCredential, PasswordCredential, parse_graph_datetime
from app_proxy_manager.domain.services import CredentialRotationAnalyzer
from app_proxy_manager.domain.value_objects import RotationPolicy


@pytest.fixture
def analyzer() -> CredentialRotationAnalyzer:
    """Analyzer with the default 10-day window."""
    return CredentialRotationAnalyzer(RotationPolicy())


def _certificate(now: datetime, days: int) -> KeyCredential:
    return KeyCredential(key_id="k", display_name="CN=app", end_date_time=now + timedelta(days=days))


def _secret(now: datetime, name: str, days: int) -> PasswordCredential:
    return PasswordCredential(key_id="p", display_name=name, end_date_time=now + timedelta(days=days))


class TestSigningCertificateRotation:
    """Tests for needs_new_signing_certificate."""

    def test_no_certificate(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A service principal without certificates needs one."""
        assert analyzer.needs_new_signing_certificate([], now) is True

    def test_expiring_certificate(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A certificate expiring in 3 days is renewed."""
        assert analyzer.needs_new_signing_certificate([_certificate(now, 3)], now) is True

    def test_valid_certificate(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A certificate valid for 30 more days is kept."""
        assert analyzer.needs_new_signing_certificate([_certificate(now, 30)], now) is False

    def test_any_valid_certificate_suffices(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """One long-lived certificate among expiring ones is enough."""
        credentials = [_certificate(now, -5), _certificate(now, 2), _certificate(now, 200)]
        assert analyzer.needs_new_signing_certificate(credentials, now) is False

    def test_boundary_is_exclusive(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """Expiring exactly at the deadline counts as expiring."""
        assert analyzer.needs_new_signing_certificate([_certificate(now, 10)], now) is True

    def test_unknown_expiry_counts_as_expiring(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A credential without an end date never satisfies the policy."""
        credential = KeyCredential(key_id="k", display_name=None, end_date_time=None)
        assert analyzer.needs_new_signing_certificate([credential], now) is True


class TestClientSecretRotation:
    """Tests for needs_new_client_secret."""

    def test_no_secret(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """An application without secrets needs one."""
        assert analyzer.needs_new_client_secret([], "app-secret", now) is True

    def test_matching_valid_secret(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A valid secret with the same name is kept."""
        assert analyzer.needs_new_client_secret([_secret(now, "app-secret", 100)], "app-secret", now) is False

    def test_other_names_ignored(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """Secrets with a different display name do not count."""
        assert analyzer.needs_new_client_secret([_secret(now, "other", 100)], "app-secret", now) is True

    def test_expiring_secret(self, analyzer: CredentialRotationAnalyzer, now: datetime) -> None:
        """A secret expiring within the window is renewed."""
        assert analyzer.needs_new_client_secret([_secret(now, "app-secret", 4)], "app-secret", now) is True


class TestParseGraphDatetime:
    """Tests for parse_graph_datetime."""

    def test_zulu_suffix(self) -> None:
        """Graph timestamps end in Z."""
        assert parse_graph_datetime("2026-03-01T10:00:00Z") == datetime(2026, 3, 1, 10, tzinfo=UTC)

    def test_fractional_seconds(self) -> None:
        """Fractional seconds are accepted."""
        parsed = parse_graph_datetime("2026-03-01T10:00:00.1234567Z")
        assert parsed is not None
        assert parsed.tzinfo is not None

    def test_invalid_value(self) -> None:
        """Garbage yields None."""
        assert parse_graph_datetime("not-a-date") is None
        assert parse_graph_datetime(None) is None
