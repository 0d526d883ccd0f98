"""Tests for RotationPolicy value object."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from app_proxy_manager.domain.exceptions import InvalidRotationPolicyError
from app_proxy_manager.domain.value_objects import RotationPolicy


class TestRotationPolicy:
    """Tests for RotationPolicy value object."""

    def test_default_policy(self) -> None:
        """Default policy renews 10 days ahead and issues for a year."""
        policy = RotationPolicy()
        assert policy.min_remaining_days == 10
        assert policy.validity_days == 365

    def test_renewal_deadline(self) -> None:
        """Deadline is now plus the minimum remaining validity."""
        now = datetime(2026, 1, 1, tzinfo=UTC)
        assert RotationPolicy().renewal_deadline(now) == now + timedelta(days=10)

    def test_new_expiry(self) -> None:
        """New credentials expire after the validity period."""
        now = datetime(2026, 1, 1, tzinfo=UTC)
        assert RotationPolicy(min_remaining_days=5, validity_days=90).new_expiry(now) == now + timedelta(days=90)

    def test_window_must_be_positive(self) -> None:
        """Minimum remaining validity cannot be zero."""
        with pytest.raises(InvalidRotationPolicyError, match="Rotation policy must be"):
            RotationPolicy(min_remaining_days=0)

    def test_window_shorter_than_validity(self) -> None:
        """A credential must outlive its own renewal window."""
        with pytest.raises(ValueError, match="Rotation policy must be"):
            RotationPolicy(min_remaining_days=400, validity_days=365)
