"""Unit tests for domain entities.

Covers the derived state the rest of the system relies on:
- User lockout window and role claims
- RefreshToken activity and rotation markers
- EmailOtp and PasswordResetToken expiry boundaries
"""

from datetime import UTC, datetime, timedelta

import pytest
from uuid_extensions import uuid7

from marketplace_auth.domain.entities import EmailOtp, PasswordResetToken, RefreshToken
from marketplace_auth.domain.enums import OtpPurpose, UserRole
from tests.utils.doubles import make_user

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


def _refresh_token(**overrides) -> RefreshToken:
    values = {
        "id": uuid7(),
        "user_id": uuid7(),
        "token_hash": "a" * 64,
        "created_at": NOW,
        "expires_at": NOW + timedelta(days=7),
    }
    values.update(overrides)
    return RefreshToken(**values)


@pytest.mark.unit
class TestUser:
    def test_not_locked_without_lockout_end(self):
        assert make_user().is_locked(NOW) is False

    def test_locked_while_window_runs(self):
        user = make_user(lockout_end=NOW + timedelta(minutes=1))
        assert user.is_locked(NOW) is True

    def test_unlocked_once_window_has_passed(self):
        user = make_user(lockout_end=NOW - timedelta(seconds=1))
        assert user.is_locked(NOW) is False

    def test_unlocked_exactly_at_lockout_end(self):
        user = make_user(lockout_end=NOW)
        assert user.is_locked(NOW) is False

    def test_roles_contains_role_value(self):
        assert make_user(role=UserRole.VENDOR).roles == ["vendor"]

    def test_full_name_joins_present_parts(self):
        user = make_user()
        user.first_name = "Ada"
        assert user.full_name == "Ada"
        user.last_name = "Lovelace"
        assert user.full_name == "Ada Lovelace"


@pytest.mark.unit
class TestRefreshToken:
    def test_fresh_token_is_active(self):
        assert _refresh_token().is_active(NOW) is True

    def test_expired_token_is_inactive(self):
        token = _refresh_token(expires_at=NOW)
        assert token.is_expired(NOW) is True
        assert token.is_active(NOW) is False

    def test_revoked_token_is_inactive(self):
        token = _refresh_token(revoked_at=NOW)
        assert token.is_revoked is True
        assert token.is_active(NOW) is False

    def test_was_rotated_requires_revocation_and_successor(self):
        assert _refresh_token(replaced_by_token_id=uuid7()).was_rotated is False
        assert _refresh_token(revoked_at=NOW).was_rotated is False
        assert _refresh_token(revoked_at=NOW, replaced_by_token_id=uuid7()).was_rotated is True


@pytest.mark.unit
class TestEmailOtp:
    def _otp(self, expires_at: datetime) -> EmailOtp:
        return EmailOtp(
            id=uuid7(),
            email="buyer@example.com",
            purpose=OtpPurpose.EMAIL_VERIFICATION,
            code="123456",
            created_at=NOW - timedelta(minutes=10),
            expires_at=expires_at,
        )

    def test_still_valid_at_expiry_instant(self):
        assert self._otp(NOW).is_expired(NOW) is False

    def test_expired_after_expiry_instant(self):
        assert self._otp(NOW - timedelta(microseconds=1)).is_expired(NOW) is True


@pytest.mark.unit
class TestPasswordResetToken:
    def _token(self, **overrides) -> PasswordResetToken:
        values = {
            "id": uuid7(),
            "user_id": uuid7(),
            "token_hash": "b" * 64,
            "created_at": NOW,
            "expires_at": NOW + timedelta(hours=1),
        }
        values.update(overrides)
        return PasswordResetToken(**values)

    def test_unused_unexpired_token_is_valid(self):
        assert self._token().is_valid(NOW) is True

    def test_used_token_is_invalid(self):
        token = self._token(used_at=NOW)
        assert token.is_used is True
        assert token.is_valid(NOW) is False

    def test_expired_token_is_invalid(self):
        assert self._token(expires_at=NOW).is_valid(NOW) is False
