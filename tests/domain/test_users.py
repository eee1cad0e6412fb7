"""Tests for user models and credential rules."""

from gavel.domain.users import User, normalize_username, validate_credentials


class TestUser:
    def test_public_view_hides_digest(self) -> None:
        user = User(id="65f1c0de0123456789abcdef", username="alice", password_digest="$2b$...")
        assert user.to_public() == {"id": "65f1c0de0123456789abcdef", "username": "alice"}


class TestValidateCredentials:
    def test_valid(self) -> None:
        assert validate_credentials("alice", "pw").valid

    def test_missing_both(self) -> None:
        vr = validate_credentials(None, None)
        assert vr.errors == ["username is required", "password is required"]

    def test_blank_username(self) -> None:
        assert not validate_credentials("   ", "pw").valid

    def test_empty_password(self) -> None:
        assert not validate_credentials("alice", "").valid

    def test_whitespace_password_is_a_password(self) -> None:
        assert validate_credentials("alice", " ").valid

    def test_normalize_strips(self) -> None:
        assert normalize_username("  alice ") == "alice"
