"""Tests for run options and credential validation."""

import pytest
from pydantic import ValidationError

from feedclean.config.schema import (
    DEFAULT_DELETE_AGE_DAYS,
    CleanOptions,
    build_credentials,
    build_options,
)
from feedclean.utils.errors import InvalidConfigError


class TestBuildCredentials:
    """Tests for build_credentials."""

    def test_strips_whitespace(self) -> None:
        """Surrounding whitespace is removed from every credential."""
        creds = build_credentials("  me@example.com ", "\tpw\n", " key ")

        assert creds.email == "me@example.com"
        assert creds.password.get_secret_value() == "pw"
        assert creds.client_key == "key"

    @pytest.mark.parametrize(
        ("email", "password", "client_key", "message"),
        [
            ("", "pw", "key", "Email argument is required"),
            ("   ", "pw", "key", "Email argument is required"),
            ("me@example.com", " ", "key", "Password argument is required"),
            ("me@example.com", "pw", "\t", "Client argument is required"),
        ],
    )
    def test_blank_values_rejected(self, email, password, client_key, message) -> None:
        """Empty-after-trim credentials raise InvalidConfigError."""
        with pytest.raises(InvalidConfigError, match=message):
            build_credentials(email, password, client_key)

    def test_password_not_in_repr(self) -> None:
        creds = build_credentials("me@example.com", "hunter2", "key")
        assert "hunter2" not in repr(creds)
        assert "hunter2" not in str(creds)

    def test_credentials_are_immutable(self) -> None:
        creds = build_credentials("me@example.com", "hunter2", "key")
        with pytest.raises(ValidationError):
            creds.email = "other@example.com"  # type: ignore[misc]


class TestBuildOptions:
    """Tests for build_options."""

    def test_defaults(self) -> None:
        """Look-back defaults to 300 days and runs are dry by default."""
        options = build_options("me@example.com", "pw", "key")

        assert isinstance(options, CleanOptions)
        assert options.delete_age_days == DEFAULT_DELETE_AGE_DAYS == 300
        assert options.commit is False

    def test_custom_values(self) -> None:
        options = build_options("me@example.com", "pw", "key", delete_age_days=30, commit=True)

        assert options.delete_age_days == 30
        assert options.commit is True

    def test_negative_age_rejected(self) -> None:
        with pytest.raises(InvalidConfigError):
            build_options("me@example.com", "pw", "key", delete_age_days=-1)

    def test_zero_age_allowed(self) -> None:
        assert build_options("me@example.com", "pw", "key", delete_age_days=0).delete_age_days == 0
