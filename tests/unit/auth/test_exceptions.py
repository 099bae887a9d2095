"""Tests for credential resolution exceptions."""

import pytest

from hyperclient_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from hyperclient_core.errors import ConfigError


class TestCredentialError:
    """Test CredentialError base exception."""

    def test_is_config_error(self):
        """Credential failures surface as configuration errors."""
        with pytest.raises(ConfigError):
            raise CredentialError("Test error")

    def test_exception_message(self):
        """Test that exception message is preserved."""
        try:
            raise CredentialError("Custom error message")
        except CredentialError as e:
            assert str(e) == "Custom error message"


class TestCredentialNotFoundError:
    """Test CredentialNotFoundError exception."""

    def test_is_credential_error(self):
        with pytest.raises(CredentialError):
            raise CredentialNotFoundError("Test error")

    def test_env_var_name_attribute(self):
        error = CredentialNotFoundError("Test error", env_var_name="MY_API_KEY")

        assert error.env_var_name == "MY_API_KEY"
        assert error.key == "MY_API_KEY"

    def test_env_var_name_optional(self):
        assert CredentialNotFoundError("Test error").env_var_name is None


class TestCredentialFileError:
    """Test CredentialFileError exception."""

    def test_is_credential_error(self):
        with pytest.raises(CredentialError):
            raise CredentialFileError("Test error")

    def test_exception_message(self):
        try:
            raise CredentialFileError("File not found: /path/to/file")
        except CredentialFileError as e:
            assert str(e) == "File not found: /path/to/file"
