"""Exceptions for credential resolution.

Credential errors are configuration errors: they surface while a client is
being constructed or while an auth strategy is being built from a config
mapping.

Example:
    ```python
    from hyperclient_core.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("API token not found", env_var_name="API_TOKEN")
    ```
"""

from hyperclient_core.errors.exceptions import ConfigError


class CredentialError(ConfigError):
    """Base exception for credential-related errors.

    All credential-specific exceptions inherit from this class, and it is a
    ConfigError so callers catching construction failures see them too.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).

    Example:
        ```python
        try:
            token = resolver.resolve(env_var_name="API_TOKEN", required=True)
        except CredentialNotFoundError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        """Initialize CredentialNotFoundError.

        Args:
            message: Error message describing what credential is missing.
            env_var_name: Optional environment variable name for reference.
        """
        super().__init__(message, key=env_var_name)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""

    pass
