"""Credential resolution for auth configuration.

Auth config mappings may carry credentials inline or point at where they
live. For any credential field ``name`` the resolver looks at, in order:

1. ``name``: the value itself
2. ``name_env``: an environment variable (``.env`` files are loaded first)
3. ``name_file``: a file whose stripped content is the value

Example:
    ```python
    from hyperclient_core.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve_field({"token_env": "API_TOKEN"}, "token")
    ```

Credentials are never logged; only their source is.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from threading import Lock
from typing import Any

from dotenv import load_dotenv

from hyperclient_core.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve credentials from config values, the environment or files.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load a .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            # override=False: real environment variables win over .env entries
            load_dotenv(dotenv_path=self._dotenv_path, override=False)
            self._dotenv_loaded = True
            logger.debug("Loaded .env file for credential resolution")

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a credential from an explicit value, the environment or a default.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable name to check.
            default: Value used when nothing else is found.
            required: Raise CredentialNotFoundError instead of returning None.

        Returns:
            The resolved credential, or None if not found and not required.

        Raises:
            CredentialNotFoundError: If required and no source has a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit value"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            logger.debug(f"Resolved credential from {source}: ***")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(self, file_path: str | Path, *, required: bool = False) -> str | None:
        """Read a credential from a file, expanding ``~`` and ``$VAR``.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        expanded_path = os.path.expanduser(os.path.expandvars(str(file_path)))
        path_obj = Path(expanded_path)

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_field(
        self,
        config: Mapping[str, Any],
        name: str,
        *,
        default: str | None = None,
        required: bool = True,
    ) -> str | None:
        """Resolve credential field ``name`` from an auth config mapping.

        Looks at ``name``, then ``name_env``, then ``name_file``.
        """
        value = config.get(name)
        if value is not None:
            return str(value)

        env_var_name = config.get(f"{name}_env")
        if env_var_name:
            result = self.resolve(env_var_name=env_var_name, required=False)
            if result is not None:
                return result

        file_path = config.get(f"{name}_file")
        if file_path:
            content = self.resolve_from_file(file_path, required=required and default is None)
            if content is not None:
                return content

        if required and default is None:
            error_msg = f"Required credential '{name}' not found in auth config"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)
        return default
