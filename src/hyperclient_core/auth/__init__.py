"""Authentication components.

This package provides:
- Auth strategies (none, basic, digest, token) built from config mappings
- A digest challenge/response flow for httpx
- Credential resolution from config values, environment, .env files or files

Example:
    ```python
    from hyperclient_core.auth import auth_from_config

    strategy = auth_from_config({"type": "token", "token_env": "API_TOKEN"})
    ```
"""

from hyperclient_core.auth.credentials import CredentialResolver
from hyperclient_core.auth.digest import DigestChallenge, DigestChallengeAuth, DigestState
from hyperclient_core.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)
from hyperclient_core.auth.strategies import (
    AuthStrategy,
    BasicAuth,
    DigestAuth,
    NoAuth,
    TokenAuth,
    auth_from_config,
)

__all__ = [
    "AuthStrategy",
    "BasicAuth",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "DigestAuth",
    "DigestChallenge",
    "DigestChallengeAuth",
    "DigestState",
    "NoAuth",
    "TokenAuth",
    "auth_from_config",
]
