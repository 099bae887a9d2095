"""Authentication strategies.

A client holds exactly one strategy at a time. Each strategy contributes
either default connection headers (basic, token) or a per-request httpx auth
flow (digest), never both.

| Config `type` | Strategy     | Applied as                              |
|---------------|--------------|-----------------------------------------|
| (absent)      | `NoAuth`     | nothing                                 |
| `basic`       | `BasicAuth`  | `Authorization: Basic ...` header       |
| `digest`      | `DigestAuth` | challenge/response per request          |
| `token`       | `TokenAuth`  | `<header>: <scheme> <token>` header     |
"""

import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

from hyperclient_core.auth.credentials import CredentialResolver
from hyperclient_core.auth.digest import DigestChallengeAuth
from hyperclient_core.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoAuth:
    type: ClassVar[str] = "none"

    def default_headers(self) -> dict[str, str]:
        return {}

    def request_auth(self) -> httpx.Auth | None:
        return None


@dataclass(frozen=True)
class BasicAuth:
    type: ClassVar[str] = "basic"

    user: str
    password: str = ""

    def default_headers(self) -> dict[str, str]:
        credentials = base64.b64encode(f"{self.user}:{self.password}".encode()).decode("ascii")
        return {"Authorization": f"Basic {credentials}"}

    def request_auth(self) -> httpx.Auth | None:
        return None

    def __repr__(self) -> str:
        return f"BasicAuth(user={self.user!r}, password='***')"


@dataclass(frozen=True)
class DigestAuth:
    type: ClassVar[str] = "digest"

    user: str
    password: str = ""

    def default_headers(self) -> dict[str, str]:
        return {}

    def request_auth(self) -> httpx.Auth | None:
        return DigestChallengeAuth(self.user, self.password)

    def __repr__(self) -> str:
        return f"DigestAuth(user={self.user!r}, password='***')"


@dataclass(frozen=True)
class TokenAuth:
    """Bearer token, or any token carried in a single header.

    An empty ``scheme`` sends the bare token, e.g. ``X-API-Key: <token>``.
    """

    type: ClassVar[str] = "token"

    token: str
    scheme: str = "Bearer"
    header: str = "Authorization"

    def default_headers(self) -> dict[str, str]:
        value = f"{self.scheme} {self.token}" if self.scheme else self.token
        return {self.header: value}

    def request_auth(self) -> httpx.Auth | None:
        return None

    def __repr__(self) -> str:
        return f"TokenAuth(token='***', scheme={self.scheme!r}, header={self.header!r})"


AuthStrategy = NoAuth | BasicAuth | DigestAuth | TokenAuth


def _build_user_password(cls: type[BasicAuth] | type[DigestAuth], config: Mapping[str, Any], resolver: CredentialResolver):
    user = resolver.resolve_field(config, "user")
    password = resolver.resolve_field(config, "password", default="")
    return cls(user=user, password=password)


def _build_token(config: Mapping[str, Any], resolver: CredentialResolver) -> TokenAuth:
    token = resolver.resolve_field(config, "token")
    scheme = config.get("scheme", "Bearer")
    header = config.get("header", "Authorization")
    if not isinstance(scheme, str) or not isinstance(header, str) or not header:
        raise ConfigError("Token auth 'scheme' and 'header' must be strings", key="auth")
    return TokenAuth(token=token, scheme=scheme, header=header)


def auth_from_config(config: Mapping[str, Any] | None, resolver: CredentialResolver | None = None) -> AuthStrategy:
    """Build the strategy described by an ``auth`` config mapping.

    Args:
        config: Mapping with a ``type`` of ``basic``, ``digest`` or ``token``
            plus the mechanism's credential fields. None means no auth.
        resolver: Resolver for ``*_env``/``*_file`` credential fields.

    Raises:
        ConfigError: Unknown ``type`` or malformed mapping.
        CredentialNotFoundError: A required credential could not be resolved.
    """
    if config is None:
        return NoAuth()
    if not isinstance(config, Mapping):
        raise ConfigError(f"'auth' must be a mapping, got {type(config).__name__}", key="auth")

    resolver = resolver or CredentialResolver()
    auth_type = str(config.get("type", "")).lower()

    if auth_type == BasicAuth.type:
        strategy = _build_user_password(BasicAuth, config, resolver)
    elif auth_type == DigestAuth.type:
        strategy = _build_user_password(DigestAuth, config, resolver)
    elif auth_type == TokenAuth.type:
        strategy = _build_token(config, resolver)
    else:
        raise ConfigError(
            f"Unknown auth type {config.get('type')!r}, expected one of: basic, digest, token",
            key="auth",
        )

    logger.debug(f"Built {strategy.type} auth strategy from config")
    return strategy
