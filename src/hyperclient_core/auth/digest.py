"""HTTP digest authentication as an httpx auth flow.

Digest credentials can only be computed once the server has issued a
challenge, so the flow is a small state machine:

| State                | Action                                               |
|----------------------|------------------------------------------------------|
| `UNAUTHENTICATED`    | send the request as-is                               |
| `CHALLENGE_RECEIVED` | 401 + `WWW-Authenticate`: compute `Authorization`    |
| `RESENT`             | resend once and hand back whatever comes back        |

A second 401 is returned to the caller unchanged. There is never a third
request.

Example:
    ```python
    import httpx
    from hyperclient_core.auth.digest import DigestChallengeAuth

    with httpx.Client(auth=DigestChallengeAuth("user", "pass")) as client:
        response = client.get("https://api.example.com/private")
    ```
"""

import enum
import hashlib
import logging
import os
import time
import typing
from dataclasses import dataclass
from urllib.request import parse_http_list

import httpx

logger = logging.getLogger(__name__)

_ALGORITHM_TO_HASH_FUNCTION: dict[str, typing.Callable[..., typing.Any]] = {
    "MD5": hashlib.md5,
    "MD5-SESS": hashlib.md5,
    "SHA": hashlib.sha1,
    "SHA-SESS": hashlib.sha1,
    "SHA-256": hashlib.sha256,
    "SHA-256-SESS": hashlib.sha256,
    "SHA-512": hashlib.sha512,
    "SHA-512-SESS": hashlib.sha512,
}


class DigestState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    CHALLENGE_RECEIVED = "challenge_received"
    RESENT = "resent"


@dataclass(frozen=True)
class DigestChallenge:
    """Parameters of a `WWW-Authenticate` digest challenge."""

    realm: str = ""
    nonce: str = ""
    algorithm: str = "MD5"
    opaque: str | None = None
    qop: str | None = None

    @classmethod
    def parse(cls, header: str) -> "DigestChallenge":
        """Parse a challenge header leniently.

        The `Digest` scheme token is optional and fields without a value are
        ignored, so a bare `WWW-Authenticate: private area` parses to an empty
        realm and nonce with the default MD5 algorithm.
        """
        scheme, _, fields = header.strip().partition(" ")
        if scheme.lower() != "digest":
            fields = header

        params: dict[str, str] = {}
        for item in parse_http_list(fields):
            key, sep, value = item.partition("=")
            if not sep:
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            params[key.strip().lower()] = value

        return cls(
            realm=params.get("realm", ""),
            nonce=params.get("nonce", ""),
            algorithm=params.get("algorithm", "MD5").upper(),
            opaque=params.get("opaque"),
            qop=params.get("qop"),
        )


class DigestChallengeAuth(httpx.Auth):
    """Digest authentication that answers at most one challenge per request.

    Args:
        username: Digest username
        password: Digest password
    """

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password
        self._last_nonce: str | None = None
        self._nonce_count = 0

    @property
    def username(self) -> str:
        return self._username

    def auth_flow(self, request: httpx.Request) -> typing.Generator[httpx.Request, httpx.Response, None]:
        state = DigestState.UNAUTHENTICATED
        challenge = DigestChallenge()

        while True:
            if state is DigestState.UNAUTHENTICATED:
                response = yield request
                if response.status_code != 401 or "www-authenticate" not in response.headers:
                    return
                challenge = self._select_challenge(response)
                state = DigestState.CHALLENGE_RECEIVED

            elif state is DigestState.CHALLENGE_RECEIVED:
                authorization = self._build_authorization(request, challenge)
                if authorization is None:
                    return
                logger.debug(f"Answering digest challenge for {request.method} {request.url} (realm={challenge.realm!r})")
                request.headers["Authorization"] = authorization
                state = DigestState.RESENT

            else:
                yield request
                return

    def _select_challenge(self, response: httpx.Response) -> DigestChallenge:
        """Pick the digest challenge, falling back to the first header value."""
        values = response.headers.get_list("www-authenticate")
        for value in values:
            if value.strip().lower().startswith("digest"):
                return DigestChallenge.parse(value)
        return DigestChallenge.parse(values[0])

    def _build_authorization(self, request: httpx.Request, challenge: DigestChallenge) -> str | None:
        """Compute the `Authorization: Digest ...` value, or None if unsupported."""
        hash_func = _ALGORITHM_TO_HASH_FUNCTION.get(challenge.algorithm)
        if hash_func is None:
            logger.warning(f"Unsupported digest algorithm {challenge.algorithm!r}, returning challenge response")
            return None

        qop = self._resolve_qop(challenge.qop)
        if challenge.qop is not None and qop is None:
            logger.warning(f"Unsupported digest qop {challenge.qop!r}, returning challenge response")
            return None

        def digest(data: str) -> str:
            return hash_func(data.encode()).hexdigest()

        if challenge.nonce != self._last_nonce:
            self._last_nonce = challenge.nonce
            self._nonce_count = 0
        self._nonce_count += 1
        nc_value = f"{self._nonce_count:08x}"
        cnonce = self._get_client_nonce(self._nonce_count, challenge.nonce)

        uri = request.url.raw_path.decode("ascii")
        a1 = f"{self._username}:{challenge.realm}:{self._password}"
        if challenge.algorithm.endswith("-SESS"):
            a1 = f"{digest(a1)}:{challenge.nonce}:{cnonce}"
        a2 = f"{request.method}:{uri}"

        if qop is None:
            response_digest = digest(f"{digest(a1)}:{challenge.nonce}:{digest(a2)}")
        else:
            response_digest = digest(f"{digest(a1)}:{challenge.nonce}:{nc_value}:{cnonce}:{qop}:{digest(a2)}")

        parts = [
            f'username="{self._username}"',
            f'realm="{challenge.realm}"',
            f"algorithm={challenge.algorithm}",
            f'uri="{uri}"',
            f'nonce="{challenge.nonce}"',
            f'response="{response_digest}"',
        ]
        if qop is not None:
            parts.extend([f"qop={qop}", f"nc={nc_value}", f'cnonce="{cnonce}"'])
        if challenge.opaque:
            parts.append(f'opaque="{challenge.opaque}"')

        return "Digest " + ", ".join(parts)

    @staticmethod
    def _resolve_qop(qop: str | None) -> str | None:
        if qop is None:
            return None
        offered = [value.strip() for value in qop.split(",")]
        if "auth" in offered:
            return "auth"
        # auth-int needs a body hash and is not supported
        return None

    @staticmethod
    def _get_client_nonce(nonce_count: int, nonce: str) -> str:
        seed = f"{nonce_count}{nonce}{time.ctime()}".encode() + os.urandom(8)
        return hashlib.sha1(seed).hexdigest()[:16]
