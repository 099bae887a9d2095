"""HTTP client adapter: configuration in, verb operations out."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from hyperclient_core.auth.credentials import CredentialResolver
from hyperclient_core.auth.strategies import AuthStrategy, BasicAuth, DigestAuth, TokenAuth, auth_from_config
from hyperclient_core.config import ClientConfig
from hyperclient_core.headers import HeaderSet, default_headers
from hyperclient_core.transport.pipeline import PipelineBlock, Response, TransportPipeline
from hyperclient_core.transport.steps import LoggingStep, default_block

logger = logging.getLogger(__name__)

REQUEST_LOGGER_NAME = "hyperclient_core.http"


class Client:
    """Configurable HTTP client.

    Validates its configuration, owns one TransportPipeline for its lifetime
    and dispatches verb operations through it. HTTP error statuses come back
    as ordinary Responses.

    Args:
        config: Mapping with ``base_uri`` (required) and optionally ``auth``,
            ``headers``, ``transport_options`` and ``block``; or a
            ClientConfig.
        credential_resolver: Resolver for ``*_env``/``*_file`` auth fields.

    Raises:
        ConfigError: If the configuration is invalid.

    Example:
        ```python
        client = Client({
            "base_uri": "https://api.example.com",
            "auth": {"type": "token", "token_env": "API_TOKEN"},
        })
        response = client.get("/widgets/1")
        response.body  # decoded JSON
        ```
    """

    def __init__(self, config: Mapping[str, Any] | ClientConfig, credential_resolver: CredentialResolver | None = None):
        self._config = ClientConfig.from_mapping(config)
        self._headers = default_headers().merge(self._config.headers)
        self._auth: AuthStrategy = auth_from_config(self._config.auth, credential_resolver)
        self._transport_options = self._config.resolved_transport_options()
        self._transport_block: PipelineBlock = self._config.block or default_block

        self._pipeline = TransportPipeline(self._transport_options, self._transport_block)
        self._apply()
        logger.debug(f"Created client for {self._config.base_uri} with {self._auth.type} auth")

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._pipeline.close()

    def _apply(self) -> None:
        """Push headers and auth into the live connection."""
        self._pipeline.headers = self._headers.merge(self._auth.default_headers())
        self._pipeline.auth = self._auth.request_auth()

    def _set_auth(self, auth: AuthStrategy) -> None:
        logger.debug(f"Replacing {self._auth.type} auth with {auth.type} auth")
        self._auth = auth
        self._apply()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def connection(self) -> httpx.Client:
        """The live httpx client."""
        return self._pipeline.connection

    @property
    def pipeline(self) -> TransportPipeline:
        return self._pipeline

    @property
    def auth(self) -> AuthStrategy:
        return self._auth

    @property
    def headers(self) -> HeaderSet:
        """Effective default headers, auth header included."""
        return self._pipeline.headers

    @headers.setter
    def headers(self, headers: Mapping[str, Any]) -> None:
        # Replaces every user header; the defaults always stay underneath.
        self._headers = default_headers().merge(headers)
        self._apply()

    @property
    def transport_options(self) -> dict[str, Any]:
        """Resolved transport options (``url`` plus configured passthrough)."""
        return dict(self._transport_options)

    @property
    def transport_block(self) -> PipelineBlock:
        """The block that configured the pipeline (custom or default)."""
        return self._transport_block

    def basic_auth(self, user: str, password: str) -> None:
        self._set_auth(BasicAuth(user=user, password=password))

    def digest_auth(self, user: str, password: str) -> None:
        """Answer digest challenges with these credentials from now on."""
        self._set_auth(DigestAuth(user=user, password=password))

    def token_auth(self, token: str, scheme: str = "Bearer", header: str = "Authorization") -> None:
        self._set_auth(TokenAuth(token=token, scheme=scheme, header=header))

    def attach_logger(self, sink: logging.Logger | None = None) -> logging.Logger:
        """Log method and URL of every subsequent request.

        A sink without its own level is set to INFO so the request lines
        reach its handlers.

        Args:
            sink: Destination logger; defaults to ``hyperclient_core.http``.

        Returns:
            The logger that was attached.
        """
        sink = sink or logging.getLogger(REQUEST_LOGGER_NAME)
        if sink.level == logging.NOTSET:
            sink.setLevel(logging.INFO)
        self._pipeline.append_logger(LoggingStep(sink))
        return sink

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Mapping[str, Any] | None = None,
    ) -> Response:
        return self._pipeline.execute(method, path, body, headers)

    def get(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("GET", path, headers=headers)

    def post(self, path: str, body: Any = None, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("POST", path, body, headers)

    def put(self, path: str, body: Any = None, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("PUT", path, body, headers)

    def delete(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("DELETE", path, headers=headers)

    def head(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("HEAD", path, headers=headers)

    def options(self, path: str, headers: Mapping[str, Any] | None = None) -> Response:
        return self.request("OPTIONS", path, headers=headers)
