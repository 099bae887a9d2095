"""Transport pipeline assembled around an httpx client.

The pipeline runs every request through a fixed chain:

1. header/auth attachment (connection default headers and httpx auth)
2. request steps (body encoding)
3. the network transport (httpx)
4. response steps (decoding or whatever a custom block registered)
5. logging steps, if any were attached

Blocks customize positions 2-4 through a PipelineBuilder:

```python
def block(builder: PipelineBuilder) -> None:
    builder.request(JsonRequestEncoder())
    builder.response(JsonResponseDecoder())
    builder.adapter(httpx.HTTPTransport(retries=2))
```
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from hyperclient_core.errors.exceptions import ConfigError
from hyperclient_core.headers import HeaderSet

logger = logging.getLogger(__name__)

METHODS = frozenset(["GET", "POST", "PUT", "DELETE", "HEAD", "OPTIONS"])


@dataclass
class Request:
    """Outgoing request as seen by request steps."""

    method: str
    path: str
    body: Any = None
    headers: HeaderSet = field(default_factory=HeaderSet)
    content: str | bytes | None = None


@dataclass(frozen=True)
class Response:
    """Normalized response.

    Attributes:
        status: HTTP status code
        headers: Response headers with lower-cased names
        body: Decoded body (structured value for JSON, raw text otherwise)
        method: Method of the request that produced this response
        url: Fully-qualified URL of that request
    """

    status: int
    headers: dict[str, str]
    body: Any
    method: str = ""
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class RequestStep(Protocol):
    def on_request(self, request: Request) -> Request: ...


class ResponseStep(Protocol):
    def on_response(self, response: Response) -> Response: ...


PipelineBlock = Callable[["PipelineBuilder"], Any]


class PipelineBuilder:
    """Collects the configurable parts of a pipeline.

    Args:
        options: Resolved transport options, readable (and adjustable) by
            blocks before the httpx client is created.
    """

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self.options: dict[str, Any] = dict(options or {})
        self.request_steps: list[RequestStep] = []
        self.response_steps: list[ResponseStep] = []
        self.transport: httpx.BaseTransport | None = None

    def request(self, step: RequestStep) -> "PipelineBuilder":
        self.request_steps.append(step)
        return self

    def response(self, step: ResponseStep) -> "PipelineBuilder":
        self.response_steps.append(step)
        return self

    def adapter(self, transport: httpx.BaseTransport) -> "PipelineBuilder":
        """Use ``transport`` instead of httpx's default network transport."""
        self.transport = transport
        return self


class TransportPipeline:
    """Owns one httpx client and the ordered step chain around it.

    Args:
        options: Resolved transport options; ``url`` becomes httpx's
            ``base_url`` and every other key is passed to ``httpx.Client``
            verbatim.
        block: Callable configuring the PipelineBuilder.
        headers: Default headers for every request, layered over any
            ``headers`` given in ``options``.
        auth: Per-request httpx auth flow, if any.

    Raises:
        ConfigError: If the block fails or httpx rejects a transport option.
    """

    def __init__(
        self,
        options: Mapping[str, Any],
        block: PipelineBlock,
        *,
        headers: HeaderSet | None = None,
        auth: httpx.Auth | None = None,
    ) -> None:
        builder = PipelineBuilder(options)
        try:
            block(builder)
        except ConfigError:
            raise
        except Exception as e:
            raise ConfigError(f"Pipeline block failed: {e!r}", key="block") from e

        client_options = dict(builder.options)
        base_url = client_options.pop("url", "")
        option_transport = client_options.pop("transport", None)
        option_headers = client_options.pop("headers", None)
        transport = builder.transport or option_transport or httpx.HTTPTransport()

        self._transport = transport
        try:
            self._client = httpx.Client(base_url=base_url, transport=transport, auth=auth, **client_options)
        except TypeError as e:
            raise ConfigError(f"Invalid transport option: {e}", key="transport_options") from e

        self._request_steps: list[RequestStep] = list(builder.request_steps)
        self._response_steps: list[ResponseStep] = list(builder.response_steps)
        self._logging_steps: list[ResponseStep] = []
        self._headers = HeaderSet()
        self.headers = HeaderSet(option_headers).merge(headers)

    def __enter__(self) -> "TransportPipeline":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def connection(self) -> httpx.Client:
        """The live httpx client."""
        return self._client

    @property
    def transport(self) -> httpx.BaseTransport:
        return self._transport

    @property
    def headers(self) -> HeaderSet:
        return self._headers

    @headers.setter
    def headers(self, headers: HeaderSet) -> None:
        self._headers = HeaderSet(headers)
        # httpx layers these over its own defaults (Accept-Encoding, Connection, ...)
        self._client.headers = dict(self._headers)

    @property
    def auth(self) -> httpx.Auth | None:
        return self._client.auth

    @auth.setter
    def auth(self, auth: httpx.Auth | None) -> None:
        self._client.auth = auth

    @property
    def request_steps(self) -> tuple[RequestStep, ...]:
        return tuple(self._request_steps)

    @property
    def response_steps(self) -> tuple[ResponseStep, ...]:
        return tuple(self._response_steps + self._logging_steps)

    def append_logger(self, step: ResponseStep) -> None:
        """Add a logging step; it runs after every other response step."""
        self._logging_steps.append(step)

    def execute(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Mapping[str, Any] | None = None,
    ) -> Response:
        """Send one request through the chain and return the normalized response.

        Args:
            method: One of GET, POST, PUT, DELETE, HEAD, OPTIONS (any case).
            path: Path relative to the base address, or an absolute URL.
            body: Structured value, text or bytes; None for no body.
            headers: Per-request headers layered over the defaults.

        Raises:
            ValueError: Unsupported method.
            DecodeError: A response step could not decode the body.
            httpx.TransportError: Network failures, passed through untouched.
        """
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        request = Request(method=method, path=path, body=body, headers=self._headers.merge(headers))
        for request_step in self._request_steps:
            request = request_step.on_request(request)

        content = request.content
        if content is None and isinstance(request.body, (str, bytes)):
            content = request.body
        elif content is None and request.body is not None:
            raise TypeError(f"No request step encoded body of type {type(request.body).__name__}")

        http_request = self._client.build_request(
            request.method,
            request.path,
            content=content,
            headers=dict(request.headers),
        )
        http_response = self._client.send(http_request)
        logger.debug(f"{http_request.method} {http_request.url} -> {http_response.status_code}")

        response = Response(
            status=http_response.status_code,
            headers={name.lower(): value for name, value in http_response.headers.items()},
            body=http_response.text,
            method=http_request.method,
            url=str(http_request.url),
        )
        for response_step in self.response_steps:
            response = response_step.on_response(response)
        return response
