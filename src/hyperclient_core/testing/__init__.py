"""Testing utilities for code built on hyperclient-core.

Inject a RecordingTransport through ``transport_options`` to run a client
against canned responses and inspect what it sent.

Example:
    ```python
    from hyperclient_core import Client
    from hyperclient_core.testing import RecordingTransport, json_response


    def test_fetches_production():
        transport = RecordingTransport(lambda request: json_response({"id": 1}))
        client = Client({"base_uri": "http://api.example.org", "transport_options": {"transport": transport}})

        assert client.get("/productions/1").body == {"id": 1}
        assert transport.requests[0].url.path == "/productions/1"
    ```
"""

import json
from collections.abc import Callable, Mapping
from typing import Any

import httpx


def json_response(body: Any, status_code: int = 200, headers: Mapping[str, str] | None = None) -> httpx.Response:
    """Build a response with a JSON body and `Content-Type: application/json`."""
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode(),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


def text_response(text: str = "", status_code: int = 200, headers: Mapping[str, str] | None = None) -> httpx.Response:
    """Build a response with a plain body and no JSON content type."""
    return httpx.Response(status_code, text=text, headers=headers)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled.

    Args:
        handler: Called with each request; returns the response to send back.
            Defaults to an empty 200 response. Reassign ``handler`` to change
            the canned response; recording keeps working.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None) -> None:
        super().__init__(handler or (lambda request: httpx.Response(200)))
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        # Auth flows resend the same Request object, so keep a snapshot
        snapshot = httpx.Request(
            request.method,
            request.url,
            headers=request.headers.copy(),
            content=request.read(),
        )
        self.requests.append(snapshot)
        return self.handler(snapshot)

    @property
    def last_request(self) -> httpx.Request:
        if not self.requests:
            raise AssertionError("No requests were sent")
        return self.requests[-1]


__all__ = ["RecordingTransport", "json_response", "text_response"]
