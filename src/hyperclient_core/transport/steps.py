"""Built-in pipeline steps and the default block.

| Step                  | Position | Effect                                         |
|-----------------------|----------|------------------------------------------------|
| `JsonRequestEncoder`  | request  | structured body -> compact JSON                |
| `JsonResponseDecoder` | response | JSON content type -> structured body           |
| `LoggingStep`         | logging  | `"{method} {url}"` to a logger per request     |

`default_block` registers the encoder and decoder; a custom block replaces it
entirely.
"""

import json
import logging
import re
from dataclasses import replace
from typing import Any

from hyperclient_core.errors.exceptions import DecodeError
from hyperclient_core.transport.pipeline import PipelineBuilder, Request, Response

JSON_CONTENT_TYPE = "application/json"

# application/json, application/hal+json, application/vnd.example+json, ...
JSON_MEDIA_TYPE = re.compile(r"\bjson$", re.IGNORECASE)


def is_json_content_type(content_type: str | None) -> bool:
    """Return True if the media type (parameters stripped) names JSON."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip()
    return bool(JSON_MEDIA_TYPE.search(media_type))


class JsonRequestEncoder:
    """Serialize structured request bodies to compact JSON.

    Text and bytes bodies are sent verbatim. `Content-Type: application/json`
    is added unless the request already names a content type.
    """

    def on_request(self, request: Request) -> Request:
        if request.body is None or isinstance(request.body, (str, bytes)):
            return request

        content = json.dumps(request.body, separators=(",", ":"))
        headers = request.headers
        if "Content-Type" not in headers:
            headers = headers.merge({"Content-Type": JSON_CONTENT_TYPE})
        return replace(request, content=content, headers=headers)


class JsonResponseDecoder:
    """Decode JSON response bodies into structured values.

    Empty bodies decode to None so HEAD and 204 responses with a JSON content
    type do not fail. Any other body that does not parse raises DecodeError.
    """

    def on_response(self, response: Response) -> Response:
        if not is_json_content_type(response.headers.get("content-type")):
            return response

        raw = response.body
        if raw is None or not str(raw).strip():
            return replace(response, body=None)

        try:
            decoded = json.loads(raw)
        except ValueError as e:
            raise DecodeError(
                f"Invalid JSON in {response.method} {response.url} response (status {response.status}): {e}",
                response=response,
            ) from e
        return replace(response, body=decoded)


class LoggingStep:
    """Write one line per request to ``sink`` after it completes.

    Args:
        sink: Logger receiving `"{method} {url}"` (lower-case method) at INFO
            and the status at DEBUG.
    """

    def __init__(self, sink: logging.Logger) -> None:
        self.sink = sink

    def on_response(self, response: Response) -> Response:
        self.sink.info(f"{response.method.lower()} {response.url}")
        self.sink.debug(f"Status {response.status}")
        return response


def default_block(builder: PipelineBuilder) -> Any:
    """JSON in, JSON out, httpx's default network transport."""
    builder.request(JsonRequestEncoder())
    builder.response(JsonResponseDecoder())
    return builder
