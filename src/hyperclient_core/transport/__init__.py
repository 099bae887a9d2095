"""Transport pipeline: one httpx client plus an ordered chain of steps.

Modules:
    pipeline: Request/Response models, PipelineBuilder and TransportPipeline
    steps: JSON encoding/decoding, request logging and the default block

Example:
    ```python
    from hyperclient_core.transport import TransportPipeline, default_block

    pipeline = TransportPipeline({"url": "https://api.example.com"}, default_block)
    response = pipeline.execute("GET", "/widgets/1")
    ```
"""

from hyperclient_core.transport.pipeline import (
    METHODS,
    PipelineBlock,
    PipelineBuilder,
    Request,
    RequestStep,
    Response,
    ResponseStep,
    TransportPipeline,
)
from hyperclient_core.transport.steps import (
    JsonRequestEncoder,
    JsonResponseDecoder,
    LoggingStep,
    default_block,
    is_json_content_type,
)

__all__ = [
    "METHODS",
    "JsonRequestEncoder",
    "JsonResponseDecoder",
    "LoggingStep",
    "PipelineBlock",
    "PipelineBuilder",
    "Request",
    "RequestStep",
    "Response",
    "ResponseStep",
    "TransportPipeline",
    "default_block",
    "is_json_content_type",
]
