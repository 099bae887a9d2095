"""hyperclient-core - configurable HTTP client adapter on top of httpx.

This library provides:
- Pluggable authentication (basic, digest, bearer/header tokens)
- A uniform verb surface (GET, POST, PUT, DELETE, HEAD, OPTIONS)
- JSON request encoding and JSON response decoding by default
- Request logging and transport customization through configuration

Example:
    ```python
    from hyperclient_core import Client

    client = Client({"base_uri": "https://api.example.com"})
    client.basic_auth("user", "pass")
    client.attach_logger()

    response = client.get("/productions/1")
    print(response.status, response.body)
    ```
"""

__version__ = "0.1.0"

from hyperclient_core.client import Client  # noqa: E402
from hyperclient_core.config import ClientConfig  # noqa: E402
from hyperclient_core.errors import ConfigError, DecodeError, HyperclientError, TransportError  # noqa: E402
from hyperclient_core.headers import HeaderSet  # noqa: E402
from hyperclient_core.transport import PipelineBuilder, Response  # noqa: E402

__all__ = [
    "Client",
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "HeaderSet",
    "HyperclientError",
    "PipelineBuilder",
    "Response",
    "TransportError",
    "__version__",
]
