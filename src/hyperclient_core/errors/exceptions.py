"""Structured exceptions for the client adapter."""

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from hyperclient_core.transport.pipeline import Response


# Network-level failures come straight from httpx and are never wrapped.
TransportError = httpx.TransportError


class HyperclientError(Exception):
    """Base exception for hyperclient-core errors."""

    pass


class ConfigError(HyperclientError):
    """Invalid or missing client configuration.

    Raised synchronously while constructing a client.

    Attributes:
        key: The offending configuration key, if known.
    """

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class DecodeError(HyperclientError):
    """Response claims a JSON content type but its body does not parse."""

    def __init__(self, message: str, response: "Response | None" = None):
        super().__init__(message)
        self.response = response
