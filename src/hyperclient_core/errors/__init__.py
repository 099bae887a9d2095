"""Error types raised by hyperclient-core."""

from hyperclient_core.errors.exceptions import (
    ConfigError,
    DecodeError,
    HyperclientError,
    TransportError,
)

__all__ = [
    "ConfigError",
    "DecodeError",
    "HyperclientError",
    "TransportError",
]
