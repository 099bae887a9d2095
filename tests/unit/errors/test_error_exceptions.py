"""Tests for the error hierarchy."""

import httpx
import pytest

from hyperclient_core.errors import ConfigError, DecodeError, HyperclientError, TransportError
from hyperclient_core.transport import Response


@pytest.mark.unit
def test_config_error_is_hyperclient_error():
    error = ConfigError("missing base_uri", key="base_uri")

    assert isinstance(error, HyperclientError)
    assert error.key == "base_uri"
    assert str(error) == "missing base_uri"


@pytest.mark.unit
def test_config_error_key_defaults_to_none():
    assert ConfigError("bad").key is None


@pytest.mark.unit
def test_decode_error_carries_response():
    response = Response(status=200, headers={"content-type": "application/json"}, body="{oops")

    error = DecodeError("Invalid JSON", response=response)

    assert isinstance(error, HyperclientError)
    assert error.response is response


@pytest.mark.unit
def test_transport_error_is_httpx_error():
    assert TransportError is httpx.TransportError
    assert issubclass(httpx.ConnectError, TransportError)
    assert not issubclass(TransportError, HyperclientError)


@pytest.mark.unit
def test_catch_all_base():
    with pytest.raises(HyperclientError):
        raise DecodeError("bad body")
