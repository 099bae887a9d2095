"""Client configuration.

Raw configuration arrives as a plain mapping. ``ClientConfig.from_mapping`` is
the single validation entry point: it fails fast with ConfigError and returns
a frozen config whose mappings cannot be changed afterwards.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from hyperclient_core.errors.exceptions import ConfigError
from hyperclient_core.headers import HeaderSet

logger = logging.getLogger(__name__)

TRANSPORT_OPTIONS_ALIAS = "faraday_options"
RECOGNIZED_KEYS = frozenset(["base_uri", "auth", "headers", "transport_options", TRANSPORT_OPTIONS_ALIAS, "block"])


def _frozen(mapping: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


def _optional_mapping(config: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = config.get(key)
    if value is not None and not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping, got {type(value).__name__}", key=key)
    return value


@dataclass(frozen=True)
class ClientConfig:
    """Validated configuration for a Client.

    Attributes:
        base_uri: Base address every relative path is resolved against.
        auth: Auth mapping (``type`` plus credential fields), or None.
        headers: Headers layered on top of the defaults.
        transport_options: Options passed verbatim to the httpx client.
        block: Callable that configures the pipeline builder, or None for
            the default JSON block.
    """

    base_uri: str
    auth: Mapping[str, Any] | None = None
    headers: Mapping[str, Any] = field(default_factory=_frozen)
    transport_options: Mapping[str, Any] = field(default_factory=_frozen)
    block: Callable[..., Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.base_uri, str) or not self.base_uri.strip():
            raise ConfigError("'base_uri' must be a non-empty string", key="base_uri")
        if self.block is not None and not callable(self.block):
            raise ConfigError("'block' must be callable", key="block")

        # Freeze copied mappings to avoid post-init mutation side effects.
        object.__setattr__(self, "headers", _frozen(self.headers))
        object.__setattr__(self, "transport_options", _frozen(self.transport_options))
        if self.auth is not None:
            object.__setattr__(self, "auth", _frozen(self.auth))

    @classmethod
    def from_mapping(cls, config: Any) -> "ClientConfig":
        """Validate a raw configuration mapping.

        ``faraday_options`` is accepted as an alias of ``transport_options``.
        A ``block`` may be given at the top level or inside the transport
        options; the top-level one wins. ``headers`` inside the transport
        options are merged under the top-level ``headers``.

        Raises:
            ConfigError: If ``config`` is not a mapping, ``base_uri`` is
                missing, both transport option keys are given, or a
                recognized key has the wrong shape.
        """
        if isinstance(config, ClientConfig):
            return config
        if not isinstance(config, Mapping):
            raise ConfigError(f"Client config must be a mapping, got {type(config).__name__}")
        if "base_uri" not in config:
            raise ConfigError("Client config is missing required key 'base_uri'", key="base_uri")

        unknown = sorted(str(key) for key in config if key not in RECOGNIZED_KEYS)
        if unknown:
            logger.warning(f"Ignoring unrecognized client config keys: {', '.join(unknown)}")

        options_key = "transport_options"
        if TRANSPORT_OPTIONS_ALIAS in config:
            if "transport_options" in config:
                raise ConfigError(
                    f"Give either 'transport_options' or '{TRANSPORT_OPTIONS_ALIAS}', not both",
                    key="transport_options",
                )
            options_key = TRANSPORT_OPTIONS_ALIAS

        headers = _optional_mapping(config, "headers")
        auth = _optional_mapping(config, "auth")
        transport_options = dict(_optional_mapping(config, options_key) or {})

        nested_block = transport_options.pop("block", None)
        block = config.get("block") or nested_block

        nested_headers = transport_options.pop("headers", None)
        if nested_headers is not None:
            if not isinstance(nested_headers, Mapping):
                raise ConfigError(
                    f"'{options_key}.headers' must be a mapping, got {type(nested_headers).__name__}",
                    key=options_key,
                )
            headers = dict(HeaderSet(nested_headers).merge(headers))

        return cls(
            base_uri=config["base_uri"],
            auth=auth,
            headers=headers or {},
            transport_options=transport_options,
            block=block,
        )

    def resolved_transport_options(self) -> dict[str, Any]:
        """Transport options with the base address under ``url``."""
        return {"url": self.base_uri, **self.transport_options}
