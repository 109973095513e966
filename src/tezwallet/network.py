"""
Network environment descriptions.

A ``NetworkConfig`` names one Tezos network and the service endpoints that
serve it:
- node RPC endpoint
- indexer endpoint
- contract metadata endpoint
- identity provider redirect targets

Configs are plain immutable values. They are validated when a
``ClientRegistry`` builds clients from them, so an invalid config can be
constructed but never activated.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

import httpx

from .constants import IdentityDefaults, MainnetEndpoints, TestnetEndpoints
from .exceptions import InvalidNetworkConfigError

_HTTP_SCHEMES = ("http", "https")
# DNS names, IPv4 addresses, and IPv6 addresses (httpx strips the brackets)
_HOST_PATTERN = re.compile(
    r"[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?"
    r"|[0-9A-Fa-f:.]*:[0-9A-Fa-f:.]*"
)


class NetworkType(str, Enum):
    """Supported network environments."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class IdentityRedirects:
    """Redirect targets handed to the social login provider."""

    native: str = IdentityDefaults.NATIVE_REDIRECT
    google: str = IdentityDefaults.GOOGLE_REDIRECT
    browser_fallback: str = IdentityDefaults.BROWSER_REDIRECT


@dataclass(frozen=True, slots=True)
class NetworkConfig:
    """Immutable description of one network environment."""

    network_type: NetworkType
    node_url: str
    indexer_url: str
    metadata_url: str
    network_name: str
    identity: IdentityRedirects = field(default_factory=IdentityRedirects)

    def __post_init__(self) -> None:
        # Unknown names are kept as given and reported by validate()
        try:
            object.__setattr__(self, "network_type", NetworkType(self.network_type))
        except ValueError:
            pass

    @classmethod
    def defaults(cls, network_type: NetworkType | str) -> "NetworkConfig":
        """Built-in endpoints for mainnet or testnet.

        Raises:
            InvalidNetworkConfigError: for ``custom``, which has no defaults.
        """
        try:
            network_type = NetworkType(network_type)
        except ValueError as exc:
            raise InvalidNetworkConfigError(
                f"Unknown network type: {network_type}",
                field="network_type",
                value=str(network_type),
            ) from exc

        if network_type == NetworkType.MAINNET:
            endpoints = MainnetEndpoints
        elif network_type == NetworkType.TESTNET:
            endpoints = TestnetEndpoints
        else:
            raise InvalidNetworkConfigError(
                "Custom networks have no default endpoints; construct NetworkConfig directly",
                field="network_type",
                value=network_type.value,
            )

        return cls(
            network_type=network_type,
            node_url=endpoints.NODE_URL,
            indexer_url=endpoints.INDEXER_URL,
            metadata_url=endpoints.METADATA_URL,
            network_name=endpoints.NETWORK_NAME,
        )

    def validate(self) -> None:
        """Check the config is structurally usable.

        Only the shape is checked; reachability is a runtime concern of the
        clients.

        Raises:
            InvalidNetworkConfigError: naming the first offending field.
        """
        try:
            NetworkType(self.network_type)
        except ValueError as exc:
            raise InvalidNetworkConfigError(
                f"Unknown network type: {self.network_type}",
                field="network_type",
                value=str(self.network_type),
            ) from exc

        if not isinstance(self.network_name, str) or not self.network_name.strip():
            raise InvalidNetworkConfigError(
                "network_name must be a non-empty string",
                field="network_name",
                value=str(self.network_name),
            )

        _require_http_url("node_url", self.node_url)
        _require_http_url("indexer_url", self.indexer_url)
        _require_http_url("metadata_url", self.metadata_url)

        if not isinstance(self.identity, IdentityRedirects):
            raise InvalidNetworkConfigError(
                "identity must be an IdentityRedirects", field="identity"
            )
        _require_uri("identity.native", self.identity.native)
        _require_uri("identity.google", self.identity.google)
        _require_http_url("identity.browser_fallback", self.identity.browser_fallback)


def _parse(name: str, value: object) -> httpx.URL:
    if not isinstance(value, str) or not value.strip():
        raise InvalidNetworkConfigError(
            f"{name} must be a non-empty string", field=name, value=str(value)
        )
    try:
        return httpx.URL(value)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidNetworkConfigError(
            f"{name} is not a valid URL: {value}", field=name, value=value
        ) from exc


def _require_http_url(name: str, value: object) -> None:
    url = _parse(name, value)
    if url.scheme not in _HTTP_SCHEMES or not url.host:
        raise InvalidNetworkConfigError(
            f"{name} must be an absolute http(s) URL: {value}",
            field=name,
            value=str(value),
        )
    # httpx percent-encodes characters it cannot place in a host; raw_host is IDNA-encoded
    if not _HOST_PATTERN.fullmatch(url.raw_host.decode("ascii", "replace")):
        raise InvalidNetworkConfigError(
            f"{name} has an invalid host: {value}", field=name, value=str(value)
        )
    if url.port is not None and not 1 <= url.port <= 65535:
        raise InvalidNetworkConfigError(
            f"{name} has a port outside 1-65535: {value}", field=name, value=str(value)
        )


def _require_uri(name: str, value: object) -> None:
    # App redirect URIs use custom schemes (tdsdk://, com.googleusercontent...:/)
    url = _parse(name, value)
    if not url.scheme:
        raise InvalidNetworkConfigError(
            f"{name} must include a scheme: {value}", field=name, value=str(value)
        )
