"""
Centralized constants for tezwallet.

This module contains the values shared across tezwallet modules:
native token metadata, default service endpoints per network, identity
redirect defaults, transport defaults and logging constants.

Usage:
    from tezwallet.constants import NativeToken, TransportDefaults

    zero = TokenAmount.zero(NativeToken.DECIMAL_PLACES)
"""
from __future__ import annotations

from typing import Final


class NativeToken:
    """Metadata of the chain's native coin."""

    NAME: Final[str] = "Tezos"
    SYMBOL: Final[str] = "XTZ"
    # 1 XTZ = 1_000_000 mutez
    DECIMAL_PLACES: Final[int] = 6


class MainnetEndpoints:
    """Default service endpoints for mainnet."""

    NETWORK_NAME: Final[str] = "mainnet"
    NODE_URL: Final[str] = "https://mainnet.smartpy.io"
    INDEXER_URL: Final[str] = "https://api.tzkt.io"
    METADATA_URL: Final[str] = "https://api.better-call.dev"


class TestnetEndpoints:
    """Default service endpoints for the public testnet."""

    NETWORK_NAME: Final[str] = "ghostnet"
    NODE_URL: Final[str] = "https://ghostnet.smartpy.io"
    INDEXER_URL: Final[str] = "https://api.ghostnet.tzkt.io"
    METADATA_URL: Final[str] = "https://api.better-call.dev"


class IdentityDefaults:
    """Default redirect targets for the social login provider."""

    NATIVE_REDIRECT: Final[str] = "tdsdk://tdsdk/oauthCallback"
    GOOGLE_REDIRECT: Final[str] = (
        "com.googleusercontent.apps.238941746713-vfap8uumijal4ump28p9jd3lbe6onqt4:/oauthredirect"
    )
    BROWSER_REDIRECT: Final[str] = "https://scripts.toruswallet.io/redirect.html"


class TransportDefaults:
    """HTTP transport defaults shared by all backend clients."""

    TIMEOUT_SECONDS: Final[float] = 30.0
    MAX_RETRIES: Final[int] = 3
    USER_AGENT: Final[str] = "tezwallet-python/0.1.0"
    DEFAULT_RETRY_AFTER_SECONDS: Final[int] = 5
    # TzKT caps page size at 10_000
    INDEXER_PAGE_LIMIT: Final[int] = 10_000


class LoggingConfig:
    """Logging-related constants."""

    # Logger every tezwallet module logs under
    PACKAGE_LOGGER: Final[str] = "tezwallet"

    # Keys masked when any of these appear in the (lower-cased) key name
    SENSITIVE_KEY_PARTS: Final[tuple[str, ...]] = (
        "secret",
        "password",
        "token",
        "key",
        "credential",
        "mnemonic",
    )
    # Keys masked only on an exact match
    SENSITIVE_FIELDS: Final[frozenset[str]] = frozenset({"auth", "authorization", "seed"})

    MASK_PATTERN: Final[str] = "***REDACTED***"
    MAX_LOG_MESSAGE_LENGTH: Final[int] = 10_000
    MAX_RESPONSE_BODY_LOG_LENGTH: Final[int] = 1000
