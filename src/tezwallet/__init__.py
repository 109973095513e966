"""
tezwallet

Exact token balances and network-scoped backend clients for Tezos wallets.
"""

from .amounts import DecimalAmount, TokenAmount
from .exceptions import (
    APIError,
    DivisionByZeroError,
    InvalidNetworkConfigError,
    InvalidTokenConfigurationError,
    MalformedAmountError,
    RateLimitError,
    TezWalletError,
)
from .network import IdentityRedirects, NetworkConfig, NetworkType
from .registry import ClientRegistry, ClientSnapshot, build_snapshot
from .logging import configure_logging, setup_logging
from .settings import TezWalletSettings, load_settings
from .tokens import NFT, FaVersion, Token, TokenKind, native_token

__version__ = "0.1.0"

__all__ = [
    # Amounts
    "TokenAmount",
    "DecimalAmount",
    # Tokens
    "Token",
    "TokenKind",
    "FaVersion",
    "NFT",
    "native_token",
    # Networks and clients
    "NetworkConfig",
    "NetworkType",
    "IdentityRedirects",
    "ClientRegistry",
    "ClientSnapshot",
    "build_snapshot",
    # Settings
    "TezWalletSettings",
    "load_settings",
    # Logging
    "configure_logging",
    "setup_logging",
    # Errors
    "TezWalletError",
    "MalformedAmountError",
    "DivisionByZeroError",
    "InvalidTokenConfigurationError",
    "InvalidNetworkConfigError",
    "APIError",
    "RateLimitError",
]
