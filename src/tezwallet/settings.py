"""Process-level settings for tezwallet transports and logging.

Network endpoints are never read from here: a NetworkConfig is always
supplied wholesale by the host application. Settings only choose the
default network and tune how the backend clients talk HTTP.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import TransportDefaults
from .network import NetworkType


class TezWalletSettings(BaseSettings):
    """Main tezwallet configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TEZWALLET_",
        env_file=".env",
        extra="ignore",
    )

    # Network activated when a registry is created from settings
    default_network: NetworkType = NetworkType.MAINNET

    # HTTP transport
    http_timeout_seconds: float = Field(default=TransportDefaults.TIMEOUT_SECONDS, gt=0)
    max_retries: int = Field(default=TransportDefaults.MAX_RETRIES, ge=1)
    user_agent: str = TransportDefaults.USER_AGENT

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names from the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("default_network")
    @classmethod
    def reject_custom_default(cls, v: NetworkType) -> NetworkType:
        if v == NetworkType.CUSTOM:
            raise ValueError(
                "default_network cannot be 'custom'; build a NetworkConfig "
                "and pass it to ClientRegistry instead"
            )
        return v


@lru_cache
def load_settings(env_file: str | None = None) -> TezWalletSettings:
    """Load TezWalletSettings once per process to keep clients consistent."""
    env_path = Path(env_file) if env_file else None
    if env_path is None:
        return TezWalletSettings()
    return TezWalletSettings(_env_file=env_path)
