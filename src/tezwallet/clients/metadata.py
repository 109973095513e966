"""Contract metadata client.

Used by the indexer client to fill in token metadata (decimals, symbol,
icon) that the indexer has not resolved yet.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..logging import get_logger
from ..network import NetworkConfig
from .transport import NetworkService

logger = get_logger(__name__)


def optional_int(value: Any) -> Optional[int]:
    """``int(value)``, or ``None`` for missing or non-integer payload values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class TokenMetadata:
    """Display metadata for one token of a contract."""

    contract: str
    token_id: int
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    thumbnail_uri: Optional[str] = None

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "TokenMetadata":
        return cls(
            contract=data.get("contract", ""),
            token_id=optional_int(data.get("token_id", 0)) or 0,
            name=data.get("name"),
            symbol=data.get("symbol"),
            decimals=optional_int(data.get("decimals")),
            thumbnail_uri=data.get("thumbnail_uri"),
        )


class MetadataClient:
    """
    Client for the contract metadata service.

    Args:
        network_service: Transport shared with the rest of the snapshot
        config: Network whose contracts are queried
    """

    def __init__(self, network_service: NetworkService, config: NetworkConfig):
        self.network_service = network_service
        self.config = config
        self._base_url = config.metadata_url.rstrip("/")

    @property
    def build_id(self) -> str:
        return self.network_service.build_id

    async def get_token_metadata(
        self,
        contract_address: str,
        token_id: Optional[int] = None,
    ) -> Optional[TokenMetadata]:
        """Metadata of one token, or ``None`` when the service knows nothing of it."""
        params: dict[str, Any] = {"contract": contract_address}
        if token_id is not None:
            params["token_id"] = token_id

        data = await self.network_service.get_json(
            f"{self._base_url}/v1/tokens/{self.config.network_name}/metadata",
            params=params,
        )
        if not data:
            return None

        row = data[0]
        if optional_int(row.get("token_id", 0)) is None:
            logger.warning(
                "Skipping metadata with invalid token id", contract=contract_address
            )
            return None
        metadata = TokenMetadata.from_response(row)
        if row.get("decimals") is not None and metadata.decimals is None:
            logger.warning("Ignoring invalid decimals in metadata", contract=contract_address)
        return metadata
