"""
Chain indexer client.

Maps the indexer's account and token-balance responses into ``Token``
values:
- the account's XTZ balance becomes a native token
- every fungible balance becomes one fungible token
- NFT balances are grouped into one non-fungible token per contract
"""
from __future__ import annotations

from typing import Any, Optional

from ..amounts import TokenAmount
from ..constants import NativeToken, TransportDefaults
from ..logging import get_logger
from ..network import NetworkConfig
from ..tokens import NFT, FaVersion, Token
from .metadata import MetadataClient, optional_int
from .transport import NetworkService

logger = get_logger(__name__)


class IndexerClient:
    """
    Client for the chain indexer.

    Args:
        network_service: Transport shared with the rest of the snapshot
        config: Network being indexed
        metadata_client: Fallback source for token metadata the indexer lacks
    """

    def __init__(
        self,
        network_service: NetworkService,
        config: NetworkConfig,
        metadata_client: MetadataClient,
    ):
        self.network_service = network_service
        self.config = config
        self.metadata_client = metadata_client
        self._base_url = config.indexer_url.rstrip("/")

    @property
    def build_id(self) -> str:
        return self.network_service.build_id

    async def get_native_balance(self, address: str) -> Token:
        raw = await self.network_service.get_json(
            f"{self._base_url}/v1/accounts/{address}/balance"
        )
        return Token.native(TokenAmount.from_rpc_amount(raw, NativeToken.DECIMAL_PLACES))

    async def get_token_balances(
        self,
        address: str,
        limit: int = TransportDefaults.INDEXER_PAGE_LIMIT,
    ) -> list[Token]:
        """Non-zero FA token balances of ``address``.

        Fungible tokens come first in indexer order, followed by one
        non-fungible token per NFT contract.
        """
        rows = await self.network_service.get_json(
            f"{self._base_url}/v1/tokens/balances",
            params={"account": address, "balance.gt": 0, "limit": limit},
        )

        fungibles: list[Token] = []
        collections: dict[str, dict[str, Any]] = {}

        for row in rows:
            token_data = row.get("token") or {}
            contract = token_data.get("contract") or {}
            contract_address = contract.get("address")
            if not contract_address:
                logger.warning("Skipping token balance without contract", row_id=row.get("id"))
                continue

            token_id = optional_int(token_data.get("tokenId", 0))
            if token_id is None:
                logger.warning(
                    "Skipping token balance with invalid token id", row_id=row.get("id")
                )
                continue

            metadata = token_data.get("metadata") or {}
            standard = FaVersion.from_indexer_standard(token_data.get("standard"))

            if metadata.get("artifactUri"):
                collection = collections.setdefault(
                    contract_address,
                    {"name": contract.get("alias") or contract_address, "standard": standard, "items": []},
                )
                collection["items"].append(
                    NFT(
                        token_id=token_id,
                        parent_contract=contract_address,
                        name=metadata.get("name"),
                        description=metadata.get("description"),
                        balance=TokenAmount.from_rpc_amount(
                            row.get("balance", "0"), _decimals(metadata) or 0
                        ),
                        artifact_uri=metadata.get("artifactUri"),
                        display_uri=metadata.get("displayUri"),
                        thumbnail_uri=metadata.get("thumbnailUri"),
                    )
                )
                continue

            decimals = _decimals(metadata)
            name = metadata.get("name")
            symbol = metadata.get("symbol")
            thumbnail = metadata.get("thumbnailUri")
            if decimals is None:
                fallback = await self.metadata_client.get_token_metadata(contract_address, token_id)
                if fallback is not None:
                    decimals = fallback.decimals
                    name = name or fallback.name
                    symbol = symbol or fallback.symbol
                    thumbnail = thumbnail or fallback.thumbnail_uri
            if decimals is None:
                logger.warning(
                    "No decimals known for token, assuming 0",
                    contract=contract_address,
                    id_in_contract=token_id,
                )
                decimals = 0

            fungibles.append(
                Token.fungible(
                    name=name or contract.get("alias") or contract_address,
                    symbol=symbol,
                    contract_address=contract_address,
                    balance=TokenAmount.from_rpc_amount(row.get("balance", "0"), decimals),
                    standard_version=standard,
                    icon_source_uri=thumbnail,
                )
            )

        nfts = [
            Token.non_fungible(
                name=collection["name"],
                contract_address=contract_address,
                items=collection["items"],
                standard_version=collection["standard"],
            )
            for contract_address, collection in collections.items()
        ]
        return fungibles + nfts

    async def get_all_balances(self, address: str) -> list[Token]:
        """XTZ first, then every FA token balance."""
        native = await self.get_native_balance(address)
        return [native, *await self.get_token_balances(address)]


def _decimals(metadata: dict[str, Any]) -> Optional[int]:
    return optional_int(metadata.get("decimals"))
