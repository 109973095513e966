"""Tezos node RPC client."""
from __future__ import annotations

from typing import Any

from ..amounts import TokenAmount
from ..constants import NativeToken
from ..network import NetworkConfig
from .transport import NetworkService


class TezosNodeClient:
    """
    Read access to a Tezos node's RPC.

    The client owns the transport that the other clients of the same
    snapshot share.

    Args:
        config: Network the node belongs to
        network_service: Transport; one is created from ``build_id`` if omitted
        build_id: Snapshot identifier used when the transport is created here
    """

    def __init__(
        self,
        config: NetworkConfig,
        network_service: NetworkService | None = None,
        build_id: str | None = None,
    ):
        if network_service is None:
            if build_id is None:
                raise ValueError("either network_service or build_id is required")
            network_service = NetworkService(build_id=build_id)

        self.config = config
        self.network_service = network_service
        self._base_url = config.node_url.rstrip("/")

    @property
    def build_id(self) -> str:
        return self.network_service.build_id

    def _url(self, path: str) -> str:
        return f"{self._base_url}/chains/main{path}"

    async def get_balance(self, address: str) -> TokenAmount:
        """XTZ balance of ``address``; the node answers in mutez as a string."""
        raw = await self.network_service.get_json(
            self._url(f"/blocks/head/context/contracts/{address}/balance")
        )
        return TokenAmount.from_rpc_amount(raw, NativeToken.DECIMAL_PLACES)

    async def get_chain_id(self) -> str:
        return await self.network_service.get_json(self._url("/chain_id"))

    async def get_head(self) -> dict[str, Any]:
        """Header of the current head block."""
        return await self.network_service.get_json(self._url("/blocks/head/header"))
