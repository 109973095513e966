"""
Network-scoped registry of backend service clients.

A ``ClientRegistry`` holds exactly one ``ClientSnapshot``: the node,
metadata, indexer and identity clients for one network, all wired to the
same transport by a single ``build`` call. Switching networks builds a
complete new snapshot off to the side and then publishes it with a single
reference assignment, so readers see either the whole old graph or the
whole new one.

Usage:
    registry = ClientRegistry(NetworkConfig.defaults(NetworkType.MAINNET))

    clients = registry.current()
    balances = await clients.indexer.get_all_balances(address)

    registry.switch_network(NetworkType.TESTNET)

Work that captured a snapshot before a switch keeps using it until it
finishes. The registry does not close superseded snapshots; whoever holds
one may call ``await snapshot.aclose()`` when done with it.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .clients import (
    IdentityClient,
    IndexerClient,
    MetadataClient,
    NetworkService,
    TezosNodeClient,
)
from .exceptions import InvalidNetworkConfigError
from .logging import get_logger
from .network import NetworkConfig, NetworkType
from .settings import TezWalletSettings, load_settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class ClientSnapshot:
    """Clients for one network, all produced by the same build."""

    build_id: str
    config: NetworkConfig
    network_service: NetworkService
    node: TezosNodeClient
    metadata: MetadataClient
    indexer: IndexerClient
    identity: IdentityClient
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def network_type(self) -> NetworkType:
        return self.config.network_type

    async def aclose(self) -> None:
        """Close the transport shared by every client of this snapshot."""
        await self.network_service.aclose()


def build_snapshot(
    config: NetworkConfig,
    settings: Optional[TezWalletSettings] = None,
) -> ClientSnapshot:
    """Construct a complete client graph for ``config`` without network I/O.

    Wiring order matters: later clients capture references to earlier
    ones, so all of them must come from the same call.

    Raises:
        InvalidNetworkConfigError: before any client is created, when the
            config is structurally invalid.
    """
    if not isinstance(config, NetworkConfig):
        raise InvalidNetworkConfigError(
            f"expected a NetworkConfig, got {type(config).__name__}", field="config"
        )
    config.validate()

    build_id = uuid.uuid4().hex
    if settings is None:
        network_service = NetworkService(build_id=build_id)
    else:
        network_service = NetworkService(
            build_id=build_id,
            timeout=settings.http_timeout_seconds,
            max_retries=settings.max_retries,
            user_agent=settings.user_agent,
        )

    node = TezosNodeClient(config, network_service)
    metadata = MetadataClient(node.network_service, config)
    indexer = IndexerClient(node.network_service, config, metadata)
    identity = IdentityClient(
        network_type=config.network_type,
        network_service=node.network_service,
        native_redirect_url=config.identity.native,
        google_redirect_url=config.identity.google,
        browser_redirect_url=config.identity.browser_fallback,
    )

    logger.info(
        "Built client snapshot",
        build_id=build_id,
        network=config.network_type.value,
        network_name=config.network_name,
        node_url=config.node_url,
    )
    return ClientSnapshot(
        build_id=build_id,
        config=config,
        network_service=network_service,
        node=node,
        metadata=metadata,
        indexer=indexer,
        identity=identity,
    )


class ClientRegistry:
    """
    Holder of the active client snapshot.

    Args:
        config: Network activated on construction
        settings: Transport settings applied to every snapshot built here
    """

    def __init__(
        self,
        config: NetworkConfig,
        settings: Optional[TezWalletSettings] = None,
    ):
        self._settings = settings
        self._lock = threading.Lock()
        self._current = self.build(config)
        self._generation = 1

    @classmethod
    def from_settings(cls, settings: Optional[TezWalletSettings] = None) -> "ClientRegistry":
        """Registry on the settings' default network."""
        settings = settings or load_settings()
        return cls(NetworkConfig.defaults(settings.default_network), settings=settings)

    def build(self, config: NetworkConfig) -> ClientSnapshot:
        """Build a snapshot for ``config`` without publishing it."""
        return build_snapshot(config, self._settings)

    def current(self) -> ClientSnapshot:
        """The active snapshot. Lock-free; callers should keep the reference
        for the duration of one unit of work."""
        return self._current

    def reconfigure(self, config: NetworkConfig) -> ClientSnapshot:
        """Build a new snapshot for ``config`` and make it current.

        Concurrent calls may build in parallel; the last one to publish
        wins. On failure the current snapshot is left untouched.

        Raises:
            InvalidNetworkConfigError: if ``config`` is structurally invalid.
        """
        snapshot = self.build(config)

        with self._lock:
            previous = self._current
            self._current = snapshot
            self._generation += 1
            generation = self._generation

        logger.info(
            "Published client snapshot",
            build_id=snapshot.build_id,
            previous_build_id=previous.build_id,
            network=snapshot.network_type.value,
            generation=generation,
        )
        return snapshot

    def switch_network(self, network_type: NetworkType | str) -> ClientSnapshot:
        """Reconfigure onto the built-in endpoints of ``network_type``."""
        return self.reconfigure(NetworkConfig.defaults(network_type))

    @property
    def config(self) -> NetworkConfig:
        return self._current.config

    @property
    def network_type(self) -> NetworkType:
        return self._current.network_type

    @property
    def generation(self) -> int:
        """Number of snapshots published so far, including the initial one."""
        return self._generation
