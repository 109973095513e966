"""Backend service clients wired together by ClientRegistry."""

from .identity import IdentityClient, LoginProvider
from .indexer import IndexerClient
from .metadata import MetadataClient, TokenMetadata
from .node import TezosNodeClient
from .transport import NetworkService

__all__ = [
    "NetworkService",
    "TezosNodeClient",
    "MetadataClient",
    "TokenMetadata",
    "IndexerClient",
    "IdentityClient",
    "LoginProvider",
]
