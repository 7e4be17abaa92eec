"""
Agent0 discovery: agent search over the ERC-8004 registry subgraph.
"""

from .core.chain_lookup import ChainLookup, UnsupportedChainLookup
from .core.exceptions import (
    Agent0DiscoveryError,
    ConfigurationError,
    InvalidCursorError,
    NotFoundError,
    SearchError,
    SubgraphQueryError,
)
from .core.indexer import AgentIndexer
from .core.models import AgentSummary, SearchParams
from .core.sdk import SDK
from .core.subgraph_client import SubgraphClient

__version__ = "0.1.0"

__all__ = [
    "SDK",
    "AgentIndexer",
    "SubgraphClient",
    "AgentSummary",
    "SearchParams",
    "ChainLookup",
    "UnsupportedChainLookup",
    "Agent0DiscoveryError",
    "ConfigurationError",
    "InvalidCursorError",
    "NotFoundError",
    "SearchError",
    "SubgraphQueryError",
]
