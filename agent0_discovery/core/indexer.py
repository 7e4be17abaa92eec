"""
Agent indexer for discovery and search functionality.

ARCHITECTURAL PURPOSE:
======================

The indexer is the single entry point for agent discovery. It does no indexing of
its own; every query is answered by an IndexedSource (normally the registry
subgraph) and then post-processed here:

1. TWO-PHASE FILTERING: the full criteria are pushed to the source, then the same
   criteria are re-applied in memory. The source may evaluate some fields natively
   and silently ignore others (capability lists, for instance), so the second pass
   is what guarantees every returned agent matches.

2. CURSOR PAGINATION: cursors are decimal offsets into the source's result order.
   Plain search over-fetches one record to detect a following page; reputation
   search treats a full page as "more may exist". The two heuristics answer to
   different source capabilities and are kept separate.

3. NORMALIZATION: reputation records carry a nested registrationFile and are
   flattened into AgentSummary with normalized addresses.

"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .chain_lookup import ChainLookup, UnsupportedChainLookup
from .config import DEFAULT_PAGE_SIZE, DEFAULT_SORT
from .cursor import decode_cursor, encode_cursor
from .exceptions import ConfigurationError, SearchError
from .models import Address, AgentId, AgentSummary, SearchParams
from .sorting import parse_sort
from .source import IndexedSource
from .validation import addresses_equal

logger = logging.getLogger(__name__)


def _require_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


class AgentIndexer:
    """Indexer for agent discovery and search."""

    def __init__(
        self,
        source: Optional[IndexedSource] = None,
        chain_lookup: Optional[ChainLookup] = None,
    ):
        """Initialize indexer. Without a source every query raises ConfigurationError."""
        self._source = source
        self._chain_lookup = chain_lookup or UnsupportedChainLookup()

    @property
    def source(self) -> Optional[IndexedSource]:
        return self._source

    @property
    def is_configured(self) -> bool:
        return self._source is not None

    def _require_source(self, operation: str) -> IndexedSource:
        if self._source is None:
            raise ConfigurationError(f"Subgraph client (backing index) required for {operation}")
        return self._source

    def get_agent(self, agent_id: AgentId) -> AgentSummary:
        """Get agent summary from the index.

        The source is trusted to return the normalized shape, so hits are returned
        as-is. Misses go to the chain lookup fallback.
        """
        source = self._require_source("agent lookup")

        agent = source.get_agent_by_id(agent_id)
        if agent is not None:
            return agent

        logger.debug(f"Agent {agent_id} not in subgraph, trying chain lookup")
        return self._chain_lookup.get_agent(agent_id)

    def search_agents(
        self,
        params: Union[SearchParams, Dict[str, Any], None] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Search agents with filters.

        Returns {"items": [AgentSummary, ...], "nextCursor": str or None}.

        Fetches page_size + 1 records at the cursor offset and filters them locally.
        nextCursor is set only when a record beyond the page survived filtering. A
        short page without a cursor does not prove there are no further matches:
        residual filtering can drop rows from the fetched window while matches exist
        past it. Treat nextCursor as a hint, not an exact count.
        """
        source = self._require_source("agent search")

        if params is None:
            params = SearchParams()
        elif isinstance(params, dict):
            params = SearchParams.from_dict(params)

        _require_positive("page_size", page_size)
        skip = decode_cursor(cursor)

        agents = source.search_agents(params, page_size + 1, skip)
        fetched = len(agents)

        agents = self._filter_agents(agents, params)

        has_more = len(agents) > page_size
        items = agents[:page_size] if has_more else agents
        next_cursor = encode_cursor(skip + page_size) if has_more else None

        logger.debug(
            f"Agent search at offset {skip}: fetched {fetched}, kept {len(agents)}, "
            f"returning {len(items)} (nextCursor={next_cursor})"
        )
        return {"items": items, "nextCursor": next_cursor}

    def _filter_agents(self, agents: List[AgentSummary], params: SearchParams) -> List[AgentSummary]:
        """Re-apply search criteria the source may not have evaluated."""
        filtered = agents

        if params.name:
            needle = params.name.lower()
            filtered = [a for a in filtered if needle in (a.name or "").lower()]

        if params.mcp is not None:
            filtered = [a for a in filtered if a.mcp == params.mcp]

        if params.a2a is not None:
            filtered = [a for a in filtered if a.a2a == params.a2a]

        if params.ens:
            filtered = [a for a in filtered if addresses_equal(a.ens, params.ens)]

        if params.did:
            filtered = [a for a in filtered if a.did == params.did]

        if params.walletAddress:
            filtered = [a for a in filtered if addresses_equal(a.walletAddress, params.walletAddress)]

        if params.supportedTrust:
            filtered = [a for a in filtered if any(t in (a.supportedTrusts or []) for t in params.supportedTrust)]

        if params.a2aSkills:
            filtered = [a for a in filtered if any(s in (a.a2aSkills or []) for s in params.a2aSkills)]

        if params.mcpTools:
            filtered = [a for a in filtered if any(t in (a.mcpTools or []) for t in params.mcpTools)]

        if params.mcpPrompts:
            filtered = [a for a in filtered if any(p in (a.mcpPrompts or []) for p in params.mcpPrompts)]

        if params.mcpResources:
            filtered = [a for a in filtered if any(r in (a.mcpResources or []) for r in params.mcpResources)]

        if params.active is not None:
            filtered = [a for a in filtered if a.active == params.active]

        if params.x402support is not None:
            filtered = [a for a in filtered if a.x402support == params.x402support]

        if params.chains:
            chains = set(params.chains)
            filtered = [a for a in filtered if a.chainId in chains]

        return filtered

    def search_agents_by_reputation(
        self,
        agents: Optional[List[AgentId]] = None,
        tags: Optional[List[str]] = None,
        reviewers: Optional[List[Address]] = None,
        capabilities: Optional[List[str]] = None,
        skills: Optional[List[str]] = None,
        tasks: Optional[List[str]] = None,
        names: Optional[List[str]] = None,
        minAverageScore: Optional[float] = None,  # 0-100
        includeRevoked: bool = False,
        first: int = DEFAULT_PAGE_SIZE,
        skip: int = 0,
        sort: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """Search agents filtered by reputation criteria.

        nextCursor is skip + len(items) when a full page came back, else None.
        Source failures are wrapped in SearchError.
        """
        source = self._require_source("reputation search")

        _require_positive("first", first)
        if isinstance(skip, bool) or not isinstance(skip, int) or skip < 0:
            raise ValueError(f"skip must be a non-negative integer, got {skip!r}")

        if sort is None:
            sort = [DEFAULT_SORT]
        order_by, order_direction = parse_sort(sort)

        try:
            agents_data = source.search_agents_by_reputation(
                agents=agents,
                tags=tags,
                reviewers=reviewers,
                capabilities=capabilities,
                skills=skills,
                tasks=tasks,
                names=names,
                minAverageScore=minAverageScore,
                includeRevoked=includeRevoked,
                first=first,
                skip=skip,
                order_by=order_by,
                order_direction=order_direction,
            )
            items = [AgentSummary.from_subgraph(agent_data) for agent_data in agents_data[:first]]
        except Exception as e:
            logger.warning(f"Reputation search failed: {e}")
            raise SearchError(f"Failed to search agents by reputation: {e}") from e

        next_cursor = encode_cursor(skip + len(items)) if len(items) == first else None
        return {"items": items, "nextCursor": next_cursor}
