"""
Main SDK class for Agent0 discovery.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .chain_lookup import ChainLookup
from .config import DEFAULT_PAGE_SIZE, resolve_subgraph_url
from .cursor import decode_cursor
from .indexer import AgentIndexer
from .models import Address, AgentId, AgentSummary, ChainId, SearchParams
from .source import IndexedSource
from .subgraph_client import SubgraphClient

logger = logging.getLogger(__name__)


class SDK:
    """Read-only discovery facade over the agent registry subgraph."""

    def __init__(
        self,
        chainId: ChainId,
        subgraphUrl: Optional[str] = None,
        subgraphOverrides: Optional[Dict[ChainId, str]] = None,  # Override subgraph URLs per chain
        subgraph_client: Optional[IndexedSource] = None,
        chain_lookup: Optional[ChainLookup] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the SDK.

        An explicit subgraph_client wins, then subgraphUrl, then the usual URL
        resolution (overrides, SUBGRAPH_URL_<chainId>, defaults). With none of these
        the SDK still constructs, but every query raises ConfigurationError.
        """
        self.chainId = chainId
        self._subgraph_urls = dict(subgraphOverrides or {})

        if subgraph_client is None:
            resolved_subgraph_url = subgraphUrl or resolve_subgraph_url(chainId, self._subgraph_urls)
            if resolved_subgraph_url:
                client_kwargs = {} if timeout is None else {"timeout": timeout}
                subgraph_client = SubgraphClient(resolved_subgraph_url, **client_kwargs)
                logger.info(f"Created subgraph client for chain {chainId}: {resolved_subgraph_url}")
            else:
                logger.info(f"No subgraph configured for chain {chainId}; discovery queries are unavailable")

        self.subgraph_client = subgraph_client
        self.indexer = AgentIndexer(source=subgraph_client, chain_lookup=chain_lookup)

    def getAgent(self, agentId: AgentId) -> AgentSummary:
        """Get agent summary from index."""
        return self.indexer.get_agent(agentId)

    def searchAgents(
        self,
        params: Union[SearchParams, Dict[str, Any], None] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
        **kwargs  # Accept search criteria as kwargs for better DX
    ) -> Dict[str, Any]:
        """Search for agents.

        Examples:
            sdk.searchAgents(name="Test")
            sdk.searchAgents(mcpTools=["code_generation"], active=True)
            sdk.searchAgents(SearchParams(name="Test"), page_size=10)
        """
        if kwargs:
            if params is not None:
                raise ValueError("Pass search criteria either as params or as keyword arguments, not both")
            params = SearchParams.from_dict(kwargs)

        return self.indexer.search_agents(params, page_size, cursor)

    def searchAgentsByReputation(
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
        page_size: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
        sort: Union[str, List[str], None] = None,
    ) -> Dict[str, Any]:
        """Search agents filtered by reputation criteria. The cursor is the offset to resume at."""
        if isinstance(sort, str):
            sort = [sort]

        return self.indexer.search_agents_by_reputation(
            agents=agents,
            tags=tags,
            reviewers=reviewers,
            capabilities=capabilities,
            skills=skills,
            tasks=tasks,
            names=names,
            minAverageScore=minAverageScore,
            includeRevoked=includeRevoked,
            first=page_size,
            skip=decode_cursor(cursor),
            sort=sort,
        )
