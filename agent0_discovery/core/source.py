"""
Interface the indexer needs from its backing index.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .models import Address, AgentId, AgentSummary, SearchParams


class IndexedSource(Protocol):
    """A paginated, filterable, sortable agent store (e.g. the registry subgraph).

    search_agents applies whichever criteria it can evaluate natively and ignores
    the rest. Ordering is the source's default unless the criteria say otherwise.
    """

    def get_agent_by_id(self, agent_id: AgentId) -> Optional[AgentSummary]:
        ...

    def search_agents(self, params: SearchParams, first: int, skip: int) -> List[AgentSummary]:
        ...

    def search_agents_by_reputation(
        self,
        agents: Optional[List[AgentId]],
        tags: Optional[List[str]],
        reviewers: Optional[List[Address]],
        capabilities: Optional[List[str]],
        skills: Optional[List[str]],
        tasks: Optional[List[str]],
        names: Optional[List[str]],
        minAverageScore: Optional[float],
        includeRevoked: bool,
        first: int,
        skip: int,
        order_by: str,
        order_direction: str,
    ) -> List[Dict[str, Any]]:
        ...
