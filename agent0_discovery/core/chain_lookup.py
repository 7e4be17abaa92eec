"""
Fallback lookup used when the indexed source does not know an agent.
"""

from __future__ import annotations

from typing import Protocol

from .exceptions import NotFoundError
from .models import AgentId, AgentSummary


class ChainLookup(Protocol):
    """Reads an agent straight from the identity registry contract."""

    def get_agent(self, agent_id: AgentId) -> AgentSummary:
        ...


class UnsupportedChainLookup:
    """Default fallback. Direct chain reads are not implemented yet."""

    def get_agent(self, agent_id: AgentId) -> AgentSummary:
        raise NotFoundError(
            f"Agent {agent_id} not found in subgraph; direct chain lookup is not supported yet",
            agent_id=agent_id,
        )
