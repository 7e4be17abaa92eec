"""
Shared fixtures and helpers for discovery tests.
"""

from typing import Any, Dict, List, Optional

import pytest

from agent0_discovery.core.models import AgentSummary, SearchParams


def build_agent(agent_id: str = "11155111:1", **overrides) -> AgentSummary:
    """Build an AgentSummary with sensible defaults."""
    fields: Dict[str, Any] = {
        "chainId": int(agent_id.split(":")[0]),
        "agentId": agent_id,
        "name": f"Agent {agent_id}",
        "image": None,
        "description": "Test agent",
        "owners": ["0xabc123"],
        "operators": [],
        "mcp": False,
        "a2a": False,
        "ens": None,
        "did": None,
        "walletAddress": None,
        "supportedTrusts": [],
        "a2aSkills": [],
        "mcpTools": [],
        "mcpPrompts": [],
        "mcpResources": [],
        "active": True,
        "x402support": False,
    }
    fields.update(overrides)
    return AgentSummary(**fields)


class ListSource:
    """In-memory indexed source that pages a fixed list and applies no filters."""

    def __init__(self, agents: List[AgentSummary]):
        self.agents = agents
        self.calls = []

    def get_agent_by_id(self, agent_id: str) -> Optional[AgentSummary]:
        return next((a for a in self.agents if a.agentId == agent_id), None)

    def search_agents(self, params: SearchParams, first: int, skip: int) -> List[AgentSummary]:
        self.calls.append({"params": params, "first": first, "skip": skip})
        return self.agents[skip:skip + first]

    def search_agents_by_reputation(self, **kwargs):
        raise NotImplementedError


@pytest.fixture
def make_agent():
    """Factory for AgentSummary records: make_agent(agent_id, **overrides)."""
    return build_agent


@pytest.fixture
def list_source():
    """Factory for in-memory sources: list_source(agents)."""
    return ListSource


@pytest.fixture
def subgraph_agent_record() -> Dict[str, Any]:
    """A raw subgraph agent record as returned by reputation search."""
    return {
        'id': '84532:7',
        'chainId': '84532',
        'agentId': '7',
        'owner': '0x6B175474E89094C44Da98b954EedeAC495271d0F',
        'operators': ['0xA0b86991c6218b36c1d19d4a2e9eb0ce3606eb48'],
        'totalFeedback': 4,
        'createdAt': 1700000400,
        'averageScore': 87.5,
        'registrationFile': {
            'name': 'Agent Gamma',
            'description': 'Base network agent',
            'image': 'ipfs://QmImage',
            'active': True,
            'x402support': None,
            'supportedTrusts': ['reputation'],
            'mcpEndpoint': 'https://agent-gamma.example.com/mcp',
            'a2aEndpoint': None,
            'ens': 'Gamma.ETH',
            'did': 'did:web:gamma.example.com',
            'agentWallet': '0xA0B86991C6218B36C1D19D4A2E9EB0CE3606EB48',
            'mcpTools': ['data_analysis'],
            'a2aSkills': None,
            'mcpPrompts': [],
            'mcpResources': [],
        }
    }
