"""
Tests for the SDK facade and subgraph URL resolution.
"""

import pytest
from unittest.mock import Mock

from agent0_discovery import SDK, SearchParams, SubgraphClient
from agent0_discovery.core.config import resolve_subgraph_url
from agent0_discovery.core.exceptions import ConfigurationError, InvalidCursorError


UNCONFIGURED_CHAIN = 424242


class TestResolveSubgraphUrl:
    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv("SUBGRAPH_URL_84532", "https://env.example.com")
        assert resolve_subgraph_url(84532, {84532: "https://override.example.com"}) == "https://override.example.com"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SUBGRAPH_URL_84532", "https://env.example.com")
        assert resolve_subgraph_url(84532) == "https://env.example.com"

    def test_unconfigured(self, monkeypatch):
        monkeypatch.delenv(f"SUBGRAPH_URL_{UNCONFIGURED_CHAIN}", raising=False)
        assert resolve_subgraph_url(UNCONFIGURED_CHAIN) is None


class TestSDK:
    def test_builds_subgraph_client_from_url(self):
        sdk = SDK(chainId=84532, subgraphUrl="https://subgraph.example.com", timeout=3)

        assert isinstance(sdk.subgraph_client, SubgraphClient)
        assert sdk.subgraph_client.url == "https://subgraph.example.com"
        assert sdk.subgraph_client.timeout == 3
        assert sdk.indexer.source is sdk.subgraph_client

    def test_unconfigured_sdk_raises_on_queries(self, monkeypatch):
        monkeypatch.delenv(f"SUBGRAPH_URL_{UNCONFIGURED_CHAIN}", raising=False)
        sdk = SDK(chainId=UNCONFIGURED_CHAIN)

        assert sdk.subgraph_client is None
        with pytest.raises(ConfigurationError):
            sdk.getAgent(f"{UNCONFIGURED_CHAIN}:1")
        with pytest.raises(ConfigurationError):
            sdk.searchAgents(name="Test")
        with pytest.raises(ConfigurationError):
            sdk.searchAgentsByReputation()

    def test_get_agent(self, make_agent, list_source):
        agent = make_agent("84532:1")
        sdk = SDK(chainId=84532, subgraph_client=list_source([agent]))
        assert sdk.getAgent("84532:1") is agent

    def test_search_agents_with_kwargs(self, make_agent, list_source):
        agents = [make_agent("84532:1", name="Test Agent"), make_agent("84532:2", name="Other")]
        sdk = SDK(chainId=84532, subgraph_client=list_source(agents))

        result = sdk.searchAgents(name="test", page_size=10)

        assert [a.agentId for a in result["items"]] == ["84532:1"]
        assert result["nextCursor"] is None

    def test_search_agents_with_params(self, make_agent, list_source):
        source = list_source([make_agent("84532:1")])
        sdk = SDK(chainId=84532, subgraph_client=source)

        sdk.searchAgents(SearchParams(active=True), page_size=5, cursor="10")

        assert source.calls[0]["first"] == 6
        assert source.calls[0]["skip"] == 10

    def test_search_agents_rejects_mixed_params(self, list_source):
        sdk = SDK(chainId=84532, subgraph_client=list_source([]))
        with pytest.raises(ValueError):
            sdk.searchAgents(SearchParams(), name="Test")

    def test_reputation_search_converts_cursor(self):
        source = Mock()
        source.search_agents_by_reputation = Mock(return_value=[])
        sdk = SDK(chainId=84532, subgraph_client=source)

        result = sdk.searchAgentsByReputation(tags=["enterprise"], page_size=25, cursor="75", sort="score:asc")

        kwargs = source.search_agents_by_reputation.call_args.kwargs
        assert kwargs["first"] == 25
        assert kwargs["skip"] == 75
        assert kwargs["order_by"] == "score"
        assert kwargs["order_direction"] == "asc"
        assert result == {"items": [], "nextCursor": None}

    def test_reputation_search_rejects_bad_cursor(self):
        sdk = SDK(chainId=84532, subgraph_client=Mock())
        with pytest.raises(InvalidCursorError):
            sdk.searchAgentsByReputation(cursor="page-2")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
