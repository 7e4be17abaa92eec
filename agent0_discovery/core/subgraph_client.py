"""
GraphQL client for the agent registry subgraph.

Implements the IndexedSource interface used by AgentIndexer. Criteria the subgraph
can express go into the `where` clause; everything else (capability lists) is left
to the indexer's residual filter.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_ORDER_BY, DEFAULT_ORDER_DIRECTION, DEFAULT_TIMEOUT
from .exceptions import SubgraphQueryError
from .models import Address, AgentId, AgentSummary, SearchParams
from .validation import normalize_address, normalize_addresses

logger = logging.getLogger(__name__)

# Feedback rows fetched per request when aggregating reputation per agent
FEEDBACK_PAGE_SIZE = 1000

AGENT_FIELDS = """
    id
    chainId
    agentId
    owner
    operators
    createdAt
    updatedAt
    totalFeedback
    registrationFile {
      name
      description
      image
      active
      x402support
      supportedTrusts
      mcpEndpoint
      a2aEndpoint
      ens
      did
      agentWallet
      mcpTools
      mcpPrompts
      mcpResources
      a2aSkills
    }
"""

GET_AGENT_QUERY = """
query GetAgent($id: ID!) {
  agent(id: $id) {%s}
}
""" % AGENT_FIELDS

SEARCH_AGENTS_QUERY = """
query SearchAgents($where: Agent_filter, $first: Int!, $skip: Int!, $orderBy: Agent_orderBy, $orderDirection: OrderDirection) {
  agents(where: $where, first: $first, skip: $skip, orderBy: $orderBy, orderDirection: $orderDirection) {%s}
}
""" % AGENT_FIELDS

SEARCH_FEEDBACK_SCORES_QUERY = """
query FeedbackScores($where: Feedback_filter, $first: Int!) {
  feedbacks(where: $where, first: $first, orderBy: id, orderDirection: asc) {
    id
    score
    isRevoked
    agent { id }
  }
}
"""


def build_agent_where(params: SearchParams) -> Optional[Dict[str, Any]]:
    """Translate SearchParams into an Agent_filter. Returns None when nothing applies."""
    where_clause: Dict[str, Any] = {}
    reg_file_where: Dict[str, Any] = {}

    if params.name:
        reg_file_where["name_contains_nocase"] = params.name
    if params.description:
        reg_file_where["description_contains_nocase"] = params.description
    if params.active is not None:
        reg_file_where["active"] = params.active
    if params.x402support is not None:
        reg_file_where["x402support"] = params.x402support
    if params.mcp is not None:
        if params.mcp:
            reg_file_where["mcpEndpoint_not"] = None
        else:
            reg_file_where["mcpEndpoint"] = None
    if params.a2a is not None:
        if params.a2a:
            reg_file_where["a2aEndpoint_not"] = None
        else:
            reg_file_where["a2aEndpoint"] = None
    if params.ens:
        reg_file_where["ens"] = normalize_address(params.ens)
    if params.did:
        reg_file_where["did"] = params.did
    if params.walletAddress:
        reg_file_where["agentWallet"] = normalize_address(params.walletAddress)

    if reg_file_where:
        where_clause["registrationFile_"] = reg_file_where

    if params.owners:
        normalized_owners = normalize_addresses(params.owners)
        if len(normalized_owners) == 1:
            where_clause["owner"] = normalized_owners[0]
        else:
            where_clause["owner_in"] = normalized_owners

    if params.chains:
        where_clause["chainId_in"] = [str(chain_id) for chain_id in params.chains]

    # operators_contains matches agents holding ALL listed operators, so "any of"
    # needs one branch per operator
    operators = normalize_addresses(params.operators or [])
    if len(operators) == 1:
        where_clause["operators_contains"] = operators
    elif operators:
        operators_clause = {"or": [{"operators_contains": [operator]} for operator in operators]}
        if where_clause:
            return {"and": [where_clause, operators_clause]}
        return operators_clause

    return where_clause or None


def build_feedback_where(
    agents: Optional[List[AgentId]] = None,
    tags: Optional[List[str]] = None,
    reviewers: Optional[List[Address]] = None,
    capabilities: Optional[List[str]] = None,
    skills: Optional[List[str]] = None,
    tasks: Optional[List[str]] = None,
    names: Optional[List[str]] = None,
    includeRevoked: bool = False,
) -> Dict[str, Any]:
    """Build a Feedback_filter for reputation aggregation."""
    where_clause: Dict[str, Any] = {}
    file_where: Dict[str, Any] = {}

    if agents:
        where_clause["agent_in"] = list(agents)
    if reviewers:
        where_clause["clientAddress_in"] = normalize_addresses(reviewers)
    if tags:
        where_clause["tag1_in"] = list(tags)
    if not includeRevoked:
        where_clause["isRevoked"] = False

    if capabilities:
        file_where["capability_in"] = list(capabilities)
    if skills:
        file_where["skill_in"] = list(skills)
    if tasks:
        file_where["task_in"] = list(tasks)
    if names:
        file_where["name_in"] = list(names)
    if file_where:
        where_clause["feedbackFile_"] = file_where

    return where_clause


def average_scores(feedbacks: List[Dict[str, Any]]) -> Dict[AgentId, float]:
    """Average non-null feedback scores per agent id."""
    totals: Dict[AgentId, List[float]] = {}
    for feedback in feedbacks:
        agent = feedback.get("agent") or {}
        agent_id = agent.get("id") if isinstance(agent, dict) else None
        score = feedback.get("score")
        if agent_id is None or score is None:
            continue
        totals.setdefault(agent_id, []).append(float(score))
    return {agent_id: sum(scores) / len(scores) for agent_id, scores in totals.items()}


class SubgraphClient:
    """Client for querying the agent registry subgraph."""

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the subgraph client.

        Args:
            url: GraphQL endpoint of the subgraph
            timeout: Request timeout in seconds (default: 10)
            session: Optional requests session (a new one is created otherwise)
        """
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Execute a GraphQL query and return its `data` payload."""
        payload = {"query": query, "variables": variables or {}}
        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"Subgraph request to {self.url} failed: HTTP {status}")
            raise SubgraphQueryError(f"Subgraph request failed: HTTP {status}", status=status) from e
        except requests.exceptions.RequestException as e:
            logger.warning(f"Subgraph request to {self.url} failed: {e}")
            raise SubgraphQueryError(f"Subgraph request failed: {e}") from e
        except ValueError as e:
            raise SubgraphQueryError(f"Subgraph returned invalid JSON: {e}") from e

        errors = result.get("errors")
        if errors:
            messages = "; ".join(str(err.get("message", err)) if isinstance(err, dict) else str(err) for err in errors)
            raise SubgraphQueryError(f"Subgraph query error: {messages}")

        return result.get("data") or {}

    def get_agent_by_id(self, agent_id: AgentId) -> Optional[AgentSummary]:
        """Fetch one agent by id. Returns None if the subgraph does not know it."""
        data = self.query(GET_AGENT_QUERY, {"id": agent_id})
        agent = data.get("agent")
        if agent is None:
            return None
        return AgentSummary.from_subgraph(agent)

    def get_agents(
        self,
        where: Optional[Dict[str, Any]] = None,
        first: int = 100,
        skip: int = 0,
        order_by: str = DEFAULT_ORDER_BY,
        order_direction: str = DEFAULT_ORDER_DIRECTION,
    ) -> List[Dict[str, Any]]:
        """Raw agent records matching an Agent_filter."""
        variables = {
            "where": where,
            "first": first,
            "skip": skip,
            "orderBy": order_by,
            "orderDirection": order_direction,
        }
        logger.debug(f"Querying agents: {variables}")
        data = self.query(SEARCH_AGENTS_QUERY, variables)
        return data.get("agents") or []

    def search_agents(self, params: SearchParams, first: int, skip: int) -> List[AgentSummary]:
        """Search agents, pushing every criterion the subgraph understands."""
        agents = self.get_agents(where=build_agent_where(params), first=first, skip=skip)
        return [AgentSummary.from_subgraph(agent) for agent in agents]

    def get_feedback_scores(self, where: Dict[str, Any]) -> Dict[AgentId, float]:
        """Average feedback score per agent for the feedback matching `where`.

        Feedback is paged by id (`id_gt` the last id seen) until a short page comes
        back, so averages cover every matching row.
        """
        feedbacks: List[Dict[str, Any]] = []
        last_id: Optional[str] = None
        while True:
            page_where = dict(where)
            if last_id is not None:
                page_where["id_gt"] = last_id
            data = self.query(
                SEARCH_FEEDBACK_SCORES_QUERY,
                {"where": page_where, "first": FEEDBACK_PAGE_SIZE},
            )
            page = data.get("feedbacks") or []
            feedbacks.extend(page)
            if len(page) < FEEDBACK_PAGE_SIZE:
                break
            last_id = page[-1].get("id")
            if last_id is None:
                logger.warning("Feedback page without ids; stopping after a partial scan")
                break
        logger.debug(f"Aggregated {len(feedbacks)} feedback rows")
        return average_scores(feedbacks)

    def search_agents_by_reputation(
        self,
        agents: Optional[List[AgentId]] = None,
        tags: Optional[List[str]] = None,
        reviewers: Optional[List[Address]] = None,
        capabilities: Optional[List[str]] = None,
        skills: Optional[List[str]] = None,
        tasks: Optional[List[str]] = None,
        names: Optional[List[str]] = None,
        minAverageScore: Optional[float] = None,
        includeRevoked: bool = False,
        first: int = 50,
        skip: int = 0,
        order_by: str = DEFAULT_ORDER_BY,
        order_direction: str = DEFAULT_ORDER_DIRECTION,
    ) -> List[Dict[str, Any]]:
        """Agents whose feedback matches the criteria, with `averageScore` attached.

        When any feedback criterion (or a minimum score) is given, matching feedback
        is aggregated first and only agents with matching feedback are returned.
        Otherwise the page is drawn from agents with at least one feedback and
        averaged afterwards.
        """
        feedback_filtered = any([tags, reviewers, capabilities, skills, tasks, names]) or minAverageScore is not None

        scores: Optional[Dict[AgentId, float]] = None
        where: Dict[str, Any] = {}
        if feedback_filtered:
            scores = self.get_feedback_scores(build_feedback_where(
                agents=agents,
                tags=tags,
                reviewers=reviewers,
                capabilities=capabilities,
                skills=skills,
                tasks=tasks,
                names=names,
                includeRevoked=includeRevoked,
            ))
            if minAverageScore is not None:
                scores = {agent_id: avg for agent_id, avg in scores.items() if avg >= minAverageScore}
            if not scores:
                return []
            where["id_in"] = sorted(scores)
        else:
            if agents:
                where["id_in"] = list(agents)
            where["totalFeedback_gt"] = 0

        records = self.get_agents(
            where=where or None,
            first=first,
            skip=skip,
            order_by=order_by,
            order_direction=order_direction,
        )

        if scores is None and records:
            scores = self.get_feedback_scores(build_feedback_where(
                agents=[record.get("id") for record in records],
                includeRevoked=includeRevoked,
            ))

        for record in records:
            record["averageScore"] = (scores or {}).get(record.get("id"))
        return records
