"""
Exceptions raised by the discovery layer.

All of them derive from ValueError so callers written against the plain
ValueError convention keep working.
"""

from __future__ import annotations

from typing import Optional


class Agent0DiscoveryError(ValueError):
    """Base class for discovery errors."""


class ConfigurationError(Agent0DiscoveryError):
    """No indexed source is configured for the requested operation."""


class NotFoundError(Agent0DiscoveryError):
    """An agent id lookup found nothing."""

    def __init__(self, message: str, agent_id: Optional[str] = None):
        super().__init__(message)
        self.agent_id = agent_id


class InvalidCursorError(Agent0DiscoveryError):
    """A pagination cursor is not a non-negative decimal integer."""

    def __init__(self, cursor: str):
        super().__init__(f"Invalid cursor {cursor!r}: expected a non-negative decimal offset")
        self.cursor = cursor


class SearchError(Agent0DiscoveryError):
    """Reputation search failed in the indexed source."""


class SubgraphQueryError(Agent0DiscoveryError):
    """The subgraph endpoint returned an HTTP or GraphQL error."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
