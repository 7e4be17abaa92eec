"""
Core data models for Agent0 discovery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from .validation import normalize_address, normalize_addresses


# Type aliases
AgentId = str  # "chainId:tokenId" (e.g., "8453:1234")
ChainId = int
Address = str  # 0x-hex
URI = str  # https://... or ipfs://...

logger = logging.getLogger(__name__)


def _parse_chain_id(value: Any) -> ChainId:
    """Parse a chain id from the subgraph (string or int).

    Only a whole base-10 integer is accepted (surrounding whitespace allowed).
    Anything else, including "1.5" or "12abc", becomes 0 rather than its
    leading digits.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(str(value).strip(), 10)
    except (TypeError, ValueError):
        logger.debug(f"Unparseable chainId {value!r}, using 0")
        return 0


def _string_list(value: Any) -> List[str]:
    if not value:
        return []
    return [item for item in value if isinstance(item, str)]


@dataclass
class AgentSummary:
    """Summary information for agent discovery and search."""
    chainId: ChainId
    agentId: AgentId
    name: str
    image: Optional[URI]
    description: str
    owners: List[Address]
    operators: List[Address]
    mcp: bool
    a2a: bool
    ens: Optional[str]
    did: Optional[str]
    walletAddress: Optional[Address]
    supportedTrusts: List[str]  # normalized string keys
    a2aSkills: List[str]
    mcpTools: List[str]
    mcpPrompts: List[str]
    mcpResources: List[str]
    active: bool
    x402support: bool = False
    extras: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Keep address-like fields in normalized form."""
        self.owners = normalize_addresses(self.owners)
        self.operators = normalize_addresses(self.operators)
        self.ens = normalize_address(self.ens)
        self.walletAddress = normalize_address(self.walletAddress)

    @classmethod
    def from_subgraph(cls, data: Dict[str, Any]) -> AgentSummary:
        """Flatten a subgraph agent record (with nested registrationFile) into a summary.

        Capability flags come from endpoint presence, missing lists become empty,
        missing or null status flags become False and a null averageScore is left out
        of extras.
        """
        reg_file = data.get('registrationFile') or {}
        if not isinstance(reg_file, dict):
            reg_file = {}

        owner = data.get('owner')
        extras: Dict[str, Any] = {}
        if data.get('averageScore') is not None:
            extras['averageScore'] = data['averageScore']

        return cls(
            chainId=_parse_chain_id(data.get('chainId')),
            agentId=data.get('id') or '',
            name=reg_file.get('name') or '',
            image=reg_file.get('image') or None,
            description=reg_file.get('description') or '',
            owners=[owner] if owner else [],
            operators=data.get('operators') or [],
            mcp=bool(reg_file.get('mcpEndpoint')),
            a2a=bool(reg_file.get('a2aEndpoint')),
            ens=reg_file.get('ens') or None,
            did=reg_file.get('did') or None,
            walletAddress=reg_file.get('agentWallet') or None,
            supportedTrusts=_string_list(reg_file.get('supportedTrusts')),
            a2aSkills=_string_list(reg_file.get('a2aSkills')),
            mcpTools=_string_list(reg_file.get('mcpTools')),
            mcpPrompts=_string_list(reg_file.get('mcpPrompts')),
            mcpResources=_string_list(reg_file.get('mcpResources')),
            active=bool(reg_file.get('active') or False),
            x402support=bool(reg_file.get('x402support') or False),
            extras=extras,
        )


@dataclass
class SearchParams:
    """Parameters for agent search. None means no constraint."""
    chains: Optional[List[ChainId]] = None
    name: Optional[str] = None  # case-insensitive substring
    description: Optional[str] = None  # evaluated by the source only
    owners: Optional[List[Address]] = None  # evaluated by the source only
    operators: Optional[List[Address]] = None  # evaluated by the source only
    mcp: Optional[bool] = None
    a2a: Optional[bool] = None
    ens: Optional[str] = None  # exact, normalized
    did: Optional[str] = None  # exact
    walletAddress: Optional[Address] = None
    supportedTrust: Optional[List[str]] = None
    a2aSkills: Optional[List[str]] = None
    mcpTools: Optional[List[str]] = None
    mcpPrompts: Optional[List[str]] = None
    mcpResources: Optional[List[str]] = None
    active: Optional[bool] = None
    x402support: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SearchParams:
        """Create from dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown search parameters: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, filtering out None values."""
        return {k: v for k, v in self.__dict__.items() if v is not None}
