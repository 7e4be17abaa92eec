"""
Defaults and subgraph endpoint resolution.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_ORDER_BY = "createdAt"
DEFAULT_ORDER_DIRECTION = "desc"
DEFAULT_SORT = f"{DEFAULT_ORDER_BY}:{DEFAULT_ORDER_DIRECTION}"
DEFAULT_TIMEOUT = 10  # seconds, per subgraph request

SUBGRAPH_URL_ENV_PREFIX = "SUBGRAPH_URL_"

# Default subgraph endpoints per chain. None are bundled; register deployments here,
# pass overrides, or set SUBGRAPH_URL_<chainId>.
DEFAULT_SUBGRAPH_URLS: Dict[int, str] = {}


def resolve_subgraph_url(
    chain_id: int,
    overrides: Optional[Dict[int, str]] = None,
) -> Optional[str]:
    """
    Get subgraph URL for a specific chain.

    Priority order:
    1. Constructor-provided overrides
    2. Environment variable SUBGRAPH_URL_<chainId>
    3. DEFAULT_SUBGRAPH_URLS
    4. None (not configured)
    """
    if overrides and chain_id in overrides:
        return overrides[chain_id]

    env_key = f"{SUBGRAPH_URL_ENV_PREFIX}{chain_id}"
    env_url = os.environ.get(env_key)
    if env_url:
        logger.info(f"Using subgraph URL from environment: {env_key}={env_url}")
        return env_url

    return DEFAULT_SUBGRAPH_URLS.get(chain_id)
