"""
Ref Resolver Factory

Creates a resolver wired to GitHub from configuration.
"""

from __future__ import annotations

import logging

import httpx

from src.pin_action.config import PinActionConfig, load_config
from src.pin_action.resolution.client import GitHubLookupClient
from src.pin_action.resolution.resolver import RefResolver

logger = logging.getLogger(__name__)

# Parent of every logger in the pin_action package
PACKAGE_LOGGER = "src.pin_action"


def create_ref_resolver(
    config: PinActionConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RefResolver:
    """
    Create a ref resolver based on configuration.

    Args:
        config: Configuration (loaded from the environment if omitted)
        transport: Optional httpx transport for the GitHub client

    Returns:
        RefResolver that owns (and closes) its GitHub client
    """
    config = config or load_config()
    logging.getLogger(PACKAGE_LOGGER).setLevel(config.log_level)

    if config.github_token:
        logger.info("Using authenticated GitHub API requests")
    else:
        logger.info("GITHUB_TOKEN not set, using unauthenticated GitHub API requests")

    return RefResolver(
        client=GitHubLookupClient.from_config(config, transport=transport),
        use_cache=config.cache_enabled,
        owns_client=True,
    )
