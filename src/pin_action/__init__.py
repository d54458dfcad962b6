"""
pin-action

Resolves the version pinned by a GitHub Action reference to an immutable
commit SHA.

Usage:
    from src.pin_action import ActionReference, create_ref_resolver

    async with create_ref_resolver() as resolver:
        sha = await resolver.resolve(
            ActionReference(owner="actions", repo="checkout", pinned_version="v4")
        )
"""

from src.pin_action.config import PinActionConfig, load_config
from src.pin_action.exceptions import (
    GitHubApiError,
    MalformedResponseError,
    PinActionError,
    RateLimitError,
    RefNotFoundError,
    ResolutionError,
)
from src.pin_action.resolution import ActionReference, RefResolver, create_ref_resolver

__all__ = [
    "ActionReference",
    "GitHubApiError",
    "MalformedResponseError",
    "PinActionConfig",
    "PinActionError",
    "RateLimitError",
    "RefNotFoundError",
    "RefResolver",
    "ResolutionError",
    "create_ref_resolver",
    "load_config",
]
