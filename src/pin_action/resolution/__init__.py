"""
Ref Resolution

Resolves GitHub Action version specifiers (tags, branches, commit SHAs)
to commit SHAs.
"""

from src.pin_action.resolution.cache import ResolutionCache
from src.pin_action.resolution.client import GitHubLookupClient
from src.pin_action.resolution.factory import create_ref_resolver
from src.pin_action.resolution.models import (
    ActionReference,
    ObjectType,
    RateLimited,
    RefObject,
    ResolutionKey,
)
from src.pin_action.resolution.protocols import LookupClient
from src.pin_action.resolution.resolver import RefResolver

__all__ = [
    # Public API
    "ActionReference",
    "RefResolver",
    "create_ref_resolver",  # Factory (preferred way to get a resolver)
    # Building blocks
    "GitHubLookupClient",
    "LookupClient",  # Protocol
    "ObjectType",
    "RateLimited",
    "RefObject",
    "ResolutionCache",
    "ResolutionKey",
]
