"""
Ref Resolver

Resolves the version pinned in an action reference (tag, branch or commit
SHA) to the commit SHA it currently points at.

Lookup order, stopping at the first hit:
1. tags/<version>  (annotated tags are dereferenced to their commit)
2. heads/<version>
3. commits/<version>

A rate-limited response stops the chain immediately. Results are shared
through a ResolutionCache so each distinct reference is looked up once.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Iterable

from src.pin_action.resolution.cache import ResolutionCache
from src.pin_action.resolution.client import GitHubLookupClient
from src.pin_action.resolution.errors import (
    ResetFormatter,
    format_reset_time,
    not_found_error,
    rate_limit_error,
)
from src.pin_action.resolution.models import ActionReference, RateLimited, RefObject
from src.pin_action.resolution.protocols import LookupClient

logger = logging.getLogger(__name__)


class LookupStage(str, Enum):
    """Stages of the lookup chain, in the order they are tried."""

    TAG_REF = "tags"
    BRANCH_REF = "heads"
    COMMIT = "commit"


REF_STAGES = (LookupStage.TAG_REF, LookupStage.BRANCH_REF)


class RefResolver:
    """
    Resolves action references to commit SHAs.

    Failures are raised as ResolutionError subclasses whose text is meant
    for the user (RefNotFoundError, RateLimitError). Unexpected API
    statuses and network errors propagate unchanged.
    """

    def __init__(
        self,
        client: LookupClient | None = None,
        cache: ResolutionCache[str] | None = None,
        use_cache: bool = True,
        reset_formatter: ResetFormatter = format_reset_time,
        owns_client: bool | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            client: Lookup client (defaults to an unauthenticated GitHubLookupClient)
            cache: Resolution cache to share results through
            use_cache: When False, every call runs its own lookup chain
            reset_formatter: Renders the rate limit reset time in error text
            owns_client: Close the client in close(); defaults to True only
                when the resolver creates the client itself
        """
        self._owns_client = client is None if owns_client is None else owns_client
        self._client: LookupClient = client if client is not None else GitHubLookupClient()
        self._cache: ResolutionCache[str] = cache if cache is not None else ResolutionCache()
        self._use_cache = use_cache
        self._reset_formatter = reset_formatter

    @property
    def cache(self) -> ResolutionCache[str]:
        return self._cache

    async def resolve(self, action: ActionReference) -> str:
        """
        Resolve an action reference to a commit SHA.

        Args:
            action: Reference whose pinned_version should be resolved

        Returns:
            The commit SHA

        Raises:
            RefNotFoundError: No tag, branch or commit matched
            RateLimitError: GitHub rate limited one of the lookups
            GitHubApiError: GitHub answered with an unexpected status
        """
        if not self._use_cache:
            return await self._lookup(action)

        task = self._cache.get_or_create(
            action.resolution_key,
            lambda: self._lookup(action),
        )
        # A cancelled caller must not cancel the chain other callers wait on
        return await asyncio.shield(task)

    async def resolve_many(self, actions: Iterable[ActionReference]) -> list[str]:
        """Resolve several references concurrently, preserving input order."""
        return list(await asyncio.gather(*(self.resolve(action) for action in actions)))

    def clear_cache(self) -> None:
        """Forget every cached resolution."""
        self._cache.clear()

    async def close(self) -> None:
        """Close the lookup client if this resolver owns it."""
        close = getattr(self._client, "close", None)
        if self._owns_client and close is not None:
            await close()

    async def __aenter__(self) -> RefResolver:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _lookup(self, action: ActionReference) -> str:
        """Run the lookup chain for one reference."""
        owner, repo, version = action.owner, action.repo, action.pinned_version

        for stage in REF_STAGES:
            ref = await self._client.get_ref(owner, repo, f"{stage.value}/{version}")
            if ref is None:
                logger.debug(f"{action.display_name}: no {stage.value} ref")
                continue
            if isinstance(ref, RateLimited):
                raise rate_limit_error(action, ref, self._reset_formatter)

            sha = await self._sha_for_ref(action, ref)
            logger.debug(f"{action.display_name}: resolved via {ref.ref_name} to {sha}")
            return sha

        commit = await self._client.get_commit(owner, repo, version)
        if commit is None:
            logger.debug(f"{action.display_name}: no matching commit")
            raise not_found_error(action)
        if isinstance(commit, RateLimited):
            raise rate_limit_error(action, commit, self._reset_formatter)

        logger.debug(f"{action.display_name}: resolved as {LookupStage.COMMIT.value} {commit}")
        return commit

    async def _sha_for_ref(self, action: ActionReference, ref: RefObject) -> str:
        """Commit SHA a ref points at, dereferencing annotated tags."""
        if not ref.is_annotated_tag:
            return ref.object_sha

        target = await self._client.get_tag(action.owner, action.repo, ref.object_sha)
        if target is None:
            # Ref exists but the tag object behind it does not
            raise not_found_error(action)
        if isinstance(target, RateLimited):
            raise rate_limit_error(action, target, self._reset_formatter)
        return target
