"""
Ref Lookup Protocols

Defines the interface the resolver needs from a GitHub transport.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from src.pin_action.resolution.models import RateLimited, RefObject


@runtime_checkable
class LookupClient(Protocol):
    """
    Protocol for the three read-only GitHub lookups.

    Each method returns None when GitHub answers 404 and a RateLimited
    outcome when it answers 429. Any other failure is raised.
    """

    async def get_ref(
        self,
        owner: str,
        repo: str,
        ref_path: str,
    ) -> RefObject | RateLimited | None:
        """
        Look up a ref.

        Args:
            owner: Repository owner
            repo: Repository name
            ref_path: "tags/<name>" or "heads/<name>"

        Returns:
            The ref's target object, RateLimited, or None if missing
        """
        ...

    async def get_tag(
        self,
        owner: str,
        repo: str,
        tag_sha: str,
    ) -> str | RateLimited | None:
        """
        Dereference an annotated tag object.

        Returns:
            SHA of the object the tag points at, RateLimited, or None
        """
        ...

    async def get_commit(
        self,
        owner: str,
        repo: str,
        sha_or_ref: str,
    ) -> str | RateLimited | None:
        """
        Confirm a commit exists.

        Returns:
            Canonical commit SHA, RateLimited, or None
        """
        ...
