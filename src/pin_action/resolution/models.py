"""
Ref Resolution Models

Data classes for action references, lookup outcomes and the GitHub
response payloads the resolver consumes.
"""

from __future__ import annotations

from dataclasses import KW_ONLY, dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ObjectType(str, Enum):
    """Git object types a ref can point at."""

    COMMIT = "commit"
    TAG = "tag"


@dataclass(frozen=True)
class ResolutionKey:
    """Identity used to deduplicate resolutions and index the cache."""

    owner: str
    repo: str
    path: str
    pinned_version: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}/{self.path}@{self.pinned_version}"


@dataclass(frozen=True)
class ActionReference:
    """
    A `uses:` reference to a GitHub Action.

    `pinned_version` is what gets resolved; `path` and `current_version` are
    carried along for the caller. Everything after owner and repo is
    keyword-only.
    """

    owner: str
    repo: str
    _: KW_ONLY
    pinned_version: str
    path: str = ""
    current_version: str = ""

    def __post_init__(self) -> None:
        if not self.pinned_version:
            raise ValueError(f"{self.owner}/{self.repo}: pinned_version must not be empty")

    @property
    def resolution_key(self) -> ResolutionKey:
        return ResolutionKey(
            owner=self.owner,
            repo=self.repo,
            path=self.path,
            pinned_version=self.pinned_version,
        )

    @property
    def display_name(self) -> str:
        """`owner/repo@version`, as used in error messages."""
        return f"{self.owner}/{self.repo}@{self.pinned_version}"


@dataclass(frozen=True)
class RefObject:
    """Result of a ref lookup."""

    ref_name: str
    object_sha: str
    object_type: ObjectType

    @property
    def is_annotated_tag(self) -> bool:
        return self.object_type == ObjectType.TAG


@dataclass(frozen=True)
class RateLimited:
    """A lookup was rejected with 429."""

    detail: str  # Response body, echoed verbatim
    reset_at: int | None  # Epoch seconds from x-ratelimit-reset


# =============================================================================
# GitHub response payloads
# =============================================================================


class GitObjectPayload(BaseModel):
    """`object` member of ref and tag responses."""

    model_config = ConfigDict(extra="ignore")

    sha: str = Field(min_length=1)
    type: str


class RefPayload(BaseModel):
    """Response of GET /repos/{owner}/{repo}/git/ref/{ref}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    ref: str = ""
    git_object: GitObjectPayload = Field(alias="object")


class TagPayload(BaseModel):
    """Response of GET /repos/{owner}/{repo}/git/tags/{sha}."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    git_object: GitObjectPayload = Field(alias="object")


class CommitPayload(BaseModel):
    """Response of GET /repos/{owner}/{repo}/commits/{ref}."""

    model_config = ConfigDict(extra="ignore")

    sha: str = Field(min_length=1)
