"""
Fixtures for ref resolution tests.

GitHubDouble stands in for api.github.com: each expected request is
registered up front, every registered reply is served once, and a request
without a registered reply fails the way a refused connection would.
Tests fail if any registered reply was never requested.
"""

from __future__ import annotations

from collections import defaultdict, deque
from typing import Any

import httpx
import pytest

from src.pin_action.resolution import ActionReference, GitHubLookupClient, RefResolver

FIXED_RESET_TIME = "2025-04-09 15:08:44"


class GitHubDouble:
    """Scripted httpx transport for the GitHub REST API."""

    def __init__(self) -> None:
        self._replies: dict[str, deque[httpx.Response]] = defaultdict(deque)
        self.requests: list[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def reply(
        self,
        path: str,
        status_code: int,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Register one reply for GET <path> (path as sent, percent-encoded)."""
        if json is not None:
            response = httpx.Response(status_code, json=json, headers=headers)
        else:
            response = httpx.Response(status_code, text=text or "", headers=headers)
        self._replies[path].append(response)

    def pending(self) -> list[str]:
        """Registered paths whose replies were never requested."""
        return [path for path, replies in self._replies.items() if replies]

    def requested_paths(self) -> list[str]:
        return [request.url.raw_path.decode() for request in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.raw_path.decode()
        replies = self._replies.get(path)
        if request.method != "GET" or not replies:
            raise httpx.ConnectError(f"No match for request {request.method} {path}", request=request)
        return replies.popleft()

    # Helpers mirroring the three GitHub endpoints

    def ref_not_found(self, action: ActionReference, ref_path: str) -> None:
        self.reply(_ref_url(action, ref_path), 404)

    def ref_found(
        self,
        action: ActionReference,
        ref_path: str,
        sha: str,
        object_type: str = "commit",
    ) -> None:
        self.reply(
            _ref_url(action, ref_path),
            200,
            json={"ref": f"refs/{ref_path}", "object": {"sha": sha, "type": object_type}},
        )

    def tag_found(self, action: ActionReference, tag_sha: str, commit_sha: str) -> None:
        self.reply(
            f"/repos/{action.owner}/{action.repo}/git/tags/{tag_sha}",
            200,
            json={"object": {"sha": commit_sha, "type": "commit"}},
        )

    def commit_found(self, action: ActionReference, commit_sha: str) -> None:
        self.reply(_commit_url(action, commit_sha), 200, json={"sha": commit_sha})

    def commit_not_found(self, action: ActionReference, ref: str) -> None:
        self.reply(_commit_url(action, ref), 404)

    def commit_rate_limited(
        self,
        action: ActionReference,
        ref: str,
        detail: str,
        reset: str = "1744211324",
    ) -> None:
        self.reply(
            _commit_url(action, ref),
            429,
            text=detail,
            headers={"x-ratelimit-reset": reset},
        )


def _ref_url(action: ActionReference, ref_path: str) -> str:
    return f"/repos/{action.owner}/{action.repo}/git/ref/{ref_path.replace('/', '%2F')}"


def _commit_url(action: ActionReference, ref: str) -> str:
    return f"/repos/{action.owner}/{action.repo}/commits/{ref}"


@pytest.fixture
def github():
    """GitHub API double; fails the test if a registered reply went unused."""
    double = GitHubDouble()
    yield double
    assert not double.pending(), f"Not all GitHub replies were used: {double.pending()}"


@pytest.fixture
def action() -> ActionReference:
    return ActionReference(
        owner="nexmo",
        repo="github-actions",
        path="",
        pinned_version="master",
        current_version="master",
    )


@pytest.fixture
async def resolver(github: GitHubDouble):
    """Resolver talking to the GitHub double, with a fixed reset-time format."""
    resolver = RefResolver(
        client=GitHubLookupClient(transport=github.transport),
        reset_formatter=lambda reset_at: FIXED_RESET_TIME,
        owns_client=True,
    )
    yield resolver
    await resolver.close()
