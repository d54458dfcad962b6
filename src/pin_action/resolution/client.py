"""
GitHub Lookup Client

Implements the LookupClient protocol against the GitHub REST API and maps
response statuses to lookup outcomes.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from src import __version__
from src.common.logging import get_sanitized_logger
from src.pin_action.config import GITHUB_API_URL, PinActionConfig
from src.pin_action.exceptions import GitHubApiError, MalformedResponseError
from src.pin_action.resolution.models import (
    CommitPayload,
    ObjectType,
    RateLimited,
    RefObject,
    RefPayload,
    TagPayload,
)

logger = get_sanitized_logger(__name__)

RATE_LIMIT_RESET_HEADER = "x-ratelimit-reset"
GITHUB_API_VERSION = "2022-11-28"


class GitHubLookupClient:
    """
    Read-only GitHub client used by the ref resolver.

    Status handling for every lookup:
    - 200: parsed payload
    - 404: None (a normal outcome, the resolver moves to the next lookup)
    - 429: RateLimited with the response body and reset time
    - anything else: GitHubApiError
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        token: str | None = None,
        timeout_seconds: float = 10.0,
        user_agent: str = f"pin-action/{__version__}",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the lookup client.

        Args:
            base_url: Base URL of the GitHub API
            token: Optional token, sent as a Bearer credential
            timeout_seconds: Timeout for each request
            user_agent: User-Agent header value
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._transport = transport

        # HTTP client (created lazily)
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: PinActionConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> GitHubLookupClient:
        return cls(
            base_url=config.github_api_url,
            token=config.github_token,
            timeout_seconds=config.timeout_seconds,
            user_agent=config.user_agent,
            transport=transport,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
                "User-Agent": self._user_agent,
            }
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubLookupClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def get_ref(
        self,
        owner: str,
        repo: str,
        ref_path: str,
    ) -> RefObject | RateLimited | None:
        """Look up `tags/<name>` or `heads/<name>`."""
        # The whole ref is a single path segment: tags/v1 -> tags%2Fv1
        url = f"/repos/{owner}/{repo}/git/ref/{quote(ref_path, safe='')}"
        outcome = await self._fetch(url, RefPayload)
        if not isinstance(outcome, RefPayload):
            return outcome

        try:
            object_type = ObjectType(outcome.git_object.type)
        except ValueError:
            raise MalformedResponseError(
                url, f"ref points at unsupported object type '{outcome.git_object.type}'"
            ) from None

        return RefObject(
            ref_name=outcome.ref or f"refs/{ref_path}",
            object_sha=outcome.git_object.sha,
            object_type=object_type,
        )

    async def get_tag(
        self,
        owner: str,
        repo: str,
        tag_sha: str,
    ) -> str | RateLimited | None:
        """Dereference an annotated tag to the SHA it points at."""
        url = f"/repos/{owner}/{repo}/git/tags/{tag_sha}"
        outcome = await self._fetch(url, TagPayload)
        if not isinstance(outcome, TagPayload):
            return outcome
        return outcome.git_object.sha

    async def get_commit(
        self,
        owner: str,
        repo: str,
        sha_or_ref: str,
    ) -> str | RateLimited | None:
        """Confirm a commit exists and return its canonical SHA."""
        url = f"/repos/{owner}/{repo}/commits/{quote(sha_or_ref, safe='')}"
        outcome = await self._fetch(url, CommitPayload)
        if not isinstance(outcome, CommitPayload):
            return outcome
        return outcome.sha

    async def _fetch(
        self,
        url: str,
        payload_type: type[BaseModel],
    ) -> BaseModel | RateLimited | None:
        """Issue a GET and classify the response."""
        client = await self._get_client()
        logger.debug(f"GET {url}")
        response = await client.get(url)
        logger.debug(f"GET {url} -> {response.status_code}")

        if response.status_code == 404:
            return None
        if response.status_code == 429:
            return RateLimited(
                detail=response.text,
                reset_at=_parse_reset(response.headers.get(RATE_LIMIT_RESET_HEADER)),
            )
        if not response.is_success:
            raise GitHubApiError(response.status_code, url, response.text)

        try:
            return payload_type.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError(url, str(e)) from e


def _parse_reset(value: str | None) -> int | None:
    """Parse the reset header (epoch seconds)."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logger.warning(f"Ignoring unparseable {RATE_LIMIT_RESET_HEADER} header: {value!r}")
        return None
