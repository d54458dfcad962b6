"""
pin-action Exception Hierarchy

All pin-action specific exceptions inherit from PinActionError.

Usage:
    from src.pin_action.exceptions import ResolutionError

    try:
        sha = await resolver.resolve(action)
    except ResolutionError as e:
        print(e)  # user-facing text, safe to show as-is
"""

from __future__ import annotations


class PinActionError(Exception):
    """
    Base exception for all pin-action errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code for programmatic handling
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Resolution Errors
# =============================================================================


class ResolutionError(PinActionError):
    """
    A reference could not be resolved to a commit SHA.

    The message is the complete user-facing text; callers that need to tell
    failures apart can match on the subclass or on the text.
    """

    pass


class RefNotFoundError(ResolutionError):
    """No tag, branch or commit matched the pinned version."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="REF_NOT_FOUND")


class RateLimitError(ResolutionError):
    """GitHub refused a lookup because the API rate limit was exhausted."""

    def __init__(self, message: str, detail: str, reset_at: int | None) -> None:
        super().__init__(message, code="RATE_LIMITED")
        self.detail = detail
        self.reset_at = reset_at


# =============================================================================
# Transport Errors
# =============================================================================


class GitHubApiError(PinActionError):
    """GitHub answered with a status the resolver does not classify."""

    def __init__(self, status_code: int, url: str, body: str = "") -> None:
        super().__init__(
            f"GitHub API request failed with status {status_code}: {url}",
            code="GITHUB_API_ERROR",
        )
        self.status_code = status_code
        self.url = url
        self.body = body


class MalformedResponseError(PinActionError):
    """A successful response did not have the expected shape."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            f"Unexpected response from {url}: {reason}",
            code="MALFORMED_RESPONSE",
        )
        self.url = url
        self.reason = reason
