"""
Resolution Error Messages

Renders the user-facing text for failed resolutions.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from src.pin_action.exceptions import RateLimitError, RefNotFoundError
from src.pin_action.resolution.models import ActionReference, RateLimited

logger = logging.getLogger(__name__)

ResetFormatter = Callable[[int], str]

TOKEN_HINT = (
    "Private repos require you to set the GITHUB_TOKEN environment variable "
    "to fetch the latest SHA"
)


def format_reset_time(reset_at: int) -> str:
    """Render epoch seconds as a locale-formatted local date-time."""
    return datetime.fromtimestamp(reset_at).strftime("%c")


def headline(action: ActionReference) -> str:
    return f"Unable to find SHA for {action.display_name}"


def not_found_error(action: ActionReference) -> RefNotFoundError:
    """Error for a pinned version that matched no tag, branch or commit."""
    return RefNotFoundError(f"{headline(action)}\n{TOKEN_HINT}")


def rate_limit_error(
    action: ActionReference,
    outcome: RateLimited,
    reset_formatter: ResetFormatter = format_reset_time,
) -> RateLimitError:
    """Error for a lookup rejected by the rate limiter."""
    resets = "unknown"
    if outcome.reset_at is not None:
        try:
            resets = reset_formatter(outcome.reset_at)
        except (OverflowError, OSError, ValueError) as e:
            # Timestamp outside what the platform clock can represent
            logger.warning(f"Cannot format rate limit reset {outcome.reset_at}: {e}")
    message = f"{headline(action)}\n{outcome.detail} Limit resets at: {resets}"
    return RateLimitError(message, detail=outcome.detail, reset_at=outcome.reset_at)
