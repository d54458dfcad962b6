"""Tests for resolution error messages."""

from __future__ import annotations

from datetime import datetime

from src.pin_action.exceptions import RateLimitError, RefNotFoundError, ResolutionError
from src.pin_action.resolution import ActionReference, RateLimited
from src.pin_action.resolution.errors import (
    format_reset_time,
    not_found_error,
    rate_limit_error,
)


class TestErrorMessages:
    """Test suite for the resolution error composer."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.action = ActionReference(
            owner="nexmo",
            repo="github-actions",
            pinned_version="master",
            current_version="master",
        )

    def test_not_found_message(self) -> None:
        """Not-found text names the reference and hints at GITHUB_TOKEN."""
        error = not_found_error(self.action)

        assert isinstance(error, RefNotFoundError)
        assert isinstance(error, ResolutionError)
        headline, hint = str(error).split("\n")
        assert headline == "Unable to find SHA for nexmo/github-actions@master"
        assert "GITHUB_TOKEN" in hint
        assert error.code == "REF_NOT_FOUND"

    def test_rate_limit_message_uses_formatter(self) -> None:
        """The reset time is rendered through the injected formatter."""
        outcome = RateLimited(detail="API rate limit exceeded for 1.2.3.4.", reset_at=1744211324)

        error = rate_limit_error(self.action, outcome, reset_formatter=lambda ts: f"<{ts}>")

        assert isinstance(error, RateLimitError)
        assert str(error) == (
            "Unable to find SHA for nexmo/github-actions@master\n"
            "API rate limit exceeded for 1.2.3.4. Limit resets at: <1744211324>"
        )
        assert error.detail == outcome.detail
        assert error.reset_at == 1744211324

    def test_rate_limit_message_default_formatter(self) -> None:
        """By default the reset time is the locale rendering of local time."""
        outcome = RateLimited(detail="slow down", reset_at=1744211324)

        error = rate_limit_error(self.action, outcome)

        expected = datetime.fromtimestamp(1744211324).strftime("%c")
        assert str(error).endswith(f"slow down Limit resets at: {expected}")

    def test_rate_limit_without_reset(self) -> None:
        """A missing reset time is reported as unknown."""
        error = rate_limit_error(self.action, RateLimited(detail="slow down", reset_at=None))

        assert str(error).endswith("Limit resets at: unknown")

    def test_rate_limit_with_unrepresentable_reset(self) -> None:
        """A reset time the clock cannot represent is reported as unknown."""
        outcome = RateLimited(detail="slow down", reset_at=99999999999999999)

        error = rate_limit_error(self.action, outcome)

        assert isinstance(error, RateLimitError)
        assert str(error).endswith("slow down Limit resets at: unknown")
        assert error.reset_at == 99999999999999999

    def test_rate_limit_with_failing_formatter(self) -> None:
        """Formatter range errors do not escape the composer."""

        def overflowing(reset_at: int) -> str:
            raise OverflowError("timestamp out of range for platform time_t")

        error = rate_limit_error(
            self.action,
            RateLimited(detail="slow down", reset_at=1744211324),
            reset_formatter=overflowing,
        )

        assert str(error).endswith("Limit resets at: unknown")

    def test_format_reset_time_is_local_time(self) -> None:
        """format_reset_time renders the timestamp in local time."""
        rendered = format_reset_time(0)

        assert rendered == datetime.fromtimestamp(0).strftime("%c")
