"""
Log Sanitization

Redacts GitHub credentials from log records before they are emitted.
"""

from __future__ import annotations

import logging
import re
from re import Pattern

# GitHub credential formats, in the order they are applied
SENSITIVE_PATTERNS: list[tuple[str, Pattern[str]]] = [
    ("BEARER", re.compile(r"Bearer\s+[\w\-\.]+", re.IGNORECASE)),
    # Legacy "Authorization: token <value>" header form
    ("TOKEN_AUTH", re.compile(r"(?<=Authorization: )token\s+[\w\-\.]+", re.IGNORECASE)),
    ("GITHUB_PAT", re.compile(r"github_pat_\w{22,}")),
    # Classic, OAuth, user-to-server, server-to-server and refresh tokens
    ("GITHUB_TOKEN", re.compile(r"gh[pousr]_[a-zA-Z0-9]{20,}")),
]

REDACTION_PLACEHOLDER = "[REDACTED]"


class SanitizingFilter(logging.Filter):
    """
    Logging filter that replaces GitHub tokens with a placeholder.

    The record is always let through; only its message and string
    arguments are rewritten.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.msg:
            record.msg = _sanitize(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(
                _sanitize(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def _sanitize(text: str) -> str:
    for pattern_name, pattern in SENSITIVE_PATTERNS:
        text = pattern.sub(f"{pattern_name}={REDACTION_PLACEHOLDER}", text)
    return text


def get_sanitized_logger(name: str) -> logging.Logger:
    """Get a logger with a single SanitizingFilter attached."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, SanitizingFilter) for f in logger.filters):
        logger.addFilter(SanitizingFilter())
    return logger
