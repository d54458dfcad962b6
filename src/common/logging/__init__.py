"""
Common Logging Utilities

Provides log sanitization for GitHub token redaction.
"""

from src.common.logging.sanitizer import SanitizingFilter, get_sanitized_logger

__all__ = [
    "SanitizingFilter",
    "get_sanitized_logger",
]
