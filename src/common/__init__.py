"""
Common Utilities

Shared helpers used across pin-action packages.
"""
