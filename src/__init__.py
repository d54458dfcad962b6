"""pin-action - Resolve GitHub Action version specifiers to pinned commit SHAs."""

__version__ = "0.1.0"
