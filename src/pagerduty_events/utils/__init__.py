"""Utility modules."""

from .logging import redact_secrets, setup_logging

__all__ = [
    "setup_logging",
    "redact_secrets",
]
