"""
Polling primitives for serverless-testkit.

This package contains the retry loop that waits for asynchronously written
data to become visible.
"""

from .retry_loop import poll_until

__all__ = ["poll_until"]
