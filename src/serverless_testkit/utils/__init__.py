"""
General helpers for serverless-testkit.

Pausing, HTTP calls, OAuth client-credentials tokens and random ids.
"""

from .delay import delay
from .http_call import http_call
from .oauth import generate_access_token
from .random_id import generate_random_id

__all__ = ["delay", "http_call", "generate_access_token", "generate_random_id"]
