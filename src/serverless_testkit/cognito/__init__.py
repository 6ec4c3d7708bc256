"""
Cognito authentication helpers for serverless-testkit.
"""

from .access_token import generate_cognito_access_token
from .user_access_token import generate_user_access_token

__all__ = ["generate_cognito_access_token", "generate_user_access_token"]
