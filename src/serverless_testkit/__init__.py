"""
serverless-testkit

Async helpers for end-to-end tests of serverless workflows: wait for DynamoDB
records written by asynchronous flows, seed fixtures, call APIs and obtain
OAuth tokens.
"""

__version__ = "0.1.0"

from .cognito import generate_cognito_access_token, generate_user_access_token
from .config import RetryPolicy, Settings, get_settings
from .dynamodb import (
    DynamoDBStoreClient,
    ItemKey,
    QueryPage,
    QueryRequest,
    StoreClient,
    get_item,
    put_item,
    query,
)
from .exceptions import (
    ConfigurationError,
    HTTPCallError,
    NoResultsAfterRetries,
    NotFoundAfterRetries,
    RetriesExhaustedError,
    ServerlessTestkitError,
    StoreError,
    ValidationError,
)
from .log_config import setup_logging
from .utils import delay, generate_access_token, generate_random_id, http_call

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "RetryPolicy",
    "get_item",
    "put_item",
    "query",
    "QueryRequest",
    "QueryPage",
    "ItemKey",
    "StoreClient",
    "DynamoDBStoreClient",
    "http_call",
    "delay",
    "generate_random_id",
    "generate_access_token",
    "generate_cognito_access_token",
    "generate_user_access_token",
    "ServerlessTestkitError",
    "ValidationError",
    "ConfigurationError",
    "StoreError",
    "RetriesExhaustedError",
    "NotFoundAfterRetries",
    "NoResultsAfterRetries",
    "HTTPCallError",
]
