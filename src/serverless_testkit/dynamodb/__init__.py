"""
DynamoDB helpers for serverless-testkit.

Pollers that wait for records written by asynchronous flows, a fixture
writer, and the store clients they run on.
"""

from .get_item import get_item
from .put_item import put_item
from .query import QueryRequest, query, run_query
from .store import DynamoDBStoreClient, ItemKey, QueryPage, StoreClient

__all__ = [
    "get_item",
    "put_item",
    "query",
    "run_query",
    "QueryRequest",
    "QueryPage",
    "ItemKey",
    "StoreClient",
    "DynamoDBStoreClient",
]
