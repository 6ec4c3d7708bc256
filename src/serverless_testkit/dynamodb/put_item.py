"""Fixture writer."""

from typing import Any

import structlog

from ..exceptions import ValidationError
from .store import DynamoDBStoreClient, StoreClient

logger = structlog.get_logger(__name__)


async def put_item(
    table_name: str,
    item: dict[str, Any],
    *,
    store: StoreClient | None = None,
) -> None:
    """
    Insert or replace an item in a DynamoDB table.

    Use it to seed test data before triggering the flow under test. There is
    no retry: a failed write fails the call.

    Args:
        table_name: Name of the DynamoDB table
        item: The item, key attributes included
        store: Store client to use; a fresh ``DynamoDBStoreClient`` by default

    Raises:
        ValidationError: If the table name or item is missing
        StoreError: If the write fails
    """
    if not table_name:
        raise ValidationError("table_name is required")
    if not item:
        raise ValidationError("item must not be empty")
    if store is None:
        store = DynamoDBStoreClient()

    await store.put_item(table_name, item)
    logger.debug("Put item", table_name=table_name, pk=item.get("pk"))
