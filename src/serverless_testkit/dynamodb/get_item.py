"""Single-record poller."""

from typing import Any

import structlog

from ..config import DEFAULT_MAX_ATTEMPTS, DEFAULT_PAUSE_SECONDS, RetryPolicy
from ..exceptions import NotFoundAfterRetries, ValidationError
from ..polling.retry_loop import Sleep, poll_until
from ..utils.delay import delay
from .store import DynamoDBStoreClient, ItemKey, Record, StoreClient

logger = structlog.get_logger(__name__)


async def get_item(
    key: ItemKey | dict[str, Any],
    table_name: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    pause_seconds: float = DEFAULT_PAUSE_SECONDS,
    *,
    store: StoreClient | None = None,
    sleep: Sleep = delay,
) -> Record:
    """
    Retrieve an item from a DynamoDB table, polling until it exists.

    Meant for end-to-end tests that trigger an asynchronous flow and then
    wait for the record it writes. Only the presence of the item is checked,
    not any of its attributes.

    Args:
        key: Partition key and optional sort key, as ``ItemKey`` or mapping
        table_name: Name of the DynamoDB table
        max_attempts: Maximum number of attempts
        pause_seconds: Pause after each attempt that finds nothing
        store: Store client to use; a fresh ``DynamoDBStoreClient`` by default
        sleep: Pause primitive

    Returns:
        The retrieved item

    Raises:
        ValidationError: If the key, table name or retry settings are invalid
        StoreError: On the first failing store call, without retrying
        NotFoundAfterRetries: If the item never appeared

    Example:
        item = await get_item({"pk": "USER#123", "sk": "PROFILE"}, "my-table", 15, 3)
        assert item["status"] == "ACTIVE"
    """
    item_key = ItemKey.from_value(key).to_key()
    if not table_name:
        raise ValidationError("table_name is required")
    policy = RetryPolicy.create(max_attempts, pause_seconds)
    if store is None:
        store = DynamoDBStoreClient()

    logger.debug("Waiting for item", table_name=table_name, key=item_key)

    async def attempt() -> Record | None:
        return await store.get_item(table_name, item_key)

    return await poll_until(
        attempt,
        lambda item: item is not None,
        policy,
        sleep=sleep,
        operation="get_item",
        exhausted_error=NotFoundAfterRetries,
        exhausted_message="record not found",
    )
