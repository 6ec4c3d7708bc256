"""
Collection poller.

Queries a DynamoDB table or index until a page comes back with items, or
with a continuation token even when the page itself is empty.
"""

from dataclasses import dataclass
from typing import Any

import structlog

from ..config import DEFAULT_MAX_ATTEMPTS, DEFAULT_PAUSE_SECONDS, RetryPolicy
from ..exceptions import NoResultsAfterRetries, ValidationError
from ..polling.retry_loop import Sleep, poll_until
from ..utils.delay import delay
from .store import DynamoDBStoreClient, QueryPage, Record, StoreClient

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class QueryRequest:
    """Parameters of a single DynamoDB query."""

    table_name: str
    key_condition_expression: str
    expression_attribute_values: dict[str, Any]
    expression_attribute_names: dict[str, str] | None = None
    index_name: str | None = None
    limit: int | None = None
    filter_expression: str | None = None
    filter_attribute_values: dict[str, Any] | None = None
    consistent_read: bool = False
    last_evaluated_key: Record | None = None
    scan_index_forward: bool = True

    def __post_init__(self) -> None:
        if not self.table_name:
            raise ValidationError("table_name is required")
        if not self.key_condition_expression:
            raise ValidationError("key_condition_expression is required")
        if self.limit is not None and self.limit < 1:
            raise ValidationError(
                "limit must be a positive integer", context={"limit": self.limit}
            )

    def attribute_values(self) -> dict[str, Any]:
        """
        Values for every placeholder in the key condition and the filter.

        Filter values are applied on top of the key condition values, so a
        placeholder defined in both takes the filter's value. This is probably
        unintended by callers but is kept for compatibility.
        """
        values = dict(self.expression_attribute_values)
        if self.filter_expression and self.filter_attribute_values:
            values.update(self.filter_attribute_values)
        return values

    def to_params(self) -> Record:
        """Build the DynamoDB ``Query`` parameters, leaving out unset options."""
        params: Record = {
            "TableName": self.table_name,
            "KeyConditionExpression": self.key_condition_expression,
            "ExpressionAttributeValues": self.attribute_values(),
            "ConsistentRead": self.consistent_read,
            "ScanIndexForward": self.scan_index_forward,
        }
        if self.expression_attribute_names:
            params["ExpressionAttributeNames"] = self.expression_attribute_names
        if self.index_name is not None:
            params["IndexName"] = self.index_name
        if self.limit is not None:
            params["Limit"] = self.limit
        if self.filter_expression:
            params["FilterExpression"] = self.filter_expression
        if self.last_evaluated_key is not None:
            params["ExclusiveStartKey"] = self.last_evaluated_key
        return params


async def query(
    table_name: str,
    key_condition_expression: str,
    expression_attribute_values: dict[str, Any],
    *,
    expression_attribute_names: dict[str, str] | None = None,
    index_name: str | None = None,
    limit: int | None = None,
    filter_expression: str | None = None,
    filter_attribute_values: dict[str, Any] | None = None,
    consistent_read: bool = False,
    last_evaluated_key: Record | None = None,
    scan_index_forward: bool = True,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    pause_seconds: float = DEFAULT_PAUSE_SECONDS,
    store: StoreClient | None = None,
    sleep: Sleep = delay,
) -> QueryPage:
    """
    Query a DynamoDB table, polling until results show up.

    A page counts as a result when it has at least one item or carries a
    ``LastEvaluatedKey``; an empty page with a continuation token is returned
    as is. Index, limit, consistency and sort direction are passed straight
    to DynamoDB.

    Args:
        table_name: Name of the DynamoDB table
        key_condition_expression: e.g. ``"pk = :pk AND begins_with(sk, :prefix)"``
        expression_attribute_values: Values for the key condition placeholders
        expression_attribute_names: Optional ``#name`` placeholder mapping
        index_name: Optional GSI or LSI to query
        limit: Maximum number of items to evaluate
        filter_expression: Optional filter applied after the key condition
        filter_attribute_values: Values for the filter placeholders
        consistent_read: Use strongly consistent reads
        last_evaluated_key: Continuation token from a previous page
        scan_index_forward: True for ascending sort key order
        max_attempts: Maximum number of attempts
        pause_seconds: Pause after each attempt that returns nothing
        store: Store client to use; a fresh ``DynamoDBStoreClient`` by default
        sleep: Pause primitive

    Returns:
        The matching items and the continuation token, if any

    Raises:
        ValidationError: If the request or retry settings are invalid
        StoreError: On the first failing store call, without retrying
        NoResultsAfterRetries: If no results appeared

    Example:
        page = await query(
            "orders-table",
            "pk = :pk AND begins_with(sk, :prefix)",
            {":pk": "USER#123", ":prefix": "ORDER#"},
            max_attempts=15,
        )
        assert page.items[0]["status"] == "CONFIRMED"
    """
    request = QueryRequest(
        table_name=table_name,
        key_condition_expression=key_condition_expression,
        expression_attribute_values=expression_attribute_values,
        expression_attribute_names=expression_attribute_names,
        index_name=index_name,
        limit=limit,
        filter_expression=filter_expression,
        filter_attribute_values=filter_attribute_values,
        consistent_read=consistent_read,
        last_evaluated_key=last_evaluated_key,
        scan_index_forward=scan_index_forward,
    )
    return await run_query(
        request,
        RetryPolicy.create(max_attempts, pause_seconds),
        store=store,
        sleep=sleep,
    )


async def run_query(
    request: QueryRequest,
    policy: RetryPolicy | None = None,
    *,
    store: StoreClient | None = None,
    sleep: Sleep = delay,
) -> QueryPage:
    """Poll with a prepared ``QueryRequest``; see ``query`` for semantics."""
    policy = policy or RetryPolicy()
    if store is None:
        store = DynamoDBStoreClient()
    params = request.to_params()

    logger.debug(
        "Waiting for query results",
        table_name=request.table_name,
        index_name=request.index_name,
    )

    async def attempt() -> QueryPage:
        return await store.query(params)

    return await poll_until(
        attempt,
        lambda page: page.has_results,
        policy,
        sleep=sleep,
        operation="query",
        exhausted_error=NoResultsAfterRetries,
        exhausted_message="query returned no results after max retries",
    )
