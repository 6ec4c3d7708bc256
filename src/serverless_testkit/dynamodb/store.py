"""
Backing store clients for the DynamoDB helpers.

``StoreClient`` is the seam the pollers talk to. ``DynamoDBStoreClient`` is
the boto3 implementation; tests can hand in any other ``StoreClient``.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import StoreError, ValidationError

logger = structlog.get_logger(__name__)

Record = dict[str, Any]


@dataclass(frozen=True)
class ItemKey:
    """Partition key plus optional sort key of a single record."""

    pk: str
    sk: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.pk, str) or not self.pk:
            raise ValidationError(
                "pk is required and must be a non-empty string",
                context={"pk": self.pk},
            )

    @classmethod
    def from_value(cls, value: "ItemKey | dict[str, Any]") -> "ItemKey":
        """Accept either an ``ItemKey`` or a ``{"pk": ..., "sk": ...}`` mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(pk=value.get("pk", ""), sk=value.get("sk"))
        raise ValidationError(f"Unsupported key type: {type(value).__name__}")

    def to_key(self) -> Record:
        """Build the DynamoDB ``Key``; an unset sort key is left out entirely."""
        key: Record = {"pk": self.pk}
        if self.sk:
            key["sk"] = self.sk
        return key


@dataclass
class QueryPage:
    """One page of query results."""

    items: list[Record] = field(default_factory=list)
    last_evaluated_key: Record | None = None

    @property
    def has_results(self) -> bool:
        """True when the page has items or there is more to read."""
        return len(self.items) > 0 or self.last_evaluated_key is not None


class StoreClient(ABC):
    """Abstract async client for a key-value store."""

    @abstractmethod
    async def get_item(self, table_name: str, key: Record) -> Record | None:
        """
        Fetch one record by key.

        Args:
            table_name: Table to read from
            key: Primary key attributes

        Returns:
            The record, or None if it does not exist
        """
        pass

    @abstractmethod
    async def query(self, params: Record) -> QueryPage:
        """
        Run one query request.

        Args:
            params: DynamoDB ``Query`` parameters, ``TableName`` included

        Returns:
            The page of matching records
        """
        pass

    @abstractmethod
    async def put_item(self, table_name: str, item: Record) -> None:
        """
        Insert or replace one record.

        Args:
            table_name: Table to write to
            item: Record including its key attributes
        """
        pass


class DynamoDBStoreClient(StoreClient):
    """
    DynamoDB store client backed by a boto3 resource.

    boto3 is blocking, so every request runs in a worker thread to keep the
    event loop free for other pollers.
    """

    def __init__(self, resource: Any = None, region_name: str | None = None):
        """
        Initialize the store client.

        Args:
            resource: Existing ``boto3.resource("dynamodb")`` to reuse
            region_name: Region for a newly created resource
        """
        if resource is None:
            resource = (
                boto3.resource("dynamodb", region_name=region_name)
                if region_name
                else boto3.resource("dynamodb")
            )
        self._resource = resource

    async def get_item(self, table_name: str, key: Record) -> Record | None:
        table = self._resource.Table(table_name)
        try:
            response = await asyncio.to_thread(table.get_item, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("Error getting item", table_name=table_name, error=str(e))
            raise StoreError(
                f"Failed to get item from {table_name}: {e}",
                operation="get_item",
                table_name=table_name,
            ) from e
        return response.get("Item")

    async def query(self, params: Record) -> QueryPage:
        table_name = params["TableName"]
        table = self._resource.Table(table_name)
        request = {
            k: to_dynamodb_item(v) for k, v in params.items() if k != "TableName"
        }
        try:
            response = await asyncio.to_thread(table.query, **request)
        except (BotoCoreError, ClientError) as e:
            logger.error("Error querying table", table_name=table_name, error=str(e))
            raise StoreError(
                f"Failed to query {table_name}: {e}",
                operation="query",
                table_name=table_name,
            ) from e
        return QueryPage(
            items=response.get("Items") or [],
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    async def put_item(self, table_name: str, item: Record) -> None:
        table = self._resource.Table(table_name)
        try:
            await asyncio.to_thread(table.put_item, Item=to_dynamodb_item(item))
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Error putting item into table", table_name=table_name, error=str(e)
            )
            raise StoreError(
                f"Failed to put item into {table_name}: {e}",
                operation="put_item",
                table_name=table_name,
            ) from e


def to_dynamodb_item(value: Any) -> Any:
    """Convert floats to ``Decimal``, which is the only number type boto3 accepts."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamodb_item(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamodb_item(v) for v in value]
    return value
