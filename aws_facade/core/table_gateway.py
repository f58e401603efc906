"""
Thin DynamoDB Table Gateway

A lightweight wrapper around a boto3 ``Table`` resource. It exposes exactly
the item operations the record handlers compose (get, put, query, update,
delete) and nothing more.

Error policy: any failure coming back from DynamoDB or the transport is
logged once here, with the operation and key that failed, and re-raised
unchanged. Callers decide whether to retry.

Storage encoding: DynamoDB has no float type, so floats anywhere inside an
item are converted to ``Decimal`` before the request is sent, and numbers
read back are returned as plain ``int`` / ``float``.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .clients import ClientFactory

logger = logging.getLogger(__name__)


def to_dynamodb_value(value: Any) -> Any:
    """Convert a Python value into something the boto3 serializer accepts.

    Floats become ``Decimal`` (via ``str`` to avoid binary artifacts);
    containers are walked recursively. Everything else is returned as-is.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamodb_value(v) for v in value]
    return value


def from_dynamodb_value(value: Any) -> Any:
    """Inverse of ``to_dynamodb_value`` for values boto3 deserialized.

    Whole ``Decimal`` numbers become ``int``, the rest ``float``; maps and
    lists are walked recursively.
    """
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamodb_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [from_dynamodb_value(v) for v in value]
    return value


class TableGateway:
    """
    Thin gateway for DynamoDB table operations.

    Holds one boto3 Table handle for the process lifetime. The handle is
    either injected or created on first use from a ``ClientFactory``.
    """

    def __init__(self, clients: Optional[ClientFactory] = None, table_name: Optional[str] = None, table=None):
        """Initialize table gateway.

        Args:
            clients: Factory used to build the Table handle lazily
            table_name: Table name (defaults to the factory's config.table_name)
            table: Pre-built boto3 Table resource; takes precedence over clients
        """
        if clients is None and table is None:
            raise ValueError("TableGateway needs either a ClientFactory or a Table resource")
        self.clients = clients
        self._table = table
        self._table_name = table_name

    @property
    def table(self):
        """boto3 DynamoDB Table resource."""
        if self._table is None:
            self._table = self.clients.table(self._table_name)
        return self._table

    @property
    def table_name(self) -> str:
        if self._table_name:
            return self._table_name
        if self._table is not None:
            return self._table.name
        return self.clients.config.table_name

    def get_item(self, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Fetch one item by primary key.

        Args:
            key: Full primary key

        Returns:
            The item, or None if no item has this key
        """
        try:
            response = self.table.get_item(Key=key)
        except Exception as e:
            logger.error(f"GetItem on {self.table_name} failed for {key}: {e}")
            raise
        item = response.get('Item')
        return None if item is None else from_dynamodb_value(item)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Put item into DynamoDB table, replacing any item with the same key.

        Args:
            item: Item to store

        Returns:
            Raw PutItem response
        """
        try:
            response = self.table.put_item(Item=to_dynamodb_value(item))
        except Exception as e:
            logger.error(f"PutItem on {self.table_name} failed: {e}")
            raise
        logger.info(f"Put item in {self.table_name}")
        return response

    def query(self, **kwargs) -> List[Dict[str, Any]]:
        """
        Execute a DynamoDB Query and return the items of the first page.

        Args:
            **kwargs: All boto3 query parameters (KeyConditionExpression,
                IndexName, FilterExpression, ...)

        Returns:
            List of items, empty when nothing matches
        """
        try:
            response = self.table.query(**kwargs)
        except Exception as e:
            logger.error(f"Query on {self.table_name} failed: {e}")
            raise
        items = [from_dynamodb_value(item) for item in response.get('Items', [])]
        logger.debug(f"Query on {self.table_name} returned {len(items)} items")
        return items

    def update_item(
        self,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Update item in DynamoDB table.

        Args:
            key: Primary key of item to update
            update_expression: UPDATE expression
            expression_attribute_values: Values for update expression
            expression_attribute_names: Names for update expression

        Returns:
            Raw UpdateItem response
        """
        update_kwargs = {
            'Key': key,
            'UpdateExpression': update_expression,
        }
        if expression_attribute_values:
            update_kwargs['ExpressionAttributeValues'] = to_dynamodb_value(expression_attribute_values)
        if expression_attribute_names:
            update_kwargs['ExpressionAttributeNames'] = expression_attribute_names

        try:
            response = self.table.update_item(**update_kwargs)
        except Exception as e:
            logger.error(f"UpdateItem on {self.table_name} failed for {key}: {e}")
            raise
        logger.info(f"Updated item in {self.table_name}: {key}")
        return response

    def delete_item(self, key: Dict[str, Any]) -> Dict[str, Any]:
        """
        Delete item from DynamoDB table.

        Deleting a key that does not exist succeeds.

        Args:
            key: Primary key of item to delete

        Returns:
            Raw DeleteItem response
        """
        try:
            response = self.table.delete_item(Key=key)
        except Exception as e:
            logger.error(f"DeleteItem on {self.table_name} failed for {key}: {e}")
            raise
        logger.info(f"Deleted item from {self.table_name}: {key}")
        return response


def create_table_gateway(clients: ClientFactory, table_name: Optional[str] = None) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        clients: Shared client factory
        table_name: Table name (defaults to config.table_name)

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(clients, table_name)
