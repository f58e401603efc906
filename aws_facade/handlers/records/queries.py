"""
Records Read API

Point lookups and key-condition queries against the record table and its
three secondary indexes. "Not found" is never an error: ``get`` returns
None and queries return an empty list. Only the first result page is
returned.
"""

import logging
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr, Key

from ...config import FacadeConfig
from ...core import TableGateway
from ...models import RECORD_TABLE, Record, TableSchema

logger = logging.getLogger(__name__)

OPEN_TASK_SORT_PREFIX = "task#"
OPEN_TASK_STATUS = "pending"


class RecordsReadApi:
    """
    Read-only API for record queries.

    Access patterns:
    - primary key lookup (PK + SK)
    - sort-key prefix within a partition
    - equality on any index hash key
    - equality + sort prefix on the index that has a sort key
    """

    def __init__(self, config: FacadeConfig, gateway: TableGateway, schema: TableSchema = RECORD_TABLE):
        """Initialize read API.

        Args:
            config: Facade configuration
            gateway: Table gateway for the record table
            schema: Physical layout of the record table
        """
        self.config = config
        self.gateway = gateway
        self.schema = schema

    def get(self, partition_key: str, sort_key: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one record by primary key.

        DynamoDB Operation: GetItem

        Returns:
            The raw item, or None if no record has this key
        """
        return self.gateway.get_item(self.schema.key(partition_key, sort_key))

    def get_model(self, partition_key: str, sort_key: str) -> Optional[Record]:
        """Same as ``get`` but returns a Record model."""
        item = self.get(partition_key, sort_key)
        if item is None:
            return None
        return Record.from_item(item, self.schema)

    def query_by_sort_prefix(self, partition_key: str, sort_key_prefix: str) -> List[Dict[str, Any]]:
        """
        All records in a partition whose sort key starts with a prefix.

        DynamoDB Operation: Query with ``PK = :pk AND begins_with(SK, :prefix)``

        Returns:
            Items in sort-key order
        """
        return self.gateway.query(
            KeyConditionExpression=(
                Key(self.schema.partition_key).eq(partition_key)
                & Key(self.schema.sort_key).begins_with(sort_key_prefix)
            )
        )

    def query_by_index(self, index_name: str, key_value: str) -> List[Dict[str, Any]]:
        """
        All records whose index hash key equals a value.

        Args:
            index_name: Index table name ('GSI1', 'GSI2PK', 'GSI3PK') or its
                logical alias ('index1', 'index2', 'index3')
            key_value: Value of the index hash key

        Raises:
            ValidationError: Unknown index name
        """
        index = self.schema.get_index(index_name)
        return self.gateway.query(
            IndexName=index.name,
            KeyConditionExpression=Key(index.partition_key).eq(key_value),
        )

    def query_by_index1(self, key_value: str) -> List[Dict[str, Any]]:
        return self.query_by_index(self.schema.indexes[0].name, key_value)

    def query_by_index2(self, key_value: str) -> List[Dict[str, Any]]:
        return self.query_by_index(self.schema.indexes[1].name, key_value)

    def query_by_index3(self, key_value: str) -> List[Dict[str, Any]]:
        return self.query_by_index(self.schema.indexes[2].name, key_value)

    def query_by_index_sort_prefix(self, key_value: str, sort_prefix: str) -> List[Dict[str, Any]]:
        """
        Equality on the first index's hash key plus prefix match on its sort key.

        DynamoDB Operation: Query on GSI1 with
        ``GSI1PK = :pk AND begins_with(GSI1SK, :prefix)``
        """
        index = self.schema.indexes[0]
        return self.gateway.query(
            IndexName=index.name,
            KeyConditionExpression=(
                Key(index.partition_key).eq(key_value)
                & Key(index.sort_key).begins_with(sort_prefix)
            ),
        )

    def query_open_tasks_by_phone(self, phone_number: str) -> List[Dict[str, Any]]:
        """
        Pending tasks stored under a phone number.

        DynamoDB Operation: Query ``PK = phone AND begins_with(SK, 'task#')``
        with FilterExpression ``attributes.status = 'pending'``.

        Returns:
            Matching task items, possibly empty
        """
        status_path = f"{self.schema.attributes_field}.status"
        return self.gateway.query(
            KeyConditionExpression=(
                Key(self.schema.partition_key).eq(phone_number)
                & Key(self.schema.sort_key).begins_with(OPEN_TASK_SORT_PREFIX)
            ),
            FilterExpression=Attr(status_path).eq(OPEN_TASK_STATUS),
        )
