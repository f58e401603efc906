"""
Records Write API

Put, update and delete against the record table. Every payload is
sanitized (dates to ISO text) before it is written. Index key fields are
written only when supplied.
"""

import logging
from typing import Any, Dict, Mapping, Union

from ...config import FacadeConfig
from ...core import TableGateway
from ...models import RECORD_TABLE, IndexKeys, Record, TableSchema, UpdateRequest
from ...utils import sanitize

logger = logging.getLogger(__name__)

IndexKeysInput = Union[IndexKeys, Mapping[str, Any], None]


class RecordsWriteApi:
    """
    Write-only API for record mutations.

    - put: full item write, overwriting any record with the same key
    - update: replaces ``attributes`` and sets supplied index fields only
    - delete: removes a record by key
    """

    def __init__(self, config: FacadeConfig, gateway: TableGateway, schema: TableSchema = RECORD_TABLE):
        """Initialize write API.

        Args:
            config: Facade configuration
            gateway: Table gateway for the record table
            schema: Physical layout of the record table
        """
        self.config = config
        self.gateway = gateway
        self.schema = schema

    def put(
        self,
        partition_key: str,
        sort_key: str,
        payload: Any,
        index_keys: IndexKeysInput = None
    ) -> Dict[str, Any]:
        """
        Write a record.

        DynamoDB Operation: PutItem (unconditional, same key overwrites)

        Args:
            partition_key: Partition key value
            sort_key: Sort key value
            payload: Business payload stored under ``attributes``
            index_keys: Optional index values (IndexKeys or mapping with
                index1_key / index1_sort_key / index2_key / index3_key)

        Returns:
            Raw PutItem response

        Examples:
            >>> api.put("+15551234567", "task#2024-03-01", {"status": "pending"},
            ...         {"index1_key": "venue#7", "index1_sort_key": "2024-03-01"})
        """
        record = Record(
            partition_key=partition_key,
            sort_key=sort_key,
            attributes=sanitize(payload),
            index_keys=IndexKeys.coerce(index_keys),
        )
        return self.gateway.put_item(record.to_item(self.schema))

    def update(
        self,
        partition_key: str,
        sort_key: str,
        new_payload: Any,
        index_keys: IndexKeysInput = None
    ) -> Dict[str, Any]:
        """
        Replace a record's payload and optionally set index key fields.

        DynamoDB Operation: UpdateItem with SET on ``attributes`` plus one
        assignment per supplied index field. Unsupplied index fields keep
        their stored value. The payload is replaced as a whole, never merged.

        Args:
            partition_key: Partition key value
            sort_key: Sort key value
            new_payload: New value for ``attributes``
            index_keys: Optional index values to set

        Returns:
            Raw UpdateItem response
        """
        request = UpdateRequest.for_record(
            sanitize(new_payload),
            IndexKeys.coerce(index_keys),
            self.schema,
        )
        update_expression, names, values = request.render()
        logger.debug(f"Updating {partition_key}/{sort_key}: {request.attributes}")

        return self.gateway.update_item(
            key=self.schema.key(partition_key, sort_key),
            update_expression=update_expression,
            expression_attribute_values=values,
            expression_attribute_names=names,
        )

    def delete(self, partition_key: str, sort_key: str) -> Dict[str, Any]:
        """
        Remove a record.

        DynamoDB Operation: DeleteItem

        Returns:
            Raw DeleteItem response
        """
        return self.gateway.delete_item(self.schema.key(partition_key, sort_key))
