"""
BaseService: one object exposing every facade.

Services built on top of this library subclass (or hold) a ``BaseService``
and call its convenience methods. All facades share one configuration and
one ``ClientFactory``, so each AWS handle is created once per process and
reused.

Example:
    >>> service = BaseService(FacadeConfig(table_name="system", bucket_name="messages"))
    >>> service.put_record("+15551234567", "task#1", {"status": "pending"})
    >>> service.query_open_tasks_by_phone("+15551234567")
"""

import logging
from datetime import date
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

from .config import FacadeConfig
from .core import ClientFactory, TableGateway, create_table_gateway
from .handlers import (
    BlobStore,
    EventPublisher,
    FunctionInvoker,
    RecordsReadApi,
    RecordsWriteApi,
)
from .handlers.records.commands import IndexKeysInput
from .models import RECORD_TABLE, TableSchema
from .utils import datetime_helpers

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "aws_facade"


class BaseService:
    """Record store, blob store, event publisher and function invoker in one place."""

    def __init__(
        self,
        config: Optional[FacadeConfig] = None,
        clients: Optional[ClientFactory] = None,
        gateway: Optional[TableGateway] = None,
        schema: TableSchema = RECORD_TABLE,
    ):
        """Initialize every facade.

        AWS handles are not created here; each one is built on first use.

        Args:
            config: Facade configuration (read from the environment if None)
            clients: Shared client factory (built from config if None)
            gateway: Table gateway override, mainly for tests
            schema: Physical layout of the record table
        """
        self.config = config or (clients.config if clients else FacadeConfig.from_env())
        self.clients = clients or ClientFactory(self.config)

        if self.config.enable_debug_logging:
            logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG)

        self.gateway = gateway or create_table_gateway(self.clients)
        self.records_read = RecordsReadApi(self.config, self.gateway, schema)
        self.records_write = RecordsWriteApi(self.config, self.gateway, schema)

        self._blobs: Optional[BlobStore] = None
        self._events: Optional[EventPublisher] = None
        self._functions: Optional[FunctionInvoker] = None

        logger.debug(
            f"BaseService ready ({self.config.environment}): table={self.config.table_name or 'unset'}, "
            f"timezone={self.config.default_timezone}, display={self.config.get_display_timezone()}"
        )

    # -------------------------------------------------------------------------
    # Facades (clients resolved lazily)
    # -------------------------------------------------------------------------

    @property
    def blobs(self) -> BlobStore:
        if self._blobs is None:
            self._blobs = BlobStore(self.config, self.clients.s3)
        return self._blobs

    @property
    def events(self) -> EventPublisher:
        if self._events is None:
            self._events = EventPublisher(self.config, self.clients.events)
        return self._events

    @property
    def functions(self) -> FunctionInvoker:
        if self._functions is None:
            self._functions = FunctionInvoker(self.config, self.clients.lambda_client)
        return self._functions

    # -------------------------------------------------------------------------
    # Record store
    # -------------------------------------------------------------------------

    def put_record(self, partition_key: str, sort_key: str, payload: Any, index_keys: IndexKeysInput = None) -> Dict[str, Any]:
        return self.records_write.put(partition_key, sort_key, payload, index_keys)

    def get_record(self, partition_key: str, sort_key: str) -> Optional[Dict[str, Any]]:
        return self.records_read.get(partition_key, sort_key)

    def query_by_sort_prefix(self, partition_key: str, sort_key_prefix: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_sort_prefix(partition_key, sort_key_prefix)

    def query_by_index(self, index_name: str, key_value: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_index(index_name, key_value)

    def query_by_index1(self, key_value: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_index1(key_value)

    def query_by_index2(self, key_value: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_index2(key_value)

    def query_by_index3(self, key_value: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_index3(key_value)

    def query_by_index_sort_prefix(self, key_value: str, sort_prefix: str) -> List[Dict[str, Any]]:
        return self.records_read.query_by_index_sort_prefix(key_value, sort_prefix)

    def update_record(self, partition_key: str, sort_key: str, new_payload: Any, index_keys: IndexKeysInput = None) -> Dict[str, Any]:
        return self.records_write.update(partition_key, sort_key, new_payload, index_keys)

    def delete_record(self, partition_key: str, sort_key: str) -> Dict[str, Any]:
        return self.records_write.delete(partition_key, sort_key)

    def query_open_tasks_by_phone(self, phone_number: str) -> List[Dict[str, Any]]:
        return self.records_read.query_open_tasks_by_phone(phone_number)

    # -------------------------------------------------------------------------
    # Blobs, events, functions
    # -------------------------------------------------------------------------

    def put_object(self, name: str, value: Any) -> Dict[str, Any]:
        return self.blobs.put_object(name, value)

    def put_stream(self, name: str, stream: BinaryIO, content_type: Optional[str] = None) -> Dict[str, str]:
        return self.blobs.put_stream(name, stream, content_type)

    def get_object(self, name: str) -> Dict[str, Any]:
        return self.blobs.get_object(name)

    def publish(self, event_name: Any, payload: Any) -> Dict[str, Any]:
        return self.events.publish(event_name, payload)

    def invoke_async(self, function_name_suffix: str, payload: Any) -> Dict[str, Any]:
        return self.functions.invoke_async(function_name_suffix, payload)

    # -------------------------------------------------------------------------
    # Date/time helpers bound to the configured timezones
    # -------------------------------------------------------------------------

    def combine_iso_date_and_time(self, date_str: str, time_str: str) -> str:
        """Local date + time in ``default_timezone`` as a UTC ISO instant."""
        return datetime_helpers.combine_iso_date_and_time(date_str, time_str, self.config.default_timezone)

    def get_future_date(self, days: int) -> date:
        """Calendar date ``days`` after today in ``default_timezone``."""
        return datetime_helpers.get_future_date(days, self.config.default_timezone)

    def to_display_date(self, iso_timestamp: str) -> str:
        return datetime_helpers.to_display_date(iso_timestamp, self.config.get_display_timezone())

    def to_display_time(self, iso_timestamp: str) -> str:
        return datetime_helpers.to_display_time(iso_timestamp, self.config.get_display_timezone())

    def to_display_datetime(self, iso_timestamp: str) -> Tuple[str, str]:
        return datetime_helpers.to_display_datetime(iso_timestamp, self.config.get_display_timezone())
