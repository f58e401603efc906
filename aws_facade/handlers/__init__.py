"""
Service facades.

- records: CQRS read/write APIs over the DynamoDB record table
- blobs: S3 objects and streams
- events: EventBridge publishing
- functions: asynchronous Lambda invocation
"""

from .records import RecordsReadApi, RecordsWriteApi
from .blobs import BlobStore
from .events import EventPublisher
from .functions import FunctionInvoker

__all__ = [
    "RecordsReadApi",
    "RecordsWriteApi",
    "BlobStore",
    "EventPublisher",
    "FunctionInvoker",
]
