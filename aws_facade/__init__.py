from .config import FacadeConfig
from .exceptions import (
    AwsFacadeError,
    ConfigurationError,
    ConnectionError,
    DateTimeFormatError,
    ValidationError,
)
from .models import (
    # Table metadata
    IndexDefinition,
    TableSchema,
    RECORD_TABLE,
    # Record models
    Record,
    IndexKeys,
    UpdateRequest,
)
from .core import (
    ClientFactory,
    create_client_factory,
    TableGateway,
    create_table_gateway,
)
from .handlers import (
    # Records CQRS APIs
    RecordsReadApi,
    RecordsWriteApi,
    # Pass-through facades
    BlobStore,
    EventPublisher,
    FunctionInvoker,
)
from .service import BaseService

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "FacadeConfig",

    # Exceptions
    "AwsFacadeError",
    "ConfigurationError",
    "ConnectionError",
    "DateTimeFormatError",
    "ValidationError",

    # Models
    "IndexDefinition",
    "TableSchema",
    "RECORD_TABLE",
    "Record",
    "IndexKeys",
    "UpdateRequest",

    # Core
    "ClientFactory",
    "create_client_factory",
    "TableGateway",
    "create_table_gateway",

    # Facades
    "RecordsReadApi",
    "RecordsWriteApi",
    "BlobStore",
    "EventPublisher",
    "FunctionInvoker",
    "BaseService",
]
