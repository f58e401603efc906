from .records import (
    # Table metadata
    IndexDefinition,
    TableSchema,
    RECORD_TABLE,
    # Record models
    Record,
    IndexKeys,
    UpdateRequest,
)

__all__ = [
    "IndexDefinition",
    "TableSchema",
    "RECORD_TABLE",
    "Record",
    "IndexKeys",
    "UpdateRequest",
]
