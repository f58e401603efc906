"""
Records CQRS APIs

Read API:
- Primary key lookups
- Sort-key prefix queries within a partition
- Secondary index queries (equality, and equality + sort prefix on GSI1)
- Pending task lookup by phone number

Write API:
- Put with optional index keys
- Partial update (payload replaced, supplied index keys set)
- Delete

Usage:
    read_api = RecordsReadApi(config, gateway)
    write_api = RecordsWriteApi(config, gateway)
"""

from .queries import RecordsReadApi
from .commands import RecordsWriteApi

__all__ = [
    "RecordsReadApi",
    "RecordsWriteApi",
]
