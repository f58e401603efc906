# Base exception class
from .base import AwsFacadeError

# Domain-specific exceptions
from .domain_exceptions import (
    ValidationError,
    DateTimeFormatError,
    ConfigurationError,
    ConnectionError,
)

__all__ = [
    # Base exception
    "AwsFacadeError",

    # Domain exceptions (alphabetically ordered)
    "ConfigurationError",
    "ConnectionError",
    "DateTimeFormatError",
    "ValidationError",
]
