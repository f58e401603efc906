"""
Domain-Specific Exceptions for the AWS facade

Organized by category:
1. Input Validation Errors
2. Configuration Errors
3. Infrastructure Errors

Errors returned by the AWS services themselves (botocore ``ClientError``)
are logged and re-raised unchanged, so they are not represented here.
"""

from typing import Any, Dict, Optional

from .base import AwsFacadeError


# =============================================================================
# Input Validation Errors
# =============================================================================

class ValidationError(AwsFacadeError):
    """Raised when caller input cannot be turned into a valid request.

    Used for:
    - Unknown secondary index names
    - Unsupported index key fields in an update
    - Malformed date/time input (see DateTimeFormatError)
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class DateTimeFormatError(ValidationError):
    """Raised when a date or time string does not match the expected format."""

    def __init__(self, value: Any, expected_format: str, original_error: Optional[Exception] = None):
        self.value = value
        self.expected_format = expected_format
        super().__init__(
            f"Invalid date/time value {value!r}: expected {expected_format}",
            errors={'value': value, 'expected_format': expected_format},
            original_error=original_error,
        )


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(AwsFacadeError):
    """Raised when a facade needs a configuration value that is not set."""

    def __init__(self, setting: str, env_var: Optional[str] = None):
        """Initialize configuration error.

        Args:
            setting: Name of the missing FacadeConfig field
            env_var: Environment variable that would normally provide it
        """
        self.setting = setting
        self.env_var = env_var
        message = f"Missing required configuration '{setting}'"
        if env_var:
            message += f" (set {env_var})"
        context = {'setting': setting}
        if env_var:
            context['env_var'] = env_var
        super().__init__(message, context=context)


# =============================================================================
# Infrastructure Errors
# =============================================================================

class ConnectionError(AwsFacadeError):
    """Raised when a boto3 session, resource or client cannot be created.

    Used for:
    - Invalid credentials or region configuration
    - Invalid endpoint configurations
    - Missing table handles
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        """Initialize connection error.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error
            context: Additional context information (e.g., endpoint, region)
        """
        super().__init__(message, original_error, context)
