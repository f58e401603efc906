import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()

# Environment variables backing the settings that facades refuse to run without
REQUIRED_SETTING_ENV_VARS = {
    'table_name': 'SYSTEMTABLE',
    'bucket_name': 'MESSAGE_BUCKET',
    'function_prefix': 'FUNCTION_PREFIX',
}


class FacadeConfig(BaseModel):
    """Configuration for the AWS clients and the resources the facades address."""

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    region_name: str = Field(
        default_factory=lambda: os.getenv("AWS_REGION", "us-east-1"),
        description="AWS region name"
    )

    endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ENDPOINT_URL"),
        description="Endpoint URL override for all services (LocalStack, DynamoDB Local)"
    )

    # Addressed resources
    table_name: str = Field(
        default_factory=lambda: os.getenv("SYSTEMTABLE", ""),
        description="DynamoDB table holding all records"
    )

    bucket_name: str = Field(
        default_factory=lambda: os.getenv("MESSAGE_BUCKET", ""),
        description="S3 bucket for blobs"
    )

    event_bus_name: str = Field(
        default_factory=lambda: os.getenv("EVENT_BUS_NAME", "default"),
        description="EventBridge bus events are published to"
    )

    event_source: str = Field(
        default_factory=lambda: os.getenv("EVENT_SOURCE", "system"),
        description="Source field attached to every published event"
    )

    function_prefix: str = Field(
        default_factory=lambda: os.getenv("FUNCTION_PREFIX", "StellasVenue-prod-"),
        description="Prefix prepended to Lambda function name suffixes"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=50,
        description="Maximum number of connections in each client's pool"
    )

    retries: Optional[int] = Field(
        default=None,
        description="botocore max_attempts override (None keeps the botocore default)"
    )

    timeout_seconds: Optional[float] = Field(
        default=None,
        description="Connect/read timeout override (None keeps the botocore default)"
    )

    # S3 transfer settings
    multipart_threshold: int = Field(
        default=8 * 1024 * 1024,
        description="Stream size in bytes above which uploads switch to multipart"
    )

    multipart_chunksize: int = Field(
        default=8 * 1024 * 1024,
        description="Part size in bytes for multipart uploads"
    )

    # Environment settings
    environment: str = Field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "dev"),
        description="Current environment (dev, staging, prod, test)"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: os.getenv("AWS_FACADE_DEBUG_LOGGING", "false").lower() == "true",
        description="Enable debug logging for facade operations"
    )

    # Timezone settings
    default_timezone: str = Field(
        default_factory=lambda: os.getenv("AWS_FACADE_TIMEZONE", "UTC"),
        description="Time reference used to interpret local dates and times"
    )

    user_timezone: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_FACADE_USER_TIMEZONE"),
        description="User's preferred timezone for display purposes"
    )

    @field_validator('region_name')
    @classmethod
    def validate_region(cls, v):
        """Validate AWS region name."""
        if not v:
            raise ValueError("AWS region name is required")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        valid_environments = ['dev', 'staging', 'prod', 'test']
        if v not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v

    @field_validator('default_timezone', 'user_timezone')
    @classmethod
    def validate_timezone(cls, v):
        """Validate timezone string against the IANA database."""
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Invalid timezone: {v}. Please use a valid IANA timezone identifier.") from None
        return v

    def require(self, setting: str) -> str:
        """Return a configured value, raising if it is empty.

        Args:
            setting: FacadeConfig field name

        Returns:
            The configured value

        Raises:
            ConfigurationError: If the value is unset or empty
        """
        value = getattr(self, setting)
        if not value:
            raise ConfigurationError(setting, REQUIRED_SETTING_ENV_VARS.get(setting))
        return value

    def get_display_timezone(self) -> str:
        """Timezone used when rendering dates for people."""
        return self.user_timezone or self.default_timezone

    @classmethod
    def from_env(cls) -> 'FacadeConfig':
        """Create configuration from environment variables.

        Returns:
            FacadeConfig instance
        """
        return cls()

    @classmethod
    def for_local_development(cls, **overrides) -> 'FacadeConfig':
        """Create configuration pointing every client at LocalStack.

        Args:
            **overrides: Field values replacing the local defaults

        Returns:
            FacadeConfig instance configured for local development
        """
        settings = dict(
            aws_access_key_id="test",
            aws_secret_access_key="test",
            region_name="us-east-1",
            endpoint_url="http://localhost:4566",
            environment="dev",
            enable_debug_logging=True
        )
        settings.update(overrides)
        return cls(**settings)

    model_config = ConfigDict(
        validate_assignment=True
    )
