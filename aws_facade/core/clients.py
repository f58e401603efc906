"""
Long-lived boto3 handles shared by every facade.

One ``ClientFactory`` owns one ``boto3.Session`` and builds each service
handle (DynamoDB resource, S3, EventBridge and Lambda clients) on first
use. Facades receive the factory, or a handle directly, instead of
resolving clients globally, which keeps them trivially mockable.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from ..config import FacadeConfig
from ..exceptions import ConnectionError

logger = logging.getLogger(__name__)


class ClientFactory:
    """Lazily creates and caches boto3 handles for one configuration."""

    def __init__(self, config: FacadeConfig, session: Optional[boto3.Session] = None):
        """Initialize the factory.

        Args:
            config: Facade configuration
            session: Pre-built boto3 session (created from config if None)
        """
        self.config = config
        self._session = session
        self._dynamodb = None
        self._clients: Dict[str, Any] = {}

    @property
    def session(self) -> boto3.Session:
        """Lazy initialization of the boto3 session."""
        if self._session is None:
            try:
                self._session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    region_name=self.config.region_name
                )
            except Exception as e:
                logger.error(f"Failed to create boto3 session: {e}")
                raise ConnectionError(f"Failed to create AWS session: {e}", e) from e
        return self._session

    def _connection_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments shared by every resource/client constructor."""
        connection_kwargs = {
            'region_name': self.config.region_name
        }

        if self.config.endpoint_url:
            connection_kwargs['endpoint_url'] = self.config.endpoint_url

        # Only pool size is always set; retries and timeouts stay at botocore defaults unless overridden
        boto_settings = {'max_pool_connections': self.config.max_pool_connections}
        if self.config.retries is not None:
            boto_settings['retries'] = {'max_attempts': self.config.retries}
        if self.config.timeout_seconds is not None:
            boto_settings['read_timeout'] = self.config.timeout_seconds
            boto_settings['connect_timeout'] = self.config.timeout_seconds
        connection_kwargs['config'] = Config(**boto_settings)

        return connection_kwargs

    @property
    def dynamodb(self):
        """DynamoDB service resource."""
        if self._dynamodb is None:
            try:
                self._dynamodb = self.session.resource('dynamodb', **self._connection_kwargs())
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to create DynamoDB resource: {e}")
                raise ConnectionError(f"Failed to connect to DynamoDB: {e}", e) from e
        return self._dynamodb

    def client(self, service_name: str):
        """Get (or create) the low-level client for an AWS service.

        Args:
            service_name: boto3 service name, e.g. 's3', 'events', 'lambda'

        Returns:
            Cached boto3 client
        """
        if service_name not in self._clients:
            try:
                self._clients[service_name] = self.session.client(service_name, **self._connection_kwargs())
            except ConnectionError:
                raise
            except Exception as e:
                logger.error(f"Failed to create {service_name} client: {e}")
                raise ConnectionError(
                    f"Failed to create {service_name} client: {e}", e, {'service': service_name}
                ) from e
        return self._clients[service_name]

    @property
    def s3(self):
        """S3 client."""
        return self.client('s3')

    @property
    def events(self):
        """EventBridge client."""
        return self.client('events')

    @property
    def lambda_client(self):
        """Lambda client."""
        return self.client('lambda')

    def table(self, table_name: Optional[str] = None):
        """Get a boto3 Table resource.

        Args:
            table_name: Table to address (defaults to config.table_name)

        Returns:
            boto3 DynamoDB Table resource
        """
        name = table_name or self.config.require('table_name')
        try:
            return self.dynamodb.Table(name)
        except ConnectionError:
            raise
        except Exception as e:
            logger.error(f"Failed to access table '{name}': {e}")
            raise ConnectionError(f"Failed to access table '{name}': {e}", e) from e


def create_client_factory(config: Optional[FacadeConfig] = None) -> ClientFactory:
    """
    Factory function to create a ClientFactory instance.

    Args:
        config: Facade configuration (read from the environment if None)

    Returns:
        ClientFactory bound to the configuration
    """
    return ClientFactory(config or FacadeConfig.from_env())
