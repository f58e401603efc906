"""
Core infrastructure components shared by every facade.

- ClientFactory: one boto3 session and one long-lived handle per AWS service
- TableGateway: thin wrapper over boto3 DynamoDB table operations
"""

from .clients import ClientFactory, create_client_factory
from .table_gateway import TableGateway, create_table_gateway, from_dynamodb_value, to_dynamodb_value

__all__ = [
    "ClientFactory",
    "create_client_factory",
    "TableGateway",
    "create_table_gateway",
    "from_dynamodb_value",
    "to_dynamodb_value",
]
