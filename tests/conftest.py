"""
Test configuration and fixtures for the AWS facade.

Unit tests use Mock gateways/clients. Integration tests run every facade
against moto's in-memory AWS (``mock_aws``), with the record table created
using the same key schema and indexes as production.
"""

import boto3
import pytest
from moto import mock_aws

from aws_facade import BaseService, ClientFactory, FacadeConfig

TEST_TABLE = "test_system_table"
TEST_BUCKET = "test-message-bucket"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so no test can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def facade_config():
    """Facade configuration for testing."""
    return FacadeConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,
        table_name=TEST_TABLE,
        bucket_name=TEST_BUCKET,
        event_bus_name="default",
        event_source="system",
        function_prefix="StellasVenue-test-",
        environment="test",
        enable_debug_logging=False,
        default_timezone="UTC",
        user_timezone=None,
    )


@pytest.fixture
def mock_aws_env(aws_credentials):
    """Activate moto for the duration of a test."""
    with mock_aws():
        yield


@pytest.fixture
def record_table(mock_aws_env):
    """Create the record table with its three secondary indexes."""
    dynamodb = boto3.resource('dynamodb', region_name='us-east-1')
    table = dynamodb.create_table(
        TableName=TEST_TABLE,
        KeySchema=[
            {'AttributeName': 'PK', 'KeyType': 'HASH'},
            {'AttributeName': 'SK', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PK', 'AttributeType': 'S'},
            {'AttributeName': 'SK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI1PK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI1SK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI2PK', 'AttributeType': 'S'},
            {'AttributeName': 'GSI3PK', 'AttributeType': 'S'}
        ],
        GlobalSecondaryIndexes=[
            {
                'IndexName': 'GSI1',
                'KeySchema': [
                    {'AttributeName': 'GSI1PK', 'KeyType': 'HASH'},
                    {'AttributeName': 'GSI1SK', 'KeyType': 'RANGE'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            },
            {
                'IndexName': 'GSI2PK',
                'KeySchema': [
                    {'AttributeName': 'GSI2PK', 'KeyType': 'HASH'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            },
            {
                'IndexName': 'GSI3PK',
                'KeySchema': [
                    {'AttributeName': 'GSI3PK', 'KeyType': 'HASH'}
                ],
                'Projection': {'ProjectionType': 'ALL'}
            }
        ],
        BillingMode='PAY_PER_REQUEST'
    )
    return table


@pytest.fixture
def message_bucket(mock_aws_env):
    """Create the blob bucket."""
    s3 = boto3.client('s3', region_name='us-east-1')
    s3.create_bucket(Bucket=TEST_BUCKET)
    return TEST_BUCKET


@pytest.fixture
def client_factory(facade_config, mock_aws_env):
    """ClientFactory whose handles talk to moto."""
    return ClientFactory(facade_config)


@pytest.fixture
def service(facade_config, client_factory, record_table, message_bucket):
    """BaseService wired to moto-backed DynamoDB and S3."""
    return BaseService(facade_config, clients=client_factory)


# Sample Data Fixtures

@pytest.fixture
def sample_task_payload():
    """Sample task payload as stored under ``attributes``."""
    return {
        "status": "pending",
        "title": "Confirm booking",
        "guests": 12,
        "notes": ["bring cake", "outdoor seating"],
    }
