"""
Unit tests for the records read API.

boto3 condition objects compare by value, so the exact key condition each
access pattern sends can be asserted directly.
"""

from unittest.mock import Mock

import pytest
from boto3.dynamodb.conditions import Attr, Key

from aws_facade.core import TableGateway
from aws_facade.exceptions import ValidationError
from aws_facade.handlers.records import RecordsReadApi
from aws_facade.models import Record


@pytest.fixture
def mock_gateway():
    """Mock table gateway."""
    gateway = Mock(spec=TableGateway)
    gateway.query.return_value = []
    return gateway


@pytest.fixture
def read_api(facade_config, mock_gateway):
    return RecordsReadApi(facade_config, mock_gateway)


class TestGet:

    def test_get_found(self, read_api, mock_gateway):
        mock_gateway.get_item.return_value = {'PK': 'p', 'SK': 's', 'attributes': {'a': 1}}

        item = read_api.get('p', 's')

        mock_gateway.get_item.assert_called_once_with({'PK': 'p', 'SK': 's'})
        assert item == {'PK': 'p', 'SK': 's', 'attributes': {'a': 1}}

    def test_get_missing(self, read_api, mock_gateway):
        mock_gateway.get_item.return_value = None
        assert read_api.get('p', 'missing') is None

    def test_get_model(self, read_api, mock_gateway):
        mock_gateway.get_item.return_value = {'PK': 'p', 'SK': 's', 'attributes': {}, 'GSI2PK': 'staff#3'}

        record = read_api.get_model('p', 's')

        assert isinstance(record, Record)
        assert record.index_keys.index2_key == 'staff#3'

    def test_get_model_missing(self, read_api, mock_gateway):
        mock_gateway.get_item.return_value = None
        assert read_api.get_model('p', 's') is None


class TestQueries:

    def test_query_by_sort_prefix(self, read_api, mock_gateway):
        read_api.query_by_sort_prefix('+15551234567', 'task#')

        mock_gateway.query.assert_called_once_with(
            KeyConditionExpression=Key('PK').eq('+15551234567') & Key('SK').begins_with('task#')
        )

    @pytest.mark.parametrize("index_name,index,hash_key", [
        ('GSI1', 'GSI1', 'GSI1PK'),
        ('index1', 'GSI1', 'GSI1PK'),
        ('GSI2PK', 'GSI2PK', 'GSI2PK'),
        ('index3', 'GSI3PK', 'GSI3PK'),
    ])
    def test_query_by_index(self, read_api, mock_gateway, index_name, index, hash_key):
        read_api.query_by_index(index_name, 'venue#7')

        mock_gateway.query.assert_called_once_with(
            IndexName=index,
            KeyConditionExpression=Key(hash_key).eq('venue#7'),
        )

    def test_query_by_unknown_index(self, read_api, mock_gateway):
        with pytest.raises(ValidationError):
            read_api.query_by_index('GSI4PK', 'x')

        mock_gateway.query.assert_not_called()

    @pytest.mark.parametrize("method,index,hash_key", [
        ('query_by_index1', 'GSI1', 'GSI1PK'),
        ('query_by_index2', 'GSI2PK', 'GSI2PK'),
        ('query_by_index3', 'GSI3PK', 'GSI3PK'),
    ])
    def test_numbered_index_shortcuts(self, read_api, mock_gateway, method, index, hash_key):
        getattr(read_api, method)('value')

        mock_gateway.query.assert_called_once_with(
            IndexName=index,
            KeyConditionExpression=Key(hash_key).eq('value'),
        )

    def test_query_by_index_sort_prefix(self, read_api, mock_gateway):
        read_api.query_by_index_sort_prefix('venue#7', '2024-03')

        mock_gateway.query.assert_called_once_with(
            IndexName='GSI1',
            KeyConditionExpression=Key('GSI1PK').eq('venue#7') & Key('GSI1SK').begins_with('2024-03'),
        )

    def test_query_open_tasks_by_phone(self, read_api, mock_gateway):
        mock_gateway.query.return_value = [{'PK': '+15551234567', 'SK': 'task#1'}]

        tasks = read_api.query_open_tasks_by_phone('+15551234567')

        mock_gateway.query.assert_called_once_with(
            KeyConditionExpression=Key('PK').eq('+15551234567') & Key('SK').begins_with('task#'),
            FilterExpression=Attr('attributes.status').eq('pending'),
        )
        assert tasks == [{'PK': '+15551234567', 'SK': 'task#1'}]

    def test_empty_result_is_empty_list(self, read_api):
        assert read_api.query_by_index2('nobody') == []
