"""
Integration tests for the record store against moto DynamoDB.

Every test writes through the public read/write APIs and reads the table
back, including the three secondary indexes.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from aws_facade.core import TableGateway
from aws_facade.exceptions import ValidationError
from aws_facade.handlers.records import RecordsReadApi, RecordsWriteApi
from aws_facade.utils import sanitize

PHONE = "+15551234567"


@pytest.fixture
def gateway(client_factory, record_table):
    return TableGateway(client_factory)


@pytest.fixture
def write_api(facade_config, gateway):
    return RecordsWriteApi(facade_config, gateway)


@pytest.fixture
def read_api(facade_config, gateway):
    return RecordsReadApi(facade_config, gateway)


class TestPutAndGet:

    def test_round_trip(self, write_api, read_api, sample_task_payload):
        payload = dict(sample_task_payload, due=datetime(2024, 3, 1, 18, 0, tzinfo=timezone.utc))

        write_api.put(PHONE, "task#1", payload)
        item = read_api.get(PHONE, "task#1")

        assert item['PK'] == PHONE
        assert item['SK'] == "task#1"
        assert item['attributes'] == sanitize(payload)
        assert item['attributes']['due'] == "2024-03-01T18:00:00.000Z"

    def test_missing_record_is_none(self, read_api):
        assert read_api.get(PHONE, "task#missing") is None

    def test_numbers_read_back_as_written(self, write_api, read_api):
        payload = {"total": 0.1, "price": 19.99, "guests": 12, "lines": [{"qty": 1.5}]}

        write_api.put(PHONE, "invoice#1", payload)
        attributes = read_api.get(PHONE, "invoice#1")['attributes']

        assert attributes == sanitize(payload)
        assert isinstance(attributes['total'], float)
        assert isinstance(attributes['guests'], int)

    def test_query_results_use_plain_numbers(self, write_api, read_api):
        write_api.put(PHONE, "invoice#1", {"total": 19.99})

        items = read_api.query_by_sort_prefix(PHONE, "invoice#")

        assert items[0]['attributes'] == {"total": 19.99}
        assert not isinstance(items[0]['attributes']['total'], Decimal)

    def test_put_overwrites_whole_item(self, write_api, read_api):
        write_api.put(PHONE, "task#1", {"v": 1}, {"index2_key": "staff#3"})
        write_api.put(PHONE, "task#1", {"v": 2})

        item = read_api.get(PHONE, "task#1")
        assert item['attributes'] == {"v": 2}
        assert 'GSI2PK' not in item

    def test_get_model(self, write_api, read_api):
        write_api.put(PHONE, "task#1", {"v": 1}, {"index3Key": "guest#9"})

        record = read_api.get_model(PHONE, "task#1")

        assert record.partition_key == PHONE
        assert record.index_keys.index3_key == "guest#9"


class TestUpdate:

    def test_replaces_payload_and_keeps_unmentioned_index_fields(self, write_api, read_api):
        write_api.put(
            PHONE, "task#1", {"status": "pending", "title": "old"},
            {"index1_key": "venue#7", "index1_sort_key": "2024-03-01", "index2_key": "staff#3"},
        )

        write_api.update(PHONE, "task#1", {"status": "done"}, {"index2_key": "staff#4"})

        item = read_api.get(PHONE, "task#1")
        assert item['attributes'] == {"status": "done"}
        assert item['GSI1PK'] == "venue#7"
        assert item['GSI1SK'] == "2024-03-01"
        assert item['GSI2PK'] == "staff#4"
        assert 'GSI3PK' not in item

    def test_update_creates_missing_record(self, write_api, read_api):
        write_api.update(PHONE, "task#new", {"status": "pending"})

        assert read_api.get(PHONE, "task#new")['attributes'] == {"status": "pending"}

    def test_updated_index_value_is_queryable(self, write_api, read_api):
        write_api.put(PHONE, "task#1", {}, {"index3_key": "guest#1"})
        write_api.update(PHONE, "task#1", {}, {"index3_key": "guest#2"})

        assert read_api.query_by_index3("guest#1") == []
        assert [item['SK'] for item in read_api.query_by_index3("guest#2")] == ["task#1"]


class TestQueries:

    @pytest.fixture(autouse=True)
    def seed(self, write_api):
        write_api.put(PHONE, "task#2024-03-01", {"status": "pending"},
                      {"index1_key": "venue#7", "index1_sort_key": "2024-03-01#a", "index2_key": "staff#3"})
        write_api.put(PHONE, "task#2024-03-02", {"status": "done"},
                      {"index1_key": "venue#7", "index1_sort_key": "2024-03-02#b", "index3_key": "guest#9"})
        write_api.put(PHONE, "booking#1", {"status": "pending"},
                      {"index1_key": "venue#8", "index1_sort_key": "2024-03-01#c"})
        write_api.put("+15559999999", "task#2024-03-01", {"status": "pending"}, {"index2_key": "staff#3"})

    def test_sort_prefix(self, read_api):
        items = read_api.query_by_sort_prefix(PHONE, "task#")
        assert [item['SK'] for item in items] == ["task#2024-03-01", "task#2024-03-02"]

    def test_sort_prefix_no_match(self, read_api):
        assert read_api.query_by_sort_prefix(PHONE, "invoice#") == []

    def test_index1(self, read_api):
        assert {item['SK'] for item in read_api.query_by_index1("venue#7")} == {"task#2024-03-01", "task#2024-03-02"}

    def test_index2_across_partitions(self, read_api):
        items = read_api.query_by_index("index2", "staff#3")
        assert {item['PK'] for item in items} == {PHONE, "+15559999999"}

    def test_index3(self, read_api):
        assert [item['SK'] for item in read_api.query_by_index("GSI3PK", "guest#9")] == ["task#2024-03-02"]

    def test_index_sort_prefix(self, read_api):
        items = read_api.query_by_index_sort_prefix("venue#7", "2024-03-02")
        assert [item['SK'] for item in items] == ["task#2024-03-02"]

    def test_unknown_index(self, read_api):
        with pytest.raises(ValidationError):
            read_api.query_by_index("GSI7", "x")

    def test_open_tasks_only_pending_tasks(self, read_api):
        items = read_api.query_open_tasks_by_phone(PHONE)

        assert [item['SK'] for item in items] == ["task#2024-03-01"]

    def test_open_tasks_unknown_phone(self, read_api):
        assert read_api.query_open_tasks_by_phone("+10000000000") == []


class TestDelete:

    def test_delete(self, write_api, read_api):
        write_api.put(PHONE, "task#1", {})

        write_api.delete(PHONE, "task#1")

        assert read_api.get(PHONE, "task#1") is None

    def test_delete_missing_succeeds(self, write_api):
        write_api.delete(PHONE, "task#never")
