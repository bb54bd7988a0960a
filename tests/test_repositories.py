"""
Tests for the record store implementations.

- InMemoryDishRepository: copy semantics, update on missing keys
- DynamoDishRepository: boto3 Table calls, Decimal conversion, pagination,
  translation of botocore errors (Table is a Mock, no AWS access)
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError

from app.exceptions import DishNotFoundError, StoreUnavailableError
from repositories import DynamoDishRepository, InMemoryDishRepository
from repositories.dish_repository import build_update_expression
from test_helpers import make_client_error, make_dish


# =============================================================================
# IN-MEMORY STORE
# =============================================================================


def test_memory_put_and_get_return_copies():
    repo = InMemoryDishRepository()
    record = make_dish("1")

    stored = repo.put_record(record)
    stored["userVotes"]["x@example.com"] = "good"
    record["name"] = "changed"

    assert repo.get_by_key("1") == make_dish("1")


def test_memory_get_missing():
    assert InMemoryDishRepository().get_by_key("nope") is None


def test_memory_update_fields_all_new():
    repo = InMemoryDishRepository([make_dish("1")])

    updated = repo.update_fields("1", {"good": 3, "userVotes": {"a@x.com": "good"}})

    assert updated["good"] == 3
    assert updated["name"] == "Chicken Tikka Masala"
    assert repo.get_by_key("1")["userVotes"] == {"a@x.com": "good"}


def test_memory_update_fields_updated_new():
    repo = InMemoryDishRepository([make_dish("1")])

    updated = repo.update_fields("1", {"bad": 2}, return_values="UPDATED_NEW")

    assert updated == {"bad": 2}


def test_memory_update_missing_raises_not_found():
    repo = InMemoryDishRepository()

    with pytest.raises(DishNotFoundError):
        repo.update_fields("nope", {"good": 1})

    assert repo.scan_all() == []


def test_memory_scan_all():
    repo = InMemoryDishRepository([make_dish("1"), make_dish("2")])

    assert sorted(d["id"] for d in repo.scan_all()) == ["1", "2"]
    assert repo.check() is True


# =============================================================================
# DYNAMODB STORE
# =============================================================================


@pytest.fixture
def table():
    table = MagicMock()
    table.name = "buffetrating-test"
    return table


def test_build_update_expression_uses_placeholders():
    params = build_update_expression({"name": "Soup", "good": 1, "meals": [1.5]})

    assert params["UpdateExpression"] == "SET #f0 = :v0, #f1 = :v1, #f2 = :v2"
    assert params["ExpressionAttributeNames"] == {"#f0": "name", "#f1": "good", "#f2": "meals"}
    assert params["ExpressionAttributeValues"][":v2"] == [Decimal("1.5")]


def test_dynamo_get_converts_decimals(table):
    table.get_item.return_value = {
        "Item": {"id": "1", "good": Decimal("2"), "bad": Decimal("0"), "meals": [Decimal("1.5")], "userVotes": {}}
    }
    repo = DynamoDishRepository(table)

    dish = repo.get_by_key("1")

    table.get_item.assert_called_once_with(Key={"id": "1"})
    assert dish["good"] == 2 and type(dish["good"]) is int
    assert dish["meals"] == [1.5]


def test_dynamo_get_missing(table):
    table.get_item.return_value = {}

    assert DynamoDishRepository(table).get_by_key("nope") is None


def test_dynamo_put_record(table):
    repo = DynamoDishRepository(table)
    record = make_dish("1", meals=[0.5])

    result = repo.put_record(record)

    item = table.put_item.call_args.kwargs["Item"]
    assert item["meals"] == [Decimal("0.5")]
    assert item["userVotes"] == {}
    assert result == record


def test_dynamo_update_fields_is_conditional(table):
    table.update_item.return_value = {
        "Attributes": {"id": "1", "good": Decimal("1"), "bad": Decimal("0"), "userVotes": {"a@x.com": "good"}}
    }
    repo = DynamoDishRepository(table)

    dish = repo.update_fields("1", {"good": 1, "bad": 0, "userVotes": {"a@x.com": "good"}})

    kwargs = table.update_item.call_args.kwargs
    assert kwargs["Key"] == {"id": "1"}
    assert kwargs["ConditionExpression"] == "attribute_exists(#key)"
    assert kwargs["ExpressionAttributeNames"]["#key"] == "id"
    assert kwargs["ReturnValues"] == "ALL_NEW"
    assert kwargs["UpdateExpression"].startswith("SET ")
    assert dish == {"id": "1", "good": 1, "bad": 0, "userVotes": {"a@x.com": "good"}}


def test_dynamo_update_missing_raises_not_found(table):
    table.update_item.side_effect = make_client_error("ConditionalCheckFailedException")

    with pytest.raises(DishNotFoundError):
        DynamoDishRepository(table).update_fields("nope", {"good": 1})


def test_dynamo_update_throttled_raises_store_unavailable(table):
    table.update_item.side_effect = make_client_error("ProvisionedThroughputExceededException")

    with pytest.raises(StoreUnavailableError) as exc_info:
        DynamoDishRepository(table).update_fields("1", {"good": 1})

    assert exc_info.value.operation == "update_item"


def test_dynamo_connection_error_raises_store_unavailable(table):
    table.get_item.side_effect = EndpointConnectionError(endpoint_url="http://localhost:8000")

    with pytest.raises(StoreUnavailableError):
        DynamoDishRepository(table).get_by_key("1")


def test_dynamo_put_failure(table):
    table.put_item.side_effect = make_client_error("ResourceNotFoundException", "PutItem")

    with pytest.raises(StoreUnavailableError):
        DynamoDishRepository(table).put_record(make_dish("1"))


def test_dynamo_scan_follows_pages(table):
    table.scan.side_effect = [
        {"Items": [{"id": "1", "good": Decimal("1")}], "LastEvaluatedKey": {"id": "1"}},
        {"Items": [{"id": "2", "good": Decimal("0")}]},
    ]

    dishes = DynamoDishRepository(table).scan_all()

    assert dishes == [{"id": "1", "good": 1}, {"id": "2", "good": 0}]
    assert table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": "1"}}


def test_dynamo_scan_failure(table):
    table.scan.side_effect = make_client_error("InternalServerError", "Scan")

    with pytest.raises(StoreUnavailableError):
        DynamoDishRepository(table).scan_all()


def test_dynamo_check(table):
    repo = DynamoDishRepository(table)
    assert repo.check() is True

    table.load.side_effect = make_client_error("ResourceNotFoundException", "DescribeTable")
    assert repo.check() is False


# =============================================================================
# STORE SELECTION
# =============================================================================


def test_get_dish_store_memory_backend(monkeypatch):
    from api import dependencies
    from app.config import StoreBackend

    monkeypatch.setattr(dependencies.settings, "store_backend", StoreBackend.MEMORY)
    dependencies.get_dish_store.cache_clear()
    try:
        store = dependencies.get_dish_store()
        assert isinstance(store, InMemoryDishRepository)
        assert dependencies.get_dish_store() is store
    finally:
        dependencies.get_dish_store.cache_clear()


def test_get_dish_store_dynamodb_backend(monkeypatch, table):
    from api import dependencies
    from app.config import StoreBackend

    monkeypatch.setattr(dependencies.settings, "store_backend", StoreBackend.DYNAMODB)
    monkeypatch.setattr(dependencies.settings, "table_name", "dishes-test")
    calls = []

    def fake_build_table(table_name, region_name, endpoint_url=None, max_attempts=3):
        calls.append((table_name, region_name))
        return table

    monkeypatch.setattr(dependencies, "build_table", fake_build_table)
    dependencies.get_dish_store.cache_clear()
    try:
        store = dependencies.get_dish_store()
        assert isinstance(store, DynamoDishRepository)
        assert store.table is table
        assert calls == [("dishes-test", dependencies.settings.aws_region)]
    finally:
        dependencies.get_dish_store.cache_clear()
