"""Tests for models, utils and the data generator."""

import pytest

from dynamodb_bench_tool.kvbench.data_generator import RandomValueGenerator
from dynamodb_bench_tool.kvbench.exceptions import InvalidArgumentError
from dynamodb_bench_tool.kvbench.models import BenchConfig, TableDescriptor, TableStatus
from dynamodb_bench_tool.kvbench.utils import (
    ensure_unique_keys,
    render,
    validate_key,
    validate_table_name,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("ACTIVE", TableStatus.ACTIVE),
        ("CREATING", TableStatus.CREATING),
        ("DELETING", TableStatus.DELETING),
        ("UPDATING", TableStatus.UNKNOWN),
        (None, TableStatus.ABSENT),
    ],
)
def test_table_status_from_service(raw, expected):
    assert TableStatus.from_service(raw) is expected


def test_descriptor_from_description():
    descriptor = TableDescriptor.from_description(
        {
            "TableName": "bench",
            "TableStatus": "ACTIVE",
            "KeySchema": [{"AttributeName": "pk", "KeyType": "HASH"}],
            "AttributeDefinitions": [{"AttributeName": "pk", "AttributeType": "S"}],
            "ProvisionedThroughput": {"ReadCapacityUnits": 10, "WriteCapacityUnits": 20},
        }
    )

    assert descriptor == TableDescriptor(
        table_name="bench",
        attribute_name="pk",
        attribute_type="S",
        read_capacity_units=10,
        write_capacity_units=20,
        status=TableStatus.ACTIVE,
    )


def test_config_table_descriptor_starts_absent():
    descriptor = BenchConfig(table_name="bench", read_capacity_units=3).table_descriptor()

    assert descriptor.status is TableStatus.ABSENT
    assert descriptor.read_capacity_units == 3


def test_ensure_unique_keys_names_duplicates():
    ensure_unique_keys(["a", "b"])

    with pytest.raises(InvalidArgumentError, match="a, c"):
        ensure_unique_keys(["c", "a", "b", "a", "c"])


def test_render_is_stable():
    assert render({"b": 1, "a": {"S": "x"}}) == '{"a": {"S": "x"}, "b": 1}'


def test_validators():
    assert validate_table_name("bench-table_1.x")
    assert validate_key("k1")
    with pytest.raises(InvalidArgumentError):
        validate_table_name("a!")
    with pytest.raises(InvalidArgumentError):
        validate_key("")


def test_random_value_generator_size_and_seed():
    first = RandomValueGenerator(value_size=32, seed=7)
    second = RandomValueGenerator(value_size=32, seed=7)

    value = first.get_random_value()
    assert len(value) == 32
    assert value.isalnum()
    assert value == second.get_random_value()


def test_random_value_generator_rejects_non_positive_size():
    with pytest.raises(ValueError):
        RandomValueGenerator(value_size=0)
