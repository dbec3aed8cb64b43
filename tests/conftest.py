"""Shared fixtures for kvbench tests."""

import pytest

from dynamodb_bench_tool.kvbench.models import BenchConfig
from tests.fakes import CountingValueGenerator, FakeStoreClient

TABLE = "bench-table"


@pytest.fixture
def fake_client() -> FakeStoreClient:
    client = FakeStoreClient()
    client.add_table(TABLE)
    return client


@pytest.fixture
def value_generator() -> CountingValueGenerator:
    return CountingValueGenerator()


@pytest.fixture
def config() -> BenchConfig:
    return BenchConfig(
        table_name=TABLE,
        attribute_name="id",
        table_poll_interval=0.0,
        table_max_wait=5.0,
    )
