"""Tests for the benchmark session."""

import json
import threading
from unittest.mock import MagicMock, patch

import pytest

from dynamodb_bench_tool.kvbench.core.session import BenchSession
from dynamodb_bench_tool.kvbench.exceptions import (
    BenchStoreError,
    InvalidArgumentError,
    ProvisioningFailureError,
    ServiceFaultError,
)
from dynamodb_bench_tool.kvbench.models import TableStatus
from tests.conftest import TABLE
from tests.fakes import FakeStoreClient


def make_session(config, client, dax=None):
    return BenchSession(
        config,
        client_factory=lambda _config: client,
        dax_factory=lambda _config, _primary: dax,
    )


@pytest.fixture
def session(config, fake_client, value_generator):
    session = make_session(config, fake_client)
    session.init(value_generator)
    yield session
    session.shutdown()


def test_default_client_factory_builds_store_client(config, fake_client, value_generator):
    with patch(
        "dynamodb_bench_tool.kvbench.core.session.build_store_client", return_value=fake_client
    ) as factory:
        session = BenchSession(config)
    session.init(value_generator)

    factory.assert_called_once_with(config)
    assert session.client is fake_client


def test_write_single_then_read_single_returns_item(session):
    outcome = session.write_single("k1")
    item = session.read_single("k1")

    assert isinstance(outcome, str)
    assert item is not None
    assert '"k1"' in item
    assert json.loads(item)["value"]["S"] == "value-1"


def test_read_single_missing_key_returns_none(session):
    assert session.read_single("missing-key") is None


def test_read_single_honors_consistent_read(config, fake_client, value_generator):
    config.consistent_read = True
    session = make_session(config, fake_client)
    session.init(value_generator)

    session.read_single("k1")

    assert fake_client.get_calls[-1]["consistent"] is True


def test_bulk_round_trip(session, fake_client):
    fake_client.throttle_write = [{"b"}]
    fake_client.throttle_get = [{"b", "c"}]

    written = session.write_bulk(["a", "b", "c"])
    read = session.read_bulk(["a", "b", "c"])

    assert len(written) == 3
    assert sorted(json.loads(item)["id"]["S"] for item in read) == ["a", "b", "c"]


def test_read_bulk_duplicate_keys_rejected(session, fake_client):
    with pytest.raises(InvalidArgumentError):
        session.read_bulk(["a", "a"])

    assert fake_client.batch_get_calls == []


def test_calls_before_init_fail(config, fake_client):
    session = make_session(config, fake_client)

    with pytest.raises(BenchStoreError, match="not initialized"):
        session.read_single("k1")


def test_init_fails_when_table_missing(config, value_generator):
    session = make_session(config, FakeStoreClient())

    with pytest.raises(ServiceFaultError):
        session.init(value_generator)


def test_programmable_table_created_and_deleted(config, value_generator):
    client = FakeStoreClient()
    client.creating_polls = 2
    config.programmable_tables = True
    session = make_session(config, client)

    session.init(value_generator)

    assert session.table is not None
    assert session.table.status is TableStatus.ACTIVE
    assert client.create_calls == 1

    session.shutdown()

    assert TABLE not in client.tables
    assert client.closed is True


def test_programmable_table_provisioning_failure(config, value_generator):
    client = FakeStoreClient()
    client.created_status = "CREATING"
    config.programmable_tables = True
    config.table_max_wait = 0.02
    config.table_poll_interval = 0.005

    with pytest.raises(ProvisioningFailureError):
        make_session(config, client).init(value_generator)


def test_programmable_init_interrupted(config, value_generator):
    client = FakeStoreClient()
    client.created_status = "CREATING"
    config.programmable_tables = True
    interrupt = threading.Event()
    interrupt.set()
    session = BenchSession(config, client_factory=lambda _c: client, interrupt=interrupt)

    with pytest.raises(ProvisioningFailureError, match="interrupted"):
        session.init(value_generator)


def test_shutdown_without_programmable_tables_keeps_table(session, fake_client):
    session.shutdown()

    assert TABLE in fake_client.tables
    assert fake_client.closed is True
    assert fake_client.delete_calls == 0


def test_dax_client_swapped_in_after_describe(config, fake_client, value_generator):
    dax = MagicMock()
    dax.get_item.return_value = None
    config.dax_endpoint = "dax://my-cluster.abc.dax-clusters.us-east-1.amazonaws.com"
    session = make_session(config, fake_client, dax=dax)

    session.init(value_generator)
    assert session.read_single("k1") is None

    dax.get_item.assert_called_once_with(TABLE, {"id": {"S": "k1"}}, False)
    assert fake_client.get_calls == []

    session.shutdown()
    dax.close.assert_called_once()
    assert fake_client.closed is True


def test_connection_info(config, fake_client):
    config.consistent_read = True

    info = make_session(config, fake_client).connection_info()

    assert info == f"Table Name - {TABLE} : Attribute Name - id : Consistent Read - true"


def test_session_shared_across_threads(session, fake_client):
    keys = [f"key-{i}" for i in range(20)]
    errors = []

    def worker(key):
        try:
            session.write_single(key)
            assert session.read_single(key) is not None
        except Exception as e:  # noqa: BLE001
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(key,)) for key in keys]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert set(keys) <= set(fake_client.items)
