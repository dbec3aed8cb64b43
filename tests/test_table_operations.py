"""Tests for the table lifecycle controller."""

import threading

import pytest

from dynamodb_bench_tool.kvbench.core.table_operations import TableLifecycleController
from dynamodb_bench_tool.kvbench.exceptions import ProvisioningFailureError, ServiceFaultError
from dynamodb_bench_tool.kvbench.models import TableDescriptor, TableStatus
from tests.fakes import FakeStoreClient, not_found

NEW_TABLE = "fresh-table"


@pytest.fixture
def empty_client() -> FakeStoreClient:
    return FakeStoreClient()


@pytest.fixture
def descriptor() -> TableDescriptor:
    return TableDescriptor(
        table_name=NEW_TABLE, attribute_name="id", read_capacity_units=7, write_capacity_units=3
    )


def controller(client, max_wait=5.0, poll_interval=0.0, interrupt=None):
    return TableLifecycleController(
        client, poll_interval=poll_interval, max_wait=max_wait, interrupt=interrupt
    )


def test_ensure_table_exists_creates_and_waits_for_active(empty_client, descriptor):
    empty_client.creating_polls = 3

    status = controller(empty_client).ensure_table_exists(descriptor)

    assert status is TableStatus.ACTIVE
    assert empty_client.create_calls == 1
    assert empty_client.describe_calls == 4


def test_create_table_uses_hash_key_and_capacity(empty_client, descriptor):
    assert controller(empty_client).create_table_if_not_exists(descriptor) is True

    described = controller(empty_client).describe_table(NEW_TABLE)
    assert described.attribute_name == "id"
    assert described.attribute_type == "S"
    assert described.read_capacity_units == 7
    assert described.write_capacity_units == 3


def test_ensure_table_exists_is_idempotent(empty_client, descriptor):
    lifecycle = controller(empty_client)

    assert lifecycle.ensure_table_exists(descriptor) is TableStatus.ACTIVE
    assert lifecycle.create_table_if_not_exists(descriptor) is False
    assert lifecycle.ensure_table_exists(descriptor) is TableStatus.ACTIVE
    assert lifecycle.describe_table(NEW_TABLE).status is TableStatus.ACTIVE


def test_ensure_table_exists_times_out_while_creating(empty_client, descriptor):
    empty_client.created_status = "CREATING"

    with pytest.raises(ProvisioningFailureError, match="did not become ACTIVE"):
        controller(empty_client, max_wait=0.05, poll_interval=0.01).ensure_table_exists(
            descriptor
        )


def test_wait_is_interruptible(empty_client, descriptor):
    empty_client.created_status = "CREATING"
    interrupt = threading.Event()
    interrupt.set()

    with pytest.raises(ProvisioningFailureError, match="interrupted"):
        controller(empty_client, poll_interval=10.0, interrupt=interrupt).ensure_table_exists(
            descriptor
        )


def test_wait_tolerates_table_not_yet_visible(empty_client):
    empty_client.add_table(NEW_TABLE)
    calls = {"count": 0}
    original = empty_client.describe_table

    def flaky_describe(table_name):
        calls["count"] += 1
        if calls["count"] == 1:
            raise not_found(table_name)
        return original(table_name)

    empty_client.describe_table = flaky_describe

    assert controller(empty_client).wait_until_active(NEW_TABLE) is TableStatus.ACTIVE
    assert calls["count"] == 2


def test_create_propagates_other_service_faults(empty_client, descriptor):
    def reject(**kwargs):
        raise ServiceFaultError("no", 400, "AccessDeniedException")

    empty_client.create_table = reject

    with pytest.raises(ServiceFaultError):
        controller(empty_client).ensure_table_exists(descriptor)


def test_describe_missing_table_raises_service_fault(empty_client):
    with pytest.raises(ServiceFaultError) as exc_info:
        controller(empty_client).describe_table("nope")

    assert exc_info.value.error_code == "ResourceNotFoundException"


def test_delete_table_and_wait_removes_table(empty_client):
    empty_client.add_table(NEW_TABLE)
    empty_client.deleting_polls = 2

    assert controller(empty_client).delete_table_and_wait(NEW_TABLE) is True

    assert NEW_TABLE not in empty_client.tables
    # initial delete plus the cleanup delete
    assert empty_client.delete_calls == 2
    with pytest.raises(ServiceFaultError):
        empty_client.describe_table(NEW_TABLE)


def test_delete_table_and_wait_absorbs_faults(empty_client):
    empty_client.add_table(NEW_TABLE)
    empty_client.deleting_polls = 1000

    assert controller(empty_client, max_wait=0.0).delete_table_and_wait(NEW_TABLE) is False

    assert empty_client.delete_calls == 2


def test_delete_missing_table_is_best_effort(empty_client):
    assert controller(empty_client).delete_table_and_wait("never-existed") is False

    assert empty_client.delete_calls == 2


def test_drop_table_waits_until_absent(empty_client):
    empty_client.add_table(NEW_TABLE)
    empty_client.deleting_polls = 2

    assert controller(empty_client).drop_table(NEW_TABLE) is TableStatus.ABSENT
    assert empty_client.delete_calls == 1


def test_drop_missing_table_raises_not_found(empty_client):
    with pytest.raises(ServiceFaultError) as exc_info:
        controller(empty_client).drop_table("never-existed")

    assert exc_info.value.error_code == "ResourceNotFoundException"
