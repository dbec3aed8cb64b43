"""
Batched read/write operations for kvbench.

DynamoDB may satisfy a batch call only partially, returning the keys or
write requests it did not process. Both coordinators resubmit exactly that
remainder until the store reports nothing left, bounded by a round cap.
"""

from collections.abc import Sequence
from typing import Any

from ..constants import (
    ATTR_VALUE,
    DEFAULT_MAX_BATCH_ROUNDS,
    MAX_BATCH_GET_KEYS,
    MAX_BATCH_WRITE_ITEMS,
)
from ..data_generator import DataGenerator
from ..exceptions import InvalidArgumentError, ThrottledError
from ..logging_config import get_logger
from ..utils import ensure_unique_keys, render
from .client import StoreClient

logger = get_logger(__name__)


def _check_batch(keys: Sequence[str], limit: int, max_rounds: int) -> None:
    if max_rounds < 1:
        raise InvalidArgumentError(f"max_rounds must be at least 1, got {max_rounds}")
    ensure_unique_keys(keys)
    if not keys:
        raise InvalidArgumentError("Batch must contain at least one key")
    if len(keys) > limit:
        raise InvalidArgumentError(f"Batch of {len(keys)} keys exceeds the limit of {limit}")


def build_read_request(partition_key: str, keys: Sequence[str]) -> dict[str, Any]:
    """Build the KeysAndAttributes document for a batch get."""
    return {"Keys": [{partition_key: {"S": key}} for key in keys]}


def build_write_requests(
    partition_key: str, keys: Sequence[str], data_generator: DataGenerator
) -> list[dict[str, Any]]:
    """Pair each key with one freshly generated value as a PutRequest."""
    return [
        {
            "PutRequest": {
                "Item": {
                    partition_key: {"S": key},
                    ATTR_VALUE: {"S": data_generator.get_random_value()},
                }
            }
        }
        for key in keys
    ]


def read_bulk(
    client: StoreClient,
    table_name: str,
    partition_key: str,
    keys: Sequence[str],
    consistent_read: bool = False,
    max_rounds: int = DEFAULT_MAX_BATCH_ROUNDS,
) -> list[str]:
    """
    Read a batch of keys, draining unprocessed keys until none remain.

    Items are returned in the order DynamoDB produced them across rounds,
    not in input order. Keys that do not exist are simply absent.

    Args:
        client: Store client
        table_name: Table name
        partition_key: Partition key attribute name
        keys: Unique keys to read
        consistent_read: Use strongly consistent reads
        max_rounds: Maximum number of BatchGetItem calls

    Returns:
        String rendering of each retrieved item

    Raises:
        InvalidArgumentError: If keys repeat, exceed the batch limit or max_rounds < 1
        ThrottledError: If keys remain unprocessed after max_rounds
    """
    _check_batch(keys, MAX_BATCH_GET_KEYS, max_rounds)

    remaining = build_read_request(partition_key, keys)
    items: list[dict[str, Any]] = []

    for round_number in range(1, max_rounds + 1):
        # Unprocessed key documents may come back without the flag
        remaining["ConsistentRead"] = consistent_read
        logger.debug(f"BatchGetItem round {round_number}: {len(remaining['Keys'])} keys")

        response = client.batch_get_item({table_name: remaining})
        items.extend(response.get("Responses", {}).get(table_name, []))

        unprocessed = response.get("UnprocessedKeys", {}).get(table_name)
        if not unprocessed or not unprocessed.get("Keys"):
            return [render(item) for item in items]
        remaining = unprocessed

    raise ThrottledError(
        f"{len(remaining['Keys'])} keys still unprocessed after {max_rounds} BatchGetItem rounds"
    )


def write_bulk(
    client: StoreClient,
    table_name: str,
    partition_key: str,
    keys: Sequence[str],
    data_generator: DataGenerator,
    max_rounds: int = DEFAULT_MAX_BATCH_ROUNDS,
) -> list[str]:
    """
    Write a batch of keys, draining unprocessed items until none remain.

    Values are generated once per key; retried rounds resend the exact
    write requests DynamoDB returned as unprocessed.

    Args:
        client: Store client
        table_name: Table name
        partition_key: Partition key attribute name
        keys: Unique keys to write
        data_generator: Source of value payloads
        max_rounds: Maximum number of BatchWriteItem calls

    Returns:
        String rendering of every PutRequest originally built

    Raises:
        InvalidArgumentError: If keys repeat, exceed the batch limit or max_rounds < 1
        ThrottledError: If items remain unprocessed after max_rounds
    """
    _check_batch(keys, MAX_BATCH_WRITE_ITEMS, max_rounds)

    write_requests = build_write_requests(partition_key, keys, data_generator)
    remaining = write_requests

    for round_number in range(1, max_rounds + 1):
        logger.debug(f"BatchWriteItem round {round_number}: {len(remaining)} items")

        response = client.batch_write_item({table_name: remaining})

        unprocessed = response.get("UnprocessedItems", {}).get(table_name)
        if not unprocessed:
            return [render(request["PutRequest"]) for request in write_requests]
        remaining = unprocessed

    raise ThrottledError(
        f"{len(remaining)} items still unprocessed after {max_rounds} BatchWriteItem rounds"
    )
