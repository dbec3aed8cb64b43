"""
Single-item operations for kvbench.
"""

from ..constants import ATTR_VALUE
from ..data_generator import DataGenerator
from ..utils import render
from .client import StoreClient


def read_single(
    client: StoreClient,
    table_name: str,
    partition_key: str,
    key: str,
    consistent_read: bool = False,
) -> str | None:
    """
    Read one item by key.

    Args:
        client: Store client
        table_name: Table name
        partition_key: Partition key attribute name
        key: Key to read
        consistent_read: Use a strongly consistent read

    Returns:
        String rendering of the item, or None if it does not exist
    """
    item = client.get_item(table_name, {partition_key: {"S": key}}, consistent_read)
    if item is None:
        return None
    return render(item)


def write_single(
    client: StoreClient,
    table_name: str,
    partition_key: str,
    key: str,
    data_generator: DataGenerator,
) -> str:
    """
    Write one item with a freshly generated value.

    Returns:
        String rendering of the PutItem response
    """
    item = {
        partition_key: {"S": key},
        ATTR_VALUE: {"S": data_generator.get_random_value()},
    }
    return render(client.put_item(table_name, item))
