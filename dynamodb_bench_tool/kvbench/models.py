"""
Type models for kvbench operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_ATTRIBUTE_NAME,
    DEFAULT_MAX_BATCH_ROUNDS,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_REQUEST_TIMEOUT_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_READ_CAPACITY_UNITS,
    DEFAULT_TABLE_NAME,
    DEFAULT_VALUE_SIZE,
    DEFAULT_WRITE_CAPACITY_UNITS,
    TABLE_MAX_WAIT,
    TABLE_POLL_INTERVAL,
)


class TableStatus(Enum):
    """Lifecycle status of the benchmark table."""

    ABSENT = "ABSENT"
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    DELETING = "DELETING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_service(cls, value: str | None) -> "TableStatus":
        """Map a DynamoDB TableStatus string onto the lifecycle states."""
        if value is None:
            return cls.ABSENT
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass
class TableDescriptor:
    """Benchmark table metadata."""

    table_name: str
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME
    attribute_type: str = "S"
    read_capacity_units: int = DEFAULT_READ_CAPACITY_UNITS
    write_capacity_units: int = DEFAULT_WRITE_CAPACITY_UNITS
    status: TableStatus = TableStatus.ABSENT

    @classmethod
    def from_description(cls, table: dict[str, Any]) -> "TableDescriptor":
        """Build a descriptor from a DescribeTable/CreateTable TableDescription."""
        key_schema = table.get("KeySchema", [])
        hash_key = next(
            (k["AttributeName"] for k in key_schema if k.get("KeyType") == "HASH"),
            DEFAULT_ATTRIBUTE_NAME,
        )
        attribute_type = next(
            (
                a["AttributeType"]
                for a in table.get("AttributeDefinitions", [])
                if a.get("AttributeName") == hash_key
            ),
            "S",
        )
        throughput = table.get("ProvisionedThroughput", {})
        return cls(
            table_name=table["TableName"],
            attribute_name=hash_key,
            attribute_type=attribute_type,
            read_capacity_units=int(throughput.get("ReadCapacityUnits", 0)),
            write_capacity_units=int(throughput.get("WriteCapacityUnits", 0)),
            status=TableStatus.from_service(table.get("TableStatus")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table_name,
            "attribute_name": self.attribute_name,
            "attribute_type": self.attribute_type,
            "read_capacity_units": self.read_capacity_units,
            "write_capacity_units": self.write_capacity_units,
            "status": self.status.value,
        }


@dataclass
class BenchConfig:
    """Configuration consumed by a benchmark session."""

    table_name: str = DEFAULT_TABLE_NAME
    attribute_name: str = DEFAULT_ATTRIBUTE_NAME
    endpoint: str | None = None
    region: str | None = None
    profile: str | None = None
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    max_request_timeout: int = DEFAULT_MAX_REQUEST_TIMEOUT_MS  # milliseconds
    max_retries: int = DEFAULT_MAX_RETRIES
    compression: bool = False
    read_capacity_units: int = DEFAULT_READ_CAPACITY_UNITS
    write_capacity_units: int = DEFAULT_WRITE_CAPACITY_UNITS
    consistent_read: bool = False
    programmable_tables: bool = False
    dax_endpoint: str | None = None
    table_poll_interval: float = TABLE_POLL_INTERVAL
    table_max_wait: float = TABLE_MAX_WAIT
    max_batch_rounds: int = DEFAULT_MAX_BATCH_ROUNDS
    value_size: int = DEFAULT_VALUE_SIZE

    def table_descriptor(self) -> TableDescriptor:
        return TableDescriptor(
            table_name=self.table_name,
            attribute_name=self.attribute_name,
            read_capacity_units=self.read_capacity_units,
            write_capacity_units=self.write_capacity_units,
        )
