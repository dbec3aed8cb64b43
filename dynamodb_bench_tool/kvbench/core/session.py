"""
Benchmark session for kvbench.

A session owns the store clients and the table lifecycle for one benchmark
run. After init() it only holds immutable state, so one instance can be
shared by many worker threads calling the read/write operations.
"""

import threading
from collections.abc import Callable, Sequence

from ..data_generator import DataGenerator
from ..exceptions import BenchStoreError
from ..logging_config import get_logger
from ..models import BenchConfig, TableDescriptor
from . import batch_operations, kv_operations
from .client import DaxClient, DynamoDBClient, StoreClient, build_dax_client, build_store_client
from .table_operations import TableLifecycleController

logger = get_logger(__name__)


class BenchSession:
    """Single entry point used by the benchmark harness."""

    def __init__(
        self,
        config: BenchConfig,
        client_factory: Callable[[BenchConfig], DynamoDBClient] | None = None,
        dax_factory: Callable[[BenchConfig, DynamoDBClient], DaxClient] | None = None,
        interrupt: threading.Event | None = None,
    ):
        self.config = config
        self._client_factory = client_factory or build_store_client
        self._dax_factory = dax_factory or build_dax_client
        self._interrupt = interrupt
        self._primary: DynamoDBClient | None = None
        self._dax: DaxClient | None = None
        self._client: StoreClient | None = None
        self._data_generator: DataGenerator | None = None
        self.table_name = config.table_name
        self.partition_key = config.attribute_name
        self.table: TableDescriptor | None = None

    @property
    def client(self) -> StoreClient:
        if self._client is None:
            raise BenchStoreError("Session not initialized; call init() first")
        return self._client

    @property
    def data_generator(self) -> DataGenerator:
        if self._data_generator is None:
            raise BenchStoreError("Session not initialized; call init() first")
        return self._data_generator

    def lifecycle(self) -> TableLifecycleController:
        return TableLifecycleController(
            self.client,
            poll_interval=self.config.table_poll_interval,
            max_wait=self.config.table_max_wait,
            interrupt=self._interrupt,
        )

    def init(self, data_generator: DataGenerator) -> None:
        """
        Build clients and prepare the table.

        Raises:
            CredentialsUnavailableError: If credentials cannot be resolved
            ProvisioningFailureError: If a programmable table never becomes ACTIVE
            ServiceFaultError: If the table does not exist after setup
        """
        logger.info("Initializing DynamoDB benchmark session")
        self._data_generator = data_generator

        self._primary = self._client_factory(self.config)
        self._client = self._primary

        if self.config.programmable_tables:
            logger.info("Creating table programmatically")
            self.lifecycle().ensure_table_exists(self.config.table_descriptor())

        self.table = self.lifecycle().describe_table(self.config.table_name)
        logger.info(f"Table description: {self.table}")

        if self.config.dax_endpoint:
            logger.info(f"Using DAX endpoint {self.config.dax_endpoint}")
            self._dax = self._dax_factory(self.config, self._primary)
            self._client = self._dax

        self.table_name = self.config.table_name
        self.partition_key = self.config.attribute_name
        logger.info("DynamoDB benchmark session initialized")

    def read_single(self, key: str) -> str | None:
        return kv_operations.read_single(
            self.client, self.table_name, self.partition_key, key, self.config.consistent_read
        )

    def write_single(self, key: str) -> str:
        return kv_operations.write_single(
            self.client, self.table_name, self.partition_key, key, self.data_generator
        )

    def read_bulk(self, keys: Sequence[str]) -> list[str]:
        return batch_operations.read_bulk(
            self.client,
            self.table_name,
            self.partition_key,
            keys,
            consistent_read=self.config.consistent_read,
            max_rounds=self.config.max_batch_rounds,
        )

    def write_bulk(self, keys: Sequence[str]) -> list[str]:
        return batch_operations.write_bulk(
            self.client,
            self.table_name,
            self.partition_key,
            keys,
            self.data_generator,
            max_rounds=self.config.max_batch_rounds,
        )

    def shutdown(self) -> None:
        """Delete a programmable table (best effort) and close both clients."""
        if self._client is not None and self.config.programmable_tables:
            self.lifecycle().delete_table_and_wait(self.table_name)

        if self._primary is not None:
            self._primary.close()
        if self._dax is not None:
            self._dax.close()

        self._client = None
        self._primary = None
        self._dax = None
        logger.info("DynamoDB benchmark session shut down")

    def connection_info(self) -> str:
        return (
            f"Table Name - {self.config.table_name} : "
            f"Attribute Name - {self.config.attribute_name} : "
            f"Consistent Read - {str(self.config.consistent_read).lower()}"
        )
