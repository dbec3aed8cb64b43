"""
Table lifecycle operations for kvbench.

The benchmark table moves ABSENT -> CREATING -> ACTIVE on setup and
ACTIVE -> DELETING -> ABSENT on teardown. Waits poll DescribeTable at a
fixed interval, bounded by a maximum wait.
"""

import threading
import time

from ..constants import RESOURCE_IN_USE, RESOURCE_NOT_FOUND, TABLE_MAX_WAIT, TABLE_POLL_INTERVAL
from ..exceptions import BenchStoreError, ProvisioningFailureError, ServiceFaultError
from ..logging_config import get_logger
from ..models import TableDescriptor, TableStatus
from .client import StoreClient

logger = get_logger(__name__)


class TableLifecycleController:
    """Create, describe and delete the benchmark table."""

    def __init__(
        self,
        client: StoreClient,
        poll_interval: float = TABLE_POLL_INTERVAL,
        max_wait: float = TABLE_MAX_WAIT,
        interrupt: threading.Event | None = None,
    ):
        """
        Initialize the controller.

        Args:
            client: Store client used for table management calls
            poll_interval: Seconds between DescribeTable calls
            max_wait: Upper bound in seconds for any wait
            interrupt: Event that aborts an in-progress wait when set
        """
        self.client = client
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.interrupt = interrupt or threading.Event()

    def describe_table(self, table_name: str) -> TableDescriptor:
        """
        Fetch current table metadata.

        Raises:
            ServiceFaultError: If the table does not exist (ResourceNotFoundException)
        """
        return TableDescriptor.from_description(self.client.describe_table(table_name))

    def create_table_if_not_exists(self, descriptor: TableDescriptor) -> bool:
        """
        Create the table with a single HASH key and provisioned throughput.

        Returns:
            True if the table was created, False if it already existed
        """
        logger.info(f"Creating table '{descriptor.table_name}'")
        try:
            self.client.create_table(
                TableName=descriptor.table_name,
                KeySchema=[{"AttributeName": descriptor.attribute_name, "KeyType": "HASH"}],
                AttributeDefinitions=[
                    {
                        "AttributeName": descriptor.attribute_name,
                        "AttributeType": descriptor.attribute_type,
                    }
                ],
                ProvisionedThroughput={
                    "ReadCapacityUnits": descriptor.read_capacity_units,
                    "WriteCapacityUnits": descriptor.write_capacity_units,
                },
            )
            return True
        except ServiceFaultError as e:
            if e.error_code == RESOURCE_IN_USE:
                logger.info("Table already exists.  No problem!")
                return False
            raise

    def ensure_table_exists(self, descriptor: TableDescriptor) -> TableStatus:
        """
        Create the table if absent and wait until it is ACTIVE.

        Returns:
            TableStatus.ACTIVE

        Raises:
            ProvisioningFailureError: If the table never becomes ACTIVE in time
        """
        self.create_table_if_not_exists(descriptor)
        logger.debug("Waiting until the table is in ACTIVE state")
        return self.wait_until_active(descriptor.table_name)

    def wait_until_active(self, table_name: str) -> TableStatus:
        """
        Poll DescribeTable until the table reports ACTIVE.

        Raises:
            ProvisioningFailureError: On timeout or interruption
        """
        deadline = time.monotonic() + self.max_wait
        while True:
            try:
                status = self.describe_table(table_name).status
            except ServiceFaultError as e:
                # Freshly created tables can briefly be invisible to DescribeTable
                if e.error_code != RESOURCE_NOT_FOUND:
                    raise
                status = TableStatus.ABSENT

            logger.debug(f"Table '{table_name}' status: {status.value}")
            if status is TableStatus.ACTIVE:
                return status

            self._sleep_or_fail(deadline, f"Table '{table_name}' did not become ACTIVE")

    def wait_until_deleted(self, table_name: str) -> TableStatus:
        """
        Poll DescribeTable until the table is gone.

        Raises:
            ProvisioningFailureError: On timeout or interruption
        """
        deadline = time.monotonic() + self.max_wait
        while True:
            try:
                status = self.describe_table(table_name).status
            except ServiceFaultError as e:
                if e.error_code == RESOURCE_NOT_FOUND:
                    return TableStatus.ABSENT
                raise

            logger.debug(f"Table '{table_name}' status: {status.value}")
            self._sleep_or_fail(deadline, f"Table '{table_name}' was not deleted")

    def drop_table(self, table_name: str) -> TableStatus:
        """
        Delete the table and wait until DescribeTable no longer finds it.

        Raises:
            ServiceFaultError: If the table does not exist or the delete is rejected
            ProvisioningFailureError: On timeout or interruption
        """
        logger.info(f"Issuing DeleteTable request for {table_name}")
        self.client.delete_table(table_name)
        logger.info(f"Waiting for {table_name} to be deleted...this may take a while...")
        return self.wait_until_deleted(table_name)

    def delete_table_and_wait(self, table_name: str) -> bool:
        """
        Delete the table and wait for it to disappear, best effort.

        Faults are logged and absorbed so that shutdown can always finish.
        A final direct delete is issued afterwards, since DynamoDB rejects
        a delete sent while the table is still DELETING from a prior call.

        Returns:
            True if the table was confirmed gone
        """
        deleted = False
        try:
            deleted = self.drop_table(table_name) is TableStatus.ABSENT
        except BenchStoreError as e:
            logger.error(f"DeleteTable request failed for {table_name}: {e}")

        try:
            self.client.delete_table(table_name)
        except BenchStoreError as e:
            logger.debug(f"Cleanup delete for {table_name} ignored: {e}")
        return deleted

    def _sleep_or_fail(self, deadline: float, message: str) -> None:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise ProvisioningFailureError(f"{message} within {self.max_wait}s")
        try:
            interrupted = self.interrupt.wait(min(self.poll_interval, remaining))
        except KeyboardInterrupt:
            interrupted = True
        if interrupted:
            raise ProvisioningFailureError(f"{message}: wait was interrupted")
