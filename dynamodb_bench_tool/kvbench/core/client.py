"""
DynamoDB and DAX client wrappers with error handling.

Both wrappers expose the same operation surface (StoreClient) so the batch
coordinators and the session never care which one they are talking to.
"""

import os
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from ..constants import DISCOVERY_ENV, DISCOVERY_ENV_AWS
from ..exceptions import CredentialsUnavailableError, InvalidArgumentError, ThrottledError
from ..logging_config import get_logger
from ..models import BenchConfig
from .error_classifier import classify_error

logger = get_logger(__name__)


class StoreClient(Protocol):
    """Operation surface shared by the DynamoDB and DAX clients."""

    def get_item(
        self, table_name: str, key: dict[str, Any], consistent_read: bool = False
    ) -> dict[str, Any] | None: ...

    def put_item(self, table_name: str, item: dict[str, Any]) -> dict[str, Any]: ...

    def batch_get_item(self, request_items: dict[str, Any]) -> dict[str, Any]: ...

    def batch_write_item(self, request_items: dict[str, Any]) -> dict[str, Any]: ...

    def describe_table(self, table_name: str) -> dict[str, Any]: ...

    def create_table(self, **kwargs: Any) -> dict[str, Any]: ...

    def delete_table(self, table_name: str) -> dict[str, Any]: ...

    def close(self) -> None: ...


class _ErrorHandlingClient:
    """Shared plumbing: run a low-level call and translate its faults."""

    def _call(self, client: Any, operation: str, **kwargs: Any) -> dict[str, Any]:
        try:
            return getattr(client, operation)(**kwargs)  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e)
            raise  # For type checker

    def _handle_error(self, error: Exception) -> None:
        """
        Convert botocore errors to kvbench exceptions.

        Raises:
            ThrottledError: If capacity was exceeded (stack trimmed)
            ServiceFaultError: For any other service rejection
            TransportFaultError: If no definitive response was received
        """
        fault = classify_error(error)
        if isinstance(fault, ThrottledError):
            raise fault from None
        raise fault from error


class DynamoDBClient(_ErrorHandlingClient):
    """DynamoDB low-level client wrapper with error handling."""

    def __init__(self, session: boto3.Session, config: Config, endpoint: str | None = None):
        """
        Initialize DynamoDB client.

        Args:
            session: boto3 session holding resolved credentials and region
            config: botocore client configuration
            endpoint: Endpoint URL override (optional, e.g. DynamoDB Local)
        """
        self.client = session.client("dynamodb", config=config, endpoint_url=endpoint)

    def get_item(
        self, table_name: str, key: dict[str, Any], consistent_read: bool = False
    ) -> dict[str, Any] | None:
        """
        Get item by key.

        Returns:
            Item if found, None otherwise
        """
        response = self._call(
            self.client,
            "get_item",
            TableName=table_name,
            Key=key,
            ConsistentRead=consistent_read,
        )
        return response.get("Item")

    def put_item(self, table_name: str, item: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.client, "put_item", TableName=table_name, Item=item)

    def batch_get_item(self, request_items: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.client, "batch_get_item", RequestItems=request_items)

    def batch_write_item(self, request_items: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.client, "batch_write_item", RequestItems=request_items)

    def describe_table(self, table_name: str) -> dict[str, Any]:
        """
        Describe a table.

        Returns:
            TableDescription

        Raises:
            ServiceFaultError: With error code ResourceNotFoundException if absent
        """
        return self._call(self.client, "describe_table", TableName=table_name)["Table"]

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        return self._call(self.client, "create_table", **kwargs)["TableDescription"]

    def delete_table(self, table_name: str) -> dict[str, Any]:
        return self._call(self.client, "delete_table", TableName=table_name)["TableDescription"]

    def close(self) -> None:
        self.client.close()


class DaxClient(_ErrorHandlingClient):
    """
    DAX client wrapper.

    DAX only serves the data plane, so table management calls go to the
    DynamoDB client the session built first.
    """

    def __init__(self, dax: Any, control: DynamoDBClient):
        self.dax = dax
        self.control = control

    def get_item(
        self, table_name: str, key: dict[str, Any], consistent_read: bool = False
    ) -> dict[str, Any] | None:
        response = self._call(
            self.dax,
            "get_item",
            TableName=table_name,
            Key=key,
            ConsistentRead=consistent_read,
        )
        return response.get("Item")

    def put_item(self, table_name: str, item: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.dax, "put_item", TableName=table_name, Item=item)

    def batch_get_item(self, request_items: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.dax, "batch_get_item", RequestItems=request_items)

    def batch_write_item(self, request_items: dict[str, Any]) -> dict[str, Any]:
        return self._call(self.dax, "batch_write_item", RequestItems=request_items)

    def describe_table(self, table_name: str) -> dict[str, Any]:
        return self.control.describe_table(table_name)

    def create_table(self, **kwargs: Any) -> dict[str, Any]:
        return self.control.create_table(**kwargs)

    def delete_table(self, table_name: str) -> dict[str, Any]:
        return self.control.delete_table(table_name)

    def close(self) -> None:
        self.dax.close()


def resolve_session(region: str | None = None, profile: str | None = None) -> boto3.Session:
    """
    Resolve a boto3 session from the execution environment.

    When DISCOVERY_ENV is unset or AWS, the default credential chain is used
    (instance role, environment, shared config). Otherwise credentials must
    come from a local profile, and a missing profile fails fast.

    Args:
        region: AWS region (optional, uses SDK default)
        profile: AWS profile used outside AWS (optional, uses 'default')

    Returns:
        boto3 session

    Raises:
        CredentialsUnavailableError: If the local profile yields no credentials
    """
    discovery_env = os.environ.get(DISCOVERY_ENV)
    logger.info(f"Discovery environment: {discovery_env}")

    if discovery_env is None or discovery_env == DISCOVERY_ENV_AWS:
        return boto3.Session(region_name=region)

    solution = (
        "Cannot load the credentials from the credential profiles file. "
        "Make sure your credentials file is at the correct location "
        "(~/.aws/credentials) and is in a valid format."
    )
    try:
        session = boto3.Session(profile_name=profile or "default", region_name=region)
    except ProfileNotFound as e:
        raise CredentialsUnavailableError(f"{e}. {solution}") from e

    if session.get_credentials() is None:
        raise CredentialsUnavailableError(solution)
    return session


def build_client_config(config: BenchConfig) -> Config:
    """
    Build the botocore configuration for the benchmark client.

    max_retries <= 0 disables retries entirely.
    """
    timeout = config.max_request_timeout / 1000.0
    return Config(
        max_pool_connections=config.max_connections,
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"max_attempts": max(config.max_retries, 0), "mode": "standard"},
        disable_request_compression=not config.compression,
    )


def build_store_client(config: BenchConfig) -> DynamoDBClient:
    """
    Build the primary DynamoDB client for a session.

    Raises:
        InvalidArgumentError: If an endpoint is configured without a region
        CredentialsUnavailableError: If credentials cannot be resolved
    """
    if config.endpoint and not config.region:
        raise InvalidArgumentError("If you set the endpoint you must set the region")

    session = resolve_session(config.region, config.profile)
    logger.debug(
        f"Client config: max_connections={config.max_connections}, "
        f"timeout={config.max_request_timeout}ms, retries={config.max_retries}, "
        f"compression={config.compression}"
    )
    return DynamoDBClient(session, build_client_config(config), config.endpoint)


def build_dax_client(config: BenchConfig, control: DynamoDBClient) -> DaxClient:
    """
    Build a DAX client pointed at the configured cluster endpoint.

    Raises:
        InvalidArgumentError: If the amazon-dax-client package is not installed
    """
    try:
        from amazondax import AmazonDaxClient
    except ImportError as e:
        raise InvalidArgumentError(
            "DAX endpoint configured but amazon-dax-client is not installed "
            "(pip install 'dynamodb-bench-tool[dax]')"
        ) from e

    session = resolve_session(config.region, config.profile)
    dax = AmazonDaxClient(
        session=session, region_name=config.region, endpoint_url=config.dax_endpoint
    )
    return DaxClient(dax, control)
