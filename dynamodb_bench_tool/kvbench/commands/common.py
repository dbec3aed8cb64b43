"""
Shared options and error reporting for kvbench commands.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, NoReturn

import click

from ..constants import (
    DEFAULT_ATTRIBUTE_NAME,
    DEFAULT_MAX_CONNECTIONS,
    DEFAULT_MAX_REQUEST_TIMEOUT_MS,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TABLE_NAME,
)
from ..core.session import BenchSession
from ..data_generator import RandomValueGenerator
from ..exceptions import BenchStoreError, ErrorKind, ServiceFaultError
from ..models import BenchConfig
from ..utils import error_json, error_text

_TABLE_OPTIONS = [
    click.option(
        "--table",
        "table_name",
        envvar="KVBENCH_TABLE",
        default=DEFAULT_TABLE_NAME,
        show_default=True,
        help="DynamoDB table name",
    ),
    click.option(
        "--attribute-name",
        envvar="KVBENCH_ATTRIBUTE_NAME",
        default=DEFAULT_ATTRIBUTE_NAME,
        show_default=True,
        help="Partition key attribute name",
    ),
    click.option(
        "--consistent-read",
        envvar="KVBENCH_CONSISTENT_READ",
        is_flag=True,
        help="Use strongly consistent reads",
    ),
]

_CLIENT_OPTIONS = [
    click.option("--endpoint", envvar="KVBENCH_ENDPOINT", help="DynamoDB endpoint URL override"),
    click.option("--region", envvar="AWS_REGION", help="AWS region"),
    click.option("--profile", envvar="AWS_PROFILE", help="AWS profile (non-AWS environments)"),
    click.option(
        "--max-connections",
        envvar="KVBENCH_MAX_CONNECTIONS",
        type=int,
        default=DEFAULT_MAX_CONNECTIONS,
        show_default=True,
        help="Connection pool size",
    ),
    click.option(
        "--max-request-timeout",
        envvar="KVBENCH_MAX_REQUEST_TIMEOUT",
        type=int,
        default=DEFAULT_MAX_REQUEST_TIMEOUT_MS,
        show_default=True,
        help="Request timeout in milliseconds",
    ),
    click.option(
        "--max-retries",
        envvar="KVBENCH_MAX_RETRIES",
        type=int,
        default=DEFAULT_MAX_RETRIES,
        show_default=True,
        help="Client retry budget (0 disables retries)",
    ),
    click.option(
        "--compression/--no-compression",
        envvar="KVBENCH_COMPRESSION",
        default=False,
        help="Enable request compression",
    ),
    click.option("--dax-endpoint", envvar="KVBENCH_DAX_ENDPOINT", help="DAX cluster endpoint"),
]

_OUTPUT_OPTIONS = [
    click.option("--text", is_flag=True, help="Output as human-readable text"),
    click.option(
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
    ),
]

_CONFIG_FIELDS = (
    "table_name",
    "attribute_name",
    "endpoint",
    "region",
    "profile",
    "max_connections",
    "max_request_timeout",
    "max_retries",
    "compression",
    "consistent_read",
    "dax_endpoint",
    "read_capacity_units",
    "write_capacity_units",
    "table_poll_interval",
    "table_max_wait",
    "max_batch_rounds",
    "value_size",
)

_EXIT_CODES = {
    ErrorKind.INVALID_ARGUMENT: 1,
    ErrorKind.SERVICE_FAULT: 3,
    ErrorKind.TRANSPORT_FAULT: 3,
    ErrorKind.THROTTLED: 4,
    ErrorKind.PROVISIONING_FAILURE: 5,
}

_SOLUTIONS = {
    ErrorKind.INVALID_ARGUMENT: "Check the command arguments",
    ErrorKind.SERVICE_FAULT: "Check table exists and AWS permissions",
    ErrorKind.TRANSPORT_FAULT: "Check network connectivity, endpoint and AWS credentials",
    ErrorKind.THROTTLED: "Retry with backoff or raise the table's provisioned capacity",
    ErrorKind.PROVISIONING_FAILURE: "Check the table status in the AWS console and retry",
}


def _apply(options: list[Callable[..., Any]], func: Callable[..., Any]) -> Callable[..., Any]:
    for option in reversed(options):
        func = option(func)
    return func


def store_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the table, client and output options shared by store commands."""
    return _apply(_TABLE_OPTIONS + _CLIENT_OPTIONS + _OUTPUT_OPTIONS, func)


def table_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach only the table and output options, for commands that never connect."""
    return _apply(_TABLE_OPTIONS + _OUTPUT_OPTIONS, func)


def config_from_options(options: dict[str, Any], **overrides: Any) -> BenchConfig:
    """Build a BenchConfig from parsed click options."""
    values = {name: options[name] for name in _CONFIG_FIELDS if options.get(name) is not None}
    values.update(overrides)
    return BenchConfig(**values)


@contextmanager
def open_session(config: BenchConfig) -> Iterator[BenchSession]:
    """Initialize a session for one command and always shut it down."""
    session = BenchSession(config)
    try:
        session.init(RandomValueGenerator(config.value_size))
        yield session
    finally:
        session.shutdown()


def exit_with_error(ctx: click.Context, error: BenchStoreError, text: bool) -> NoReturn:
    """Report a kvbench error on stderr and exit with its code."""
    exit_code = _EXIT_CODES.get(error.kind, 3)
    solution = _SOLUTIONS.get(error.kind, "Check AWS credentials and permissions")
    if isinstance(error, ServiceFaultError) and error.error_code == "ResourceNotFoundException":
        exit_code = 1
        solution = "Create the table with 'dynamodb-bench-tool kvbench create-table'"

    if text:
        click.echo(error_text(str(error), solution), err=True)
    else:
        click.echo(error_json(str(error), solution, exit_code), err=True)
    ctx.exit(exit_code)
