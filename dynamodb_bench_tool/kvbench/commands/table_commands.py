"""
Table management commands for kvbench.
"""

from typing import Any

import click

from ..constants import (
    DEFAULT_READ_CAPACITY_UNITS,
    DEFAULT_WRITE_CAPACITY_UNITS,
    RESOURCE_NOT_FOUND,
    TABLE_MAX_WAIT,
    TABLE_POLL_INTERVAL,
)
from ..core.client import DynamoDBClient, build_store_client
from ..core.table_operations import TableLifecycleController
from ..exceptions import BenchStoreError, ServiceFaultError
from ..logging_config import get_logger, setup_logging
from ..models import BenchConfig
from ..utils import error_json, output_json, output_text, validate_table_name
from .common import config_from_options, exit_with_error, store_options

logger = get_logger(__name__)

_poll_interval_option = click.option(
    "--poll-interval",
    "table_poll_interval",
    type=float,
    default=TABLE_POLL_INTERVAL,
    show_default=True,
    help="Seconds between table status checks",
)
_max_wait_option = click.option(
    "--max-wait",
    "table_max_wait",
    type=float,
    default=TABLE_MAX_WAIT,
    show_default=True,
    help="Maximum seconds to wait for the table",
)


def _controller(config: BenchConfig) -> tuple[DynamoDBClient, TableLifecycleController]:
    client = build_store_client(config)
    return client, TableLifecycleController(
        client, poll_interval=config.table_poll_interval, max_wait=config.table_max_wait
    )


@click.command("create-table")
@click.option(
    "--read-capacity",
    "read_capacity_units",
    envvar="KVBENCH_READ_CAPACITY_UNITS",
    type=int,
    default=DEFAULT_READ_CAPACITY_UNITS,
    show_default=True,
    help="Provisioned read capacity units",
)
@click.option(
    "--write-capacity",
    "write_capacity_units",
    envvar="KVBENCH_WRITE_CAPACITY_UNITS",
    type=int,
    default=DEFAULT_WRITE_CAPACITY_UNITS,
    show_default=True,
    help="Provisioned write capacity units",
)
@_poll_interval_option
@_max_wait_option
@store_options
@click.pass_context
def create_table_command(ctx: click.Context, text: bool, verbose: int, **options: Any) -> None:
    """Create the benchmark table and wait until it is ACTIVE.

    Creates a table with a single string partition key and provisioned
    throughput. An existing table is left untouched.

    Examples:

    \b
        # Create table with default name
        dynamodb-bench-tool kvbench create-table

    \b
        # Create with custom capacity
        dynamodb-bench-tool kvbench create-table --table bench --read-capacity 100 --write-capacity 50

    \b
    Output Format:
        Returns JSON with table details:
        {"table": "...", "created": true, "status": "ACTIVE", ...}
    """
    setup_logging(verbose)

    try:
        config = config_from_options(options)
        validate_table_name(config.table_name)
        logger.info(f"Creating table '{config.table_name}'")
        logger.debug(f"Region: {config.region}, Endpoint: {config.endpoint}")

        client, controller = _controller(config)
        try:
            created = controller.create_table_if_not_exists(config.table_descriptor())
            controller.wait_until_active(config.table_name)
            descriptor = controller.describe_table(config.table_name)
        finally:
            client.close()

        if text:
            if created:
                output_text(f"✅ Table '{config.table_name}' created successfully")
            else:
                output_text(f"Table '{config.table_name}' already exists")
            output_text(f"Status: {descriptor.status.value}")
        else:
            output_json({**descriptor.to_dict(), "created": created})

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)


@click.command("drop-table")
@click.option(
    "--approve",
    is_flag=True,
    help="Required flag to confirm table deletion",
)
@_poll_interval_option
@_max_wait_option
@store_options
@click.pass_context
def drop_table_command(
    ctx: click.Context, approve: bool, text: bool, verbose: int, **options: Any
) -> None:
    """Drop the benchmark table and wait until it is gone.

    WARNING: This permanently deletes the table and ALL data. A table that
    does not exist is reported with "deleted": false and exit code 1.

    Examples:

    \b
        # Drop with approval
        dynamodb-bench-tool kvbench drop-table --approve

    \b
    Output Format:
        Returns JSON with confirmation:
        {"table": "...", "deleted": true}
    """
    setup_logging(verbose)
    config = config_from_options(options)

    if not approve:
        cmd = f"dynamodb-bench-tool kvbench drop-table --table {config.table_name} --approve"
        if text:
            click.echo("⚠️  WARNING: Table deletion requires approval", err=True)
            click.echo(
                f"\nThis will permanently delete table '{config.table_name}' and ALL data.",
                err=True,
            )
            click.echo(f"\nTo proceed, use: {cmd}", err=True)
        else:
            click.echo(
                error_json(
                    "Table deletion requires approval", f"Add --approve flag to confirm: {cmd}", 2
                ),
                err=True,
            )
        ctx.exit(2)

    try:
        logger.info(f"Dropping table '{config.table_name}'")
        client, controller = _controller(config)
        try:
            controller.drop_table(config.table_name)
        finally:
            client.close()

        if text:
            output_text(f"✅ Table '{config.table_name}' deleted")
        else:
            output_json({"table": config.table_name, "deleted": True})

    except ServiceFaultError as e:
        if e.error_code != RESOURCE_NOT_FOUND:
            exit_with_error(ctx, e, text)
        if text:
            output_text(f"⚠️  Table '{config.table_name}' does not exist")
        else:
            output_json({"table": config.table_name, "deleted": False})
        ctx.exit(1)
    except BenchStoreError as e:
        exit_with_error(ctx, e, text)


@click.command("describe-table")
@store_options
@click.pass_context
def describe_table_command(ctx: click.Context, text: bool, verbose: int, **options: Any) -> None:
    """Show the benchmark table's key schema, capacity and status.

    Examples:

    \b
        dynamodb-bench-tool kvbench describe-table --table bench

    \b
    Output Format:
        Returns JSON:
        {"table": "...", "attribute_name": "id", "status": "ACTIVE", ...}
    """
    setup_logging(verbose)

    try:
        config = config_from_options(options)
        client, controller = _controller(config)
        try:
            descriptor = controller.describe_table(config.table_name)
        finally:
            client.close()

        if text:
            output_text(f"Table: {descriptor.table_name}")
            output_text(f"Partition key: {descriptor.attribute_name} ({descriptor.attribute_type})")
            output_text(
                f"Capacity: {descriptor.read_capacity_units} RCU / "
                f"{descriptor.write_capacity_units} WCU"
            )
            output_text(f"Status: {descriptor.status.value}")
        else:
            output_json(descriptor.to_dict())

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)
