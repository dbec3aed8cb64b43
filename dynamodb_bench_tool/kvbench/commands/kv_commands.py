"""
Data path commands for kvbench: single and batched reads and writes.
"""

from typing import Any

import click

from ..constants import DEFAULT_MAX_BATCH_ROUNDS, DEFAULT_VALUE_SIZE
from ..exceptions import BenchStoreError
from ..logging_config import get_logger, setup_logging
from ..utils import output_json, output_text, validate_key
from .common import config_from_options, exit_with_error, open_session, store_options

logger = get_logger(__name__)

_value_size_option = click.option(
    "--value-size",
    type=int,
    default=DEFAULT_VALUE_SIZE,
    show_default=True,
    help="Size of the generated value payload",
)
_max_rounds_option = click.option(
    "--max-rounds",
    "max_batch_rounds",
    type=int,
    default=DEFAULT_MAX_BATCH_ROUNDS,
    show_default=True,
    help="Maximum batch calls while draining unprocessed keys",
)


@click.command("read")
@click.argument("key")
@store_options
@click.pass_context
def read_command(ctx: click.Context, key: str, text: bool, verbose: int, **options: Any) -> None:
    """Read a single item by key.

    Examples:

    \b
        # Eventually consistent read
        dynamodb-bench-tool kvbench read k1

    \b
        # Strongly consistent read
        dynamodb-bench-tool kvbench read k1 --consistent-read

    \b
    Output Format:
        Returns JSON:
        {"key": "k1", "found": true, "item": "..."}
    """
    setup_logging(verbose)

    try:
        validate_key(key)
        logger.info(f"Reading key '{key}'")
        with open_session(config_from_options(options)) as session:
            item = session.read_single(key)

        if text:
            output_text(f"{key} = {item}" if item is not None else f"⚠️  {key} not found")
        else:
            output_json({"key": key, "found": item is not None, "item": item})

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)


@click.command("write")
@click.argument("key")
@_value_size_option
@store_options
@click.pass_context
def write_command(ctx: click.Context, key: str, text: bool, verbose: int, **options: Any) -> None:
    """Write a single item with a generated value.

    Examples:

    \b
        # Write key k1 with a 128 byte value
        dynamodb-bench-tool kvbench write k1

    \b
        # Write against DynamoDB Local
        dynamodb-bench-tool kvbench write k1 --endpoint http://localhost:8000 --region us-east-1

    \b
    Output Format:
        Returns JSON:
        {"key": "k1", "result": "..."}
    """
    setup_logging(verbose)

    try:
        validate_key(key)
        logger.info(f"Writing key '{key}'")
        with open_session(config_from_options(options)) as session:
            result = session.write_single(key)

        if text:
            output_text(f"✅ Wrote {key}")
        else:
            output_json({"key": key, "result": result})

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)


@click.command("read-bulk")
@click.argument("keys", nargs=-1, required=True)
@_max_rounds_option
@store_options
@click.pass_context
def read_bulk_command(
    ctx: click.Context, keys: tuple[str, ...], text: bool, verbose: int, **options: Any
) -> None:
    """Read up to 100 unique keys with BatchGetItem.

    Unprocessed keys are resubmitted until DynamoDB returns none.

    Examples:

    \b
        dynamodb-bench-tool kvbench read-bulk a b c

    \b
    Output Format:
        Returns JSON:
        {"requested": 3, "count": 3, "items": ["...", "...", "..."]}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Reading {len(keys)} keys in bulk")
        with open_session(config_from_options(options)) as session:
            items = session.read_bulk(list(keys))

        if text:
            output_text(f"Retrieved {len(items)} of {len(keys)} keys")
            for item in items:
                output_text(item)
        else:
            output_json({"requested": len(keys), "count": len(items), "items": items})

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)


@click.command("write-bulk")
@click.argument("keys", nargs=-1, required=True)
@_value_size_option
@_max_rounds_option
@store_options
@click.pass_context
def write_bulk_command(
    ctx: click.Context, keys: tuple[str, ...], text: bool, verbose: int, **options: Any
) -> None:
    """Write up to 25 unique keys with BatchWriteItem.

    Unprocessed items are resubmitted unchanged until DynamoDB returns none.

    Examples:

    \b
        dynamodb-bench-tool kvbench write-bulk a b c --value-size 512

    \b
    Output Format:
        Returns JSON:
        {"count": 3, "requests": ["...", "...", "..."]}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Writing {len(keys)} keys in bulk")
        with open_session(config_from_options(options)) as session:
            requests = session.write_bulk(list(keys))

        if text:
            output_text(f"✅ Wrote {len(requests)} items")
        else:
            output_json({"count": len(requests), "requests": requests})

    except BenchStoreError as e:
        exit_with_error(ctx, e, text)
