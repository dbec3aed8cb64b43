"""CLI entry point for dynamodb-bench-tool."""

import click

from dynamodb_bench_tool.kvbench.commands.info_commands import connection_info_command
from dynamodb_bench_tool.kvbench.commands.kv_commands import (
    read_bulk_command,
    read_command,
    write_bulk_command,
    write_command,
)
from dynamodb_bench_tool.kvbench.commands.table_commands import (
    create_table_command,
    describe_table_command,
    drop_table_command,
)


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """A CLI that drives single and batched DynamoDB operations for benchmarking"""
    pass


@main.group("kvbench")
def kvbench() -> None:
    """DynamoDB key-value benchmark client with partial-failure draining"""
    pass


# Register table commands
kvbench.add_command(create_table_command)
kvbench.add_command(drop_table_command)
kvbench.add_command(describe_table_command)

# Register data path commands
kvbench.add_command(read_command)
kvbench.add_command(write_command)
kvbench.add_command(read_bulk_command)
kvbench.add_command(write_bulk_command)

# Register info commands
kvbench.add_command(connection_info_command)

if __name__ == "__main__":
    main()
