"""
Info commands for kvbench - session configuration summary.
"""

from typing import Any

import click

from ..core.session import BenchSession
from ..logging_config import setup_logging
from ..utils import output_json, output_text
from .common import config_from_options, table_options


@click.command("connection-info")
@table_options
def connection_info_command(text: bool, verbose: int, **options: Any) -> None:
    """Show the table, partition key and consistency mode a session would use.

    Does not contact DynamoDB.

    Examples:

    \b
        dynamodb-bench-tool kvbench connection-info --table bench --consistent-read

    \b
    Output Format:
        Returns JSON:
        {"connection_info": "Table Name - bench : Attribute Name - id : Consistent Read - true"}
    """
    setup_logging(verbose)

    session = BenchSession(config_from_options(options))
    info = session.connection_info()

    if text:
        output_text(info)
    else:
        output_json({"connection_info": info})
