"""
Utility functions for kvbench operations.
"""

import json
from collections import Counter
from collections.abc import Sequence
from typing import Any

from .exceptions import InvalidArgumentError


def render(data: Any) -> str:
    """
    Render a DynamoDB item or response as a string.

    Args:
        data: Item, request or response mapping

    Returns:
        JSON string with sorted keys
    """
    return json.dumps(data, sort_keys=True, default=str)


def ensure_unique_keys(keys: Sequence[str]) -> None:
    """
    Check that a batch holds no duplicate keys.

    Raises:
        InvalidArgumentError: If any key repeats
    """
    if len(set(keys)) != len(keys):
        duplicates = sorted(k for k, count in Counter(keys).items() if count > 1)
        raise InvalidArgumentError(f"Batch contains duplicate keys: {', '.join(duplicates)}")


def output_json(data: dict[str, Any] | list[Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        print(json.dumps(data, default=str))


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        print(message)


def error_json(error: str, solution: str, exit_code: int) -> str:
    """
    Format error as a JSON string.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code

    Returns:
        Serialized error document
    """
    return json.dumps({"error": error, "solution": solution, "exit_code": exit_code})


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"❌ Error: {error}\n\n💡 Solution: {solution}"


def validate_table_name(table_name: str) -> bool:
    """
    Validate DynamoDB table name.

    Args:
        table_name: Table name to validate

    Returns:
        True if valid

    Raises:
        InvalidArgumentError: If table name is invalid
    """
    if not table_name:
        raise InvalidArgumentError("Table name cannot be empty")
    if len(table_name) < 3 or len(table_name) > 255:
        raise InvalidArgumentError("Table name must be between 3 and 255 characters")
    if not all(c.isalnum() or c in "-_." for c in table_name):
        raise InvalidArgumentError(
            "Table name can only contain alphanumeric characters, hyphens, underscores, and periods"
        )
    return True


def validate_key(key: str) -> bool:
    """
    Validate key name.

    Raises:
        InvalidArgumentError: If key is invalid
    """
    if not key:
        raise InvalidArgumentError("Key cannot be empty")
    if len(key.encode("utf-8")) > 2048:
        raise InvalidArgumentError("Key cannot exceed 2048 bytes")
    return True
