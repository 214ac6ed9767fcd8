# Adder CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion helpers used when flags receive text from the command line.

Functions:
- coerce_bool: Convert a string to a boolean, rejecting unknown spellings.
- coerce_value: Convert a string to `bool`, `int`, `float`, `datetime` or `str`.
- split_csv: Split a slice flag value on commas, honouring double quotes.
"""
import csv
from datetime import datetime
from typing import Any

from dateutil import parser as date_parser


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Accepts the usual truthy and falsy spellings such as 'true', 'T', '1', 'no', 'off'.

    Raises:
        ValueError: If the text is not a recognised boolean.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_value(value: str, target_type: type) -> Any:
    """
    Attempt to convert a string to the given target type.

    Args:
        value (str): The input string to convert.
        target_type (type): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from e

    return target_type(value)


def split_csv(value: str) -> list[str]:
    if not value:
        return []
    return next(csv.reader([value], skipinitialspace=False))
