"""
Serialization helpers for DynamoDB items.

DynamoDB rejects Python floats and hands numbers back as ``Decimal``; these
helpers translate in both directions so the rest of the code only sees plain
JSON-compatible values.
"""

from decimal import Decimal
from typing import Any


def convert_floats_to_decimal(obj: Any) -> Any:
    """
    Recursively convert float values to Decimal for DynamoDB compatibility.

    Args:
        obj: Any Python object (dict, list, float, etc.)

    Returns:
        The same object with all floats converted to Decimal
    """
    if isinstance(obj, list):
        return [convert_floats_to_decimal(item) for item in obj]
    elif isinstance(obj, dict):
        return {key: convert_floats_to_decimal(value) for key, value in obj.items()}
    elif isinstance(obj, float):
        return Decimal(str(obj))  # Convert via string to avoid precision issues
    else:
        return obj


def convert_decimals(obj: Any) -> Any:
    """
    Recursively convert Decimal values read from DynamoDB to int or float.

    Args:
        obj: An item (or part of one) returned by boto3

    Returns:
        The same structure with integral Decimals as int and the rest as float
    """
    if isinstance(obj, list):
        return [convert_decimals(item) for item in obj]
    elif isinstance(obj, dict):
        return {key: convert_decimals(value) for key, value in obj.items()}
    elif isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    else:
        return obj
