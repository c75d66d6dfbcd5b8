"""
Sanitization utilities for EcoScan API endpoints.
Cleans model-produced text before it is returned in JSON and validates
numeric query parameters.
"""

import re
from typing import Any, Optional
import logging

def sanitize_string(input_str: Any, max_length: Optional[int] = None) -> str:
    """
    Sanitize a string by:
    1. Stripping leading/trailing whitespace
    2. Removing control characters (except tab, newline, carriage return)
    3. Truncating to max_length if specified

    Markup is left as is: callers render this text as plain text, never as HTML.

    Args:
        input_str: The input to sanitize; non-strings are converted first
        max_length: Optional maximum length for truncation

    Returns:
        Sanitized string
    """
    if input_str is None:
        return ""
    if not isinstance(input_str, str):
        input_str = str(input_str)

    sanitized = input_str.strip()

    sanitized = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', sanitized)

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]
        logging.warning(f"Input truncated from {len(input_str)} to {max_length} characters")

    return sanitized

def sanitize_integer(value: Any, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
    """
    Sanitize integer input with range validation.

    Args:
        value: Value to convert to integer
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Sanitized integer

    Raises:
        ValueError: If value cannot be converted to integer or is out of range
    """
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValueError(f"Invalid integer value: {value}")

    if min_val is not None and int_value < min_val:
        raise ValueError(f"Value {int_value} is below minimum {min_val}")

    if max_val is not None and int_value > max_val:
        raise ValueError(f"Value {int_value} is above maximum {max_val}")

    return int_value
