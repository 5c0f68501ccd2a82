"""
Utility Functions for DJI SRT Metrology

This module provides helper functions for numeric conversion and rounding
used throughout the parsing and export pipeline.
"""

import re
from typing import Optional

import numpy as np

from .errors import MalformedNumericField

# Plain ASCII numbers only: no underscores, padding, or non-ASCII digits
_FLOAT_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT_TEXT = re.compile(r"[+-]?[0-9]+")


def to_float(value: str, field: str = "value") -> float:
    """
    Convert a captured text field to float.

    Args:
        value: Text captured from a data line.
        field: Field name, used in the error message.

    Returns:
        The parsed float.

    Raises:
        MalformedNumericField: If the text is not a finite ASCII decimal number.
    """
    if not isinstance(value, str) or not _FLOAT_TEXT.fullmatch(value):
        raise MalformedNumericField(field, value)
    result = float(value)
    if np.isnan(result) or np.isinf(result):
        raise MalformedNumericField(field, value)
    return result


def to_int(value: str, field: str = "value") -> int:
    """
    Convert a captured text field to int.

    Integral decimals such as "1.000" (the DZOOM format) are accepted.

    Raises:
        MalformedNumericField: If the text is not an integral number.
    """
    if isinstance(value, str) and _INT_TEXT.fullmatch(value):
        try:
            return int(value)
        except ValueError as exc:
            # more digits than int() accepts
            raise MalformedNumericField(field, value) from exc
    result = to_float(value, field)
    if not result.is_integer():
        raise MalformedNumericField(field, value)
    return int(result)


def round_float(value, digits: int = 3) -> Optional[float]:
    """
    Round a float value, handling None, NaN, and Inf.

    Args:
        value: Value to round.
        digits: Number of decimal places. Default 3.

    Returns:
        Rounded float, or None if value is None, NaN, or Inf.
    """
    if value is None:
        return None
    value = float(value)
    if np.isnan(value) or np.isinf(value):
        return None
    return round(value, digits)
