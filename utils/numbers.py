"""
Number Parsing Helpers

Lenient parsing of numbers coming from forms, JSON bodies and share tokens.
"""

import math


def is_finite_number(value):
    """True for ints and floats that are neither NaN nor infinite (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def safe_float(value, default=0.0, min_val=None, max_val=None):
    """Safely parse a float value with optional bounds."""
    try:
        result = float(value) if value not in (None, '') else default
    except (ValueError, TypeError, OverflowError):
        return default
    if result is None or not math.isfinite(result):
        return default
    if min_val is not None:
        result = max(min_val, result)
    if max_val is not None:
        result = min(max_val, result)
    return result


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely parse an integer value with optional bounds."""
    try:
        result = int(value) if value not in (None, '') else default
        if min_val is not None:
            result = max(min_val, result)
        if max_val is not None:
            result = min(max_val, result)
        return result
    except (ValueError, TypeError, OverflowError):
        return default


def parse_strict_float(text):
    """
    Parse a decimal string, rejecting anything that is not a finite number.

    Returns None instead of raising so callers can treat the value as
    malformed input.
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_bool(value):
    """Interpret JSON/form style truthy values ('1', 'true', 'on', True)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return False
