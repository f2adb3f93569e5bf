"""
models/common.py
----------------
Field checks shared by the domain models.
"""

from numbers import Real


def coerce_amount(value, field_name: str, allow_zero: bool = False) -> float:
    """
    Validate a monetary amount and return it as a float.

    Raises:
        TypeError: If the value is not a real number (bools are rejected).
        ValueError: If the value is negative, or zero when not allowed.
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{field_name} must be a number, got {type(value).__name__}")
    amount = float(value)
    if amount < 0 or (amount == 0 and not allow_zero):
        bound = ">= 0" if allow_zero else "> 0"
        raise ValueError(f"{field_name} must be {bound}, got {amount}")
    return amount


def require_str(value, field_name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")
    return value
