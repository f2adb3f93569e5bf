"""
utils/ids.py
------------
Identifier generation for new records.
"""

import time
from uuid import uuid4

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """
    Generate a unique string ID.

    The millisecond timestamp (base 36) keeps IDs roughly ordered by
    creation time; the random suffix makes collisions within the same
    millisecond vanishingly unlikely.
    """
    return _to_base36(time.time_ns() // 1_000_000) + uuid4().hex[:11]
