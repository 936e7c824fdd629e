"""Normalization helpers.

Centralizes defensive parsing of loosely-typed snapshot fields.
"""

from __future__ import annotations

import math
import re
from typing import Any

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and _INT_TEXT.fullmatch(value.strip()):
        return int(value.strip())
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def int_or_zero(value: Any) -> int:
    """Parse *value* as an int, treating anything unparseable as ``0``."""
    parsed = safe_int(value)
    return 0 if parsed is None else parsed


def safe_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return False
