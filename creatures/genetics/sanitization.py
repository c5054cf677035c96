"""Sanitization for genome data arriving from outside the simulation.

API payloads and imported files may carry NaN, infinities, strings or
booleans where numbers are expected. These helpers turn anything into a safe
number so decoding never crashes; range clamping is left to the genome
constructors.
"""

from __future__ import annotations

import math
from typing import Any

MAX_GENES = 64
MAX_NEURAL_NODES = 512
MAX_CONNECTIONS = 4096


def sanitize_float(
    value: Any, default: float = 0.0, min_val: float = -1e6, max_val: float = 1e6
) -> float:
    """Sanitize a value to a safe float. Handles None, NaN, Inf, strings, booleans."""
    if value is None or isinstance(value, bool):
        return default
    try:
        f = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(f) or math.isinf(f):
        return default
    return max(min_val, min(max_val, f))


def sanitize_int(
    value: Any, default: int = 0, min_val: int = -1_000_000, max_val: int = 1_000_000
) -> int:
    """Sanitize a value to a safe integer."""
    if value is None or isinstance(value, bool):
        return default
    try:
        i = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return max(min_val, min(max_val, i))


def sanitize_bool(value: Any, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return bool(value)
    return default


def sanitize_list(value: Any, max_length: int) -> list[Any]:
    """Return ``value`` as a bounded list, or an empty list if it is not a sequence."""
    if not isinstance(value, (list, tuple)):
        return []
    return list(value[:max_length])
