"""
Stored-geometry parsing.

Space rows persist ``position`` and ``size`` as JSON text, as a plain
mapping, or not at all.  Anything that does not decode to two finite
numbers falls back to the caller's default; these helpers never raise.
"""

import json
import math
from typing import Any, Optional, Tuple

from .nodes import Position, Size


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass; a stored ``true`` is not a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def _decode_pair(raw: Any, first: str, second: str) -> Optional[Tuple[float, float]]:
    """Return ``(raw[first], raw[second])`` if both are finite numbers."""
    if raw is None or raw == "":
        return None

    if isinstance(raw, (Position, Size)):
        raw = {first: getattr(raw, first, None), second: getattr(raw, second, None)}
    elif isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (ValueError, TypeError, RecursionError):
            return None

    if not isinstance(raw, dict):
        return None

    a, b = raw.get(first), raw.get(second)
    if _is_finite_number(a) and _is_finite_number(b):
        return float(a), float(b)
    return None


def parse_position(raw: Any, fallback: Optional[Position]) -> Optional[Position]:
    """
    Parse a stored position, returning *fallback* unchanged on any failure.

    Accepts JSON text, a ``{"x", "y"}`` mapping, a :class:`Position`, or
    ``None``.  Double-encoded text is decoded once only.
    """
    pair = _decode_pair(raw, "x", "y")
    if pair is None:
        return fallback
    return Position(*pair)


def parse_size(raw: Any, fallback: Optional[Size]) -> Optional[Size]:
    """Same contract as :func:`parse_position` over ``{"width", "height"}``."""
    pair = _decode_pair(raw, "width", "height")
    if pair is None:
        return fallback
    return Size(*pair)
