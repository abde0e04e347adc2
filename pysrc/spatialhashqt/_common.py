# _common.py
"""Common utilities and type aliases shared by the quadtree and the grid."""

from __future__ import annotations

import math
from typing import Any, Union

# Type aliases
Rect = tuple[float, float, float, float]
"""Axis-aligned rectangle as (x, y, width, height)."""

CellKey = tuple[Union[int, float], Union[int, float]]
"""Grid cell key as (col, row). Integers for finite coordinates."""


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows array handling without forcing NumPy as a hard dependency.

    Args:
        x: Object to check.

    Returns:
        True if x is a NumPy array.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def validate_rect(rect: Any) -> Rect:
    """
    Normalize a rectangle to a tuple.

    Only the shape is checked. Negative or non-finite sizes are accepted
    and take part in intersection arithmetic as-is.

    Args:
        rect: Rectangle as a sequence of 4 numbers.

    Returns:
        Rectangle as a tuple.

    Raises:
        ValueError: If rect does not have exactly four values.
    """
    if type(rect) is not tuple:
        rect = tuple(rect)
    if len(rect) != 4:
        raise ValueError(
            "rect must be a tuple of four numeric values (x, y, width, height)"
        )
    return rect  # type: ignore[return-value]


def intersects(a: Rect, b: Rect) -> bool:
    """
    Strict axis-aligned overlap test.

    Rectangles that only touch along an edge or a corner do not intersect.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return not (
        ax + aw <= bx or bx + bw <= ax or ay + ah <= by or by + bh <= ay
    )


def sign_round(v: float) -> int | float:
    """
    Round to the nearest integer with ties away from zero.

    The magnitude is rounded and the sign reapplied, so 2.5 -> 3 and
    -2.5 -> -3. Non-finite values are returned as they are, with every NaN
    mapped to ``math.nan`` so they all produce the same cell key.

    Args:
        v: Value to round.

    Returns:
        The rounded integer, or the non-finite input.
    """
    if v != v:
        return math.nan
    if math.isinf(v):
        return v
    mag = abs(v)
    r = math.floor(mag)
    # mag - r is exact for doubles, unlike mag + 0.5
    if mag - r >= 0.5:
        r += 1
    return -r if v < 0 else r
