# _item.py
from __future__ import annotations

from typing import Generic, TypeVar

from ._common import Rect

T = TypeVar("T")


class Item(Generic[T]):
    """
    Lightweight record of an indexed rectangle.

    Attributes:
        bounds: Rectangle as (x, y, width, height).
        data: The attached payload, or None.

    Notes:
        - Holds a strong reference to the payload.
        - Items are never changed once inserted.
        - Items compare by identity, so any payload type can be stored.
    """

    __slots__ = ("bounds", "data")

    def __init__(self, bounds: Rect, data: T | None = None):
        self.bounds = bounds
        self.data = data

    @property
    def x(self) -> float:
        return self.bounds[0]

    @property
    def y(self) -> float:
        return self.bounds[1]

    @property
    def width(self) -> float:
        return self.bounds[2]

    @property
    def height(self) -> float:
        return self.bounds[3]

    def __repr__(self) -> str:
        return f"Item(bounds={self.bounds!r}, data={self.data!r})"
