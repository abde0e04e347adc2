# quadtree.py
"""Quadtree - capacity-bounded recursive partition over a fixed rectangle."""

from __future__ import annotations

import logging
from typing import Generic, Iterator, TypeVar

from ._common import Rect, intersects, validate_rect
from ._item import Item

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Quadtree(Generic[T]):
    """
    Recursive spatial partition for axis-aligned rectangles.

    A node holds up to ``capacity`` items directly. Once full it splits into
    four equal quadrants and hands further items to the first quadrant that
    intersects them, in the order top-left, top-right, bottom-left,
    bottom-right.

    Placement uses intersection rather than containment. An item that
    straddles a split line is stored once, in the first quadrant it touches,
    so a query that overlaps the item but not that quadrant will miss it.

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate the same tree from multiple threads.

    Args:
        boundary: Area covered by this node as (x, y, width, height).
        capacity: Max number of items held by a node before splitting.

    Raises:
        ValueError: If capacity is less than 1 or boundary is malformed.

    Example:
        ```python
        qt = Quadtree((0.0, 0.0, 100.0, 100.0), capacity=4)
        qt.insert(Item((10.0, 10.0, 5.0, 5.0), "a"))
        for item in qt.query((0.0, 0.0, 20.0, 20.0)):
            print(item.data)
        ```
    """

    __slots__ = (
        "_boundary",
        "_capacity",
        "_divided",
        "_items",
        "bottom_left",
        "bottom_right",
        "top_left",
        "top_right",
    )

    def __init__(self, boundary: Rect, capacity: int = 4):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity!r}")
        self._boundary = validate_rect(boundary)
        self._capacity = capacity
        self._items: list[Item[T]] = []
        self._divided = False
        self.top_left: Quadtree[T] | None = None
        self.top_right: Quadtree[T] | None = None
        self.bottom_left: Quadtree[T] | None = None
        self.bottom_right: Quadtree[T] | None = None

    # ---- Read access ----

    @property
    def boundary(self) -> Rect:
        """Area covered by this node."""
        return self._boundary

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def divided(self) -> bool:
        """True once this node has split into quadrants."""
        return self._divided

    @property
    def items(self) -> tuple[Item[T], ...]:
        """Items held directly by this node, in insertion order."""
        return tuple(self._items)

    @property
    def children(self) -> tuple[Quadtree[T], ...]:
        """The four quadrants (TL, TR, BL, BR), or an empty tuple for a leaf."""
        if not self._divided:
            return ()
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)  # type: ignore[return-value]

    # ---- Subdivision ----

    def _split(self) -> None:
        x, y, w, h = self._boundary
        hw = w / 2
        hh = h / 2
        cap = self._capacity

        self.top_left = Quadtree((x, y, hw, hh), cap)
        self.top_right = Quadtree((x + hw, y, hw, hh), cap)
        self.bottom_left = Quadtree((x, y + hh, hw, hh), cap)
        self.bottom_right = Quadtree((x + hw, y + hh, hw, hh), cap)

        self._divided = True
        logger.debug("Split node %r into quadrants of %r x %r", self._boundary, hw, hh)

    # ---- Insertion ----

    def insert(self, item: Item[T]) -> bool:
        """
        Insert an item into this subtree.

        Nodes are visited depth first with an explicit stack, so clusters of
        identical rectangles can grow the tree arbitrarily deep.

        Args:
            item: Item to store.

        Returns:
            True if the item was stored, False if its bounds miss this node.
        """
        bounds = item.bounds
        stack: list[Quadtree[T]] = [self]
        while stack:
            node = stack.pop()
            if not intersects(node._boundary, bounds):
                continue

            if len(node._items) < node._capacity:
                node._items.append(item)
                return True

            if not node._divided:
                node._split()

            # Reversed so top-left is tried first
            stack.extend(reversed(node.children))
        return False

    # ---- Queries ----

    def query(self, rect: Rect) -> list[Item[T]]:
        """
        Return all items in this subtree that intersect the query rectangle.

        Subtrees whose boundary does not intersect ``rect`` are skipped.

        Args:
            rect: Query rectangle as (x, y, width, height).

        Returns:
            List of Item objects, node-local items first, then TL, TR, BL, BR.
        """
        found: list[Item[T]] = []
        stack: list[Quadtree[T]] = [self]
        while stack:
            node = stack.pop()
            if not intersects(node._boundary, rect):
                continue
            for item in node._items:
                if intersects(item.bounds, rect):
                    found.append(item)
            stack.extend(reversed(node.children))
        return found

    # ---- Utilities ----

    def _walk(self) -> Iterator[Quadtree[T]]:
        """Yield every node, parent before children, in TL, TR, BL, BR order."""
        stack: list[Quadtree[T]] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        """Return the number of items stored in this subtree."""
        return sum(len(node._items) for node in self._walk())

    def __iter__(self) -> Iterator[Item[T]]:
        """Iterate over every stored item, depth first."""
        for node in self._walk():
            yield from node._items

    def get_all_node_boundaries(self) -> list[Rect]:
        """
        Return all node boundaries in the subtree, parent before children.

        Useful for visualization.
        """
        return [node._boundary for node in self._walk()]

    def get_max_depth(self) -> int:
        """Return the depth of the deepest node. A leaf has depth 0."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in node.children)
        return deepest

    def __repr__(self) -> str:
        return (
            f"Quadtree(boundary={self._boundary!r}, capacity={self._capacity}, "
            f"items={len(self._items)}, divided={self._divided})"
        )
