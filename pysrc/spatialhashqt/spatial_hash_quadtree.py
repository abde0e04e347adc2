# spatial_hash_quadtree.py
"""SpatialHashQuadtree - uniform grid of cells, each owning a Quadtree."""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, TypeVar

from ._common import CellKey, Rect, _is_np_array, sign_round, validate_rect
from ._insert_result import InsertResult
from ._item import Item
from .quadtree import Quadtree

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SpatialHashQuadtree(Generic[T]):
    """
    Two-tier spatial index for axis-aligned rectangles.

    Each item's origin is hashed to a grid cell using sign-preserving
    round-to-nearest, so cells are centred on multiples of ``cell_size``
    rather than starting at them. Every occupied cell lazily owns one
    Quadtree root sized to the cell, and the item goes into that root even
    if it does not fit inside the cell.

    Queries snap the range origin to the grid the same way, then scan every
    occupied cell. The hash bounds the size of each quadtree; it does not
    prune the cells a query visits.

    Thread-safety:
        Instances are not thread-safe. Use external synchronization if you
        mutate the same index from multiple threads.

    Args:
        cell_size: Width and height of a grid cell.
        capacity: Max number of items per quadtree node before splitting.

    Raises:
        ValueError: If cell_size is not positive or capacity is less than 1.

    Example:
        ```python
        index = SpatialHashQuadtree(cell_size=100.0)
        index.insert((10.0, 10.0, 5.0, 5.0), "a")
        for item in index.query((0.0, 0.0, 100.0, 100.0)):
            print(item.bounds, item.data)
        ```
    """

    __slots__ = ("_capacity", "_cell_size", "_cells", "_count")

    def __init__(self, cell_size: float = 1.0, capacity: int = 4):
        if not cell_size > 0:
            raise ValueError(f"cell_size must be positive, got {cell_size!r}")
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity!r}")
        self._cell_size = cell_size
        self._capacity = capacity
        self._cells: dict[CellKey, Quadtree[T]] = {}
        self._count = 0

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @property
    def capacity(self) -> int:
        return self._capacity

    # ---- Hashing ----

    def hash(self, bounds: Rect) -> CellKey:
        """
        Return the key of the cell that owns the given rectangle's origin.

        Args:
            bounds: Rectangle as (x, y, width, height). Only x and y are used.

        Returns:
            (col, row) cell key.
        """
        x, y = bounds[0], bounds[1]
        return (sign_round(x / self._cell_size), sign_round(y / self._cell_size))

    def cell_boundary(self, key: CellKey) -> Rect:
        """Return the area covered by the cell with the given key."""
        col, row = key
        cs = self._cell_size
        return (col * cs, row * cs, cs, cs)

    def _snap(self, rect: Rect) -> Rect:
        x, y, w, h = rect
        cs = self._cell_size
        return (sign_round(x / cs) * cs, sign_round(y / cs) * cs, w, h)

    # ---- Insertion ----

    def _root_for(self, key: CellKey) -> tuple[Quadtree[T], bool]:
        root = self._cells.get(key)
        if root is not None:
            return root, False
        root = Quadtree(self.cell_boundary(key), self._capacity)
        self._cells[key] = root
        logger.debug("Created cell %r with boundary %r", key, root.boundary)
        return root, True

    def _insert_one(self, bounds: Rect, data: T | None) -> bool:
        key = self.hash(bounds)
        root, created = self._root_for(key)
        if root.insert(Item(bounds, data)):
            self._count += 1
        else:
            logger.debug("Rect %r does not intersect cell %r, not stored", bounds, key)
        return created

    def insert(self, bounds: Rect, data: T | None = None) -> None:
        """
        Insert a rectangle with an optional payload.

        The rectangle is accepted even if it extends past its cell, or has a
        negative or non-finite size. Since cells are centred on multiples of
        ``cell_size``, a rectangle whose origin rounds up to the next cell
        but which does not reach that cell's area is not stored, and is not
        counted by ``len()``.

        Args:
            bounds: Rectangle as (x, y, width, height).
            data: Optional payload to store with the rectangle.

        Raises:
            ValueError: If bounds does not have four values.
        """
        self._insert_one(validate_rect(bounds), data)

    def insert_many(self, rects: Any, objs: list[Any] | None = None) -> InsertResult:
        """
        Bulk insert rectangles with optional aligned payloads.

        Args:
            rects: List of rectangles, or a NumPy array of shape (N, 4).
            objs: Optional list of payloads aligned with rects.

        Returns:
            InsertResult with count and cells_created.

        Raises:
            ValueError: If objs length doesn't match or a rectangle is malformed.
                Nothing is inserted in that case.
        """
        if _is_np_array(rects):
            return self.insert_many_np(rects, objs)

        rows = [validate_rect(rect) for rect in rects]
        if objs is None:
            objs = [None] * len(rows)
        elif len(objs) != len(rows):
            raise ValueError("objs length must match rects length")

        before = self._count
        created = 0
        for rect, obj in zip(rows, objs):
            created += self._insert_one(rect, obj)

        return InsertResult(count=self._count - before, cells_created=created)

    def insert_many_np(self, rects: Any, objs: list[Any] | None = None) -> InsertResult:
        """
        Bulk insert rectangles from a NumPy array.

        Args:
            rects: NumPy array of shape (N, 4) holding (x, y, width, height) rows.
            objs: Optional list of payloads aligned with rects.

        Returns:
            InsertResult with count and cells_created.

        Raises:
            TypeError: If rects is not a NumPy array.
            ValueError: If the array shape is wrong or objs length doesn't match.
            ImportError: If NumPy is not installed.
        """
        if not _is_np_array(rects):
            raise TypeError("insert_many_np requires a NumPy array")

        import numpy as np

        if not isinstance(rects, np.ndarray):
            raise TypeError("insert_many_np requires a NumPy array")

        if objs is not None and len(objs) != len(rects):
            raise ValueError("objs length must match rects length")

        if rects.size == 0:
            return InsertResult(count=0, cells_created=0)

        if rects.ndim != 2 or rects.shape[1] != 4:
            raise ValueError(
                f"rects array must have shape (N, 4), got {rects.shape}"
            )

        rows = [tuple(row) for row in rects.astype(np.float64).tolist()]
        return self.insert_many(rows, objs)

    # ---- Queries ----

    def query(self, rect: Rect) -> list[Item[T]]:
        """
        Return items intersecting the query rectangle snapped to the grid.

        The origin of ``rect`` is snapped to the nearest cell corner, keeping
        its width and height, and every occupied cell is searched with the
        snapped rectangle.

        Args:
            rect: Query rectangle as (x, y, width, height).

        Returns:
            List of Item objects. Empty if nothing matches.
        """
        snapped = self._snap(validate_rect(rect))
        found: list[Item[T]] = []
        for root in self._cells.values():
            found.extend(root.query(snapped))
        return found

    def query_np(self, rect: Rect) -> tuple[Any, list[Any]]:
        """
        Return query results as a NumPy array plus aligned payloads.

        Args:
            rect: Query rectangle as (x, y, width, height).

        Returns:
            Tuple of (coords, data) where coords is an NDArray[np.float64]
            with shape (N, 4) and data is a list of N payloads.

        Raises:
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        items = self.query(rect)
        coords = np.array([it.bounds for it in items], dtype=np.float64).reshape(-1, 4)
        return coords, [it.data for it in items]

    # ---- Cell access ----

    def cells(self) -> Iterator[tuple[CellKey, Quadtree[T]]]:
        """Iterate over (key, quadtree root) for every occupied cell."""
        return iter(self._cells.items())

    def get_cell(self, key: CellKey) -> Quadtree[T] | None:
        """Return the quadtree root for a cell key, or None if unoccupied."""
        return self._cells.get(key)

    def __contains__(self, key: CellKey) -> bool:
        """Check if the cell with the given key is occupied."""
        return key in self._cells

    def get_all_node_boundaries(self) -> list[Rect]:
        """Return every quadtree node boundary across all cells."""
        out: list[Rect] = []
        for root in self._cells.values():
            out.extend(root.get_all_node_boundaries())
        return out

    # ---- Utilities ----

    def __len__(self) -> int:
        """Return the number of items in the index."""
        return self._count

    def __iter__(self) -> Iterator[Item[T]]:
        """Iterate over all items, cell by cell."""
        for root in self._cells.values():
            yield from root

    def __repr__(self) -> str:
        return (
            f"SpatialHashQuadtree(cell_size={self._cell_size!r}, "
            f"capacity={self._capacity}, cells={len(self._cells)}, items={self._count})"
        )
