"""spatialhashqt - Spatial hash grid of quadtrees for rectangle range queries."""

from ._common import CellKey, Rect, intersects, sign_round
from ._insert_result import InsertResult
from ._item import Item
from .quadtree import Quadtree
from .spatial_hash_quadtree import SpatialHashQuadtree

__all__ = [
    "CellKey",
    "InsertResult",
    "Item",
    "Quadtree",
    "Rect",
    "SpatialHashQuadtree",
    "intersects",
    "sign_round",
]
