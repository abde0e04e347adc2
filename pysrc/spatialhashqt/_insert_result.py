"""InsertResult dataclass for bulk insertion."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InsertResult:
    """
    Result from bulk insertion operations.

    Attributes:
        count: Number of items inserted.
        cells_created: Number of grid cells created by this batch.
    """

    count: int
    cells_created: int

    @property
    def ok(self) -> bool:
        """Return True if anything was inserted."""
        return self.count > 0
