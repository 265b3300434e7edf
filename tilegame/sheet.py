"""
Addressing of cells inside a sprite sheet.
"""

from __future__ import annotations
from typing import List, NamedTuple


class SheetCoords(NamedTuple):
    """
    A (column, row) cell of a sprite sheet plus mirror flags.
    Attributes:
        col (int): Column index, counted from the left.
        row (int): Row index, counted from the top.
        flip_x (bool): Draw the cell mirrored horizontally.
        flip_y (bool): Draw the cell mirrored vertically.
    """

    col: int
    row: int
    flip_x: bool = False
    flip_y: bool = False

    def flip_horizontal(self) -> SheetCoords:
        """Return a copy with the horizontal mirror flag inverted."""
        return self._replace(flip_x=not self.flip_x)

    def flip_vertical(self) -> SheetCoords:
        """Return a copy with the vertical mirror flag inverted."""
        return self._replace(flip_y=not self.flip_y)


def rect_range(col: int, row: int, width: int, height: int) -> List[SheetCoords]:
    """
    Enumerate every cell of a rectangle, column by column
    (outer loop over columns, inner loop over rows).
    """
    return [
        SheetCoords(c, r)
        for c in range(col, col + width)
        for r in range(row, row + height)
    ]


def rect_range_with_x_flip(
    col: int, row: int, width: int, height: int
) -> List[SheetCoords]:
    """
    Like rect_range, but each cell is immediately followed by its horizontal
    mirror: c0, c0 flipped, c1, c1 flipped, ...
    """
    coords: List[SheetCoords] = []
    for cell in rect_range(col, row, width, height):
        coords.append(cell)
        coords.append(cell.flip_horizontal())
    return coords
