"""
Facing directions for tiles and entities, and classification of movement
vectors into a 4-way facing.
"""

from __future__ import annotations
import math
from enum import Enum
from typing import Tuple


class NoOrientation(ValueError):
    """Raised when a vector has no direction (the zero vector)."""


class Direction4(Enum):
    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @classmethod
    def default(cls) -> Direction4:
        return cls.SOUTH


class Direction8(Enum):
    NORTH = "north"
    NORTH_EAST = "north_east"
    EAST = "east"
    SOUTH_EAST = "south_east"
    SOUTH = "south"
    SOUTH_WEST = "south_west"
    WEST = "west"
    NORTH_WEST = "north_west"

    @classmethod
    def default(cls) -> Direction8:
        return cls.SOUTH


class VerticalPart(Enum):
    """Which half of a two-cell-tall tile a cell depicts."""

    TOP = "top"
    BOTTOM = "bottom"


def direction4_from_vector(vector: Tuple[float, float]) -> Direction4:
    """
    Classify a 2D vector into the facing it points along.

    The vector is normalized first. A horizontal component of at most 0.5
    means a vertical facing; a component of exactly 0.5 counts as vertical.
    Raises NoOrientation for the zero vector.
    """
    x, y = vector
    length = math.hypot(x, y)
    if length == 0.0 or not math.isfinite(length):
        raise NoOrientation(f"vector {vector!r} has no orientation")
    x /= length
    y /= length
    if abs(x) <= 0.5:
        return Direction4.NORTH if y > 0.0 else Direction4.SOUTH
    return Direction4.EAST if x > 0.0 else Direction4.WEST
