"""
Static map content: terrain and wall tile kinds, and population of the map.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .config import GROUND_LAYER, MAP_RADIUS, WALL_LAYER
from .direction import Direction8, VerticalPart
from .sheet import SheetCoords, rect_range, rect_range_with_x_flip
from .tile import GridPosition, Tile, TileKind, Vec2

logger = logging.getLogger(__name__)


class MapTile(TileKind):
    """Base for tiles placed on the static map."""

    passable = True


class GroundTile(MapTile):
    def atlas_name(self) -> str:
        return "grass"

    def scale_and_anchor(self) -> Tuple[Vec2, Vec2]:
        return (32.0, 32.0), (0.0, 0.0)


@dataclass(frozen=True)
class Grass(GroundTile):
    def frames(self) -> List[SheetCoords]:
        return rect_range_with_x_flip(0, 0, 4, 4)


@dataclass(frozen=True)
class FloweryGrass(GroundTile):
    def frames(self) -> List[SheetCoords]:
        return rect_range_with_x_flip(4, 0, 4, 4)


@dataclass(frozen=True)
class Flagstone(GroundTile):
    def frames(self) -> List[SheetCoords]:
        return rect_range(0, 4, 2, 3)


# Wall sheet cells per (corner, half). The sheet has no south-west base, so
# that corner reuses the south face cell.
WALL_FRAMES: Dict[Tuple[Direction8, VerticalPart], Tuple[SheetCoords, ...]] = {
    (Direction8.NORTH, VerticalPart.TOP): (SheetCoords(1, 0),),
    (Direction8.NORTH, VerticalPart.BOTTOM): (
        SheetCoords(1, 1),
        SheetCoords(2, 1),
    ),
    (Direction8.NORTH_EAST, VerticalPart.TOP): (SheetCoords(3, 0),),
    (Direction8.NORTH_EAST, VerticalPart.BOTTOM): (SheetCoords(3, 1),),
    (Direction8.EAST, VerticalPart.TOP): (SheetCoords(3, 2),),
    (Direction8.EAST, VerticalPart.BOTTOM): (SheetCoords(3, 3),),
    (Direction8.SOUTH_EAST, VerticalPart.TOP): (SheetCoords(3, 4),),
    (Direction8.SOUTH_EAST, VerticalPart.BOTTOM): (SheetCoords(3, 5),),
    (Direction8.SOUTH, VerticalPart.TOP): (SheetCoords(1, 4),),
    (Direction8.SOUTH, VerticalPart.BOTTOM): (
        SheetCoords(1, 5),
        SheetCoords(2, 5),
    ),
    (Direction8.SOUTH_WEST, VerticalPart.TOP): (SheetCoords(0, 4),),
    (Direction8.SOUTH_WEST, VerticalPart.BOTTOM): (SheetCoords(1, 5),),
    (Direction8.WEST, VerticalPart.TOP): (SheetCoords(0, 2),),
    (Direction8.WEST, VerticalPart.BOTTOM): (SheetCoords(0, 3),),
    (Direction8.NORTH_WEST, VerticalPart.TOP): (SheetCoords(0, 0),),
    (Direction8.NORTH_WEST, VerticalPart.BOTTOM): (SheetCoords(0, 1),),
}


@dataclass(frozen=True)
class TallWall(MapTile):
    """One half of a two-cell-tall wall segment on the given corner/side."""

    corner: Direction8
    part: VerticalPart

    passable = False

    def frames(self) -> List[SheetCoords]:
        return list(WALL_FRAMES[(self.corner, self.part)])

    def atlas_name(self) -> str:
        return "wall"

    def scale_and_anchor(self) -> Tuple[Vec2, Vec2]:
        return (16.0, 16.0), (0.0, 0.0)


def ground_kind(i: int, j: int) -> MapTile:
    """Terrain for cell (i, j): flagstone at the origin, flowers on even cells."""
    if i == 0 and j == 0:
        return Flagstone()
    if i % 2 == 0 and j % 2 == 0:
        return FloweryGrass()
    return Grass()


def _wall_side(i: int, j: int, radius: int) -> Direction8:
    north = j == radius + 1
    south = j == -radius - 1
    east = i == radius + 1
    west = i == -radius - 1
    if north and east:
        return Direction8.NORTH_EAST
    if north and west:
        return Direction8.NORTH_WEST
    if south and east:
        return Direction8.SOUTH_EAST
    if south and west:
        return Direction8.SOUTH_WEST
    if north:
        return Direction8.NORTH
    if south:
        return Direction8.SOUTH
    if east:
        return Direction8.EAST
    return Direction8.WEST


def build_map(radius: int = MAP_RADIUS) -> Dict[GridPosition, Tile]:
    """
    Populate the static map: a square of ground from -radius to radius on
    both axes, ringed by a tall wall one cell outside it.

    Cells are keyed by GridPosition; a later insertion at the same position
    replaces the earlier tile.
    """
    if radius < 0:
        raise ValueError(f"map radius must be non-negative, got {radius}")
    tiles: Dict[GridPosition, Tile] = {}
    for i in range(-radius, radius + 1):
        for j in range(-radius, radius + 1):
            pos = GridPosition(i, j, GROUND_LAYER)
            tiles[pos] = Tile(ground_kind(i, j), (i + radius) * (j + radius))
    edge = radius + 1
    for i in range(-edge, edge + 1):
        for j in range(-edge, edge + 1):
            if abs(i) != edge and abs(j) != edge:
                continue
            side = _wall_side(i, j, radius)
            tiles[GridPosition(i, j, WALL_LAYER)] = Tile(
                TallWall(side, VerticalPart.BOTTOM)
            )
            # Top half: one cell above its base, one layer higher
            tiles[GridPosition(i, j + 1, WALL_LAYER + 1)] = Tile(
                TallWall(side, VerticalPart.TOP)
            )
    logger.debug("Built map with radius %d: %d tiles", radius, len(tiles))
    return tiles
