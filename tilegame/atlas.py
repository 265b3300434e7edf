"""
Sprite-sheet atlases: grid geometry, flat cell indices and the registry that
maps logical atlas names to loaded sheets.
"""

from __future__ import annotations
import logging
import os
from typing import Any, Callable, Dict, Iterable, NamedTuple, Optional, Tuple

from .sheet import SheetCoords
from .tile import Tile

logger = logging.getLogger(__name__)


class UnknownAtlas(LookupError):
    """Raised when an atlas name was never registered."""


class AtlasEntry:
    """
    A sprite sheet cut into a regular grid of cells.
    Attributes:
        sheet: Opaque handle returned by the asset loader.
        grid_width (int): Number of columns.
        grid_height (int): Number of rows.
        cell_size (tuple): Cell size in pixels (width, height).
        padding (tuple): Pixels between neighbouring cells (x, y).
        offset (tuple): Pixels before the first cell (x, y).
    """

    def __init__(
        self,
        sheet: Any,
        grid_width: int,
        grid_height: int,
        cell_size: Tuple[int, int] = (16, 16),
        padding: Optional[Tuple[int, int]] = None,
        offset: Optional[Tuple[int, int]] = None,
    ) -> None:
        if grid_width <= 0 or grid_height <= 0:
            raise ValueError(
                f"atlas grid must be positive, got {grid_width}x{grid_height}"
            )
        self.sheet = sheet
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.cell_size = cell_size
        self.padding = padding or (0, 0)
        self.offset = offset or (0, 0)

    def flat_index(self, col: int, row: int) -> int:
        """Row-major index of cell (col, row)."""
        assert 0 <= col < self.grid_width, (
            f"column {col} outside atlas grid width {self.grid_width}"
        )
        assert 0 <= row < self.grid_height, (
            f"row {row} outside atlas grid height {self.grid_height}"
        )
        return col + row * self.grid_width

    def coords_of(self, index: int) -> Tuple[int, int]:
        """Inverse of flat_index."""
        assert 0 <= index < self.grid_width * self.grid_height, (
            f"index {index} outside atlas of {self.grid_width}x{self.grid_height}"
        )
        return index % self.grid_width, index // self.grid_width

    def cell_rect(self, index: int) -> Tuple[int, int, int, int]:
        """
        Pixel rectangle (left, top, width, height) of a cell, measured from
        the top-left corner of the sheet. Padding only separates cells; there
        is none before the first column or row.
        """
        col, row = self.coords_of(index)
        cell_w, cell_h = self.cell_size
        pad_x, pad_y = self.padding
        off_x, off_y = self.offset
        left = off_x + col * (cell_w + pad_x)
        top = off_y + row * (cell_h + pad_y)
        return left, top, cell_w, cell_h

    def __repr__(self) -> str:
        return (
            f"<AtlasEntry sheet={self.sheet!r} "
            f"grid={self.grid_width}x{self.grid_height} cell={self.cell_size}>"
        )


class AtlasSprite(NamedTuple):
    """What the renderer needs to draw one cell of an atlas."""

    atlas: AtlasEntry
    index: int
    flip_x: bool
    flip_y: bool


class AtlasRegistry:
    """
    Named atlases, registered once at startup and only read afterwards.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, AtlasEntry] = {}

    def register(
        self,
        name: str,
        sheet: Any,
        grid_width: int,
        grid_height: int,
        cell_size: Tuple[int, int] = (16, 16),
        padding: Optional[Tuple[int, int]] = None,
        offset: Optional[Tuple[int, int]] = None,
    ) -> AtlasEntry:
        if name in self._entries:
            raise ValueError(f"atlas {name!r} is already registered")
        entry = AtlasEntry(
            sheet, grid_width, grid_height, cell_size, padding, offset
        )
        self._entries[name] = entry
        logger.debug("Registered atlas %r: %r", name, entry)
        return entry

    def lookup(self, name: str) -> AtlasEntry:
        try:
            return self._entries[name]
        except KeyError:
            logger.error("Atlas %r is not registered", name)
            raise UnknownAtlas(name) from None

    def names(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def index_of(self, name: str, coords: SheetCoords) -> int:
        return self.lookup(name).flat_index(coords.col, coords.row)

    def sprite(self, tile: Tile) -> AtlasSprite:
        """Resolve a tile to the atlas cell and mirror flags to draw."""
        coords = tile.resolve()
        name = tile.kind.atlas_name()
        return AtlasSprite(
            self.lookup(name),
            self.index_of(name, coords),
            coords.flip_x,
            coords.flip_y,
        )


def load_atlases(
    specs: Iterable[tuple],
    loader: Callable[[str], Any],
    asset_dir: str = "",
) -> AtlasRegistry:
    """
    Build the registry from a static atlas table.
    specs: rows of (name, path, cell_size, grid_width, grid_height, padding).
    loader: asset loader taking a file path and returning a sheet handle.
    """
    registry = AtlasRegistry()
    for name, path, cell_size, grid_width, grid_height, padding in specs:
        full_path = os.path.join(asset_dir, path) if asset_dir else path
        sheet = loader(full_path)
        registry.register(
            name, sheet, grid_width, grid_height, cell_size, padding
        )
    logger.info("Loaded %d atlases", len(registry))
    return registry
