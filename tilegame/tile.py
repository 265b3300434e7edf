"""
Tile kinds, tile instances, animation tracking and world placement.
"""

from __future__ import annotations
import math
from typing import List, NamedTuple, Optional, Tuple

from .sheet import SheetCoords

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


class TileKind:
    """
    Base class for everything that can be drawn from a sprite sheet.

    Subclasses describe one logical kind of content (a terrain type, a wall
    segment, a character pose) and must say which sheet cells depict it.
    """

    def frames(self) -> List[SheetCoords]:
        """
        Every sheet cell that depicts this kind, in a stable order.
        Tile.variant and AnimatedTile index into this list; it is never empty.
        """
        raise NotImplementedError("TileKind.frames must be implemented by subclasses")

    def atlas_name(self) -> str:
        """Name of the AtlasRegistry entry the frames refer to."""
        raise NotImplementedError(
            "TileKind.atlas_name must be implemented by subclasses"
        )

    def scale_and_anchor(self) -> Tuple[Vec2, Vec2]:
        """
        Return (pixels per world unit, anchor offset in world units).
        The anchor is added to the grid position so that tall sprites stand
        on their feet instead of their center.
        """
        raise NotImplementedError(
            "TileKind.scale_and_anchor must be implemented by subclasses"
        )

    def anim_speed(self) -> Optional[float]:
        """Frames per second for animated kinds, None for static ones."""
        return None

    def is_continuous_with(self, other: TileKind) -> bool:
        """
        True if switching from this kind to `other` keeps the animation
        phase instead of restarting it.
        """
        return False


class Tile:
    """A tile kind together with the variant chosen for it."""

    def __init__(self, kind: TileKind, variant: int = 0) -> None:
        if variant < 0:
            raise ValueError(f"variant must be non-negative, got {variant}")
        self.kind = kind
        self.variant = variant

    def resolve(self) -> SheetCoords:
        """Return the sheet cell for this variant, wrapping around the frame list."""
        frames = self.kind.frames()
        assert frames, f"{self.kind!r} has no frames"
        return frames[self.variant % len(frames)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.kind == other.kind and self.variant == other.variant

    def __repr__(self) -> str:
        return f"<Tile kind={self.kind!r} variant={self.variant}>"


class AnimatedTile:
    """
    A tile whose variant advances with elapsed time at the kind's
    animation speed. Only the kind is taken from the tile it is built from;
    the caller's Tile is never modified.
    """

    def __init__(self, tile: Tile, elapsed_time: float = 0.0) -> None:
        self._kind = tile.kind
        self.elapsed_time = elapsed_time

    @property
    def kind(self) -> TileKind:
        return self._kind

    @property
    def variant(self) -> int:
        speed = self._kind.anim_speed()
        if speed is None:
            return 0
        return int(math.floor(self.elapsed_time * speed))

    @property
    def tile(self) -> Tile:
        """Snapshot of the current frame; later ticks do not change it."""
        return Tile(self._kind, self.variant)

    def tick(self, dt: float) -> None:
        """Advance playback by dt seconds."""
        assert dt >= 0.0, f"negative frame time {dt}"
        self.elapsed_time += dt

    def observe(self, kind: TileKind, dt: float) -> None:
        """
        Follow the owning entity's current kind for one frame.

        Same kind: keep playing. Continuous change (e.g. walk to run): switch
        kind but keep the elapsed time. Any other change: restart from frame 0.
        """
        current = self._kind
        if kind == current:
            self.tick(dt)
        elif current.is_continuous_with(kind):
            self._kind = kind
            self.tick(dt)
        else:
            self._kind = kind
            self.elapsed_time = 0.0

    def resolve(self) -> SheetCoords:
        return self.tile.resolve()

    def __repr__(self) -> str:
        return f"<AnimatedTile tile={self.tile!r} elapsed_time={self.elapsed_time:.3f}>"


def advance_animation(
    current: Optional[AnimatedTile], kind: TileKind, dt: float
) -> AnimatedTile:
    """
    Return the animation tracker for an entity whose kind this frame is `kind`,
    creating one if the entity has none yet.
    """
    if current is None:
        return AnimatedTile(Tile(kind))
    current.observe(kind, dt)
    return current


class Transform(NamedTuple):
    """Render transform: world translation (x, y, z) and per-axis scale."""

    translation: Vec3
    scale: Vec2


class GridPosition(NamedTuple):
    """Integer map cell; layer doubles as draw order (z)."""

    x: int
    y: int
    layer: int = 0

    def transform(self, kind: TileKind) -> Transform:
        return place(self, kind)


def place(position: GridPosition, kind: TileKind) -> Transform:
    """
    Convert a grid position into a render transform for `kind`.
    The anchor offset shifts x and y only; the layer becomes z, and the
    scale is the reciprocal of the kind's pixels per world unit.
    """
    (size_x, size_y), (anchor_x, anchor_y) = kind.scale_and_anchor()
    translation = (
        float(position.x) + anchor_x,
        float(position.y) + anchor_y,
        float(position.layer),
    )
    return Transform(translation, (1.0 / size_x, 1.0 / size_y))
