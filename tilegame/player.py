from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import PLAYER_ANIM_SPEED, RUN_SPEED, WALK_SPEED
from .direction import Direction4, NoOrientation, direction4_from_vector
from .sheet import SheetCoords
from .tile import (
    AnimatedTile,
    GridPosition,
    Tile,
    TileKind,
    Vec2,
    Vec3,
    advance_animation,
)

_C = SheetCoords

STAND_FRAMES: Dict[Direction4, List[SheetCoords]] = {
    Direction4.NORTH: [_C(0, 1)],
    Direction4.EAST: [_C(0, 2)],
    Direction4.SOUTH: [_C(0, 0)],
    Direction4.WEST: [_C(0, 2).flip_horizontal()],
}

WALK_FRAMES: Dict[Direction4, List[SheetCoords]] = {
    Direction4.NORTH: [
        _C(4, 3),
        _C(5, 3),
        _C(6, 3),
        _C(4, 3).flip_horizontal(),
        _C(5, 3).flip_horizontal(),
        _C(6, 3).flip_horizontal(),
    ],
    Direction4.EAST: [_C(0, 4), _C(1, 4), _C(2, 4), _C(3, 4), _C(4, 4), _C(5, 4)],
    Direction4.SOUTH: [
        _C(0, 3),
        _C(1, 3),
        _C(2, 3),
        _C(0, 3).flip_horizontal(),
        _C(1, 3).flip_horizontal(),
        _C(2, 3).flip_horizontal(),
    ],
    Direction4.WEST: [
        _C(0, 4).flip_horizontal(),
        _C(1, 4).flip_horizontal(),
        _C(2, 4).flip_horizontal(),
        _C(3, 4).flip_horizontal(),
        _C(4, 4).flip_horizontal(),
        _C(5, 4).flip_horizontal(),
    ],
}

# Run cycle: the walk cycle with its stride frames swapped for longer ones
RUN_FRAMES: Dict[Direction4, List[SheetCoords]] = {
    Direction4.NORTH: [
        _C(4, 3),
        _C(5, 3),
        _C(7, 3),
        _C(4, 3).flip_horizontal(),
        _C(5, 3).flip_horizontal(),
        _C(7, 3).flip_horizontal(),
    ],
    Direction4.EAST: [_C(0, 4), _C(1, 4), _C(6, 4), _C(3, 4), _C(4, 4), _C(7, 4)],
    Direction4.SOUTH: [
        _C(0, 3),
        _C(1, 3),
        _C(3, 3),
        _C(0, 3).flip_horizontal(),
        _C(1, 3).flip_horizontal(),
        _C(3, 3).flip_horizontal(),
    ],
    Direction4.WEST: [
        _C(0, 4).flip_horizontal(),
        _C(1, 4).flip_horizontal(),
        _C(6, 4).flip_horizontal(),
        _C(3, 4).flip_horizontal(),
        _C(4, 4).flip_horizontal(),
        _C(7, 4).flip_horizontal(),
    ],
}

# Frame shown while moving with a velocity that has no facing
_STILL_FRAME = [_C(0, 0)]


class PlayerStatus(TileKind):
    """Base for the player's poses; all of them sample the player sheet."""

    def atlas_name(self) -> str:
        return "player-base"

    def scale_and_anchor(self) -> Tuple[Vec2, Vec2]:
        # 16 px per unit; lifted half a unit so the feet sit on the cell
        return (16.0, 16.0), (0.0, 0.5)

    def direction(self, fallback: Direction4 = Direction4.SOUTH) -> Direction4:
        raise NotImplementedError(
            "PlayerStatus.direction must be implemented by subclasses"
        )


@dataclass(frozen=True)
class Stand(PlayerStatus):
    facing: Direction4 = Direction4.SOUTH

    def direction(self, fallback: Direction4 = Direction4.SOUTH) -> Direction4:
        return self.facing

    def frames(self) -> List[SheetCoords]:
        return list(STAND_FRAMES[self.facing])


@dataclass(frozen=True)
class _Moving(PlayerStatus):
    velocity: Vec2 = field(default=(0.0, 0.0))

    _table = WALK_FRAMES

    def direction(self, fallback: Direction4 = Direction4.SOUTH) -> Direction4:
        try:
            return direction4_from_vector(self.velocity)
        except NoOrientation:
            return fallback

    def frames(self) -> List[SheetCoords]:
        try:
            facing = direction4_from_vector(self.velocity)
        except NoOrientation:
            return list(_STILL_FRAME)
        return list(self._table[facing])

    def anim_speed(self) -> Optional[float]:
        return PLAYER_ANIM_SPEED

    def is_continuous_with(self, other: TileKind) -> bool:
        # Walk <-> run with the same facing keeps the phase
        if not isinstance(other, _Moving) or type(other) is type(self):
            return False
        try:
            return direction4_from_vector(self.velocity) == direction4_from_vector(
                other.velocity
            )
        except NoOrientation:
            return False


@dataclass(frozen=True)
class Walk(_Moving):
    pass


@dataclass(frozen=True)
class Run(_Moving):
    _table = RUN_FRAMES


class PlayerSpeeds:
    """Movement speeds in world units per second."""

    def __init__(self, walk: float = WALK_SPEED, run: float = RUN_SPEED) -> None:
        self.walk = walk
        self.run = run


class Player:
    """Player state: pose, world translation and sprite animation."""

    def __init__(
        self,
        spawn: GridPosition = GridPosition(0, 0, 1),
        status: Optional[PlayerStatus] = None,
        speeds: Optional[PlayerSpeeds] = None,
    ) -> None:
        self.status: PlayerStatus = status or Stand(Direction4.SOUTH)
        self.speeds = speeds or PlayerSpeeds()
        # Render transform of the spawn cell; translation is the sprite origin
        self.transform = spawn.transform(self.status)
        self.animation: Optional[AnimatedTile] = None

    @property
    def translation(self) -> Vec3:
        return self.transform.translation

    def accept_input(self, movement: Vec2, run: bool) -> None:
        """
        Turn a movement intent into a pose. movement is normalized here; no
        movement means standing, facing wherever the player last faced.
        """
        mx, my = movement
        length = math.hypot(mx, my)
        if length > 0.0:
            mx, my = mx / length, my / length
            if run:
                speed = self.speeds.run
                self.status = Run((mx * speed, my * speed))
            else:
                speed = self.speeds.walk
                self.status = Walk((mx * speed, my * speed))
        else:
            self.status = Stand(self.status.direction())

    def apply_movement(self, dt: float) -> None:
        """Move by the current velocity; standing does not move."""
        if not isinstance(self.status, _Moving):
            return
        vx, vy = self.status.velocity
        x, y, z = self.transform.translation
        self.transform = self.transform._replace(
            translation=(x + vx * dt, y + vy * dt, z)
        )

    def update_sprite(self, dt: float) -> Tile:
        """Advance the sprite animation for this frame and return the tile to draw."""
        self.animation = advance_animation(self.animation, self.status, dt)
        return self.animation.tile

    def __repr__(self) -> str:
        x, y, _ = self.transform.translation
        return f"<Player x={x:.2f} y={y:.2f} status={self.status!r}>"
