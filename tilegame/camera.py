"""
Orthographic 2D camera that follows the player.
"""

from __future__ import annotations
from typing import Tuple

from .config import CAMERA_PIXELS_PER_UNIT, CAMERA_PLAYER_OFFSET
from .tile import Vec2, Vec3


class Camera:
    """
    Maps world units to normalized device coordinates.
    Attributes:
        x, y: World position at the center of the screen.
        pixels_per_unit: Screen pixels covered by one world unit.
        offset: Subtracted from the followed position to frame the target.
    """

    def __init__(
        self,
        screen_width: int,
        screen_height: int,
        pixels_per_unit: float = CAMERA_PIXELS_PER_UNIT,
        offset: Vec2 = CAMERA_PLAYER_OFFSET,
    ) -> None:
        self.w = screen_width
        self.h = screen_height
        self.pixels_per_unit = pixels_per_unit
        self.offset = offset
        self.x = 0.0
        self.y = 0.0

    def follow(self, translation: Vec3) -> None:
        """Center on a target's translation minus the framing offset."""
        self.x = translation[0] - self.offset[0]
        self.y = translation[1] - self.offset[1]

    def world_to_ndc(self, wx: float, wy: float) -> Tuple[float, float]:
        """Convert a world point into [-1, 1] clip space (y up in both)."""
        nx = (wx - self.x) * self.pixels_per_unit / (self.w * 0.5)
        ny = (wy - self.y) * self.pixels_per_unit / (self.h * 0.5)
        return nx, ny

    def visible_half_extent(self) -> Vec2:
        """Half the visible area, in world units."""
        return (
            self.w * 0.5 / self.pixels_per_unit,
            self.h * 0.5 / self.pixels_per_unit,
        )
