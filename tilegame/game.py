from __future__ import annotations
import logging
import os
import pygame
from typing import List, Optional, Tuple

from .atlas import AtlasRegistry, AtlasSprite, load_atlases
from .camera import Camera
from .config import (
    ASSET_DIR,
    ATLASES,
    FPS,
    PLAYER_SPAWN,
    RUN_SPEED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WALK_SPEED,
)
from .input_handler import InputHandler
from .map_tiles import build_map
from .player import Player, PlayerSpeeds
from .renderer import Renderer
from .tile import GridPosition, Transform

logger = logging.getLogger(__name__)


def asset_path(relative: str) -> str:
    """Absolute path of a file under the package's asset directory."""
    return os.path.join(os.path.dirname(__file__), ASSET_DIR, relative)


def missing_sheets() -> List[str]:
    """Paths of atlas sheets from the atlas table that are not on disk."""
    return [
        asset_path(path)
        for _, path, *_ in ATLASES
        if not os.path.isfile(asset_path(path))
    ]


class Game:
    """Main Game class: handles initialization, loop, and high-level coordination."""

    def __init__(self, clock: Optional[pygame.time.Clock] = None) -> None:
        # Initialize Pygame and its subsystems
        pygame.init()
        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        # Initialize an OpenGL-enabled window
        self.screen = pygame.display.set_mode(
            (self.screen_width, self.screen_height),
            pygame.OPENGL | pygame.DOUBLEBUF,
        )
        pygame.display.set_caption("Tile Game Prototype")
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        # Renderer needs the GL context; it is also the sheet loader
        self.renderer = Renderer(self.screen_width, self.screen_height)
        asset_dir = asset_path("")
        self.atlases: AtlasRegistry = load_atlases(
            ATLASES, self.renderer.load_sheet, asset_dir
        )
        # Static map: resolved to sprites once, never changes afterwards
        self.map_tiles = build_map()
        self.map_sprites: List[Tuple[AtlasSprite, Transform]] = [
            (self.atlases.sprite(tile), pos.transform(tile.kind))
            for pos, tile in self.map_tiles.items()
        ]
        self.player = Player(
            spawn=GridPosition(*PLAYER_SPAWN),
            speeds=PlayerSpeeds(walk=WALK_SPEED, run=RUN_SPEED),
        )
        self.player_sprite = self.atlases.sprite(self.player.update_sprite(0.0))
        self.camera = Camera(self.screen_width, self.screen_height)
        self.camera.follow(self.player.translation)
        # Input abstraction
        self.input = InputHandler()
        # Control flag
        self.running = True
        logger.info(
            "Game initialized: %d map tiles, %d atlases",
            len(self.map_sprites),
            len(self.atlases),
        )

    def handle_events(self) -> None:
        """Process input events via InputHandler and handle quit."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False

    def update(self, dt: float) -> None:
        """Update game state: turn input into a pose, move, animate, follow."""
        self.player.accept_input(self.input.movement(), self.input.run_held())
        self.player.apply_movement(dt)
        tile = self.player.update_sprite(dt)
        self.player_sprite = self.atlases.sprite(tile)
        self.camera.follow(self.player.translation)

    def sprites(self) -> List[Tuple[AtlasSprite, Transform]]:
        """Everything to draw this frame."""
        return self.map_sprites + [(self.player_sprite, self.player.transform)]

    def render(self) -> None:
        """Render the entire scene."""
        self.renderer.render(self.sprites(), self.camera)

    def run(self) -> None:
        """Main loop: handle events, update, and render."""
        while self.running:
            # Cap the frame rate and compute delta time in seconds
            dt = self.clock.tick(self.fps) / 1000.0
            self.handle_events()
            self.update(dt)
            self.render()
        logger.info("Shutting down")
        # Clean up GL resources before quitting
        self.renderer.shutdown()
        pygame.quit()
