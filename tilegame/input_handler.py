"""
Input handling abstraction to decouple Pygame input from game logic.
"""

from __future__ import annotations
import pygame
from typing import Sequence, Tuple


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events and
    turns held keys into a movement intent and a run modifier.
    """

    def __init__(self) -> None:
        self._quit = False
        # Key state is initialized in process_events()
        self._keys: Sequence[bool] = ()

    def process_events(self) -> None:
        """
        Poll Pygame events, update internal quit state and capture key states.
        """
        self._quit = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._quit = True
        self._keys = pygame.key.get_pressed()

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def movement(self) -> Tuple[float, float]:
        """
        Return the movement intent from WASD/arrow keys: each axis is -1, 0
        or 1 before normalization (world y points up, so W is +y).
        """
        keys = self._keys
        if not keys:
            return (0.0, 0.0)
        mx = 0.0
        my = 0.0
        if keys[pygame.K_w] or keys[pygame.K_UP]:
            my += 1.0
        if keys[pygame.K_s] or keys[pygame.K_DOWN]:
            my -= 1.0
        if keys[pygame.K_d] or keys[pygame.K_RIGHT]:
            mx += 1.0
        if keys[pygame.K_a] or keys[pygame.K_LEFT]:
            mx -= 1.0
        return (mx, my)

    def run_held(self) -> bool:
        """Return True while the run modifier (left shift) is held."""
        keys = self._keys
        if not keys:
            return False
        return bool(keys[pygame.K_LSHIFT])
