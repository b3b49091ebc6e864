from enum import Enum

import pygame

from .constants import PICKUP_LIFETIME, TILE_SIZE


class PickupKind(Enum):
    CHERRY = "cherry"
    STRAWBERRY = "strawberry"


class Pickup:
    def __init__(self, x, y, kind, lifetime=PICKUP_LIFETIME):
        self.pos = pygame.Vector2(x, y)
        self.kind = kind
        self.time_left = lifetime

    @property
    def center(self):
        return self.pos + pygame.Vector2(TILE_SIZE / 2, TILE_SIZE / 2)

    def update(self, dt):
        """Count down the lifetime; True once it has run out."""
        self.time_left = max(0.0, self.time_left - dt)
        return self.time_left < 1e-9
