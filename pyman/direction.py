from enum import Enum

import pygame


class Direction(Enum):
    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self):
        return pygame.Vector2(self.value)

    @property
    def opposite(self):
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Enumeration order doubles as the ghost tie-break order.
TURN_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
