import pygame

from .constants import TILE_SIZE
from .direction import Direction
from .maze import TileKind


# -----------------------------
# Entity base (with classic left<->right wrap)
# -----------------------------
class Entity:
    def __init__(self, x, y, speed):
        self.spawn = pygame.Vector2(x, y)
        self.pos = pygame.Vector2(x, y)  # top-left of a one-tile box
        self.direction = Direction.NONE
        self.speed = speed

    @property
    def center(self):
        return self.pos + pygame.Vector2(TILE_SIZE / 2, TILE_SIZE / 2)

    def nearest_tile(self):
        return round(self.pos.y / TILE_SIZE), round(self.pos.x / TILE_SIZE)

    def grid_position(self):
        row, col = self.nearest_tile()
        return pygame.Vector2(col * TILE_SIZE, row * TILE_SIZE)

    def on_tile_center(self):
        # Tolerance follows the current speed, so frightened ghosts get a
        # narrower turn window than normal ones.
        for v in (self.pos.x, self.pos.y):
            offset = v % TILE_SIZE
            if min(offset, TILE_SIZE - offset) > self.speed:
                return False
        return True

    def snap_to_grid(self):
        self.pos = self.grid_position()

    def advance(self, grid, blocked=(TileKind.WALL,)):
        if self.direction is Direction.NONE:
            return False
        if not grid.can_advance(self.pos.x, self.pos.y, self.speed, self.direction, blocked):
            return False
        self.pos += self.direction.vector * self.speed
        return True

    def wrap_tunnel(self, grid):
        half = TILE_SIZE / 2
        if self.pos.x < -half:
            self.pos.x += grid.pixel_width
            return True
        if self.pos.x > grid.pixel_width - half:
            self.pos.x -= grid.pixel_width
            return True
        return False

    def reset(self):
        self.pos = pygame.Vector2(self.spawn)
        self.direction = Direction.NONE
