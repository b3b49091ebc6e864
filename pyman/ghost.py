from enum import Enum

import pygame

from .constants import (
    CLYDE_SHY_TILES, FRIGHT_SPEED, GHOST_RELEASE, GHOST_SPAWNS, GHOST_SPEED,
    HOUSE_EXIT, INKY_PIVOT_TILES, PINKY_AHEAD_TILES, TILE_SIZE,
)
from .direction import Direction, TURN_ORDER
from .entity import Entity
from .maze import TileKind

# Ghosts outside the house never walk back into it on their own.
GHOST_BLOCKED = (TileKind.WALL, TileKind.GHOST_HOUSE)


class GhostName(Enum):
    BLINKY = "blinky"  # direct pursuer, the leader
    PINKY = "pinky"    # ambusher
    INKY = "inky"      # flanker
    CLYDE = "clyde"    # shy


def corner_target(name, grid):
    w, h = grid.pixel_width, grid.pixel_height
    corners = {
        GhostName.BLINKY: (w, 0),
        GhostName.PINKY: (0, 0),
        GhostName.INKY: (w, h),
        GhostName.CLYDE: (0, h),
    }
    return pygame.Vector2(corners[name])


# -----------------------------
# Targeting strategies
# -----------------------------
# Every strategy takes (ghost, player, leader, grid, scatter) and returns a
# pixel-space target.

def blinky_target(ghost, player, leader, grid, scatter):
    if scatter:
        return corner_target(ghost.name, grid)
    return player.center


def pinky_target(ghost, player, leader, grid, scatter):
    if scatter:
        return corner_target(ghost.name, grid)
    return player.center + player.direction.vector * (PINKY_AHEAD_TILES * TILE_SIZE)


def inky_target(ghost, player, leader, grid, scatter):
    if scatter:
        return corner_target(ghost.name, grid)
    if leader is None:
        return player.center
    pivot = player.center + player.direction.vector * (INKY_PIVOT_TILES * TILE_SIZE)
    return leader.center + (pivot - leader.center) * 2


def clyde_target(ghost, player, leader, grid, scatter):
    if scatter:
        return corner_target(ghost.name, grid)
    shy_radius = CLYDE_SHY_TILES * TILE_SIZE
    if ghost.center.distance_squared_to(player.center) > shy_radius * shy_radius:
        return player.center
    return corner_target(ghost.name, grid)


def frightened_target(ghost, player, leader, grid, scatter):
    return corner_target(ghost.name, grid)


CHASE_STRATEGIES = {
    GhostName.BLINKY: blinky_target,
    GhostName.PINKY: pinky_target,
    GhostName.INKY: inky_target,
    GhostName.CLYDE: clyde_target,
}


# -----------------------------
# Ghost
# -----------------------------
class Ghost(Entity):
    def __init__(self, name, x, y, release_delay=0.0):
        super().__init__(x, y, GHOST_SPEED)
        self.name = name
        self.chase_strategy = CHASE_STRATEGIES[name]
        self.release_delay = release_delay
        self.release_time = release_delay
        self.active = release_delay <= 0
        self.eaten = False
        self._decided_tile = None

    @classmethod
    def spawn(cls, name, grid):
        row, col = GHOST_SPAWNS[name.value]
        x, y = grid.tile_to_pixel(row, col)
        return cls(name, x, y, GHOST_RELEASE[name.value])

    def reset(self, now=0.0):
        super().reset()
        self.eaten = False
        self.release_time = now + self.release_delay
        self.active = self.release_delay <= 0
        self._decided_tile = None

    def send_home(self, house_pos, release_time):
        self.pos = pygame.Vector2(house_pos)
        self.direction = Direction.NONE
        self.active = False
        self.release_time = release_time
        self._decided_tile = None

    def reverse(self):
        opposite = self.direction.opposite
        if opposite is not Direction.NONE:
            self.direction = opposite
            return True
        return False

    def in_house(self, grid):
        return grid.overlaps(self.pos.x, self.pos.y, (TileKind.GHOST_HOUSE,))

    def target(self, player, leader, grid, frightened, scatter):
        strategy = frightened_target if frightened else self.chase_strategy
        return strategy(self, player, leader, grid, scatter)

    def exits(self, grid, tile):
        """Passable directions from ``tile``, without the U-turn unless forced."""
        row, col = tile
        open_dirs = []
        for d in TURN_ORDER:
            dx, dy = d.value
            if grid.wrapped(row + dy, col + dx) not in GHOST_BLOCKED:
                open_dirs.append(d)
        reverse = self.direction.opposite
        forward = [d for d in open_dirs if d is not reverse]
        return forward or open_dirs

    def choose_direction(self, grid, tile, candidates, target):
        row, col = tile
        best, best_dist = Direction.NONE, None
        for d in candidates:
            dx, dy = d.value
            dist = grid.tile_center(row + dy, col + dx).distance_squared_to(target)
            if best_dist is None or dist < best_dist:
                best, best_dist = d, dist
        return best

    def update(self, grid, player, leader, frightened, scatter):
        self.speed = FRIGHT_SPEED if frightened else GHOST_SPEED

        if self.in_house(grid):
            self.leave_house(grid)
            return

        if self.on_tile_center():
            tile = self.nearest_tile()
            if tile != self._decided_tile:
                self._decided_tile = tile
                candidates = self.exits(grid, tile)
                if candidates != [self.direction]:
                    self.snap_to_grid()
                    target = self.target(player, leader, grid, frightened, scatter)
                    self.direction = self.choose_direction(grid, tile, candidates, target)

        if not self.advance(grid, GHOST_BLOCKED):
            self.snap_to_grid()
            tile = self.nearest_tile()
            self._decided_tile = tile
            target = self.target(player, leader, grid, frightened, scatter)
            self.direction = self.choose_direction(grid, tile, self.exits(grid, tile), target)

        self.wrap_tunnel(grid)

    def leave_house(self, grid):
        """Scripted walk to the tile above the door: x first, then y."""
        tx, ty = grid.tile_to_pixel(*HOUSE_EXIT)
        dx, dy = tx - self.pos.x, ty - self.pos.y
        if dx == 0 and dy == 0:
            return

        if abs(dx) >= abs(dy):
            self.direction = Direction.RIGHT if dx > 0 else Direction.LEFT
        else:
            self.direction = Direction.DOWN if dy > 0 else Direction.UP

        if dx != 0:
            self.pos.x = tx if abs(dx) <= self.speed else self.pos.x + self.speed * (1 if dx > 0 else -1)
        else:
            self.pos.y = ty if abs(dy) <= self.speed else self.pos.y + self.speed * (1 if dy > 0 else -1)
