import logging
import os
from enum import IntEnum

import pygame

from .constants import CORNER_PADDING, TILE_SIZE

logger = logging.getLogger(__name__)


class TileKind(IntEnum):
    FLOOR = 0
    WALL = 1
    GHOST_HOUSE = 2
    POWER_PILL = 3


# Maze legend:
# '#' wall  '.' pellet floor  'o' power pill  '=' ghost house  '-' house door
# A space is plain floor and still carries a pellet.
LEGEND = {
    '#': TileKind.WALL,
    '.': TileKind.FLOOR,
    ' ': TileKind.FLOOR,
    'o': TileKind.POWER_PILL,
    '=': TileKind.GHOST_HOUSE,
    '-': TileKind.GHOST_HOUSE,
}

DEFAULT_LEVEL = [
"############################",
"#............##............#",
"#.####.#####.##.#####.####.#",
"#o####.#####.##.#####.####o#",
"#.####.#####.##.#####.####.#",
"#..........................#",
"#.####.##.########.##.####.#",
"#.####.##.########.##.####.#",
"#......##....##....##......#",
"######.#####.##.#####.######",
"######.#####.##.#####.######",
"######.##..........##.######",
"######.##.###--###.##.######",
"######.##.#======#.##.######",
"..........#======#..........",
"######.##.#======#.##.######",
"######.##.########.##.######",
"######.##..........##.######",
"######.##.########.##.######",
"######.##.########.##.######",
"#............##............#",
"#.####.#####.##.#####.####.#",
"#o..##................##..o#",
"###.##.##.########.##.##.###",
"###.##.##.########.##.##.###",
"#......##....##....##......#",
"#.##########.##.##########.#",
"#.##########.##.##########.#",
"#..........................#",
"############################",
]


class GridMap:
    """Read-only tile classification of one maze.

    Rows never wrap and resolve to WALL outside the matrix. Columns wrap
    for corner tests only, which is what joins the two side tunnels.
    """

    def __init__(self, tiles, tile_size=TILE_SIZE):
        rows = [tuple(TileKind(v) for v in row) for row in tiles]
        if not rows or not rows[0]:
            raise ValueError("tile matrix must not be empty")
        if any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("tile matrix must be rectangular")
        self._tiles = tuple(rows)
        self.rows = len(rows)
        self.cols = len(rows[0])
        self.tile_size = tile_size

    @classmethod
    def from_lines(cls, lines):
        tiles = []
        for r, line in enumerate(lines):
            row = []
            for c, ch in enumerate(line):
                if ch not in LEGEND:
                    raise ValueError(f"unknown tile {ch!r} at row {r}, col {c}")
                row.append(LEGEND[ch])
            tiles.append(row)
        return cls(tiles)

    @classmethod
    def default(cls):
        return cls.from_lines(DEFAULT_LEVEL)

    @classmethod
    def from_file_or_default(cls, path="level1.txt"):
        if os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                lines = [line.rstrip("\n") for line in f if line.strip("\n")]
            logger.info("Loaded maze layout from %s", path)
            return cls.from_lines(lines)
        logger.info("No maze layout at %s, using the built-in maze", path)
        return cls.default()

    @property
    def pixel_width(self):
        return self.cols * self.tile_size

    @property
    def pixel_height(self):
        return self.rows * self.tile_size

    def in_bounds(self, row, col):
        return 0 <= row < self.rows and 0 <= col < self.cols

    def classify(self, row, col):
        if not self.in_bounds(row, col):
            return TileKind.WALL
        return self._tiles[row][col]

    def wrapped(self, row, col):
        return self.classify(row, col % self.cols)

    def is_walkable(self, row, col):
        return self.classify(row, col) != TileKind.WALL

    def is_ghost_house(self, row, col):
        return self.classify(row, col) == TileKind.GHOST_HOUSE

    def tiles(self, *kinds):
        for r, row in enumerate(self._tiles):
            for c, kind in enumerate(row):
                if kind in kinds:
                    yield r, c

    # -----------------------------
    # Pixel <-> tile
    # -----------------------------
    def pixel_to_tile(self, x, y):
        return int(y // self.tile_size), int(x // self.tile_size)

    def tile_to_pixel(self, row, col):
        return col * self.tile_size, row * self.tile_size

    def tile_center(self, row, col):
        half = self.tile_size / 2
        return pygame.Vector2(col * self.tile_size + half, row * self.tile_size + half)

    # -----------------------------
    # Collision
    # -----------------------------
    def corners(self, x, y):
        p = CORNER_PADDING
        far = self.tile_size - p
        return ((x + p, y + p), (x + far, y + p), (x + p, y + far), (x + far, y + far))

    def overlaps(self, x, y, kinds):
        for cx, cy in self.corners(x, y):
            row, col = self.pixel_to_tile(cx, cy)
            if self.wrapped(row, col) in kinds:
                return True
        return False

    def can_advance(self, x, y, speed, direction, blocked=(TileKind.WALL,)):
        dx, dy = direction.value
        return not self.overlaps(x + dx * speed, y + dy * speed, blocked)
