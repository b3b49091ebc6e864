# -----------------------------
# Py-Man simulation constants
# -----------------------------
# Pixel values assume a top-left anchored, one-tile square entity box.

TILE_SIZE = 26
TICK_SECONDS = 0.016          # ~60 Hz fixed step
CORNER_PADDING = 2            # inset of the collision box corners

PLAYER_SPEED = 2.5            # pixels per tick
GHOST_SPEED = 2.0
FRIGHT_SPEED = 1.8

LIVES_START = 3
MAX_LIVES = 3

PELLET_SCORE = 10
POWER_SCORE = 50
GHOST_EAT_SCORE = 200
CHERRY_SCORE = 1000
STRAWBERRY_SCORE = 1000
STRAWBERRY_BONUS_SCORE = 2500  # strawberry eaten with full lives

SCATTER_TIME = 7.0
CHASE_TIME = 20.0
FRIGHT_TIME = 10.0
DEATH_TIME = 1.6
GHOST_RESPAWN_DELAY = 5.0

CHERRY_SPAWN_TIME = 15.0
STRAWBERRY_SPAWN_TIME = 30.0
PICKUP_LIFETIME = 12.0

HIT_DISTANCE = 20             # ghost/player center distance
PELLET_RADIUS = 12
POWER_RADIUS = 15
PICKUP_RADIUS = 15

PINKY_AHEAD_TILES = 4
INKY_PIVOT_TILES = 2
CLYDE_SHY_TILES = 8

# Spawns are (row, col) in tiles; fractional columns straddle two tiles.
PLAYER_SPAWN = (22, 13)
HOUSE_EXIT = (11, 13)
HOUSE_CENTER = (14, 13)
GHOST_SPAWNS = {
    "blinky": (11, 13),
    "pinky": (14, 13),
    "inky": (14, 11.5),
    "clyde": (14, 14.5),
}
GHOST_RELEASE = {
    "blinky": 0.0,
    "pinky": 5.0,
    "inky": 10.0,
    "clyde": 15.0,
}
