from .constants import PLAYER_SPEED
from .direction import Direction
from .entity import Entity
from .maze import TileKind

# The house door is closed to the player.
PLAYER_BLOCKED = (TileKind.WALL, TileKind.GHOST_HOUSE)


# -----------------------------
# Player
# -----------------------------
class Player(Entity):
    def __init__(self, x, y, speed=PLAYER_SPEED):
        super().__init__(x, y, speed)
        self.requested = Direction.NONE
        self.alive = True

    def request(self, direction):
        self.requested = direction

    def update(self, grid):
        self.try_turn(grid)
        self.advance(grid, PLAYER_BLOCKED)
        self.wrap_tunnel(grid)

    def try_turn(self, grid):
        """Apply the requested direction if the rules allow it.

        Reversals are instant. Any other turn waits for a tile center and an
        open tile, and snaps onto the grid before turning so the entity
        never drifts off its lane.
        """
        wanted = self.requested
        if wanted is Direction.NONE:
            return False
        if wanted is self.direction:
            self.requested = Direction.NONE
            return False
        if self.direction is not Direction.NONE and wanted is self.direction.opposite:
            self.direction = wanted
            self.requested = Direction.NONE
            return True
        if not self.on_tile_center():
            return False
        snapped = self.grid_position()
        if not grid.can_advance(snapped.x, snapped.y, self.speed, wanted, PLAYER_BLOCKED):
            return False
        self.pos = snapped
        self.direction = wanted
        self.requested = Direction.NONE
        return True

    def reset(self):
        super().reset()
        self.requested = Direction.NONE
        self.alive = True
