import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .constants import (
    CHERRY_SCORE, GHOST_EAT_SCORE, GHOST_RESPAWN_DELAY, HIT_DISTANCE,
    HOUSE_CENTER, LIVES_START, MAX_LIVES, PELLET_RADIUS, PELLET_SCORE,
    PICKUP_RADIUS, PLAYER_SPAWN, POWER_RADIUS, POWER_SCORE,
    STRAWBERRY_BONUS_SCORE, STRAWBERRY_SCORE, TICK_SECONDS,
)
from .ghost import Ghost, GhostName
from .maze import GridMap, TileKind
from .modes import ModeTimer, TimerEvent
from .pickups import Pickup, PickupKind
from .player import Player
from .scores import MemoryScoreBoard


class GameEvent(Enum):
    BEGINNING = "beginning"
    CHOMP = "chomp"
    POWER_PILL = "power_pill"
    EAT_GHOST = "eat_ghost"
    DEATH = "death"
    EAT_FRUIT = "eat_fruit"
    MODE_CHANGED = "mode_changed"
    LEVEL_CLEAR = "level_clear"
    GAME_OVER = "game_over"


# -----------------------------
# Read-only views for presentation
# -----------------------------
@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    direction: str
    alive: bool


@dataclass(frozen=True)
class GhostView:
    name: str
    x: float
    y: float
    direction: str
    active: bool
    eaten: bool
    frightened: bool


@dataclass(frozen=True)
class PickupView:
    x: float
    y: float
    kind: str
    time_left: float


@dataclass(frozen=True)
class GameSnapshot:
    player: PlayerView
    ghosts: Tuple[GhostView, ...]
    pills: Tuple[Tuple[float, float, bool], ...]
    pickup: Optional[PickupView]
    score: int
    lives: int
    high_score: int
    level: int
    game_over: bool
    paused: bool  # death hold in progress


def chebyshev(a, b):
    return max(abs(a.x - b.x), abs(a.y - b.y))


# -----------------------------
# Game
# -----------------------------
class Game:
    """One round of Py-Man, advanced one fixed step per ``tick()``."""

    def __init__(self, grid=None, scoreboard=None, rng=None, dt=TICK_SECONDS):
        self.logger = logging.getLogger(__name__)
        self.grid = grid if grid is not None else GridMap.default()
        self.scoreboard = scoreboard if scoreboard is not None else MemoryScoreBoard()
        self.rng = rng if rng is not None else random.Random()
        self.dt = dt
        self.new_game()

    def new_game(self):
        self.score = 0
        self.lives = LIVES_START
        self.level = 1
        self.game_over = False
        self._score_recorded = False
        self.high_score = self._read_high_score()
        self.timers = ModeTimer()
        self.player = Player(*self.grid.tile_to_pixel(*PLAYER_SPAWN))
        self.ghosts = [Ghost.spawn(name, self.grid) for name in GhostName]
        self.pills = self._build_pills()
        self.pickup = None
        self.events = [GameEvent.BEGINNING]
        self.logger.info("New game: %d pills, high score %d", len(self.pills), self.high_score)

    def _build_pills(self):
        pills = {}
        for row, col in self.grid.tiles(TileKind.FLOOR, TileKind.POWER_PILL):
            pills[(row, col)] = self.grid.classify(row, col) == TileKind.POWER_PILL
        return pills

    def _read_high_score(self):
        try:
            return int(self.scoreboard.best_score)
        except Exception:
            self.logger.warning("High score unavailable", exc_info=True)
            return 0

    # -----------------------------
    # Queries
    # -----------------------------
    @property
    def frightened(self):
        return self.timers.frightened

    @property
    def scatter(self):
        return self.timers.scatter

    @property
    def leader(self):
        return self.ghost(GhostName.BLINKY)

    def ghost(self, name):
        return next((g for g in self.ghosts if g.name is name), None)

    def set_requested_direction(self, direction):
        self.player.request(direction)

    def add_score(self, points):
        self.score += points
        self.high_score = max(self.high_score, self.score)

    # -----------------------------
    # Tick
    # -----------------------------
    def tick(self):
        self.events = []
        if self.game_over:
            return self.events

        for event in self.timers.advance(self.dt):
            if event is TimerEvent.MODE_CHANGED:
                self._reverse_ghosts()
            elif event is TimerEvent.FRIGHTENED_ENDED:
                for g in self.ghosts:
                    g.eaten = False

        if not self.player.alive:
            if self.timers.tick_death(self.dt):
                self._finish_death()
            return self.events

        self._release_ghosts()
        self.player.update(self.grid)
        self._update_ghosts()
        self._check_ghost_collisions()
        self._update_pickup()
        self._eat_pills()
        self._eat_pickup()

        if not self.pills:
            self._clear_level()
        self._check_game_over()
        return self.events

    def _reverse_ghosts(self):
        for g in self.ghosts:
            if g.active and not g.eaten:
                g.reverse()
        self.events.append(GameEvent.MODE_CHANGED)
        self.logger.debug("Mode changed to %s", "scatter" if self.scatter else "chase")

    def _release_ghosts(self):
        now = self.timers.elapsed
        for g in self.ghosts:
            if not g.active and now + 1e-9 >= g.release_time:
                g.active = True

    def _update_ghosts(self):
        leader = self.leader
        for g in self.ghosts:
            if g.active and not g.eaten:
                g.update(self.grid, self.player, leader, self.frightened, self.scatter)

    def _check_ghost_collisions(self):
        for g in self.ghosts:
            if not g.active:
                continue
            if g.center.distance_to(self.player.center) >= HIT_DISTANCE:
                continue
            if self.frightened and not g.eaten:
                self._eat_ghost(g)
            elif not g.eaten:
                self._kill_player()

    def _eat_ghost(self, ghost):
        ghost.eaten = True
        self.add_score(GHOST_EAT_SCORE)
        house = self.grid.tile_to_pixel(*HOUSE_CENTER)
        ghost.send_home(house, self.timers.elapsed + GHOST_RESPAWN_DELAY)
        self.events.append(GameEvent.EAT_GHOST)
        self.logger.debug("Ate %s, back at %.2fs", ghost.name.value, ghost.release_time)

    def _kill_player(self):
        if not self.player.alive:
            return
        self.player.alive = False
        self.timers.start_death()
        self.events.append(GameEvent.DEATH)
        self.logger.debug("Player caught with %d lives left", self.lives)

    def _finish_death(self):
        self.lives -= 1
        if self.lives > 0:
            self._reset_positions()
        else:
            self._check_game_over()

    def _reset_positions(self):
        self.player.reset()
        now = self.timers.elapsed
        for g in self.ghosts:
            g.reset(now)
        self.timers.reset_modes()

    # -----------------------------
    # Bonus fruit
    # -----------------------------
    def _update_pickup(self):
        if self.pickup is not None:
            if self.pickup.update(self.dt):
                self._despawn_pickup()
            return
        kind = self.timers.pickup_due()
        if kind is None:
            return
        x, y = self._random_floor_position()
        self.pickup = Pickup(x, y, kind)
        self.timers.suspend_pickup(kind)
        self.logger.debug("Spawned %s at (%d, %d)", kind.value, x, y)

    def _random_floor_position(self):
        tiles = list(self.grid.tiles(TileKind.FLOOR))
        if not tiles:
            return self.grid.tile_to_pixel(*PLAYER_SPAWN)
        return self.grid.tile_to_pixel(*self.rng.choice(tiles))

    def _despawn_pickup(self):
        if self.pickup is None:
            return
        self.timers.restart_pickup(self.pickup.kind)
        self.pickup = None

    def _eat_pickup(self):
        if self.pickup is None:
            return
        if chebyshev(self.pickup.center, self.player.center) >= PICKUP_RADIUS:
            return
        if self.pickup.kind is PickupKind.CHERRY:
            self.add_score(CHERRY_SCORE)
        elif self.lives < MAX_LIVES:
            self.lives += 1
            self.add_score(STRAWBERRY_SCORE)
        else:
            self.add_score(STRAWBERRY_BONUS_SCORE)
        self.events.append(GameEvent.EAT_FRUIT)
        self._despawn_pickup()

    # -----------------------------
    # Pills & level
    # -----------------------------
    def _eat_pills(self):
        center = self.player.center
        for (row, col), is_power in list(self.pills.items()):
            radius = POWER_RADIUS if is_power else PELLET_RADIUS
            if chebyshev(self.grid.tile_center(row, col), center) >= radius:
                continue
            del self.pills[(row, col)]
            if is_power:
                self.add_score(POWER_SCORE)
                self.timers.activate_frightened()
                for g in self.ghosts:
                    g.eaten = False
                self.events.append(GameEvent.POWER_PILL)
            else:
                self.add_score(PELLET_SCORE)
                self.events.append(GameEvent.CHOMP)

    def _clear_level(self):
        self.level += 1
        self.pills = self._build_pills()
        self._reset_positions()
        self.events.append(GameEvent.LEVEL_CLEAR)
        self.logger.info("Level cleared, starting level %d", self.level)

    def _check_game_over(self):
        if self.lives > 0 or self.game_over:
            return
        self.game_over = True
        self.events.append(GameEvent.GAME_OVER)
        self.logger.info("Game over with score %d", self.score)
        if not self._score_recorded:
            self._score_recorded = True
            try:
                self.scoreboard.record_score(self.score)
            except Exception:
                self.logger.warning("Could not record score %d", self.score, exc_info=True)

    # -----------------------------
    # Snapshot
    # -----------------------------
    def snapshot(self):
        p = self.player
        ghosts = tuple(
            GhostView(
                name=g.name.value, x=g.pos.x, y=g.pos.y, direction=g.direction.name,
                active=g.active, eaten=g.eaten, frightened=self.frightened and not g.eaten,
            )
            for g in self.ghosts
        )
        pills = tuple(
            (*self.grid.tile_to_pixel(row, col), is_power)
            for (row, col), is_power in self.pills.items()
        )
        pickup = None
        if self.pickup is not None:
            pickup = PickupView(self.pickup.pos.x, self.pickup.pos.y,
                                self.pickup.kind.value, self.pickup.time_left)
        return GameSnapshot(
            player=PlayerView(p.pos.x, p.pos.y, p.direction.name, p.alive),
            ghosts=ghosts,
            pills=pills,
            pickup=pickup,
            score=self.score,
            lives=self.lives,
            high_score=self.high_score,
            level=self.level,
            game_over=self.game_over,
            paused=self.timers.dying,
        )
