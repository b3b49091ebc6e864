import dataclasses
import math
import random

import pygame
import pytest

from pyman.constants import (
    CHERRY_SPAWN_TIME, DEATH_TIME, FRIGHT_TIME, GHOST_RESPAWN_DELAY,
    STRAWBERRY_SPAWN_TIME,
)
from pyman.direction import Direction, TURN_ORDER
from pyman.game import Game, GameEvent
from pyman.ghost import GhostName
from pyman.maze import TileKind
from pyman.pickups import Pickup, PickupKind
from pyman.scores import MemoryScoreBoard

POWER_PILL_TILE_PX = (26, 78)  # tile (3, 1)


class FirstChoice:
    def choice(self, seq):
        return seq[0]


class BrokenScoreBoard:
    @property
    def best_score(self):
        raise OSError("disk gone")

    def record_score(self, score):
        raise OSError("disk gone")


def make_game(**kwargs):
    kwargs.setdefault("rng", random.Random(1))
    kwargs.setdefault("scoreboard", MemoryScoreBoard())
    return Game(**kwargs)


def test_new_game_state():
    game = make_game(scoreboard=MemoryScoreBoard([1234, 50]))
    expected = len(list(game.grid.tiles(TileKind.FLOOR, TileKind.POWER_PILL)))
    assert len(game.pills) == expected
    assert sum(game.pills.values()) == 4
    assert (game.score, game.lives, game.level) == (0, 3, 1)
    assert game.high_score == 1234
    assert game.events == [GameEvent.BEGINNING]
    assert [g.name for g in game.ghosts] == list(GhostName)
    assert [g.active for g in game.ghosts] == [True, False, False, False]
    assert game.leader is game.ghost(GhostName.BLINKY)
    assert not game.frightened and not game.scatter


def test_requested_direction_moves_player():
    game = make_game()
    game.set_requested_direction(Direction.LEFT)
    game.tick()
    assert game.player.direction is Direction.LEFT
    assert game.player.pos == pygame.Vector2(338 - 2.5, 572)
    assert game.score == 10
    assert GameEvent.CHOMP in game.events


def test_power_pill_frightens_for_fixed_duration():
    game = make_game()
    for g in game.ghosts:
        g.eaten = True
    game.player.pos = pygame.Vector2(POWER_PILL_TILE_PX)
    game.tick()
    assert game.frightened
    assert game.score == 50
    assert GameEvent.POWER_PILL in game.events
    assert all(not g.eaten for g in game.ghosts)
    assert game.timers.frightened_time_left == FRIGHT_TIME

    fright_ticks = round(FRIGHT_TIME / game.dt)
    for _ in range(fright_ticks - 1):
        game.tick()
        assert GameEvent.MODE_CHANGED not in game.events
    assert game.frightened
    game.tick()
    assert not game.frightened
    assert GameEvent.MODE_CHANGED not in game.events


def test_ghost_contact_kills_player_after_hold():
    game = make_game()
    blinky = game.leader
    blinky.pos = pygame.Vector2(game.player.pos)
    game.tick()
    assert not game.player.alive
    assert GameEvent.DEATH in game.events
    assert game.timers.death_time_left == DEATH_TIME
    assert game.snapshot().paused
    assert game.lives == 3

    for _ in range(round(DEATH_TIME / game.dt) - 1):
        game.tick()
        assert game.lives == 3
        assert not game.player.alive
    game.tick()
    assert game.lives == 2
    assert game.player.alive
    assert game.player.pos == game.player.spawn
    assert blinky.pos == blinky.spawn
    assert not game.scatter and not game.frightened


def test_frightened_ghost_is_eaten_and_respawns():
    game = make_game()
    game.player.pos = pygame.Vector2(POWER_PILL_TILE_PX)
    game.tick()
    assert game.frightened

    blinky = game.leader
    blinky.pos = pygame.Vector2(game.player.pos)
    before = game.score
    game.tick()
    assert GameEvent.EAT_GHOST in game.events
    assert game.score == before + 200
    assert game.player.alive
    assert blinky.eaten
    assert not blinky.active
    assert blinky.pos == pygame.Vector2(338, 364)
    assert blinky.release_time == pytest.approx(game.timers.elapsed + GHOST_RESPAWN_DELAY)

    respawn_ticks = math.ceil(GHOST_RESPAWN_DELAY / game.dt)
    for _ in range(respawn_ticks - 1):
        game.tick()
        assert not blinky.active
    game.tick()
    assert blinky.active


def test_mode_change_reverses_active_ghosts():
    game = make_game()
    game.tick()
    blinky = game.leader
    assert blinky.direction is Direction.LEFT

    pinky = game.ghost(GhostName.PINKY)
    pinky.active = True
    pinky.eaten = True
    pinky.direction = Direction.LEFT

    game.timers.mode_time_left = game.dt / 2
    game.tick()
    assert GameEvent.MODE_CHANGED in game.events
    assert game.scatter
    assert blinky.direction is Direction.RIGHT
    assert pinky.direction is Direction.LEFT


def test_last_pill_resets_level():
    game = make_game()
    full = len(game.pills)
    game.pills = {(1, 1): False}
    game.player.pos = pygame.Vector2(26, 26)
    game.tick()
    assert GameEvent.LEVEL_CLEAR in game.events
    assert game.level == 2
    assert len(game.pills) == full
    assert game.score == 10
    assert game.player.pos == game.player.spawn
    for g in game.ghosts:
        assert g.pos == g.spawn
        assert g.direction is Direction.NONE


def test_game_over_records_score_once():
    board = MemoryScoreBoard()
    game = make_game(scoreboard=board)
    game.lives = 1
    game.leader.pos = pygame.Vector2(game.player.pos)
    game.tick()
    for _ in range(round(DEATH_TIME / game.dt)):
        game.tick()
    assert game.lives == 0
    assert game.game_over
    assert GameEvent.GAME_OVER in game.events
    assert board.top_scores == [10]

    assert game.tick() == []
    assert board.top_scores == [10]


def test_broken_scoreboard_never_stops_the_game():
    game = make_game(scoreboard=BrokenScoreBoard())
    assert game.high_score == 0
    game.lives = 1
    game.leader.pos = pygame.Vector2(game.player.pos)
    for _ in range(round(DEATH_TIME / game.dt) + 1):
        game.tick()
    assert game.game_over


def test_pickup_spawns_when_due():
    game = make_game(rng=FirstChoice())
    game.timers.pickup_timers[PickupKind.CHERRY] = game.dt / 2
    game.tick()
    assert game.pickup is not None
    assert game.pickup.kind is PickupKind.CHERRY
    assert game.pickup.pos == pygame.Vector2(26, 26)
    assert game.timers.pickup_timers[PickupKind.CHERRY] is None


def test_pickup_expires_and_rearms():
    game = make_game()
    game.pickup = Pickup(26, 26, PickupKind.CHERRY, lifetime=game.dt * 1.5)
    game.tick()
    assert game.pickup is not None
    game.tick()
    assert game.pickup is None
    assert game.timers.pickup_timers[PickupKind.CHERRY] == CHERRY_SPAWN_TIME


@pytest.mark.parametrize("kind, lives, score, lives_after", [
    (PickupKind.CHERRY, 3, 1000, 3),
    (PickupKind.STRAWBERRY, 2, 1000, 3),
    (PickupKind.STRAWBERRY, 3, 2500, 3),
])
def test_eating_fruit(kind, lives, score, lives_after):
    game = make_game()
    del game.pills[(1, 1)]
    game.player.pos = pygame.Vector2(26, 26)
    game.lives = lives
    game.pickup = Pickup(26, 26, kind)
    game.tick()
    assert GameEvent.EAT_FRUIT in game.events
    assert game.score == score
    assert game.lives == lives_after
    assert game.pickup is None
    interval = CHERRY_SPAWN_TIME if kind is PickupKind.CHERRY else STRAWBERRY_SPAWN_TIME
    assert game.timers.pickup_timers[kind] == interval


def test_snapshot_is_read_only_view():
    game = make_game()
    game.tick()
    snap = game.snapshot()
    assert snap.score == game.score
    assert snap.lives == 3
    assert snap.player.x == game.player.pos.x
    assert len(snap.ghosts) == 4
    assert snap.ghosts[0].name == "blinky"
    assert len(snap.pills) == len(game.pills)
    assert snap.pickup is None
    assert not snap.game_over
    assert not snap.paused
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 5


def test_entities_never_overlap_walls():
    steer = random.Random(7)
    game = make_game(rng=random.Random(3))
    grid = game.grid
    for n in range(3000):
        if n % 20 == 0:
            game.set_requested_direction(steer.choice(TURN_ORDER))
        game.tick()
        p = game.player
        assert not grid.overlaps(p.pos.x, p.pos.y, (TileKind.WALL, TileKind.GHOST_HOUSE))
        for g in game.ghosts:
            assert not grid.overlaps(g.pos.x, g.pos.y, (TileKind.WALL,))
        if game.game_over:
            break
