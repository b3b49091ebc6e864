"""Py-Man: deterministic simulation core of a Pac-Man style arcade game."""

from .direction import Direction
from .game import Game, GameEvent, GameSnapshot
from .ghost import Ghost, GhostName
from .maze import GridMap, TileKind
from .modes import ModeTimer, TimerEvent
from .pickups import Pickup, PickupKind
from .player import Player
from .scores import MemoryScoreBoard, ScoreBoard

__all__ = [
    "Direction", "Game", "GameEvent", "GameSnapshot", "Ghost", "GhostName",
    "GridMap", "MemoryScoreBoard", "ModeTimer", "Pickup", "PickupKind",
    "Player", "ScoreBoard", "TileKind", "TimerEvent",
]
