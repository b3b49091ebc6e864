from enum import Enum

from .constants import (
    CHASE_TIME, CHERRY_SPAWN_TIME, DEATH_TIME, FRIGHT_TIME, SCATTER_TIME,
    STRAWBERRY_SPAWN_TIME,
)
from .pickups import PickupKind

# Remainders below this count as zero so a duration ends exactly at
# duration / dt ticks despite float drift.
EPSILON = 1e-9

SPAWN_INTERVALS = {
    PickupKind.CHERRY: CHERRY_SPAWN_TIME,
    PickupKind.STRAWBERRY: STRAWBERRY_SPAWN_TIME,
}


class TimerEvent(Enum):
    MODE_CHANGED = "mode_changed"
    FRIGHTENED_ENDED = "frightened_ended"


def countdown(value, dt):
    remaining = value - dt
    return 0.0 if remaining < EPSILON else remaining


class ModeTimer:
    """Every clock of a round: Scatter/Chase cycle, Frightened, death and pickups.

    ``advance`` returns the events crossed during the step instead of
    calling out, so the caller decides how ghosts react.
    """

    def __init__(self):
        self.elapsed = 0.0
        self.reset_modes()
        self.pickup_timers = dict(SPAWN_INTERVALS)

    def reset_modes(self):
        self.scatter = False
        self.mode_time_left = CHASE_TIME
        self.frightened = False
        self.frightened_time_left = 0.0
        self.dying = False
        self.death_time_left = 0.0

    def advance(self, dt):
        events = []
        self.elapsed += dt

        if self.frightened:
            self.frightened_time_left = countdown(self.frightened_time_left, dt)
            if self.frightened_time_left == 0.0:
                self.frightened = False
                events.append(TimerEvent.FRIGHTENED_ENDED)
        else:
            self.mode_time_left = countdown(self.mode_time_left, dt)
            if self.mode_time_left == 0.0:
                self.scatter = not self.scatter
                self.mode_time_left = SCATTER_TIME if self.scatter else CHASE_TIME
                events.append(TimerEvent.MODE_CHANGED)

        for kind, left in self.pickup_timers.items():
            if left is not None:
                self.pickup_timers[kind] = countdown(left, dt)
        return events

    def activate_frightened(self):
        self.frightened = True
        self.frightened_time_left = FRIGHT_TIME

    # -----------------------------
    # Death hold
    # -----------------------------
    def start_death(self):
        self.dying = True
        self.death_time_left = DEATH_TIME

    def tick_death(self, dt):
        if not self.dying:
            return False
        self.death_time_left = countdown(self.death_time_left, dt)
        if self.death_time_left == 0.0:
            self.dying = False
            return True
        return False

    # -----------------------------
    # Bonus fruit spawn timers
    # -----------------------------
    def pickup_due(self):
        for kind in PickupKind:
            if self.pickup_timers[kind] == 0.0:
                return kind
        return None

    def suspend_pickup(self, kind):
        self.pickup_timers[kind] = None

    def restart_pickup(self, kind):
        self.pickup_timers[kind] = SPAWN_INTERVALS[kind]
