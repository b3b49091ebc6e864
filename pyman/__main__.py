import argparse
import logging
import random

from .constants import TICK_SECONDS
from .direction import TURN_ORDER
from .game import Game, GameEvent
from .maze import GridMap
from .scores import ScoreBoard

# -----------------------------
# Headless driver
# -----------------------------
# Steers the player with a wandering autopilot instead of a keyboard and
# advances the core one fixed step at a time.


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="pyman", description="Run the Py-Man core headless.")
    parser.add_argument("--ticks", type=int, default=60 * 60, help="number of fixed steps to run")
    parser.add_argument("--seed", type=int, default=None, help="seed for pickups and autopilot")
    parser.add_argument("--level-file", default="level1.txt", help="maze layout, built-in maze if missing")
    parser.add_argument("--scores", default="top_scores.json", help="high score file")
    parser.add_argument("--turn-every", type=int, default=45, help="ticks between autopilot turns")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug events")
    return parser.parse_args(argv)


def run(args):
    rng = random.Random(args.seed)
    game = Game(
        grid=GridMap.from_file_or_default(args.level_file),
        scoreboard=ScoreBoard(args.scores),
        rng=random.Random(args.seed),
        dt=TICK_SECONDS,
    )
    counts = {event: 0 for event in GameEvent}
    for n in range(args.ticks):
        if n % args.turn_every == 0:
            game.set_requested_direction(rng.choice(TURN_ORDER))
        for event in game.tick():
            counts[event] += 1
        if game.game_over:
            break
    return game, counts


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    game, counts = run(args)
    log = logging.getLogger("pyman")
    log.info("Finished after %.1fs: score %d, lives %d, level %d, game over %s",
             game.timers.elapsed, game.score, game.lives, game.level, game.game_over)
    for event, n in counts.items():
        if n:
            log.info("  %-12s %d", event.value, n)


if __name__ == "__main__":
    main()
