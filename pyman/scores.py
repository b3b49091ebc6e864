import json
import logging
import os

logger = logging.getLogger(__name__)

TOP_SCORES_FILE = "top_scores.json"
KEEP_SCORES = 5


class ScoreBoard:
    """Top scores kept in a JSON file.

    Storage is best effort: an unreadable or unwritable file is logged and
    treated as an empty history, never raised to the game.
    """

    def __init__(self, path=TOP_SCORES_FILE, keep=KEEP_SCORES):
        self.path = path
        self.keep = keep
        self.top_scores = self._load()

    @property
    def best_score(self):
        return max(self.top_scores, default=0)

    def record_score(self, score):
        if score <= 0:
            return
        self.top_scores = sorted(self.top_scores + [score], reverse=True)[:self.keep]
        self._save()

    def _load(self):
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read scores from %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring malformed score file %s", self.path)
            return []
        return sorted((int(s) for s in data if isinstance(s, int)), reverse=True)[:self.keep]

    def _save(self):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.top_scores, f, indent=2)
        except OSError as exc:
            logger.warning("Could not write scores to %s: %s", self.path, exc)


class MemoryScoreBoard:
    def __init__(self, scores=()):
        self.top_scores = sorted(scores, reverse=True)[:KEEP_SCORES]

    @property
    def best_score(self):
        return max(self.top_scores, default=0)

    def record_score(self, score):
        if score <= 0:
            return
        self.top_scores = sorted(self.top_scores + [score], reverse=True)[:KEEP_SCORES]
