# ramen_runner/game/leaderboard.py
from __future__ import annotations
import json
import logging
import math
from pathlib import Path
from typing import List, Union

from .config import MAX_SCORES, SCORES_KEY, SCORES_PATH_DEFAULT

logger = logging.getLogger(__name__)


def insert_score(scores: List[int], new_score: int, cap: int = MAX_SCORES) -> List[int]:
    """Top `cap` scores, descending, with `new_score` placed in rank order."""
    return sorted(list(scores) + [int(new_score)], reverse=True)[:cap]


class Leaderboard:
    """
    Best scores in a JSON file: {"highScores": [50, 40, ...]}.
    Never raises: a missing or corrupt file reads as an empty board, and a
    failed write is logged and dropped.
    """

    def __init__(self, path: Union[str, Path] = SCORES_PATH_DEFAULT,
                 key: str = SCORES_KEY, cap: int = MAX_SCORES):
        self.path = Path(path)
        self.key = key
        self.cap = cap

    def _read_doc(self) -> dict:
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read leaderboard %s: %s", self.path, e)
            return {}
        return doc if isinstance(doc, dict) else {}

    def load_top_scores(self) -> List[int]:
        raw = self._read_doc().get(self.key, [])
        if not isinstance(raw, list):
            logger.warning("Leaderboard key %r is not a list, ignoring", self.key)
            return []
        scores = [int(s) for s in raw
                  if isinstance(s, (int, float)) and not isinstance(s, bool)
                  and math.isfinite(s) and s >= 0]
        return sorted(scores, reverse=True)[:self.cap]

    def record_score(self, final_score: int) -> None:
        doc = self._read_doc()
        doc[self.key] = insert_score(self.load_top_scores(), max(0, int(final_score)), self.cap)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(doc), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save leaderboard %s: %s", self.path, e)
