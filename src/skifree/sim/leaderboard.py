"""Top-N distance leaderboard. Storage is the host's business."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 10
MAX_NAME_LENGTH = 12


@dataclass(frozen=True)
class HighScore:
    name: str
    score: int


class Leaderboard:
    """Name/score pairs, highest first, capped at ``size`` entries."""

    def __init__(self, size: int = DEFAULT_SIZE, entries: Iterable[HighScore] = ()):
        if size < 1:
            raise ValueError("leaderboard size must be at least 1")
        self.size = size
        self._entries: List[HighScore] = []
        for entry in entries:
            self._insert(entry)

    @property
    def entries(self) -> List[HighScore]:
        return list(self._entries)

    @property
    def best(self) -> int:
        return self._entries[0].score if self._entries else 0

    def qualifies(self, score: int) -> bool:
        """Would this score currently make the board?"""
        if score <= 0:
            return False
        if len(self._entries) < self.size:
            return True
        return score > self._entries[-1].score

    def submit(self, name: str, score: int) -> bool:
        """Record a finalized name/score. Returns False if it did not make the cut."""
        if not self.qualifies(score):
            return False
        clean = (name or "").strip()[:MAX_NAME_LENGTH] or "ANON"
        self._insert(HighScore(clean, int(score)))
        logger.info(f"Leaderboard entry: {clean} {score}")
        return True

    def _insert(self, entry: HighScore) -> None:
        self._entries.append(entry)
        # Stable sort: earlier entries win ties
        self._entries.sort(key=lambda e: e.score, reverse=True)
        del self._entries[self.size:]

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [{"name": e.name, "score": e.score} for e in self._entries]

    @classmethod
    def from_dicts(cls, rows: Iterable[Dict[str, Any]], size: int = DEFAULT_SIZE) -> "Leaderboard":
        entries = []
        for row in rows:
            try:
                entries.append(HighScore(str(row["name"]), int(row["score"])))
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping malformed leaderboard row: {row!r}")
        return cls(size=size, entries=entries)
