from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import List, Optional

logger = logging.getLogger(__name__)

MAX_RECORDS = 10


@dataclass(frozen=True)
class ScoreRecord:
    name: str
    score: int
    timestamp: str

    @classmethod
    def now(cls, name: str, score: int) -> "ScoreRecord":
        return cls(name=name, score=int(score), timestamp=datetime.now().isoformat(timespec="seconds"))


class Leaderboard:
    """Top scores kept in a JSON file, highest first.

    The file holds ``{"records": [...]}``. Missing or unreadable files load as
    an empty board.
    """

    def __init__(self, path: str, limit: int = MAX_RECORDS) -> None:
        self.path = path
        self.limit = limit
        self.records: List[ScoreRecord] = self._load()

    def _load(self) -> List[ScoreRecord]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            records = [ScoreRecord(str(r["name"]), int(r["score"]), str(r["timestamp"])) for r in data.get("records", [])]
        except (json.JSONDecodeError, OSError, KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Error loading {self.path}: {e}")
            return []
        return self._ranked(records)

    def _ranked(self, records: List[ScoreRecord]) -> List[ScoreRecord]:
        # Stable sort keeps the earlier record ahead on ties
        return sorted(records, key=lambda r: r.score, reverse=True)[: self.limit]

    def save(self) -> None:
        """Write the board atomically (temp file in the same directory, then rename)."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        temp_fd, temp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump({"records": [asdict(r) for r in self.records]}, f, indent=2, ensure_ascii=False)
            os.replace(temp_path, self.path)
        except OSError as e:
            logger.error(f"Error saving {self.path}: {e}")
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def qualifies(self, score: int) -> bool:
        if len(self.records) < self.limit:
            return True
        return score > self.records[-1].score

    def add(self, name: str, score: int) -> Optional[int]:
        """Record a score and persist. Returns its 1-based rank, or None if it did not place."""
        if not self.qualifies(score):
            return None
        record = ScoreRecord.now(name, score)
        self.records = self._ranked(self.records + [record])
        self.save()
        return next(i for i, r in enumerate(self.records) if r is record) + 1
