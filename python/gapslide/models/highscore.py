"""Challenge results persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_ENTRIES_PER_CHALLENGE = 10


@dataclass
class HighScoreEntry:
    moves: int
    time: float
    date: str


class HighScoreManager:
    """Loads, saves, and queries challenge results from a JSON file.

    Results are filed under the challenge key (board, seed, steps and
    flags), so only runs of the very same shuffled puzzle are compared.
    """

    def __init__(self, filepath: Path, limit: int = MAX_ENTRIES_PER_CHALLENGE) -> None:
        self.filepath = filepath
        self.limit = limit
        self._scores: dict[str, list[HighScoreEntry]] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable score file %s", self.filepath)
            return
        for key, entries in data.items():
            self._scores[key] = [HighScoreEntry(**e) for e in entries]

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            key: [asdict(e) for e in entries]
            for key, entries in self._scores.items()
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- queries --------------------------------------------------------------

    def add_score(self, key: str, entry: HighScoreEntry) -> int | None:
        """File *entry* under *key*; returns its 0-based rank, or None if cut."""
        entries = self._scores.setdefault(key, [])
        entries.append(entry)
        entries.sort(key=lambda e: (e.moves, e.time))
        del entries[self.limit:]
        self.save()
        return entries.index(entry) if entry in entries else None

    def get_scores(self, key: str) -> list[HighScoreEntry]:
        return self._scores.get(key, [])

    def best(self, key: str) -> HighScoreEntry | None:
        scores = self.get_scores(key)
        return scores[0] if scores else None

    def get_all_keys(self) -> list[str]:
        return sorted(self._scores)
