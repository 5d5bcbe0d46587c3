from __future__ import annotations
import csv, os, time
from typing import Optional

from core.interfaces import Snapshot

FIELDS = ["round", "finished_at", "score", "ticks", "speed_level", "length", "status", "reason"]


class CSVRoundLog:
    """Append-only CSV, one row per finished round."""
    def __init__(self, path: str):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self.path = path
        self._file = open(path, "a", newline="")
        self._writer = csv.DictWriter(self._file, fieldnames=FIELDS, extrasaction="ignore")
        if self._file.tell() == 0:
            self._writer.writeheader()

    def log_round(self, round_idx: int, snap: Snapshot, reason: Optional[str]) -> None:
        self._writer.writerow({
            "round": round_idx,
            "finished_at": time.strftime("%Y-%m-%dT%H:%M:%S"),
            "score": snap.score,
            "ticks": snap.tick_count,
            "speed_level": snap.speed_level,
            "length": len(snap.snake),
            "status": snap.status.value,
            "reason": reason or "",
        })
        self._file.flush()

    def close(self) -> None:
        self._file.close()
