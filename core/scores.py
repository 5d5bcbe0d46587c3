from __future__ import annotations
import json, os
from typing import Optional

APP_DIR_NAME = "snake"
SCORE_FILE_NAME = "scores.json"


def default_scores_path() -> str:
    base = os.environ.get("XDG_DATA_HOME") or os.path.join(os.path.expanduser("~"), ".local", "share")
    return os.path.join(base, APP_DIR_NAME, SCORE_FILE_NAME)


class HighScoreStore:
    """Single high score in a small JSON file: {"high_score": N}."""
    def __init__(self, path: Optional[str] = None):
        self.path = path or default_scores_path()

    def load(self) -> int:
        """Missing or malformed files count as 0."""
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return 0
        if not isinstance(data, dict):
            return 0
        score = data.get("high_score", 0)
        return score if isinstance(score, int) and score >= 0 else 0

    def save(self, score: int) -> None:
        parent = os.path.dirname(self.path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump({"high_score": int(score)}, f, indent=2)

    def submit(self, score: int) -> bool:
        """Store `score` if it beats the saved one. Returns True when it did."""
        if score <= self.load():
            return False
        self.save(score)
        return True
