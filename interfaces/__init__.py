# interfaces/__init__.py
from __future__ import annotations
from typing import List, Optional, Protocol

from config import AppConfig
from core.compositor import CompositedFrame
from core.interfaces import InputEvent, Snapshot


class InputSource(Protocol):
    """Non-blocking poll; returns every event seen since the last call, oldest first."""
    def poll(self) -> List[InputEvent]: ...


class Renderer(Protocol):
    def open(self, cfg: AppConfig) -> None: ...
    def draw(self, frame: CompositedFrame, snap: Snapshot, high_score: int = 0,
             elapsed_ms: int = 0) -> None: ...
    def close(self) -> None: ...


class ScoreStore(Protocol):
    def load(self) -> int: ...
    def submit(self, score: int) -> bool: ...


class RoundSink(Protocol):
    """Receives one record per finished round."""
    def log_round(self, round_idx: int, snap: Snapshot, reason: Optional[str]) -> None: ...
    def close(self) -> None: ...
