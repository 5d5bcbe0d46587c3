# viz/renderer_headless.py
from __future__ import annotations
from typing import Optional

from config import AppConfig
from core.compositor import CompositedFrame
from core.interfaces import Snapshot


class HeadlessRenderer:
    """Keeps the last frame instead of drawing it."""
    def open(self, cfg: AppConfig) -> None:
        self.cfg = cfg
        self.frames_drawn = 0
        self.last_frame: Optional[CompositedFrame] = None
        self.last_snapshot: Optional[Snapshot] = None
        self.last_elapsed_ms = 0

    def draw(self, frame: CompositedFrame, snap: Snapshot, high_score: int = 0,
             elapsed_ms: int = 0) -> None:
        self.last_frame = frame
        self.last_snapshot = snap
        self.last_elapsed_ms = elapsed_ms
        self.frames_drawn += 1

    def close(self) -> None:
        pass
