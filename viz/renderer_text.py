# viz/renderer_text.py
from __future__ import annotations
import sys
from typing import List, Optional, TextIO

from config import AppConfig
from core.compositor import CompositedFrame, GlyphClass
from core.interfaces import Snapshot

GLYPHS = {
    GlyphClass.BOTH_EMPTY: " ",
    GlyphClass.UPPER_ONLY: "▀",
    GlyphClass.LOWER_ONLY: "▄",
    GlyphClass.BOTH_FILLED: "█",
    GlyphClass.DIFFERING: "█",
}


def frame_lines(frame: CompositedFrame) -> List[str]:
    return ["".join(GLYPHS[tc.glyph] for tc in row) for row in frame.rows]


class TextRenderer:
    """Monochrome half-block dump of a frame, one line per terminal row."""
    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.last_lines: List[str] = []
        self.elapsed_ms = 0

    def open(self, cfg: AppConfig) -> None:
        if self.stream is None:
            self.stream = sys.stdout

    def draw(self, frame: CompositedFrame, snap: Snapshot, high_score: int = 0,
             elapsed_ms: int = 0) -> None:
        self.last_lines = frame_lines(frame)
        self.elapsed_ms = elapsed_ms

    def flush(self, snap: Snapshot, high_score: int = 0) -> None:
        """Write the last drawn frame plus a status line."""
        assert self.stream is not None, "Renderer not opened"
        border = "+" + "-" * (len(self.last_lines[0]) if self.last_lines else 0) + "+"
        out = [border] + [f"|{line}|" for line in self.last_lines] + [border]
        out.append(f"score={snap.score} speed={snap.speed_level} hi={high_score} "
                   f"ticks={snap.tick_count} time={self.elapsed_ms / 1000:.1f}s status={snap.status.value}")
        self.stream.write("\n".join(out) + "\n")
        self.stream.flush()

    def close(self) -> None:
        pass
