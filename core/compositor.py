# core/compositor.py  (half-block projection of a Snapshot, no colors)
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional, Tuple

import numpy as np

from .food import FoodKind
from .geometry import Direction
from .interfaces import Glow, GlowTrigger, Snapshot


class CellRole(Enum):
    EMPTY = "empty"
    SNAKE_HEAD = "head"
    SNAKE_BODY = "body"
    SNAKE_TAIL = "tail"
    FOOD_PLAIN = "food"
    FOOD_BONUS = "bonus"


class BlinkPhase(Enum):
    STEADY = "steady"
    SHOWN = "shown"
    HIDDEN = "hidden"


class GlyphClass(IntEnum):
    BOTH_EMPTY = 0
    UPPER_ONLY = 1
    LOWER_ONLY = 2
    BOTH_FILLED = 3   # same role in both halves
    DIFFERING = 4     # two different roles, renderer needs two colors


@dataclass(frozen=True)
class Cell:
    role: CellRole
    direction: Optional[Direction] = None   # head only
    ordinal: Optional[int] = None           # body only, 0 = segment after the head
    blink: Optional[BlinkPhase] = None      # bonus only
    glow: Optional[Glow] = None             # snake only, while a pulse is active

    @property
    def filled(self) -> bool:
        return self.role is not CellRole.EMPTY and self.blink is not BlinkPhase.HIDDEN


EMPTY_CELL = Cell(CellRole.EMPTY)


@dataclass(frozen=True)
class TerminalCell:
    top: Cell
    bottom: Cell
    glyph: GlyphClass


@dataclass(frozen=True)
class CompositedFrame:
    width: int
    logical_height: int
    rows: Tuple[Tuple[TerminalCell, ...], ...]

    @property
    def height(self) -> int:
        """Terminal rows."""
        return len(self.rows)

    def cell(self, x: int, y: int) -> Cell:
        """Logical cell lookup."""
        tc = self.rows[y // 2][x]
        return tc.top if y % 2 == 0 else tc.bottom

    def glyph_classes(self) -> np.ndarray:
        out = np.zeros((self.height, self.width), dtype=np.int8)
        for r, row in enumerate(self.rows):
            for c, tc in enumerate(row):
                out[r, c] = int(tc.glyph)
        return out


def classify(top: Cell, bottom: Cell) -> GlyphClass:
    if not top.filled and not bottom.filled:
        return GlyphClass.BOTH_EMPTY
    if not bottom.filled:
        return GlyphClass.UPPER_ONLY
    if not top.filled:
        return GlyphClass.LOWER_ONLY
    if top.role is bottom.role:
        return GlyphClass.BOTH_FILLED
    return GlyphClass.DIFFERING


def _blink_phase(blinking: bool, tick_count: int) -> BlinkPhase:
    if not blinking:
        return BlinkPhase.STEADY
    return BlinkPhase.SHOWN if tick_count % 2 == 0 else BlinkPhase.HIDDEN


def logical_cells(s: Snapshot) -> List[List[Cell]]:
    """Row-major [y][x] grid of cell descriptors. Snake is painted over food."""
    W, H = s.bounds.width, s.bounds.height
    grid = [[EMPTY_CELL] * W for _ in range(H)]

    for f in s.foods:
        p = f.position
        if not s.bounds.contains(p):
            continue
        if f.kind is FoodKind.BONUS:
            grid[p.y][p.x] = Cell(CellRole.FOOD_BONUS, blink=_blink_phase(f.blinking, s.tick_count))
        else:
            grid[p.y][p.x] = Cell(CellRole.FOOD_PLAIN)

    # the head only pulses on level-up
    head_glow = s.glow if s.glow is not None and s.glow.trigger is GlowTrigger.LEVEL_UP else None
    last = len(s.snake) - 1
    # tail first so the head stays visible when it lands on the body
    for i in range(last, -1, -1):
        p = s.snake[i]
        if not s.bounds.contains(p):
            continue
        if i == 0:
            cell = Cell(CellRole.SNAKE_HEAD, direction=s.direction, glow=head_glow)
        elif i == last:
            cell = Cell(CellRole.SNAKE_TAIL, glow=s.glow)
        else:
            cell = Cell(CellRole.SNAKE_BODY, ordinal=i - 1, glow=s.glow)
        grid[p.y][p.x] = cell
    return grid


def compose(s: Snapshot) -> CompositedFrame:
    """Pack logical rows 2r and 2r+1 into terminal row r.

    Read-only: the same snapshot always gives an equal frame.
    """
    grid = logical_cells(s)
    W, H = s.bounds.width, s.bounds.height
    rows = []
    for r in range((H + 1) // 2):
        top_row = grid[2 * r]
        bot_row = grid[2 * r + 1] if 2 * r + 1 < H else [EMPTY_CELL] * W
        rows.append(tuple(
            TerminalCell(top=t, bottom=b, glyph=classify(t, b))
            for t, b in zip(top_row, bot_row)
        ))
    return CompositedFrame(width=W, logical_height=H, rows=tuple(rows))
