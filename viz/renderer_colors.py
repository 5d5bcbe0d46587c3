# viz/renderer_colors.py
from typing import Tuple

from core.compositor import BlinkPhase, Cell, CellRole
from core.interfaces import GlowTrigger

RGB = Tuple[int, int, int]

BG: RGB = (18, 18, 24)
GRID_ALT: RGB = (24, 24, 32)
TEXT: RGB = (220, 220, 220)
HEAD: RGB = (120, 230, 120)
BODY: RGB = (60, 180, 75)
BODY_ALT: RGB = (66, 198, 75)   # odd bands: red/green nudged 10%
TAIL: RGB = (40, 130, 55)
FOOD: RGB = (230, 70, 70)
BONUS: RGB = (250, 200, 60)

GLOW_LEVEL: RGB = (235, 255, 235)
GLOW_BONUS: RGB = (255, 235, 140)

BODY_BAND = 3   # segments per gradient band
BONUS_FLASH = 0.3   # peak blend toward GLOW_BONUS


def lerp(a: RGB, b: RGB, t: float) -> RGB:
    t = min(max(t, 0.0), 1.0)
    return tuple(round(x + (y - x) * t) for x, y in zip(a, b))


def cell_color(cell: Cell, background: RGB = BG) -> RGB:
    base = _base_color(cell, background)
    glow = cell.glow
    if glow is None:
        return base
    if glow.trigger is GlowTrigger.LEVEL_UP:
        return lerp(base, GLOW_LEVEL, glow.intensity)
    return lerp(base, GLOW_BONUS, BONUS_FLASH * glow.intensity)


def _base_color(cell: Cell, background: RGB) -> RGB:
    role = cell.role
    if role is CellRole.SNAKE_HEAD:
        return HEAD
    if role is CellRole.SNAKE_BODY:
        band = (cell.ordinal or 0) // BODY_BAND
        return BODY_ALT if band % 2 else BODY
    if role is CellRole.SNAKE_TAIL:
        return TAIL
    if role is CellRole.FOOD_PLAIN:
        return FOOD
    if role is CellRole.FOOD_BONUS:
        return background if cell.blink is BlinkPhase.HIDDEN else BONUS
    return background


def checker_bg(col: int, row: int) -> RGB:
    return GRID_ALT if (col + row) % 2 else BG
