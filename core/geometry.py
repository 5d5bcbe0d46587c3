# core/geometry.py  (pure value types, no pygame)
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple

from config import ConfigError, MIN_GRID_W, MIN_GRID_H


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    def opposite(self) -> "Direction":
        return _OPPOSITE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class WallPolicy(str, Enum):
    COLLIDE = "collide"
    WRAP = "wrap"


@dataclass(frozen=True, slots=True)
class Position:
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class Bounds:
    width: int
    height: int

    @classmethod
    def validated(cls, width: int, height: int) -> "Bounds":
        if width < MIN_GRID_W or height < MIN_GRID_H:
            raise ConfigError(
                f"bounds {width}x{height} are below the minimum playable size "
                f"{MIN_GRID_W}x{MIN_GRID_H}"
            )
        return cls(width, height)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def contains(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def wrap(self, pos: Position) -> Position:
        # python's % is already non-negative for a positive modulus
        return Position(pos.x % self.width, pos.y % self.height)

    def cells(self) -> Iterator[Position]:
        """Row-major iteration over every cell."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)


def step(pos: Position, direction: Direction, bounds: Bounds,
         policy: WallPolicy) -> Tuple[Position, bool]:
    """Advance one cell. Returns (position, hit_wall).

    Under WRAP the position is mapped onto the opposite edge and hit_wall is
    always False. Under COLLIDE an out-of-bounds position is returned as-is
    with hit_wall=True; callers must not place anything there.
    """
    nxt = pos.moved(direction)
    if bounds.contains(nxt):
        return nxt, False
    if policy is WallPolicy.WRAP:
        return bounds.wrap(nxt), False
    return nxt, True
