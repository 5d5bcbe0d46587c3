# core/food.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Collection, Optional

from .geometry import Bounds, Position


class FoodKind(Enum):
    PLAIN = "plain"
    BONUS = "bonus"


@dataclass(slots=True)
class Food:
    position: Position
    kind: FoodKind
    value: int
    lifetime: int = 0      # bonus only; 0 means never expires
    remaining: int = 0

    @classmethod
    def plain(cls, position: Position, value: int = 1) -> "Food":
        return cls(position, FoodKind.PLAIN, value)

    @classmethod
    def bonus(cls, position: Position, lifetime: int, value: int = 5) -> "Food":
        return cls(position, FoodKind.BONUS, value, lifetime=lifetime, remaining=lifetime)

    @property
    def is_bonus(self) -> bool:
        return self.kind is FoodKind.BONUS

    def age(self) -> bool:
        """One tick without being eaten. Returns True once a bonus has expired."""
        if not self.is_bonus:
            return False
        self.remaining = max(0, self.remaining - 1)
        return self.remaining == 0

    def blinking(self, fraction: float) -> bool:
        if not self.is_bonus or fraction <= 0.0:
            return False
        return self.remaining <= math.ceil(self.lifetime * fraction)


def spawn_position(rng: random.Random, bounds: Bounds,
                   excluded: Collection[Position]) -> Optional[Position]:
    """Uniform pick among free cells, or None when the grid is full."""
    free = [p for p in bounds.cells() if p not in excluded]
    if not free:
        return None
    return rng.choice(free)
