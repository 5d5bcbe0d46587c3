# core/interfaces.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .food import FoodKind
from .geometry import Bounds, Direction, Position, WallPolicy


class GameStatus(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    VICTORY = "victory"

    @property
    def finished(self) -> bool:
        return self in (GameStatus.GAME_OVER, GameStatus.VICTORY)


class DeathReason(Enum):
    WALL = "wall"
    SELF = "self"


class InputKind(Enum):
    DIRECTION = "direction"
    PAUSE = "pause"
    RESUME = "resume"
    QUIT = "quit"
    CONFIRM = "confirm"
    RESIZE = "resize"


@dataclass(frozen=True)
class InputEvent:
    """Normalized input; the backend (keyboard, controller, script) is not known here."""
    kind: InputKind
    direction: Optional[Direction] = None
    size: Optional[Tuple[int, int]] = None   # logical (width, height), resize only

    @classmethod
    def move(cls, direction: Direction) -> "InputEvent":
        return cls(InputKind.DIRECTION, direction)

    @classmethod
    def pause(cls) -> "InputEvent":
        return cls(InputKind.PAUSE)

    @classmethod
    def resume(cls) -> "InputEvent":
        return cls(InputKind.RESUME)

    @classmethod
    def quit(cls) -> "InputEvent":
        return cls(InputKind.QUIT)

    @classmethod
    def confirm(cls) -> "InputEvent":
        return cls(InputKind.CONFIRM)

    @classmethod
    def resize(cls, width: int, height: int) -> "InputEvent":
        return cls(InputKind.RESIZE, size=(width, height))


class GlowTrigger(Enum):
    LEVEL_UP = "level_up"
    BONUS_EATEN = "bonus_eaten"


@dataclass(frozen=True)
class Glow:
    """Short pulse over the snake that fades out over `total` ticks."""
    trigger: GlowTrigger
    remaining: int
    total: int

    @classmethod
    def start(cls, trigger: GlowTrigger, ticks: int) -> "Glow":
        return cls(trigger, ticks, ticks)

    @property
    def intensity(self) -> float:
        """1.0 when fresh, shrinking by 1/total each tick."""
        if self.total <= 0:
            return 0.0
        return self.remaining / self.total

    def decayed(self) -> Optional["Glow"]:
        left = self.remaining - 1
        return Glow(self.trigger, left, self.total) if left > 0 else None


class LoopRequest(Enum):
    """What apply_input asks of the outer loop."""
    CONTINUE = "continue"
    QUIT = "quit"
    RESTART = "restart"


@dataclass(frozen=True)
class FoodView:
    position: Position
    kind: FoodKind
    value: int
    remaining: int
    blinking: bool


@dataclass(frozen=True)
class Snapshot:
    bounds: Bounds
    snake: Tuple[Position, ...]   # head first
    direction: Direction
    foods: Tuple[FoodView, ...]   # plain first, then bonus
    score: int
    speed_level: int
    tick_count: int
    status: GameStatus
    death_reason: Optional[DeathReason]
    wall_policy: WallPolicy
    glow: Optional[Glow] = None

    @property
    def head(self) -> Position:
        return self.snake[0]

    @property
    def coverage_percent(self) -> float:
        return 100.0 * len(self.snake) / self.bounds.total_cells
