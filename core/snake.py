# core/snake.py
from __future__ import annotations
from collections import deque
from typing import Iterable, Optional, Tuple

from .geometry import Bounds, Direction, Position, WallPolicy, step


class Snake:
    """
    Ordered body (head first) plus direction state.

    direction: direction of the last committed move
    pending: single buffered direction applied on the next move
    growing: keep the tail on the next move
    """

    def __init__(self, head: Position, direction: Direction = Direction.RIGHT, length: int = 3):
        if length < 1:
            raise ValueError(f"snake length must be at least 1, got {length}")
        back = direction.opposite()
        body = [head]
        for _ in range(length - 1):
            body.append(body[-1].moved(back))
        self.body = deque(body)
        self.direction = direction
        self.pending = direction
        self.growing = False

    @classmethod
    def from_segments(cls, segments: Iterable[Position], direction: Direction) -> "Snake":
        segs = list(segments)
        if not segs:
            raise ValueError("snake needs at least one segment")
        if len(set(segs)) != len(segs):
            raise ValueError("snake segments overlap")
        snake = cls(segs[0], direction, length=1)
        snake.body = deque(segs)
        return snake

    @property
    def head(self) -> Position:
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def segments(self) -> Tuple[Position, ...]:
        return tuple(self.body)

    def buffer_direction(self, d: Direction) -> None:
        # a 180° turn would run into the neck; drop it and keep what was buffered
        if d == self.direction.opposite():
            return
        self.pending = d

    def grow_next(self) -> None:
        self.growing = True

    def next_head(self, bounds: Bounds, policy: WallPolicy) -> Tuple[Position, bool]:
        """Look-ahead with the pending direction. Returns (position, hit_wall)."""
        return step(self.head, self.pending, bounds, policy)

    def move_forward(self, bounds: Bounds, policy: WallPolicy) -> Tuple[Optional[Position], Position]:
        """Commit the pending direction and advance one cell.

        Returns (vacated_tail, new_head); vacated_tail is None when the move grew
        the snake. Callers reject hit_wall moves before calling this.
        """
        self.direction = self.pending
        new_head, _ = step(self.head, self.direction, bounds, policy)
        self.body.appendleft(new_head)
        if self.growing:
            self.growing = False
            return None, new_head
        return self.body.pop(), new_head

    def occupies(self, pos: Position) -> bool:
        """Body test that ignores the tail when it is about to vacate its cell."""
        if not self.growing and len(self.body) > 1 and pos == self.body[-1]:
            return False
        return pos in self.body

    def covers(self, pos: Position) -> bool:
        return pos in self.body

    def head_overlaps_body(self) -> bool:
        head = self.body[0]
        return any(seg == head for i, seg in enumerate(self.body) if i > 0)

    def wrap_into(self, bounds: Bounds) -> int:
        """Fold the body into `bounds`, cut at the first cell it would revisit.

        Returns how many tail segments were dropped.
        """
        kept = []
        seen = set()
        for p in self.body:
            q = bounds.wrap(p)
            if q in seen:
                break
            seen.add(q)
            kept.append(q)
        dropped = len(self.body) - len(kept)
        self.body = deque(kept)
        return dropped

    def __repr__(self) -> str:
        return f"<Snake head={self.head} len={len(self)} dir={self.direction.name}>"
