# core/game_state.py  (tick state machine, no pygame)
from __future__ import annotations
import logging
import random
from typing import Any, Dict, Optional, Tuple

from config import AppConfig
from .food import Food, FoodKind, spawn_position
from .geometry import Bounds, Direction, Position, WallPolicy
from .interfaces import (
    DeathReason, FoodView, GameStatus, Glow, GlowTrigger, InputEvent, InputKind, LoopRequest, Snapshot,
)
from .snake import Snake

logger = logging.getLogger(__name__)


class GameState:
    """
    One round of snake. The only writer of the snake, the food slots and the
    counters; everything else reads `snapshot()`.

    Invalid input, collisions and a full grid are all reported through
    `status`, so `tick()` never raises once construction succeeded.
    """

    def __init__(self, cfg: AppConfig, rng: Optional[random.Random] = None):
        self.cfg = cfg.validate()
        self.rng = rng if rng is not None else random.Random(cfg.seed)
        self.wall_policy = WallPolicy(cfg.wall_policy)
        self._bounds = Bounds.validated(cfg.grid_w, cfg.grid_h)
        self._reset_state()

    def _reset_state(self) -> None:
        b = self._bounds
        length = min(self.cfg.start_len, b.width // 2 + 1)
        self.snake = Snake(Position(b.width // 2, b.height // 2), Direction.RIGHT, length)
        self.food: Optional[Food] = None
        self.bonus: Optional[Food] = None
        self.score = 0
        self.speed_level = self.cfg.start_speed_level
        self.tick_count = 0
        self.status = GameStatus.PLAYING
        self.death_reason: Optional[DeathReason] = None
        self.glow: Optional[Glow] = None
        self._spawn_plain()

    def reset(self) -> Snapshot:
        self._reset_state()
        return self.snapshot()

    # ---- read-only accessors ----
    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def head(self) -> Position:
        return self.snake.head

    @property
    def body(self) -> Tuple[Position, ...]:
        return self.snake.segments()

    @property
    def foods(self) -> Tuple[Food, ...]:
        return tuple(f for f in (self.food, self.bonus) if f is not None)

    def coverage_percent(self) -> float:
        return 100.0 * len(self.snake) / self._bounds.total_cells

    # ---- input ----
    def apply_input(self, event: InputEvent) -> LoopRequest:
        kind = event.kind
        if kind is InputKind.DIRECTION:
            if self.status is GameStatus.PLAYING and event.direction is not None:
                self.snake.buffer_direction(event.direction)
        elif kind is InputKind.PAUSE:
            if self.status is GameStatus.PLAYING:
                self.status = GameStatus.PAUSED
            elif self.status is GameStatus.PAUSED:
                self.status = GameStatus.PLAYING
        elif kind is InputKind.RESUME:
            if self.status is GameStatus.PAUSED:
                self.status = GameStatus.PLAYING
        elif kind is InputKind.CONFIRM:
            if self.status is GameStatus.PAUSED:
                self.status = GameStatus.PLAYING
            elif self.status.finished:
                return LoopRequest.RESTART
        elif kind is InputKind.QUIT:
            return LoopRequest.QUIT
        return LoopRequest.CONTINUE

    # ---- simulation ----
    def tick(self) -> Snapshot:
        if self.status is not GameStatus.PLAYING:
            return self.snapshot()

        self.tick_count += 1
        if self.glow is not None:
            self.glow = self.glow.decayed()
        bonus_before = self.bonus

        target, hit_wall = self.snake.next_head(self._bounds, self.wall_policy)
        if hit_wall:
            self._end(DeathReason.WALL)
            return self.snapshot()

        eaten = self._food_at(target)
        if eaten is not None:
            self.snake.grow_next()
        self.snake.move_forward(self._bounds, self.wall_policy)

        if self.snake.head_overlaps_body():
            self._end(DeathReason.SELF)
            return self.snapshot()

        if eaten is not None:
            self._consume(eaten)
            leveled = self._update_speed_level()
            if eaten.is_bonus:
                self._start_glow(GlowTrigger.BONUS_EATEN)
            elif leveled:
                self._start_glow(GlowTrigger.LEVEL_UP)
            if self.status is GameStatus.VICTORY:
                return self.snapshot()

        # only a bonus that was already on the board ages this tick
        if bonus_before is not None and self.bonus is bonus_before and self.bonus.age():
            logger.debug("bonus food at %s expired", self.bonus.position)
            self.bonus = None
            if self.food is None:
                self._spawn_plain()

        return self.snapshot()

    def resize(self, bounds: Bounds) -> Snapshot:
        """Apply new logical bounds between ticks (terminal resize)."""
        self._bounds = Bounds.validated(bounds.width, bounds.height)
        dropped = self.snake.wrap_into(self._bounds)
        if dropped:
            logger.debug("resize to %dx%d cut %d tail segments", bounds.width, bounds.height, dropped)
        for slot in ("food", "bonus"):
            f = getattr(self, slot)
            if f is not None and (not self._bounds.contains(f.position) or self.snake.covers(f.position)):
                setattr(self, slot, None)
        if self.bonus is not None and self.food is not None and self.bonus.position == self.food.position:
            self.bonus = None
        if self.status.finished:
            return self.snapshot()
        if len(self.snake) >= self._bounds.total_cells:
            self._win()
        elif self.food is None and self.bonus is None:
            self._spawn_plain()
        return self.snapshot()

    # ---- internals ----
    def _food_at(self, pos: Position) -> Optional[Food]:
        for f in (self.food, self.bonus):
            if f is not None and f.position == pos:
                return f
        return None

    def _occupied(self) -> set:
        occ = set(self.snake.body)
        occ.update(f.position for f in (self.food, self.bonus) if f is not None)
        return occ

    def _spawn_plain(self) -> bool:
        pos = spawn_position(self.rng, self._bounds, self._occupied())
        if pos is None:
            self._win()
            return False
        self.food = Food.plain(pos, self.cfg.plain_food_value)
        return True

    def _maybe_spawn_bonus(self) -> None:
        if not self.cfg.bonus_food or self.bonus is not None:
            return
        if self.rng.random() >= self.cfg.bonus_spawn_chance:
            return
        pos = spawn_position(self.rng, self._bounds, self._occupied())
        if pos is not None:
            self.bonus = Food.bonus(pos, self.cfg.bonus_lifetime_ticks, self.cfg.bonus_food_value)

    def _consume(self, food: Food) -> None:
        self.score += food.value
        if food is self.food:
            self.food = None
        else:
            self.bonus = None
        if self.food is None and self.bonus is None:
            if not self._spawn_plain():
                return
        if food.kind is FoodKind.PLAIN:
            self._maybe_spawn_bonus()

    def _update_speed_level(self) -> bool:
        level = self.cfg.start_speed_level + sum(1 for t in self.cfg.speed_thresholds if self.score >= t)
        if level <= self.speed_level:
            return False
        logger.debug("speed level %d -> %d at score %d", self.speed_level, level, self.score)
        self.speed_level = level
        return True

    def _start_glow(self, trigger: GlowTrigger) -> None:
        if self.cfg.glow_ticks > 0:
            self.glow = Glow.start(trigger, self.cfg.glow_ticks)

    def _end(self, reason: DeathReason) -> None:
        self.status = GameStatus.GAME_OVER
        self.death_reason = reason
        logger.debug("game over (%s) at tick %d, score %d", reason.value, self.tick_count, self.score)

    def _win(self) -> None:
        self.status = GameStatus.VICTORY
        self.death_reason = None
        logger.debug("victory at tick %d, score %d", self.tick_count, self.score)

    # ---- snapshots / checkpointing ----
    def snapshot(self) -> Snapshot:
        views = tuple(
            FoodView(
                position=f.position,
                kind=f.kind,
                value=f.value,
                remaining=f.remaining,
                blinking=f.blinking(self.cfg.bonus_blink_fraction),
            )
            for f in self.foods
        )
        return Snapshot(
            bounds=self._bounds,
            snake=self.snake.segments(),
            direction=self.snake.direction,
            foods=views,
            score=self.score,
            speed_level=self.speed_level,
            tick_count=self.tick_count,
            status=self.status,
            death_reason=self.death_reason,
            wall_policy=self.wall_policy,
            glow=self.glow,
        )

    def get_state(self) -> Dict[str, Any]:
        """Pure-Python, JSON-serializable state (plus RNG)."""
        def food_state(f: Optional[Food]):
            if f is None:
                return None
            return {"pos": [f.position.x, f.position.y], "kind": f.kind.value,
                    "value": f.value, "lifetime": f.lifetime, "remaining": f.remaining}

        return {
            "bounds": [self._bounds.width, self._bounds.height],
            "snake": [[p.x, p.y] for p in self.snake.body],
            "direction": self.snake.direction.name,
            "pending": self.snake.pending.name,
            "growing": self.snake.growing,
            "food": food_state(self.food),
            "bonus": food_state(self.bonus),
            "score": self.score,
            "speed_level": self.speed_level,
            "tick_count": self.tick_count,
            "status": self.status.value,
            "death_reason": self.death_reason.value if self.death_reason else None,
            "glow": [self.glow.trigger.value, self.glow.remaining, self.glow.total] if self.glow else None,
            "rng_state": self.rng.getstate(),
        }

    def set_state(self, state: Dict[str, Any]) -> None:
        """Restore exact internal state (including RNG)."""
        def food_from(d):
            if d is None:
                return None
            return Food(Position(*d["pos"]), FoodKind(d["kind"]), int(d["value"]),
                        lifetime=int(d["lifetime"]), remaining=int(d["remaining"]))

        self._bounds = Bounds.validated(*state["bounds"])
        self.snake = Snake.from_segments((Position(*p) for p in state["snake"]),
                                         Direction[state["direction"]])
        self.snake.pending = Direction[state["pending"]]
        self.snake.growing = bool(state["growing"])
        self.food = food_from(state["food"])
        self.bonus = food_from(state["bonus"])
        self.score = int(state["score"])
        self.speed_level = int(state["speed_level"])
        self.tick_count = int(state["tick_count"])
        self.status = GameStatus(state["status"])
        self.death_reason = DeathReason(state["death_reason"]) if state["death_reason"] else None
        glow = state.get("glow")
        self.glow = Glow(GlowTrigger(glow[0]), int(glow[1]), int(glow[2])) if glow else None
        version, internal, gauss = state["rng_state"]
        self.rng.setstate((version, tuple(internal), gauss))
