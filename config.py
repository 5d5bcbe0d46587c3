# config.py
from dataclasses import dataclass, replace
from typing import Optional, Literal, Tuple

MIN_GRID_W = 5
MIN_GRID_H = 5


class ConfigError(ValueError):
    """Settings that cannot start a round."""


def _default_intervals() -> Tuple[int, ...]:
    # 200ms at level 1, 10ms faster per level, floor at 60ms
    return tuple(max(60, 200 - 10 * i) for i in range(15))


@dataclass(frozen=True, slots=True)
class AppConfig:
    # grid / round
    grid_w: int = 24
    grid_h: int = 20
    seed: Optional[int] = None
    start_len: int = 3
    start_speed_level: int = 1
    wall_policy: Literal["collide", "wrap"] = "collide"

    # food
    bonus_food: bool = True
    plain_food_value: int = 1
    bonus_food_value: int = 5
    bonus_lifetime_ticks: int = 50
    bonus_blink_fraction: float = 0.3    # blink once remaining <= this share of lifetime
    bonus_spawn_chance: float = 0.3      # rolled each time plain food is eaten

    # speed: score thresholds -> +1 level each, level -> tick interval
    speed_thresholds: Tuple[int, ...] = (5, 10, 20, 35, 50, 70, 95, 125, 160)
    tick_intervals_ms: Tuple[int, ...] = _default_intervals()

    # effects
    glow_ticks: int = 10                 # level-up / bonus pulse length, 0 disables

    # driver / input
    fps: int = 60                        # input poll rate, not the tick rate
    controller_enabled: bool = True

    # render
    render_cell: int = 16
    render_title: str = "Snake"
    render_show_hud: bool = True
    render_record_dir: Optional[str] = None

    # persistence
    scores_path: Optional[str] = None
    round_log_path: Optional[str] = None

    def with_(self, **kwargs) -> "AppConfig":
        """Convenience: clone with updated values"""
        return replace(self, **kwargs)

    def tick_interval_ms(self, speed_level: int) -> int:
        """Interval between ticks for a level; levels past the table reuse its last entry."""
        idx = min(max(speed_level, 1), len(self.tick_intervals_ms)) - 1
        return self.tick_intervals_ms[idx]

    def validate(self) -> "AppConfig":
        if self.grid_w < MIN_GRID_W or self.grid_h < MIN_GRID_H:
            raise ConfigError(
                f"grid {self.grid_w}x{self.grid_h} is below the minimum playable "
                f"size {MIN_GRID_W}x{MIN_GRID_H}"
            )
        if self.start_len < 1:
            raise ConfigError(f"start_len must be at least 1, got {self.start_len}")
        # snake starts centered and extends left of the head
        if self.start_len > self.grid_w // 2 + 1:
            raise ConfigError(
                f"start_len {self.start_len} does not fit a {self.grid_w}-wide grid"
            )
        if self.start_speed_level < 1:
            raise ConfigError(f"start_speed_level must be positive, got {self.start_speed_level}")
        if self.wall_policy not in ("collide", "wrap"):
            raise ConfigError(f"unknown wall_policy {self.wall_policy!r}")
        if self.plain_food_value < 0 or self.bonus_food_value < 0:
            raise ConfigError("food values must be non-negative")
        if self.bonus_lifetime_ticks < 1:
            raise ConfigError(f"bonus_lifetime_ticks must be positive, got {self.bonus_lifetime_ticks}")
        if not 0.0 <= self.bonus_blink_fraction <= 1.0:
            raise ConfigError(f"bonus_blink_fraction must be in [0, 1], got {self.bonus_blink_fraction}")
        if not 0.0 <= self.bonus_spawn_chance <= 1.0:
            raise ConfigError(f"bonus_spawn_chance must be in [0, 1], got {self.bonus_spawn_chance}")
        if list(self.speed_thresholds) != sorted(self.speed_thresholds):
            raise ConfigError("speed_thresholds must be non-decreasing")
        if self.glow_ticks < 0:
            raise ConfigError(f"glow_ticks must be non-negative, got {self.glow_ticks}")
        if not self.tick_intervals_ms or any(ms <= 0 for ms in self.tick_intervals_ms):
            raise ConfigError("tick_intervals_ms must be a non-empty table of positive values")
        return self
