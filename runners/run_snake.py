# runners/run_snake.py
from __future__ import annotations
import logging
from typing import Callable, List, Optional

import pygame as pg

from config import AppConfig, ConfigError
from core.compositor import compose
from core.game_state import GameState
from core.geometry import Bounds, Direction, step
from core.interfaces import GameStatus, InputEvent, InputKind, LoopRequest, Snapshot
from core.scores import HighScoreStore
from interfaces import InputSource, Renderer, RoundSink, ScoreStore

logger = logging.getLogger(__name__)


def pygame_now() -> float:
    return pg.time.get_ticks() / 1000.0


def pygame_wait(dt: float) -> None:
    pg.time.wait(int(dt * 1000))


class SimulatedClock:
    """Virtual time for headless runs: sleep() advances now() instead of blocking."""
    def __init__(self, start: float = 0.0):
        self.t = start

    def now(self) -> float:
        return self.t

    def sleep(self, dt: float) -> None:
        self.t += max(dt, 0.0)


class NullInput:
    def poll(self) -> List[InputEvent]:
        return []


class ScriptedInput:
    """Replays a fixed list of event batches, one batch per poll."""
    def __init__(self, batches: List[List[InputEvent]]):
        self._batches = list(batches)

    def poll(self) -> List[InputEvent]:
        return self._batches.pop(0) if self._batches else []


class GreedyInput:
    """Steers toward the nearest food, preferring moves that do not die next tick."""
    def __init__(self, state: GameState):
        self.state = state

    def poll(self) -> List[InputEvent]:
        s = self.state
        if s.status is not GameStatus.PLAYING or not s.foods:
            return []
        head = s.head
        goal = s.foods[0].position
        policy = s.wall_policy

        def score(d: Direction):
            pos, hit_wall = step(head, d, s.bounds, policy)
            dead = hit_wall or s.snake.occupies(pos)
            return (dead, abs(pos.x - goal.x) + abs(pos.y - goal.y))

        options = [d for d in Direction if d != s.snake.direction.opposite()]
        best = min(options, key=score)
        return [InputEvent.move(best)]


class GameLoop:
    """Sequential driver: poll -> apply_input -> (on interval) tick -> compose -> draw."""

    def __init__(
        self,
        state: GameState,
        inputs: InputSource,
        renderer: Renderer,
        cfg: AppConfig,
        scores: Optional[ScoreStore] = None,
        round_log: Optional[RoundSink] = None,
        clock: Callable[[], float] = pygame_now,
        sleep: Callable[[float], None] = pygame_wait,
    ):
        self.state = state
        self.inputs = inputs
        self.renderer = renderer
        self.cfg = cfg
        self.scores = scores
        self.round_log = round_log
        self.clock = clock
        self.sleep = sleep
        self.high_score = 0
        self.rounds = 0
        self.ticks = 0
        self.elapsed_ms = 0

    def run(self, max_ticks: Optional[int] = None, until_finished: bool = False) -> Snapshot:
        self.high_score = self.scores.load() if self.scores is not None else 0
        self.rounds = 1
        self.elapsed_ms = 0
        self._draw()

        poll_dt = 1.0 / max(self.cfg.fps, 1)
        last = self.clock()
        acc = 0.0
        while True:
            dirty = False
            for ev in self.inputs.poll():
                if ev.kind is InputKind.RESIZE:
                    dirty = self._resize(ev.size) or dirty
                    continue
                before = self.state.status
                req = self.state.apply_input(ev)
                if req is LoopRequest.QUIT:
                    logger.info("quit requested after %d ticks", self.ticks)
                    return self.state.snapshot()
                if req is LoopRequest.RESTART:
                    self.state.reset()
                    self.rounds += 1
                    self.elapsed_ms = 0
                    acc = 0.0
                    dirty = True
                elif self.state.status is not before:
                    dirty = True

            now = self.clock()
            if self.state.status is GameStatus.PLAYING:
                acc += now - last
            else:
                acc = 0.0
            last = now

            interval_ms = self.cfg.tick_interval_ms(self.state.speed_level)
            interval = interval_ms / 1000.0
            if acc >= interval:
                # one tick per poll; a long stall does not trigger a burst of catch-up ticks
                acc = min(acc - interval, interval)
                snap = self.state.tick()
                self.ticks += 1
                self.elapsed_ms += interval_ms
                dirty = True
                if snap.status.finished:
                    self._round_over(snap)
                    if until_finished:
                        self._draw()
                        return snap

            if dirty:
                self._draw()
            if max_ticks is not None and self.ticks >= max_ticks:
                return self.state.snapshot()
            self.sleep(poll_dt)

    def _draw(self) -> None:
        snap = self.state.snapshot()
        self.renderer.draw(compose(snap), snap, self.high_score, self.elapsed_ms)

    def _resize(self, size) -> bool:
        w, h = size
        b = self.state.bounds
        if (w, h) == (b.width, b.height):
            return False
        try:
            self.state.resize(Bounds(w, h))
        except ConfigError as e:
            logger.warning("ignoring resize: %s", e)
            return False
        logger.info("resized to %dx%d", w, h)
        return True

    def _round_over(self, snap: Snapshot) -> None:
        reason = snap.death_reason.value if snap.death_reason is not None else None
        logger.info("round %d over: %s score=%d ticks=%d length=%d fill=%.1f%% time=%.1fs",
                    self.rounds, snap.status.value, snap.score, snap.tick_count, len(snap.snake),
                    self.state.coverage_percent(), self.elapsed_ms / 1000)
        if self.scores is not None:
            try:
                if self.scores.submit(snap.score):
                    logger.info("new high score %d", snap.score)
            except OSError as e:
                logger.warning("could not save high score: %s", e)
        self.high_score = max(self.high_score, snap.score)
        if self.round_log is not None:
            self.round_log.log_round(self.rounds, snap, reason)


def main(cfg: AppConfig, headless: bool = False, max_ticks: Optional[int] = None) -> Snapshot:
    from runners.round_log import CSVRoundLog

    state = GameState(cfg)
    scores = HighScoreStore(cfg.scores_path)
    round_log = CSVRoundLog(cfg.round_log_path) if cfg.round_log_path else None

    if headless:
        from viz.renderer_text import TextRenderer
        clock = SimulatedClock()
        rend = TextRenderer()
        rend.open(cfg)
        loop = GameLoop(state, GreedyInput(state), rend, cfg, scores, round_log,
                        clock=clock.now, sleep=clock.sleep)
        try:
            snap = loop.run(max_ticks=max_ticks if max_ticks is not None else 1000,
                            until_finished=True)
            rend.flush(snap, loop.high_score)
        finally:
            rend.close()
            if round_log is not None:
                round_log.close()
        return snap

    from viz.keyboard import Keyboard
    from viz.renderer_pygame import PygameRenderer

    rend = PygameRenderer()
    rend.open(cfg)
    kbd = Keyboard(controller=cfg.controller_enabled, to_grid=rend.grid_for_pixels)
    logger.info("controller %s", "detected" if kbd.controller_detected else "not detected")
    loop = GameLoop(state, kbd, rend, cfg, scores, round_log,
                    clock=rend.now, sleep=lambda _dt: rend.tick(cfg.fps))
    try:
        return loop.run(max_ticks=max_ticks)
    finally:
        rend.close()
        if round_log is not None:
            round_log.close()
