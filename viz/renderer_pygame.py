# viz/renderer_pygame.py
from __future__ import annotations
import os
from typing import Optional

import pygame as pg

from config import AppConfig
from core.compositor import CompositedFrame
from core.interfaces import GameStatus, Snapshot
import viz.renderer_colors as theme

HUD_PX = 24

_STATUS_TEXT = {
    GameStatus.PLAYING: "",
    GameStatus.PAUSED: "PAUSED - P to resume",
    GameStatus.GAME_OVER: "GAME OVER - Enter to restart",
    GameStatus.VICTORY: "VICTORY - Enter to restart",
}


class PygameRenderer:
    """Draws composited frames: one terminal cell = two stacked square halves."""

    def __init__(self):
        self.cell = 16
        self.cfg: Optional[AppConfig] = None
        self.surf: Optional[pg.Surface] = None
        self.clock: Optional[pg.time.Clock] = None
        self._auto_flip = True
        self._size = (0, 0)
        self._frame_idx = 0

    def open(self, cfg: AppConfig) -> None:
        # Guard: ensure instance, not class
        if isinstance(cfg, type):
            raise TypeError("Pass an AppConfig instance (use AppConfig()), not the class.")
        self.cfg = cfg
        self.cell = cfg.render_cell

        pg.init()
        pg.display.set_caption(cfg.render_title)
        self.clock = pg.time.Clock()
        self._ensure_window(cfg.grid_w, (cfg.grid_h + 1) // 2)
        self._auto_flip = True
        self._frame_idx = 0

        if cfg.render_record_dir:
            os.makedirs(cfg.render_record_dir, exist_ok=True)

    def attach_surface(self, surface: pg.Surface, cfg: AppConfig) -> None:
        """Draw into a caller-owned surface (embedding, tests); no window, no flip."""
        if not pg.get_init():
            pg.init()
        self.cfg = cfg
        self.cell = cfg.render_cell
        self.surf = surface
        self._size = surface.get_size()
        self._auto_flip = False
        self.clock = pg.time.Clock()

    def pixel_size(self, term_w: int, term_h: int) -> tuple:
        hud = HUD_PX if self.cfg is not None and self.cfg.render_show_hud else 0
        return term_w * self.cell, term_h * 2 * self.cell + hud

    def grid_for_pixels(self, px_w: int, px_h: int) -> tuple:
        """Logical (width, height) that fits a window of the given pixel size."""
        hud = HUD_PX if self.cfg is not None and self.cfg.render_show_hud else 0
        term_h = max(px_h - hud, 0) // (2 * self.cell)
        return px_w // self.cell, term_h * 2

    def draw(self, frame: CompositedFrame, snap: Snapshot, high_score: int = 0,
             elapsed_ms: int = 0) -> None:
        assert self.surf is not None, "Renderer not opened"
        assert self.cfg is not None, "Renderer config not set (call open first)"
        if self._auto_flip:
            self._ensure_window(frame.width, frame.height)
        surf = self.surf
        c = self.cell

        surf.fill(theme.BG)
        for r, row in enumerate(frame.rows):
            y_top = r * 2 * c
            for x, tc in enumerate(row):
                top_bg = theme.checker_bg(x, 2 * r)
                bot_bg = theme.checker_bg(x, 2 * r + 1)
                pg.draw.rect(surf, theme.cell_color(tc.top, top_bg), pg.Rect(x * c, y_top, c, c))
                pg.draw.rect(surf, theme.cell_color(tc.bottom, bot_bg), pg.Rect(x * c, y_top + c, c, c))

        if self.cfg.render_show_hud:
            font = pg.font.SysFont(None, 22)
            status = _STATUS_TEXT[snap.status]
            if snap.death_reason is not None:
                status = f"{status} ({snap.death_reason.value})"
            secs = elapsed_ms // 1000
            txt = font.render(
                f"Score: {snap.score}   Speed: {snap.speed_level}   Hi: {high_score}   "
                f"Time: {secs // 60}:{secs % 60:02d}   Fill: {snap.coverage_percent:.0f}%   {status}",
                True, theme.TEXT
            )
            surf.blit(txt, (6, frame.height * 2 * c + 4))

        if self._auto_flip:
            pg.display.flip()

        if self.cfg.render_record_dir:
            self._save_surface_frame()

    def tick(self, fps: int) -> None:
        if self.clock:
            self.clock.tick(fps)

    def now(self) -> float:
        """Seconds since pygame.init, for the game loop clock."""
        return pg.time.get_ticks() / 1000.0

    def close(self) -> None:
        try:
            pg.quit()
        finally:
            self.surf = None

    # internals
    def _ensure_window(self, term_w: int, term_h: int) -> None:
        size = self.pixel_size(term_w, term_h)
        if self.surf is None or size != self._size:
            self.surf = pg.display.set_mode(size, pg.RESIZABLE)
            self._size = size

    def _save_surface_frame(self) -> None:
        assert self.surf is not None
        assert self.cfg is not None
        fname = os.path.join(self.cfg.render_record_dir, f"frame_{self._frame_idx:06d}.png")
        pg.image.save(self.surf, fname)
        self._frame_idx += 1
