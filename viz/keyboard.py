# viz/keyboard.py
from typing import Callable, List, Optional, Tuple

import pygame as pg

from core.geometry import Direction
from core.interfaces import InputEvent

_KEY_DIRS = {
    pg.K_UP: Direction.UP, pg.K_w: Direction.UP, pg.K_k: Direction.UP,
    pg.K_DOWN: Direction.DOWN, pg.K_s: Direction.DOWN, pg.K_j: Direction.DOWN,
    pg.K_LEFT: Direction.LEFT, pg.K_a: Direction.LEFT, pg.K_h: Direction.LEFT,
    pg.K_RIGHT: Direction.RIGHT, pg.K_d: Direction.RIGHT, pg.K_l: Direction.RIGHT,
}

_HAT_DIRS = {
    (0, 1): Direction.UP,
    (0, -1): Direction.DOWN,
    (-1, 0): Direction.LEFT,
    (1, 0): Direction.RIGHT,
}

# common xinput-style layout
BUTTON_CONFIRM = 0
BUTTON_QUIT = 6
BUTTON_PAUSE = 7


def translate_key(key: int) -> Optional[InputEvent]:
    if key in _KEY_DIRS:
        return InputEvent.move(_KEY_DIRS[key])
    if key in (pg.K_ESCAPE, pg.K_q):
        return InputEvent.quit()
    if key in (pg.K_p, pg.K_SPACE):
        return InputEvent.pause()
    if key in (pg.K_RETURN, pg.K_KP_ENTER):
        return InputEvent.confirm()
    return None


def translate_hat(value) -> Optional[InputEvent]:
    d = _HAT_DIRS.get(tuple(value))
    return InputEvent.move(d) if d is not None else None


def translate_button(button: int) -> Optional[InputEvent]:
    if button == BUTTON_CONFIRM:
        return InputEvent.confirm()
    if button == BUTTON_PAUSE:
        return InputEvent.pause()
    if button == BUTTON_QUIT:
        return InputEvent.quit()
    return None


class Keyboard:
    """Polls the pygame event queue; never blocks.

    `to_grid` maps a window pixel size to logical (width, height); without it
    window resizes are ignored.
    """
    def __init__(self, controller: bool = True,
                 to_grid: Optional[Callable[[int, int], Tuple[int, int]]] = None):
        self.controller = controller
        self.to_grid = to_grid
        self._pads = []
        if controller:
            pg.joystick.init()
            self._pads = [pg.joystick.Joystick(i) for i in range(pg.joystick.get_count())]

    @property
    def controller_detected(self) -> bool:
        return bool(self._pads)

    def translate(self, e) -> Optional[InputEvent]:
        if e.type == pg.QUIT:
            return InputEvent.quit()
        if e.type == pg.KEYDOWN:
            return translate_key(e.key)
        if e.type == pg.VIDEORESIZE:
            if self.to_grid is None:
                return None
            return InputEvent.resize(*self.to_grid(e.w, e.h))
        if not self.controller:
            return None
        if e.type == pg.JOYHATMOTION:
            return translate_hat(e.value)
        if e.type == pg.JOYBUTTONDOWN:
            return translate_button(e.button)
        return None

    def poll(self) -> List[InputEvent]:
        out = []
        for e in pg.event.get():
            ev = self.translate(e)
            if ev is not None:
                out.append(ev)
        return out
