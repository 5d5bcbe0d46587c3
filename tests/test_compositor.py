import numpy as np

from config import AppConfig
from core.compositor import (
    BlinkPhase, Cell, CellRole, EMPTY_CELL, GlyphClass, classify, compose,
)
from core.food import Food
from core.game_state import GameState
from core.geometry import Direction, Position
from core.interfaces import DeathReason, GlowTrigger


def P(x, y):
    return Position(x, y)


def test_frame_packs_two_logical_rows_per_terminal_row(state_factory):
    s = state_factory(grid_w=6, grid_h=5)
    frame = compose(s.snapshot())
    assert frame.width == 6
    assert frame.logical_height == 5
    assert frame.height == 3
    # past an odd height the lower half is empty
    assert all(tc.bottom == EMPTY_CELL for tc in frame.rows[-1])


def test_snake_roles_and_ordinals(state_factory, place):
    s = place(state_factory(), [(4, 2), (3, 2), (2, 2), (1, 2)], food=(7, 7))
    frame = compose(s.snapshot())
    assert frame.cell(4, 2) == Cell(CellRole.SNAKE_HEAD, direction=Direction.RIGHT)
    assert frame.cell(3, 2) == Cell(CellRole.SNAKE_BODY, ordinal=0)
    assert frame.cell(2, 2) == Cell(CellRole.SNAKE_BODY, ordinal=1)
    assert frame.cell(1, 2) == Cell(CellRole.SNAKE_TAIL)
    assert frame.cell(7, 7) == Cell(CellRole.FOOD_PLAIN)
    assert frame.cell(0, 0) == EMPTY_CELL


def test_head_carries_its_direction(state_factory, place):
    s = place(state_factory(), [(4, 2), (4, 3)], Direction.UP, food=(7, 7))
    assert compose(s.snapshot()).cell(4, 2).direction == Direction.UP


def test_glyph_classes(state_factory, place):
    # head on row 2 (top half of terminal row 1), body on row 3 below it
    s = place(state_factory(), [(4, 2), (4, 3), (5, 3)], Direction.UP, food=(7, 6))
    frame = compose(s.snapshot())
    assert frame.rows[1][4].glyph is GlyphClass.DIFFERING       # head over body
    assert frame.rows[1][5].glyph is GlyphClass.LOWER_ONLY      # tail below empty
    assert frame.rows[3][7].glyph is GlyphClass.UPPER_ONLY      # food on row 6
    assert frame.rows[0][0].glyph is GlyphClass.BOTH_EMPTY


def test_both_filled_for_same_role(state_factory, place):
    s = place(state_factory(), [(4, 4), (3, 4), (3, 5), (4, 5), (5, 5)], Direction.RIGHT, food=(9, 9))
    frame = compose(s.snapshot())
    assert frame.rows[2][3].glyph is GlyphClass.BOTH_FILLED      # body over body


def test_classify_table():
    body = Cell(CellRole.SNAKE_BODY, ordinal=0)
    food = Cell(CellRole.FOOD_PLAIN)
    hidden = Cell(CellRole.FOOD_BONUS, blink=BlinkPhase.HIDDEN)
    assert classify(EMPTY_CELL, EMPTY_CELL) is GlyphClass.BOTH_EMPTY
    assert classify(body, EMPTY_CELL) is GlyphClass.UPPER_ONLY
    assert classify(EMPTY_CELL, food) is GlyphClass.LOWER_ONLY
    assert classify(body, Cell(CellRole.SNAKE_BODY, ordinal=5)) is GlyphClass.BOTH_FILLED
    assert classify(body, food) is GlyphClass.DIFFERING
    assert classify(hidden, food) is GlyphClass.LOWER_ONLY


def test_bonus_blinks_on_tick_parity(first_free_rng):
    cfg = AppConfig(grid_w=10, grid_h=10, wall_policy="wrap", bonus_blink_fraction=0.5)
    s = GameState(cfg, rng=first_free_rng)
    s.bonus = Food.bonus(P(8, 8), lifetime=10)
    assert compose(s.snapshot()).cell(8, 8).blink is BlinkPhase.STEADY

    phases = []
    for _ in range(8):
        s.tick()
        phases.append((s.tick_count, compose(s.snapshot()).cell(8, 8).blink))
    blinking = [(t, ph) for t, ph in phases if ph is not BlinkPhase.STEADY]
    assert blinking, "bonus never entered its blink window"
    for t, ph in blinking:
        assert ph is (BlinkPhase.SHOWN if t % 2 == 0 else BlinkPhase.HIDDEN)


def test_compose_is_pure_and_repeatable(state_factory):
    s = state_factory(wall_policy="wrap")
    for _ in range(7):
        s.tick()
    snap = s.snapshot()
    a = compose(snap)
    b = compose(s.snapshot())
    assert a == b
    assert np.array_equal(a.glyph_classes(), b.glyph_classes())
    assert s.snapshot() == snap


def test_glyph_class_matrix(state_factory):
    s = state_factory(grid_w=6, grid_h=7)
    g = compose(s.snapshot()).glyph_classes()
    assert g.shape == (4, 6)
    assert g.dtype == np.int8
    assert set(np.unique(g)) <= {int(c) for c in GlyphClass}


def test_head_drawn_over_body_after_self_collision(state_factory, place):
    s = place(state_factory(grid_w=6, grid_h=6),
              [(2, 2), (1, 2), (1, 3), (2, 3), (3, 3), (3, 2)], Direction.LEFT, food=(0, 0))
    snap = s.tick()
    assert snap.death_reason is DeathReason.SELF
    assert snap.head == P(1, 2)
    cell = compose(snap).cell(1, 2)
    assert cell.role is CellRole.SNAKE_HEAD
    assert cell.direction is Direction.LEFT


def test_level_up_glow_reaches_every_snake_cell(state_factory, place, first_free_rng):
    s = place(state_factory(rng=first_free_rng, speed_thresholds=(1,)),
              [(2, 1), (1, 1), (0, 1)], food=(3, 1))
    snap = s.tick()
    frame = compose(snap)
    assert frame.cell(3, 1).glow == snap.glow
    assert frame.cell(2, 1).glow == snap.glow
    assert frame.cell(0, 1).glow == snap.glow
    assert frame.cell(0, 0).glow is None     # fresh food


def test_bonus_glow_skips_the_head(state_factory, place, first_free_rng):
    s = place(state_factory(rng=first_free_rng), [(2, 1), (1, 1), (0, 1)], food=(9, 9),
              bonus=Food.bonus(P(3, 1), lifetime=50))
    snap = s.tick()
    assert snap.glow.trigger is GlowTrigger.BONUS_EATEN
    frame = compose(snap)
    assert frame.cell(3, 1).glow is None
    assert frame.cell(2, 1).glow == snap.glow
