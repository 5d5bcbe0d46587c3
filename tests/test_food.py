import random

from core.food import Food, FoodKind, spawn_position
from core.geometry import Bounds, Position


def test_spawn_never_lands_on_excluded_cells():
    rng = random.Random(7)
    b = Bounds(8, 6)
    excluded = {Position(x, 0) for x in range(8)} | {Position(3, 3)}
    for _ in range(200):
        p = spawn_position(rng, b, excluded)
        assert p is not None
        assert p not in excluded
        assert b.contains(p)


def test_spawn_picks_the_only_free_cell():
    b = Bounds(5, 5)
    excluded = set(b.cells()) - {Position(4, 2)}
    assert spawn_position(random.Random(1), b, excluded) == Position(4, 2)


def test_spawn_reports_full_grid_as_none():
    b = Bounds(5, 5)
    assert spawn_position(random.Random(1), b, set(b.cells())) is None


def test_bonus_expires_after_its_lifetime():
    f = Food.bonus(Position(1, 1), lifetime=10)
    for _ in range(9):
        assert not f.age()
    assert f.age()
    assert f.remaining == 0


def test_plain_food_never_expires():
    f = Food.plain(Position(1, 1))
    for _ in range(200):
        assert not f.age()


def test_bonus_defaults():
    plain = Food.plain(Position(1, 1))
    bonus = Food.bonus(Position(2, 2), lifetime=50)
    assert plain.kind is FoodKind.PLAIN and plain.value == 1
    assert bonus.kind is FoodKind.BONUS and bonus.value == 5
    assert bonus.remaining == 50


def test_blinking_threshold():
    f = Food.bonus(Position(0, 0), lifetime=10)
    assert not f.blinking(0.3)
    for _ in range(7):
        f.age()
    assert f.remaining == 3
    assert f.blinking(0.3)
    assert not f.blinking(0.0)
    assert not Food.plain(Position(0, 0)).blinking(1.0)
