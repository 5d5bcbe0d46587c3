import pytest

from core.geometry import Bounds, Direction, Position, WallPolicy
from core.snake import Snake

B = Bounds(10, 10)


def P(x, y):
    return Position(x, y)


class TestSnakeInit:
    def test_body_extends_opposite_to_direction(self):
        s = Snake(P(5, 5), Direction.RIGHT, length=3)
        assert s.segments() == (P(5, 5), P(4, 5), P(3, 5))
        assert s.pending == Direction.RIGHT
        assert not s.growing

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake(P(0, 0), length=0)

    def test_from_segments_rejects_overlap(self):
        with pytest.raises(ValueError, match="overlap"):
            Snake.from_segments([P(1, 1), P(1, 1)], Direction.UP)


class TestBuffering:
    def test_reverse_is_dropped(self):
        s = Snake(P(5, 5), Direction.UP)
        s.buffer_direction(Direction.DOWN)
        assert s.pending == Direction.UP

    def test_reverse_keeps_previous_valid_buffer(self):
        s = Snake(P(5, 5), Direction.UP)
        s.buffer_direction(Direction.LEFT)
        s.buffer_direction(Direction.DOWN)
        assert s.pending == Direction.LEFT

    def test_latest_valid_input_wins(self):
        s = Snake(P(5, 5), Direction.DOWN)
        s.buffer_direction(Direction.RIGHT)
        s.buffer_direction(Direction.LEFT)
        assert s.pending == Direction.LEFT
        s.move_forward(B, WallPolicy.COLLIDE)
        assert s.head == P(4, 5)
        assert s.direction == Direction.LEFT

    @pytest.mark.parametrize("d", list(Direction))
    def test_reverse_of_current_never_changes_pending(self, d):
        s = Snake(P(5, 5), d)
        before = s.pending
        s.buffer_direction(d.opposite())
        assert s.pending == before


class TestMovement:
    def test_move_without_growth_returns_vacated_tail(self):
        s = Snake(P(5, 5), Direction.RIGHT, length=3)
        vacated, head = s.move_forward(B, WallPolicy.COLLIDE)
        assert vacated == P(3, 5)
        assert head == P(6, 5)
        assert len(s) == 3

    def test_move_with_growth_keeps_tail_and_clears_flag(self):
        s = Snake(P(5, 5), Direction.RIGHT, length=3)
        s.grow_next()
        vacated, head = s.move_forward(B, WallPolicy.COLLIDE)
        assert vacated is None
        assert len(s) == 4
        assert s.tail == P(3, 5)
        assert not s.growing

    def test_move_wraps_under_wrap_policy(self):
        s = Snake(P(9, 2), Direction.RIGHT, length=2)
        _, head = s.move_forward(B, WallPolicy.WRAP)
        assert head == P(0, 2)

    def test_next_head_uses_pending_direction(self):
        s = Snake(P(5, 5), Direction.RIGHT)
        s.buffer_direction(Direction.UP)
        assert s.next_head(B, WallPolicy.COLLIDE) == (P(5, 4), False)


class TestOccupancy:
    def test_occupies_ignores_vacating_tail(self):
        s = Snake(P(5, 5), Direction.RIGHT, length=3)
        assert not s.occupies(P(3, 5))
        assert s.covers(P(3, 5))
        assert s.occupies(P(4, 5))

    def test_occupies_counts_tail_when_growing(self):
        s = Snake(P(5, 5), Direction.RIGHT, length=3)
        s.grow_next()
        assert s.occupies(P(3, 5))

    def test_moving_into_vacating_tail_is_not_a_collision(self):
        # 2x2 loop: head follows the tail round the square
        s = Snake.from_segments([P(1, 1), P(1, 2), P(2, 2), P(2, 1)], Direction.UP)
        s.buffer_direction(Direction.RIGHT)
        s.move_forward(B, WallPolicy.COLLIDE)
        assert s.head == P(2, 1)
        assert not s.head_overlaps_body()

    def test_moving_into_body_is_a_collision(self):
        s = Snake.from_segments([P(1, 1), P(1, 2), P(2, 2), P(2, 1), P(3, 1)], Direction.UP)
        s.buffer_direction(Direction.RIGHT)
        s.move_forward(B, WallPolicy.COLLIDE)
        assert s.head_overlaps_body()


class TestWrapInto:
    def test_short_snake_wraps_intact(self):
        s = Snake.from_segments([P(7, 7), P(6, 7), P(5, 7)], Direction.RIGHT)
        assert s.wrap_into(Bounds(6, 6)) == 0
        assert s.segments() == (P(1, 1), P(0, 1), P(5, 1))

    def test_long_snake_is_cut_at_first_repeat(self):
        s = Snake.from_segments([P(x, 2) for x in range(8, 0, -1)], Direction.RIGHT)
        dropped = s.wrap_into(Bounds(5, 5))
        assert dropped == 3
        assert s.segments() == (P(3, 2), P(2, 2), P(1, 2), P(0, 2), P(4, 2))
        assert len(set(s.segments())) == len(s)
