"""
Tests for snake movement and growth.
"""

import pytest

from cube_snake.core.snake_state import SnakeState


@pytest.fixture
def snake():
    return SnakeState([(0, 0, 0), (-1, 0, 0), (-2, 0, 0)])


class TestMovement:
    """Test the shift-based movement step."""

    def test_one_step_along_x(self, snake):
        """Each segment takes its predecessor's place; the head moves."""
        candidate = snake.advance((1, 0, 0))
        assert candidate == ((1, 0, 0), (0, 0, 0), (-1, 0, 0))

    def test_advance_does_not_mutate(self, snake):
        snake.advance((0, 1, 0))
        assert snake.segments == ((0, 0, 0), (-1, 0, 0), (-2, 0, 0))

    def test_commit(self, snake):
        snake.commit(snake.advance((0, 0, -1)))
        assert snake.head == (0, 0, -1)
        assert snake.tail == (-1, 0, 0)
        assert len(snake) == 3

    def test_commit_rejects_wrong_length(self, snake):
        with pytest.raises(ValueError):
            snake.commit(((1, 0, 0),))

    def test_single_segment(self):
        snake = SnakeState([(3, 3, 3)])
        snake.commit(snake.advance((0, -1, 0)))
        assert snake.segments == ((3, 2, 3),)

    def test_empty_snake_rejected(self):
        with pytest.raises(ValueError):
            SnakeState([])

    def test_segments_is_a_copy(self, snake):
        segments = snake.segments
        snake.commit(snake.advance((1, 0, 0)))
        assert segments == ((0, 0, 0), (-1, 0, 0), (-2, 0, 0))


class TestGrowth:
    """Test tail cloning on growth."""

    def test_grow_clones_tail(self, snake):
        snake.grow(3)
        assert len(snake) == 6
        assert snake.segments[3:] == ((-2, 0, 0),) * 3

    def test_grown_segments_unfold(self, snake):
        """Stacked tail segments spread out over the following ticks."""
        snake.grow(3)
        for _ in range(3):
            snake.commit(snake.advance((1, 0, 0)))

        assert snake.segments == (
            (3, 0, 0), (2, 0, 0), (1, 0, 0), (0, 0, 0), (-1, 0, 0), (-2, 0, 0)
        )

    def test_grow_zero(self, snake):
        snake.grow(0)
        assert len(snake) == 3
