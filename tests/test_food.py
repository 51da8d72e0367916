"""
Tests for food capture and relocation.
"""

import pytest

from cube_snake.core.config_loader import BoardConfig
from cube_snake.core.food import FoodSpawner


@pytest.fixture
def board():
    return BoardConfig()


class TestCaptureRadius:
    """Test the per-axis proximity rule."""

    def test_initial_position(self, board):
        assert FoodSpawner(board).position == (-4, 4, 4)

    @pytest.mark.parametrize("head", [
        (-4, 4, 4), (-3, 5, 3), (-5, 3, 5), (-3, 3, 3),
    ])
    def test_within_radius(self, board, head):
        assert FoodSpawner(board).in_reach(head)

    @pytest.mark.parametrize("head", [
        (-2, 4, 4), (-4, 6, 4), (-4, 4, 2), (-6, 6, 6),
    ])
    def test_distance_two_misses(self, board, head):
        """Reach is strict: a difference of 2 on any axis is too far."""
        assert not FoodSpawner(board).in_reach(head)


class TestRelocation:
    """Test random placement."""

    def test_range(self, board):
        """Every coordinate lands in [-H, H)."""
        spawner = FoodSpawner(board, seed=0)
        seen = set()
        for _ in range(2000):
            position = spawner.relocate()
            for c in position:
                assert -board.half_extent <= c < board.half_extent
                seen.add(c)
        assert seen == set(range(-8, 9))

    def test_deterministic_with_seed(self, board):
        a = FoodSpawner(board, seed=42)
        b = FoodSpawner(board, seed=42)
        assert [a.relocate() for _ in range(20)] == [b.relocate() for _ in range(20)]

    def test_different_seeds_differ(self, board):
        a = FoodSpawner(board, seed=42)
        b = FoodSpawner(board, seed=123)
        assert [a.relocate() for _ in range(20)] != [b.relocate() for _ in range(20)]

    def test_reset(self, board):
        spawner = FoodSpawner(board, seed=1, initial=(1, 2, 3))
        spawner.relocate()
        assert spawner.reset() == (1, 2, 3)
        assert spawner.reset(position=(0, 0, 0)) == (0, 0, 0)

    def test_reset_with_seed_restarts_stream(self, board):
        spawner = FoodSpawner(board, seed=5)
        first = [spawner.relocate() for _ in range(5)]
        spawner.reset(seed=5)
        assert [spawner.relocate() for _ in range(5)] == first
