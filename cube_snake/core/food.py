"""
Food Spawner
============

Holds the single food position, decides when the head is close enough to
eat it, and picks a new random position afterwards.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from cube_snake.core.config_loader import BoardConfig, DEFAULT_FOOD, Position

logger = logging.getLogger(__name__)


def _as_position(values: Sequence[int]) -> Position:
    return (int(values[0]), int(values[1]), int(values[2]))


class FoodSpawner:
    """
    Food placement with a seeded RNG for reproducible sessions.

    Relocation draws each coordinate uniformly from the integers c with
    -H <= c < H. The snake body is not excluded, so food can land inside it.
    """

    def __init__(
        self,
        board: BoardConfig,
        seed: Optional[int] = None,
        initial: Optional[Sequence[int]] = None
    ):
        """
        Initialize the spawner.

        Args:
            board: Board geometry (half-extent and capture radius).
            seed: Random seed for reproducibility. Random if None.
            initial: First food position. Defaults to DEFAULT_FOOD.
        """
        self._board = board
        self._rng = random.Random(seed)
        self._initial: Position = _as_position(initial) if initial is not None else DEFAULT_FOOD
        self._position: Position = self._initial

    @property
    def position(self) -> Position:
        return self._position

    def in_reach(self, head: Sequence[int]) -> bool:
        """True when the head is within the capture radius on all three axes."""
        radius = self._board.capture_radius
        return all(abs(h - f) < radius for h, f in zip(head, self._position))

    def relocate(self) -> Position:
        """Move the food to a fresh random position and return it."""
        low, high = self._board.food_range
        self._position = (
            self._rng.randint(low, high),
            self._rng.randint(low, high),
            self._rng.randint(low, high),
        )
        logger.debug("Food relocated to %s", self._position)
        return self._position

    def reset(
        self,
        position: Optional[Sequence[int]] = None,
        seed: Optional[int] = None
    ) -> Position:
        """
        Place the food for a new game.

        Args:
            position: Explicit position. Uses the initial position if None.
            seed: New random seed. Keeps the current RNG stream if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._position = _as_position(position) if position is not None else self._initial
        return self._position
