"""
Direction Controller
====================

Stores the active movement direction and rejects instant reversals.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from cube_snake.core.config_loader import DEFAULT_DIRECTION, is_unit_direction

logger = logging.getLogger(__name__)

Direction = Tuple[int, int, int]

AXES = ("x", "y", "z")


def axis_index(axis: str) -> int:
    """Map an axis name to its tuple index."""
    try:
        return AXES.index(axis)
    except ValueError:
        raise ValueError(f"Unknown axis: {axis!r} (expected one of {AXES})") from None


def make_direction(axis: str, sign: int) -> Direction:
    """Build the unit vector pointing along `axis` with the given sign."""
    if sign not in (1, -1):
        raise ValueError(f"Direction sign must be +1 or -1, got {sign!r}")
    vector = [0, 0, 0]
    vector[axis_index(axis)] = sign
    return (vector[0], vector[1], vector[2])


class DirectionController:
    """
    Holds the direction used by the next movement tick.

    A request is applied only when the current direction has no component on
    the requested axis, so the snake can never turn straight back along the
    axis that is driving it. Requests are not queued: the last accepted one
    before a tick wins.
    """

    def __init__(self, initial: Sequence[int] = DEFAULT_DIRECTION):
        self._initial: Direction = self._checked(initial)
        self._direction: Direction = self._initial

    @staticmethod
    def _checked(direction: Sequence[int]) -> Direction:
        if not is_unit_direction(direction):
            raise ValueError(f"Not a unit axis direction: {tuple(direction)}")
        return (int(direction[0]), int(direction[1]), int(direction[2]))

    @property
    def direction(self) -> Direction:
        """Current movement vector."""
        return self._direction

    @property
    def active_axis(self) -> str:
        """Name of the axis the snake is currently moving along."""
        for axis, component in zip(AXES, self._direction):
            if component:
                return axis
        raise AssertionError("direction has no active axis")

    def set_direction(self, axis: str, sign: int) -> bool:
        """
        Request a new direction.

        Args:
            axis: One of "x", "y", "z".
            sign: +1 or -1.

        Returns:
            True if the direction changed, False if the request was ignored
            because it lies on the currently active axis.
        """
        requested = make_direction(axis, sign)
        if self._direction[axis_index(axis)] != 0:
            logger.debug("Ignoring direction %s while moving %s", requested, self._direction)
            return False
        self._direction = requested
        return True

    def reset(self, initial: Optional[Sequence[int]] = None) -> Direction:
        """Restore the initial direction (or install a new one)."""
        if initial is not None:
            self._initial = self._checked(initial)
        self._direction = self._initial
        return self._direction
