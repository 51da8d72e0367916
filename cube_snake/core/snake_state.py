"""
Snake State
===========

Ordered body segments (head first) and the shift-based movement step.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from cube_snake.core.config_loader import Position


class SnakeState:
    """
    Body of the snake, head at index 0.

    The container allows duplicate positions: overlapping segments are what
    the collision detector looks for, and freshly grown segments start
    stacked on the tail.
    """

    def __init__(self, segments: Iterable[Sequence[int]]):
        self._segments: List[Position] = [
            (int(s[0]), int(s[1]), int(s[2])) for s in segments
        ]
        if not self._segments:
            raise ValueError("A snake needs at least one segment")

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"SnakeState(head={self.head}, length={len(self)})"

    @property
    def head(self) -> Position:
        return self._segments[0]

    @property
    def tail(self) -> Position:
        return self._segments[-1]

    @property
    def segments(self) -> Tuple[Position, ...]:
        """Copy of the body, head first."""
        return tuple(self._segments)

    def advance(self, direction: Sequence[int]) -> Tuple[Position, ...]:
        """
        Compute the body after one step without changing this snake.

        Every segment takes the place of the one in front of it and the
        head moves by `direction`.

        Args:
            direction: Unit movement vector.

        Returns:
            Candidate segments to pass to commit().
        """
        head = self._segments[0]
        new_head = (
            head[0] + direction[0],
            head[1] + direction[1],
            head[2] + direction[2],
        )
        return (new_head,) + tuple(self._segments[:-1])

    def commit(self, segments: Sequence[Position]) -> None:
        """Install a candidate body produced by advance()."""
        if len(segments) != len(self._segments):
            raise ValueError(
                f"Candidate has {len(segments)} segments, snake has {len(self._segments)}"
            )
        self._segments = list(segments)

    def grow(self, count: int) -> None:
        """Append `count` segments stacked on the current tail."""
        tail = self._segments[-1]
        self._segments.extend([tail] * count)
