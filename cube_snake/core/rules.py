"""
Game Rules
==========

Collision detection: leaving the cube and running into the body.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from cube_snake.core.config_loader import BoardConfig, Position


class Cause(str, Enum):
    """Why a game ended."""
    BOUNDARY = "boundary"
    SELF = "self"


@dataclass(frozen=True)
class CollisionResult:
    """Result of a collision check."""
    collided: bool
    cause: Optional[Cause]

    @staticmethod
    def none() -> "CollisionResult":
        return CollisionResult(False, None)

    @staticmethod
    def game_over(cause: Cause) -> "CollisionResult":
        return CollisionResult(True, cause)


class CollisionDetector:
    """
    Checks a post-move body against the board.

    - Boundary: any head coordinate with |c| >= H
    - Self: head shares a position with any other segment

    Boundary is checked first; the first hit wins.
    """

    def __init__(self, board: BoardConfig):
        self._board = board

    def hits_boundary(self, head: Position) -> bool:
        return any(abs(c) >= self._board.half_extent for c in head)

    @staticmethod
    def hits_self(segments: Sequence[Position]) -> bool:
        head = segments[0]
        return any(segment == head for segment in segments[1:])

    def check(self, segments: Sequence[Position]) -> CollisionResult:
        """
        Check a candidate body.

        Args:
            segments: Body after the move, head first.

        Returns:
            CollisionResult describing the first collision found.
        """
        if self.hits_boundary(segments[0]):
            return CollisionResult.game_over(Cause.BOUNDARY)

        if self.hits_self(segments):
            return CollisionResult.game_over(Cause.SELF)

        return CollisionResult.none()
