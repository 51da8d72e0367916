"""
State Snapshot
==============

Immutable per-frame view of a session for render collaborators, plus a
numpy packing for numeric consumers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

import numpy as np

from cube_snake.core.config_loader import Position
from cube_snake.core.rules import Cause


class GameState(str, Enum):
    """Session state machine."""
    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a renderer needs for one frame.

    Positions are plain tuples copied out of the session, so a renderer can
    hold on to a snapshot without seeing later ticks.
    """
    segments: Tuple[Position, ...]    # Head first
    food: Position
    state: GameState
    cause: Optional[Cause]            # Set only in GAME_OVER
    direction: Position
    tick: int                         # Committed ticks in this game
    half_extent: float

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def length(self) -> int:
        return len(self.segments)

    @property
    def is_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to a dictionary of numpy arrays."""
        return {
            "segments": np.array(self.segments, dtype=np.int32).reshape(-1, 3),
            "food": np.array(self.food, dtype=np.int32),
            "direction": np.array(self.direction, dtype=np.int32),
            "length": np.array(self.length, dtype=np.int32),
            "tick": np.array(self.tick, dtype=np.int64),
            "game_over": np.array(self.is_over, dtype=bool),
            "half_extent": np.array(self.half_extent, dtype=np.float32),
        }

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly form."""
        return {
            "segments": [list(s) for s in self.segments],
            "food": list(self.food),
            "state": self.state.value,
            "cause": self.cause.value if self.cause is not None else None,
            "direction": list(self.direction),
            "tick": self.tick,
            "half_extent": self.half_extent,
        }


def occupancy_grid(snapshot: GameSnapshot) -> np.ndarray:
    """
    Rasterize a snapshot into a dense cube.

    Cell values: 0 empty, 1 body, 2 head, 3 food. Food drawn last so it is
    visible when it overlaps the body. Positions outside the board are
    skipped.

    Returns:
        (side, side, side) int8 array indexed [x, y, z], where side covers
        every integer coordinate c with |c| < H.
    """
    low = -int(np.ceil(snapshot.half_extent)) + 1
    side = -2 * low + 1
    grid = np.zeros((side, side, side), dtype=np.int8)

    def _mark(position: Position, value: int) -> None:
        idx = tuple(c - low for c in position)
        if all(0 <= i < side for i in idx):
            grid[idx] = value

    for segment in snapshot.segments[1:]:
        _mark(segment, 1)
    _mark(snapshot.head, 2)
    _mark(snapshot.food, 3)
    return grid
