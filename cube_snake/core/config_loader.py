"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

import yaml

Position = Tuple[int, int, int]

DEFAULT_SEGMENTS: Tuple[Position, ...] = ((0, 0, 0), (-1, 0, 0), (-2, 0, 0))
DEFAULT_DIRECTION: Position = (1, 0, 0)
DEFAULT_FOOD: Position = (-4, 4, 4)


@dataclass(frozen=True)
class BoardConfig:
    """Cube geometry and movement cadence."""
    half_extent: float = 8.5       # Coordinates must stay inside (-H, H)
    tick_interval_ms: float = 500  # Minimum gap between movement ticks
    growth_increment: int = 3      # Segments added per food eaten
    capture_radius: float = 2      # Per-axis food reach (strict less-than)

    @classmethod
    def from_side_length(cls, side_length: float, **kwargs: Any) -> "BoardConfig":
        """Build a board whose half-extent is half the given cube side."""
        return cls(half_extent=side_length / 2, **kwargs)

    @property
    def food_range(self) -> Tuple[int, int]:
        """Inclusive integer range used for food placement on each axis."""
        return (math.ceil(-self.half_extent), math.ceil(self.half_extent) - 1)

    def contains(self, position: Sequence[int]) -> bool:
        """True if every coordinate lies strictly inside the cube."""
        return all(abs(c) < self.half_extent for c in position)


@dataclass(frozen=True)
class StartConfig:
    """Layout installed at session start and on every reset."""
    segments: Tuple[Position, ...] = DEFAULT_SEGMENTS
    direction: Position = DEFAULT_DIRECTION
    food: Position = DEFAULT_FOOD


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable so a session can share one instance for its
    whole lifetime.
    """
    board: BoardConfig = field(default_factory=BoardConfig)
    start: StartConfig = field(default_factory=StartConfig)


def _parse_position(data: Sequence, what: str) -> Position:
    """Parse an [x, y, z] integer triple from YAML."""
    if not isinstance(data, (list, tuple)) or len(data) != 3:
        raise ValueError(f"{what} must have 3 values [x, y, z], got {data}")
    return (int(data[0]), int(data[1]), int(data[2]))


def is_unit_direction(direction: Sequence[int]) -> bool:
    """True for a vector with exactly one non-zero component of magnitude 1."""
    return sorted(abs(c) for c in direction) == [0, 0, 1]


def validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    board = config.board
    start = config.start

    if board.half_extent <= 0:
        raise ValueError(f"half_extent must be positive, got {board.half_extent}")

    if board.tick_interval_ms <= 0:
        raise ValueError(f"tick_interval_ms must be positive, got {board.tick_interval_ms}")

    if board.growth_increment < 0:
        raise ValueError(f"growth_increment must not be negative, got {board.growth_increment}")

    if board.capture_radius <= 0:
        raise ValueError(f"capture_radius must be positive, got {board.capture_radius}")

    if not start.segments:
        raise ValueError("start.segments must contain at least one segment")

    if not is_unit_direction(start.direction):
        raise ValueError(
            f"start.direction must have exactly one component equal to +/-1, "
            f"got {start.direction}"
        )

    if not board.contains(start.segments[0]):
        raise ValueError(
            f"Start head {start.segments[0]} lies outside the cube "
            f"(half_extent={board.half_extent})"
        )


def parse_config(raw: Optional[Dict[str, Any]]) -> GameConfig:
    """
    Build a validated GameConfig from a parsed YAML mapping.

    Missing sections or keys fall back to the dataclass defaults.
    """
    raw = raw or {}
    defaults = BoardConfig()

    board_data = raw.get("board") or {}
    if "half_extent" in board_data:
        half_extent = float(board_data["half_extent"])
    elif "side_length" in board_data:
        half_extent = float(board_data["side_length"]) / 2
    else:
        half_extent = defaults.half_extent

    board = BoardConfig(
        half_extent=half_extent,
        tick_interval_ms=float(board_data.get("tick_interval_ms", defaults.tick_interval_ms)),
        growth_increment=int(board_data.get("growth_increment", defaults.growth_increment)),
        capture_radius=float(board_data.get("capture_radius", defaults.capture_radius))
    )

    start_data = raw.get("start") or {}
    raw_segments = start_data.get("segments", DEFAULT_SEGMENTS)
    if not isinstance(raw_segments, (list, tuple)):
        raise ValueError(f"start.segments must be a list of [x, y, z] entries, got {raw_segments}")
    segments = tuple(_parse_position(s, "start.segments entry") for s in raw_segments)
    start = StartConfig(
        segments=segments,
        direction=_parse_position(start_data.get("direction", DEFAULT_DIRECTION), "start.direction"),
        food=_parse_position(start_data.get("food", DEFAULT_FOOD), "start.food")
    )

    config = GameConfig(board=board, start=start)
    validate_config(config)
    return config


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    return parse_config(raw)


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
