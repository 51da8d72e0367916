"""
Cube Snake Core - the deterministic game engine.

Main exports:
- GameSession: One game session with the Running / GameOver state machine
- GameConfig: Configuration loaded from game_config.yaml
- GameSnapshot: Immutable per-frame view for render collaborators
- ReplayRecorder: Record sessions for exact re-simulation
"""

from cube_snake.core.config_loader import BoardConfig, GameConfig, StartConfig, load_config
from cube_snake.core.direction import DirectionController
from cube_snake.core.food import FoodSpawner
from cube_snake.core.game import GameSession, SessionStartError, TickResult
from cube_snake.core.input_map import KEY_BINDINGS, resolve_key
from cube_snake.core.notifications import GameOverEvent, NotificationQueue
from cube_snake.core.rules import Cause, CollisionDetector, CollisionResult
from cube_snake.core.snake_state import SnakeState
from cube_snake.core.state_snapshot import GameSnapshot, GameState
from cube_snake.core.replay_recorder import (
    ReplayRecorder,
    generate_replay_filename,
    load_replay,
    play_back,
)

__all__ = [
    "BoardConfig",
    "GameConfig",
    "StartConfig",
    "load_config",
    "DirectionController",
    "FoodSpawner",
    "GameSession",
    "SessionStartError",
    "TickResult",
    "KEY_BINDINGS",
    "resolve_key",
    "GameOverEvent",
    "NotificationQueue",
    "Cause",
    "CollisionDetector",
    "CollisionResult",
    "SnakeState",
    "GameSnapshot",
    "GameState",
    "ReplayRecorder",
    "generate_replay_filename",
    "load_replay",
    "play_back",
]
