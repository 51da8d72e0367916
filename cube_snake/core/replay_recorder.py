"""
Replay Recorder
===============

Records a session's direction requests so a game can be re-simulated exactly.

Usage:
    from cube_snake.core import GameSession, ReplayRecorder

    session = GameSession(seed=42)
    recorder = ReplayRecorder(session, agent_name="me")

    recorder.handle_key("w")
    recorder.tick(500)
    ...
    recorder.save("my_replay.json")

The saved replay can be viewed with:
    python tools/replay_viewer.py my_replay.json
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from cube_snake.core.config_loader import GameConfig
from cube_snake.core.game import GameSession, TickResult
from cube_snake.core.input_map import resolve_key
from cube_snake.core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

REPLAY_VERSION = 2


def generate_replay_filename(
    agent_name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {agent_name}_{YYYYMMDD_HHMMSS}_{seed}.json

    Example:
        >>> generate_replay_filename("me", seed=42)
        Path('me_20260119_143052_s42.json')
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{agent_name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{agent_name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig) -> str:
    """Hash of every parameter that affects gameplay, for replay validation."""
    board = config.board
    start = config.start
    hash_data = {
        "board": {
            "half_extent": board.half_extent,
            "growth_increment": board.growth_increment,
            "capture_radius": board.capture_radius,
        },
        "start": {
            "segments": [list(s) for s in start.segments],
            "direction": list(start.direction),
            "food": list(start.food),
        },
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records session input for replay.

    Every direction request is stored with the number of moving ticks the
    current game had made when it arrived, so playback can issue the same
    requests before the same tick. Rejected requests are kept too; the
    controller rejects them again on playback. Food placement is reproduced
    from the seed.

    A new game entry is opened for every session reset, including resets
    triggered by game-over listeners.
    """

    def __init__(self, session: GameSession, agent_name: str = "unknown"):
        self.session = session
        self.agent_name = agent_name
        self._seed: Optional[int] = session.seed
        self._games: List[Dict[str, Any]] = [self._new_game()]
        self._resets_seen = session.resets
        self._config_hash = compute_config_hash(session.config)
        if self._seed is None:
            logger.warning("Recording an unseeded session; food placement will not replay exactly")

    @staticmethod
    def _new_game() -> Dict[str, Any]:
        return {"requests": [], "ticks": 0, "cause": None, "length": None, "food_eaten": 0}

    @property
    def games(self) -> List[Dict[str, Any]]:
        return self._games

    def _sync_games(self) -> Dict[str, Any]:
        """Open a game entry for each reset since the last call; return the current one."""
        while self._resets_seen < self.session.resets:
            self._resets_seen += 1
            self._games.append(self._new_game())
        return self._games[-1]

    def set_direction(self, axis: str, sign: int) -> bool:
        accepted = self.session.set_direction(axis, sign)
        game = self._sync_games()
        game["requests"].append([game["ticks"], axis, sign])
        return accepted

    def handle_key(self, key: str) -> bool:
        binding = resolve_key(key)
        if binding is None:
            return False
        return self.set_direction(*binding)

    def tick(self, timestamp_ms: float) -> TickResult:
        """Tick the session and record the outcome if it moved."""
        # Listeners may reset the session while pending events are delivered
        self.session.dispatch_notifications()
        game = self._sync_games()
        result = self.session.tick(timestamp_ms)
        if result.advanced:
            game["ticks"] += 1
            game["food_eaten"] = self.session.food_eaten
            game["length"] = result.snapshot.length
            if result.cause is not None:
                game["cause"] = result.cause.value
        return result

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """Reset the session and open a new game entry."""
        if seed is not None:
            # A reseeded stream cannot be reproduced from the original seed.
            raise ValueError("Reseeding is not supported while recording")
        snapshot = self.session.reset()
        self._sync_games()
        return snapshot

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": REPLAY_VERSION,
            "agent_name": self.agent_name,
            "seed": self._seed,
            "config_hash": self._config_hash,
            "created": datetime.now().isoformat(timespec="seconds"),
            "games": self._games,
        }

    def save(self, path: Union[str, Path]) -> Path:
        """Write the replay as JSON."""
        path = Path(path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Saved replay with %d game(s) to %s", len(self._games), path)
        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a replay file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file is not a supported replay.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")
    with open(path, "r") as f:
        replay = json.load(f)
    if replay.get("version") != REPLAY_VERSION:
        raise ValueError(f"Unsupported replay version: {replay.get('version')}")
    return replay


def play_back(
    replay: Dict[str, Any],
    config: GameConfig,
    on_tick: Optional[Callable[[int, TickResult], None]] = None
) -> List[GameSnapshot]:
    """
    Re-simulate every game in a replay.

    Before moving tick i of a game, every request recorded at tick index i
    is sent through set_direction in its original order. Requests recorded
    after the last moving tick had no effect and are skipped.

    Args:
        replay: Replay dictionary (see load_replay).
        config: Configuration the replay was recorded with.
        on_tick: Optional callback receiving (game_index, TickResult).

    Returns:
        Final snapshot of each game.

    Raises:
        ValueError: If the config hash does not match the recording.
    """
    expected = replay.get("config_hash")
    if expected and expected != compute_config_hash(config):
        raise ValueError(
            f"Replay was recorded with config {expected}, "
            f"current config is {compute_config_hash(config)}"
        )

    session = GameSession(config=config, seed=replay.get("seed"))
    interval = config.board.tick_interval_ms
    clock = 0.0
    finals: List[GameSnapshot] = []

    for index, game in enumerate(replay["games"]):
        if index > 0:
            session.reset()
        requests = game["requests"]
        pending = 0
        for tick_index in range(game["ticks"]):
            while pending < len(requests) and requests[pending][0] <= tick_index:
                _, axis, sign = requests[pending]
                session.set_direction(axis, sign)
                pending += 1
            clock += interval
            result = session.tick(clock)
            if on_tick is not None:
                on_tick(index, result)
        finals.append(session.snapshot())

    return finals
