"""
Tests for replay recording and deterministic playback.
"""

import json

import pytest

from cube_snake.core.config_loader import GameConfig, StartConfig
from cube_snake.core.game import GameSession
from cube_snake.core.replay_recorder import (
    ReplayRecorder,
    compute_config_hash,
    generate_replay_filename,
    load_replay,
    play_back,
)


@pytest.fixture
def config():
    # Food one step ahead so the recording includes a growth and a relocation
    return GameConfig(start=StartConfig(food=(2, 1, 1)))


def _record(config, seed=7):
    session = GameSession(config=config, seed=seed)
    recorder = ReplayRecorder(session, agent_name="tester")
    clock = 0
    keys = {3: "w", 6: "q", 9: "a"}
    for step in range(40):
        if step in keys:
            recorder.handle_key(keys[step])
        clock += 500
        recorder.tick(clock)
        if session.is_over:
            break
    return session, recorder


class TestReplayRecorder:
    """Test recording and playback."""

    def test_records_requests_and_outcome(self, config):
        session, recorder = _record(config)
        game = recorder.games[0]

        assert session.is_over
        assert game["cause"] == session.cause.value
        assert game["food_eaten"] >= 1
        # The fatal move counts as a moving tick but is never committed
        assert game["ticks"] == session.ticks + 1
        assert game["requests"] == [[3, "y", 1], [6, "z", 1], [9, "x", -1]]

    def test_unbound_keys_not_recorded(self, config):
        recorder = ReplayRecorder(GameSession(config=config, seed=1))
        assert recorder.handle_key("Escape") is False
        assert recorder.games[0]["requests"] == []

    def test_rejected_request_recorded(self, config):
        recorder = ReplayRecorder(GameSession(config=config, seed=1))
        assert recorder.set_direction("x", -1) is False
        assert recorder.games[0]["requests"] == [[0, "x", -1]]

    def test_save_and_load(self, config, tmp_path):
        _, recorder = _record(config)
        path = recorder.save(tmp_path / "replays" / "game.json")

        replay = load_replay(path)
        assert replay["agent_name"] == "tester"
        assert replay["seed"] == 7
        assert replay["config_hash"] == compute_config_hash(config)

    def test_playback_reproduces_game(self, config, tmp_path):
        session, recorder = _record(config)
        path = recorder.save(tmp_path / "game.json")

        finals = play_back(load_replay(path), config)

        assert len(finals) == 1
        assert finals[0] == session.snapshot()

    def test_multiple_games(self, config):
        session = GameSession(config=config, seed=3)
        recorder = ReplayRecorder(session)
        clock = 0
        for _ in range(2):
            while not session.is_over:
                clock += 500
                recorder.tick(clock)
            expected = session.snapshot()
            recorder.reset()

        finals = play_back(recorder.to_dict(), config)
        assert len(finals) == 3
        assert finals[1] == expected
        assert finals[2].tick == 0

    def test_config_mismatch(self, config):
        _, recorder = _record(config)
        with pytest.raises(ValueError):
            play_back(recorder.to_dict(), GameConfig())

    def test_reseed_rejected(self, config):
        recorder = ReplayRecorder(GameSession(config=config, seed=1))
        with pytest.raises(ValueError):
            recorder.reset(seed=2)

    def test_load_errors(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_replay(tmp_path / "missing.json")

        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"version": 99}))
        with pytest.raises(ValueError):
            load_replay(bad)

    def test_filename(self, tmp_path):
        path = generate_replay_filename("bot", seed=42, directory=tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("bot_")
        assert path.name.endswith("_s42.json")
        assert generate_replay_filename().suffix == ".json"


class TestPlaybackFidelity:
    """Games whose outcome depends on request timing replay exactly."""

    def test_double_turn_within_one_interval(self, config):
        """Two turns before one tick point the head back into the body."""
        session = GameSession(config=config, seed=7)
        recorder = ReplayRecorder(session)
        recorder.set_direction("y", 1)
        recorder.set_direction("x", -1)
        recorder.tick(500)
        assert session.cause.value == "self"

        finals = play_back(recorder.to_dict(), config)

        assert finals[0] == session.snapshot()
        assert finals[0].cause.value == "self"

    def test_turns_between_gated_calls(self, config):
        """Requests made during gated frames apply to the next moving tick."""
        session = GameSession(config=config, seed=7)
        recorder = ReplayRecorder(session)
        clock = 0
        turns = {40: "w", 55: "d", 70: "q"}
        for frame in range(1, 200):
            if frame in turns:
                recorder.handle_key(turns[frame])
            clock += 16
            recorder.tick(clock)

        finals = play_back(recorder.to_dict(), config)
        assert finals[0] == session.snapshot()

    def test_listener_reset_opens_new_game(self):
        """A reset triggered from a game-over listener starts a new entry."""
        config = GameConfig(start=StartConfig(segments=((8, 0, 0), (7, 0, 0), (6, 0, 0))))
        session = GameSession(config=config, seed=5)
        recorder = ReplayRecorder(session)
        session.subscribe(lambda event, reset: reset())

        recorder.tick(500)
        recorder.tick(1000)

        assert len(recorder.games) == 2
        assert recorder.games[0]["cause"] == "boundary"
        assert recorder.games[0]["ticks"] == 1
        assert recorder.games[1]["cause"] == "boundary"
        assert recorder.games[1]["ticks"] == 1

        finals = play_back(recorder.to_dict(), config)
        assert len(finals) == 2
        assert finals[1] == session.snapshot()

    def test_requests_after_host_reset_go_to_new_game(self, config):
        """A host frame that delivers game over and resets moves later input to the next game."""
        session = GameSession(config=config, seed=5)
        recorder = ReplayRecorder(session)
        session.subscribe(lambda event, reset: reset())
        recorder.set_direction("y", 1)
        recorder.set_direction("x", -1)
        recorder.tick(500)

        session.dispatch_notifications()
        recorder.handle_key("w")
        recorder.tick(1000)
        recorder.tick(1500)

        assert len(recorder.games) == 2
        assert recorder.games[1]["requests"] == [[0, "y", 1]]
        assert recorder.games[1]["ticks"] == 2

        finals = play_back(recorder.to_dict(), config)
        assert finals[0].cause.value == "self"
        assert finals[1] == session.snapshot()
        assert finals[1].head == (0, 2, 0)
