"""
Replay Viewer
=============

Re-simulate a recorded replay and print it in the terminal.

Usage:
    python tools/replay_viewer.py replay.json
    python -m tools.replay_viewer replay.json --frames --game 0

Each frame shows the front (X/Y) projection of the cube:
    H = head, o = body, * = food, . = empty
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import numpy as np

# Add project root to path for direct script execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from cube_snake.core.config_loader import load_config
from cube_snake.core.game import TickResult
from cube_snake.core.replay_recorder import load_replay, play_back
from cube_snake.core.state_snapshot import GameSnapshot, occupancy_grid

GLYPHS = {0: ".", 1: "o", 2: "H", 3: "*"}


def render_front(snapshot: GameSnapshot) -> str:
    """Project the cube along Z; y grows upwards."""
    grid = occupancy_grid(snapshot)
    # Highest cell value wins along the projected axis: food > head > body
    front = grid.max(axis=2)
    rows: List[str] = []
    for y in range(front.shape[1] - 1, -1, -1):
        rows.append(" ".join(GLYPHS[int(v)] for v in front[:, y]))
    return "\n".join(rows)


def main():
    parser = argparse.ArgumentParser(description="View a Cube Snake replay")
    parser.add_argument("replay", type=str, help="Replay JSON file")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--frames", action="store_true", help="Print every tick")
    parser.add_argument("--game", type=int, default=None, help="Only show this game index")

    args = parser.parse_args()
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        replay = load_replay(args.replay)
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    def on_tick(index: int, result: TickResult) -> None:
        if not args.frames or (args.game is not None and index != args.game):
            return
        snap = result.snapshot
        print(f"--- game {index} tick {snap.tick} length {snap.length} head {snap.head} ---")
        print(render_front(snap))
        if result.cause is not None:
            print(f"GAME OVER: {result.cause.value}")
        print()

    try:
        finals = play_back(replay, config, on_tick=on_tick)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    print(f"Replay by {replay.get('agent_name', 'unknown')} (seed {replay.get('seed')})")
    print(f"{'Game':>4} {'Ticks':>6} {'Length':>7} {'Cause':>10}")
    for index, snap in enumerate(finals):
        if args.game is not None and index != args.game:
            continue
        cause = snap.cause.value if snap.cause is not None else "-"
        print(f"{index:>4} {snap.tick:>6} {snap.length:>7} {cause:>10}")

    lengths = np.array([s.length for s in finals])
    if lengths.size:
        print(f"\nMean final length: {lengths.mean():.1f}  Best: {lengths.max()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
