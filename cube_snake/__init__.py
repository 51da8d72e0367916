"""
Cube Snake Package
==================

Deterministic engine for a snake that moves through a 3D cube.

The core package owns all game rules:

- Direction handling and reversal protection
- Per-tick movement and growth
- Boundary and self-collision detection
- Food capture and relocation
- The Running / GameOver session state machine

Rendering, keyboard capture and user-facing dialogs live in host programs
(see tools/) that talk to the core through snapshots, key identifiers and
game-over notifications. Default tunables are in game_config.yaml.
"""
