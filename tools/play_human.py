"""
Human Play Mode
===============

Play Cube Snake interactively. The cube is drawn as three orthographic
projections (front X/Y, top X/Z, side Z/Y) so every axis is visible.

Controls:
    - W / Up:     +Y
    - S / Down:   -Y
    - A / Left:   -X
    - D / Right:  +X
    - Q:          +Z
    - E:          -Z
    - Enter / R:  Acknowledge game over and restart
    - ESC:        Quit

Usage:
    python -m tools.play_human [--seed SEED] [--cell CELL] [--fps FPS]
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Callable, Optional, Tuple

# Add project root to path for direct script execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from cube_snake.core.config_loader import GameConfig, load_config
from cube_snake.core.game import GameSession
from cube_snake.core.notifications import GameOverEvent
from cube_snake.core.state_snapshot import GameSnapshot

# (horizontal axis, vertical axis, title) for each panel
VIEWS = (
    (0, 1, "Front (X / Y)"),
    (0, 2, "Top (X / Z)"),
    (2, 1, "Side (Z / Y)"),
)

PANEL_GAP = 24
HEADER_HEIGHT = 48
FOOTER_HEIGHT = 36


def _key_identifier(key: int) -> Optional[str]:
    """Translate a pygame key code into the identifiers the core understands."""
    arrows = {
        pygame.K_UP: "ArrowUp",
        pygame.K_DOWN: "ArrowDown",
        pygame.K_LEFT: "ArrowLeft",
        pygame.K_RIGHT: "ArrowRight",
    }
    if key in arrows:
        return arrows[key]
    name = pygame.key.name(key)
    return name if len(name) == 1 else None


class CubeRenderer:
    """Draws snapshots as three side-by-side projections."""

    def __init__(self, config: GameConfig, cell: int):
        self._half_extent = config.board.half_extent
        self._cell = cell
        # Integer cells with |c| < H
        self._low = -math.ceil(self._half_extent) + 1
        self._cells = -2 * self._low + 1
        self._panel = self._cells * cell

        self._bg = (0, 0, 0)
        self._frame = (90, 90, 90)
        self._body = (0, 200, 0)
        self._head = (120, 255, 120)
        self._food = (255, 40, 40)
        self._text = (220, 220, 220)
        self._highlight = (40, 80, 255)

        pygame.font.init()
        self._font = pygame.font.Font(None, 26)
        self._font_large = pygame.font.Font(None, 44)

    @property
    def window_size(self) -> Tuple[int, int]:
        width = 3 * self._panel + 4 * PANEL_GAP
        height = self._panel + HEADER_HEIGHT + FOOTER_HEIGHT + PANEL_GAP
        return width, height

    def _cell_rect(self, origin: Tuple[int, int], u: int, v: int) -> pygame.Rect:
        ox, oy = origin
        col = u - self._low
        row = (self._cells - 1) - (v - self._low)
        return pygame.Rect(ox + col * self._cell, oy + row * self._cell, self._cell, self._cell)

    def render(
        self,
        screen: "pygame.Surface",
        snapshot: GameSnapshot,
        message: Optional[str] = None
    ) -> None:
        screen.fill(self._bg)

        header = self._font.render(
            f"Length {snapshot.length}   Ticks {snapshot.tick}   Heading {snapshot.direction}",
            True, self._text
        )
        screen.blit(header, (PANEL_GAP, 14))

        for index, (h_axis, v_axis, title) in enumerate(VIEWS):
            origin = (PANEL_GAP + index * (self._panel + PANEL_GAP), HEADER_HEIGHT)
            border = self._highlight if index == 0 else self._frame
            pygame.draw.rect(screen, border, (*origin, self._panel, self._panel), 1)

            # Tail first so the head stays on top when projections overlap
            for segment in reversed(snapshot.segments[1:]):
                rect = self._cell_rect(origin, segment[h_axis], segment[v_axis])
                pygame.draw.rect(screen, self._body, rect.inflate(-2, -2))
            head = snapshot.head
            pygame.draw.rect(screen, self._head, self._cell_rect(origin, head[h_axis], head[v_axis]))

            food = snapshot.food
            food_rect = self._cell_rect(origin, food[h_axis], food[v_axis])
            pygame.draw.circle(screen, self._food, food_rect.center, self._cell // 2)

            label = self._font.render(title, True, self._text)
            screen.blit(label, (origin[0], origin[1] + self._panel + 6))

        if message:
            overlay = self._font_large.render(message, True, self._text)
            hint = self._font.render("Press Enter to play again", True, self._text)
            width, height = self.window_size
            screen.blit(overlay, overlay.get_rect(center=(width // 2, height // 2 - 16)))
            screen.blit(hint, hint.get_rect(center=(width // 2, height // 2 + 20)))


class HumanPlayer:
    """Pygame host: drives the session once per frame and shows dialogs."""

    def __init__(
        self,
        config: GameConfig,
        seed: Optional[int] = None,
        cell: int = 16,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for human play mode (pip install pygame)")

        pygame.init()
        self._renderer = CubeRenderer(config, cell)
        self._screen = pygame.display.set_mode(self._renderer.window_size)
        pygame.display.set_caption("Cube Snake")
        self._clock = pygame.time.Clock()
        self._target_fps = target_fps
        self._running = True

        self._latest: Optional[GameSnapshot] = None
        self._dialog: Optional[str] = None
        self._acknowledge: Optional[Callable[[], object]] = None

        self._session = GameSession(config=config, seed=seed, render_callback=self._on_snapshot)
        self._session.subscribe(self._on_game_over)

    def _on_snapshot(self, snapshot: GameSnapshot) -> None:
        self._latest = snapshot

    def _on_game_over(self, event: GameOverEvent, reset: Callable[[], object]) -> None:
        print(f"\n{event.message} (length {event.length}, {event.tick} ticks)")
        self._dialog = event.message
        self._acknowledge = reset

    def run(self) -> int:
        """Run the game loop. Returns the number of games played."""
        print("=== Cube Snake ===")
        print("WASD / arrows move in X and Y, Q / E move in Z")
        print("ESC to quit")
        print()

        self._session.start()
        while self._running:
            self._handle_events()
            if self._dialog is None:
                self._session.frame(pygame.time.get_ticks())
            self._renderer.render(self._screen, self._latest, self._dialog)
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        pygame.quit()
        return self._session.games_played

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif self._dialog is not None:
                    if event.key in (pygame.K_RETURN, pygame.K_r):
                        self._restart()
                else:
                    identifier = _key_identifier(event.key)
                    if identifier is not None:
                        self._session.handle_key(identifier)

    def _restart(self) -> None:
        """Acknowledge the game-over dialog and start a new game."""
        if self._acknowledge is not None:
            self._latest = self._acknowledge()
        self._dialog = None
        self._acknowledge = None
        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play Cube Snake interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--cell", type=int, default=16, help="Cell size in pixels (default: 16)")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            cell=args.cell,
            target_fps=args.fps
        )
        games = player.run()
        print(f"\nGames played: {games}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
