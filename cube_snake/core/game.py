"""
Core Game
=========

Game session orchestrating direction, movement, collisions, food and the
Running / GameOver state machine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from cube_snake.core.config_loader import GameConfig, Position, get_config
from cube_snake.core.direction import DirectionController
from cube_snake.core.food import FoodSpawner
from cube_snake.core.input_map import resolve_key
from cube_snake.core.notifications import GameOverEvent, Listener, NotificationQueue
from cube_snake.core.rules import Cause, CollisionDetector
from cube_snake.core.snake_state import SnakeState
from cube_snake.core.state_snapshot import GameSnapshot, GameState

logger = logging.getLogger(__name__)

RenderCallback = Callable[[GameSnapshot], None]


class SessionStartError(RuntimeError):
    """Raised when a session is started without a render collaborator."""


@dataclass
class TickResult:
    """Result of a single tick() call."""
    snapshot: GameSnapshot
    advanced: bool             # False when gated by the interval or already over
    state: GameState
    cause: Optional[Cause]
    ate: bool
    grew_by: int


class GameSession:
    """
    One player's game, persisting across resets.

    Orchestrates:
    - DirectionController (input)
    - SnakeState (movement and growth)
    - CollisionDetector (boundary and self hits)
    - FoodSpawner (capture and relocation)
    - NotificationQueue (deferred game-over delivery)

    The host calls tick() as often as it likes (typically once per rendered
    frame); the snake moves only when tick_interval_ms has passed since the
    last movement.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        render_callback: Optional[RenderCallback] = None
    ):
        """
        Initialize session in the Running state.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for food placement.
            render_callback: Render collaborator receiving one snapshot per frame().
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._render_callback = render_callback
        self._started = False

        board = config.board
        self._detector = CollisionDetector(board)
        self._controller = DirectionController(config.start.direction)
        self._food = FoodSpawner(board, seed=seed, initial=config.start.food)
        self._snake = SnakeState(config.start.segments)
        self._notifications = NotificationQueue(reset_trigger=self.reset)

        self._state = GameState.RUNNING
        self._cause: Optional[Cause] = None
        self._last_tick_ms: float = 0.0
        self._ticks: int = 0
        self._food_eaten: int = 0
        self._games_played: int = 0
        self._resets: int = 0

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def cause(self) -> Optional[Cause]:
        """Cause of the last game over, None while running."""
        return self._cause

    @property
    def is_over(self) -> bool:
        return self._state is GameState.GAME_OVER

    @property
    def snake(self) -> SnakeState:
        return self._snake

    @property
    def food(self) -> FoodSpawner:
        return self._food

    @property
    def direction(self) -> Position:
        return self._controller.direction

    @property
    def controller(self) -> DirectionController:
        return self._controller

    @property
    def ticks(self) -> int:
        """Committed ticks in the current game."""
        return self._ticks

    @property
    def food_eaten(self) -> int:
        return self._food_eaten

    @property
    def games_played(self) -> int:
        """Games that have ended since the session was created."""
        return self._games_played

    @property
    def resets(self) -> int:
        """Number of times reset() has run, including resets from listeners."""
        return self._resets

    @property
    def last_tick_ms(self) -> float:
        return self._last_tick_ms

    @property
    def started(self) -> bool:
        return self._started

    def attach_renderer(self, render_callback: RenderCallback) -> None:
        self._render_callback = render_callback

    def start(self) -> GameSnapshot:
        """
        Mark the session as started.

        Raises:
            SessionStartError: If no callable render collaborator is attached.
        """
        if not callable(self._render_callback):
            raise SessionStartError("Cannot start a game session without a render collaborator")
        self._started = True
        snapshot = self.snapshot()
        self._render_callback(snapshot)
        return snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a game-over listener; returns an unsubscribe callable."""
        return self._notifications.subscribe(listener)

    def dispatch_notifications(self) -> int:
        """Deliver pending game-over events. Returns how many were delivered."""
        return self._notifications.dispatch()

    def set_direction(self, axis: str, sign: int) -> bool:
        """Request a direction change (see DirectionController)."""
        return self._controller.set_direction(axis, sign)

    def handle_key(self, key: str) -> bool:
        """
        Route a key identifier from the input collaborator.

        Returns:
            True if the key changed the direction. Unbound keys are ignored.
        """
        binding = resolve_key(key)
        if binding is None:
            return False
        axis, sign = binding
        return self._controller.set_direction(axis, sign)

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Start a new game in the Running state.

        Snake, direction and food are replaced with the configured start
        layout and the game-over cause is cleared. The session keeps its
        last tick timestamp and lifetime counters.

        Args:
            seed: New random seed for food placement. Keeps current stream if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._seed = seed

        start = self._config.start
        self._snake = SnakeState(start.segments)
        self._controller.reset()
        self._food.reset(seed=seed)

        if self._notifications.pending:
            logger.debug("Dropping %d undelivered game-over event(s)", self._notifications.pending)
        self._notifications.clear()

        self._state = GameState.RUNNING
        self._cause = None
        self._ticks = 0
        self._food_eaten = 0
        self._resets += 1

        logger.info("Game reset (games played: %d)", self._games_played)
        return self.snapshot()

    def tick(self, timestamp_ms: float) -> TickResult:
        """
        Advance the game if the tick interval has elapsed.

        Pending notifications from an earlier tick are delivered first.

        Args:
            timestamp_ms: Host clock in milliseconds.

        Returns:
            TickResult with the new state. advanced is False when nothing moved.
        """
        self._notifications.dispatch()

        if self.is_over:
            return self._result(advanced=False)

        if timestamp_ms - self._last_tick_ms < self._config.board.tick_interval_ms:
            return self._result(advanced=False)

        self._last_tick_ms = timestamp_ms

        candidate = self._snake.advance(self._controller.direction)
        collision = self._detector.check(candidate)
        if collision.collided:
            self._game_over(collision.cause, candidate[0])
            return self._result(advanced=True)

        self._snake.commit(candidate)
        self._ticks += 1

        grew_by = 0
        if self._food.in_reach(self._snake.head):
            grew_by = self._config.board.growth_increment
            self._snake.grow(grew_by)
            self._food.relocate()
            self._food_eaten += 1
            logger.debug(
                "Food eaten at %s, length now %d", self._snake.head, len(self._snake)
            )

        return self._result(advanced=True, ate=grew_by > 0, grew_by=grew_by)

    def frame(self, timestamp_ms: float) -> TickResult:
        """
        Run one host frame: tick, render, then deliver notifications.

        Raises:
            SessionStartError: If the session was never started.
        """
        if not self._started:
            raise SessionStartError("Call start() before driving frames")
        result = self.tick(timestamp_ms)
        self._render_callback(result.snapshot)
        self._notifications.dispatch()
        return result

    def snapshot(self) -> GameSnapshot:
        """Build an immutable snapshot of the current game."""
        return GameSnapshot(
            segments=self._snake.segments,
            food=self._food.position,
            state=self._state,
            cause=self._cause,
            direction=self._controller.direction,
            tick=self._ticks,
            half_extent=self._config.board.half_extent
        )

    def _game_over(self, cause: Cause, head) -> None:
        self._state = GameState.GAME_OVER
        self._cause = cause
        self._games_played += 1
        event = GameOverEvent(
            cause=cause,
            head=head,
            tick=self._ticks,
            length=len(self._snake)
        )
        self._notifications.post(event)
        logger.info("Game over (%s) at %s after %d ticks", cause.value, head, self._ticks)

    def _result(self, advanced: bool, ate: bool = False, grew_by: int = 0) -> TickResult:
        return TickResult(
            snapshot=self.snapshot(),
            advanced=advanced,
            state=self._state,
            cause=self._cause,
            ate=ate,
            grew_by=grew_by
        )
