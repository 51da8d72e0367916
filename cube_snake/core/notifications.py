"""
Game-Over Notifications
=======================

Deferred delivery of game-over events to notification collaborators.

A tick that ends the game only posts an event. Delivery happens on the next
dispatch(), which the host runs once the frame is done (and which the
session also runs before its next tick), so listeners never run inside the
tick that detected the collision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List

from cube_snake.core.config_loader import Position
from cube_snake.core.rules import Cause

logger = logging.getLogger(__name__)

MESSAGES = {
    Cause.BOUNDARY: "Game Over! Snake hit the cube boundary.",
    Cause.SELF: "Game Over! Snake collided with itself.",
}


@dataclass(frozen=True)
class GameOverEvent:
    """What a notification collaborator receives on game over."""
    cause: Cause
    head: Position     # Head position that triggered the collision
    tick: int          # Committed ticks before the fatal one
    length: int

    @property
    def message(self) -> str:
        return MESSAGES[self.cause]


ResetTrigger = Callable[[], object]
Listener = Callable[[GameOverEvent, ResetTrigger], None]


class NotificationQueue:
    """FIFO of pending game-over events and the listeners that receive them."""

    def __init__(self, reset_trigger: ResetTrigger):
        """
        Args:
            reset_trigger: Callable handed to every listener so it can start
                a new game after the user acknowledges the event.
        """
        self._reset_trigger = reset_trigger
        self._listeners: List[Listener] = []
        self._pending: List[GameOverEvent] = []

    @property
    def pending(self) -> int:
        """Number of events waiting for dispatch."""
        return len(self._pending)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def post(self, event: GameOverEvent) -> None:
        """Queue an event for the next dispatch."""
        self._pending.append(event)

    def clear(self) -> None:
        self._pending.clear()

    def dispatch(self) -> int:
        """
        Deliver all events queued before this call.

        Events posted by listeners during dispatch wait for the next call.

        Returns:
            Number of events delivered.
        """
        batch, self._pending = self._pending, []
        for event in batch:
            for listener in list(self._listeners):
                try:
                    listener(event, self._reset_trigger)
                except Exception:
                    logger.warning("Game-over listener %r failed", listener, exc_info=True)
        return len(batch)
