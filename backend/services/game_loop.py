"""
Timer that drives a SnakeGame in real time.

A fixed-rate timer cannot change its own period, so every tick arms a fresh
one-shot timer using the game's current speed. All ticks, direction changes
and control actions run under one lock, so a tick never interleaves with
another event. Pause and reset cancel the pending timer and bump a
generation counter; a timer that fired before the cancel but had not yet
taken the lock sees the stale generation and does nothing.
"""

import logging
import threading
from typing import Callable, Optional

from domain.game_state import GameState

logger = logging.getLogger(__name__)


class GameLoop:
    """Schedules SnakeGame.tick() at the game's current speed."""

    def __init__(
        self,
        game,
        on_tick: Optional[Callable[[GameState], None]] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer
    ):
        self.game = game
        self.on_tick = on_tick
        self.timer_factory = timer_factory
        self._lock = threading.RLock()
        self._timer = None
        self._generation = 0

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def start(self) -> GameState:
        with self._lock:
            if self.game.start() and not self.is_running:
                self._schedule()
            return self.game.get_current_state()

    def pause(self) -> GameState:
        with self._lock:
            self._cancel()
            self.game.pause()
            return self.game.get_current_state()

    def toggle(self) -> GameState:
        with self._lock:
            if self.game.is_playing:
                return self.pause()
            return self.start()

    def reset(self) -> GameState:
        """Stop ticking before the state is rebuilt."""
        with self._lock:
            self._cancel()
            self.game.reset()
            logger.info("Game reset")
            return self.game.get_current_state()

    def change_direction(self, direction: str) -> bool:
        with self._lock:
            return self.game.change_direction(direction)

    def snapshot(self) -> GameState:
        with self._lock:
            return self.game.get_current_state()

    def stop(self):
        """Cancel any pending tick without touching the game."""
        with self._lock:
            self._cancel()

    def _schedule(self):
        interval = self.game.speed / 1000.0
        timer = self.timer_factory(interval, self._fire, args=(self._generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel(self):
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int):
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            if not self.game.is_playing:
                return

            self.game.tick()
            state = self.game.get_current_state()

            if self.on_tick is not None:
                try:
                    self.on_tick(state)
                except Exception as e:
                    logger.error(f"on_tick callback failed: {e}")

            if self.game.is_playing:
                self._schedule()
