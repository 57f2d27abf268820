"""Game session management."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from warsim.play.scheduler import TickScheduler
from warsim.simulation.deck import new_game
from warsim.simulation.driver import DEFAULT_MAX_TURNS, force_finish, run_to_end
from warsim.simulation.resolver import resolve
from warsim.simulation.state import (
    Card,
    FinishedState,
    GameState,
    GameStatus,
    IdleState,
    PlayerNames,
)

logger = logging.getLogger(__name__)


class Speed(Enum):
    """Auto-play cadence, in seconds between rounds."""

    SLOW = 1.5
    NORMAL = 0.8
    FAST = 0.2
    INSTANT = 0.005


@dataclass
class SessionConfig:
    """Configuration for a game session."""

    player_name: str = "Commander"
    opponent_name: str = "The General"
    speed: Speed = Speed.NORMAL
    max_turns: int = DEFAULT_MAX_TURNS
    seed: Optional[int] = None

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)

    @property
    def names(self) -> PlayerNames:
        return PlayerNames(player=self.player_name, opponent=self.opponent_name)


class GameSession:
    """Owns the current game state and drives it.

    All commands go through here; the state itself is never mutated, only
    replaced. A single lock guarantees at most one resolution in flight,
    whether it comes from the auto-play timer or from a manual command.
    """

    def __init__(
        self,
        config: SessionConfig,
        rng: Optional[random.Random] = None,
        on_change: Optional[Callable[[GameState], None]] = None,
    ):
        """Initialize session.

        Args:
            config: Session configuration
            rng: Randomness for shuffling (defaults to ``random.Random(config.seed)``)
            on_change: Called with each new state in order; a state superseded
                before delivery is skipped
        """
        self.config = config
        self.names = config.names
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.on_change = on_change

        self._lock = threading.Lock()
        self._publish_lock = threading.RLock()
        self._version = 0
        self._published = 0
        self._finished = threading.Event()
        self._scheduler = TickScheduler()
        self._state: GameState = IdleState()

    @property
    def state(self) -> GameState:
        return self._state

    def new_game(self, deck: Optional[Sequence[Card]] = None) -> GameState:
        """Replace the current game with a freshly dealt one (not started)."""
        self._scheduler.cancel()
        state = new_game(self.rng, deck=deck)
        logger.info(f"New game: {self.names.player} vs {self.names.opponent}")
        self._finished.clear()
        return self._set(lambda _: state)

    def start(self, deck: Optional[Sequence[Card]] = None) -> GameState:
        """Deal a new game and begin auto-play."""
        self.new_game(deck=deck)
        return self.resume()

    def step(self) -> GameState:
        """Resolve a single round.

        Stepping a game that has not been started leaves it paused, so
        ``playing`` always means the timer is driving it.
        """
        return self._set(
            lambda s: resolve(s.to_paused() if s.status is GameStatus.IDLE else s, self.names)
        )

    def run_to_end(self) -> GameState:
        """Cancel auto-play and resolve the rest of the game at once."""
        self._scheduler.cancel()
        return self._set(lambda s: run_to_end(s, self.names, self.config.max_turns))

    def pause(self) -> GameState:
        """Stop scheduling rounds. The round already applied stays applied."""
        self._scheduler.cancel()
        return self._set(lambda s: s.to_paused() if s.status is GameStatus.PLAYING else s)

    def resume(self) -> GameState:
        """Switch to playing and schedule rounds at the configured speed."""
        state = self._set(
            lambda s: s.to_playing() if s.status in (GameStatus.IDLE, GameStatus.PAUSED) else s
        )
        if state.status is GameStatus.PLAYING:
            self._scheduler.start(self.config.speed.value, self._tick)
        return state

    def toggle(self) -> GameState:
        if self._state.status is GameStatus.PLAYING:
            return self.pause()
        return self.resume()

    def set_speed(self, speed: Speed) -> None:
        self.config.speed = speed
        if self._state.status is GameStatus.PLAYING:
            self._scheduler.start(speed.value, self._tick)

    def stop(self) -> None:
        """Cancel auto-play without changing the state."""
        self._scheduler.cancel()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the game finishes. Returns False on timeout."""
        return self._finished.wait(timeout)

    def _tick(self) -> bool:
        state = self._set(self._advance)
        return state.status is GameStatus.PLAYING

    def _advance(self, state: GameState) -> GameState:
        """One auto-play round, ending the game once it reaches ``max_turns``."""
        if state.status is not GameStatus.PLAYING:
            return state
        if state.turn >= self.config.max_turns:
            return force_finish(state, self.config.max_turns)
        return resolve(state, self.names)

    def _set(self, transition: Callable[[GameState], GameState]) -> GameState:
        with self._lock:
            previous = self._state
            self._state = transition(previous)
            state = self._state
            if state is not previous:
                self._version += 1
            version = self._version
        if state is not previous:
            self._publish(state, version)
        if isinstance(state, FinishedState):
            self._finished.set()
        return state

    def _publish(self, state: GameState, version: int) -> None:
        """Deliver a state to the observer unless a newer one already went out.

        The observer may issue commands from inside the callback.
        """
        with self._publish_lock:
            if version <= self._published:
                return
            self._published = version
            if self.on_change is not None:
                self.on_change(state)
