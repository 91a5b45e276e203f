"""
State machine for a SkiFree session.

States:
    MENU: Title screen, nothing simulated
    PLAYING: Skier on the slope
    PAUSED: Frozen mid-run, rendering continues
    CRASHED: Hit a fatal obstacle
    EATEN: Caught by the Yeti
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class GameState(Enum):
    """Session states."""
    MENU = auto()
    PLAYING = auto()
    PAUSED = auto()
    CRASHED = auto()
    EATEN = auto()


TERMINAL_STATES = frozenset({GameState.CRASHED, GameState.EATEN})


@dataclass
class SessionContext:
    """Context data carried alongside the state."""
    score: int = 0
    cause: str | None = None
    runs: int = 0


Listener = Callable[[GameState, GameState, SessionContext], None]


class StateMachine:
    """
    Manages session state and transitions.

    Rejects transitions that are not in VALID_TRANSITIONS and notifies
    listeners of every change.
    """

    VALID_TRANSITIONS: list[tuple[GameState, GameState]] = [
        # From MENU
        (GameState.MENU, GameState.PLAYING),

        # From PLAYING
        (GameState.PLAYING, GameState.PAUSED),
        (GameState.PLAYING, GameState.CRASHED),
        (GameState.PLAYING, GameState.EATEN),
        (GameState.PLAYING, GameState.MENU),

        # From PAUSED
        (GameState.PAUSED, GameState.PLAYING),
        (GameState.PAUSED, GameState.MENU),

        # From the end states: try again or quit
        (GameState.CRASHED, GameState.PLAYING),
        (GameState.CRASHED, GameState.EATEN),
        (GameState.CRASHED, GameState.MENU),
        (GameState.EATEN, GameState.PLAYING),
        (GameState.EATEN, GameState.MENU),
    ]

    def __init__(self, initial_state: GameState = GameState.MENU) -> None:
        self._state = initial_state
        self._context = SessionContext()
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> GameState:
        """Get current state."""
        return self._state

    @property
    def context(self) -> SessionContext:
        """Get current context."""
        return self._context

    @property
    def is_paused(self) -> bool:
        return self._state == GameState.PAUSED

    @property
    def is_over(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_transition(self, to_state: GameState) -> bool:
        """Check if transition to given state is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: GameState, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new state.

        Args:
            to_state: Target state
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"State transition: {old_state.name} -> {to_state.name}")
        self._notify(old_state, to_state)
        return True

    def restart(self) -> None:
        """Begin a fresh run from any state."""
        old_state = self._state
        runs = self._context.runs + 1
        self._state = GameState.PLAYING
        self._context = SessionContext(runs=runs)
        logger.info(f"Run {runs} started (from {old_state.name})")
        self._notify(old_state, GameState.PLAYING)

    def add_listener(self, callback: Listener) -> None:
        """Add a state change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        """Remove a state change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def reset(self) -> None:
        """Reset state machine to the title screen."""
        old_state = self._state
        self._state = GameState.MENU
        self._context = SessionContext()
        self._notify(old_state, GameState.MENU)
        logger.info("StateMachine reset to MENU")

    def _notify(self, old_state: GameState, new_state: GameState) -> None:
        for listener in self._listeners:
            try:
                listener(old_state, new_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")
