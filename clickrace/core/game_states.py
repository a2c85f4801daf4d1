"""
Game State Enumeration

Defines the room game states and the forward-only transitions between them.
"""

from enum import Enum


class GameState(Enum):
    """Game state enumeration."""
    WAITING = "waiting"
    PLAYING = "playing"
    ENDED = "ended"

    def can_transition_to(self, new_state: "GameState") -> bool:
        return _ALLOWED_TRANSITIONS.get(self) == new_state


_ALLOWED_TRANSITIONS = {
    GameState.WAITING: GameState.PLAYING,
    GameState.PLAYING: GameState.ENDED,
}
