"""
Domain models for the Click Race coordinator.

Rooms embed their players in join order. Ranking and remaining-time
calculations live here so every operation applies the same rules.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from clickrace.core.errors import InvalidStateTransitionError
from clickrace.core.game_states import GameState


@dataclass
class Connection:
    """A transport connection and the room/player it is bound to."""
    connection_id: str
    connected_at: float
    last_seen: float
    player_name: Optional[str] = None
    room_id: Optional[str] = None

    def is_live(self, now: float, ttl_seconds: int) -> bool:
        return now - self.last_seen < ttl_seconds


@dataclass
class Player:
    """A player embedded in a room."""
    name: str
    joined_at: float
    connection_id: str
    clicks: int = 0

    def to_score(self) -> Dict:
        return {'name': self.name, 'clicks': self.clicks}


@dataclass
class Room:
    """A single game session."""
    room_id: str
    created_at: float
    game_duration: int
    players: Dict[str, Player] = field(default_factory=dict)
    game_state: GameState = GameState.WAITING
    started_at: Optional[float] = None
    ends_at: Optional[float] = None

    @property
    def player_names(self) -> List[str]:
        return list(self.players.keys())

    def transition_to(self, new_state: GameState) -> None:
        """Move the game state forward. Backward moves and skips are rejected."""
        if not self.game_state.can_transition_to(new_state):
            raise InvalidStateTransitionError(
                message=f"Room {self.room_id} cannot move from {self.game_state.value} to {new_state.value}",
                details={'room_id': self.room_id, 'from': self.game_state.value, 'to': new_state.value}
            )
        self.game_state = new_state

    def start(self, now: float) -> None:
        """Start the contest; the end timestamp is fixed from here on."""
        if self.ends_at is not None:
            raise InvalidStateTransitionError(
                message=f"Room {self.room_id} has already been started",
                details={'room_id': self.room_id}
            )
        self.transition_to(GameState.PLAYING)
        self.started_at = now
        self.ends_at = now + self.game_duration

    def ranked_scores(self) -> List[Dict]:
        # sorted() is stable, so equal click counts keep join order
        ranked = sorted(self.players.values(), key=lambda p: p.clicks, reverse=True)
        return [player.to_score() for player in ranked]

    def time_remaining(self, now: float) -> int:
        """Whole seconds left, rounded up and floored at 0. Full duration before the start."""
        if self.ends_at is None:
            return self.game_duration
        return max(0, math.ceil(self.ends_at - now))

    def is_overdue(self, now: float) -> bool:
        return self.game_state == GameState.PLAYING and self.ends_at is not None and now >= self.ends_at


@dataclass
class LeaderboardEntry:
    """Ranked projection of one player's clicks, keyed by room."""
    room_id: str
    player_name: str
    clicks: int

    @property
    def sort_key(self) -> int:
        return self.clicks

    def to_dict(self) -> Dict:
        return {'name': self.player_name, 'clicks': self.clicks}
