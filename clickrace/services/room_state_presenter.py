"""
Room State Presenter - Builds the outbound message payloads.

Keeps the wire format of every message type in one place so the engine,
the handlers and the REST API stay consistent.
"""

from typing import Any, Dict, List

from clickrace.core.models import LeaderboardEntry, Room


class RoomStatePresenter:
    """Transforms rooms and leaderboard entries into client messages."""

    def create_joined(self, room: Room, player_name: str) -> Dict[str, Any]:
        """Confirmation sent to the joining connection."""
        return {
            'type': 'joined',
            'roomId': room.room_id,
            'playerName': player_name,
            'players': room.player_names,
            'gameState': room.game_state.value
        }

    def create_player_joined(self, room: Room, player_name: str) -> Dict[str, Any]:
        """Broadcast sent to the rest of the room on a join."""
        return {
            'type': 'playerJoined',
            'playerName': player_name,
            'players': room.player_names,
            'gameState': room.game_state.value
        }

    def create_click_registered(self, clicks: int) -> Dict[str, Any]:
        return {
            'type': 'clickRegistered',
            'clicks': clicks
        }

    def create_score_update(self, room: Room, now: float) -> Dict[str, Any]:
        return {
            'type': 'scoreUpdate',
            'scores': room.ranked_scores(),
            'timeRemaining': room.time_remaining(now)
        }

    def create_game_ended(self, room: Room) -> Dict[str, Any]:
        """Final ranking; the winner is the top entry or None for an empty room."""
        scores = room.ranked_scores()
        return {
            'type': 'gameEnded',
            'finalScores': scores,
            'winner': scores[0] if scores else None
        }

    def create_leaderboard(self, room_id: str, entries: List[LeaderboardEntry]) -> Dict[str, Any]:
        return {
            'type': 'leaderboard',
            'roomId': room_id,
            'leaderboard': [entry.to_dict() for entry in entries]
        }

    def create_room_state(self, room: Room, now: float) -> Dict[str, Any]:
        return {
            'type': 'roomState',
            'roomId': room.room_id,
            'gameState': room.game_state.value,
            'players': room.player_names,
            'scores': room.ranked_scores(),
            'timeRemaining': room.time_remaining(now)
        }

