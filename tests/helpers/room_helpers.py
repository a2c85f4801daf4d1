"""
Room helpers for Socket.IO integration tests.
Wraps the Flask-SocketIO test client with click race actions.
"""

import uuid
from typing import Any, Dict, List, Optional


def unique_room_id(prefix: str = 'room') -> str:
    """Room id that no other test uses."""
    return f'{prefix}-{uuid.uuid4().hex[:8]}'


def find_event_in_received(received: List[Dict], event_name: str) -> Optional[Dict[str, Any]]:
    """Payload of the first received event with the given name, or None."""
    for event in received:
        if event['name'] == event_name:
            return event['args'][0]
    return None


def events_named(received: List[Dict], event_name: str) -> List[Dict[str, Any]]:
    return [event['args'][0] for event in received if event['name'] == event_name]


class PlayerClient:
    """A connected test client playing as one named player."""

    def __init__(self, client, player_name: str):
        self.client = client
        self.player_name = player_name
        self.room_id: Optional[str] = None
        # Drop the 'connected' greeting
        self.client.get_received()

    def join(self, room_id: str) -> Optional[Dict[str, Any]]:
        self.room_id = room_id
        self.client.emit('join', {'playerName': self.player_name, 'roomId': room_id})
        return find_event_in_received(self.client.get_received(), 'joined')

    def click(self) -> List[Dict]:
        self.client.emit('click', {'roomId': self.room_id, 'playerName': self.player_name})
        return self.client.get_received()

    def received(self) -> List[Dict]:
        return self.client.get_received()

    def disconnect(self):
        if self.client.is_connected():
            self.client.disconnect()
