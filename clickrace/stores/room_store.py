"""
Room Store for the Click Race coordinator

Keyed storage for one Room per room id. Reads and writes are full copies,
so callers always follow load-mutate-store and never share a live object.
"""

import copy
import logging
import threading
from typing import Dict, List, Optional, Set

from clickrace.core.game_states import GameState
from clickrace.core.models import Room

logger = logging.getLogger(__name__)


class RoomStore:
    """In-process room storage with full-replace writes."""

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        # Ids of rooms whose stored state is PLAYING, kept in step with put()
        self._playing: Set[str] = set()
        self._rooms_lock = threading.RLock()

    def get(self, room_id: str) -> Optional[Room]:
        """
        Load a room.

        Args:
            room_id: ID of the room

        Returns:
            A detached copy of the room, or None if the room doesn't exist
        """
        with self._rooms_lock:
            room = self._rooms.get(room_id)
            return copy.deepcopy(room) if room else None

    def put(self, room: Room) -> None:
        """
        Replace the stored room with the given one.

        Args:
            room: Room to persist; a copy is stored
        """
        with self._rooms_lock:
            is_new = room.room_id not in self._rooms
            self._rooms[room.room_id] = copy.deepcopy(room)
            if room.game_state == GameState.PLAYING:
                self._playing.add(room.room_id)
            else:
                self._playing.discard(room.room_id)
        if is_new:
            logger.info(f"Created room {room.room_id}")

    def list_room_ids(self) -> List[str]:
        """
        Get list of all stored room IDs.

        Returns:
            List of room ID strings
        """
        with self._rooms_lock:
            return list(self._rooms.keys())

    def list_playing_room_ids(self) -> List[str]:
        """Ids of the rooms currently stored as playing."""
        with self._rooms_lock:
            return list(self._playing)
