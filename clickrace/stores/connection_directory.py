"""
Connection Directory - Maps Socket.IO connection ids to session metadata.

This store handles:
- Connection registration on transport connect
- Binding a connection to a player and room on join
- Liveness tracking with a TTL
- Room membership lookups for broadcasts
"""

import logging
import threading
import time
from dataclasses import replace
from typing import Callable, Dict, Optional, Set, Any

from clickrace.config.game_settings import get_game_settings
from clickrace.core.models import Connection

logger = logging.getLogger(__name__)


class ConnectionDirectory:
    """In-process connection registry keyed by connection id."""

    def __init__(self, ttl_seconds: Optional[int] = None, clock: Callable[[], float] = time.time):
        """Initialize the connection directory.

        Args:
            ttl_seconds: Seconds after the last touch before a connection stops being live
            clock: Time source returning epoch seconds
        """
        self._connections: Dict[str, Connection] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_game_settings().connection_ttl
        logger.info("ConnectionDirectory initialized")

    def register(self, connection_id: str) -> Connection:
        """Create a fresh connection record for a transport-level connect."""
        now = self._clock()
        connection = Connection(connection_id=connection_id, connected_at=now, last_seen=now)
        self.put(connection)
        logger.debug(f"Registered connection {connection_id}")
        return connection

    def get(self, connection_id: str) -> Optional[Connection]:
        """Get a connection by id.

        Returns:
            A copy of the connection or None if not found
        """
        with self._lock:
            connection = self._connections.get(connection_id)
            return replace(connection) if connection else None

    def put(self, connection: Connection) -> None:
        """Create or replace a connection record."""
        with self._lock:
            self._connections[connection.connection_id] = replace(connection)

    def delete(self, connection_id: str) -> Optional[Connection]:
        """Remove a connection.

        Returns:
            The removed connection or None if not found
        """
        with self._lock:
            connection = self._connections.pop(connection_id, None)
        if connection:
            logger.debug(f"Removed connection {connection_id} (player {connection.player_name}, room {connection.room_id})")
        return connection

    def bind(self, connection_id: str, player_name: str, room_id: str) -> Connection:
        """Associate a connection with a player and room.

        Connections that were never registered (e.g. the directory was reset)
        are created on the spot.
        """
        now = self._clock()
        with self._lock:
            connection = self._connections.get(connection_id)
            if connection is None:
                connection = Connection(connection_id=connection_id, connected_at=now, last_seen=now)
            connection.player_name = player_name
            connection.room_id = room_id
            connection.last_seen = now
            self._connections[connection_id] = connection
            logger.debug(f"Bound connection {connection_id} to player {player_name} in room {room_id}")
            return replace(connection)

    def touch(self, connection_id: str) -> bool:
        """Refresh the liveness timestamp of a connection."""
        with self._lock:
            connection = self._connections.get(connection_id)
            if connection is None:
                return False
            connection.last_seen = self._clock()
            return True

    def list_by_room(self, room_id: str) -> Set[str]:
        """Get the ids of all live connections bound to a room."""
        now = self._clock()
        with self._lock:
            return {
                connection_id
                for connection_id, connection in self._connections.items()
                if connection.room_id == room_id and connection.is_live(now, self.ttl_seconds)
            }

    def cleanup_expired(self) -> int:
        """Remove connections whose TTL has lapsed.

        Returns:
            Number of connections removed
        """
        now = self._clock()
        with self._lock:
            expired = [
                connection_id
                for connection_id, connection in self._connections.items()
                if not connection.is_live(now, self.ttl_seconds)
            ]
            for connection_id in expired:
                del self._connections[connection_id]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired connections")
        return len(expired)

    def count(self) -> int:
        return len(self._connections)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get debug information about active connections."""
        room_counts: Dict[str, int] = {}
        with self._lock:
            for connection in self._connections.values():
                if connection.room_id:
                    room_counts[connection.room_id] = room_counts.get(connection.room_id, 0) + 1
            total = len(self._connections)

        return {
            'total_connections': total,
            'connections_by_room': room_counts,
            'active_rooms': len(room_counts)
        }
