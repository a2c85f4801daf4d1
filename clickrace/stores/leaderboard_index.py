"""
Leaderboard Index

A room-scoped ranked view of player click counts, maintained separately from
the Room record. Entries are upserted by player; top-N queries return the
highest sort keys first and keep first-write order among equal keys.
"""

import logging
import threading
from typing import Dict, List

from clickrace.core.models import LeaderboardEntry

logger = logging.getLogger(__name__)


class LeaderboardIndex:
    """Secondary index of LeaderboardEntry records keyed by room."""

    def __init__(self):
        # room_id -> player_name -> entry
        self._entries: Dict[str, Dict[str, LeaderboardEntry]] = {}
        self._lock = threading.Lock()

    def upsert(self, room_id: str, player_name: str, clicks: int) -> LeaderboardEntry:
        """Create or overwrite the entry for a player in a room."""
        entry = LeaderboardEntry(room_id=room_id, player_name=player_name, clicks=clicks)
        with self._lock:
            self._entries.setdefault(room_id, {})[player_name] = entry
        logger.debug(f"Leaderboard upsert {room_id}/{player_name} = {clicks}")
        return entry

    def top_n(self, room_id: str, n: int) -> List[LeaderboardEntry]:
        """
        Get the top entries of a room by descending sort key.

        Args:
            room_id: ID of the room
            n: Maximum number of entries

        Returns:
            Ordered list of at most n entries, empty for unknown rooms
        """
        if n <= 0:
            return []
        with self._lock:
            entries = list(self._entries.get(room_id, {}).values())
        entries.sort(key=lambda entry: entry.sort_key, reverse=True)
        return entries[:n]

    def count(self, room_id: str) -> int:
        return len(self._entries.get(room_id, {}))
