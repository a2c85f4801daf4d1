"""
Concurrency Control Service for the Click Race coordinator

Serializes every mutation of a room behind a per-room lock so that
concurrent load-mutate-store cycles on one room cannot lose updates.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Dict

logger = logging.getLogger(__name__)


class ConcurrencyControlService:
    """One re-entrant lock per room id."""

    def __init__(self):
        self._room_locks: Dict[str, threading.RLock] = {}
        # Guards creation of room locks
        self._registry_lock = threading.Lock()

    def get_room_lock(self, room_id: str) -> threading.RLock:
        with self._registry_lock:
            return self._room_locks.setdefault(room_id, threading.RLock())

    @contextmanager
    def room_operation(self, room_id: str):
        """Hold the room's lock for one load-mutate-store cycle."""
        with self.get_room_lock(room_id):
            yield

    def tracked_room_count(self) -> int:
        with self._registry_lock:
            return len(self._room_locks)
