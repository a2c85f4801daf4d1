"""
Broadcast Service - Best-effort fan-out of messages to every connection in a room.

This service handles:
- Resolving the live connections of a room through the connection directory
- Concurrent, independent delivery to each recipient
- Per-recipient failure logging without aborting the other deliveries
- Unicast delivery to a single connection
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from clickrace.config.game_settings import get_game_settings
from clickrace.core.errors import DeliveryError

logger = logging.getLogger(__name__)


@dataclass
class BroadcastResult:
    """Outcome of one room broadcast."""
    room_id: str
    delivered: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def recipient_count(self) -> int:
        return len(self.delivered) + len(self.failed)


class BroadcastService:
    """Fans messages out to rooms, tolerating individual delivery failures."""

    def __init__(self, connection_directory, message_sender, max_workers: Optional[int] = None):
        """Initialize the broadcast service.

        Args:
            connection_directory: Directory used to resolve a room's live connections
            message_sender: Unicast sender used for every delivery
            max_workers: Upper bound on concurrent deliveries across all broadcasts
        """
        self.connection_directory = connection_directory
        self.message_sender = message_sender
        self.max_workers = max_workers or get_game_settings().broadcast_max_workers
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='broadcast')

    def shutdown(self, wait_for_pending: bool = True) -> None:
        """Stop the delivery workers. Broadcasts after this deliver nothing."""
        self._executor.shutdown(wait=wait_for_pending)
        logger.info("Broadcast service shut down")

    def send_to_connection(self, connection_id: str, message: Dict[str, Any]) -> bool:
        """Deliver a message to one connection.

        Returns:
            True if delivered, False if the delivery failed (the failure is logged)
        """
        try:
            self.message_sender.send(connection_id, message)
            return True
        except DeliveryError as e:
            logger.warning(f"Delivery of {message.get('type')} failed: {e.message}")
        except Exception as e:
            logger.error(f"Unexpected error sending {message.get('type')} to {connection_id}: {e}")
        return False

    def broadcast_to_room(self, room_id: str, message: Dict[str, Any],
                          exclude_connection_id: Optional[str] = None) -> BroadcastResult:
        """
        Deliver a message to every live connection of a room.

        Args:
            room_id: Room to broadcast to
            message: Message dict with a 'type' key
            exclude_connection_id: Optional connection that must not receive the message

        Returns:
            BroadcastResult listing delivered and failed connection ids; never raises
        """
        result = BroadcastResult(room_id=room_id)

        try:
            recipients = self.connection_directory.list_by_room(room_id)
        except Exception as e:
            logger.error(f"Error resolving connections for room {room_id}: {e}")
            return result

        recipients.discard(exclude_connection_id)
        if not recipients:
            logger.debug(f"No recipients for {message.get('type')} in room {room_id}")
            return result

        futures = {}
        for connection_id in recipients:
            try:
                futures[self._executor.submit(self.message_sender.send, connection_id, message)] = connection_id
            except RuntimeError as e:
                # Executor already shut down
                result.failed[connection_id] = str(e)
        done, _ = wait(futures)

        for future in done:
            connection_id = futures[future]
            error = future.exception()
            if error is None:
                result.delivered.append(connection_id)
            else:
                result.failed[connection_id] = str(error)
                logger.warning(f"Failed to send {message.get('type')} to {connection_id} in room {room_id}: {error}")

        logger.debug(
            f"Broadcasted {message.get('type')} to room {room_id}: "
            f"{len(result.delivered)} delivered, {len(result.failed)} failed"
        )
        return result
