"""
Message Sender - Delivers one serialized message to one Socket.IO connection.

The event name is the message type, the payload is the whole message.
"""

import logging
from typing import Any, Dict

from clickrace.core.errors import DeliveryError

logger = logging.getLogger(__name__)


class SocketIOMessageSender:
    """Unicast delivery over Flask-SocketIO."""

    def __init__(self, socketio, namespace: str = '/'):
        """Initialize the sender.

        Args:
            socketio: Flask-SocketIO instance for emitting messages
            namespace: Socket.IO namespace the clients are connected to
        """
        self.socketio = socketio
        self.namespace = namespace

    def is_connected(self, connection_id: str) -> bool:
        """Check with the Socket.IO manager whether the connection is still open."""
        return self.socketio.server.manager.is_connected(connection_id, self.namespace)

    def send(self, connection_id: str, message: Dict[str, Any]) -> None:
        """
        Emit a message to a single connection.

        Args:
            connection_id: Socket.IO session id of the recipient
            message: Message dict with a 'type' key

        Raises:
            DeliveryError: If the connection is gone or the emit fails
        """
        if not self.is_connected(connection_id):
            raise DeliveryError(connection_id, f"Connection {connection_id} is gone")

        try:
            self.socketio.emit(message['type'], message, to=connection_id, namespace=self.namespace)
        except Exception as e:
            raise DeliveryError(connection_id, f"Error emitting {message.get('type')} to {connection_id}: {e}") from e

        logger.debug(f"Emitted {message['type']} to connection {connection_id}")
