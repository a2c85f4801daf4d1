"""
Base Handler Classes

This module provides the base class for Socket.IO handlers with common
patterns for service access, caller replies and logging.
"""

import logging
from typing import Any, Dict, Optional

from flask import request

from container import get_container

logger = logging.getLogger(__name__)


class BaseHandler:
    """
    Base class for all Socket.IO handlers.

    Provides service access through the container, replies to the requesting
    connection and standardized logging.
    """

    def __init__(self, container=None):
        self._container = container or get_container()

    @property
    def engine(self):
        """Get the room session engine."""
        return self._container.get('RoomSessionEngine')

    @property
    def broadcast_service(self):
        """Get the broadcast service."""
        return self._container.get('BroadcastService')

    @property
    def connection_directory(self):
        """Get the connection directory."""
        return self._container.get('ConnectionDirectory')

    @property
    def error_response_factory(self):
        """Get the error response factory service."""
        return self._container.get('ErrorResponseFactory')

    @property
    def connection_id(self) -> str:
        """Socket.IO session id of the requesting client."""
        return request.sid  # type: ignore[attr-defined]

    def reply(self, message: Dict[str, Any]) -> bool:
        """
        Send a message to the requesting client only.

        Args:
            message: Message dict with a 'type' key

        Returns:
            True if delivered
        """
        return self.broadcast_service.send_to_connection(self.connection_id, message)

    def log_handler_start(self, handler_name: str, data: Any = None) -> None:
        """Log the start of handler execution."""
        logger.info(f'{handler_name} called by client: {self.connection_id}')
        if data:
            logger.debug(f'{handler_name} data: {data}')

    def log_handler_success(self, handler_name: str, message: Optional[str] = None) -> None:
        """Log successful handler completion."""
        log_msg = f'{handler_name} completed successfully for client: {self.connection_id}'
        if message:
            log_msg += f' - {message}'
        logger.info(log_msg)
