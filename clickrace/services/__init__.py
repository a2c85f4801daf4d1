"""
Services package for the Click Race coordinator

Contains the room session engine and the services it is composed from.
"""

from .room_session_engine import RoomSessionEngine
from .broadcast_service import BroadcastService, BroadcastResult
from .message_sender import SocketIOMessageSender
from .game_timer_service import GameTimerService
from .concurrency_control_service import ConcurrencyControlService
from .validation_service import ValidationService
from .error_response_factory import ErrorResponseFactory

__all__ = [
    'RoomSessionEngine',
    'BroadcastService',
    'BroadcastResult',
    'SocketIOMessageSender',
    'GameTimerService',
    'ConcurrencyControlService',
    'ValidationService',
    'ErrorResponseFactory'
]
