"""
Core error definitions for the Click Race coordinator

Provides error codes and the exception taxonomy shared by the engine,
the stores and the Socket.IO handlers.
"""

from enum import Enum
from typing import Dict, Optional


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Validation Errors
    INVALID_DATA = "INVALID_DATA"
    MISSING_ROOM_ID = "MISSING_ROOM_ID"
    MISSING_PLAYER_NAME = "MISSING_PLAYER_NAME"
    ROOM_ID_TOO_LONG = "ROOM_ID_TOO_LONG"
    PLAYER_NAME_TOO_LONG = "PLAYER_NAME_TOO_LONG"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"

    # Lookup Errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    PLAYER_NOT_IN_ROOM = "PLAYER_NOT_IN_ROOM"

    # Game Flow Errors
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Collaborator Errors
    DELIVERY_FAILED = "DELIVERY_FAILED"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"

    # System Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ClickRaceError(Exception):
    """Base class for errors that are reported back to the initiating connection."""

    default_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, code: Optional[ErrorCode] = None, message: str = "", details: Optional[Dict] = None):
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(ClickRaceError):
    """A required field is missing or malformed."""

    default_code = ErrorCode.INVALID_DATA


class NotFoundError(ClickRaceError):
    """The room or the player does not exist."""

    default_code = ErrorCode.ROOM_NOT_FOUND


class InactiveGameError(ClickRaceError):
    """An action was attempted outside the playing window."""

    default_code = ErrorCode.GAME_NOT_ACTIVE


class InvalidStateTransitionError(ClickRaceError):
    """A room was asked to move its game state backwards or to skip a state."""

    default_code = ErrorCode.INVALID_STATE_TRANSITION


class DeliveryError(ClickRaceError):
    """A message could not be delivered to a connection. Never fatal."""

    default_code = ErrorCode.DELIVERY_FAILED

    def __init__(self, connection_id: str, message: str = "", details: Optional[Dict] = None):
        self.connection_id = connection_id
        super().__init__(ErrorCode.DELIVERY_FAILED, message or f"Failed to deliver to {connection_id}", details)


class StorageError(ClickRaceError):
    """The underlying store is unavailable. Not retried by the core."""

    default_code = ErrorCode.STORAGE_UNAVAILABLE
