"""
Validation Service for the Click Race coordinator

Checks and normalizes the identifiers carried by inbound actions.
"""

import logging
from typing import Any, Optional

from clickrace.config.game_settings import get_game_settings
from clickrace.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)


class ValidationService:
    """Service responsible for input validation."""

    def __init__(self, max_room_id_length: Optional[int] = None, max_player_name_length: Optional[int] = None):
        settings = get_game_settings()
        self.max_room_id_length = max_room_id_length or settings.max_room_id_length
        self.max_player_name_length = max_player_name_length or settings.max_player_name_length

    def validate_room_id(self, room_id: Any) -> str:
        """
        Validate a room ID.

        Args:
            room_id: Raw room ID value

        Returns:
            Room ID with surrounding whitespace removed

        Raises:
            ValidationError: If the room ID is missing, empty or too long
        """
        if not room_id or not isinstance(room_id, str):
            raise ValidationError(ErrorCode.MISSING_ROOM_ID, "roomId is required")

        room_id = room_id.strip()
        if not room_id:
            raise ValidationError(ErrorCode.MISSING_ROOM_ID, "roomId cannot be empty")

        if len(room_id) > self.max_room_id_length:
            raise ValidationError(
                ErrorCode.ROOM_ID_TOO_LONG,
                f"roomId must be {self.max_room_id_length} characters or less",
                {"max_length": self.max_room_id_length, "actual_length": len(room_id)}
            )

        return room_id

    def validate_player_name(self, player_name: Any) -> str:
        """
        Validate a player name.

        Args:
            player_name: Raw player name value

        Returns:
            Player name with surrounding whitespace removed

        Raises:
            ValidationError: If the player name is missing, empty or too long
        """
        if not player_name or not isinstance(player_name, str):
            raise ValidationError(ErrorCode.MISSING_PLAYER_NAME, "playerName is required")

        player_name = player_name.strip()
        if not player_name:
            raise ValidationError(ErrorCode.MISSING_PLAYER_NAME, "playerName cannot be empty")

        if len(player_name) > self.max_player_name_length:
            raise ValidationError(
                ErrorCode.PLAYER_NAME_TOO_LONG,
                f"playerName must be {self.max_player_name_length} characters or less",
                {"max_length": self.max_player_name_length, "actual_length": len(player_name)}
            )

        return player_name
