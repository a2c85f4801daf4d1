"""
Game Action Handler

This module handles the client actions of a click race: joining a room,
clicking, and querying the leaderboard or the room state.
"""

import logging

from clickrace.core.actions import (
    ClickAction,
    GetLeaderboardAction,
    GetRoomStateAction,
    JoinAction,
    UnrecognizedAction,
)
from clickrace.core.errors import ErrorCode, ValidationError
from clickrace.services.error_response_factory import with_error_handling
from .base_handler import BaseHandler

logger = logging.getLogger(__name__)


class GameActionHandler(BaseHandler):
    """Handler for every inbound client action."""

    @with_error_handling
    def handle_join(self, action: JoinAction):
        """
        Handle a player joining a room.

        Expected data format:
        {
            'playerName': 'display_name',
            'roomId': 'room_name'
        }
        """
        self.log_handler_start('handle_join', action)

        joined = self.engine.join(self.connection_id, action.player_name, action.room_id)
        self.reply(joined)

        self.log_handler_success('handle_join', f'Player {joined["playerName"]} joined room {joined["roomId"]}')
        return joined

    @with_error_handling
    def handle_click(self, action: ClickAction):
        """
        Handle a click. The first click in a waiting room starts the game.

        Expected data format:
        {
            'roomId': 'room_name',
            'playerName': 'display_name'
        }
        """
        self.log_handler_start('handle_click', action)

        registered = self.engine.click(self.connection_id, action.room_id, action.player_name)
        self.reply(registered)

        self.log_handler_success('handle_click', f'{action.player_name} now has {registered["clicks"]} clicks')
        return registered

    @with_error_handling
    def handle_get_leaderboard(self, action: GetLeaderboardAction):
        """Handle request for the top of a room's leaderboard."""
        self.log_handler_start('handle_get_leaderboard', action)

        leaderboard = self.engine.get_leaderboard(action.room_id)
        self.reply(leaderboard)

        self.log_handler_success('handle_get_leaderboard', 'Leaderboard sent')
        return leaderboard

    @with_error_handling
    def handle_get_room_state(self, action: GetRoomStateAction):
        """Handle request for the current room state."""
        self.log_handler_start('handle_get_room_state', action)

        room_state = self.engine.get_room_state(action.room_id)
        self.reply(room_state)

        self.log_handler_success('handle_get_room_state')
        return room_state

    @with_error_handling
    def handle_unrecognized(self, action: UnrecognizedAction):
        """Answer anything that is not a known action with an error."""
        logger.warning(f'Unknown action {action.name!r} from client: {self.connection_id}')
        raise ValidationError(ErrorCode.UNKNOWN_ACTION, 'Unknown action', {'action': action.name})
