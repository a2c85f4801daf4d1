"""
Socket.IO event handlers for the Click Race coordinator.

This module provides the main registration function and the
connection/disconnection handlers that maintain the connection directory.
"""

import logging
import os

from flask import request
from flask_socketio import emit

from clickrace.core.actions import (
    ClickAction,
    GetLeaderboardAction,
    GetRoomStateAction,
    JoinAction,
    UnrecognizedAction,
)
from container import get_container
from .action_router import setup_router
from .game_action_handler import GameActionHandler

logger = logging.getLogger(__name__)


def register_socket_handlers(socketio_instance):
    """Register all socket handlers with the SocketIO instance."""
    action_handler = GameActionHandler()

    # Connection lifecycle events don't go through the router
    socketio_instance.on_event('connect', handle_connect)
    socketio_instance.on_event('disconnect', handle_disconnect)

    router = setup_router(socketio_instance, {
        JoinAction: action_handler.handle_join,
        ClickAction: action_handler.handle_click,
        GetLeaderboardAction: action_handler.handle_get_leaderboard,
        GetRoomStateAction: action_handler.handle_get_room_state,
        UnrecognizedAction: action_handler.handle_unrecognized,
    })
    router.add_after_request(_touch_connection)

    logger.info(f"Registered {len(router.get_registered_actions())} action routes")
    return router


def _touch_connection(action, result):
    """Refresh the caller's liveness after every handled action."""
    get_container().get('ConnectionDirectory').touch(request.sid)


def handle_connect(auth=None):
    """Register the connection, with optional Origin enforcement in production."""
    container = get_container()
    app_config = container.get_config('app_config')
    allowed_origins_env = os.environ.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '')

    origin = request.headers.get('Origin')
    if app_config is not None and app_config.is_production and allowed_origins_env:
        allowed = {o.strip() for o in allowed_origins_env.split(',') if o.strip()}
        if origin and origin not in allowed:
            logger.warning(f'Rejecting connection from disallowed Origin: {origin}')
            return False

    container.get('ConnectionDirectory').register(request.sid)
    logger.info(f'Client connected: {request.sid} from Origin: {origin}')
    emit('connected', {'type': 'connected', 'connectionId': request.sid})


def handle_disconnect(reason=None):
    """Drop the connection record. The player's entry and clicks stay in the room."""
    connection = get_container().get('ConnectionDirectory').delete(request.sid)

    if connection and connection.room_id:
        logger.info(f'Player {connection.player_name} disconnected from room {connection.room_id}')
    else:
        logger.info(f'Client disconnected: {request.sid}')
