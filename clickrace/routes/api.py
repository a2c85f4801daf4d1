"""
REST API endpoints for the Click Race coordinator.

Read-only views of rooms for dashboards and health checks.
"""

import logging
from flask import Blueprint, jsonify

from clickrace.core.errors import ClickRaceError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def create_api_blueprint(services):
    """Create and configure the API Blueprint with service dependencies."""
    engine = services['engine']
    error_response_factory = services['error_response_factory']

    api = Blueprint('api', __name__)

    def error_reply(error: ClickRaceError):
        status = 404 if isinstance(error, NotFoundError) else 400 if isinstance(error, ValidationError) else 500
        return jsonify(error_response_factory.create_error_response(error.code, error.message, error.details)), status

    @api.route('/health')
    def health():
        connections = services['connection_directory'].get_debug_info()
        return jsonify({
            'status': 'ok',
            'connections': connections['total_connections'],
            'active_rooms': connections['active_rooms'],
            'pending_timers': len(services['game_timer'].pending_rooms())
        })

    @api.route('/api/rooms/<room_id>')
    def room_state(room_id):
        """Current state of a room."""
        try:
            return jsonify(engine.get_room_state(room_id))
        except ClickRaceError as e:
            return error_reply(e)

    @api.route('/api/rooms/<room_id>/leaderboard')
    def leaderboard(room_id):
        """Top of a room's leaderboard."""
        try:
            return jsonify(engine.get_leaderboard(room_id))
        except ClickRaceError as e:
            return error_reply(e)

    return api
