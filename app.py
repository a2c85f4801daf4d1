"""
Click Race - A real-time multiplayer clicking contest.
Main Flask application entry point focusing on app creation, dependency injection, and service wiring.
"""

from flask import Flask
from flask_socketio import SocketIO
import os
import logging
import atexit

from container import configure_container
from config_factory import load_config, ConfigurationFactory

# Initialize Flask app
app = Flask(__name__)

# Load and apply configuration
app_config = load_config()
config_factory = ConfigurationFactory()
app.config.update(config_factory.get_flask_config())

# Initialize Socket.IO with environment-aware CORS
# In production, restrict to explicitly allowed origins from env var SOCKETIO_CORS_ALLOWED_ORIGINS (comma-separated)
allowed_origins_env = os.environ.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '')
if app_config.is_production:
    _cors_allowed = [o.strip() for o in allowed_origins_env.split(',') if o.strip()]
    socketio = SocketIO(app, cors_allowed_origins=_cors_allowed or [], async_mode='eventlet')
else:
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode='eventlet')

# Configure logging
logging.basicConfig(level=getattr(logging, app_config.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Configure service container with dependencies
container = configure_container(socketio=socketio, config=config_factory.to_dict())
container.set_config({'app_config': app_config})

# Initialize services from container
services = {
    'engine': container.get('RoomSessionEngine'),
    'connection_directory': container.get('ConnectionDirectory'),
    'room_store': container.get('RoomStore'),
    'leaderboard_index': container.get('LeaderboardIndex'),
    'broadcast_service': container.get('BroadcastService'),
    'game_timer': container.get('GameTimerService'),
    'error_response_factory': container.get('ErrorResponseFactory')
}


def sweep():
    """Drop stale connections and end rooms whose timers were missed."""
    services['connection_directory'].cleanup_expired()
    return services['engine'].finalize_overdue_rooms()


# Tests drive expiry directly
if not app_config.is_testing:
    services['game_timer'].start_sweeper(sweep)

# Register REST endpoints
from clickrace.routes.api import create_api_blueprint
api_blueprint = create_api_blueprint(services)
app.register_blueprint(api_blueprint)

# Register Socket.IO handlers
from clickrace.handlers.socket_handlers import register_socket_handlers
register_socket_handlers(socketio)


def cleanup_on_exit():
    """Clean up resources on application exit."""
    logger.info("Shutting down Click Race server...")
    services['game_timer'].stop()
    services['broadcast_service'].shutdown()


atexit.register(cleanup_on_exit)

if __name__ == '__main__':
    logger.info(f"Starting Click Race server on {app_config.host}:{app_config.port}")
    try:
        socketio.run(app, host=app_config.host, port=app_config.port, debug=app_config.debug)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    finally:
        cleanup_on_exit()
