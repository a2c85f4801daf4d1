"""
Gunicorn configuration for the Click Race server.
Game timers and room state live in-process, so there is exactly one eventlet worker.
"""

import logging

from config_factory import load_config

# Load configuration (renamed to avoid conflicts with gunicorn's internal 'config')
app_config = load_config()

# Server socket
bind = f"{app_config.host}:{app_config.port}"
backlog = 2048

# Worker processes
workers = 1  # Must be 1 for Socket.IO with eventlet
worker_class = "eventlet"
worker_connections = app_config.worker_connections
timeout = app_config.timeout
keepalive = app_config.keepalive

# Logging
accesslog = "-"
errorlog = "-"
loglevel = app_config.log_level
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "clickrace"

# Server mechanics
preload_app = False  # Timers and the sweeper must start inside the worker
daemon = False
pidfile = None


def on_starting(server):
    logging.getLogger(__name__).info(
        f"Starting Click Race on {bind}: game duration {app_config.game_duration_seconds}s, "
        f"leaderboard size {app_config.leaderboard_size}"
    )


def worker_exit(server, worker):
    """Cancel pending game timers and stop broadcast workers when the worker goes away."""
    from container import get_container
    container = get_container()
    if container.has_service('GameTimerService'):
        container.get('GameTimerService').stop()
    if container.has_service('BroadcastService'):
        container.get('BroadcastService').shutdown()
