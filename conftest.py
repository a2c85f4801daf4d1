"""
Global pytest configuration and fixtures.
Provides service fixtures for proper dependency injection in tests.
"""

import os
import pytest

# Ensure testing environment before the app module loads its configuration
os.environ['FLASK_ENV'] = 'testing'


@pytest.fixture(scope="function", autouse=True)
def reset_game_settings_cache():
    """Drop cached game settings so each test sees the configuration it loads."""
    from clickrace.config.game_settings import reset_game_settings
    reset_game_settings()
    yield
    reset_game_settings()


@pytest.fixture(scope="session")
def app():
    """Create Flask app for testing."""
    from app import app as flask_app
    return flask_app


@pytest.fixture(scope="session")
def socketio():
    """Create SocketIO instance for testing."""
    from app import socketio as socketio_instance
    return socketio_instance


@pytest.fixture(scope="function")
def container(app, socketio):
    """
    The application's service container.

    Socket handlers and the REST blueprint hold on to the services created
    at import, so tests share them and isolate themselves by room id.
    """
    from container import get_container

    app_container = get_container()
    yield app_container

    # Cancel end timers armed by clicks in this test
    app_container.get('GameTimerService').stop()


@pytest.fixture
def fake_clock():
    """Controllable time source returning epoch seconds."""
    class FakeClock:
        def __init__(self, start=1_000_000.0):
            self.now = start

        def __call__(self):
            return self.now

        def advance(self, seconds):
            self.now += seconds

    return FakeClock()

