"""
Game Settings Configuration Module

Provides centralized access to game-specific configuration values with
fallback defaults when no application configuration has been loaded.
"""

import logging

logger = logging.getLogger(__name__)


class GameSettings:
    """Centralized game settings management."""

    def __init__(self, app_config=None):
        """
        Initialize game settings.

        Args:
            app_config: Application configuration instance from config_factory
        """
        self._config = app_config
        if app_config is None:
            try:
                from config_factory import get_config
                self._config = get_config()
            except (ImportError, Exception) as e:
                logger.warning(f"Could not load configuration: {e}, using defaults")
                self._config = None

    @property
    def game_duration(self) -> int:
        """Contest length in seconds for newly created rooms."""
        if self._config is None:
            return 30
        return self._config.game_duration_seconds

    @property
    def leaderboard_size(self) -> int:
        """Number of entries returned by leaderboard queries."""
        if self._config is None:
            return 10
        return self._config.leaderboard_size

    @property
    def max_player_name_length(self) -> int:
        if self._config is None:
            return 20
        return self._config.max_player_name_length

    @property
    def max_room_id_length(self) -> int:
        if self._config is None:
            return 50
        return self._config.max_room_id_length

    @property
    def check_interval(self) -> int:
        """Seconds between sweeps for overdue rooms."""
        if self._config is None:
            return 1
        return self._config.game_flow_check_interval

    @property
    def broadcast_max_workers(self) -> int:
        if self._config is None:
            return 8
        return self._config.broadcast_max_workers

    @property
    def connection_ttl(self) -> int:
        """Seconds after which an untouched connection is no longer live."""
        if self._config is None:
            return 86400
        return self._config.connection_ttl_seconds


# Global instance for easy access
_game_settings_instance = None


def get_game_settings(app_config=None) -> GameSettings:
    """
    Get or create the global game settings instance.

    Args:
        app_config: Optional app config to use

    Returns:
        GameSettings instance
    """
    global _game_settings_instance

    if _game_settings_instance is None or app_config is not None:
        _game_settings_instance = GameSettings(app_config)

    return _game_settings_instance


def reset_game_settings():
    """Reset the global game settings instance (mainly for testing)."""
    global _game_settings_instance
    _game_settings_instance = None
