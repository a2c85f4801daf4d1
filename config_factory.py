"""
Configuration Factory - Centralized configuration management for Click Race
Loads typed settings from environment variables and validates their ranges.
"""

import os
import logging
from typing import Any, Dict, Optional, Tuple
from enum import Enum
from dataclasses import dataclass, asdict, fields

DEFAULT_SECRET_KEY = 'dev-secret-key-change-in-production'


class Environment(Enum):
    """Environment types for configuration"""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ConfigError(Exception):
    """Configuration-related errors"""
    pass


# Inclusive bounds; None means unbounded
_RANGES: Dict[str, Tuple[int, Optional[int]]] = {
    'port': (1, 65535),
    'game_duration_seconds': (1, 3600),
    'leaderboard_size': (1, 100),
    'max_player_name_length': (1, 100),
    'max_room_id_length': (1, 200),
    'game_flow_check_interval': (1, 60),
    'broadcast_max_workers': (1, 256),
    'connection_ttl_seconds': (60, None),
}


@dataclass
class AppConfig:
    """Application configuration with type safety and validation"""

    # Core Flask settings
    secret_key: str = DEFAULT_SECRET_KEY
    debug: bool = False
    flask_env: str = 'development'

    # Server settings
    host: str = '0.0.0.0'
    port: int = 5000

    # Game settings
    game_duration_seconds: int = 30
    leaderboard_size: int = 10
    max_player_name_length: int = 20
    max_room_id_length: int = 50

    game_flow_check_interval: int = 1  # seconds between overdue-room sweeps
    broadcast_max_workers: int = 8  # size of the shared broadcast worker pool
    connection_ttl_seconds: int = 86400  # 24 hours

    # Gunicorn settings (for production deployment)
    worker_connections: int = 1000
    timeout: int = 30
    keepalive: int = 2
    log_level: str = 'info'

    environment: Environment = Environment.DEVELOPMENT

    def __post_init__(self):
        self._validate()

    def _validate(self):
        for name, (low, high) in _RANGES.items():
            value = getattr(self, name)
            if value < low or (high is not None and value > high):
                raise ConfigError(f"Invalid {name}: {value}")

        if self.environment == Environment.PRODUCTION and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigError("Production environment requires a secure SECRET_KEY")

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


def _parse_env_value(raw: str, default: Any) -> Any:
    """Convert an environment string to the type of the field's default."""
    if isinstance(default, bool):
        return raw.lower() in ('true', '1', 'yes', 'on')
    if isinstance(default, int):
        return int(raw)
    return raw


class ConfigurationFactory:
    """
    Factory for creating and managing application configuration.

    Every AppConfig field can be set from the environment variable of the
    same name in upper case (GAME_DURATION_SECONDS, LEADERBOARD_SIZE, ...).
    FLASK_ENV selects the environment and the debug default.
    """

    _instance: Optional['ConfigurationFactory'] = None
    _config: Optional[AppConfig] = None

    def __new__(cls) -> 'ConfigurationFactory':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, '_initialized'):
            self._logger = logging.getLogger(__name__)
            self._overrides: Dict[str, Any] = {}
            self._initialized = True

    def load_from_environment(self) -> AppConfig:
        """
        Load configuration from environment variables.

        Unparseable values are logged and replaced by the field default.

        Returns:
            Configured AppConfig instance
        """
        flask_env = os.environ.get('FLASK_ENV', 'development')
        try:
            environment = Environment(flask_env)
        except ValueError:
            environment = Environment.PRODUCTION

        values: Dict[str, Any] = {
            'flask_env': flask_env,
            'environment': environment,
            'debug': environment != Environment.PRODUCTION,
        }
        defaults = AppConfig()
        for field_info in fields(AppConfig):
            if field_info.name in ('flask_env', 'environment'):
                continue
            env_key = field_info.name.upper()
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            default = getattr(defaults, field_info.name)
            try:
                values[field_info.name] = _parse_env_value(raw, default)
            except ValueError:
                self._logger.warning(f"Invalid value for {env_key}: {raw}, using default: {default}")

        values.update(self._overrides)

        self._config = AppConfig(**values)
        self._logger.info(f"Configuration loaded for environment: {environment.value}")
        return self._config

    def load_from_dict(self, config_dict: Dict[str, Any]) -> AppConfig:
        """Load configuration from a dictionary (useful for testing)."""
        values = dict(config_dict)
        if isinstance(values.get('environment'), str):
            values['environment'] = Environment(values['environment'])

        self._config = AppConfig(**values)
        return self._config

    def override_setting(self, key: str, value: Any) -> 'ConfigurationFactory':
        """
        Override a setting now and on every later load.

        Raises:
            ConfigError: If the setting is unknown or the resulting configuration is invalid
        """
        if key not in {field_info.name for field_info in fields(AppConfig)}:
            raise ConfigError(f"Unknown setting: {key}")
        self._overrides[key] = value

        if self._config:
            setattr(self._config, key, value)
            self._config._validate()

        return self

    def get_config(self) -> AppConfig:
        """
        Get the current configuration.

        Raises:
            ConfigError: If no configuration has been loaded
        """
        if self._config is None:
            raise ConfigError("Configuration not loaded. Call load_from_environment() or load_from_dict() first.")
        return self._config

    def reset(self) -> 'ConfigurationFactory':
        self._config = None
        self._overrides.clear()
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Current configuration as plain values."""
        config_dict = asdict(self.get_config())
        config_dict['environment'] = self._config.environment.value
        return config_dict

    def get_flask_config(self) -> Dict[str, Any]:
        """Values for Flask's app.config.update()."""
        config = self.get_config()
        return {
            'SECRET_KEY': config.secret_key,
            'DEBUG': config.debug,
            'ENV': config.flask_env,
            'GAME_DURATION_SECONDS': config.game_duration_seconds,
            'LEADERBOARD_SIZE': config.leaderboard_size,
        }


# Global factory instance
_config_factory = ConfigurationFactory()


def get_config() -> AppConfig:
    """Get the global application configuration"""
    return _config_factory.get_config()


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    return _config_factory.load_from_environment()
