"""
Service Container - Dependency Injection Container for Click Race
Builds each service once, wiring the collaborators it names.
"""

from typing import Dict, Any, List, Optional, Callable


class CircularDependencyError(Exception):
    """Raised when circular dependency is detected"""
    pass


class ServiceNotFoundError(Exception):
    """Raised when requested service is not registered"""
    pass


class ServiceContainer:
    """
    Dependency Injection Container for the click race services.

    Every service is a singleton within the container. Dependencies are
    passed positionally in the order they are declared; framework objects
    such as the SocketIO instance are supplied as external dependencies.
    """

    def __init__(self):
        self._factories: Dict[str, Callable] = {}
        self._dependencies: Dict[str, List[str]] = {}
        self._instances: Dict[str, Any] = {}
        self._resolving: List[str] = []
        self._config: Dict[str, Any] = {}

    def register(self, name: str, factory: Callable, dependencies: Optional[List[str]] = None) -> 'ServiceContainer':
        """
        Register a service factory.

        Args:
            name: Service name for retrieval
            factory: Class or function called with the resolved dependencies
            dependencies: Names of the services passed to the factory, in order
        """
        if name in self._factories:
            raise ValueError(f"Service '{name}' is already registered")
        if not callable(factory):
            raise ValueError(f"Factory for '{name}' must be callable")

        self._factories[name] = factory
        self._dependencies[name] = list(dependencies or [])
        return self

    def configure_services(self) -> 'ServiceContainer':
        """Register the stores, services and the room session engine."""
        from clickrace.stores.connection_directory import ConnectionDirectory
        from clickrace.stores.room_store import RoomStore
        from clickrace.stores.leaderboard_index import LeaderboardIndex
        from clickrace.services import (
            BroadcastService,
            ConcurrencyControlService,
            ErrorResponseFactory,
            GameTimerService,
            RoomSessionEngine,
            SocketIOMessageSender,
            ValidationService,
        )

        # Collaborators of the engine
        self.register('ConnectionDirectory', ConnectionDirectory)
        self.register('RoomStore', RoomStore)
        self.register('LeaderboardIndex', LeaderboardIndex)

        self.register('ValidationService', ValidationService)
        self.register('ErrorResponseFactory', ErrorResponseFactory)
        self.register('ConcurrencyControlService', ConcurrencyControlService)
        self.register('GameTimerService', GameTimerService)

        # socketio is injected as an external dependency
        self.register('MessageSender', SocketIOMessageSender, dependencies=['socketio'])
        self.register('BroadcastService', BroadcastService, dependencies=['ConnectionDirectory', 'MessageSender'])

        self.register('RoomSessionEngine', RoomSessionEngine, dependencies=[
            'RoomStore', 'LeaderboardIndex', 'ConnectionDirectory', 'BroadcastService', 'GameTimerService',
            'ValidationService', 'ConcurrencyControlService'
        ])

        return self

    def set_external_dependency(self, name: str, instance: Any) -> 'ServiceContainer':
        """Provide an object created outside the container, e.g. the SocketIO instance."""
        self._instances[name] = instance
        return self

    def set_config(self, config: Dict[str, Any]) -> 'ServiceContainer':
        self._config.update(config)
        return self

    def get_config(self, name: str, default: Any = None) -> Any:
        return self._config.get(name, default)

    def get(self, name: str) -> Any:
        """
        Get a service instance, building it and its dependencies on first use.

        Raises:
            ServiceNotFoundError: If the service is not registered
            CircularDependencyError: If the service depends on itself
        """
        if name in self._instances:
            return self._instances[name]
        if name not in self._factories:
            raise ServiceNotFoundError(f"Service '{name}' is not registered")

        if name in self._resolving:
            cycle = ' -> '.join(self._resolving + [name])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")

        self._resolving.append(name)
        try:
            dependencies = [self.get(dependency) for dependency in self._dependencies[name]]
            instance = self._factories[name](*dependencies)
        finally:
            self._resolving.remove(name)

        self._instances[name] = instance
        return instance

    def has_service(self, name: str) -> bool:
        return name in self._factories or name in self._instances

    def validate_dependencies(self) -> Dict[str, List[str]]:
        """
        Check that every declared dependency can be resolved.

        Returns:
            Service names mapped to their unresolvable dependencies
        """
        issues = {}
        for name, dependencies in self._dependencies.items():
            missing = [dep for dep in dependencies if not self.has_service(dep)]
            if missing:
                issues[name] = missing
        return issues

    def clear(self) -> 'ServiceContainer':
        self._factories.clear()
        self._dependencies.clear()
        self._instances.clear()
        self._resolving.clear()
        self._config.clear()
        return self


# Global container instance for the application
_app_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global application service container"""
    global _app_container
    if _app_container is None:
        _app_container = ServiceContainer()
    return _app_container


def configure_container(socketio=None, config=None) -> ServiceContainer:
    """
    Configure the global service container with Click Race services.

    Args:
        socketio: Flask-SocketIO instance
        config: Application configuration values

    Returns:
        Configured service container
    """
    container = get_container()
    container.clear()

    if socketio is not None:
        container.set_external_dependency('socketio', socketio)
    if config is not None:
        container.set_config(config)

    return container.configure_services()
