"""
Action Router

Maps the closed set of action variants to their handlers, with request
logging and Socket.IO event registration. Every inbound event is parsed
into an action variant before dispatch, so unknown events are answered
by the handler registered for UnrecognizedAction.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, List, Type

from flask import request

from clickrace.core.actions import ACTION_NAMES, ACTION_TYPES, ENVELOPE_EVENT, Action, parse_action

logger = logging.getLogger(__name__)


class ActionRouteNotFoundError(Exception):
    """Raised when no handler is registered for an action variant."""
    pass


class IncompleteRoutingError(Exception):
    """Raised when some action variants have no handler."""
    pass


class ActionRouter:
    """
    Router from action variants to handlers.

    Provides type-keyed handler mapping, after-request hooks and logging
    for every handled event.
    """

    def __init__(self):
        self._routes: Dict[Type, Callable] = {}
        self._after_request_handlers: List[Callable] = []

    def register_route(self, action_type: Type, handler: Callable) -> None:
        """Register the handler for an action variant."""
        if action_type not in ACTION_TYPES:
            raise ValueError(f"{action_type.__name__} is not an action variant")
        self._routes[action_type] = handler
        logger.debug(f"Registered route: {action_type.__name__} -> {getattr(handler, '__name__', handler)}")

    def add_after_request(self, handler: Callable) -> None:
        """Add a handler that will be executed after every request."""
        self._after_request_handlers.append(handler)

    def missing_routes(self) -> List[Type]:
        return [action_type for action_type in ACTION_TYPES if action_type not in self._routes]

    def ensure_complete(self) -> None:
        """
        Check that every action variant has a handler.

        Raises:
            IncompleteRoutingError: If any variant is unhandled
        """
        missing = self.missing_routes()
        if missing:
            names = ', '.join(action_type.__name__ for action_type in missing)
            raise IncompleteRoutingError(f"No handler registered for: {names}")

    def dispatch(self, action: Action) -> Any:
        """
        Call the handler registered for the action's variant.

        Raises:
            ActionRouteNotFoundError: If the variant has no handler
        """
        handler = self._routes.get(type(action))
        if handler is None:
            raise ActionRouteNotFoundError(f"No handler registered for {type(action).__name__}")
        return handler(action)

    def handle_event(self, event_name: str, data: Any = None) -> Any:
        """
        Parse an incoming Socket.IO event into an action and dispatch it.

        Args:
            event_name: The name of the event
            data: The event data

        Returns:
            The result from the handler (if any)
        """
        logger.info(f"Handling event: {event_name} from client: {request.sid}")  # type: ignore[attr-defined]
        if data is not None:
            logger.debug(f"Event data: {data}")

        action = parse_action(event_name, data)

        try:
            result = self.dispatch(action)
            for handler in self._after_request_handlers:
                handler(action, result)
            return result
        except Exception as e:
            logger.error(f"Error handling event {event_name}: {str(e)}")
            raise

    def get_registered_actions(self) -> List[Type]:
        return list(self._routes.keys())


def register_with_socketio(router: ActionRouter, socketio_instance) -> List[str]:
    """
    Register Socket.IO events that route through the router.

    Each recognized action has its own event, the ``action`` envelope event
    carries the name in its payload, and a catch-all handler turns any other
    event into an unrecognized action.

    Returns:
        The event names registered
    """
    router.ensure_complete()

    def create_socketio_handler(event_name: str):
        @wraps(router.handle_event)
        def socketio_handler(data=None):
            return router.handle_event(event_name, data)
        return socketio_handler

    event_names = list(ACTION_NAMES.keys()) + [ENVELOPE_EVENT]
    for event_name in event_names:
        socketio_instance.on_event(event_name, create_socketio_handler(event_name))
        logger.debug(f"Registered SocketIO handler for: {event_name}")

    def catch_all_handler(event_name, data=None):
        return router.handle_event(event_name, data)

    socketio_instance.on_event('*', catch_all_handler)

    return event_names


def setup_router(socketio_instance, routes: Dict[Type, Callable]) -> ActionRouter:
    """Build a router with its routes and register it with SocketIO."""
    router = ActionRouter()
    for action_type, handler in routes.items():
        router.register_route(action_type, handler)
    register_with_socketio(router, socketio_instance)

    logger.info("Action router initialized")
    return router
