"""
Error Response Factory for the Click Race coordinator

Provides standardized error message creation and the handler decorator that
turns exceptions into error replies for the initiating connection.
"""

import logging
import traceback
from functools import wraps
from typing import Any, Dict, Optional

from clickrace.core.errors import ClickRaceError, ErrorCode, StorageError

logger = logging.getLogger(__name__)


class ErrorResponseFactory:
    """Factory responsible for creating standardized error responses."""

    def create_error_response(self, code: ErrorCode, message: str, details: Optional[Dict] = None) -> Dict[str, Any]:
        """
        Create standardized error message.

        Args:
            code: Error code enum
            message: Human-readable error message
            details: Optional additional error details

        Returns:
            Error message ready to send to a connection
        """
        return {
            'type': 'error',
            'code': code.value,
            'message': message,
            'details': details or {}
        }

    def handle_exception(self, e: Exception, context: str = "Unknown") -> Dict[str, Any]:
        """
        Map an exception raised while handling an action to an error message.

        Args:
            e: Exception instance
            context: Context where the exception occurred

        Returns:
            Error message for the caller
        """
        if isinstance(e, StorageError):
            logger.error(f"Storage failure in {context}: {e.message}")
            return self.create_error_response(e.code, "Storage is temporarily unavailable")

        if isinstance(e, ClickRaceError):
            logger.warning(f"{context} rejected: {e.code.value} - {e.message}")
            return self.create_error_response(e.code, e.message, e.details)

        logger.error(f"Unexpected exception in {context}: {str(e)}")
        logger.error(f"Exception traceback: {traceback.format_exc()}")
        return self.create_error_response(ErrorCode.INTERNAL_ERROR, "An internal error occurred")


def with_error_handling(func):
    """
    Decorator for action handler methods to provide consistent error handling.

    The wrapped method's instance must provide ``error_response_factory`` and
    ``reply``; any exception becomes an error message sent to the caller.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except Exception as e:
            error_response = self.error_response_factory.handle_exception(e, func.__name__)
            self.reply(error_response)
            return None
    return wrapper
