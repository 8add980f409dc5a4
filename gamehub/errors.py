"""
GameHub - error taxonomy and the Flask handlers that render it.

Services raise the exceptions below; the HTTP layer turns each into a JSON
body ``{"error": "<message>"}`` with the matching status code.
"""
import logging
from functools import wraps

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger('gamehub.errors')


class GameHubError(Exception):
    """Base exception for GameHub"""
    status_code = 500

    def __init__(self, message: str = 'Internal server error'):
        self.message = message
        super().__init__(message)

    def to_dict(self):
        return {'error': self.message}


class ValidationError(GameHubError):
    """Malformed or missing input"""
    status_code = 400


class UnauthorizedError(GameHubError):
    """Missing credential or failed login"""
    status_code = 401

    def __init__(self, message: str = 'Access token required'):
        super().__init__(message)


class ForbiddenError(GameHubError):
    """Valid session without the required role or ownership"""
    status_code = 403

    def __init__(self, message: str = 'Insufficient permissions'):
        super().__init__(message)


class NotFoundError(GameHubError):
    status_code = 404


class ConflictError(GameHubError):
    status_code = 409


class InternalError(GameHubError):
    status_code = 500


def handle_errors(failure_message: str):
    """Decorator converting unexpected exceptions into :class:`InternalError`.

    :class:`GameHubError` and werkzeug HTTP exceptions pass through untouched;
    anything else is logged with its traceback and reported as
    *failure_message*.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except (GameHubError, HTTPException):
                raise
            except Exception as e:
                logger.exception('Unhandled exception in %s: %s', f.__name__, e)
                raise InternalError(failure_message) from e
        return wrapper
    return decorator


def register_error_handlers(app):
    """Register exception handlers with the Flask app"""

    @app.errorhandler(GameHubError)
    def handle_gamehub_error(e):
        if e.status_code >= 500:
            logger.error('%s: %s', type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({'error': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        logger.exception('Unexpected error: %s', e)
        return jsonify({'error': 'Internal server error'}), 500
