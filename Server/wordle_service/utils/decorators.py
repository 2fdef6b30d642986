"""
Request Decorators

Contains decorators shared by the HTTP controllers.
"""

from functools import wraps
from flask import request

from .helpers import error_response, get_game_engine, get_owner_id


def with_owner(f):
    """
    Decorator that resolves the calling player before the endpoint runs.

    Sets request.owner_id to the gateway-forwarded owner id, or None for
    anonymous callers.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        request.owner_id = get_owner_id(request)
        return f(*args, **kwargs)

    return decorated_function


def require_engine(f):
    """Decorator that answers 500 when no game engine is attached to the app."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if get_game_engine() is None:
            return error_response('Game service unavailable', 500)
        return f(*args, **kwargs)

    return decorated_function
