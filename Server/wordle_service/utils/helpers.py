"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Optional, Tuple

from flask import current_app, jsonify, request

OWNER_HEADER = 'X-User-Id'


def get_owner_id(request_obj=None) -> Optional[str]:
    """
    Extract the owner id forwarded by the upstream gateway.

    The gateway authenticates the player and forwards the id in the
    X-User-Id header; a userId field in the JSON body or query string is
    also accepted.
    """
    if request_obj is None:
        request_obj = request

    owner_id = request_obj.headers.get(OWNER_HEADER)
    if not owner_id:
        data = request_obj.get_json(silent=True) or {}
        owner_id = data.get('userId') if isinstance(data, dict) else None
    if not owner_id:
        owner_id = request_obj.args.get('userId')

    owner_id = str(owner_id).strip() if owner_id else ''
    return owner_id or None


def get_game_engine():
    """Get the game engine attached to the current application."""
    return getattr(current_app, 'game_engine', None)


def error_response(message: str, status_code: int) -> Tuple:
    """Standard JSON error body."""
    return jsonify({
        'success': False,
        'error': message
    }), status_code
