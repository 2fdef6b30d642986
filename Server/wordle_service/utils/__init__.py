"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_engine, with_owner
from .helpers import error_response, get_game_engine, get_owner_id
from .game_logger import game_logger

__all__ = [
    'require_engine', 'with_owner',
    'error_response', 'get_game_engine', 'get_owner_id',
    'game_logger'
]
