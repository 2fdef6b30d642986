"""
Dictionary Controller

Handles word corpus endpoints: statistics, refresh and single-word lookup.
"""

from flask import Blueprint, request, jsonify

from ..errors import GameServiceError
from ..utils.decorators import require_engine
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response, get_game_engine

dictionary_bp = Blueprint('dictionary', __name__)


@dictionary_bp.route('/stats', methods=['GET'])
@require_engine
def get_stats():
    """Return corpus size and statistics."""
    corpus = get_game_engine().corpus

    game_logger.log_user_action(request, 'dictionary_stats')

    response_data = {
        'success': True,
        'data': {
            'word_count': corpus.size(),
            **corpus.stats()
        }
    }

    game_logger.log_server_response(request, 'dictionary_stats', True, response_data)
    return jsonify(response_data)


@dictionary_bp.route('/refresh', methods=['POST'])
@require_engine
def refresh():
    """Reload the corpus from the remote source, bypassing the cache."""
    try:
        corpus = get_game_engine().corpus

        game_logger.log_user_action(request, 'dictionary_refresh')

        word_count = corpus.refresh()

        response_data = {
            'success': True,
            'message': 'Dictionary refreshed',
            'data': {'word_count': word_count, 'source': corpus.stats()['source']}
        }

        game_logger.log_server_response(request, 'dictionary_refresh', True, response_data)
        return jsonify(response_data)

    except GameServiceError as e:
        game_logger.log_error(request, e, 'dictionary_refresh')
        game_logger.log_server_response(request, 'dictionary_refresh', False, {'success': False, 'error': e.message})
        return error_response(e.message, e.status_code)


@dictionary_bp.route('/validate/<word>', methods=['GET'])
@require_engine
def validate_word(word):
    """Check whether a word is accepted as a guess."""
    try:
        corpus = get_game_engine().corpus

        game_logger.log_user_action(request, 'dictionary_validate', word=word)

        response_data = {
            'success': True,
            'data': {
                'word': word.strip().upper(),
                'valid': corpus.validate(word)
            }
        }

        game_logger.log_server_response(request, 'dictionary_validate', True, response_data)
        return jsonify(response_data)

    except GameServiceError as e:
        game_logger.log_error(request, e, 'dictionary_validate')
        return error_response(e.message, e.status_code)
