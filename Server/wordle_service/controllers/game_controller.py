"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict

from flask import Blueprint, request, jsonify

from ..errors import GameServiceError
from ..utils.decorators import require_engine, with_owner
from ..utils.game_logger import game_logger
from ..utils.helpers import error_response, get_game_engine

game_bp = Blueprint('game', __name__)


def _handle_error(action: str, error: Exception, session_id=None):
    """Log a failed request and build its JSON error response."""
    game_logger.log_error(request, error, action, session_id)

    if isinstance(error, GameServiceError):
        message, status_code = error.message, error.status_code
    else:
        message, status_code = 'Internal server error', 500

    game_logger.log_server_response(
        request, action, False, {'success': False, 'error': message}, session_id,
        status_code=status_code
    )
    return error_response(message, status_code)


@game_bp.route('/game/start', methods=['POST'])
@require_engine
@with_owner
def start_game():
    """Create a new game session."""
    try:
        engine = get_game_engine()

        game_logger.log_user_action(request, 'start_game')

        view = engine.create_session(request.owner_id)

        response_data = {
            'success': True,
            'message': 'Game started successfully',
            'data': asdict(view)
        }

        game_logger.log_server_response(
            request, 'start_game', True, response_data, view.session_id,
            max_guesses=view.max_guesses
        )

        return jsonify(response_data), 201

    except Exception as e:
        return _handle_error('start_game', e)


@game_bp.route('/game/<session_id>/guess', methods=['POST'])
@require_engine
@with_owner
def make_guess(session_id):
    """Submit a guess for validation and evaluation."""
    try:
        engine = get_game_engine()

        data = request.get_json(silent=True)
        if not data or 'guess' not in data:
            error = {'success': False, 'error': 'Guess is required'}
            game_logger.log_server_response(request, 'submit_guess', False, error, session_id)
            return jsonify(error), 400

        guess = data['guess']

        game_logger.log_user_action(request, 'submit_guess', session_id, guess=guess)

        result = engine.submit_guess(session_id, guess, request.owner_id)

        response_data = {
            'success': True,
            'message': 'Guess processed' if result.valid else 'Word not in dictionary',
            'data': asdict(result)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, session_id,
            guess=result.guess, valid=result.valid, status=result.status
        )

        return jsonify(response_data)

    except Exception as e:
        return _handle_error('submit_guess', e, session_id)


@game_bp.route('/game/active/<owner_id>', methods=['GET'])
@require_engine
@with_owner
def get_active_game(owner_id):
    """Get the owner's active game, if any."""
    try:
        engine = get_game_engine()

        game_logger.log_user_action(request, 'get_active_game', owner=owner_id)

        view = engine.get_active_session(owner_id)
        if view is None:
            response_data = {
                'success': True,
                'message': 'No active game found',
                'data': None
            }
        else:
            response_data = {
                'success': True,
                'data': asdict(view)
            }

        game_logger.log_server_response(
            request, 'get_active_game', True, response_data,
            view.session_id if view else None
        )

        return jsonify(response_data)

    except Exception as e:
        return _handle_error('get_active_game', e)


@game_bp.route('/game/<session_id>', methods=['GET'])
@require_engine
@with_owner
def get_game(session_id):
    """Get current game state."""
    try:
        engine = get_game_engine()

        game_logger.log_user_action(request, 'get_game', session_id)

        view = engine.get_session(session_id, request.owner_id)

        response_data = {
            'success': True,
            'data': asdict(view)
        }

        game_logger.log_server_response(
            request, 'get_game', True, response_data, session_id,
            status=view.status
        )

        return jsonify(response_data)

    except Exception as e:
        return _handle_error('get_game', e, session_id)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    engine = get_game_engine()
    corpus_size = engine.corpus.size() if engine else 0
    store_available = bool(engine and engine.store.ping())

    healthy = corpus_size > 0 and store_available
    response_data = {
        'status': 'healthy' if healthy else 'unhealthy',
        'checks': {
            'dictionary': {
                'status': 'healthy' if corpus_size > 0 else 'unhealthy',
                'word_count': corpus_size
            },
            'session_store': {
                'status': 'healthy' if store_available else 'unhealthy'
            }
        },
        'log_stats': game_logger.get_log_stats()
    }

    return jsonify(response_data), (200 if healthy else 503)
