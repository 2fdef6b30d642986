"""
Wordle Session Service Application Package

Game session engine and word corpus provider behind a thin Flask request
adapter. All game state lives in a shared session store so that several
stateless instances can run behind a load balancer.
"""

from flask import Flask
from flask_cors import CORS
from .config import Config


def create_app(config_class=Config, engine=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        engine: Pre-built GameEngine; built from config_class when omitted

    Returns:
        Flask application instance with the game engine attached
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)

    if engine is None:
        from .services.game_engine import initialize_game_engine
        engine = initialize_game_engine(config_class)

    # Register blueprints
    from .controllers.game_controller import game_bp
    from .controllers.dictionary_controller import dictionary_bp

    app.register_blueprint(game_bp, url_prefix='/api')
    app.register_blueprint(dictionary_bp, url_prefix='/api/dictionary')

    # Store the engine for use in request handlers
    app.game_engine = engine

    return app
