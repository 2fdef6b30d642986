"""
Wordle Session Service - Main Entry Point

This is the main entry point for the game session service.
It builds the session store, loads the word corpus and starts the Flask application.
"""

import sys

from wordle_service import create_app
from wordle_service.config import Config, validate_word_list_integrity
from wordle_service.errors import ServiceUnavailableError
from wordle_service.services.game_engine import initialize_game_engine
from wordle_service.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Initializing services...")

        validate_word_list_integrity()

        engine = initialize_game_engine(Config)
        print(f"✓ Session store ready ({type(engine.store).__name__})")

        # The engine cannot serve games without a corpus
        try:
            word_count = engine.corpus.initialize()
        except ServiceUnavailableError as e:
            print(f"✗ Failed to load word corpus: {e}")
            game_logger.logger.error(f"Word corpus could not be loaded: {e}")
            sys.exit(1)
        print(f"✓ Word corpus loaded: {word_count} words from {engine.corpus.stats()['source']}")

        print("Creating Flask application...")
        app = create_app(Config, engine)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Wordle Session Service starting")

        print(f"\nStarting Wordle Session Service on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, threaded=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Wordle Session Service shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
