"""
Services Package

Contains all business logic and service classes.
"""

from .game_engine import GameEngine, evaluate_guess, initialize_game_engine
from .session_store import MemorySessionStore, MongoSessionStore, SessionStore, create_session_store
from .word_corpus import WordCorpusProvider, canonicalize_word, canonicalize_words

__all__ = [
    'GameEngine', 'evaluate_guess', 'initialize_game_engine',
    'SessionStore', 'MemorySessionStore', 'MongoSessionStore', 'create_session_store',
    'WordCorpusProvider', 'canonicalize_word', 'canonicalize_words'
]
