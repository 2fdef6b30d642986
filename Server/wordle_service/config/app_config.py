"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Shared Store Settings (in-memory store is used when MONGO_URI is unset)
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'wordle_game')
    SESSION_TTL_SECONDS = int(os.getenv('SESSION_TTL_SECONDS', 24 * 60 * 60))

    # Game Settings
    MAX_GUESSES = int(os.getenv('MAX_GUESSES', 6))

    # Word Corpus Settings
    WORD_SOURCE_URL = os.getenv(
        'WORD_SOURCE_URL',
        'https://raw.githubusercontent.com/tabatkins/wordle-list/main/words'
    )
    WORD_SOURCE_TIMEOUT_SECONDS = float(os.getenv('WORD_SOURCE_TIMEOUT_SECONDS', 10))
    WORD_CACHE_KEY = os.getenv('WORD_CACHE_KEY', 'wordle:dictionary:v1')
    WORD_CACHE_TTL_SECONDS = int(os.getenv('WORD_CACHE_TTL_SECONDS', 24 * 60 * 60))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    MONGO_URI = None
    WORD_SOURCE_URL = 'http://words.invalid/words'
    WORD_SOURCE_TIMEOUT_SECONDS = 0.1


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
