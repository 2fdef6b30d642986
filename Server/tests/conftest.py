import os
import sys
import tempfile
from unittest.mock import MagicMock

import pytest
import requests

# Keep test logs out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordle-test-logs-'))

# Ensure the server root (containing the `wordle_service` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SERVER_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if SERVER_ROOT not in sys.path:
    sys.path.insert(0, SERVER_ROOT)

from wordle_service import create_app
from wordle_service.config import TestingConfig
from wordle_service.services.game_engine import GameEngine
from wordle_service.services.session_store import MemorySessionStore
from wordle_service.services.word_corpus import WordCorpusProvider

TEST_WORDS = [
    'CRANE', 'SLATE', 'HELLO', 'WORLD', 'SPEED',
    'ERASE', 'ABOUT', 'PLANT', 'TRAIN', 'LIGHT',
]

SOURCE_URL = 'http://words.test/words'


class FakeClock:
    """Monotonic clock the tests move forward by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(text: str = '', status_code: int = 200):
    response = MagicMock()
    response.text = text
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} error')
    return response


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    return MemorySessionStore(clock=clock)


@pytest.fixture()
def http():
    """requests.Session stand-in; offline unless a test says otherwise."""
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError('offline')
    return session


@pytest.fixture()
def corpus(store, http):
    return WordCorpusProvider(
        store,
        source_url=SOURCE_URL,
        timeout=0.1,
        fallback_words=TEST_WORDS,
        http_session=http
    )


@pytest.fixture()
def engine(corpus, store):
    return GameEngine(corpus, store)


@pytest.fixture()
def set_target(corpus, monkeypatch):
    """Fix the word drawn for every new session."""
    def _set(word):
        monkeypatch.setattr(corpus, 'random_word', lambda: word)
    return _set


@pytest.fixture()
def flask_app(engine):
    return create_app(TestingConfig, engine)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
