"""
Word Corpus Provider

Owns the set of valid 5-letter words. The corpus is loaded through an
ordered list of strategies (remote word list, shared cache, embedded
fallback list) and answers validation, lookup and random-draw queries
from memory once loaded.
"""

import json
import random
import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import requests

from ..config.game_settings import FALLBACK_WORDS, WORD_LENGTH, get_word_statistics
from ..errors import ServiceUnavailableError
from ..utils.game_logger import game_logger
from .session_store import SessionStore

DEFAULT_SOURCE_URL = "https://raw.githubusercontent.com/tabatkins/wordle-list/main/words"
DEFAULT_CACHE_KEY = "wordle:dictionary:v1"
DEFAULT_CACHE_TTL = 24 * 60 * 60


def canonicalize_word(word) -> Optional[str]:
    """Return the uppercase form of a well-formed word, or None."""
    if not isinstance(word, str):
        return None
    normalized = word.strip().upper()
    if len(normalized) != WORD_LENGTH or not (normalized.isascii() and normalized.isalpha()):
        return None
    return normalized


def canonicalize_words(tokens: Iterable[str]) -> List[str]:
    """
    Canonicalize raw tokens into corpus words.

    Tokens are stripped and uppercased; anything that is not exactly five
    ASCII letters is dropped. Duplicates are removed, first occurrence wins.
    """
    words: List[str] = []
    seen = set()
    for token in tokens:
        word = canonicalize_word(token)
        if word and word not in seen:
            seen.add(word)
            words.append(word)
    return words


class _Corpus(NamedTuple):
    words: frozenset
    word_list: Tuple[str, ...]
    source: str
    loaded_at: datetime


class WordCorpusProvider:
    """
    Loads the word corpus and answers queries against it.

    Strategies, tried in order until one yields words:
    - remote: download the line-delimited list, then cache it in the store
    - cache: read the list cached in the store by an earlier download
    - fallback: the embedded word list, always available

    Loading is single-flight: concurrent callers wait for the load already
    in progress instead of contacting the remote source themselves.
    """

    def __init__(self,
                 store: Optional[SessionStore],
                 source_url: str = DEFAULT_SOURCE_URL,
                 timeout: float = 10.0,
                 cache_key: str = DEFAULT_CACHE_KEY,
                 cache_ttl: int = DEFAULT_CACHE_TTL,
                 fallback_words: Sequence[str] = FALLBACK_WORDS,
                 http_session: Optional[requests.Session] = None):
        self.store = store
        self.source_url = source_url
        self.timeout = timeout
        self.cache_key = cache_key
        self.cache_ttl = cache_ttl
        self.fallback_words = tuple(fallback_words)
        self.http = http_session or requests.Session()

        self._lock = threading.Lock()
        self._corpus: Optional[_Corpus] = None

    @property
    def initialized(self) -> bool:
        return self._corpus is not None

    def initialize(self) -> int:
        """
        Load the corpus if it is not loaded yet.

        Returns:
            int: Number of words in the corpus

        Raises:
            ServiceUnavailableError: If every strategy failed
        """
        return len(self._ensure_corpus().words)

    def refresh(self) -> int:
        """
        Discard the corpus and its cache entry, then reload.

        The cache read is skipped so a stale cached list cannot satisfy
        the refresh.

        Returns:
            int: Number of words in the new corpus

        Raises:
            ServiceUnavailableError: If every strategy failed
        """
        with self._lock:
            game_logger.logger.info("Refreshing word corpus")
            self._corpus = None

            if self.store is not None:
                try:
                    self.store.delete(self.cache_key)
                except ServiceUnavailableError as e:
                    game_logger.logger.warning(f"Failed to clear cached word list: {e}")

            self._corpus = self._load([
                ("remote", self._load_from_remote),
                ("fallback", self._load_from_fallback),
            ])
            return len(self._corpus.words)

    def validate(self, word) -> bool:
        """
        Check whether a word is in the corpus.

        Malformed input (not five letters) is rejected without touching
        the corpus.
        """
        normalized = canonicalize_word(word)
        if normalized is None:
            return False
        return normalized in self._ensure_corpus().words

    def random_word(self) -> str:
        """Return a uniformly chosen corpus word."""
        return random.choice(self._ensure_corpus().word_list)

    def size(self) -> int:
        corpus = self._corpus
        return len(corpus.words) if corpus else 0

    def stats(self) -> dict:
        """Corpus statistics for monitoring endpoints."""
        corpus = self._corpus
        statistics = get_word_statistics(corpus.word_list if corpus else ())
        return {
            "initialized": corpus is not None,
            "total_words": statistics["total_words"],
            "source": corpus.source if corpus else None,
            "loaded_at": corpus.loaded_at.isoformat() if corpus else None,
            "avg_vowel_count": statistics["avg_vowel_count"],
            "most_common_letters": statistics["most_common_letters"],
        }

    def _ensure_corpus(self) -> _Corpus:
        corpus = self._corpus
        if corpus is not None:
            return corpus

        with self._lock:
            # Another caller may have finished the load while we waited
            if self._corpus is None:
                self._corpus = self._load([
                    ("remote", self._load_from_remote),
                    ("cache", self._load_from_cache),
                    ("fallback", self._load_from_fallback),
                ])
            return self._corpus

    def _load(self, strategies: List[Tuple[str, Callable[[], List[str]]]]) -> _Corpus:
        # Caller holds self._lock
        for name, strategy in strategies:
            try:
                game_logger.logger.info(f"Trying to load word corpus from {name}")
                words = canonicalize_words(strategy())
            except (requests.RequestException, ServiceUnavailableError, ValueError) as e:
                game_logger.logger.warning(f"Word corpus strategy '{name}' failed: {e}")
                continue

            if words:
                game_logger.logger.info(f"Word corpus loaded from {name}: {len(words)} words")
                return _Corpus(frozenset(words), tuple(words), name, datetime.now(timezone.utc))

            game_logger.logger.warning(f"Word corpus strategy '{name}' yielded no words")

        game_logger.logger.error("All word corpus loading strategies failed")
        raise ServiceUnavailableError("Word corpus unavailable: all loading strategies failed")

    def _load_from_remote(self) -> List[str]:
        response = self.http.get(
            self.source_url,
            timeout=self.timeout,
            headers={"User-Agent": "Wordle-Session-Service/1.0", "Accept": "text/plain"}
        )
        response.raise_for_status()

        words = canonicalize_words(response.text.splitlines())
        if not words:
            raise ValueError("No valid words found in remote word list")

        if self.store is not None:
            try:
                self.store.set(self.cache_key, json.dumps(words), self.cache_ttl)
                game_logger.logger.info(f"Cached {len(words)} words under '{self.cache_key}'")
            except ServiceUnavailableError as e:
                game_logger.logger.warning(f"Failed to cache word list: {e}")

        return words

    def _load_from_cache(self) -> List[str]:
        if self.store is None:
            return []

        cached = self.store.get(self.cache_key)
        if not cached:
            return []

        words = json.loads(cached)
        if not isinstance(words, list):
            raise ValueError("Cached word list is not an array")
        return words

    def _load_from_fallback(self) -> List[str]:
        return list(self.fallback_words)
