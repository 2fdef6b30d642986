"""
Game Engine

Contains the session lifecycle and the Wordle guess evaluation.

Sessions live in the shared SessionStore, never in process memory, so any
number of server instances can serve the same player. Guesses are applied
with a compare-and-swap on the stored session version, and the per-owner
active session pointer is created with an atomic set-if-absent.
"""

import json
import uuid
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import ALPHABET, MAX_GUESSES, WORD_LENGTH
from ..errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from ..models.game import GameSession, GameStatus, GuessResult, LetterStatus, SessionView, utc_now
from ..utils.game_logger import game_logger
from .session_store import SessionStore, create_session_store
from .word_corpus import WordCorpusProvider, canonicalize_word

SESSION_KEY_PREFIX = "game:"
ACTIVE_SESSION_KEY_PREFIX = "active_game:"
DEFAULT_SESSION_TTL = 24 * 60 * 60

# Keyboard upgrade order: a letter never moves back to a lower rank
_LETTER_PRIORITY = {
    LetterStatus.UNUSED: 0,
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


def evaluate_guess(guess: str, target: str) -> List[LetterStatus]:
    """
    Implements the authentic Wordle letter evaluation algorithm.

    Pass 1 marks exact matches and consumes those target positions.
    Pass 2 gives each remaining guess letter the leftmost unconsumed
    matching target position, if any. A letter is therefore never marked
    CORRECT or PRESENT more often than it occurs in the target.
    """
    if len(guess) != len(target):
        raise ValueError("Guess and target must have the same length")

    result: List[Optional[LetterStatus]] = [None] * len(target)
    consumed = [False] * len(target)

    for i, letter in enumerate(guess):
        if letter == target[i]:
            result[i] = LetterStatus.CORRECT
            consumed[i] = True

    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        result[i] = LetterStatus.ABSENT
        for j, target_letter in enumerate(target):
            if not consumed[j] and target_letter == letter:
                result[i] = LetterStatus.PRESENT
                consumed[j] = True
                break

    return result


def build_letter_status(evaluations: List[Tuple[str, List[LetterStatus]]]) -> Dict[str, str]:
    """Keyboard map A-Z for a sequence of (guess, feedback) pairs."""
    letter_status = {letter: LetterStatus.UNUSED for letter in ALPHABET}
    for guess, feedback in evaluations:
        for letter, new_status in zip(guess, feedback):
            if _LETTER_PRIORITY[new_status] > _LETTER_PRIORITY[letter_status[letter]]:
                letter_status[letter] = new_status
    return {letter: status.value for letter, status in letter_status.items()}


class GameEngine:
    """
    Core game engine managing session lifecycle.

    This class handles:
    - Session creation with a secret target word
    - The one-active-session-per-owner rule
    - Guess validation, evaluation and the ACTIVE -> WON/LOST state machine
    - Session views that never expose the answer of an active session
    """

    def __init__(self,
                 corpus: WordCorpusProvider,
                 store: SessionStore,
                 max_guesses: int = MAX_GUESSES,
                 session_ttl: int = DEFAULT_SESSION_TTL,
                 max_write_attempts: int = 5):
        self.corpus = corpus
        self.store = store
        self.max_guesses = max_guesses
        self.session_ttl = session_ttl
        self.max_write_attempts = max_write_attempts

    def create_session(self, owner_id: Optional[str] = None) -> SessionView:
        """
        Creates a new session with a randomly selected word.

        Args:
            owner_id: Owning player, or None for an anonymous session

        Returns:
            SessionView: The new session, without its target word

        Raises:
            ConflictError: If the owner already has an active session
        """
        owner_id = self._normalize_owner(owner_id)
        if owner_id and self.get_active_session(owner_id) is not None:
            raise ConflictError("Owner already has an active session")

        session = GameSession(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            target_word=self.corpus.random_word(),
            max_guesses=self.max_guesses
        )

        if not self.store.set_if_absent(self._session_key(session.id), self._serialize(session), self.session_ttl):
            raise ConflictError("Session id already in use")

        if owner_id:
            try:
                self._claim_active_pointer(owner_id, session.id)
            except ConflictError:
                self.store.delete(self._session_key(session.id))
                raise

        game_logger.log_game_event(session.id, 'game_started', owner_id, max_guesses=self.max_guesses)
        return self._to_view(session)

    def submit_guess(self, session_id: str, raw_guess, owner_id: Optional[str] = None) -> GuessResult:
        """
        Processes a guess and advances the session state.

        An unknown but well-formed word returns valid=False and costs the
        player nothing. Concurrent guesses on one session are applied one
        after another: a write that loses the version race is recomputed
        from the fresh session.

        Raises:
            NotFoundError: Unknown or expired session
            UnauthorizedError: Session belongs to another owner
            ConflictError: Session already finished
            ValidationError: Guess is not five letters
        """
        owner_id = self._normalize_owner(owner_id)

        for _ in range(self.max_write_attempts):
            session, version = self._require_session(session_id)
            self._check_owner(session, owner_id)

            if session.status.is_terminal:
                raise ConflictError("Session already finished")

            guess = self._canonicalize_guess(raw_guess)

            if not self.corpus.validate(guess):
                game_logger.log_game_event(session.id, 'guess_rejected', session.owner_id, guess=guess)
                return GuessResult(
                    valid=False,
                    guess=guess,
                    status=session.status.value,
                    remaining_guesses=session.remaining_guesses,
                    message="Word not in word list"
                )

            feedback = evaluate_guess(guess, session.target_word)
            session.guesses.append(guess)

            if guess == session.target_word:
                session.status = GameStatus.WON
            elif len(session.guesses) >= session.max_guesses:
                session.status = GameStatus.LOST

            if session.status.is_terminal:
                session.ended_at = utc_now()

            if not self.store.compare_and_set(self._session_key(session.id), self._serialize(session),
                                              self._remaining_ttl(session), version):
                game_logger.logger.warning(f"Concurrent update on session {session.id}, re-applying guess")
                continue

            if session.status.is_terminal and session.owner_id:
                self.store.delete_if_equals(self._active_key(session.owner_id), session.id)

            self._log_guess(session, guess)
            return GuessResult(
                valid=True,
                guess=guess,
                status=session.status.value,
                remaining_guesses=session.remaining_guesses,
                feedback=[status.value for status in feedback],
                target_word=session.target_word if session.status.is_terminal else None,
                message="Guess processed"
            )

        raise ConflictError("Session is being updated concurrently, please retry")

    def get_session(self, session_id: str, owner_id: Optional[str] = None) -> SessionView:
        """
        Returns the current view of a session (without revealing the answer while active).

        Raises:
            NotFoundError: Unknown or expired session
            UnauthorizedError: Session belongs to another owner
        """
        session, _ = self._require_session(session_id)
        self._check_owner(session, self._normalize_owner(owner_id))
        return self._to_view(session)

    def get_active_session(self, owner_id: str) -> Optional[SessionView]:
        """
        Returns the owner's active session, or None.

        A pointer to a session that expired or already finished resolves to None.
        """
        owner_id = self._normalize_owner(owner_id)
        if not owner_id:
            return None

        session_id = self.store.get(self._active_key(owner_id))
        if not session_id:
            return None

        loaded = self._load_session(session_id)
        if loaded is None or loaded[0].status is not GameStatus.ACTIVE:
            return None
        return self._to_view(loaded[0])

    def evaluate_guess(self, guess: str, target: str) -> List[LetterStatus]:
        return evaluate_guess(guess.strip().upper(), target.strip().upper())

    def _claim_active_pointer(self, owner_id: str, session_id: str) -> None:
        key = self._active_key(owner_id)
        if self.store.set_if_absent(key, session_id, self.session_ttl):
            return

        existing_id = self.store.get(key)
        if existing_id:
            existing = self._load_session(existing_id)
            if existing is not None and existing[0].status is GameStatus.ACTIVE:
                raise ConflictError("Owner already has an active session")
            # Pointer outlived its session or was left behind by a finished one
            self.store.delete_if_equals(key, existing_id)

        if not self.store.set_if_absent(key, session_id, self.session_ttl):
            raise ConflictError("Owner already has an active session")

    def _require_session(self, session_id: str) -> Tuple[GameSession, int]:
        loaded = self._load_session(session_id) if session_id else None
        if loaded is None:
            raise NotFoundError("Game not found")
        return loaded

    def _load_session(self, session_id: str) -> Optional[Tuple[GameSession, int]]:
        entry = self.store.get_versioned(self._session_key(session_id))
        if entry is None:
            return None
        value, version = entry
        return GameSession.from_dict(json.loads(value)), version

    @staticmethod
    def _check_owner(session: GameSession, owner_id: Optional[str]) -> None:
        if owner_id and session.owner_id != owner_id:
            raise UnauthorizedError("Unauthorized access to game")

    @staticmethod
    def _canonicalize_guess(raw_guess) -> str:
        if not isinstance(raw_guess, str):
            raise ValidationError("Guess must be a string")
        guess = canonicalize_word(raw_guess)
        if guess is None:
            if len(raw_guess.strip()) != WORD_LENGTH:
                raise ValidationError(f"Guess must be exactly {WORD_LENGTH} letters")
            raise ValidationError("Guess must contain only letters")
        return guess

    @staticmethod
    def _normalize_owner(owner_id: Optional[str]) -> Optional[str]:
        if owner_id is None:
            return None
        owner_id = str(owner_id).strip()
        return owner_id or None

    def _remaining_ttl(self, session: GameSession) -> int:
        # Session and pointer expire together, counted from the start of the game
        elapsed = (utc_now() - session.started_at).total_seconds()
        return max(1, int(self.session_ttl - elapsed))

    def _log_guess(self, session: GameSession, guess: str) -> None:
        game_logger.log_game_event(
            session.id, 'guess_submitted', session.owner_id,
            guess=guess, round=len(session.guesses), status=session.status.value
        )
        if session.status is GameStatus.WON:
            game_logger.log_game_event(
                session.id, 'game_won', session.owner_id,
                rounds_used=len(session.guesses), target_word=session.target_word
            )
        elif session.status is GameStatus.LOST:
            game_logger.log_game_event(
                session.id, 'game_lost', session.owner_id,
                rounds_used=len(session.guesses), target_word=session.target_word
            )

    def _to_view(self, session: GameSession) -> SessionView:
        evaluations = [(guess, evaluate_guess(guess, session.target_word)) for guess in session.guesses]
        terminal = session.status.is_terminal
        return SessionView(
            session_id=session.id,
            owner_id=session.owner_id,
            status=session.status.value,
            guesses=list(session.guesses),
            guess_results=[
                [(letter, status.value) for letter, status in zip(guess, feedback)]
                for guess, feedback in evaluations
            ],
            letter_status=build_letter_status(evaluations),
            remaining_guesses=session.remaining_guesses,
            max_guesses=session.max_guesses,
            started_at=session.started_at.isoformat(),
            ended_at=session.ended_at.isoformat() if session.ended_at else None,
            target_word=session.target_word if terminal else None
        )

    @staticmethod
    def _serialize(session: GameSession) -> str:
        return json.dumps(session.to_dict())

    @staticmethod
    def _session_key(session_id: str) -> str:
        return f"{SESSION_KEY_PREFIX}{session_id}"

    @staticmethod
    def _active_key(owner_id: str) -> str:
        return f"{ACTIVE_SESSION_KEY_PREFIX}{owner_id}"


def initialize_game_engine(config_class, store: Optional[SessionStore] = None) -> GameEngine:
    """
    Build the game engine and its collaborators from a configuration class.

    The corpus is not loaded here; call engine.corpus.initialize() at
    startup, or let the first request load it.
    """
    store = store or create_session_store(config_class)
    corpus = WordCorpusProvider(
        store,
        source_url=config_class.WORD_SOURCE_URL,
        timeout=config_class.WORD_SOURCE_TIMEOUT_SECONDS,
        cache_key=config_class.WORD_CACHE_KEY,
        cache_ttl=config_class.WORD_CACHE_TTL_SECONDS
    )
    return GameEngine(
        corpus,
        store,
        max_guesses=config_class.MAX_GUESSES,
        session_ttl=config_class.SESSION_TTL_SECONDS
    )
