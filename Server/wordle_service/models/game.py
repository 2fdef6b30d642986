"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LetterStatus(Enum):
    """Per-letter evaluation of a guess. UNUSED only appears on the keyboard map."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    UNUSED = "UNUSED"


class GameStatus(Enum):
    """Session state machine: ACTIVE is initial, WON and LOST are terminal."""
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


@dataclass
class GameSession:
    """Server-side session record. target_word never leaves the server while ACTIVE."""
    id: str
    target_word: str
    max_guesses: int
    owner_id: Optional[str] = None
    guesses: List[str] = field(default_factory=list)
    status: GameStatus = GameStatus.ACTIVE
    started_at: datetime = field(default_factory=utc_now)
    ended_at: Optional[datetime] = None

    @property
    def remaining_guesses(self) -> int:
        return self.max_guesses - len(self.guesses)

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "target_word": self.target_word,
            "guesses": list(self.guesses),
            "status": self.status.value,
            "max_guesses": self.max_guesses,
            "started_at": _format_timestamp(self.started_at),
            "ended_at": _format_timestamp(self.ended_at),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "GameSession":
        return cls(
            id=data["id"],
            owner_id=data.get("owner_id"),
            target_word=data["target_word"],
            guesses=list(data.get("guesses", [])),
            status=GameStatus(data["status"]),
            max_guesses=data["max_guesses"],
            started_at=_parse_timestamp(data["started_at"]),
            ended_at=_parse_timestamp(data.get("ended_at")),
        )


@dataclass
class SessionView:
    """Public projection of a session. answer fields are filled only when terminal."""
    session_id: str
    owner_id: Optional[str]
    status: str
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    remaining_guesses: int
    max_guesses: int
    started_at: Optional[str]
    ended_at: Optional[str] = None
    target_word: Optional[str] = None


@dataclass
class GuessResult:
    """Outcome of a single submitted guess."""
    valid: bool
    guess: str
    status: str
    remaining_guesses: int
    feedback: Optional[List[str]] = None
    target_word: Optional[str] = None
    message: str = ""
