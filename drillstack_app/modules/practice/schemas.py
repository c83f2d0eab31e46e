"""
Practice DTOs
=============
Plain dataclasses shared by the scheduler, the controllers and whatever
UI layer renders them. Nothing here knows about asyncio or audio.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')

# ── Mode / state vocabularies ───────────────────────────────────────

MODE_WRITE = 'write'
MODE_LISTEN = 'listen'
MODE_MATCH = 'match'
MODE_MATCH_COMPACT = 'match_compact'

OUTCOME_CORRECT = 'correct'
OUTCOME_RETRY = 'retry'
OUTCOME_REVEALED = 'revealed'
OUTCOME_INCORRECT = 'incorrect'

DIRECTION_SOURCE = 'source'
DIRECTION_TARGET = 'target'
DIRECTIONS = (DIRECTION_SOURCE, DIRECTION_TARGET)

COLUMN_SOURCE = 'source'
COLUMN_TARGET = 'target'
COLUMNS = (COLUMN_SOURCE, COLUMN_TARGET)

CARD_IDLE = 'idle'
CARD_SELECTED = 'selected'
CARD_WRONG = 'wrong'
CARD_MATCHED = 'matched'

OPTION_IDLE = 'idle'
OPTION_CORRECT = 'correct'
OPTION_INCORRECT = 'incorrect'


# ── Session structures ──────────────────────────────────────────────


@dataclass
class DrillQueue(Generic[T]):
    """Working order of words for a write/listen session."""

    items: List[T] = field(default_factory=list)
    cursor_index: int = 0
    attempts_for_current: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)


@dataclass
class ScoreBoard:
    correct: int = 0
    total: int = 0

    def award(self) -> None:
        self.correct += 1


@dataclass
class Feedback:
    """Result of the last graded action, shown until the next prompt."""

    outcome: str
    attempts_remaining: Optional[int] = None
    correct_answer: Optional[str] = None


@dataclass
class MatchCard:
    word_id: Any
    column: str                     # 'source' | 'target'
    display_text: str
    language_code: Optional[str] = None
    state: str = CARD_IDLE

    @property
    def interactive(self) -> bool:
        return self.state == CARD_IDLE


@dataclass
class MatchOption:
    word_id: Any
    text: str
    language_code: Optional[str] = None
    state: str = OPTION_IDLE


# ── Snapshot handed to the UI ───────────────────────────────────────


@dataclass
class PracticeSnapshot:
    """
    Everything a renderer needs for the current frame.

    ``blocked`` is set when the session could not start (precondition);
    ``notice`` carries a non-fatal audio failure.
    """

    mode: str
    prompt_text: Optional[str] = None
    scoreboard: ScoreBoard = field(default_factory=ScoreBoard)
    remaining_count: int = 0
    feedback: Optional[Feedback] = None
    attempts_remaining: Optional[int] = None
    complete: bool = False
    blocked: Optional[Dict[str, Any]] = None
    notice: Optional[Dict[str, Any]] = None
    audio_playing: bool = False
    answer_language: Optional[str] = None
    answer_language_name: Optional[str] = None
    direction: Optional[str] = None
    cards: List[MatchCard] = field(default_factory=list)
    options: List[MatchOption] = field(default_factory=list)
    position: Optional[int] = None
    locked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
