# File: drillstack_app/modules/practice/engine/session.py
"""
Session context objects.

Each controller builds one of these on ``start()`` and throws it away on
restart or mode exit. Timers and audio tasks hold a reference to the
session they were created for, which is how late callbacks detect that
they are stale.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Set

from drillstack_app.modules.words.schemas import Word
from ..schemas import DrillQueue, Feedback, MatchCard, MatchOption, ScoreBoard
from .feedback_timer import FeedbackTimer


class PracticeSession:
    """State every mode needs: score, feedback, timer, in-flight audio."""

    def __init__(self, total: int):
        self.scoreboard = ScoreBoard(correct=0, total=total)
        self.feedback: Optional[Feedback] = None
        self.notice: Optional[Dict[str, Any]] = None
        self.complete = False
        # While locked, the feedback for the last action is on screen
        self.locked = False
        self.timer = FeedbackTimer()
        # Bumped whenever a new prompt is presented
        self.prompt_serial = 0
        self.audio_task: Optional[asyncio.Task] = None
        self.audio_serial: Optional[int] = None
        self.closed = False

    @property
    def audio_playing(self) -> bool:
        return (
            self.audio_task is not None
            and not self.audio_task.done()
            and self.audio_serial == self.prompt_serial
        )

    def next_prompt(self) -> None:
        self.prompt_serial += 1
        self.feedback = None
        self.notice = None
        self.locked = False

    def cancel_audio(self) -> None:
        if self.audio_task is not None and not self.audio_task.done():
            self.audio_task.cancel()
        self.audio_task = None
        self.audio_serial = None

    def close(self) -> None:
        self.closed = True
        self.timer.cancel()
        self.cancel_audio()


class DrillSession(PracticeSession):
    """Write / listen: a retry queue plus the word currently on screen."""

    def __init__(self, queue: DrillQueue):
        super().__init__(total=len(queue.items))
        self.queue = queue
        # Stays on the graded word until the feedback delay ends,
        # even though the queue has already moved on.
        self.presented: Optional[Word] = queue.items[0] if queue.items else None


class MatchBoardSession(PracticeSession):
    """Desktop matching: two shuffled card columns."""

    def __init__(self, words: List[Word], source_cards: List[MatchCard], target_cards: List[MatchCard]):
        super().__init__(total=len(words))
        self.words_by_id: Dict[Any, Word] = {w.id: w for w in words}
        self.source_cards = source_cards
        self.target_cards = target_cards
        self.matched_ids: Set[Any] = set()
        self.selected: Optional[MatchCard] = None

    @property
    def cards(self) -> List[MatchCard]:
        return self.source_cards + self.target_cards

    def find_card(self, column: str, word_id: Any) -> MatchCard:
        cards = self.source_cards if column == 'source' else self.target_cards
        for card in cards:
            if card.word_id == word_id:
                return card
        raise KeyError(f"No {column} card for word {word_id!r}")


class MatchQuizSession(PracticeSession):
    """Compact matching: one word at a time with every translation as an option."""

    def __init__(self, words: List[Word], presentation_order: List[Word]):
        super().__init__(total=len(presentation_order))
        self.words = words
        self.presentation_order = presentation_order
        self.index = 0
        self.options: List[MatchOption] = []

    @property
    def current_word(self) -> Optional[Word]:
        if self.index >= len(self.presentation_order):
            return None
        return self.presentation_order[self.index]

    def find_option(self, word_id: Any) -> MatchOption:
        for option in self.options:
            if option.word_id == word_id:
                return option
        raise KeyError(f"No option for word {word_id!r}")
