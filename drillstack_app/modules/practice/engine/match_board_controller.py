"""
Match Board (desktop)
=====================
Two independently shuffled columns, source words on one side and target
words on the other. The learner picks one card from each column; equal
word ids lock both cards as matched.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Dict, List, Optional

from drillstack_app.core.error_handlers import PreconditionError
from drillstack_app.core.signals import answer_evaluated
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.words.interface import WordStore
from drillstack_app.modules.words.schemas import Word
from ..schemas import (
    CARD_IDLE,
    CARD_MATCHED,
    CARD_SELECTED,
    CARD_WRONG,
    COLUMN_SOURCE,
    COLUMN_TARGET,
    COLUMNS,
    MODE_MATCH,
    OUTCOME_CORRECT,
    OUTCOME_INCORRECT,
    Feedback,
    MatchCard,
    PracticeSnapshot,
)
from .base_controller import BasePracticeController
from .session import MatchBoardSession

logger = logging.getLogger(__name__)


def check_match_preconditions(words: List[Word], min_words: int) -> None:
    """Shared by both matching variants."""
    if len(words) < min_words:
        raise PreconditionError(
            f'Add at least {min_words} words to play matching',
            code='NOT_ENOUGH_WORDS',
            required=min_words,
            available=len(words),
        )


class MatchBoardController(BasePracticeController):

    mode = MODE_MATCH

    def __init__(
        self,
        word_store: WordStore,
        language_service: Optional[LanguageService] = None,
        settings: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(word_store, language_service, settings)
        self.rng = rng or random.Random()

    def _check_preconditions(self, words: List[Word]) -> None:
        check_match_preconditions(words, self.setting('MATCH_MIN_WORDS'))

    def _create_session(self, words: List[Word]) -> MatchBoardSession:
        board_size = min(self.setting('MATCH_BOARD_SIZE'), len(words))
        board_words = self.rng.sample(words, board_size)

        source_cards = [MatchCard(word_id=w.id, column=COLUMN_SOURCE, display_text=w.source_text)
                        for w in board_words]
        target_cards = [MatchCard(word_id=w.id, column=COLUMN_TARGET, display_text=w.target_text,
                                  language_code=w.language_code)
                        for w in board_words]
        # Shuffle each column separately
        self.rng.shuffle(source_cards)
        self.rng.shuffle(target_cards)

        return MatchBoardSession(board_words, source_cards, target_cards)

    # ── learner actions ──────────────────────────────────────────────

    def select_card(self, column: str, word_id: Any) -> Optional[bool]:
        """
        Pick the card for *word_id* in *column*.

        Returns True for a completed match, False for a wrong pair and
        None when the pick only changed the selection (or was ignored).
        """
        if column not in COLUMNS:
            raise ValueError(f"Unknown column: {column!r}. Available: {list(COLUMNS)}")

        session: Optional[MatchBoardSession] = self._session
        if session is None or session.complete:
            return None

        card = session.find_card(column, word_id)
        if not card.interactive:
            return None

        selected = session.selected
        if selected is None:
            card.state = CARD_SELECTED
            session.selected = card
            self._emit()
            return None

        if selected.column == card.column:
            selected.state = CARD_IDLE
            card.state = CARD_SELECTED
            session.selected = card
            self._emit()
            return None

        if selected.word_id == card.word_id:
            self._on_match(session, selected, card)
            return True

        self._on_mismatch(session, selected, card)
        return False

    def skip(self) -> None:
        """Drop the current selection."""
        session: Optional[MatchBoardSession] = self._session
        if session is None or session.selected is None:
            return
        session.selected.state = CARD_IDLE
        session.selected = None
        self._emit()

    # ── outcomes ─────────────────────────────────────────────────────
    # Audio and timers need the running loop, so they start before any
    # card changes state.

    def _on_match(self, session: MatchBoardSession, first: MatchCard, second: MatchCard) -> None:
        target_card = second if second.column == COLUMN_TARGET else first
        word = session.words_by_id[target_card.word_id]
        self._play(session, word.id, target_card.display_text, target_card.language_code, word.cached_audio_ref)

        session.selected = None
        first.state = CARD_MATCHED
        second.state = CARD_MATCHED
        session.matched_ids.add(first.word_id)
        session.scoreboard.award()
        session.feedback = Feedback(outcome=OUTCOME_CORRECT)

        answer_evaluated.send(self, mode=self.mode, word_id=first.word_id, is_correct=True, outcome=OUTCOME_CORRECT)

        if len(session.matched_ids) == session.scoreboard.total:
            self._finish(session)
        self._emit()

    def _on_mismatch(self, session: MatchBoardSession, first: MatchCard, second: MatchCard) -> None:
        # A new flash replaces any flash still pending
        self._clear_wrong(session, emit=False)
        self._schedule(session, self.setting('MATCH_WRONG_FLASH_DELAY'), self._clear_wrong)

        session.selected = None
        first.state = CARD_WRONG
        second.state = CARD_WRONG
        session.feedback = Feedback(outcome=OUTCOME_INCORRECT)

        answer_evaluated.send(self, mode=self.mode, word_id=first.word_id, is_correct=False, outcome=OUTCOME_INCORRECT)
        self._emit()

    def _clear_wrong(self, session: MatchBoardSession, emit: bool = True) -> None:
        session.timer.cancel()
        for card in session.cards:
            if card.state == CARD_WRONG:
                card.state = CARD_IDLE
        if session.feedback is not None and session.feedback.outcome == OUTCOME_INCORRECT:
            session.feedback = None
        if emit:
            self._emit()

    def _fill_snapshot(self, snap: PracticeSnapshot, session: MatchBoardSession) -> None:
        snap.cards = [replace(card) for card in session.cards]
        snap.remaining_count = session.scoreboard.total - len(session.matched_ids)
