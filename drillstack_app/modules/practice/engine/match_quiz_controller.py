"""
Match Quiz (compact)
====================
Small-screen matching: one source word at a time, and every word's
translation offered as an option. The option list grows with the word
set rather than being capped at a fixed number of distractors.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Dict, List, Optional

from drillstack_app.core.signals import answer_evaluated
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.words.interface import WordStore
from drillstack_app.modules.words.schemas import Word
from ..schemas import (
    MODE_MATCH_COMPACT,
    OPTION_CORRECT,
    OPTION_INCORRECT,
    OUTCOME_CORRECT,
    OUTCOME_INCORRECT,
    Feedback,
    MatchOption,
    PracticeSnapshot,
)
from .base_controller import BasePracticeController
from .match_board_controller import check_match_preconditions
from .session import MatchQuizSession

logger = logging.getLogger(__name__)


class MatchQuizController(BasePracticeController):

    mode = MODE_MATCH_COMPACT

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

    def _create_session(self, words: List[Word]) -> MatchQuizSession:
        order = list(words)
        self.rng.shuffle(order)
        session = MatchQuizSession(words=list(words), presentation_order=order)
        session.options = self._build_options(session)
        return session

    def _build_options(self, session: MatchQuizSession) -> List[MatchOption]:
        options = [MatchOption(word_id=w.id, text=w.target_text, language_code=w.language_code)
                   for w in session.words]
        self.rng.shuffle(options)
        return options

    @property
    def current_word(self) -> Optional[Word]:
        session: Optional[MatchQuizSession] = self._session
        return session.current_word if session is not None else None

    # ── learner actions ──────────────────────────────────────────────

    def select_option(self, word_id: Any) -> Optional[bool]:
        """
        Answer the current presentation with the option for *word_id*.

        Returns whether it was right, or None if selection is closed.
        """
        session: Optional[MatchQuizSession] = self._session
        if session is None or session.complete or session.locked:
            return None

        option = session.find_option(word_id)
        current = session.current_word
        is_correct = option.word_id == current.id
        delay = self.setting('MATCH_QUIZ_CORRECT_DELAY' if is_correct else 'MATCH_QUIZ_WRONG_DELAY')
        # Needs the running loop; fail before marking anything
        self._schedule(session, delay, self._advance)
        session.locked = True

        if is_correct:
            option.state = OPTION_CORRECT
            session.scoreboard.award()
            session.feedback = Feedback(outcome=OUTCOME_CORRECT)
            self._play(session, current.id, option.text, option.language_code, current.cached_audio_ref)
        else:
            option.state = OPTION_INCORRECT
            session.find_option(current.id).state = OPTION_CORRECT
            session.feedback = Feedback(outcome=OUTCOME_INCORRECT, correct_answer=current.target_text)

        answer_evaluated.send(
            self,
            mode=self.mode,
            word_id=current.id,
            is_correct=is_correct,
            outcome=session.feedback.outcome,
        )
        self._emit()
        return is_correct

    def skip(self) -> None:
        """Move on without answering; the word counts as missed."""
        session: Optional[MatchQuizSession] = self._session
        if session is None or session.complete or session.locked:
            return
        self._advance(session)

    # ── transitions ──────────────────────────────────────────────────

    def _advance(self, session: MatchQuizSession) -> None:
        session.timer.cancel()
        session.next_prompt()
        session.index += 1
        if session.current_word is None:
            session.options = []
            self._finish(session)
        else:
            session.options = self._build_options(session)
        self._emit()

    def _fill_snapshot(self, snap: PracticeSnapshot, session: MatchQuizSession) -> None:
        snap.options = [replace(option) for option in session.options]
        snap.remaining_count = len(session.presentation_order) - session.index
        word = session.current_word
        if word is not None:
            snap.prompt_text = word.source_text
            snap.answer_language = word.language_code
            snap.position = session.index + 1
