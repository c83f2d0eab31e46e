"""
Write Practice
==============
Typed recall: the learner sees the source word and types the target.

Each word gets two tries. A wrong first try re-prompts the same word; a
wrong second try reveals the answer and demotes the word to the end of the
queue. Skipping demotes without touching the score.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any, Dict, List, Optional

from drillstack_app.core.error_handlers import PreconditionError
from drillstack_app.core.signals import answer_evaluated
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.words.interface import WordStore
from drillstack_app.modules.words.schemas import Word
from ..logics.answer_matcher import AnswerMatcher
from ..logics.retry_queue import RetryQueueScheduler
from ..schemas import (
    MODE_WRITE,
    OUTCOME_CORRECT,
    OUTCOME_RETRY,
    OUTCOME_REVEALED,
    Feedback,
    PracticeSnapshot,
)
from .base_controller import BasePracticeController
from .session import DrillSession

logger = logging.getLogger(__name__)


class WritePracticeController(BasePracticeController):

    mode = MODE_WRITE

    def __init__(
        self,
        word_store: WordStore,
        language_service: Optional[LanguageService] = None,
        settings: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
        matcher: type = AnswerMatcher,
    ):
        super().__init__(word_store, language_service, settings)
        self.scheduler = RetryQueueScheduler(rng)
        self.matcher = matcher

    # ── per-mode hooks (overridden by listening) ─────────────────────

    def expected_answer(self, word: Word) -> str:
        return word.target_text

    def prompt_text(self, word: Word) -> Optional[str]:
        return word.source_text

    def answer_language(self, word: Word) -> Optional[str]:
        return word.language_code

    # ── lifecycle ────────────────────────────────────────────────────

    def _check_preconditions(self, words: List[Word]) -> None:
        if not words:
            raise PreconditionError(
                'Add some words before practicing',
                code='NO_WORDS',
                required=1,
                available=0,
            )

    def _create_session(self, words: List[Word]) -> DrillSession:
        return DrillSession(self.scheduler.initialize(words))

    @property
    def current_word(self) -> Optional[Word]:
        session = self._session
        return session.presented if session is not None else None

    # ── learner actions ──────────────────────────────────────────────

    def submit_answer(self, text: Optional[str]) -> Optional[Feedback]:
        """
        Grade *text* against the word on screen.

        Returns the feedback, or None if nothing could be graded (no
        session, session complete, or the previous feedback still showing).
        """
        session: Optional[DrillSession] = self._session
        if session is None or session.complete or session.locked or session.presented is None:
            logger.debug(f"[{self.mode}] Ignoring answer outside an open prompt")
            return None

        word = session.presented
        expected = self.expected_answer(word)
        is_correct = self.matcher.matches(text, expected)

        if is_correct:
            delay = self.setting('PRACTICE_CORRECT_DELAY')
        elif self.scheduler.is_last_attempt(session.queue):
            delay = self.setting('PRACTICE_REVEAL_DELAY')
        else:
            delay = None

        # Scheduling needs the running loop; fail before touching score or queue
        if delay is not None:
            self._schedule(session, delay, self._advance)

        if is_correct:
            session.scoreboard.award()
            self.scheduler.record_success(session.queue)
            feedback = Feedback(outcome=OUTCOME_CORRECT)
            session.locked = True
        elif self.scheduler.record_failure(session.queue):
            feedback = Feedback(outcome=OUTCOME_REVEALED, attempts_remaining=0, correct_answer=expected)
            session.locked = True
        else:
            feedback = Feedback(
                outcome=OUTCOME_RETRY,
                attempts_remaining=self.scheduler.attempts_remaining(session.queue),
            )

        session.feedback = feedback
        answer_evaluated.send(
            self,
            mode=self.mode,
            word_id=word.id,
            is_correct=is_correct,
            outcome=feedback.outcome,
        )
        self._emit()
        return feedback

    def skip(self) -> None:
        session: Optional[DrillSession] = self._session
        if session is None or session.complete or session.locked:
            return
        self.scheduler.skip(session.queue)
        self._advance(session)

    def play_prompt(self) -> Optional[asyncio.Task]:
        """Speak the target-language form of the word on screen."""
        session: Optional[DrillSession] = self._session
        if session is None or session.presented is None:
            return None
        word = session.presented
        return self._play(session, word.id, word.target_text, word.language_code, word.cached_audio_ref)

    # ── transitions ──────────────────────────────────────────────────

    def _advance(self, session: DrillSession) -> None:
        session.timer.cancel()
        session.next_prompt()
        session.presented = self.scheduler.current_item(session.queue)
        if self.scheduler.is_complete(session.queue):
            self._finish(session)
        self._emit()

    def _fill_snapshot(self, snap: PracticeSnapshot, session: DrillSession) -> None:
        snap.remaining_count = len(session.queue)
        word = session.presented
        if word is None:
            return
        snap.prompt_text = self.prompt_text(word)
        snap.answer_language = self.answer_language(word)
        if not session.locked:
            snap.attempts_remaining = self.scheduler.attempts_remaining(session.queue)
