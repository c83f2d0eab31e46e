"""
Listen Practice
===============
Dictation: the learner hears the target-language word and writes it down,
either as heard (``target``) or translated back (``source``).

Same two-try state machine as :mod:`write_controller`. The direction is a
learner preference restored from the preference store on every start.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Optional

from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.preferences.interface import LISTEN_DIRECTION_KEY, PreferenceStore
from drillstack_app.modules.words.interface import WordStore
from drillstack_app.modules.words.schemas import Word
from ..schemas import DIRECTION_SOURCE, DIRECTIONS, MODE_LISTEN, PracticeSnapshot
from .session import DrillSession
from .write_controller import WritePracticeController

logger = logging.getLogger(__name__)


class ListenPracticeController(WritePracticeController):

    mode = MODE_LISTEN

    def __init__(
        self,
        word_store: WordStore,
        language_service: Optional[LanguageService] = None,
        preferences: Optional[PreferenceStore] = None,
        settings: Optional[Dict[str, Any]] = None,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(word_store, language_service, settings, rng=rng)
        self.preferences = preferences
        self.direction = self._default_direction()

    def _default_direction(self) -> str:
        default = self.setting('LISTEN_DEFAULT_DIRECTION')
        return default if default in DIRECTIONS else DIRECTION_SOURCE

    def _restore_direction(self) -> str:
        if self.preferences is None:
            return self.direction
        stored = self.preferences.get(LISTEN_DIRECTION_KEY)
        if stored is None:
            return self._default_direction()
        if stored not in DIRECTIONS:
            logger.warning(f"[{self.mode}] Ignoring stored direction {stored!r}")
            return self._default_direction()
        return stored

    # ── hooks ────────────────────────────────────────────────────────

    def expected_answer(self, word: Word) -> str:
        if self.direction == DIRECTION_SOURCE:
            return word.source_text
        return word.target_text

    def prompt_text(self, word: Word) -> Optional[str]:
        # The prompt is the audio
        return None

    def answer_language(self, word: Word) -> Optional[str]:
        if self.direction == DIRECTION_SOURCE:
            return None
        return word.language_code

    # ── lifecycle ────────────────────────────────────────────────────

    def _create_session(self, words: List[Word]) -> DrillSession:
        self.direction = self._restore_direction()
        return super()._create_session(words)

    def set_direction(self, direction: str) -> None:
        """
        Switch what the learner writes and remember it.

        The current word keeps its place; only its attempt count resets.
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown listen direction: {direction!r}. Available: {list(DIRECTIONS)}")

        self.direction = direction
        if self.preferences is not None:
            self.preferences.set(LISTEN_DIRECTION_KEY, direction)

        session: Optional[DrillSession] = self._session
        if session is not None and not session.complete:
            session.queue.attempts_for_current = 0
            if not session.locked:
                session.feedback = None
        self._emit()

    def _fill_snapshot(self, snap: PracticeSnapshot, session: DrillSession) -> None:
        super()._fill_snapshot(snap, session)
        snap.direction = self.direction
