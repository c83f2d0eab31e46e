# File: drillstack_app/modules/practice/engine/base_controller.py
"""
Base Practice Controller
========================
Shared lifecycle for every practice mode.

Lifecycle::

    ok, message = controller.start()
    controller.subscribe(render)          # or poll controller.snapshot()
    controller.submit_answer("house")     # mode-specific actions
    ...
    controller.dispose()

Controllers are driven from inside a running asyncio loop: delayed
transitions use ``loop.call_later`` and audio runs in a task. Every
callback checks that its session is still the live one before touching
state, so a restart or mode switch can never be corrupted by a late
timer or playback completion.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from drillstack_app.core.config import get_config_value
from drillstack_app.core.error_handlers import DrillStackError, PreconditionError, error_payload
from drillstack_app.core.signals import audio_failed, session_completed, session_started, snapshot_changed
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.words.config import get_language_name
from drillstack_app.modules.words.interface import WordStore
from drillstack_app.modules.words.schemas import Word
from ..schemas import PracticeSnapshot
from .session import PracticeSession

logger = logging.getLogger(__name__)


class BasePracticeController(ABC):
    """
    Contract for practice modes.

    Subclass checklist:
    * Set ``mode``.
    * Implement ``_check_preconditions``, ``_create_session``,
      ``_fill_snapshot`` and ``skip``.
    """

    mode: str = ''

    def __init__(
        self,
        word_store: WordStore,
        language_service: Optional[LanguageService] = None,
        settings: Optional[Dict[str, Any]] = None,
    ):
        self.word_store = word_store
        self.language_service = language_service
        self.settings = dict(settings or {})
        self._session: Optional[PracticeSession] = None
        self._blocked: Optional[Dict[str, Any]] = None
        self._receivers: List[Callable] = []

    # ── configuration ────────────────────────────────────────────────

    def setting(self, key: str) -> Any:
        return get_config_value(key, self.settings)

    # ── lifecycle ────────────────────────────────────────────────────

    @property
    def session(self) -> Optional[PracticeSession]:
        return self._session

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def start(self) -> Tuple[bool, Optional[str]]:
        """
        Begin a fresh session from the full word set.

        Returns ``(True, None)`` or ``(False, message)`` when the word set
        does not satisfy the mode's precondition. A refused start leaves
        the controller blocked; nothing is raised.
        """
        self.dispose()
        words = self.word_store.list_words()

        try:
            self._check_preconditions(words)
        except PreconditionError as e:
            self._blocked = e.to_dict()
            logger.info(f"[{self.mode}] Session refused: {e.message}")
            self._emit()
            return False, e.message

        self._blocked = None
        self._session = self._create_session(words)
        logger.info(f"[{self.mode}] Session started with {self._session.scoreboard.total} words")
        session_started.send(self, mode=self.mode, total=self._session.scoreboard.total)
        self._emit()
        return True, None

    def restart(self) -> Tuple[bool, Optional[str]]:
        return self.start()

    def dispose(self) -> None:
        """Cancel pending transitions and audio; drop the session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    @abstractmethod
    def _check_preconditions(self, words: List[Word]) -> None:
        """Raise :class:`PreconditionError` if *words* cannot start a session."""
        ...

    @abstractmethod
    def _create_session(self, words: List[Word]) -> PracticeSession:
        ...

    @abstractmethod
    def skip(self) -> None:
        ...

    # ── observation ──────────────────────────────────────────────────

    def snapshot(self) -> PracticeSnapshot:
        session = self._session
        if session is None:
            return PracticeSnapshot(mode=self.mode, blocked=self._blocked)

        snap = PracticeSnapshot(
            mode=self.mode,
            scoreboard=replace(session.scoreboard),
            feedback=session.feedback,
            complete=session.complete,
            notice=session.notice,
            audio_playing=session.audio_playing,
            locked=session.locked,
        )
        self._fill_snapshot(snap, session)
        if snap.answer_language:
            # For prompts like "Write the word in Swedish"
            snap.answer_language_name = get_language_name(snap.answer_language)
        return snap

    @abstractmethod
    def _fill_snapshot(self, snap: PracticeSnapshot, session: PracticeSession) -> None:
        ...

    def subscribe(self, receiver: Callable) -> Callable:
        """
        Call ``receiver(controller, snapshot=...)`` on every state change.
        """
        snapshot_changed.connect(receiver, sender=self, weak=False)
        self._receivers.append(receiver)
        return receiver

    def unsubscribe(self, receiver: Callable) -> None:
        snapshot_changed.disconnect(receiver, sender=self)
        if receiver in self._receivers:
            self._receivers.remove(receiver)

    def unsubscribe_all(self) -> None:
        for receiver in list(self._receivers):
            self.unsubscribe(receiver)

    def _emit(self) -> None:
        snapshot_changed.send(self, snapshot=self.snapshot())

    def _finish(self, session: PracticeSession) -> None:
        session.complete = True
        session.locked = False
        logger.info(
            f"[{self.mode}] Session complete: {session.scoreboard.correct}/{session.scoreboard.total}"
        )
        session_completed.send(
            self,
            mode=self.mode,
            correct=session.scoreboard.correct,
            total=session.scoreboard.total,
        )

    # ── delayed transitions ──────────────────────────────────────────

    def _is_live(self, session: PracticeSession) -> bool:
        return session is self._session and not session.closed

    def _schedule(self, session: PracticeSession, delay: float, callback: Callable[[PracticeSession], None]) -> None:
        session.timer.schedule(delay, self._run_if_live, session, callback)

    def _run_if_live(self, session: PracticeSession, callback: Callable[[PracticeSession], None]) -> None:
        if not self._is_live(session):
            logger.debug(f"[{self.mode}] Ignoring stale transition")
            return
        callback(session)

    # ── audio ────────────────────────────────────────────────────────

    def _play(
        self,
        session: PracticeSession,
        word_id: Any,
        text: str,
        language_code: str,
        cached_audio_ref: Optional[str] = None,
    ) -> Optional[asyncio.Task]:
        """
        Start playback in a task, replacing any playback still running.

        Returns the task, or None when no language service is configured.
        """
        if self.language_service is None:
            logger.debug(f"[{self.mode}] No language service, skipping audio")
            return None

        session.cancel_audio()
        session.notice = None
        serial = session.prompt_serial
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._run_playback(session, serial, word_id, text, language_code, cached_audio_ref)
        )
        session.audio_task = task
        session.audio_serial = serial
        return task

    async def _run_playback(
        self,
        session: PracticeSession,
        serial: int,
        word_id: Any,
        text: str,
        language_code: str,
        cached_audio_ref: Optional[str],
    ) -> None:
        error: Optional[Exception] = None
        try:
            await self.language_service.play(text, language_code, cached_audio_ref)
        except Exception as e:
            error = e

        if not self._is_live(session) or session.prompt_serial != serial:
            logger.debug(f"[{self.mode}] Ignoring stale playback completion for word {word_id!r}")
            return

        if session.audio_task is asyncio.current_task():
            session.audio_task = None
            session.audio_serial = None

        if error is not None:
            logger.warning(f"[{self.mode}] Audio unavailable for word {word_id!r}: {error}")
            if isinstance(error, DrillStackError):
                session.notice = error.to_dict()
            else:
                session.notice = error_payload(str(error) or 'Audio playback failed', code='PLAYBACK_FAILED')
            audio_failed.send(self, mode=self.mode, word_id=word_id, error=error)

        self._emit()
