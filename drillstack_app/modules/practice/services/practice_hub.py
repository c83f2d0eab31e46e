# File: drillstack_app/modules/practice/services/practice_hub.py
"""
Practice Hub
============
The one place that knows which mode is active. Switching modes disposes
the previous controller first, so its pending transitions and audio can
never reach the new session.

Responsibility chain::

    UI  →  PracticeHub  →  ModeFactory  →  Write / Listen / Match controllers
                                               ↓
                                 WordStore · LanguageService · PreferenceStore
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, Optional

from drillstack_app.core.signals import mode_switched
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.preferences.interface import PreferenceStore
from drillstack_app.modules.words.interface import WordStore
from ..engine.base_controller import BasePracticeController
from ..modes.factory import ModeFactory

logger = logging.getLogger(__name__)


class PracticeHub:

    def __init__(
        self,
        word_store: WordStore,
        language_service: Optional[LanguageService] = None,
        preferences: Optional[PreferenceStore] = None,
        settings: Optional[Dict[str, Any]] = None,
        compact: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self.word_store = word_store
        self.language_service = language_service
        self.preferences = preferences
        self.settings = dict(settings or {})
        self.compact = compact
        self.rng = rng
        self.active: Optional[BasePracticeController] = None

    @property
    def active_mode(self) -> Optional[str]:
        return self.active.mode if self.active is not None else None

    def switch_mode(self, mode: str, compact: Optional[bool] = None) -> BasePracticeController:
        """
        Leave the current mode and start *mode* from the full word set.

        The new controller is returned even if its precondition failed;
        its snapshot then carries ``blocked``.
        """
        use_compact = self.compact if compact is None else compact
        controller = ModeFactory.create(
            mode,
            compact=use_compact,
            word_store=self.word_store,
            language_service=self.language_service,
            preferences=self.preferences,
            settings=self.settings,
            rng=self.rng,
        )

        previous = self.active_mode
        self.close()
        self.active = controller

        ok, message = controller.start()
        if not ok:
            logger.info(f"[PracticeHub] {controller.mode} is blocked: {message}")

        mode_switched.send(self, previous=previous, mode=controller.mode)
        return controller

    def restart(self) -> Optional[BasePracticeController]:
        if self.active is None:
            return None
        self.active.restart()
        return self.active

    def close(self) -> None:
        if self.active is not None:
            self.active.dispose()
            self.active.unsubscribe_all()
            self.active = None
