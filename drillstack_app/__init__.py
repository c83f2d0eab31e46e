"""Factory for the DrillStack practice engine."""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

from .core.logging_config import setup_logging
from .modules.audio.interface import LanguageService
from .modules.preferences.interface import PreferenceStore
from .modules.practice.services.practice_hub import PracticeHub
from .modules.words.interface import WordStore

__all__ = ["create_practice_hub", "PracticeHub"]


def create_practice_hub(
    word_store: WordStore,
    language_service: Optional[LanguageService] = None,
    preferences: Optional[PreferenceStore] = None,
    settings: Optional[Dict[str, Any]] = None,
    compact: bool = False,
    rng: Optional[random.Random] = None,
    configure_logging: bool = True,
) -> PracticeHub:
    """Create a practice hub wired to the given collaborators."""

    if configure_logging:
        setup_logging()

    return PracticeHub(
        word_store=word_store,
        language_service=language_service,
        preferences=preferences,
        settings=settings,
        compact=compact,
        rng=rng,
    )
