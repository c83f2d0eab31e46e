# File: drillstack_app/modules/audio/interface.py
from abc import ABC, abstractmethod
from typing import Optional


class LanguageService(ABC):
    """
    Contract the practice controllers use for speech.

    ``play`` resolves once playback has finished and raises
    :class:`~drillstack_app.core.error_handlers.PlaybackError` (or any
    other exception) when synthesis or playback fails. Callers treat every
    failure as non-fatal.
    """

    @abstractmethod
    async def play(self, text: str, language_code: str, cached_audio_ref: Optional[str] = None) -> None:
        ...
