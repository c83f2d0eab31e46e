from dataclasses import dataclass
from typing import Optional, Any


@dataclass(frozen=True)
class Word:
    """
    A source/target word pair as handed out by a ``WordStore``.

    ``cached_audio_ref`` is opaque to the engine: an audio file path or a
    base64 PCM blob, present once the store has generated audio for the
    target text.
    """
    id: Any
    source_text: str
    target_text: str
    language_code: str
    cached_audio_ref: Optional[str] = None
