from dataclasses import dataclass
from typing import Optional


@dataclass
class AudioRequestDTO:
    text: str
    language_code: str
    engine: Optional[str] = None
    voice: Optional[str] = None
    cached_audio_ref: Optional[str] = None
    regenerate: bool = False


@dataclass
class AudioResponseDTO:
    status: str
    physical_path: Optional[str] = None
    engine: Optional[str] = None
    voice: Optional[str] = None
    error: Optional[str] = None
