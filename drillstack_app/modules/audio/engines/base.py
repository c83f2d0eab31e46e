import os
from abc import ABC, abstractmethod


class AudioEngine(ABC):
    """
    Abstract Base Class for Text-to-Speech engines.
    """

    @staticmethod
    def prepare_target(full_path: str) -> None:
        """Make sure the cache directory for *full_path* exists."""
        directory = os.path.dirname(full_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    @abstractmethod
    async def generate(self, text: str, voice: str, full_path: str) -> bool:
        """
        Generate audio file from text.

        Args:
            text: The text to convert to speech.
            voice: The voice identifier (engine specific).
            full_path: Absolute system path to save the file (including .mp3 extension).

        Returns:
            bool: True if generation was successful, False otherwise.
        """
        pass


class AudioPlayer(ABC):
    """
    Abstract output device. Both methods resolve when the sound has
    finished; cancelling the awaiting task must stop the sound.
    """

    @abstractmethod
    async def play_file(self, path: str) -> None:
        pass

    @abstractmethod
    async def play_pcm(self, data: bytes, sample_rate: int, sample_width: int, channels: int) -> None:
        pass
