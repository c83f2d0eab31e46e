import logging

import edge_tts
from .base import AudioEngine

logger = logging.getLogger(__name__)


class EdgeEngine(AudioEngine):
    """
    Audio Engine using Microsoft Edge TTS (edge-tts library).
    """

    DEFAULT_VOICE = "en-US-AriaNeural"

    async def generate(self, text: str, voice: str, full_path: str) -> bool:
        """
        Generate audio using edge-tts.
        """
        try:
            self.prepare_target(full_path)

            # Bare language codes ('sv-SE') are not voices
            selected_voice = voice if voice and voice.endswith('Neural') else self.DEFAULT_VOICE

            logger.debug(f"[EdgeEngine] Generating {text[:50]!r} with {selected_voice}")
            communicate = edge_tts.Communicate(text, selected_voice)
            await communicate.save(full_path)

            return True
        except Exception as e:
            logger.warning(f"[EdgeEngine] Error generating audio: {e}")
            return False
