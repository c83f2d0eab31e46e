import asyncio
import logging
from gtts import gTTS
from .base import AudioEngine

logger = logging.getLogger(__name__)


class GTTSEngine(AudioEngine):
    """
    Audio Engine using Google Text-to-Speech (gTTS library).
    Wraps blocking calls in threads.
    """

    async def generate(self, text: str, voice: str, full_path: str) -> bool:
        try:
            self.prepare_target(full_path)

            lang = self.voice_to_lang(voice)

            # gTTS save is blocking
            await asyncio.to_thread(self._save_gtts, text, lang, full_path)
            return True
        except Exception as e:
            logger.warning(f"[GTTSEngine] Error generating audio: {e}")
            return False

    @staticmethod
    def voice_to_lang(voice: str) -> str:
        """'sv-SE' -> 'sv'. gTTS only understands the bare language."""
        if not voice:
            return 'en'
        return voice.split('-')[0].lower() or 'en'

    def _save_gtts(self, text: str, lang: str, path: str):
        """Blocking helper method."""
        tts = gTTS(text=text, lang=lang)
        tts.save(path)
