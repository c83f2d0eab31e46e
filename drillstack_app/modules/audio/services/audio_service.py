import logging
import os
from typing import Dict, Optional

from drillstack_app.core.config import get_config_value
from drillstack_app.core.error_handlers import PlaybackError
from ..config import AudioModuleDefaultConfig
from ..engines.base import AudioPlayer
from ..engines.edge import EdgeEngine
from ..engines.gtts_engine import GTTSEngine
from ..interface import LanguageService
from ..logics.audio_logic import (
    decode_pcm_ref,
    generate_hash_name,
    get_storage_path,
    is_file_ref,
    resolve_voice,
)
from ..schemas import AudioRequestDTO, AudioResponseDTO

logger = logging.getLogger(__name__)


class AudioService(LanguageService):
    """
    Centralized Audio Service for DrillStack.
    Handles Text-to-Speech generation, caching, and playback.
    """

    # Engine Registry
    _ENGINES = {
        'edge': EdgeEngine,
        'gtts': GTTSEngine
    }

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        default_engine: Optional[str] = None,
        voice_mapping: Optional[Dict[str, str]] = None,
        player: Optional[AudioPlayer] = None,
        engines: Optional[Dict[str, type]] = None,
    ):
        self.cache_dir = cache_dir or get_config_value('AUDIO_CACHE_DIR')
        self.default_engine = default_engine or get_config_value(
            'AUDIO_DEFAULT_ENGINE', default=AudioModuleDefaultConfig.AUDIO_DEFAULT_ENGINE
        )
        self.voice_mapping = (
            voice_mapping if voice_mapping is not None
            else AudioModuleDefaultConfig.AUDIO_VOICE_MAPPING_GLOBAL
        )
        self.engines = engines if engines is not None else dict(self._ENGINES)
        self._player = player

    @property
    def player(self) -> AudioPlayer:
        if self._player is None:
            from ..engines.pydub_player import PydubPlayer
            self._player = PydubPlayer()
        return self._player

    async def get_audio(self, request_dto: AudioRequestDTO) -> AudioResponseDTO:
        """
        Get audio for the given text. Returns existing file or generates new one.
        """
        engine = request_dto.engine
        voice = request_dto.voice
        if not engine or not voice:
            mapped_engine, mapped_voice = resolve_voice(
                request_dto.language_code, self.voice_mapping, self.default_engine
            )
            engine = engine or mapped_engine
            voice = voice or mapped_voice

        filename = generate_hash_name(request_dto.text, engine, voice)
        physical_path = get_storage_path(self.cache_dir, filename)

        # Cache Hit
        if os.path.exists(physical_path) and not request_dto.regenerate:
            return AudioResponseDTO(status='exists', physical_path=physical_path, engine=engine, voice=voice)

        engine_cls = self.engines.get(engine)
        if not engine_cls:
            return AudioResponseDTO(status='error', error=f'Unknown engine: {engine}', engine=engine, voice=voice)

        generator = engine_cls()
        success = await generator.generate(request_dto.text, voice, physical_path)
        if success:
            logger.debug(f"[AudioService] Generated {physical_path} via {engine}:{voice}")
            return AudioResponseDTO(status='generated', physical_path=physical_path, engine=engine, voice=voice)
        return AudioResponseDTO(status='error', error='Generation failed', engine=engine, voice=voice)

    async def synthesize(self, text: str, language_code: str, regenerate: bool = False) -> str:
        """
        Generate (or reuse) the cached audio file for *text*.

        Word stores call this to fill ``Word.cached_audio_ref``. Pass
        ``regenerate=True`` to replace a cached file, e.g. after the voice
        mapping changed.
        """
        if not text or not text.strip():
            raise PlaybackError('Nothing to synthesize', text=text, language_code=language_code)

        result = await self.get_audio(
            AudioRequestDTO(text=text, language_code=language_code, regenerate=regenerate)
        )
        if result.status == 'error' or not result.physical_path:
            raise PlaybackError(result.error or 'Generation failed', text=text, language_code=language_code)
        return result.physical_path

    async def play(self, text: str, language_code: str, cached_audio_ref: Optional[str] = None) -> None:
        """
        Play *text*, preferring *cached_audio_ref* over a fresh synthesis.

        Cancelling the awaiting task stops the sound.
        """
        try:
            if is_file_ref(cached_audio_ref):
                await self.player.play_file(cached_audio_ref)
                return

            if cached_audio_ref:
                pcm = decode_pcm_ref(cached_audio_ref)
                if pcm:
                    await self.player.play_pcm(
                        pcm,
                        get_config_value('AUDIO_PCM_SAMPLE_RATE',
                                         default=AudioModuleDefaultConfig.AUDIO_PCM_SAMPLE_RATE),
                        AudioModuleDefaultConfig.AUDIO_PCM_SAMPLE_WIDTH,
                        AudioModuleDefaultConfig.AUDIO_PCM_CHANNELS,
                    )
                    return
                logger.info("[AudioService] Unusable cached audio reference, synthesizing instead")

            path = await self.synthesize(text, language_code)
            await self.player.play_file(path)
        except PlaybackError:
            raise
        except Exception as e:
            logger.error(f"[AudioService] Playback failed for {text[:30]!r}: {e}")
            raise PlaybackError(str(e), text=text, language_code=language_code) from e
