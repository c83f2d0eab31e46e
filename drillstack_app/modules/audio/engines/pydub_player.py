import asyncio
import logging
import os
import tempfile

from pydub import AudioSegment

from drillstack_app.core.error_handlers import PlaybackError
from .base import AudioPlayer

logger = logging.getLogger(__name__)


class PydubPlayer(AudioPlayer):
    """
    Decodes with pydub and plays the result through an ``ffplay`` child
    process, the same backend ``pydub.playback`` falls back to.

    Running the player as a subprocess keeps it killable: cancelling the
    awaiting task terminates ``ffplay`` so the sound stops at once.
    """

    FFPLAY_ARGS = ('-nodisp', '-autoexit', '-hide_banner', '-loglevel', 'error')

    def __init__(self, ffplay: str = 'ffplay'):
        self.ffplay = ffplay

    async def play_file(self, path: str) -> None:
        segment = await asyncio.to_thread(AudioSegment.from_file, path)
        await self._play_segment(segment)

    async def play_pcm(self, data: bytes, sample_rate: int, sample_width: int, channels: int) -> None:
        segment = AudioSegment(
            data=data,
            sample_width=sample_width,
            frame_rate=sample_rate,
            channels=channels,
        )
        await self._play_segment(segment)

    async def _play_segment(self, segment: AudioSegment) -> None:
        fd, wav_path = tempfile.mkstemp(suffix='.wav', prefix='drillstack_')
        os.close(fd)
        try:
            await asyncio.to_thread(segment.export, wav_path, format='wav')
            process = await asyncio.create_subprocess_exec(
                self.ffplay, *self.FFPLAY_ARGS, wav_path,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                _, stderr = await process.communicate()
            except asyncio.CancelledError:
                logger.debug("[PydubPlayer] Playback cancelled, stopping ffplay")
                process.kill()
                await process.wait()
                raise

            if process.returncode != 0:
                message = (stderr or b'').decode('utf-8', 'replace').strip()
                raise PlaybackError(message or f'ffplay exited with {process.returncode}')
        finally:
            os.remove(wav_path)
