import asyncio
import os
import random
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from drillstack_app.core.error_handlers import PlaybackError
from drillstack_app.modules.audio.interface import LanguageService
from drillstack_app.modules.preferences.interface import InMemoryPreferenceStore
from drillstack_app.modules.words.interface import InMemoryWordStore
from drillstack_app.modules.words.schemas import Word


# Zero delays: transitions fire on the next loop iteration
FAST_SETTINGS = {
    'PRACTICE_CORRECT_DELAY': 0,
    'PRACTICE_REVEAL_DELAY': 0,
    'MATCH_WRONG_FLASH_DELAY': 0,
    'MATCH_QUIZ_CORRECT_DELAY': 0,
    'MATCH_QUIZ_WRONG_DELAY': 0,
}

SAMPLE_PAIRS = [
    ('hus', 'house'),
    ('bil', 'car'),
    ('katt', 'cat'),
    ('hund', 'dog'),
    ('bok', 'book'),
    ('fönster', 'window'),
    ('stol', 'chair'),
    ('bord', 'table'),
    ('äpple', 'apple'),
    ('vatten', 'water'),
]


def make_words(count, language_code='en-US'):
    return [
        Word(id=i + 1, source_text=src, target_text=tgt, language_code=language_code)
        for i, (src, tgt) in enumerate(SAMPLE_PAIRS[:count])
    ]


async def settle(seconds=0.01):
    """Let pending call_later transitions and audio tasks run."""
    await asyncio.sleep(seconds)


class FakeLanguageService(LanguageService):
    """Records playback requests; can fail or hang until released."""

    def __init__(self, fail=False, block=False):
        self.fail = fail
        self.block = block
        self.calls = []
        self._release = None

    async def play(self, text, language_code, cached_audio_ref=None):
        self.calls.append((text, language_code, cached_audio_ref))
        if self.block:
            self._release = asyncio.Event()
            await self._release.wait()
        if self.fail:
            raise PlaybackError('Speaker unplugged', text=text, language_code=language_code)

    def release(self):
        if self._release is not None:
            self._release.set()


@pytest.fixture
def words():
    return make_words(5)


@pytest.fixture
def word_store(words):
    return InMemoryWordStore(words)


@pytest.fixture
def language_service():
    return FakeLanguageService()


@pytest.fixture
def preferences():
    return InMemoryPreferenceStore()


@pytest.fixture
def rng():
    return random.Random(42)


@pytest.fixture
def fast_settings():
    return dict(FAST_SETTINGS)
