"""
Pure helpers for the audio module - hashing, paths, voice resolution.
No I/O beyond path checks.
"""

import base64
import binascii
import hashlib
import os
from typing import Dict, Optional, Tuple


def generate_hash_name(text: str, engine: str, voice: str) -> str:
    """
    Generate a deterministic MD5 hash filename for the audio request.
    Format: md5(text|engine|voice).mp3
    """
    # Normalize inputs
    text_norm = text.strip()
    voice_norm = voice if voice else "default"

    raw_key = f"{text_norm}|{engine}|{voice_norm}"
    hash_obj = hashlib.md5(raw_key.encode('utf-8'))
    return f"{hash_obj.hexdigest()}.mp3"


def get_storage_path(cache_dir: str, filename: str) -> str:
    """Absolute path of *filename* inside *cache_dir*."""
    return os.path.abspath(os.path.join(cache_dir, filename))


def resolve_voice(
    language_code: str,
    mapping: Dict[str, str],
    default_engine: str,
) -> Tuple[str, str]:
    """
    Pick ``(engine, voice)`` for a language.

    Mapping values use the ``'engine:voice'`` format (e.g.
    ``'edge:sv-SE-SofieNeural'``). A value without a colon is a voice for
    the default engine. Unmapped languages fall back to the default engine
    with the language code as voice.
    """
    found = mapping.get(language_code)
    if not found:
        # 'sv-SE' may be mapped only as 'sv'
        found = mapping.get((language_code or '').split('-')[0])

    if not found:
        return default_engine, language_code

    if ':' in found:
        engine, voice = found.split(':', 1)
        return engine, voice
    return default_engine, found


def is_file_ref(ref: Optional[str]) -> bool:
    """True if the cached reference points at an audio file on disk."""
    return bool(ref) and os.path.isfile(ref)


def decode_pcm_ref(ref: str) -> Optional[bytes]:
    """
    Decode a base64 raw PCM reference.

    Returns None when *ref* is not valid base64 or decodes to nothing.
    """
    try:
        data = base64.b64decode(ref, validate=True)
    except (binascii.Error, ValueError):
        return None
    return data or None
