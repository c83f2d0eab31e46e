"""
Centralized Default Configuration for DrillStack.

This file serves as the "Source of Truth" for all default engine settings.
These values are used as fallbacks if a setting is missing from the
environment and from the per-controller overrides.
"""

DEFAULT_APP_CONFIGS = {
    # --- Write / Listen feedback delays (seconds) ---
    'PRACTICE_CORRECT_DELAY': 1.5,
    'PRACTICE_REVEAL_DELAY': 2.0,

    # --- Matching ---
    'MATCH_MIN_WORDS': 4,
    'MATCH_BOARD_SIZE': 8,
    'MATCH_WRONG_FLASH_DELAY': 0.8,
    'MATCH_QUIZ_CORRECT_DELAY': 1.5,
    'MATCH_QUIZ_WRONG_DELAY': 2.5,

    # --- Listening ---
    'LISTEN_DEFAULT_DIRECTION': 'source',

    # --- Audio Service Defaults ---
    'AUDIO_DEFAULT_ENGINE': 'gtts',
    'AUDIO_CACHE_DIR': 'audio_cache',
    'AUDIO_PCM_SAMPLE_RATE': 24000,

    # --- Logging ---
    'LOG_LEVEL': 'INFO',
    'LOG_JSON': False,
    'LOG_DIR': 'logs',
    'LOG_TO_FILE': True,
}
