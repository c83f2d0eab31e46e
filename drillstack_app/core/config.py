# File: drillstack_app/core/config.py
# Core configuration layer: environment first, then DEFAULT_APP_CONFIGS.

import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .defaults import DEFAULT_APP_CONFIGS
from .error_handlers import ConfigurationError

load_dotenv()

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))


def _env(key: str) -> Any:
    """Read *key* from the environment, coerced to the type of its default."""
    raw = os.environ.get(key)
    if raw is None:
        return DEFAULT_APP_CONFIGS.get(key)

    default = DEFAULT_APP_CONFIGS.get(key)
    try:
        if isinstance(default, bool):
            return raw.strip().lower() in ('1', 'true', 'yes', 'on')
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value {raw!r} for {key}", key=key) from exc
    return raw


class Config:
    """DrillStack engine configuration."""

    PRACTICE_CORRECT_DELAY = _env('PRACTICE_CORRECT_DELAY')
    PRACTICE_REVEAL_DELAY = _env('PRACTICE_REVEAL_DELAY')

    MATCH_MIN_WORDS = _env('MATCH_MIN_WORDS')
    MATCH_BOARD_SIZE = _env('MATCH_BOARD_SIZE')
    MATCH_WRONG_FLASH_DELAY = _env('MATCH_WRONG_FLASH_DELAY')
    MATCH_QUIZ_CORRECT_DELAY = _env('MATCH_QUIZ_CORRECT_DELAY')
    MATCH_QUIZ_WRONG_DELAY = _env('MATCH_QUIZ_WRONG_DELAY')

    LISTEN_DEFAULT_DIRECTION = _env('LISTEN_DEFAULT_DIRECTION')

    AUDIO_DEFAULT_ENGINE = _env('AUDIO_DEFAULT_ENGINE')
    AUDIO_CACHE_DIR = os.path.join(BASE_DIR, _env('AUDIO_CACHE_DIR'))
    AUDIO_PCM_SAMPLE_RATE = _env('AUDIO_PCM_SAMPLE_RATE')

    LOG_LEVEL = _env('LOG_LEVEL')
    LOG_JSON = _env('LOG_JSON')
    LOG_DIR = os.path.join(BASE_DIR, _env('LOG_DIR'))
    LOG_TO_FILE = _env('LOG_TO_FILE')


def get_config_value(key: str, overrides: Optional[Dict[str, Any]] = None, default: Any = None) -> Any:
    """
    Resolve a setting: per-controller *overrides* → ``Config`` → *default*.
    """
    if overrides and key in overrides:
        return overrides[key]
    value = getattr(Config, key, None)
    if value is not None:
        return value
    if default is not None:
        return default
    return DEFAULT_APP_CONFIGS.get(key)
