from .interface import (
    LISTEN_DIRECTION_KEY,
    InMemoryPreferenceStore,
    JsonFilePreferenceStore,
    PreferenceStore,
)

__all__ = [
    'LISTEN_DIRECTION_KEY',
    'InMemoryPreferenceStore',
    'JsonFilePreferenceStore',
    'PreferenceStore',
]
