# File: drillstack_app/modules/preferences/interface.py
"""
Preference Store
================
Tiny key/value contract the engine uses for settings that must survive
between sessions (currently only ``listen_direction``).
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LISTEN_DIRECTION_KEY = 'listen_direction'


class PreferenceStore(ABC):

    @abstractmethod
    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class InMemoryPreferenceStore(PreferenceStore):
    """Preferences that live as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFilePreferenceStore(PreferenceStore):
    """
    Preferences persisted to a single JSON object on disk.

    The file is re-read on every ``get`` so two processes sharing it see
    each other's writes.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"[Preferences] Could not read {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._load().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
