# File: drillstack_app/modules/words/__init__.py
from .config import get_language_name
from .interface import InMemoryWordStore, WordStore
from .schemas import Word

__all__ = ['InMemoryWordStore', 'Word', 'WordStore', 'get_language_name']
