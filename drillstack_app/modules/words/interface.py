from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .schemas import Word


class WordStore(ABC):
    """
    Read-only view of the learner's word pairs.

    The practice engine only ever lists words; creating, deleting and
    persisting them belongs to the store's owner.
    """

    @abstractmethod
    def list_words(self) -> List[Word]:
        """Return every stored word. Order is only used as shuffle input."""
        ...


class InMemoryWordStore(WordStore):
    """WordStore backed by a plain list."""

    def __init__(self, words: Optional[Iterable[Word]] = None):
        self._words: List[Word] = list(words or [])

    def list_words(self) -> List[Word]:
        return list(self._words)

    def add(self, word: Word) -> None:
        if any(w.id == word.id for w in self._words):
            raise ValueError(f"Duplicate word id: {word.id!r}")
        self._words.append(word)

    def remove(self, word_id) -> bool:
        before = len(self._words)
        self._words = [w for w in self._words if w.id != word_id]
        return len(self._words) != before

    def clear(self) -> None:
        self._words = []

    def __len__(self) -> int:
        return len(self._words)
