"""
Retry-queue scheduling shared by the write and listen modes.

Rules:
* A success removes the current item for good.
* The first failure keeps the item current so the learner can retry.
* The second failure (or a skip) moves the item to the end of the queue.
* The queue never grows; the session ends when it is empty.
"""

import random
from typing import Iterable, Optional, TypeVar

from ..schemas import DrillQueue

T = TypeVar('T')

# Failures allowed on the current item before it is demoted
MAX_ATTEMPTS = 2


class RetryQueueScheduler:
    """
    Stateless policy over a :class:`DrillQueue`.

    The queue object carries all mutable state; the scheduler only holds
    the random source used for the initial shuffle.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def initialize(self, items: Iterable[T]) -> DrillQueue:
        """Uniformly shuffled queue over *items*, cursor at 0."""
        shuffled = list(items)
        # random.shuffle is a Fisher-Yates shuffle
        self.rng.shuffle(shuffled)
        return DrillQueue(items=shuffled, cursor_index=0, attempts_for_current=0)

    @staticmethod
    def _clamp(queue: DrillQueue) -> None:
        if queue.cursor_index >= len(queue.items):
            queue.cursor_index = 0

    @staticmethod
    def _move_current_to_end(queue: DrillQueue) -> None:
        item = queue.items.pop(queue.cursor_index)
        queue.items.append(item)
        RetryQueueScheduler._clamp(queue)
        queue.attempts_for_current = 0

    def record_success(self, queue: DrillQueue) -> None:
        if queue.is_empty:
            return
        queue.items.pop(queue.cursor_index)
        self._clamp(queue)
        queue.attempts_for_current = 0

    def record_failure(self, queue: DrillQueue) -> bool:
        """
        Count a failed attempt on the current item.

        Returns True if this failure demoted the item to the end.
        """
        if queue.is_empty:
            return False
        queue.attempts_for_current += 1
        if queue.attempts_for_current < MAX_ATTEMPTS:
            return False
        self._move_current_to_end(queue)
        return True

    def skip(self, queue: DrillQueue) -> None:
        if queue.is_empty:
            return
        self._move_current_to_end(queue)

    @staticmethod
    def is_complete(queue: DrillQueue) -> bool:
        return queue.is_empty

    @staticmethod
    def current_item(queue: DrillQueue):
        if queue.is_empty:
            return None
        return queue.items[queue.cursor_index]

    @staticmethod
    def is_last_attempt(queue: DrillQueue) -> bool:
        """True if the next failure on the current item demotes it."""
        return not queue.is_empty and queue.attempts_for_current + 1 >= MAX_ATTEMPTS

    @staticmethod
    def attempts_remaining(queue: DrillQueue) -> int:
        return max(0, MAX_ATTEMPTS - queue.attempts_for_current)
