"""
Feedback Timer
==============
One cancellable delayed transition per session ("cancel and replace").
Scheduling a new transition cancels the pending one; closing the session
cancels whatever is left.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class FeedbackTimer:

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable, *args) -> None:
        """
        Run ``callback(*args)`` after *delay* seconds on the running loop.

        Must be called from code running inside the event loop.
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(max(0.0, float(delay)), self._fire, callback, args)

    def _fire(self, callback: Callable, args: tuple) -> None:
        self._handle = None
        callback(*args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
