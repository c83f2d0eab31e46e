# File: drillstack_app/modules/practice/modes/factory.py
"""
Mode Factory
============
Creates practice controllers by mode name.

New modes are registered here.  To add a mode:
1. Create a controller extending ``BasePracticeController``.
2. Import and add it to ``_BUILTIN_MODES`` below.
"""

from __future__ import annotations

import inspect
from typing import Any, Dict, List, Type

from ..engine.base_controller import BasePracticeController
from ..schemas import MODE_MATCH, MODE_MATCH_COMPACT


class ModeFactory:
    """
    Factory for practice controllers.

    Supports both built-in auto-registration and runtime registration
    via ``register()``.
    """

    _modes: Dict[str, Type[BasePracticeController]] = {}
    _initialised: bool = False

    @classmethod
    def _ensure_builtins(cls) -> None:
        """Lazy-load built-in modes on first access."""
        if cls._initialised:
            return

        from ..engine.listen_controller import ListenPracticeController
        from ..engine.match_board_controller import MatchBoardController
        from ..engine.match_quiz_controller import MatchQuizController
        from ..engine.write_controller import WritePracticeController

        _BUILTIN_MODES = [
            WritePracticeController,
            ListenPracticeController,
            MatchBoardController,
            MatchQuizController,
        ]

        for mode_class in _BUILTIN_MODES:
            cls._modes[mode_class.mode] = mode_class

        cls._initialised = True

    # ── public API ───────────────────────────────────────────────────

    @classmethod
    def register(cls, mode_class: Type[BasePracticeController]) -> None:
        """Register a custom mode at runtime."""
        cls._ensure_builtins()
        if not mode_class.mode:
            raise ValueError(f"{mode_class.__name__} does not declare a mode")
        cls._modes[mode_class.mode] = mode_class

    @classmethod
    def resolve(cls, mode_name: str, compact: bool = False) -> str:
        """``'match'`` becomes ``'match_compact'`` on compact screens."""
        if mode_name == MODE_MATCH and compact:
            return MODE_MATCH_COMPACT
        return mode_name

    @classmethod
    def create(cls, mode_name: str, compact: bool = False, **dependencies: Any) -> BasePracticeController:
        """
        Instantiate a controller by name.

        Args:
            mode_name: e.g. ``'write'``, ``'listen'``, ``'match'``.
            compact: Pick the single-item variant of matching.
            dependencies: ``word_store``, ``language_service``,
                ``preferences``, ``settings``, ``rng``. Only the ones the
                controller accepts are passed on.

        Raises:
            KeyError: If no mode is registered under *mode_name*.
        """
        cls._ensure_builtins()

        resolved = cls.resolve(mode_name, compact)
        mode_class = cls._modes.get(resolved)
        if mode_class is None:
            raise KeyError(
                f"Unknown practice mode: {mode_name!r}. "
                f"Available: {list(cls._modes.keys())}"
            )

        accepted = inspect.signature(mode_class.__init__).parameters
        kwargs = {k: v for k, v in dependencies.items() if k in accepted}
        return mode_class(**kwargs)

    @classmethod
    def available_modes(cls) -> List[str]:
        """Return registered mode names."""
        cls._ensure_builtins()
        return list(cls._modes.keys())
