# File: drillstack_app/modules/practice/__init__.py
"""
Practice Engine
===============
Retry-queue scheduling, answer matching and the write / listen / match
session controllers.
"""

from .engine.listen_controller import ListenPracticeController
from .engine.match_board_controller import MatchBoardController
from .engine.match_quiz_controller import MatchQuizController
from .engine.write_controller import WritePracticeController
from .logics.answer_matcher import AnswerMatcher, is_answer_correct, normalize_answer
from .logics.retry_queue import RetryQueueScheduler
from .modes.factory import ModeFactory
from .services.practice_hub import PracticeHub

__all__ = [
    'AnswerMatcher',
    'ListenPracticeController',
    'MatchBoardController',
    'MatchQuizController',
    'ModeFactory',
    'PracticeHub',
    'RetryQueueScheduler',
    'WritePracticeController',
    'is_answer_correct',
    'normalize_answer',
]
