"""
Pure logic for grading free-text answers.
No I/O, no session state.

The containment rule accepts an answer that embeds a reference word of
three or more characters, even if the rest of the answer is unrelated.
"""

import re
from typing import List, Optional

# Stripped before comparison
_PUNCTUATION_RE = re.compile(r'[.,!?;:]')
_ALTERNATIVE_SPLIT_RE = re.compile(r'[/,]')

# Substrings must be longer than this to count as a partial match
MIN_PARTIAL_LENGTH = 2


def normalize_answer(text: Optional[str]) -> str:
    """Lowercase, drop ``. , ! ? ; :`` and trim surrounding whitespace."""
    if not text:
        return ''
    return _PUNCTUATION_RE.sub('', text.lower()).strip()


def split_alternatives(normalized_reference: str) -> List[str]:
    """
    Split a normalized reference on ``/`` or ``,``.

    ``"hus / byggnad"`` -> ``["hus", "byggnad"]``. Empty pieces are dropped.
    """
    parts = (part.strip() for part in _ALTERNATIVE_SPLIT_RE.split(normalized_reference))
    return [part for part in parts if part]


def is_answer_correct(user_answer: Optional[str], reference_answer: Optional[str]) -> bool:
    """
    Compare a learner's answer with the reference answer.

    Total: any input, including empty text, yields a boolean.
    """
    user = normalize_answer(user_answer)
    reference = normalize_answer(reference_answer)

    if user == reference:
        return True

    alternatives = split_alternatives(reference)

    if any(alt == user for alt in alternatives):
        return True

    # Partial answer, e.g. "hus" for "hus byggnad"
    if len(user) > MIN_PARTIAL_LENGTH and any(user in alt for alt in alternatives):
        return True

    # Learner wrote more than needed, e.g. "the house" for "house"
    if any(alt in user and len(alt) > MIN_PARTIAL_LENGTH for alt in alternatives):
        return True

    return False


class AnswerMatcher:
    """Namespace wrapper so controllers can swap the grading strategy."""

    normalize = staticmethod(normalize_answer)
    alternatives = staticmethod(split_alternatives)

    @staticmethod
    def matches(user_answer: Optional[str], reference_answer: Optional[str]) -> bool:
        return is_answer_correct(user_answer, reference_answer)
