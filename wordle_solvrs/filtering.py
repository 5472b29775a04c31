"""
Candidate Filtering
===================

A word stays a candidate only if guessing against it would have produced
exactly the feedback that was recorded. Because the test is "same feedback",
repeated letters need no special casing here: the duplicate-letter rules live
in compute_feedback alone.
"""

import logging
from typing import FrozenSet, Iterable, NamedTuple, Sequence

import numpy as np

from .errors import LengthMismatch, NoCandidates
from .feedback import (Feedback, compute_feedback_row, encode_feedback,
                       evaluate, feedback_to_string)
from .words import WordList, check_words, words_to_chars


log = logging.getLogger(__name__)


class GuessRecord(NamedTuple):
    """One turn: the word guessed and the feedback it received."""
    guess: str
    feedback: Feedback

    def __str__(self) -> str:
        return f"{self.guess}{feedback_to_string(self.feedback)}"


def narrow(candidates: Iterable[str], guess: str, feedback: Feedback) -> FrozenSet[str]:
    """
    Keep the candidates w for which evaluate(guess, w) == feedback.

    The result may be empty; callers decide whether that is an error.
    """
    check_words([guess], len(guess))
    if len(feedback) != len(guess):
        raise LengthMismatch(
            f"Feedback has {len(feedback)} marks but guess '{guess}' has {len(guess)} letters"
        )

    if isinstance(candidates, WordList):
        words = candidates.words
        chars = candidates.chars
    else:
        words = check_words(sorted(candidates), len(guess))
        if not words:
            return frozenset()
        chars = words_to_chars(words)

    if chars.shape[1] != len(guess):
        raise LengthMismatch(
            f"Guess '{guess}' has {len(guess)} letters, candidates have {chars.shape[1]}"
        )

    guess_chars = words_to_chars([guess])[0]
    row = compute_feedback_row(guess_chars, chars)
    keep = np.nonzero(row == encode_feedback(feedback))[0]
    return frozenset(words[i] for i in keep)


def narrow_history(words: Iterable[str], history: Sequence[GuessRecord]) -> FrozenSet[str]:
    """
    Fold narrow over the history in turn order, starting from words.

    Raises:
        NoCandidates: the recorded feedback contradicts every word
    """
    candidates = words if isinstance(words, WordList) else frozenset(words)
    for record in history:
        before = len(candidates)
        candidates = narrow(candidates, record.guess, record.feedback)
        log.debug(f"{record}: {before} -> {len(candidates)} candidates")
        if not candidates:
            raise NoCandidates(
                "Feedback is inconsistent with every word",
                guess=record.guess,
                feedback=feedback_to_string(record.feedback),
            )
    return frozenset(candidates)


def is_consistent(word: str, history: Sequence[GuessRecord]) -> bool:
    """True if word would have produced every recorded feedback."""
    return all(evaluate(r.guess, word) == tuple(r.feedback) for r in history)
