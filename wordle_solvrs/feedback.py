"""
Feedback Evaluation
===================

Scores a guess against an answer exactly like Wordle does, including the
duplicate-letter rule: each answer letter can colour at most one guess letter,
greens are claimed first, yellows are handed out left to right from what is
left.

Feedback is a tuple of Marks, one per position. For the numba kernels the same
feedback is packed into an integer pattern, mark[i] * 3**i summed over the
positions; 3**L - 1 is the all-green pattern.
"""

from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np
from numba import jit

from .errors import InvalidWord, LengthMismatch, ParseError
from .words import ALPHABET, words_to_chars


# ============================================================================
# CONSTANTS
# ============================================================================

class Mark(IntEnum):
    ABSENT = 0   # gray
    PRESENT = 1  # yellow
    HIT = 2      # green


Feedback = Tuple[Mark, ...]

MARK_TO_CHAR = {Mark.HIT: 'g', Mark.PRESENT: 'y', Mark.ABSENT: 'b'}
CHAR_TO_MARK = {c: m for m, c in MARK_TO_CHAR.items()}
MARK_TO_EMOJI = {Mark.HIT: '🟩', Mark.PRESENT: '🟨', Mark.ABSENT: '⬛'}


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray) -> int:
    """
    Compute Wordle feedback for a guess against an answer.

    Args:
        guess: shape (L,) array of char codes (0-25 for a-z)
        answer: shape (L,) array of char codes

    Returns:
        Integer feedback pattern (0 to 3**L - 1)
    """
    n = guess.shape[0]
    feedback = np.zeros(n, dtype=np.int64)
    answer_counts = np.zeros(26, dtype=np.int32)

    # Count letters in answer
    for i in range(n):
        answer_counts[answer[i]] += 1

    # First pass: mark greens
    for i in range(n):
        if guess[i] == answer[i]:
            feedback[i] = 2
            answer_counts[guess[i]] -= 1

    # Second pass: mark yellows
    for i in range(n):
        if feedback[i] == 0:
            c = guess[i]
            if answer_counts[c] > 0:
                feedback[i] = 1
                answer_counts[c] -= 1

    pattern = 0
    multiplier = 1
    for i in range(n):
        pattern += feedback[i] * multiplier
        multiplier *= 3
    return pattern


@jit(nopython=True, cache=True)
def compute_feedback_row(guess: np.ndarray, answer_chars: np.ndarray) -> np.ndarray:
    """Feedback patterns for one guess against every row of answer_chars."""
    n_answers = answer_chars.shape[0]
    result = np.zeros(n_answers, dtype=np.int64)
    for j in range(n_answers):
        result[j] = compute_feedback(guess, answer_chars[j])
    return result


# ============================================================================
# PATTERN CODEC
# ============================================================================

def all_hit_pattern(length: int) -> int:
    return 3 ** length - 1


def encode_feedback(feedback: Iterable[Mark]) -> int:
    pattern = 0
    multiplier = 1
    for mark in feedback:
        pattern += int(mark) * multiplier
        multiplier *= 3
    return pattern


def decode_pattern(pattern: int, length: int) -> Feedback:
    """Convert an integer pattern back to a tuple of Marks."""
    marks = []
    for _ in range(length):
        marks.append(Mark(pattern % 3))
        pattern //= 3
    return tuple(marks)


def is_solved(feedback: Iterable[Mark]) -> bool:
    return all(m == Mark.HIT for m in feedback)


# ============================================================================
# PUBLIC API
# ============================================================================

def _check_lengths(guess: str, answer: str):
    for w in (guess, answer):
        if not set(w) <= ALPHABET:
            raise InvalidWord(f"'{w}' is not a lowercase a-z word")
    if len(guess) != len(answer):
        raise LengthMismatch(
            f"Guess '{guess}' has {len(guess)} letters but answer '{answer}' has {len(answer)}"
        )


def evaluate_pattern(guess: str, answer: str) -> int:
    """Feedback for guess against answer as an integer pattern."""
    _check_lengths(guess, answer)
    chars = words_to_chars([guess, answer])
    return int(compute_feedback(chars[0], chars[1]))


def evaluate(guess: str, answer: str) -> Feedback:
    """
    Feedback for guess against answer.

    >>> feedback_to_string(evaluate("abbey", "table"))
    'ybgyb'
    """
    return decode_pattern(evaluate_pattern(guess, answer), len(guess))


def parse_feedback(text: str, length: int) -> Feedback:
    """
    Parse a g/y/b feedback string (g=green, y=yellow, b=gray).

    Raises:
        ParseError: wrong length or a character outside g/y/b
    """
    text = text.strip().lower()
    if len(text) != length:
        raise ParseError(f"Feedback must be {length} characters, got '{text}'")
    marks = []
    for c in text:
        if c not in CHAR_TO_MARK:
            raise ParseError(f"Invalid feedback `{c}` in '{text}'")
        marks.append(CHAR_TO_MARK[c])
    return tuple(marks)


def feedback_to_string(feedback: Iterable[Mark]) -> str:
    return ''.join(MARK_TO_CHAR[Mark(m)] for m in feedback)


def feedback_to_emoji(feedback: Iterable[Mark]) -> str:
    return ''.join(MARK_TO_EMOJI[Mark(m)] for m in feedback)
