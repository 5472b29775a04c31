"""
Guess Selection
===============

Picks the next guess by partitioning the remaining candidates on the feedback
each allowed guess would produce. A good guess splits the candidates into many
small groups, so whatever the answer is, few candidates survive.

Scores (lower is better):
- expected: sum of size^2 over the partitions, i.e. the expected number of
  candidates left times the number of candidates
- worst: size of the largest partition (minimax)

The all-green partition is left out of both: guessing the answer leaves
nothing to solve. Ties go to guesses that could be the answer, then to the
alphabetically first word.

The opening guess is not scored. Scoring the whole list always lands on the
same word, so a fixed, configurable first word is used instead.
"""

import logging
from typing import Iterable, Sequence

import numpy as np
from numba import jit, prange

from .errors import ConfigError, LengthMismatch, NoCandidates, UnknownWord
from .feedback import all_hit_pattern, compute_feedback_row
from .filtering import GuessRecord
from .words import WordList, check_words, words_to_chars


log = logging.getLogger(__name__)


# ============================================================================
# CONSTANTS
# ============================================================================

DEFAULT_FIRST_WORD = "reads"
STRATEGIES = ("expected", "worst")


# ============================================================================
# NUMBA-ACCELERATED SCORING
# ============================================================================

@jit(nopython=True, cache=True)
def score_partitions(sorted_row: np.ndarray, all_hit: int, worst_case: bool) -> int:
    """
    Score one guess from its sorted feedback patterns against the candidates.

    Equal patterns are adjacent after sorting, so each run is one partition.
    """
    n = sorted_row.shape[0]
    score = 0
    start = 0
    for j in range(1, n + 1):
        if j == n or sorted_row[j] != sorted_row[start]:
            if sorted_row[start] != all_hit:
                size = j - start
                if worst_case:
                    if size > score:
                        score = size
                else:
                    score += size * size
            start = j
    return score


@jit(nopython=True, parallel=True, cache=True)
def score_guesses(guess_chars: np.ndarray, candidate_chars: np.ndarray,
                  all_hit: int, worst_case: bool) -> np.ndarray:
    """
    Score every guess against the candidate set in parallel.

    Args:
        guess_chars: shape (n_guesses, L) char codes
        candidate_chars: shape (n_candidates, L) char codes
        all_hit: the all-green pattern for length L
        worst_case: score by largest partition instead of sum of squares

    Returns:
        shape (n_guesses,) integer scores
    """
    n_guesses = guess_chars.shape[0]
    scores = np.zeros(n_guesses, dtype=np.int64)

    for i in prange(n_guesses):
        row = np.sort(compute_feedback_row(guess_chars[i], candidate_chars))
        scores[i] = score_partitions(row, all_hit, worst_case)

    return scores


# ============================================================================
# SELECTOR CLASS
# ============================================================================

class GuessSelector:
    """
    Chooses guesses from a fixed list of allowed words.

    Args:
        guessable: allowed guesses
        first_guess: opening guess used while the history is empty, or None to
            score the opening guess like any other
        strategy: "expected" or "worst"
    """

    def __init__(self, guessable: Iterable[str], first_guess: str = DEFAULT_FIRST_WORD,
                 strategy: str = "expected"):
        self.guessable = guessable if isinstance(guessable, WordList) else WordList(guessable)

        if strategy not in STRATEGIES:
            raise ConfigError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}")
        self.strategy = strategy

        if first_guess is not None:
            first_guess = first_guess.lower()
            if len(first_guess) != self.guessable.length:
                raise LengthMismatch(
                    f"First guess '{first_guess}' must have {self.guessable.length} letters"
                )
            if first_guess not in self.guessable:
                raise UnknownWord(f"First guess '{first_guess}' is not in the word list")
        self.first_guess = first_guess

    def select(self, candidates: Iterable[str], history: Sequence[GuessRecord] = ()) -> str:
        """
        Next guess for the given candidates and history.

        Raises:
            NoCandidates: candidates is empty
        """
        candidates = frozenset(candidates)
        if not candidates:
            raise NoCandidates("No candidates to choose a guess from")

        if len(candidates) == 1:
            # Only one candidate - guess it
            return next(iter(candidates))

        if not history and self.first_guess is not None:
            return self.first_guess

        return self.best_guess(candidates)

    def best_guess(self, candidates: Iterable[str]) -> str:
        """Highest scoring guess for candidates, ignoring the opening rule."""
        cand_words = check_words(sorted(candidates), self.guessable.length)
        candidate_chars = words_to_chars(cand_words)

        scores = score_guesses(self.guessable.chars, candidate_chars,
                               all_hit_pattern(self.guessable.length),
                               self.strategy == "worst")

        cand_set = set(cand_words)
        words = self.guessable.words
        best_idx = min(range(len(words)),
                       key=lambda i: (scores[i], words[i] not in cand_set, words[i]))

        log.debug(f"Best guess for {len(cand_words)} candidates: "
                  f"{words[best_idx]} (score {scores[best_idx]}, {self.strategy})")
        return words[best_idx]


def select_guess(candidates: Iterable[str], guessable: Iterable[str],
                 history: Sequence[GuessRecord] = (),
                 first_guess: str = DEFAULT_FIRST_WORD,
                 strategy: str = "expected") -> str:
    """One-off GuessSelector(guessable, first_guess, strategy).select(...)."""
    return GuessSelector(guessable, first_guess, strategy).select(candidates, history)
