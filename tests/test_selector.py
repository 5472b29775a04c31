import numpy as np
import pytest

from wordle_solvrs.errors import (ConfigError, InvalidWord, LengthMismatch, NoCandidates,
                                  UnknownWord)
from wordle_solvrs.feedback import all_hit_pattern, evaluate
from wordle_solvrs.filtering import GuessRecord, narrow_history
from wordle_solvrs.selector import (GuessSelector, score_guesses, score_partitions,
                                    select_guess)
from wordle_solvrs.session import parse_state
from wordle_solvrs.words import WordList, words_to_chars


ILLS = ["bills", "fills", "hills", "pills"]
GUESSABLE = ILLS + ["fbhpz"]
PLAYED = [GuessRecord("crane", evaluate("crane", "bills"))]


def test_score_partitions():
    row = np.array([0, 0, 1, 5, 5, 5], dtype=np.int64)
    assert score_partitions(row, 5, False) == 2 * 2 + 1 * 1
    assert score_partitions(row, 5, True) == 2
    assert score_partitions(np.zeros(0, dtype=np.int64), 5, False) == 0


def test_score_guesses():
    guess_chars = words_to_chars(["bills", "fbhpz"])
    candidate_chars = words_to_chars(ILLS)
    expected = score_guesses(guess_chars, candidate_chars, all_hit_pattern(5), False)
    worst = score_guesses(guess_chars, candidate_chars, all_hit_pattern(5), True)
    # bills: {hit, 3 x bgggg}; fbhpz splits all four apart
    assert list(expected) == [9, 4]
    assert list(worst) == [3, 1]


@pytest.mark.parametrize("strategy", ["expected", "worst"])
def test_prefers_better_split_over_candidate(strategy):
    selector = GuessSelector(GUESSABLE, first_guess=None, strategy=strategy)
    assert selector.select(ILLS, PLAYED) == "fbhpz"


def test_tie_break_prefers_candidates_then_alphabetical(small_words):
    selector = GuessSelector(small_words, first_guess="crane")
    # caret and cater give crane the same feedback; either one splits the pair
    history = [GuessRecord("crane", evaluate("crane", "cater"))]
    candidates = narrow_history(small_words, history)
    assert candidates == {"caret", "cater"}
    assert selector.select(candidates, history) == "caret"


def test_single_candidate_is_returned():
    selector = GuessSelector(GUESSABLE, first_guess="fbhpz")
    assert selector.select({"hills"}, PLAYED) == "hills"
    assert selector.select({"hills"}) == "hills"


def test_empty_candidates():
    with pytest.raises(NoCandidates):
        GuessSelector(GUESSABLE, first_guess=None).select(set(), PLAYED)


def test_first_guess_skips_scoring(small_words):
    selector = GuessSelector(small_words, first_guess="abbey")
    assert selector.select(small_words) == "abbey"


def test_first_guess_can_be_scored(small_words):
    selector = GuessSelector(small_words, first_guess=None)
    guess = selector.select(small_words)
    assert guess in small_words
    assert guess == selector.best_guess(small_words)


def test_deterministic(default_words):
    history = parse_state("slateybbbb", 5)
    candidates = narrow_history(default_words, history)
    selector = GuessSelector(default_words)
    first = selector.select(candidates, history)
    assert first in default_words
    assert selector.select(candidates, history) == first
    assert select_guess(set(candidates), default_words, history) == first


def test_selector_validation(small_words):
    with pytest.raises(UnknownWord):
        GuessSelector(small_words, first_guess="reads")
    with pytest.raises(LengthMismatch):
        GuessSelector(small_words, first_guess="cranes")
    with pytest.raises(ConfigError):
        GuessSelector(small_words, strategy="random")
    with pytest.raises(LengthMismatch):
        GuessSelector(small_words, first_guess="crane").best_guess({"abc", "abd"})


def test_accepts_plain_lists():
    selector = GuessSelector(GUESSABLE, first_guess="bills")
    assert isinstance(selector.guessable, WordList)
    assert selector.first_guess == "bills"


def test_candidates_are_checked_before_scoring(small_words):
    selector = GuessSelector(small_words, first_guess=None)
    with pytest.raises(InvalidWord):
        selector.best_guess({"CRANE", "cafés", "slate"})
    with pytest.raises(LengthMismatch):
        selector.best_guess({"crane", "slates"})
    with pytest.raises(InvalidWord):
        select_guess({"cr4ne", "slate"}, small_words, first_guess=None)
