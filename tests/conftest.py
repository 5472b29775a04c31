import pytest

from wordle_solvrs.words import WordList, load_default_words


SMALL_WORDS = [
    "crane", "slate", "trace", "crate", "react", "caret", "cater", "abbey", "table", "eerie",
    "there", "three", "speed", "abide", "level", "belle", "cools", "scoop", "raise", "stare",
]


@pytest.fixture(scope="session")
def small_words():
    return WordList(SMALL_WORDS)


@pytest.fixture(scope="session")
def default_words():
    return load_default_words()
