"""
Word Lists
==========

A WordList is the fixed set of equal-length words a session uses both as
allowed guesses and as possible answers. It is validated once, sorted, and
never mutated afterwards.
"""

import logging
import os
import string
from typing import Dict, Iterable, Iterator, List, Optional

import numpy as np

from .errors import InvalidWord, LengthMismatch, LoadError


log = logging.getLogger(__name__)

DEFAULT_WORD_LENGTH = 5
ALPHABET = frozenset(string.ascii_lowercase)

DEFAULT_WORDS_FILE = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "words", "answers.txt"
)


def words_to_chars(words: Iterable[str]) -> np.ndarray:
    """Convert words to a (n_words, length) array of letter codes (0-25)."""
    words = list(words)
    length = len(words[0]) if words else 0
    arr = np.zeros((len(words), length), dtype=np.int32)
    for i, w in enumerate(words):
        for j, c in enumerate(w):
            arr[i, j] = ord(c) - ord('a')
    return arr


def check_words(words: Iterable[str], length: int) -> List[str]:
    """
    Check words before they reach the kernels.

    Raises:
        InvalidWord: a character outside a-z
        LengthMismatch: a word that is not length letters long
    """
    words = list(words)
    for w in words:
        if not set(w) <= ALPHABET:
            raise InvalidWord(f"'{w}' is not a lowercase a-z word")
        if len(w) != length:
            raise LengthMismatch(f"'{w}' has {len(w)} letters, expected {length}")
    return words


class WordList:
    """
    Immutable, sorted list of distinct words of one length.

    Args:
        words: raw words; blank entries are skipped, case is folded
        length: required word length (defaults to the first word's length)

    Raises:
        LoadError: empty list, wrong length, non a-z letters or duplicates
    """

    def __init__(self, words: Iterable[str], length: Optional[int] = None):
        cleaned = [w.strip().lower() for w in words if w.strip()]
        if not cleaned:
            raise LoadError("Word list is empty")

        if length is None:
            length = len(cleaned[0])
        if length < 1:
            raise LoadError(f"Invalid word length {length}")

        seen = set()
        for w in cleaned:
            if len(w) != length:
                raise LoadError(f"Word '{w}' has {len(w)} letters, expected {length}")
            if not set(w) <= ALPHABET:
                raise LoadError(f"Word '{w}' contains characters outside a-z")
            if w in seen:
                raise LoadError(f"Duplicate word '{w}'")
            seen.add(w)

        self._length = length
        self._words = tuple(sorted(cleaned))
        self._index: Dict[str, int] = {w: i for i, w in enumerate(self._words)}
        self._chars = words_to_chars(self._words)

    @property
    def length(self) -> int:
        return self._length

    @property
    def words(self):
        return self._words

    @property
    def chars(self) -> np.ndarray:
        """Letter-code matrix, row i is words[i]."""
        return self._chars

    def chars_for(self, words: Iterable[str]) -> np.ndarray:
        """Letter-code rows for a subset of this list, in the given order."""
        idx = np.array([self._index[w] for w in words], dtype=np.int64)
        if len(idx) == 0:
            return np.zeros((0, self._length), dtype=np.int32)
        return self._chars[idx]

    def __contains__(self, word) -> bool:
        return word in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"WordList({len(self._words)} words, length={self._length})"


def _read_lines(filepath: str) -> List[str]:
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            return [line.strip().lower() for line in f if line.strip()]
    except OSError as e:
        raise LoadError(f"Couldn't read {filepath}: {e}") from e


def load_words(filepath: str, length: Optional[int] = None) -> WordList:
    """Load a one-word-per-line file."""
    words = WordList(_read_lines(filepath), length)
    log.info(f"Loaded {len(words)} words from {filepath}")
    return words


def load_default_words(length: Optional[int] = None) -> WordList:
    """Load the word list shipped with the package."""
    return load_words(DEFAULT_WORDS_FILE, length)
