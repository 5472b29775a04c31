"""
Wordle SolvRS
=============

Narrows a word list to the answer from green/yellow/gray feedback, choosing
each guess to split the remaining candidates as evenly as possible.
"""

__version__ = "1.0.0"

from .errors import (SolverError, LengthMismatch, ParseError, LoadError, UnknownWord, InvalidWord,
                     ConfigError, SessionFinished, NoCandidates)
from .words import WordList, load_words, load_default_words
from .feedback import Mark, evaluate, parse_feedback, feedback_to_string, feedback_to_emoji
from .filtering import GuessRecord, narrow, narrow_history, is_consistent
from .selector import GuessSelector, select_guess, DEFAULT_FIRST_WORD
from .session import (Session, SessionConfig, SessionState, StepResult, GameState,
                      parse_state, start_session, DEFAULT_MAX_GUESSES)
from .benchmark import benchmark, print_results
