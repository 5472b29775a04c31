"""
Solver Sessions
===============

A Session plays one puzzle. Each turn it asks the GuessSelector for a guess,
gets feedback (from the caller in interactive mode, or by scoring against the
known answer in test mode), records the turn and narrows the candidates.

States: PLAYING -> SOLVED | EXHAUSTED | ABORTED. Terminal states are final.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from .errors import ConfigError, LengthMismatch, NoCandidates, ParseError, SessionFinished, UnknownWord
from .feedback import Feedback, Mark, evaluate, feedback_to_string, is_solved, parse_feedback
from .filtering import GuessRecord, narrow, narrow_history
from .selector import DEFAULT_FIRST_WORD, GuessSelector
from .words import ALPHABET, WordList, load_default_words, load_words


log = logging.getLogger(__name__)

DEFAULT_MAX_GUESSES = 6


class SessionState(Enum):
    PLAYING = "playing"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"

    @property
    def terminal(self) -> bool:
        return self is not SessionState.PLAYING


@dataclass(frozen=True)
class SessionConfig:
    """
    Options for start_session.

    Attributes:
        max_guesses: guess budget, at least 1
        first_guess: opening guess override (defaults to DEFAULT_FIRST_WORD)
        answer: secret answer; setting it turns on test mode
        words_path: word list file (defaults to the bundled list)
        length: required word length (defaults to the word list's)
        state: preloaded game state, e.g. "slateybbbb,pastsgbbbg"
        strategy: "expected" or "worst"
        score_first_guess: score the opening guess instead of using a fixed one
    """
    max_guesses: int = DEFAULT_MAX_GUESSES
    first_guess: Optional[str] = None
    answer: Optional[str] = None
    words_path: Optional[str] = None
    length: Optional[int] = None
    state: Optional[str] = None
    strategy: str = "expected"
    score_first_guess: bool = False


class StepResult(NamedTuple):
    guess: str
    feedback: Feedback
    state: SessionState


class GameState(NamedTuple):
    history: Tuple[GuessRecord, ...]
    remaining: int
    candidates: FrozenSet[str]


def parse_state(text: str, length: int) -> Tuple[GuessRecord, ...]:
    """
    Parse a comma-separated list of <guess><feedback> entries.

    >>> parse_state("slateybbbb", 5)[0].guess
    'slate'

    Raises:
        ParseError: any malformed entry; nothing is skipped
    """
    records = []
    for entry in text.split(','):
        entry = entry.strip()
        if len(entry) != 2 * length:
            raise ParseError(
                f"State entry '{entry}' must be {2 * length} characters (guess then feedback)"
            )
        guess = entry[:length].lower()
        if not set(guess) <= ALPHABET:
            raise ParseError(f"Invalid guess '{guess}' in state entry '{entry}'")
        records.append(GuessRecord(guess, parse_feedback(entry[length:], length)))
    return tuple(records)


class Session:
    """
    One game, interactive or test mode.

    Args:
        words: word list, used for guesses and answers
        selector: guess selector over words
        max_guesses: guess budget including preloaded turns
        answer: secret answer for test mode, None for interactive mode
        history: preloaded turns

    Raises:
        NoCandidates: the preloaded history contradicts every word
    """

    def __init__(self, words: WordList, selector: GuessSelector,
                 max_guesses: int = DEFAULT_MAX_GUESSES, answer: Optional[str] = None,
                 history: Sequence[GuessRecord] = ()):
        self.words = words
        self.selector = selector
        self.max_guesses = max_guesses
        self.answer = answer
        self.error: Optional[Exception] = None

        self._history: Tuple[GuessRecord, ...] = tuple(history)
        self._candidates = narrow_history(words, self._history)
        self._next_guess: Optional[str] = None

        if self._history and is_solved(self._history[-1].feedback):
            self._state = SessionState.SOLVED
        elif len(self._history) >= max_guesses:
            self._state = SessionState.EXHAUSTED
        else:
            self._state = SessionState.PLAYING

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def history(self) -> Tuple[GuessRecord, ...]:
        return self._history

    @property
    def candidates(self) -> FrozenSet[str]:
        return self._candidates

    @property
    def remaining(self) -> int:
        """Guesses left in the budget."""
        return self.max_guesses - len(self._history)

    @property
    def turn(self) -> int:
        """Number of the next guess, 1-indexed."""
        return len(self._history) + 1

    @property
    def test_mode(self) -> bool:
        return self.answer is not None

    @property
    def length(self) -> int:
        return self.words.length

    def game_state(self) -> GameState:
        return GameState(self._history, self.remaining, self._candidates)

    # ------------------------------------------------------------------
    # Turns
    # ------------------------------------------------------------------

    def next_guess(self) -> str:
        """The guess for the current turn (computed once per turn)."""
        self._check_playing()
        if self._next_guess is None:
            self._next_guess = self.selector.select(self._candidates, self._history)
        return self._next_guess

    def step(self, feedback: Union[str, Iterable[Mark], None] = None) -> StepResult:
        """
        Play one turn.

        Args:
            feedback: g/y/b string or Marks for the current guess; required in
                interactive mode, must be None in test mode

        Raises:
            SessionFinished: the session is already over
            ParseError: malformed feedback (session is aborted)
            NoCandidates: the feedback contradicts every word (session is aborted)
        """
        self._check_playing()
        if self.test_mode and feedback is not None:
            raise ValueError("Test mode generates its own feedback")
        if not self.test_mode and feedback is None:
            raise ValueError("Interactive mode needs feedback for every guess")

        guess = self.next_guess()
        if self.test_mode:
            marks = evaluate(guess, self.answer)
        else:
            try:
                marks = self._coerce_feedback(feedback)
            except ParseError as e:
                self._abort(e)
                raise

        self._history = self._history + (GuessRecord(guess, marks),)
        self._next_guess = None
        log.debug(f"Guess {len(self._history)}: {guess} -> {feedback_to_string(marks)}")

        if is_solved(marks):
            self._candidates = frozenset([guess])
            self._state = SessionState.SOLVED
            return StepResult(guess, marks, self._state)

        narrowed = narrow(self._candidates, guess, marks)
        if not narrowed:
            error = NoCandidates("Feedback is inconsistent with every word",
                                 guess=guess, feedback=feedback_to_string(marks))
            self._abort(error)
            raise error
        self._candidates = narrowed

        if self.remaining <= 0:
            self._state = SessionState.EXHAUSTED
        return StepResult(guess, marks, self._state)

    def run(self) -> List[StepResult]:
        """Self-play a test mode session until it ends."""
        if not self.test_mode:
            raise ValueError("run() needs a test mode session")
        results = []
        while not self._state.terminal:
            results.append(self.step())
        return results

    def _coerce_feedback(self, feedback) -> Feedback:
        if isinstance(feedback, str):
            return parse_feedback(feedback, self.length)
        try:
            marks = tuple(Mark(m) for m in feedback)
        except ValueError as e:
            raise ParseError(f"Invalid feedback marks {feedback!r}") from e
        if len(marks) != self.length:
            raise ParseError(f"Feedback must have {self.length} marks, got {len(marks)}")
        return marks

    def _abort(self, error: Exception):
        log.warning(f"Session aborted: {error}")
        self._state = SessionState.ABORTED
        self.error = error

    def _check_playing(self):
        if self._state.terminal:
            raise SessionFinished(f"Session is already {self._state.value}")


def start_session(config: Optional[SessionConfig] = None,
                  words: Union[WordList, Iterable[str], None] = None) -> Session:
    """
    Build a session from a config.

    Args:
        config: session options (defaults to SessionConfig())
        words: word list to use instead of config.words_path / the bundled list

    Raises:
        LoadError: the word list cannot be loaded
        ConfigError: invalid max_guesses or strategy, or too long a state
        LengthMismatch: first guess or answer has the wrong length
        UnknownWord: first guess or answer is not in the word list
        ParseError: malformed state
        NoCandidates: the state contradicts every word
    """
    config = config or SessionConfig()
    if not isinstance(config.max_guesses, int) or config.max_guesses < 1:
        raise ConfigError(f"max_guesses must be at least 1, got {config.max_guesses!r}")

    if words is None:
        if config.words_path:
            words = load_words(config.words_path, config.length)
        else:
            words = load_default_words(config.length)
    elif not isinstance(words, WordList):
        words = WordList(words, config.length)
    elif config.length is not None and words.length != config.length:
        raise LengthMismatch(f"Word list has {words.length}-letter words, expected {config.length}")

    if config.score_first_guess:
        first_guess = None
    elif config.first_guess is not None:
        first_guess = config.first_guess
    elif DEFAULT_FIRST_WORD in words:
        first_guess = DEFAULT_FIRST_WORD
    else:
        log.warning(f"Default first word '{DEFAULT_FIRST_WORD}' not in word list, "
                    f"scoring the first guess instead")
        first_guess = None
    selector = GuessSelector(words, first_guess, config.strategy)

    answer = config.answer
    if answer is not None:
        answer = answer.strip().lower()
        if len(answer) != words.length:
            raise LengthMismatch(f"Answer '{answer}' must have {words.length} letters")
        if answer not in words:
            raise UnknownWord(f"Answer '{answer}' is not in the word list")

    history: Tuple[GuessRecord, ...] = ()
    if config.state is not None:
        history = parse_state(config.state, words.length)
        if len(history) > config.max_guesses:
            raise ConfigError(
                f"State holds {len(history)} guesses but only {config.max_guesses} are allowed"
            )

    session = Session(words, selector, config.max_guesses, answer, history)
    log.info(f"Started {'test' if answer else 'interactive'} session: {len(words)} words, "
             f"{len(session.candidates)} candidates, {session.remaining} guesses left")
    return session
