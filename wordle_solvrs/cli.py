"""
Command line interface.

    wordle-solvrs                       # manual mode, type in feedback
    wordle-solvrs -t crane              # test mode against a known answer
    wordle-solvrs -s slateybbbb         # resume a game
    wordle-solvrs --benchmark 500       # self-play 500 random answers
"""

import argparse
import logging
import random
import sys
from typing import Callable, List, Optional

from .benchmark import benchmark, print_results
from .errors import NoCandidates, ParseError, SolverError
from .feedback import feedback_to_emoji, parse_feedback
from .selector import DEFAULT_FIRST_WORD, STRATEGIES
from .session import DEFAULT_MAX_GUESSES, Session, SessionConfig, SessionState, start_session
from .words import load_default_words, load_words


log = logging.getLogger(__name__)

EPILOG = """\
test mode:
  the solver plays against the word given with -t and prints its own feedback

state loading:
  after -s give the guesses so far, separated by commas; each entry is the
  guess followed by its feedback. Ignored in test mode.
  Example: slateybbbb,pastsgbbbg

feedback:
  g: green (correct letter in correct position)
  y: yellow (correct letter in wrong position)
  b: gray (letter not in word)
  Example: gbybb
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle-solvrs",
        description="Wordle SolvRS - a Wordle solver",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-t", "--test", metavar="WORD",
                        help="run in test mode with WORD as the answer")
    parser.add_argument("-f", "--first", metavar="WORD",
                        help=f"first guess (default: {DEFAULT_FIRST_WORD})")
    parser.add_argument("-s", "--state", metavar="STATE",
                        help="load a game state, e.g. slateybbbb,pastsgbbbg")
    parser.add_argument("-w", "--words", metavar="PATH",
                        help="custom word list, one word per line")
    parser.add_argument("-g", "--guesses", metavar="N",
                        help=f"maximum guesses (default: {DEFAULT_MAX_GUESSES})")
    parser.add_argument("--strategy", choices=STRATEGIES, default="expected",
                        help="score guesses by expected or worst-case candidates left")
    parser.add_argument("--benchmark", metavar="N", type=int,
                        help="self-play N random answers (0 for every word) and report")
    parser.add_argument("--seed", type=int, default=42,
                        help="random seed for --benchmark sampling")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="debug logging")
    return parser


def _max_guesses(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_MAX_GUESSES
    try:
        number = int(value)
    except ValueError:
        number = 0
    if number < 1:
        log.warning(f"Invalid value for `-g|--guesses`: `{value}`; "
                    f"using default `{DEFAULT_MAX_GUESSES}`.")
        return DEFAULT_MAX_GUESSES
    return number


def _checked_word(value: Optional[str], words, flag: str, fallback: str) -> Optional[str]:
    if value is None:
        return None
    word = value.strip().lower()
    if len(word) == words.length and word in words:
        return word
    log.warning(f"Invalid {flag} word `{value}`; {fallback}.")
    return None


def play(session: Session, prompt: Callable[[str], str] = input) -> int:
    """Drive a session to the end, printing each turn. Returns an exit status."""
    while not session.state.terminal:
        guess = session.next_guess()
        print(f"Guess {session.turn}: {guess} ({len(session.candidates)} candidates)")

        if session.test_mode:
            result = session.step()
            print(f"  {feedback_to_emoji(result.feedback)}")
            continue

        while True:
            try:
                text = prompt(f"Enter feedback for `{guess}` (g=green, y=yellow, b=gray): ").strip()
            except EOFError:
                text = ""
            if not text:
                print("Skipped feedback. Exiting.", file=sys.stderr)
                return 0
            try:
                parse_feedback(text, session.length)
                break
            except ParseError as e:
                print(f"Error: {e}", file=sys.stderr)

        try:
            session.step(text)
        except NoCandidates as e:
            print(f"Error: {e}. No possible candidates, exiting.", file=sys.stderr)
            return 1

    if session.state is SessionState.SOLVED:
        print(f"Solved in {len(session.history)} rounds.")
    else:
        print(f"Failed to solve the puzzle in {session.max_guesses} guesses.")
    return 0


def main(argv: Optional[List[str]] = None, prompt: Callable[[str], str] = input) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")

    try:
        words = load_words(args.words) if args.words else load_default_words()
    except SolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    max_guesses = _max_guesses(args.guesses)
    first_guess = _checked_word(args.first, words, "first",
                                f"using default `{DEFAULT_FIRST_WORD}`")

    if args.benchmark is not None:
        answers = list(words)
        if 0 < args.benchmark < len(answers):
            random.seed(args.seed)
            answers = random.sample(answers, args.benchmark)
        results = benchmark(words, answers, verbose=True, max_guesses=max_guesses,
                            first_guess=first_guess, strategy=args.strategy)
        print_results(results)
        return 0

    answer = _checked_word(args.test, words, "test", "ignoring `-t|--test`")
    state = args.state
    if answer is not None and state is not None:
        log.warning("Game state is ignored in test mode.")
        state = None

    config = SessionConfig(max_guesses=max_guesses, first_guess=first_guess,
                           answer=answer, state=state, strategy=args.strategy)
    try:
        session = start_session(config, words)
    except SolverError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if session.test_mode:
        print(f"Wordle SolvRS - (Test Mode) Answer: '{answer}'")
    else:
        print("Wordle SolvRS - (Manual Mode)")
    return play(session, prompt)
