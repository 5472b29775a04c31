"""
Solver Errors
=============

Everything the solver raises derives from SolverError. Load, parse and
configuration problems surface before a session exists; NoCandidates and
ParseError can also end a running session (state ABORTED).
"""


class SolverError(Exception):
    """Base class for solver errors."""


class LengthMismatch(SolverError, ValueError):
    """A guess, answer or feedback does not have the session word length."""


class ParseError(SolverError, ValueError):
    """Malformed feedback or game-state text."""


class LoadError(SolverError):
    """The word list is missing, empty or invalid."""


class UnknownWord(SolverError, ValueError):
    """A word that is not in the word list."""


class InvalidWord(SolverError, ValueError):
    """A word with characters outside a-z."""


class ConfigError(SolverError, ValueError):
    """An invalid session option."""


class SessionFinished(SolverError):
    """The session already reached a terminal state."""


class NoCandidates(SolverError):
    """
    No word in the list is consistent with the recorded feedback.

    Attributes:
        guess: guess whose feedback emptied the candidate set (if known)
        feedback: that feedback as a g/y/b string (if known)
    """

    def __init__(self, message: str = "No candidates remaining",
                 guess: str = None, feedback: str = None):
        if guess is not None:
            message = f"{message} after `{guess}` -> `{feedback}`"
        super().__init__(message)
        self.guess = guess
        self.feedback = feedback
