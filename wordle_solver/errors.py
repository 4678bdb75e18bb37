"""
errors.py

Exceptions raised by the solver. Errors about a bad value also derive from
ValueError so callers can report them the same way.
"""


class WordleSolverError(Exception):
    """Base class for all solver errors."""


class InvalidPositionError(WordleSolverError, ValueError):
    """A pattern position lies outside the supported bit-fields."""


class EmptyDictionaryError(WordleSolverError):
    """No usable words of the requested length were loaded."""


class EmptyCandidateSetError(WordleSolverError):
    """Feedback has ruled out every candidate word."""


class InvalidFeedbackTokenError(WordleSolverError, ValueError):
    pass


class InvalidWordError(WordleSolverError, ValueError):
    pass


class SessionStateError(WordleSolverError):
    """An interactive session operation is not valid in its current state."""
