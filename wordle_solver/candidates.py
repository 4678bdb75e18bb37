"""
candidates.py

Narrows the candidate set using observed feedback.
"""

from wordle_solver.patterns import generate_pattern


def filter_candidates(pattern, guess, candidates, word_size):
    """
    Keep only the candidates that would have produced `pattern` for `guess`.

    Survivors keep their relative order; the input list is left untouched.
    """
    return [w for w in candidates if generate_pattern(guess, w, word_size) == pattern]


def remove_word(word, candidates):
    """Return a copy of `candidates` without `word`."""
    return [w for w in candidates if w != word]
