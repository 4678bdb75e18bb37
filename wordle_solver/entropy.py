"""
entropy.py

Ranks candidate guesses by the Shannon entropy of the feedback patterns they
produce against the rest of the candidate set.
"""

import bisect
import logging

import numpy as np
from tqdm import tqdm

from wordle_solver.config import ENTROPY_EPSILON
from wordle_solver.errors import EmptyCandidateSetError
from wordle_solver.patterns import build_matrix


log = logging.getLogger(__name__)


def entropy_from_counts(counts):
    """Compute Shannon entropy from bucket counts."""
    counts = np.asarray(counts)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / total
    return float(-np.sum(probs * np.log2(probs)))


def pattern_entropy(row):
    """Entropy of the pattern distribution in one row of patterns."""
    _, counts = np.unique(row, return_counts=True)
    return entropy_from_counts(counts)


def compare_entropy(a, b):
    """
    Three-way comparison of two entropies that absorbs floating point noise.

    Returns -1 if a < b, 1 if a > b and 0 when the two are within
    ENTROPY_EPSILON of each other.
    """
    if a - b < -ENTROPY_EPSILON:
        return -1
    if b - a < -ENTROPY_EPSILON:
        return 1
    return 0


class EntropyTable:
    """
    Words grouped by entropy.

    Values that compare equal under compare_entropy share a group, keyed by
    the first entropy seen for it. Keys are kept sorted ascending; words
    within a group keep their insertion order.
    """

    def __init__(self):
        self._keys = []
        self._words = []

    def add(self, entropy, word):
        idx = bisect.bisect_left(self._keys, entropy - ENTROPY_EPSILON)
        if idx < len(self._keys) and compare_entropy(self._keys[idx], entropy) == 0:
            self._words[idx].append(word)
        else:
            self._keys.insert(idx, entropy)
            self._words.insert(idx, [word])

    def best_group(self):
        """(entropy, words) of the maximal group."""
        if not self._keys:
            raise EmptyCandidateSetError("no entropies have been recorded")
        return self._keys[-1], list(self._words[-1])

    def best(self):
        """First word inserted into the maximal group."""
        return self.best_group()[1][0]

    def items(self):
        return [(key, list(words)) for key, words in zip(self._keys, self._words)]

    def __len__(self):
        return len(self._keys)


def candidate_patterns(words, word_size, matrix=None):
    """
    Pattern matrix among `words`: sliced from a prebuilt PatternMatrix when
    it covers every word, built from scratch otherwise.
    """
    if matrix is not None and all(w in matrix for w in words):
        return matrix.submatrix(words)
    return build_matrix(words, word_size)


def calculate_entropies(words, word_size, progress=False, matrix=None):
    """
    Score every word by comparing it against all other words in the set.

    The word itself is left out of its own distribution, so a set of one
    word yields a single zero-entropy group.
    """
    table = EntropyTable()
    patterns = candidate_patterns(words, word_size, matrix)

    for i, guess in enumerate(tqdm(words, desc="Ranking guesses", disable=not progress)):
        others = np.delete(patterns[i], i)
        table.add(pattern_entropy(others), guess)

    log.debug("Scored %d candidates into %d entropy groups", len(words), len(table))
    return table


def next_best_guess(candidates, word_size, progress=False, matrix=None):
    """
    Return the candidate expected to reveal the most information.

    Pass the dictionary's PatternMatrix as `matrix` to rank by slicing it
    instead of recomputing every pattern.
    """
    if not candidates:
        raise EmptyCandidateSetError("no candidate words remain")

    if len(candidates) == 1:
        return candidates[0]

    entropy, words = calculate_entropies(candidates, word_size, progress, matrix).best_group()
    log.debug(
        "Best guess %s: %.4f bits over %d candidates (%d tied)",
        words[0],
        entropy,
        len(candidates),
        len(words),
    )
    return words[0]
