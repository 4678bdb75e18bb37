"""
patterns.py

Encodes and simulates word-puzzle feedback patterns.

A pattern packs one color per letter into a single integer, two bits per
position:

    0 = gray
    1 = yellow
    2 = green

Position i (bits 2i and 2i+1) holds the feedback for letter i of the guess.
Positions at or beyond the word size stay zero, so an 8-letter pattern fits
in a uint16.
"""

from collections import Counter
from enum import IntEnum

import numpy as np
from tqdm import tqdm

from wordle_solver.config import BITS_PER_POSITION, MAX_POSITIONS
from wordle_solver.errors import InvalidPositionError


FIELD_MASK = (1 << BITS_PER_POSITION) - 1


class Color(IntEnum):
    GRAY = 0
    YELLOW = 1
    GREEN = 2


_COLOR_CHARS = {Color.GRAY: "-", Color.YELLOW: "Y", Color.GREEN: "G"}


def _check_position(position: int):
    if not 0 <= position < MAX_POSITIONS:
        raise InvalidPositionError(
            f"pattern position {position} outside 0..{MAX_POSITIONS - 1}"
        )


def set_color(pattern: int, position: int, color: Color) -> int:
    """Return `pattern` with the field at `position` replaced by `color`."""
    _check_position(position)
    shift = position * BITS_PER_POSITION
    return (pattern & ~(FIELD_MASK << shift)) | (int(color) << shift)


def get_color(pattern: int, position: int) -> Color:
    _check_position(position)
    shift = position * BITS_PER_POSITION
    return Color((pattern >> shift) & FIELD_MASK)


def colors_to_pattern(colors) -> int:
    pattern = 0
    for position, color in enumerate(colors):
        pattern = set_color(pattern, position, color)
    return pattern


def pattern_to_colors(pattern: int, word_size: int) -> list[Color]:
    return [get_color(pattern, i) for i in range(word_size)]


def all_green(word_size: int) -> int:
    """The pattern returned when the guess is the target."""
    return colors_to_pattern([Color.GREEN] * word_size)


def format_pattern(pattern: int, word_size: int) -> str:
    """Render a pattern as e.g. 'GY--G' for display and logs."""
    return "".join(_COLOR_CHARS[c] for c in pattern_to_colors(pattern, word_size))


def generate_pattern(guess: str, target: str, word_size: int) -> int:
    """
    Compute the feedback pattern a puzzle engine shows for `guess` when the
    hidden word is `target`.

    Duplicate letters follow the standard rules:

    1. First mark greens (correct letter in correct position).
       Each green consumes one instance of that letter from the target.

    2. Then, left to right, mark yellows only if unused instances of that
       letter remain in the target. Everything else stays gray.

    Both words must be `word_size` letters long.
    """
    _check_position(word_size - 1)
    colors = [Color.GRAY] * word_size
    counts = Counter(target)

    # First pass: mark greens and consume letters
    for i in range(word_size):
        if guess[i] == target[i]:
            colors[i] = Color.GREEN
            counts[guess[i]] -= 1

    # Second pass: mark yellows where letters remain unused
    for i in range(word_size):
        if colors[i] != Color.GREEN and counts[guess[i]] > 0:
            colors[i] = Color.YELLOW
            counts[guess[i]] -= 1

    # Pack the color list into 2-bit fields, letter 0 in the lowest bits
    code = 0
    for i, color in enumerate(colors):
        code |= color << (i * BITS_PER_POSITION)

    return code


def _encode_letters(words, word_size):
    """Words as an (n, word_size) array of indices into their shared alphabet."""
    alphabet = {c: i for i, c in enumerate(sorted(set("".join(words))))}
    codes = np.array([[alphabet[c] for c in w] for w in words], dtype=np.intp)
    return codes.reshape(len(words), word_size), len(alphabet)


def build_matrix(words, word_size: int, progress=False) -> np.ndarray:
    """
    Compute the full pattern matrix for a word set.

    matrix[i, j] == generate_pattern(words[i], words[j], word_size). Each row
    runs the same two passes as generate_pattern, vectorized over all targets
    at once: greens consume letter counts first, then yellows take whatever
    is left, left to right.
    """
    _check_position(word_size - 1)
    n_words = len(words)
    codes, n_letters = _encode_letters(words, word_size)

    counts = np.zeros((n_words, n_letters), dtype=np.int16)
    for i in range(word_size):
        np.add.at(counts, (np.arange(n_words), codes[:, i]), 1)

    matrix = np.zeros((n_words, n_words), dtype=np.uint16)

    for g in tqdm(range(n_words), desc="Building pattern matrix", disable=not progress):
        guess = codes[g]
        green = codes == guess
        remaining = counts.copy()
        row = matrix[g]

        # First pass: mark greens and consume letters
        for i in range(word_size):
            remaining[:, guess[i]] -= green[:, i]
            row[green[:, i]] |= np.uint16(Color.GREEN << (i * BITS_PER_POSITION))

        # Second pass: mark yellows where letters remain unused
        for i in range(word_size):
            yellow = ~green[:, i] & (remaining[:, guess[i]] > 0)
            remaining[:, guess[i]] -= yellow
            row[yellow] |= np.uint16(Color.YELLOW << (i * BITS_PER_POSITION))

    return matrix


class PatternMatrix:
    """
    Patterns of every dictionary word against every other, built once and
    kept in memory so each ranking round only slices it.
    """

    def __init__(self, words, word_size, progress=False):
        self.words = list(words)
        self.word_size = word_size
        self.index = {w: i for i, w in enumerate(self.words)}
        self.matrix = build_matrix(self.words, word_size, progress)

    def __contains__(self, word):
        return word in self.index

    def __len__(self):
        return len(self.words)

    def submatrix(self, words) -> np.ndarray:
        """Patterns among `words`, in their given order."""
        idx = np.fromiter((self.index[w] for w in words), dtype=np.intp, count=len(words))
        return self.matrix[np.ix_(idx, idx)]
