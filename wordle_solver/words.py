"""
words.py

Handles loading and organizing the dictionary word lists.
No numpy here, just clean text handling.
"""

import logging
import re
from pathlib import Path

from wordle_solver.config import DEFAULT_DICT_DIR, WORDNET_FILES
from wordle_solver.errors import EmptyDictionaryError


log = logging.getLogger(__name__)

WORD_RE = re.compile(r"[a-z]+")


def default_sources(dict_dir=DEFAULT_DICT_DIR):
    """Paths of the WordNet index files under `dict_dir`."""
    return [Path(dict_dir) / name for name in WORDNET_FILES]


def extract_words(path):
    """
    Read the words from one line-oriented word list.

    The first whitespace-delimited token of each line is taken, so both plain
    one-word-per-line lists and WordNet index files work. Empty lines and
    lines starting with a space (WordNet license header) are skipped, as are
    tokens that are not purely alphabetic, e.g. "a_cappella".
    """
    words = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip() or line.startswith(" "):
                continue
            token = line.split()[0].lower()
            if WORD_RE.fullmatch(token):
                words.add(token)
    return words


def load_words(sources):
    """Union of the words in every readable source; unreadable ones are skipped."""
    words = set()
    for source in sources:
        try:
            words |= extract_words(source)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Could not read word list %s: %s", source, exc)
    return words


def load_dictionary(sources, word_size):
    """
    Returns:
        sorted list of unique words exactly `word_size` letters long
    """
    dictionary = sorted(w for w in load_words(sources) if len(w) == word_size)
    if not dictionary:
        raise EmptyDictionaryError(f"no {word_size}-letter words found in word lists")

    log.info("Loaded %d %d-letter words", len(dictionary), word_size)
    return dictionary
