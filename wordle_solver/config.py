"""
config.py

Run-time constants shared across the solver. Command line flags in cli.py
override the defaults defined here.
"""

from pathlib import Path


# Supported word lengths (inclusive)
MIN_WORD_SIZE = 3
MAX_WORD_SIZE = 8

# A pattern packs 2 bits per letter into one integer, so it fits a uint16
MAX_POSITIONS = 8
BITS_PER_POSITION = 2

# Entropies closer than this are treated as equal when ranking
ENTROPY_EPSILON = 1e-9

# Feedback tokens typed by the user, one per letter
GREEN_TOKEN = "gn"
YELLOW_TOKEN = "y"
GRAY_TOKEN = "gr"

# WordNet 3.0 index files, relative to the WordNet directory
DEFAULT_DICT_DIR = Path("WordNet-3.0")
WORDNET_FILES = ("dict/index.noun", "dict/index.verb", "dict/index.adj", "dict/index.adv")

DEFAULT_BENCH_GAMES = 100
