"""
cli.py

Unified CLI for the entropy-based word puzzle solver.

Modes:
-mode offline (default): interactive solver, feedback typed per letter
-mode play: one self-play game against a random hidden word
-mode bench: many self-play games, reporting success/failure counts

Optional:
-size N: word length (3-8); prompted for when omitted.
-dict-dir PATH: WordNet 3.0 directory holding dict/index.* files.
-words-file PATH: plain word list to use instead of WordNet; repeatable.
-seed N: seed self-play for reproducible runs.
"""

import argparse
import logging
import random

from wordle_solver.config import (
    DEFAULT_BENCH_GAMES,
    DEFAULT_DICT_DIR,
    MAX_WORD_SIZE,
    MIN_WORD_SIZE,
)
from wordle_solver.errors import EmptyDictionaryError
from wordle_solver.game import OfflineSession, play_many, play_random_game, run_offline
from wordle_solver.words import default_sources, load_dictionary


def parse_word_size(text):
    try:
        size = int(text)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"word size must be a number, got {text!r}") from exc

    if not MIN_WORD_SIZE <= size <= MAX_WORD_SIZE:
        raise ValueError(
            f"word size must be between {MIN_WORD_SIZE} and {MAX_WORD_SIZE}, got {size}"
        )
    return size


def prompt_word_size():
    print("Enter the size of the word: ")
    try:
        return parse_word_size(input().strip())
    except EOFError as exc:
        raise SystemExit("Aborted: no word size given.") from exc


def run_play(dictionary, word_size, rng, progress):
    result = play_random_game(dictionary, word_size, rng, progress)
    for n, guess in enumerate(result.guesses, start=1):
        print(f"Guess {n}: {guess}  ({result.candidate_counts[n - 1]:,} candidates)")

    if result.solved:
        print(f"SOLVED in {len(result.guesses)} guesses!")
    else:
        print(f"Failed to solve within {word_size + 1} guesses.")
    print(f"Secret was: {result.target}")


def run_bench(dictionary, word_size, games, rng, progress):
    success, fail = play_many(dictionary, word_size, games, rng, progress)
    print(f"Success: {success} Fail: {fail}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Entropy-based solver for fixed-length word guessing puzzles."
    )
    parser.add_argument(
        "-size",
        type=str,
        default=None,
        help=f"Word length, {MIN_WORD_SIZE}-{MAX_WORD_SIZE} (prompted for when omitted).",
    )
    parser.add_argument(
        "-mode",
        choices=("offline", "play", "bench"),
        default="offline",
        help="offline: interactive solver; play: one self-play game; "
        "bench: many self-play games (default: offline).",
    )
    parser.add_argument(
        "-dict-dir",
        type=str,
        default=str(DEFAULT_DICT_DIR),
        help=f"WordNet directory containing dict/index.* (default: {DEFAULT_DICT_DIR}).",
    )
    parser.add_argument(
        "-words-file",
        action="append",
        default=None,
        help="Word list file used instead of WordNet; may be given more than once.",
    )
    parser.add_argument(
        "-games",
        type=int,
        default=DEFAULT_BENCH_GAMES,
        help=f"Number of games for -mode bench (default: {DEFAULT_BENCH_GAMES}).",
    )
    parser.add_argument(
        "-seed",
        type=int,
        default=None,
        help="Random seed for self-play modes.",
    )
    parser.add_argument(
        "-progress",
        action="store_true",
        help="Show progress bars for the pattern matrix build, ranking and bench games.",
    )
    parser.add_argument(
        "-verbose",
        action="store_true",
        help="Log every guess and pattern (DEBUG level).",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        word_size = parse_word_size(args.size) if args.size is not None else prompt_word_size()
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    sources = args.words_file or default_sources(args.dict_dir)
    try:
        dictionary = load_dictionary(sources, word_size)
    except EmptyDictionaryError as exc:
        raise SystemExit(str(exc)) from exc

    rng = random.Random(args.seed)

    if args.mode == "play":
        run_play(dictionary, word_size, rng, args.progress)
        return

    if args.mode == "bench":
        run_bench(dictionary, word_size, args.games, rng, args.progress)
        return

    run_offline(OfflineSession(dictionary, word_size, progress=args.progress))


if __name__ == "__main__":
    main()
