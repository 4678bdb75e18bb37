"""
game.py

Drives games: self-play against a hidden random word, a batch benchmark of
self-play games, and the interactive offline session where feedback comes
from the user.
"""

import logging
import random
from enum import Enum
from typing import NamedTuple, Optional

from tqdm import tqdm

from wordle_solver.candidates import filter_candidates, remove_word
from wordle_solver.config import GRAY_TOKEN, GREEN_TOKEN, YELLOW_TOKEN
from wordle_solver.entropy import next_best_guess
from wordle_solver.errors import (
    EmptyCandidateSetError,
    InvalidFeedbackTokenError,
    InvalidWordError,
    SessionStateError,
)
from wordle_solver.patterns import (
    Color,
    PatternMatrix,
    all_green,
    colors_to_pattern,
    format_pattern,
    generate_pattern,
)


log = logging.getLogger(__name__)


class GameResult(NamedTuple):
    target: str
    solution: Optional[str]
    guesses: list
    candidate_counts: list

    @property
    def solved(self):
        return self.solution is not None


def play_random_game(dictionary, word_size, rng=None, progress=False, matrix=None):
    """
    Play one game against a word drawn uniformly from `dictionary`.

    At most word_size + 1 guesses are made. `candidate_counts[k]` is the size
    of the candidate set the k-th guess was chosen from. Pass a PatternMatrix
    of `dictionary` to share it between games.
    """
    rng = rng or random.Random()
    if matrix is None:
        matrix = PatternMatrix(dictionary, word_size, progress)
    target = rng.choice(dictionary)
    winning = all_green(word_size)

    candidates = list(dictionary)
    guesses = []
    candidate_counts = []

    for _ in range(word_size + 1):
        candidate_counts.append(len(candidates))
        guess = next_best_guess(candidates, word_size, progress, matrix)
        guesses.append(guess)

        pattern = generate_pattern(guess, target, word_size)
        log.debug("Guess %s -> %s", guess, format_pattern(pattern, word_size))
        if pattern == winning:
            return GameResult(target, guess, guesses, candidate_counts)

        candidates = filter_candidates(pattern, guess, candidates, word_size)

    return GameResult(target, None, guesses, candidate_counts)


def play_many(dictionary, word_size, games, rng=None, progress=False):
    """
    Play `games` self-play games and return (successes, failures).

    The pattern matrix is built once for all games. `progress` shows bars for
    the matrix build and the games; per-round ranking bars stay off.
    """
    rng = rng or random.Random()
    matrix = PatternMatrix(dictionary, word_size, progress)
    success = 0
    fail = 0

    for _ in tqdm(range(games), desc="Games", disable=not progress):
        result = play_random_game(dictionary, word_size, rng, matrix=matrix)
        if result.solved:
            success += 1
        else:
            fail += 1
            log.info("Missed %s after %s", result.target, ", ".join(result.guesses))

    return success, fail


# =========================
# Interactive offline session
# =========================

FEEDBACK_TOKENS = {
    GREEN_TOKEN: Color.GREEN,
    YELLOW_TOKEN: Color.YELLOW,
    GRAY_TOKEN: Color.GRAY,
}

COMMANDS_HELP = (
    "Commands:\n"
    "  word    - enter your word\n"
    "  guess   - get the first/next guess\n"
    "  remove  - remove the last guess from the dictionary\n"
    "  quit    - exit the game"
)


def parse_feedback_token(token):
    try:
        return FEEDBACK_TOKENS[token.strip().lower()]
    except KeyError:
        raise InvalidFeedbackTokenError(f"unknown feedback token: {token!r}") from None


class SessionState(Enum):
    AWAITING_COMMAND = "awaiting_command"
    COLLECTING_FEEDBACK = "collecting_feedback"
    WON = "won"
    QUIT = "quit"


class OfflineSession:
    """
    Candidate set and working guess for one interactive game.

    States move AWAITING_COMMAND -> COLLECTING_FEEDBACK -> AWAITING_COMMAND
    until the user reports an all-green pattern (WON) or leaves (QUIT).
    """

    def __init__(self, dictionary, word_size, progress=False):
        self.word_size = word_size
        self.candidates = list(dictionary)
        self.last_guess = None
        self.state = SessionState.AWAITING_COMMAND
        self.history = []
        self.progress = progress
        self._winning = all_green(word_size)
        self._matrix = PatternMatrix(dictionary, word_size, progress)

    @property
    def finished(self):
        return self.state in (SessionState.WON, SessionState.QUIT)

    def _require(self, *states):
        if self.state not in states:
            raise SessionStateError(f"operation not allowed while {self.state.value}")

    def request_guess(self):
        self._require(SessionState.AWAITING_COMMAND)
        self.last_guess = next_best_guess(
            self.candidates, self.word_size, self.progress, self._matrix
        )
        return self.last_guess

    def set_word(self, word):
        """Use `word` as the working guess without ranking."""
        self._require(SessionState.AWAITING_COMMAND)
        word = word.strip().lower()
        if len(word) != self.word_size:
            raise InvalidWordError(f"{word!r} is not {self.word_size} letters long")
        self.last_guess = word
        return word

    def remove_last_guess(self):
        self._require(SessionState.AWAITING_COMMAND)
        if self.last_guess is None:
            return False
        self.candidates = remove_word(self.last_guess, self.candidates)
        return True

    def begin_feedback(self):
        self._require(SessionState.AWAITING_COMMAND)
        if self.last_guess is None:
            raise SessionStateError("no guess to give feedback for")
        self.state = SessionState.COLLECTING_FEEDBACK

    def abort_feedback(self):
        self._require(SessionState.COLLECTING_FEEDBACK)
        self.state = SessionState.AWAITING_COMMAND

    def submit_feedback(self, pattern):
        """
        Apply the pattern observed for the working guess.

        Returns True when the pattern is all green and the game is won.
        """
        self._require(SessionState.COLLECTING_FEEDBACK)
        if pattern == self._winning:
            self.state = SessionState.WON
            return True

        self.history.append((self.last_guess, pattern))

        before = len(self.candidates)
        self.candidates = filter_candidates(
            pattern, self.last_guess, self.candidates, self.word_size
        )
        log.debug(
            "Feedback %s for %s: %d -> %d candidates",
            format_pattern(pattern, self.word_size),
            self.last_guess,
            before,
            len(self.candidates),
        )
        self.state = SessionState.AWAITING_COMMAND
        return False

    def quit(self):
        self._require(SessionState.AWAITING_COMMAND, SessionState.COLLECTING_FEEDBACK)
        self.state = SessionState.QUIT


def prompt_feedback(session, read, write):
    """
    Ask for one feedback token per letter.

    Returns the completed pattern, or None if the user typed quit/remove.
    """
    colors = []
    while len(colors) < session.word_size:
        token = read(
            f"Enter pattern for letter {len(colors) + 1} "
            f"({GREEN_TOKEN} for Green, {YELLOW_TOKEN} for Yellow, {GRAY_TOKEN} for Gray): "
        ).strip()
        if token in ("quit", "remove"):
            return None
        try:
            colors.append(parse_feedback_token(token))
        except InvalidFeedbackTokenError:
            write("Invalid input!")
    return colors_to_pattern(colors)


def run_offline(session, read=None, write=None):
    """Text front end for an OfflineSession; returns its final state."""
    read = read or input
    write = write or print

    write("Play Wordle Offline")
    write(COMMANDS_HELP)

    try:
        while not session.finished:
            command = read("").strip()

            if command == "guess":
                write("Finding next guess...")
                try:
                    write(session.request_guess())
                except EmptyCandidateSetError:
                    write("No candidate words remain.")
                    continue
            elif command == "word":
                try:
                    session.set_word(read("Enter your word: "))
                except InvalidWordError as exc:
                    write(str(exc))
                    continue
                write("You can now start providing results.")
            elif command == "remove":
                if session.last_guess is None:
                    write("No guess to remove.")
                elif session.last_guess in session.candidates:
                    write(f"Removing {session.last_guess} from the dictionary.")
                    session.remove_last_guess()
                continue
            elif command == "quit":
                write("Quitting game.")
                session.quit()
                break

            if not command or session.last_guess is None:
                continue

            session.begin_feedback()
            pattern = prompt_feedback(session, read, write)
            if pattern is None:
                session.abort_feedback()
                continue

            if session.submit_feedback(pattern):
                write("You won!")
                break

            try:
                guess = session.request_guess()
            except EmptyCandidateSetError:
                write("No candidate words remain; the feedback contradicts every word.")
                continue
            write(f"Next guess should be: {guess}")
    except EOFError:
        if not session.finished:
            session.quit()

    return session.state
