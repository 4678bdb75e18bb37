import random

import pytest

from wordle_solver.errors import (
    InvalidFeedbackTokenError,
    InvalidWordError,
    SessionStateError,
)
from wordle_solver.game import (
    OfflineSession,
    SessionState,
    parse_feedback_token,
    play_many,
    play_random_game,
    run_offline,
)
from wordle_solver.patterns import Color, PatternMatrix, all_green, colors_to_pattern


WORDS = ["abc", "abd", "abe", "xyz"]
LARGER = ["bad", "bat", "bay", "cab", "cat", "dab", "hat", "mat", "tab", "tan", "van", "yak"]

G, Y, X = Color.GREEN, Color.YELLOW, Color.GRAY


class FixedTarget:
    """Stands in for random.Random, always drawing the same word."""

    def __init__(self, target):
        self.target = target

    def choice(self, seq):
        assert self.target in seq
        return self.target


def scripted(lines):
    lines = iter(lines)

    def read(prompt=""):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    return read


# =========================
# Self-play
# =========================


@pytest.mark.parametrize("target", LARGER)
def test_self_play_narrows_and_terminates(target):
    result = play_random_game(LARGER, 3, FixedTarget(target))

    assert result.target == target
    assert 1 <= len(result.guesses) <= 3 + 1
    assert result.candidate_counts[0] == len(LARGER)
    assert all(a >= b for a, b in zip(result.candidate_counts, result.candidate_counts[1:]))
    if result.solved:
        assert result.solution == target == result.guesses[-1]


@pytest.mark.parametrize("target", WORDS)
def test_self_play_solves_small_dictionary(target):
    # Every wrong guess removes at least itself, so four words fit in four rounds
    result = play_random_game(WORDS, 3, FixedTarget(target))
    assert result.solved
    assert result.solution == target


def test_self_play_reports_failure_when_rounds_run_out():
    # Every guess ties at zero entropy and only rules itself out
    words = ["aa" + c for c in "bcdefghijklmnopqrstuvwxyz"]
    result = play_random_game(words, 3, FixedTarget("aaz"))

    assert not result.solved
    assert result.solution is None
    assert result.guesses == ["aab", "aac", "aad", "aae"]
    assert len(result.guesses) == 3 + 1
    assert result.candidate_counts == [25, 24, 23, 22]


def test_self_play_with_shared_matrix():
    matrix = PatternMatrix(LARGER, 3)
    for target in LARGER:
        shared = play_random_game(LARGER, 3, FixedTarget(target), matrix=matrix)
        assert shared == play_random_game(LARGER, 3, FixedTarget(target))


def test_self_play_is_reproducible_with_seed():
    first = play_random_game(LARGER, 3, random.Random(7))
    second = play_random_game(LARGER, 3, random.Random(7))
    assert first == second


def test_play_many_counts_every_game():
    success, fail = play_many(WORDS, 3, 10, random.Random(1), progress=False)
    assert (success, fail) == (10, 0)


def test_play_many_counts_failures():
    words = ["aa" + c for c in "bcdefghijklmnopqrstuvwxyz"]
    success, fail = play_many(words, 3, 20, random.Random(5))
    assert success + fail == 20
    assert fail > 0


def test_play_many_progress_bar_only_on_request(capsys):
    play_many(WORDS, 3, 2, random.Random(1))
    assert "Games" not in capsys.readouterr().err

    play_many(WORDS, 3, 2, random.Random(1), progress=True)
    assert "Games" in capsys.readouterr().err


# =========================
# Session state machine
# =========================


def test_parse_feedback_token():
    assert parse_feedback_token("gn") == Color.GREEN
    assert parse_feedback_token(" Y ") == Color.YELLOW
    assert parse_feedback_token("gr") == Color.GRAY
    with pytest.raises(InvalidFeedbackTokenError):
        parse_feedback_token("green")


def test_session_feedback_filters_and_returns_to_commands():
    session = OfflineSession(WORDS, 3)
    assert session.request_guess() == "abc"

    session.begin_feedback()
    assert session.state == SessionState.COLLECTING_FEEDBACK
    won = session.submit_feedback(colors_to_pattern([G, G, X]))

    assert not won
    assert session.state == SessionState.AWAITING_COMMAND
    assert session.candidates == ["abd", "abe"]
    assert session.history == [("abc", colors_to_pattern([G, G, X]))]


def test_session_all_green_wins():
    session = OfflineSession(WORDS, 3)
    session.set_word("XYZ ")
    session.begin_feedback()

    assert session.submit_feedback(all_green(3))
    assert session.state == SessionState.WON
    assert session.finished
    assert session.history == []
    with pytest.raises(SessionStateError):
        session.request_guess()


def test_session_abort_keeps_candidates():
    session = OfflineSession(WORDS, 3)
    session.set_word("abc")
    session.begin_feedback()
    session.abort_feedback()

    assert session.state == SessionState.AWAITING_COMMAND
    assert session.candidates == WORDS


def test_session_rejects_feedback_without_guess():
    session = OfflineSession(WORDS, 3)
    with pytest.raises(SessionStateError):
        session.begin_feedback()
    with pytest.raises(SessionStateError):
        session.submit_feedback(all_green(3))


def test_session_set_word_checks_length():
    session = OfflineSession(WORDS, 3)
    with pytest.raises(InvalidWordError):
        session.set_word("abcd")
    assert session.last_guess is None


def test_session_remove_last_guess():
    session = OfflineSession(WORDS, 3)
    assert not session.remove_last_guess()

    session.set_word("abd")
    assert session.remove_last_guess()
    assert session.candidates == ["abc", "abe", "xyz"]


def test_session_quit_is_terminal():
    session = OfflineSession(WORDS, 3)
    session.quit()
    assert session.state == SessionState.QUIT
    with pytest.raises(SessionStateError):
        session.quit()


# =========================
# Text loop
# =========================


def run_script(lines, words=WORDS):
    output = []
    session = OfflineSession(words, 3)
    state = run_offline(session, read=scripted(lines), write=output.append)
    return session, state, output


def test_offline_guess_then_feedback_suggests_next():
    session, state, output = run_script(["guess", "gn", "gn", "gr", "quit"])

    assert "abc" in output
    assert "Next guess should be: abd" in output
    assert session.candidates == ["abd", "abe"]
    assert state == SessionState.QUIT


def test_offline_word_then_all_green_wins():
    session, state, output = run_script(["word", "xyz", "gn", "gn", "gn"])
    assert state == SessionState.WON
    assert output[-1] == "You won!"


def test_offline_invalid_token_reprompts():
    session, state, output = run_script(["word", "abc", "green", "gn", "gn", "gn"])
    assert "Invalid input!" in output
    assert state == SessionState.WON


def test_offline_quit_during_feedback_aborts_without_filtering():
    session, state, output = run_script(["word", "abc", "gn", "quit", "remove"])

    assert "Removing abc from the dictionary." in output
    assert session.candidates == ["abd", "abe", "xyz"]
    # Input ran out while awaiting a command
    assert state == SessionState.QUIT


def test_offline_remove_skips_word_not_in_candidates():
    session, state, output = run_script(["word", "qqq", "quit", "remove", "quit"])

    assert not any(line.startswith("Removing") for line in output)
    assert session.candidates == WORDS


def test_offline_remove_without_guess():
    session, state, output = run_script(["remove", "quit"])
    assert "No guess to remove." in output
    assert "Quitting game." in output


def test_offline_contradictory_feedback_reports_empty_set():
    session, state, output = run_script(["word", "abc", "gn", "gn", "y"])

    assert session.candidates == []
    assert any("No candidate words remain" in line for line in output)
    assert state == SessionState.QUIT
