import pytest

from fastfour.controllers.tournament import record_result, unlock_result
from fastfour.exceptions import (
    InvalidResultException,
    MatchNotFoundException,
    TournamentStateException,
)
from fastfour.models import TournamentState


def test_record_marks_match_completed(started):
    state = record_result(started, "m-r1-C", 4, 3)

    match = state.get_match("m-r1-C")
    assert match.completed
    assert (match.score1, match.score2) == (4, 3)
    assert state.get_player("p-6").points == 1


def test_record_does_not_touch_other_matches(started):
    state = record_result(started, "m-r1-C", 4, 3)

    for before, after in zip(started.matches, state.matches):
        if before.id != "m-r1-C":
            assert before == after


def test_record_overwrites_completed_result(started):
    state = record_result(started, "m-r1-A", 4, 0)
    state = record_result(state, "m-r1-A", 1, 4)

    assert state.get_player("p-0").points == 0
    assert state.get_player("p-1").points == 1
    assert state.get_player("p-1").matches_played == 1


def test_record_accepts_integer_strings(started):
    state = record_result(started, "m-r1-A", "4", " 2 ")
    assert state.get_match("m-r1-A").score2 == 2


@pytest.mark.parametrize("score", [-1, 2.5, "four", None, True])
def test_record_rejects_invalid_scores(started, score):
    with pytest.raises(InvalidResultException):
        record_result(started, "m-r1-A", score, 0)
    with pytest.raises(InvalidResultException):
        record_result(started, "m-r1-A", 0, score)


def test_record_unknown_match(started):
    with pytest.raises(MatchNotFoundException):
        record_result(started, "m-r9-Z", 4, 0)


def test_record_requires_running_tournament():
    with pytest.raises(TournamentStateException):
        record_result(TournamentState.empty(), "m-r1-A", 4, 0)


def test_rejected_result_leaves_state_untouched(started):
    with pytest.raises(InvalidResultException):
        record_result(started, "m-r1-A", -3, 0)
    assert not started.get_match("m-r1-A").completed


def test_unlock_reopens_match_and_drops_it_from_standings(started):
    state = record_result(started, "m-r1-A", 4, 1)

    unlocked = unlock_result(state, "m-r1-A")

    match = unlocked.get_match("m-r1-A")
    assert not match.completed
    assert (match.score1, match.score2) == (4, 1)
    assert unlocked.get_player("p-0").points == 0
    assert unlocked.get_player("p-0").matches_played == 0
    assert unlocked.players == started.players


def test_unlock_open_match_is_harmless(started):
    assert unlock_result(started, "m-r1-B") == started


def test_unlock_unknown_match(started):
    with pytest.raises(MatchNotFoundException):
        unlock_result(started, "nope")


def test_unlock_requires_running_tournament():
    with pytest.raises(TournamentStateException):
        unlock_result(TournamentState.empty(), "m-r1-A")


def test_rerecording_same_scores_after_unlock_restores_state(started):
    recorded = record_result(started, "m-r1-A", 4, 2)

    restored = record_result(unlock_result(recorded, "m-r1-A"), "m-r1-A", 4, 2)

    assert restored == recorded


def test_record_rejects_non_decimal_digit_strings(started):
    with pytest.raises(InvalidResultException):
        record_result(started, "m-r1-A", "²", 0)
