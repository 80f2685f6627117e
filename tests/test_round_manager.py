import pytest

from fastfour.controllers.tournament import (
    ManualBracketBuilder,
    advance_round,
    build_next_round,
    is_round_complete,
    phase_for_round,
    record_result,
    undo_round,
)
from fastfour.exceptions import (
    InvalidMatchException,
    InvalidRoundException,
    PlayerNotFoundException,
    TournamentStateException,
)
from fastfour.models import Match, Phase, TournamentState

ROUND_2 = [("p-2", "p-0"), ("p-5", "p-3"), ("p-8", "p-6"), ("p-11", "p-9")]
ROUND_3 = [("p-1", "p-2"), ("p-4", "p-5"), ("p-7", "p-8"), ("p-10", "p-11")]


def _match(match_id, p1, p2, round_number, phase=Phase.GROUPS):
    return Match(id=match_id, player1_id=p1, player2_id=p2, round=round_number, phase=phase)


def _score_round(state, score1=4, score2=2):
    for match in state.current_round_matches:
        state = record_result(state, match.id, score1, score2)
    return state


def _advance(state, pairings, next_phase=None):
    return build_next_round(state, ManualBracketBuilder(pairings), next_phase=next_phase)


def test_advance_appends_matches_and_increments_round(started):
    state = _advance(started, ROUND_2)

    assert state.current_round == 2
    assert len(state.matches) == 8
    assert state.matches[:4] == started.matches
    assert all(m.round == 2 for m in state.current_round_matches)
    assert state.phase == Phase.GROUPS


def test_advance_switches_phase_only_when_given(started):
    same = _advance(started, ROUND_2)
    switched = _advance(started, ROUND_2, next_phase=Phase.PLAYOFFS)

    assert same.phase == Phase.GROUPS
    assert switched.phase == Phase.PLAYOFFS


def test_advance_with_no_matches(started):
    state = advance_round(started, [])

    assert state.current_round == 2
    assert state.matches == started.matches


def test_advance_rejects_wrong_round(started):
    with pytest.raises(InvalidRoundException):
        advance_round(started, [_match("x", "p-0", "p-2", 3)])


def test_advance_rejects_duplicate_match_id(started):
    with pytest.raises(InvalidMatchException):
        advance_round(started, [_match("m-r1-A", "p-0", "p-2", 2)])
    with pytest.raises(InvalidMatchException):
        advance_round(
            started,
            [_match("x", "p-0", "p-2", 2), _match("x", "p-3", "p-5", 2)],
        )


def test_advance_rejects_self_pairing_and_unknown_player(started):
    with pytest.raises(InvalidMatchException):
        advance_round(started, [_match("x", "p-0", "p-0", 2)])
    with pytest.raises(InvalidMatchException):
        advance_round(started, [_match("x", "p-0", "p-42", 2)])


def test_advance_requires_running_tournament():
    with pytest.raises(TournamentStateException):
        advance_round(TournamentState.empty(), [])


def test_advance_gated_on_complete_round(started):
    with pytest.raises(TournamentStateException):
        build_next_round(started, ManualBracketBuilder(ROUND_2), require_complete=True)

    scored = _score_round(started)
    state = build_next_round(scored, ManualBracketBuilder(ROUND_2), require_complete=True)
    assert state.current_round == 2


def test_failed_advance_leaves_state_untouched(started):
    before = started
    with pytest.raises(InvalidRoundException):
        advance_round(started, [_match("x", "p-0", "p-2", 5)])
    assert started == before
    assert started.current_round == 1


def test_is_round_complete(started):
    assert not is_round_complete(started)
    scored = _score_round(started)
    assert is_round_complete(scored)
    assert is_round_complete(scored, 1)
    assert not is_round_complete(scored, 2)


def test_phase_for_round():
    assert phase_for_round(1) == Phase.GROUPS
    assert phase_for_round(3) == Phase.GROUPS
    assert phase_for_round(4) == Phase.PLAYOFFS


def test_undo_removes_only_current_round(started):
    state = _advance(_score_round(started), ROUND_2)
    state = record_result(state, state.current_round_matches[0].id, 4, 0)

    undone = undo_round(state)

    assert undone.current_round == 1
    assert undone.matches == state.matches[:4]
    assert all(m.completed for m in undone.matches)


def test_undo_restores_standings(started):
    scored = _score_round(started)
    state = _advance(scored, ROUND_2)
    state = _score_round(state, 0, 4)

    undone = undo_round(state)

    assert undone.players == scored.players


def test_undo_of_advance_round_trips(started):
    scored = _score_round(started)

    assert undo_round(_advance(scored, ROUND_2)) == scored


def test_undo_at_first_round_is_noop(started):
    assert undo_round(started) is started
    empty = TournamentState.empty()
    assert undo_round(empty) is empty


def test_undo_phase_follows_new_round(started):
    state = _advance(started, ROUND_2)
    state = _advance(state, ROUND_3)
    state = _advance(state, [("p-0", "p-3")], next_phase=Phase.PLAYOFFS)
    state = _advance(state, [("p-0", "p-6")])
    assert state.current_round == 5
    assert state.phase == Phase.PLAYOFFS

    back_to_four = undo_round(state)
    assert back_to_four.current_round == 4
    assert back_to_four.phase == Phase.PLAYOFFS

    back_to_three = undo_round(back_to_four)
    assert back_to_three.current_round == 3
    assert back_to_three.phase == Phase.GROUPS


def test_undo_resets_phase_even_if_playoffs_started_early(started):
    state = _advance(started, ROUND_2, next_phase=Phase.PLAYOFFS)
    state = advance_round(state, [])

    undone = undo_round(state)

    assert undone.current_round == 2
    assert undone.phase == Phase.GROUPS


def test_manual_builder_numbers_matches_and_courts(started):
    matches = ManualBracketBuilder(ROUND_2).build_round(started)

    assert [m.id for m in matches] == ["m-r2-1", "m-r2-2", "m-r2-3", "m-r2-4"]
    assert [m.court_id for m in matches] == [1, 2, 3, 4]
    assert all(m.round == 2 for m in matches)
    assert matches[0].label == "Group A"
    assert matches[0].phase == Phase.GROUPS


def test_manual_builder_label_and_phase_override(started):
    matches = ManualBracketBuilder(
        [("p-0", "p-3")], label="Semifinal", phase=Phase.PLAYOFFS
    ).build_round(started)

    assert matches[0].label == "Semifinal"
    assert matches[0].phase == Phase.PLAYOFFS


def test_manual_builder_cross_group_label(started):
    (match,) = ManualBracketBuilder([("p-0", "p-3")]).build_round(started)
    assert match.label == "Round 2"


def test_manual_builder_rejects_double_booking(started):
    with pytest.raises(InvalidMatchException):
        ManualBracketBuilder([("p-0", "p-1"), ("p-1", "p-2")]).build_round(started)


def test_manual_builder_rejects_unknown_player(started):
    with pytest.raises(PlayerNotFoundException):
        ManualBracketBuilder([("p-0", "p-77")]).build_round(started)


def test_new_matches_carry_the_phase_the_round_opens_in(started):
    state = build_next_round(
        started, ManualBracketBuilder([("p-2", "p-0")]), next_phase=Phase.PLAYOFFS
    )

    assert state.phase == Phase.PLAYOFFS
    assert all(m.phase == Phase.PLAYOFFS for m in state.current_round_matches)


def test_matches_keep_state_phase_past_group_rounds(started):
    state = _advance(started, ROUND_2)
    state = _advance(state, ROUND_3)
    state = _advance(state, [("p-0", "p-3")])

    assert state.current_round == 4
    assert state.phase == Phase.GROUPS
    assert state.current_round_matches[0].phase == Phase.GROUPS


def test_undo_from_round_three_stays_in_groups(started):
    state = _advance(started, ROUND_2)
    state = _advance(state, ROUND_3)
    state = _advance(state, [("p-0", "p-3")], next_phase=Phase.PLAYOFFS)

    state = undo_round(state)
    assert (state.current_round, state.phase) == (3, Phase.GROUPS)
    state = undo_round(state)
    assert (state.current_round, state.phase) == (2, Phase.GROUPS)
    state = undo_round(state)
    assert (state.current_round, state.phase) == (1, Phase.GROUPS)
    assert state.matches == started.matches
