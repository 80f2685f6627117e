from dataclasses import replace

import pytest

from fastfour.controllers.tournament import (
    compute_standings,
    group_standings,
    overall_standings,
    players_in_category,
    record_result,
)
from fastfour.controllers.tournament.standings import category_for_rank, compute_player_stats
from fastfour.exceptions import InvalidTournamentDataException
from fastfour.models import Category, Group, Match, Phase, Player


def _group_of_three(group_id="A"):
    players = [
        Player(id=f"{group_id}{i}", name=f"{group_id}{i}", group_id=group_id)
        for i in range(3)
    ]
    group = Group(id=group_id, name=f"Group {group_id}", player_ids=tuple(p.id for p in players))
    return players, group


def _match(match_id, p1, p2, s1, s2, completed=True, round_number=1):
    return Match(
        id=match_id,
        player1_id=p1,
        player2_id=p2,
        round=round_number,
        phase=Phase.GROUPS,
        score1=s1,
        score2=s2,
        completed=completed,
    )


def _by_id(players):
    return {p.id: p for p in players}


def test_win_credits_one_point_and_games(started):
    state = record_result(started, "m-r1-A", 4, 2)
    players = _by_id(state.players)

    assert players["p-0"].points == 1
    assert players["p-0"].games_won == 4
    assert players["p-0"].games_lost == 2
    assert players["p-0"].matches_played == 1
    assert players["p-1"].points == 0
    assert players["p-1"].games_won == 2
    assert players["p-1"].games_lost == 4
    assert players["p-1"].matches_played == 1


def test_tied_match_credits_no_win():
    players, group = _group_of_three()
    matches = [_match("m1", "A0", "A1", 3, 3)]

    result = _by_id(compute_standings(players, matches, [group]))

    assert result["A0"].points == 0
    assert result["A1"].points == 0
    assert result["A0"].games_won == 3
    assert result["A1"].matches_played == 1


def test_incomplete_matches_are_ignored():
    players, group = _group_of_three()
    matches = [_match("m1", "A0", "A1", 4, 0, completed=False)]

    result = _by_id(compute_standings(players, matches, [group]))

    assert result["A0"].points == 0
    assert result["A0"].games_won == 0
    assert result["A0"].matches_played == 0


def test_stats_are_rebuilt_from_scratch():
    players, group = _group_of_three()
    stale = [replace(players[0], points=9, games_won=30)] + players[1:]

    result = _by_id(compute_standings(stale, [], [group]))

    assert result["A0"].points == 0
    assert result["A0"].games_won == 0


def test_rank_by_points_then_game_difference():
    players, group = _group_of_three()
    matches = [
        _match("m1", "A0", "A1", 4, 3),
        _match("m2", "A2", "A0", 4, 0),
        _match("m3", "A1", "A2", 4, 1),
    ]
    # every player has one win; differentials: A0 -3, A1 +2, A2 +1
    result = _by_id(compute_standings(players, matches, [group]))

    assert [result[pid].points for pid in ("A0", "A1", "A2")] == [1, 1, 1]
    assert result["A1"].group_rank == 1
    assert result["A2"].group_rank == 2
    assert result["A0"].group_rank == 3


def test_full_tie_keeps_player_order():
    players, group = _group_of_three()

    result = compute_standings(players, [], [group])

    assert [p.group_rank for p in result] == [1, 2, 3]


def test_category_follows_rank():
    players, group = _group_of_three()
    matches = [_match("m1", "A2", "A0", 4, 1)]

    result = _by_id(compute_standings(players, matches, [group]))

    assert result["A2"].group_rank == 1
    assert result["A2"].category == Category.TOP_8
    assert result["A1"].group_rank == 2
    assert result["A1"].category == Category.TOP_8
    assert result["A0"].group_rank == 3
    assert result["A0"].category == Category.BOTTOM_4


def test_category_for_rank_boundary():
    assert category_for_rank(1) == Category.TOP_8
    assert category_for_rank(2) == Category.TOP_8
    assert category_for_rank(3) == Category.BOTTOM_4


def test_ranks_are_per_group():
    players_a, group_a = _group_of_three("A")
    players_b, group_b = _group_of_three("B")
    players = players_a + players_b
    matches = [_match("m1", "A0", "A1", 4, 0), _match("m2", "B2", "B0", 4, 0)]

    result = compute_standings(players, matches, [group_a, group_b])

    for group_id in ("A", "B"):
        ranks = sorted(p.group_rank for p in result if p.group_id == group_id)
        assert ranks == [1, 2, 3]
    assert _by_id(result)["B2"].group_rank == 1


def test_compute_standings_is_idempotent(started):
    state = record_result(started, "m-r1-B", 1, 4)

    once = compute_standings(state.players, state.matches, state.groups)
    twice = compute_standings(once, state.matches, state.groups)

    assert once == twice


def test_groupless_player_keeps_rank_and_category():
    loner = Player(id="x", name="X", group_rank=7, category=Category.BOTTOM_4)
    matches = [_match("m1", "x", "y", 4, 1)]

    (result,) = compute_standings([loner], matches)

    assert result.points == 1
    assert result.group_rank == 7
    assert result.category == Category.BOTTOM_4


def test_unknown_group_reference_is_rejected():
    players, _ = _group_of_three("A")
    _, other = _group_of_three("B")

    with pytest.raises(InvalidTournamentDataException):
        compute_standings(players, [], [other])


def test_compute_player_stats_counts_both_sides():
    player = Player(id="A0", name="A0")
    matches = [
        _match("m1", "A0", "A1", 4, 2),
        _match("m2", "A2", "A0", 4, 3),
    ]

    result = compute_player_stats(player, matches)

    assert result.points == 1
    assert result.games_won == 7
    assert result.games_lost == 6
    assert result.game_difference == 1
    assert result.matches_played == 2


def test_group_standings_in_rank_order(started):
    state = record_result(started, "m-r1-A", 1, 4)

    ordered = group_standings(state.players, "A")

    assert [p.id for p in ordered] == ["p-1", "p-2", "p-0"]


def test_players_in_category_ordered_by_group_then_rank(started):
    top = players_in_category(started.players, Category.TOP_8)
    bottom = players_in_category(started.players, Category.BOTTOM_4)

    assert [p.id for p in top] == ["p-0", "p-1", "p-3", "p-4", "p-6", "p-7", "p-9", "p-10"]
    assert [p.id for p in bottom] == ["p-2", "p-5", "p-8", "p-11"]


def test_overall_standings_puts_final_positions_first():
    players = [
        Player(id="a", name="A", points=3),
        Player(id="b", name="B", points=1, final_position=1),
        Player(id="c", name="C", points=2),
    ]

    assert [p.id for p in overall_standings(players)] == ["b", "a", "c"]
