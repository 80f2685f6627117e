"""Plain-text rendering of tournament states and archive records."""

# Fast Four
# Copyright (C) 2025  Fast Four developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import List, Sequence

from fastfour.controllers.tournament import group_standings, overall_standings
from fastfour.models import Match, TournamentRecord, TournamentState


def _player_name(state: TournamentState, player_id: str) -> str:
    player = state.find_player(player_id)
    return player.name if player is not None else player_id


def render_match(state: TournamentState, match: Match) -> str:
    status = "final" if match.completed else "open"
    return (
        f"  [{match.id}] court {match.court_id} {match.label:10} "
        f"{_player_name(state, match.player1_id)} {match.score1} - "
        f"{match.score2} {_player_name(state, match.player2_id)} ({status})"
    )


def render_groups(state: TournamentState) -> List[str]:
    lines = []
    for group in state.groups:
        lines.append(f"{group.name}")
        for player in group_standings(state.players, group.id):
            category = player.category.value if player.category else "-"
            lines.append(
                f"  {player.group_rank or '-'}. {player.name:15} ({player.id}) "
                f"pts {player.points}  games {player.games_won}-{player.games_lost}  "
                f"{category}"
            )
    return lines


def render_state(state: TournamentState) -> str:
    """Groups with standings followed by the current round's matches."""
    if not state.players:
        return "No tournament set up."

    status = "running" if state.is_started else "not running"
    lines = [
        f"Tournament {state.date}: round {state.current_round}, "
        f"phase {state.phase.value}, {status}",
        "",
    ]
    lines.extend(render_groups(state))
    lines.append("")
    lines.append(f"Round {state.current_round} matches:")
    matches = state.current_round_matches
    if matches:
        lines.extend(render_match(state, m) for m in matches)
    else:
        lines.append("  (none)")
    return "\n".join(lines)


def render_final_table(players: Sequence) -> List[str]:
    lines = []
    for index, player in enumerate(overall_standings(players), start=1):
        position = player.final_position if player.final_position is not None else index
        lines.append(
            f"  {position:>2}. {player.name:15} pts {player.points}  "
            f"games {player.games_won}-{player.games_lost}"
        )
    return lines


def render_history(records: Sequence[TournamentRecord]) -> str:
    """Archive listing, newest first, one block per tournament."""
    if not records:
        return "No archived tournaments."

    lines = []
    for record in records:
        champion = record.champion
        headline = f"{record.date} [{record.id}]"
        if champion is not None:
            headline += f" champion: {champion.name}"
        lines.append(headline)
        lines.extend(render_final_table(record.players))
        lines.append("")
    return "\n".join(lines).rstrip()
