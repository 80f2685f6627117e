"""Result recording and retraction.

Both operations touch a single match and then rebuild the standings; neither
changes the round or the phase.
"""

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

from dataclasses import replace

from fastfour.exceptions import InvalidResultException
from fastfour.models import TournamentState
from fastfour.controllers.tournament.round_manager import require_started
from fastfour.controllers.tournament.standings import compute_standings
from fastfour.utils import setup_logger
from fastfour.utils.validation import validate_score

logger = setup_logger(__name__)


def _validated_score(value: object, side: str) -> int:
    result = validate_score(value)
    if not result:
        raise InvalidResultException(f"Invalid {side}: {result.error_message}")
    return result.sanitized_value


def record_result(
    state: TournamentState, match_id: str, score1: int, score2: int
) -> TournamentState:
    """Set a match's scores, mark it completed and rebuild the standings.

    Recording over an already completed match overwrites its scores.

    Args:
        state: Current state
        match_id: Match to score
        score1: Games won by player 1
        score2: Games won by player 2

    Returns:
        The next state

    Raises:
        TournamentStateException: If no tournament is running
        MatchNotFoundException: If ``match_id`` is unknown
        InvalidResultException: If a score is not a non-negative integer
    """
    require_started(state, "record result")
    target = state.get_match(match_id)
    s1 = _validated_score(score1, "score1")
    s2 = _validated_score(score2, "score2")

    updated = replace(target, score1=s1, score2=s2, completed=True)
    matches = tuple(updated if m.id == match_id else m for m in state.matches)
    next_state = replace(
        state,
        matches=matches,
        players=compute_standings(state.players, matches, state.groups),
    )

    logger.info(f"Recorded {match_id}: {s1}-{s2}")
    return next_state


def unlock_result(state: TournamentState, match_id: str) -> TournamentState:
    """Retract a match result so it can be corrected.

    The scores are kept on the match but the standings ignore them until the
    match is recorded again.

    Raises:
        TournamentStateException: If no tournament is running
        MatchNotFoundException: If ``match_id`` is unknown
    """
    require_started(state, "unlock result")
    target = state.get_match(match_id)

    if not target.completed:
        logger.debug(f"Match {match_id} is already open")

    updated = replace(target, completed=False)
    matches = tuple(updated if m.id == match_id else m for m in state.matches)
    next_state = replace(
        state,
        matches=matches,
        players=compute_standings(state.players, matches, state.groups),
    )

    logger.info(f"Unlocked {match_id}")
    return next_state
