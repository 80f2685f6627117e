"""Round and phase transitions.

This module owns the phase state machine. Round 1 is created by setup;
afterwards rounds only move forward through ``advance_round`` and backward
through ``undo_round``. Which matches make up a new round is decided by a
bracket builder outside this module and handed in.
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
from typing import Optional, Sequence

from fastfour.constants import FIRST_ROUND, GROUP_STAGE_ROUNDS
from fastfour.exceptions import (
    InvalidMatchException,
    InvalidRoundException,
    TournamentStateException,
)
from fastfour.models import Match, Phase, TournamentState, validate_match
from fastfour.controllers.tournament.standings import compute_standings
from fastfour.utils import setup_logger

logger = setup_logger(__name__)


def require_started(state: TournamentState, operation: str) -> None:
    """Reject mutations of a tournament that is not running.

    Raises:
        TournamentStateException: If setup has not happened or the
            tournament was finalized
    """
    if not state.is_started:
        raise TournamentStateException(
            f"Cannot {operation}: no tournament in progress"
        )


def phase_for_round(round_number: int) -> Phase:
    """Phase a round belongs to: rounds 1-3 are groups, later rounds playoffs."""
    return Phase.PLAYOFFS if round_number > GROUP_STAGE_ROUNDS else Phase.GROUPS


def is_round_complete(state: TournamentState, round_number: Optional[int] = None) -> bool:
    """Whether every match of a round has a final score.

    Args:
        state: Tournament state
        round_number: Round to check, defaults to the current round

    Returns:
        True if the round has matches and all are completed
    """
    if round_number is None:
        round_number = state.current_round
    matches = state.matches_for_round(round_number)
    return bool(matches) and all(m.completed for m in matches)


def validate_new_round(state: TournamentState, new_matches: Sequence[Match]) -> None:
    """Check matches handed to ``advance_round``.

    Raises:
        InvalidRoundException: If a match is not for ``current_round + 1``
        InvalidMatchException: On duplicate ids or bad player references
    """
    next_round = state.current_round + 1
    player_ids = [p.id for p in state.players]
    seen = {m.id for m in state.matches}

    for match in new_matches:
        if match.round != next_round:
            raise InvalidRoundException(
                f"Match {match.id} is for round {match.round}, expected {next_round}"
            )
        if match.id in seen:
            raise InvalidMatchException(f"Duplicate match id: {match.id}")
        seen.add(match.id)
        validate_match(match, player_ids)


def advance_round(
    state: TournamentState,
    new_matches: Sequence[Match],
    next_phase: Optional[Phase] = None,
    require_complete: bool = False,
) -> TournamentState:
    """Open the next round.

    Appends ``new_matches``, increments the current round and, only when
    ``next_phase`` is given, switches the phase.

    Args:
        state: Current state
        new_matches: Matches of round ``current_round + 1``
        next_phase: Phase to switch to, if any
        require_complete: Refuse to advance while the current round still has
            matches without a final score

    Returns:
        The next state

    Raises:
        TournamentStateException: If no tournament is running, or the current
            round is incomplete and ``require_complete`` is set
        InvalidRoundException, InvalidMatchException: If ``new_matches`` are
            invalid
    """
    require_started(state, "advance round")
    if require_complete and not is_round_complete(state):
        raise TournamentStateException(
            f"Round {state.current_round} still has matches without a result"
        )
    validate_new_round(state, new_matches)

    matches = state.matches + tuple(new_matches)
    phase = next_phase if next_phase is not None else state.phase
    next_state = replace(
        state,
        current_round=state.current_round + 1,
        matches=matches,
        phase=phase,
        players=compute_standings(state.players, matches, state.groups),
    )

    logger.info(
        f"Advanced to round {next_state.current_round} "
        f"({len(new_matches)} matches, phase {phase.value})"
    )
    return next_state


def undo_round(state: TournamentState) -> TournamentState:
    """Roll back the most recently started round.

    Removes every match of the current round (and nothing from earlier
    rounds), steps the round back by one, recomputes standings from what is
    left and derives the phase from the new round number. At round 1 or
    below this is a no-op that returns ``state`` itself, whether or not a
    tournament is running.

    Raises:
        TournamentStateException: If the tournament was already finalized
    """
    if state.current_round <= FIRST_ROUND:
        logger.warning("Cannot undo: already at the first round")
        return state
    require_started(state, "undo round")

    removed_round = state.current_round
    remaining = tuple(m for m in state.matches if m.round < removed_round)
    new_round = removed_round - 1
    next_state = replace(
        state,
        current_round=new_round,
        matches=remaining,
        players=compute_standings(state.players, remaining, state.groups),
        phase=phase_for_round(new_round),
    )

    logger.info(
        f"Undid round {removed_round}: removed "
        f"{len(state.matches) - len(remaining)} matches, back to round {new_round}"
    )
    return next_state
