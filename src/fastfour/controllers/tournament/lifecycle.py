"""Tournament lifecycle: setup and finalization.

Setup seeds the fixed cohort of players into groups and opens round 1.
Finalization turns the running state into an archival record and hands back
a deactivated state.
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

import random
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from fastfour.constants import (
    FIRST_ROUND,
    GROUP_COUNT,
    GROUP_LABELS,
    GROUP_NAME_TEMPLATE,
    GROUP_SIZE,
    MATCH_ID_TEMPLATE,
    PLAYER_COUNT,
    PLAYER_ID_PREFIX,
    RECORD_ID_PREFIX,
)
from fastfour.exceptions import (
    InvalidCardinalityException,
    InvalidTournamentDataException,
    PlayerNotFoundException,
)
from fastfour.models import (
    Group,
    Match,
    Phase,
    Player,
    TournamentRecord,
    TournamentState,
)
from fastfour.controllers.tournament.round_manager import require_started
from fastfour.controllers.tournament.standings import compute_standings
from fastfour.type_hints import FinalPositions
from fastfour.utils import generate_id, setup_logger
from fastfour.utils.validation import validate_date, validate_player_names

logger = setup_logger(__name__)


class Shuffler(ABC):
    """Source of the random seeding order."""

    @abstractmethod
    def shuffle(self, players: Sequence[Player]) -> List[Player]:
        """Return a permutation of ``players``."""


class RandomShuffler(Shuffler):
    """Uniform random permutation, reproducible when seeded."""

    def __init__(self, seed: Optional[int] = None):
        self.random = random.Random(seed) if seed is not None else random.Random()

    def shuffle(self, players: Sequence[Player]) -> List[Player]:
        shuffled = list(players)
        self.random.shuffle(shuffled)
        return shuffled


def create_players(names: Sequence[str]) -> List[Player]:
    """Players with sequential ids ``p-0``, ``p-1``, ... and zeroed stats."""
    return [
        Player(id=f"{PLAYER_ID_PREFIX}{index}", name=name)
        for index, name in enumerate(names)
    ]


def create_groups(seeding: Sequence[Player]) -> Tuple[Group, ...]:
    """Slice the seeding order into groups A-D of three, contiguously."""
    groups = []
    for index, label in enumerate(GROUP_LABELS[:GROUP_COUNT]):
        members = seeding[index * GROUP_SIZE:(index + 1) * GROUP_SIZE]
        groups.append(
            Group(
                id=label,
                name=GROUP_NAME_TEMPLATE.format(label=label),
                player_ids=tuple(p.id for p in members),
            )
        )
    return tuple(groups)


def create_opening_matches(groups: Sequence[Group]) -> Tuple[Match, ...]:
    """One round-1 match per group between its first two seeded players.

    The third player of each group sits out round 1. Courts are numbered in
    group order starting at 1.
    """
    return tuple(
        Match(
            id=MATCH_ID_TEMPLATE.format(round=FIRST_ROUND, suffix=group.id),
            player1_id=group.player_ids[0],
            player2_id=group.player_ids[1],
            court_id=court,
            round=FIRST_ROUND,
            completed=False,
            phase=Phase.GROUPS,
            label=group.name,
        )
        for court, group in enumerate(groups, start=1)
    )


def _check_permutation(original: Sequence[Player], shuffled: Sequence[Player]) -> None:
    if sorted(p.id for p in original) != sorted(p.id for p in shuffled):
        raise InvalidTournamentDataException(
            "Shuffler must return a permutation of the players it was given"
        )


def start_tournament(
    player_names: Sequence[str],
    date: object,
    shuffler: Optional[Shuffler] = None,
) -> TournamentState:
    """Seed players into groups and open round 1.

    Given a fixed shuffle outcome the result is fully deterministic.

    Args:
        player_names: Exactly twelve names, in entry order
        date: Tournament date (string or date), normalized to ``YYYY-MM-DD``
        shuffler: Seeding order source, random by default

    Returns:
        A started state at round 1 in the group phase

    Raises:
        InvalidCardinalityException: If the number of names is not twelve
        InvalidTournamentDataException: On blank names, an unparsable date or
            a shuffler that does not return a permutation
    """
    if isinstance(player_names, str) or len(player_names) != PLAYER_COUNT:
        count = 1 if isinstance(player_names, str) else len(player_names)
        raise InvalidCardinalityException(
            f"Expected {PLAYER_COUNT} players, got {count}"
        )

    names_result = validate_player_names(player_names)
    if not names_result:
        raise InvalidTournamentDataException(names_result.error_message)

    date_result = validate_date(date)
    if not date_result:
        raise InvalidTournamentDataException(date_result.error_message)

    players = create_players(names_result.sanitized_value)
    shuffled = (shuffler or RandomShuffler()).shuffle(players)
    _check_permutation(players, shuffled)

    groups = create_groups(shuffled)
    group_of = {pid: g.id for g in groups for pid in g.player_ids}
    players = [replace(p, group_id=group_of[p.id]) for p in players]
    matches = create_opening_matches(groups)

    state = TournamentState(
        players=compute_standings(players, matches, groups),
        matches=matches,
        current_round=FIRST_ROUND,
        is_started=True,
        phase=Phase.GROUPS,
        groups=groups,
        date=date_result.sanitized_value,
    )

    logger.info(
        f"Started tournament on {state.date}: "
        + ", ".join(f"{g.id}={list(g.player_ids)}" for g in groups)
    )
    return state


def _apply_final_positions(
    players: Sequence[Player], final_positions: FinalPositions
) -> Tuple[Player, ...]:
    known = {p.id for p in players}
    for player_id, position in final_positions.items():
        if player_id not in known:
            raise PlayerNotFoundException(
                f"Final position given for unknown player {player_id}"
            )
        if isinstance(position, bool) or not isinstance(position, int) or position < 1:
            raise InvalidTournamentDataException(
                f"Final position for {player_id} must be a positive integer, got {position!r}"
            )

    return tuple(
        replace(p, final_position=final_positions[p.id]) if p.id in final_positions else p
        for p in players
    )


def finalize(
    state: TournamentState,
    final_positions: Optional[FinalPositions] = None,
    record_id: Optional[str] = None,
) -> Tuple[TournamentRecord, TournamentState]:
    """Close the tournament.

    Args:
        state: Running state
        final_positions: Optional player id -> final placing
        record_id: Identifier for the record, generated when omitted

    Returns:
        Tuple of (record, deactivated state). The deactivated state is no
        longer started and its phase is FINISHED; it accepts no further
        mutation until a new setup.

    Raises:
        TournamentStateException: If no tournament is running
        PlayerNotFoundException: If a final position names an unknown player
        InvalidTournamentDataException: If a final position is not positive
    """
    require_started(state, "finalize")

    players = state.players
    if final_positions:
        players = _apply_final_positions(players, final_positions)

    record = TournamentRecord(
        id=record_id or generate_id(RECORD_ID_PREFIX),
        date=state.date,
        players=players,
        matches=state.matches,
        groups=state.groups,
    )
    finished = replace(state, players=players, is_started=False, phase=Phase.FINISHED)

    logger.info(
        f"Finalized tournament {record.id} ({state.date}) after "
        f"{state.current_round} rounds and {len(state.matches)} matches"
    )
    return record, finished
