"""Bracket builders: who plays whom in the next round.

The engine does not decide pairings beyond the opening round. A bracket
builder turns a pairing decision into ``Match`` records for
``current_round + 1``, which ``advance_round`` then validates and appends.
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

from abc import ABC, abstractmethod
from typing import List, Optional

from fastfour.constants import MATCH_ID_TEMPLATE
from fastfour.exceptions import InvalidMatchException
from fastfour.models import Match, Phase, TournamentState
from fastfour.controllers.tournament.round_manager import advance_round
from fastfour.type_hints import RoundPairings
from fastfour.utils import setup_logger

logger = setup_logger(__name__)


class BracketBuilder(ABC):
    """Produces the matches of the next round.

    Matches must reference existing players and carry
    ``round = state.current_round + 1``.
    """

    @abstractmethod
    def build_round(
        self, state: TournamentState, next_phase: Optional[Phase] = None
    ) -> List[Match]:
        """Build the matches for ``state.current_round + 1``.

        ``next_phase`` is the phase the round opens in, when it differs from
        ``state.phase``.
        """


class ManualBracketBuilder(BracketBuilder):
    """Next round from operator-entered pairings.

    Args:
        pairings: ``(player1_id, player2_id)`` tuples, one per match
        label: Display label for every match. Defaults to the group name when
            both players share a group in the group phase, else "Round N".
        phase: Phase the new matches belong to. Defaults to the phase the
            round opens in.
        first_court: Court number of the first match
    """

    def __init__(
        self,
        pairings: RoundPairings,
        label: Optional[str] = None,
        phase: Optional[Phase] = None,
        first_court: int = 1,
    ):
        self.pairings = list(pairings)
        self.phase = phase
        self.label = label
        self.first_court = first_court

    def _label_for(self, state: TournamentState, phase: Phase, player1_id: str,
                   player2_id: str, round_number: int) -> str:
        if self.label:
            return self.label
        if phase == Phase.GROUPS:
            p1 = state.get_player(player1_id)
            p2 = state.get_player(player2_id)
            if p1.group_id is not None and p1.group_id == p2.group_id:
                group = state.get_group(p1.group_id)
                if group is not None:
                    return group.name
        return f"Round {round_number}"

    def build_round(
        self, state: TournamentState, next_phase: Optional[Phase] = None
    ) -> List[Match]:
        """Build the next round's matches.

        Raises:
            InvalidMatchException: If a player appears twice in the round
            PlayerNotFoundException: If a pairing names an unknown player
        """
        round_number = state.current_round + 1
        phase = self.phase or next_phase or state.phase

        scheduled = set()
        matches = []
        for index, (player1_id, player2_id) in enumerate(self.pairings, start=1):
            for player_id in (player1_id, player2_id):
                state.get_player(player_id)
                if player_id in scheduled:
                    raise InvalidMatchException(
                        f"Player {player_id} is paired twice in round {round_number}"
                    )
                scheduled.add(player_id)

            matches.append(
                Match(
                    id=MATCH_ID_TEMPLATE.format(round=round_number, suffix=index),
                    player1_id=player1_id,
                    player2_id=player2_id,
                    court_id=self.first_court + index - 1,
                    round=round_number,
                    phase=phase,
                    label=self._label_for(
                        state, phase, player1_id, player2_id, round_number
                    ),
                )
            )

        logger.debug(f"Built {len(matches)} matches for round {round_number}")
        return matches


def build_next_round(
    state: TournamentState,
    builder: BracketBuilder,
    next_phase: Optional[Phase] = None,
    require_complete: bool = False,
) -> TournamentState:
    """Ask ``builder`` for the next round and advance to it."""
    return advance_round(
        state,
        builder.build_round(state, next_phase=next_phase),
        next_phase=next_phase,
        require_complete=require_complete,
    )
