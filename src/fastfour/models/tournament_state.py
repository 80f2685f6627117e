"""The tournament aggregate and its structural invariants.

``TournamentState`` is a value: every engine operation takes one and returns
a new one. Nothing in this module mutates a state in place.
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

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from fastfour.exceptions import (
    DuplicatePlayerException,
    InvalidMatchException,
    InvalidTournamentDataException,
    MatchNotFoundException,
    PlayerNotFoundException,
)
from fastfour.models.enums import Phase
from fastfour.models.group import Group
from fastfour.models.match import Match
from fastfour.models.player import Player
from fastfour.utils.validation import today


@dataclass(frozen=True)
class TournamentState:
    """Single aggregate holding everything the engine works on.

    Attributes:
        players: All players, stable by id
        matches: Every match created so far, in creation order
        current_round: Round in progress (0 before setup)
        is_started: False until setup completes and again after finalization
        phase: Current phase
        groups: Seeding groups, fixed after setup
        date: Tournament date (``YYYY-MM-DD``)
    """

    players: Tuple[Player, ...] = ()
    matches: Tuple[Match, ...] = ()
    current_round: int = 0
    is_started: bool = False
    phase: Phase = Phase.GROUPS
    groups: Tuple[Group, ...] = ()
    date: str = ""

    @classmethod
    def empty(cls, date: Optional[str] = None) -> "TournamentState":
        """The unstarted state a host begins with."""
        return cls(date=date or today())

    # ========== Lookups ==========

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def get_player(self, player_id: str) -> Player:
        """Get a player by id.

        Raises:
            PlayerNotFoundException: If no player has this id
        """
        player = self.find_player(player_id)
        if player is None:
            raise PlayerNotFoundException(f"Player not found: {player_id}")
        return player

    def find_match(self, match_id: str) -> Optional[Match]:
        return next((m for m in self.matches if m.id == match_id), None)

    def get_match(self, match_id: str) -> Match:
        """Get a match by id.

        Raises:
            MatchNotFoundException: If no match has this id
        """
        match = self.find_match(match_id)
        if match is None:
            raise MatchNotFoundException(f"Match not found: {match_id}")
        return match

    def get_group(self, group_id: str) -> Optional[Group]:
        return next((g for g in self.groups if g.id == group_id), None)

    def matches_for_round(self, round_number: int) -> List[Match]:
        return [m for m in self.matches if m.round == round_number]

    @property
    def current_round_matches(self) -> List[Match]:
        return self.matches_for_round(self.current_round)

    def group_players(self, group_id: str) -> List[Player]:
        """Players seeded into ``group_id``, in ``players`` order."""
        return [p for p in self.players if p.group_id == group_id]

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to dictionary."""
        return {
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "currentRound": self.current_round,
            "isStarted": self.is_started,
            "phase": self.phase.value,
            "groups": [g.to_dict() for g in self.groups],
            "date": self.date,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize and validate a state.

        Raises:
            InvalidTournamentDataException: If data is malformed or breaks an
                invariant
        """
        try:
            state = cls(
                players=tuple(Player.from_dict(p) for p in data.get("players", [])),
                matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
                current_round=int(data.get("currentRound", 0)),
                is_started=bool(data.get("isStarted", False)),
                phase=Phase(data.get("phase", Phase.GROUPS.value)),
                groups=tuple(Group.from_dict(g) for g in data.get("groups", [])),
                date=data.get("date") or today(),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidTournamentDataException(
                f"Malformed tournament state: {e}"
            ) from e

        try:
            validate_state(state)
        except (DuplicatePlayerException, InvalidMatchException, PlayerNotFoundException) as e:
            raise InvalidTournamentDataException(str(e)) from e
        return state


def validate_players(players: Iterable[Player]) -> None:
    """Check that player ids are unique.

    Raises:
        DuplicatePlayerException: On a repeated id
    """
    seen = set()
    for player in players:
        if player.id in seen:
            raise DuplicatePlayerException(f"Duplicate player id: {player.id}")
        seen.add(player.id)


def validate_match(match: Match, player_ids: Iterable[str]) -> None:
    """Check that a match pairs two distinct, known players.

    Raises:
        InvalidMatchException: On self-pairing or an orphan player reference
    """
    known = set(player_ids)
    if match.player1_id == match.player2_id:
        raise InvalidMatchException(
            f"Match {match.id} pairs player {match.player1_id} with themselves"
        )
    for player_id in (match.player1_id, match.player2_id):
        if player_id not in known:
            raise InvalidMatchException(
                f"Match {match.id} references unknown player {player_id}"
            )
    if match.round < 1:
        raise InvalidMatchException(
            f"Match {match.id} has invalid round {match.round}"
        )


def validate_state(state: TournamentState) -> None:
    """Check the construction invariants of a tournament state.

    - player ids are unique
    - every match pairs two distinct, known players and match ids are unique
    - every group member is a known player and belongs to one group only

    Raises:
        DuplicatePlayerException, InvalidMatchException,
        PlayerNotFoundException: On the first broken invariant
    """
    validate_players(state.players)
    player_ids = {p.id for p in state.players}

    match_ids = set()
    for match in state.matches:
        if match.id in match_ids:
            raise InvalidMatchException(f"Duplicate match id: {match.id}")
        match_ids.add(match.id)
        validate_match(match, player_ids)

    membership: Dict[str, str] = {}
    for group in state.groups:
        for player_id in group.player_ids:
            if player_id not in player_ids:
                raise PlayerNotFoundException(
                    f"Group {group.id} references unknown player {player_id}"
                )
            if player_id in membership:
                raise DuplicatePlayerException(
                    f"Player {player_id} is in groups {membership[player_id]} and {group.id}"
                )
            membership[player_id] = group.id
