"""Archived snapshot of a finished tournament."""

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
from typing import Any, Dict, Optional, Tuple

from fastfour.exceptions import InvalidTournamentDataException
from fastfour.models.group import Group
from fastfour.models.match import Match
from fastfour.models.player import Player


@dataclass(frozen=True)
class TournamentRecord:
    """Immutable snapshot of players, matches and groups at finalization.

    Once handed to an archive a record is never modified; the archive only
    appends new ones.
    """

    id: str
    date: str
    players: Tuple[Player, ...]
    matches: Tuple[Match, ...]
    groups: Tuple[Group, ...]

    @property
    def champion(self) -> Optional[Player]:
        """Player with final position 1, if positions were recorded."""
        return next((p for p in self.players if p.final_position == 1), None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "players": [p.to_dict() for p in self.players],
            "matches": [m.to_dict() for m in self.matches],
            "groups": [g.to_dict() for g in self.groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentRecord":
        """Deserialize record from dictionary.

        Raises:
            InvalidTournamentDataException: If data is malformed
        """
        try:
            return cls(
                id=str(data["id"]),
                date=data.get("date", ""),
                players=tuple(Player.from_dict(p) for p in data.get("players", [])),
                matches=tuple(Match.from_dict(m) for m in data.get("matches", [])),
                groups=tuple(Group.from_dict(g) for g in data.get("groups", [])),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidTournamentDataException(
                f"Malformed tournament record: {e}"
            ) from e
