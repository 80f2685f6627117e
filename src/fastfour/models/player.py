"""Player record with its derived standings fields."""

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
from typing import Any, Dict, Optional

from fastfour.models.enums import Category


@dataclass(frozen=True)
class Player:
    """A tournament participant.

    ``id``, ``name`` and ``group_id`` are fixed at setup. ``points``,
    ``games_won``, ``games_lost`` and ``matches_played`` are derived from the
    completed matches and are replaced wholesale on every recompute, never
    patched. ``group_rank`` and ``category`` are only meaningful for players
    that belong to a group. ``final_position`` is set at finalization.

    Attributes:
        id: Stable identifier assigned at setup
        name: Display name
        points: Number of matches won (not games)
        games_won: Sum of own scores over completed matches
        games_lost: Sum of opponent scores over completed matches
        matches_played: Number of completed matches
        group_id: Group the player was seeded into
        group_rank: 1-based position inside the group
        category: Playoff seeding pool
        final_position: Final placing, set only on archived records
    """

    id: str
    name: str
    points: int = 0
    games_won: int = 0
    games_lost: int = 0
    matches_played: int = 0
    group_id: Optional[str] = None
    group_rank: Optional[int] = None
    category: Optional[Category] = None
    final_position: Optional[int] = None

    @property
    def game_difference(self) -> int:
        """Games won minus games lost."""
        return self.games_won - self.games_lost

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary. Unset optional fields are omitted."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "points": self.points,
            "gamesWon": self.games_won,
            "gamesLost": self.games_lost,
            "matchesPlayed": self.matches_played,
        }
        if self.group_id is not None:
            data["groupId"] = self.group_id
        if self.group_rank is not None:
            data["groupRank"] = self.group_rank
        if self.category is not None:
            data["category"] = self.category.value
        if self.final_position is not None:
            data["finalPosition"] = self.final_position
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        category = data.get("category")
        return cls(
            id=data["id"],
            name=data["name"],
            points=data.get("points", 0),
            games_won=data.get("gamesWon", 0),
            games_lost=data.get("gamesLost", 0),
            matches_played=data.get("matchesPlayed", 0),
            group_id=data.get("groupId"),
            group_rank=data.get("groupRank"),
            category=Category(category) if category is not None else None,
            final_position=data.get("finalPosition"),
        )
