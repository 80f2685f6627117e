"""Group record."""

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
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Group:
    """A seeding group. Membership is fixed at setup, in shuffle order."""

    id: str
    name: str
    player_ids: Tuple[str, ...]

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.player_ids

    def to_dict(self) -> Dict[str, Any]:
        """Serialize group to dictionary."""
        return {"id": self.id, "name": self.name, "playerIds": list(self.player_ids)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Deserialize group from dictionary."""
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            player_ids=tuple(data.get("playerIds", [])),
        )
