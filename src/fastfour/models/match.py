"""Match record."""

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

from fastfour.constants import DEFAULT_SCORE
from fastfour.models.enums import Phase


@dataclass(frozen=True)
class Match:
    """A single match between two players.

    Scores stay at 0 until reported. ``completed`` is False while the score is
    provisional; the standings ignore incomplete matches even when they carry
    scores (a retracted result keeps its numbers).

    Attributes:
        id: Unique match identifier
        player1_id: First player
        player2_id: Second player
        score1: Games won by player 1
        score2: Games won by player 2
        court_id: Court number, display only
        round: Tournament round the match belongs to
        completed: Whether the score is final
        phase: Phase active when the match was created
        label: Display label (e.g. "Group A")
    """

    id: str
    player1_id: str
    player2_id: str
    round: int
    phase: Phase
    score1: int = DEFAULT_SCORE
    score2: int = DEFAULT_SCORE
    court_id: int = 1
    completed: bool = False
    label: str = ""

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def scores_for(self, player_id: str) -> Tuple[int, int]:
        """Return ``(own_score, opponent_score)`` from ``player_id``'s side.

        Raises:
            ValueError: If the player is not part of this match
        """
        if player_id == self.player1_id:
            return self.score1, self.score2
        if player_id == self.player2_id:
            return self.score2, self.score1
        raise ValueError(f"Player {player_id} is not in match {self.id}")

    def opponent_of(self, player_id: str) -> str:
        if player_id == self.player1_id:
            return self.player2_id
        if player_id == self.player2_id:
            return self.player1_id
        raise ValueError(f"Player {player_id} is not in match {self.id}")

    @property
    def winner_id(self) -> Optional[str]:
        """Winner of a completed match, or None when pending or tied."""
        if not self.completed or self.score1 == self.score2:
            return None
        return self.player1_id if self.score1 > self.score2 else self.player2_id

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "score1": self.score1,
            "score2": self.score2,
            "courtId": self.court_id,
            "round": self.round,
            "completed": self.completed,
            "phase": self.phase.value,
            "label": self.label,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            player1_id=data["player1Id"],
            player2_id=data["player2Id"],
            score1=data.get("score1", DEFAULT_SCORE),
            score2=data.get("score2", DEFAULT_SCORE),
            court_id=data.get("courtId", 1),
            round=data["round"],
            completed=data.get("completed", False),
            phase=Phase(data.get("phase", Phase.GROUPS.value)),
            label=data.get("label", ""),
        )
