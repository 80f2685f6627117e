"""Tournament engine: setup, results, rounds and finalization.

Every operation takes a ``TournamentState`` and returns a new one.
``TournamentSession`` wraps them for hosts that keep one current state.
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

from fastfour.controllers.tournament.bracket import (
    BracketBuilder,
    ManualBracketBuilder,
    build_next_round,
)
from fastfour.controllers.tournament.lifecycle import (
    RandomShuffler,
    Shuffler,
    finalize,
    start_tournament,
)
from fastfour.controllers.tournament.result_recorder import record_result, unlock_result
from fastfour.controllers.tournament.round_manager import (
    advance_round,
    is_round_complete,
    phase_for_round,
    undo_round,
)
from fastfour.controllers.tournament.session import TournamentSession
from fastfour.controllers.tournament.standings import (
    compute_standings,
    group_standings,
    overall_standings,
    players_in_category,
)

__all__ = [
    "BracketBuilder",
    "ManualBracketBuilder",
    "build_next_round",
    "start_tournament",
    "finalize",
    "Shuffler",
    "RandomShuffler",
    "record_result",
    "unlock_result",
    "advance_round",
    "undo_round",
    "is_round_complete",
    "phase_for_round",
    "compute_standings",
    "group_standings",
    "overall_standings",
    "players_in_category",
    "TournamentSession",
]
