"""Single-host tournament session.

Holds the current state, serializes mutations and connects finalization to a
history archive. Hosts (the console, a future web handler) talk to this
class rather than threading states through the engine functions themselves.
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

import threading
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from fastfour.archive import HistoryArchive, InMemoryHistoryArchive
from fastfour.controllers.tournament.bracket import BracketBuilder
from fastfour.controllers.tournament.lifecycle import (
    Shuffler,
    finalize,
    start_tournament,
)
from fastfour.controllers.tournament.result_recorder import record_result, unlock_result
from fastfour.controllers.tournament.round_manager import (
    advance_round,
    require_started,
    undo_round,
)
from fastfour.exceptions import FileLoadException
from fastfour.models import Match, Phase, TournamentRecord, TournamentState
from fastfour.type_hints import FinalPositions
from fastfour.utils import setup_logger
from fastfour.utils.storage import read_json_file, write_json_file

logger = setup_logger(__name__)


class TournamentSession:
    """The one current tournament of a host.

    Each mutating call runs one engine transform under a lock and swaps in
    the state it returns. A transform that raises leaves the current state as
    it was.

    Args:
        archive: Where finalized tournaments go. In-memory when omitted.
        shuffler: Seeding order source passed to setup
    """

    def __init__(
        self,
        archive: Optional[HistoryArchive] = None,
        shuffler: Optional[Shuffler] = None,
    ):
        self.archive = archive if archive is not None else InMemoryHistoryArchive()
        self.shuffler = shuffler
        self._state = TournamentState.empty()
        self._lock = threading.Lock()

    @property
    def state(self) -> TournamentState:
        return self._state

    @property
    def is_started(self) -> bool:
        return self._state.is_started

    def _apply(self, transform: Callable[[TournamentState], TournamentState]) -> TournamentState:
        with self._lock:
            self._state = transform(self._state)
            return self._state

    # ========== Lifecycle ==========

    def start(self, player_names: Sequence[str], date: object = None) -> TournamentState:
        """Set up a new tournament, replacing whatever was current.

        Args:
            player_names: Exactly twelve names
            date: Tournament date, today when omitted
        """
        date = date if date is not None else TournamentState.empty().date
        return self._apply(
            lambda _: start_tournament(player_names, date, shuffler=self.shuffler)
        )

    def finalize(
        self,
        final_positions: Optional[FinalPositions] = None,
        record_id: Optional[str] = None,
    ) -> TournamentRecord:
        """Archive the running tournament and deactivate it.

        The record is appended before the state is swapped, so if the archive
        rejects it the tournament stays running.
        """
        with self._lock:
            record, finished = finalize(
                self._state, final_positions=final_positions, record_id=record_id
            )
            self.archive.append(record)
            self._state = finished
        return record

    def history(self) -> List[TournamentRecord]:
        """Archived tournaments, newest first."""
        return self.archive.list_all()

    # ========== Results ==========

    def record_result(self, match_id: str, score1: int, score2: int) -> TournamentState:
        return self._apply(lambda s: record_result(s, match_id, score1, score2))

    def unlock_result(self, match_id: str) -> TournamentState:
        return self._apply(lambda s: unlock_result(s, match_id))

    # ========== Rounds ==========

    def advance(
        self,
        new_matches: Union[Sequence[Match], BracketBuilder],
        next_phase: Optional[Phase] = None,
        require_complete: bool = False,
    ) -> TournamentState:
        """Open the next round.

        Args:
            new_matches: Matches for the next round, or a builder producing them
            next_phase: Phase to switch to, if any
            require_complete: Refuse while the current round is unfinished
        """

        def transform(state: TournamentState) -> TournamentState:
            # started check first so a builder never sees an inactive state
            require_started(state, "advance round")
            matches = (
                new_matches.build_round(state, next_phase=next_phase)
                if isinstance(new_matches, BracketBuilder)
                else new_matches
            )
            return advance_round(
                state,
                matches,
                next_phase=next_phase,
                require_complete=require_complete,
            )

        return self._apply(transform)

    def undo(self) -> TournamentState:
        return self._apply(undo_round)

    # ========== Persistence ==========

    def save_state(self, path: Union[str, Path]) -> None:
        """Write the current state to ``path`` as JSON.

        Raises:
            FileSaveException: If the file cannot be written
        """
        with self._lock:
            data = self._state.to_dict()
        write_json_file(path, data)
        logger.info(f"Saved tournament state to {path}")

    def load_state(self, path: Union[str, Path]) -> TournamentState:
        """Replace the current state with the one stored at ``path``.

        Raises:
            FileLoadException: If the file cannot be read or is not a state
            InvalidTournamentDataException: If the stored state is invalid
        """
        data = read_json_file(path)
        if not isinstance(data, dict):
            raise FileLoadException(f"{path} does not contain a tournament state")
        state = TournamentState.from_dict(data)
        with self._lock:
            self._state = state
        logger.info(
            f"Loaded tournament state from {path} "
            f"(round {state.current_round}, phase {state.phase.value})"
        )
        return state

