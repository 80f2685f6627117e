"""History archive backends.

Records are appended once and never modified. Listing returns them newest
first. The JSON backend keeps the whole archive in one file, written
atomically on every append.
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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Union

from fastfour.exceptions import FileLoadException, InvalidTournamentDataException
from fastfour.models import TournamentRecord
from fastfour.utils import setup_logger
from fastfour.utils.storage import read_json_file, write_json_file

logger = setup_logger(__name__)


class HistoryArchive(ABC):
    """Storage for finalized tournament records."""

    @abstractmethod
    def append(self, record: TournamentRecord) -> None:
        """Store a record.

        Raises:
            InvalidTournamentDataException: If a record with the same id exists
        """

    @abstractmethod
    def list_all(self) -> List[TournamentRecord]:
        """All records, newest first."""

    def get(self, record_id: str) -> Optional[TournamentRecord]:
        return next((r for r in self.list_all() if r.id == record_id), None)

    def __len__(self) -> int:
        return len(self.list_all())


class InMemoryHistoryArchive(HistoryArchive):
    def __init__(self):
        self._records: List[TournamentRecord] = []
        self._lock = threading.Lock()

    def append(self, record: TournamentRecord) -> None:
        with self._lock:
            if any(r.id == record.id for r in self._records):
                raise InvalidTournamentDataException(
                    f"Tournament record {record.id} is already archived"
                )
            self._records.insert(0, record)
        logger.info(f"Archived tournament {record.id} ({record.date})")

    def list_all(self) -> List[TournamentRecord]:
        with self._lock:
            return list(self._records)


class JsonHistoryArchive(HistoryArchive):
    """Archive persisted as a JSON array of records, newest first.

    A missing file is an empty archive. Records are read back on every
    listing so several processes appending in turn see each other's work.

    Args:
        path: Archive file location
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[TournamentRecord]:
        if not self.path.exists():
            return []
        data = read_json_file(self.path)
        if not isinstance(data, list):
            raise FileLoadException(
                f"Archive {self.path} must contain a list of records"
            )
        try:
            return [TournamentRecord.from_dict(item) for item in data]
        except InvalidTournamentDataException as e:
            raise FileLoadException(f"Corrupt record in archive {self.path}: {e}") from e

    def append(self, record: TournamentRecord) -> None:
        with self._lock:
            records = self._load()
            if any(r.id == record.id for r in records):
                raise InvalidTournamentDataException(
                    f"Tournament record {record.id} is already archived"
                )
            records.insert(0, record)
            write_json_file(self.path, [r.to_dict() for r in records])
        logger.info(
            f"Archived tournament {record.id} ({record.date}) to {self.path}"
        )

    def list_all(self) -> List[TournamentRecord]:
        with self._lock:
            return self._load()
