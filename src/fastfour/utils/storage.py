"""JSON file helpers shared by the archive, session snapshots and config."""

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

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Union

from fastfour.exceptions import FileLoadException, FileSaveException
from fastfour.utils import setup_logger

logger = setup_logger(__name__)

PathLike = Union[str, Path]


def read_json_file(path: PathLike) -> Any:
    """Load JSON from ``path``.

    Raises:
        FileLoadException: If the file cannot be read or is not valid JSON
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise FileLoadException(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {e}")
        raise FileLoadException(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading {path}: {e}")
        raise FileLoadException(f"Could not read {path}: {e}") from e


def write_json_file(path: PathLike, data: Any) -> None:
    """Write ``data`` as JSON to ``path``, replacing it atomically.

    The content goes to a temporary file in the same directory first, so a
    failed write leaves the previous file untouched.

    Raises:
        FileSaveException: If the file cannot be written
    """
    path = Path(path)
    tmp_name = None
    try:
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Error writing {path}: {e}")
        raise FileSaveException(f"Could not write {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
