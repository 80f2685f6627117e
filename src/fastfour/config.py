"""Runtime configuration for Fast Four hosts."""

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

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from fastfour.constants import DEFAULT_ARCHIVE_FILE, DEFAULT_LOG_LEVEL, DEFAULT_STATE_FILE
from fastfour.exceptions import FileLoadException, InvalidConfigurationException
from fastfour.utils import setup_logger
from fastfour.utils.storage import read_json_file

logger = setup_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FastFourConfig:
    """Host configuration.

    Attributes:
        archive_path: History archive file
        state_path: Default file for ``save``/``load`` of the running state
        log_level: Level for the ``fastfour`` loggers
        seed: Shuffle seed for reproducible seeding, random when None
    """

    archive_path: str = DEFAULT_ARCHIVE_FILE
    state_path: str = DEFAULT_STATE_FILE
    log_level: str = DEFAULT_LOG_LEVEL
    seed: Optional[int] = None

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise InvalidConfigurationException(
                f"Unknown log level {self.log_level!r}, expected one of {', '.join(LOG_LEVELS)}"
            )
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise InvalidConfigurationException(
                f"Seed must be an integer, got {self.seed!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "archivePath": self.archive_path,
            "statePath": self.state_path,
            "logLevel": self.log_level,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FastFourConfig":
        """Build a config, falling back to defaults for missing keys."""
        defaults = cls()
        return cls(
            archive_path=data.get("archivePath", defaults.archive_path),
            state_path=data.get("statePath", defaults.state_path),
            log_level=data.get("logLevel", defaults.log_level),
            seed=data.get("seed", defaults.seed),
        )

    def with_overrides(self, **overrides: Any) -> "FastFourConfig":
        """Copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Optional[Union[str, Path]]) -> FastFourConfig:
    """Load configuration from a JSON file.

    A missing path or file yields the defaults.

    Raises:
        InvalidConfigurationException: If the file exists but is unreadable,
            not a JSON object or holds invalid values
    """
    if not path:
        return FastFourConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return FastFourConfig()

    try:
        data = read_json_file(config_path)
    except FileLoadException as e:
        raise InvalidConfigurationException(str(e)) from e

    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Configuration file {config_path} must contain a JSON object"
        )

    config = FastFourConfig.from_dict(data)
    logger.info(f"Loaded configuration from {config_path}")
    return config
