"""Shared helpers: logging setup and identifier generation."""

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

import logging
import uuid
from typing import Optional, Union

ROOT_LOGGER_NAME = "fastfour"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler_installed = False


def _install_root_handler() -> None:
    global _handler_installed
    if _handler_installed:
        return

    root = logging.getLogger(ROOT_LOGGER_NAME)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    root.propagate = False
    _handler_installed = True


def setup_logger(
    name: str, level: Optional[Union[int, str]] = None
) -> logging.Logger:
    """Return a module logger under the ``fastfour`` hierarchy.

    The stream handler lives on the package root logger so that every module
    logger shares one formatter and one level switch.

    Args:
        name: Usually ``__name__`` of the calling module
        level: Optional level for this logger only

    Returns:
        The configured logger
    """
    _install_root_handler()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger


def set_log_level(level: Union[int, str]) -> None:
    """Change the level of the package root logger."""
    _install_root_handler()
    if isinstance(level, str):
        level = level.upper()
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def generate_id(prefix: str = "") -> str:
    """Generate a short unique identifier, optionally prefixed."""
    token = uuid.uuid4().hex[:12]
    return f"{prefix}-{token}" if prefix else token
