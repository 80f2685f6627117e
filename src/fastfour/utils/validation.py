"""Validation utilities for Fast Four.

This module provides reusable validation functions for the engine input
boundary: player names at setup, reported scores and tournament dates.
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

from datetime import date, datetime
from typing import Any, Optional, Sequence

from dateutil import parser as date_parser

from fastfour.constants import DATE_FORMAT, PLAYER_COUNT


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Player Name Validation ==========


def validate_player_names(
    names: Sequence[str], expected_count: int = PLAYER_COUNT
) -> ValidationResult:
    """Validate the list of player names entered at setup.

    Names are stripped of surrounding whitespace. Blank names are rejected,
    as is any count other than ``expected_count``. Repeated names are allowed;
    players are told apart by id.

    Args:
        names: Player names in entry order
        expected_count: Required number of names

    Returns:
        ValidationResult whose sanitized_value is the list of stripped names

    Example:
        >>> result = validate_player_names(["Ana", "Rui"], expected_count=2)
        >>> result.sanitized_value
        ['Ana', 'Rui']
    """
    if isinstance(names, str):
        return ValidationResult(
            is_valid=False, error_message="Player names must be a sequence of strings"
        )

    cleaned = []
    for index, name in enumerate(names):
        if not isinstance(name, str) or not name.strip():
            return ValidationResult(
                is_valid=False,
                error_message=f"Player name #{index + 1} is empty",
            )
        cleaned.append(name.strip())

    if len(cleaned) != expected_count:
        return ValidationResult(
            is_valid=False,
            error_message=f"Expected {expected_count} players, got {len(cleaned)}",
        )

    return ValidationResult(is_valid=True, sanitized_value=cleaned)


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a single reported score (games won in a match).

    Accepts ints and integer strings. Booleans, floats and negatives are
    rejected.

    Returns:
        ValidationResult whose sanitized_value is the score as an int
    """
    if isinstance(score, bool):
        return ValidationResult(is_valid=False, error_message="Score must be an integer")

    if isinstance(score, str):
        text = score.strip()
        if not text.lstrip("-").isdigit():
            return ValidationResult(
                is_valid=False, error_message=f"Score must be an integer: {score!r}"
            )
        try:
            score = int(text)
        except ValueError:
            # isdigit() also accepts superscripts and other non-decimal digits
            return ValidationResult(
                is_valid=False, error_message=f"Score must be an integer: {score!r}"
            )

    if not isinstance(score, int):
        return ValidationResult(
            is_valid=False, error_message=f"Score must be an integer: {score!r}"
        )

    if score < 0:
        return ValidationResult(
            is_valid=False, error_message=f"Score cannot be negative: {score}"
        )

    return ValidationResult(is_valid=True, sanitized_value=score)


# ========== Date Validation ==========


def validate_date(value: Any) -> ValidationResult:
    """Validate and normalize a tournament date to ``YYYY-MM-DD``.

    Accepts ``date``/``datetime`` objects and any string dateutil can parse
    (``2025-03-09``, ``9 March 2025``, ``03/09/2025``).
    """
    if isinstance(value, datetime):
        return ValidationResult(
            is_valid=True, sanitized_value=value.date().strftime(DATE_FORMAT)
        )
    if isinstance(value, date):
        return ValidationResult(is_valid=True, sanitized_value=value.strftime(DATE_FORMAT))

    if not isinstance(value, str) or not value.strip():
        return ValidationResult(is_valid=False, error_message="Tournament date is required")

    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, OverflowError) as e:
        return ValidationResult(
            is_valid=False, error_message=f"Invalid tournament date {value!r}: {e}"
        )

    return ValidationResult(is_valid=True, sanitized_value=parsed.strftime(DATE_FORMAT))


def today() -> str:
    """Today's date in the stored format."""
    return date.today().strftime(DATE_FORMAT)
