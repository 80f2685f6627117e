"""Exceptions for use in Fast Four"""

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


# ========== Base Application Exception ==========


class FastFourException(Exception):
    """Base exception for all Fast Four errors.

    All custom exceptions in the application inherit from this class, so a
    host can catch every engine rejection with a single except clause.
    """

    pass


# ========== Tournament Exceptions ==========


class TournamentException(FastFourException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when the tournament is in an invalid state for the requested operation."""

    pass


class InvalidCardinalityException(TournamentException):
    """Raised when setup receives a number of players other than the fixed cohort."""

    pass


class InvalidRoundException(TournamentException):
    """Raised when matches handed to a round advance belong to the wrong round."""

    pass


# ========== Match Exceptions ==========


class MatchException(FastFourException):
    """Base exception for match-related errors."""

    pass


class MatchNotFoundException(MatchException):
    """Raised when a requested match cannot be found."""

    pass


class InvalidMatchException(MatchException):
    """Raised when a match is malformed (self-pairing, duplicate id, unknown player)."""

    pass


# ========== Player Exceptions ==========


class PlayerException(FastFourException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class DuplicatePlayerException(PlayerException):
    """Raised when two players share an id."""

    pass


# ========== Result Exceptions ==========


class ResultException(FastFourException):
    """Base exception for result recording errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result is invalid (e.g., negative score)."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(FastFourException):
    """Base exception for validation errors."""

    pass


class InvalidTournamentDataException(ValidationException):
    """Raised when tournament data breaks a structural invariant."""

    pass


# ========== File/Resource Exceptions ==========


class ResourceException(FastFourException):
    """Base exception for resource-related errors."""

    pass


class FileLoadException(ResourceException):
    """Raised when a file cannot be loaded."""

    pass


class FileSaveException(ResourceException):
    """Raised when a file cannot be saved."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(FastFourException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
