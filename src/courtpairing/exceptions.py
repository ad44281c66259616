"""Exceptions for use in Court Pairing"""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
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


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the package inherit from this class.
    This enables catching all package-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(CourtPairingException):
    """Base exception for pairing-related errors."""

    pass


class UnsupportedFormatException(PairingException):
    """Raised when the dispatcher receives an unrecognised format identifier."""

    def __init__(self, format_id):
        self.format_id = format_id
        super().__init__(f"Unsupported pairing format: {format_id!r}")


class MissingContextException(PairingException):
    """Raised when side data a format requires was not supplied.

    Covers an entirely absent gender or score map as well as a gender map
    that does not describe every participant a mixed format consumes.
    """

    def __init__(self, format_id, field_name: str, detail: str = ""):
        self.format_id = format_id
        self.field_name = field_name
        message = f"Format {format_id!r} requires '{field_name}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ========== Tournament Exceptions ==========


class TournamentException(CourtPairingException):
    """Base exception for tournament-related errors."""

    pass


class TournamentStateException(TournamentException):
    """Raised when tournament is in an invalid state for the requested operation."""

    pass


class RoundNotFoundException(TournamentException):
    """Raised when a requested round does not exist."""

    pass


class DuplicateParticipantException(TournamentException):
    """Raised when attempting to add a participant that already exists."""

    pass


class ParticipantNotFoundException(TournamentException):
    """Raised when a requested participant cannot be found."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Base exception for validation errors."""

    pass


class SessionFormatException(ValidationException):
    """Raised when a session file cannot be interpreted."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
