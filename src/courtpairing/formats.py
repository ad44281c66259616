"""Pairing formats and the side data each of them consumes."""

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

from enum import Enum
from typing import Union

from courtpairing.constants import (
    FORMAT_AMERICANO,
    FORMAT_MEXICANO,
    FORMAT_MIXED_AMERICANO,
    FORMAT_MIXICANO,
    FORMAT_NAMES,
    FORMAT_SUPER_MEXICANO,
    FORMAT_TEAM_AMERICANO,
    FORMAT_TEAM_MEXICANO,
)
from courtpairing.exceptions import UnsupportedFormatException


class PairingFormat(Enum):
    """The seven rotation formats understood by the dispatcher."""

    AMERICANO = FORMAT_AMERICANO
    MIXED_AMERICANO = FORMAT_MIXED_AMERICANO
    TEAM_AMERICANO = FORMAT_TEAM_AMERICANO
    MEXICANO = FORMAT_MEXICANO
    MIXICANO = FORMAT_MIXICANO
    TEAM_MEXICANO = FORMAT_TEAM_MEXICANO
    SUPER_MEXICANO = FORMAT_SUPER_MEXICANO

    @classmethod
    def parse(cls, value: Union["PairingFormat", str]) -> "PairingFormat":
        """Resolve a format from an enum member or identifier string.

        Identifiers are matched case-insensitively, and hyphens or spaces are
        accepted in place of underscores ("Mixed Americano", "team-mexicano").

        Raises:
            UnsupportedFormatException: If the value names no known format
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            for member in cls:
                if member.value == key:
                    return member
        raise UnsupportedFormatException(value)

    @property
    def display_name(self) -> str:
        return FORMAT_NAMES[self.value]

    @property
    def needs_genders(self) -> bool:
        """Formats that only ever pair opposite gender categories."""
        return self in _GENDERED

    @property
    def needs_scores(self) -> bool:
        """Formats seeded by cumulative score (the Mexicano family)."""
        return self in _SCORED

    @property
    def is_team_format(self) -> bool:
        """Formats whose participant ids are team ids."""
        return self in (PairingFormat.TEAM_AMERICANO, PairingFormat.TEAM_MEXICANO)

    @property
    def is_random(self) -> bool:
        """Formats that draw on the random source."""
        return self in (PairingFormat.AMERICANO, PairingFormat.TEAM_AMERICANO)


_GENDERED = frozenset(
    {
        PairingFormat.MIXED_AMERICANO,
        PairingFormat.MIXICANO,
        PairingFormat.SUPER_MEXICANO,
    }
)

_SCORED = frozenset(
    {
        PairingFormat.MEXICANO,
        PairingFormat.MIXICANO,
        PairingFormat.TEAM_MEXICANO,
        PairingFormat.SUPER_MEXICANO,
    }
)


__all__ = ["PairingFormat"]
