"""Gender categories used by mixed formats."""

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
from typing import Dict, Mapping, Union

from courtpairing.constants import GENDER_FEMALE, GENDER_MALE

_ALIASES = {
    "m": GENDER_MALE,
    "male": GENDER_MALE,
    "man": GENDER_MALE,
    "men": GENDER_MALE,
    "f": GENDER_FEMALE,
    "female": GENDER_FEMALE,
    "woman": GENDER_FEMALE,
    "women": GENDER_FEMALE,
    "w": GENDER_FEMALE,
}


class Gender(Enum):
    """Binary gender category of a participant."""

    MALE = GENDER_MALE
    FEMALE = GENDER_FEMALE

    @classmethod
    def parse(cls, value: Union["Gender", str]) -> "Gender":
        """Resolve a gender from an enum member or a loose string.

        Raises:
            ValueError: If the value is not a recognised category
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            code = _ALIASES.get(value.strip().lower())
            if code is not None:
                return cls(code)
        raise ValueError(f"Unknown gender category: {value!r}")

    @property
    def opposite(self) -> "Gender":
        return Gender.FEMALE if self is Gender.MALE else Gender.MALE


def parse_gender_map(
    genders: Mapping[str, Union[Gender, str]]
) -> Dict[str, Gender]:
    """Normalise a participant -> gender mapping to ``Gender`` members."""
    return {pid: Gender.parse(value) for pid, value in genders.items()}
