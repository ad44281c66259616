"""EngineConfig data class."""

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

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from courtpairing.constants import (
    DEFAULT_BONUS_FROM_ROUND,
    DEFAULT_BONUS_POINTS,
    DEFAULT_MAX_REST_STREAK,
    ENV_BONUS_FROM_ROUND,
    ENV_BONUS_POINTS,
    ENV_MAX_REST_STREAK,
)
from courtpairing.exceptions import InvalidConfigurationException


@dataclass
class EngineConfig:
    """Tunable knobs of the pairing engine.

    Attributes
    ----------
    max_rest_streak : int
        Number of consecutive rounds a participant may rest before being
        forced into the active pool.
    bonus_points : int
        Super Mexicano bonus awarded per match, carried as match metadata.
    bonus_from_round : int
        First round in which the Super Mexicano bonus applies.
    """

    max_rest_streak: int = DEFAULT_MAX_REST_STREAK
    bonus_points: int = DEFAULT_BONUS_POINTS
    bonus_from_round: int = DEFAULT_BONUS_FROM_ROUND

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check the knobs are usable.

        Raises:
            InvalidConfigurationException: If a knob is out of range
        """
        if not isinstance(self.max_rest_streak, int) or self.max_rest_streak < 0:
            raise InvalidConfigurationException(
                f"max_rest_streak must be a non-negative integer, got {self.max_rest_streak!r}"
            )
        if not isinstance(self.bonus_points, int) or self.bonus_points < 0:
            raise InvalidConfigurationException(
                f"bonus_points must be a non-negative integer, got {self.bonus_points!r}"
            )
        if not isinstance(self.bonus_from_round, int) or self.bonus_from_round < 1:
            raise InvalidConfigurationException(
                f"bonus_from_round must be a positive integer, got {self.bonus_from_round!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "max_rest_streak": self.max_rest_streak,
            "bonus_points": self.bonus_points,
            "bonus_from_round": self.bonus_from_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            max_rest_streak=data.get("max_rest_streak", DEFAULT_MAX_REST_STREAK),
            bonus_points=data.get("bonus_points", DEFAULT_BONUS_POINTS),
            bonus_from_round=data.get("bonus_from_round", DEFAULT_BONUS_FROM_ROUND),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build the deployment-wide default from environment variables."""
        environ = os.environ if environ is None else environ
        return cls(
            max_rest_streak=_int_from_env(
                environ, ENV_MAX_REST_STREAK, DEFAULT_MAX_REST_STREAK
            ),
            bonus_points=_int_from_env(environ, ENV_BONUS_POINTS, DEFAULT_BONUS_POINTS),
            bonus_from_round=_int_from_env(
                environ, ENV_BONUS_FROM_ROUND, DEFAULT_BONUS_FROM_ROUND
            ),
        )


def _int_from_env(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidConfigurationException(
            f"{key} must be an integer, got {raw!r}"
        ) from e
