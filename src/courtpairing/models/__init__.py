"""Data models for the pairing engine."""

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

from courtpairing.models.engine_config import EngineConfig
from courtpairing.models.gender import Gender, parse_gender_map
from courtpairing.models.match import ProposedMatch
from courtpairing.models.pairing_result import RoundProposal
from courtpairing.models.round_context import RoundContext
from courtpairing.models.round_data import RoundData

__all__ = [
    "EngineConfig",
    "Gender",
    "ProposedMatch",
    "RoundContext",
    "RoundData",
    "RoundProposal",
    "parse_gender_map",
]
