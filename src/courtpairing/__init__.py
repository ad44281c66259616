"""Court Pairing - round pairing engine for social racket-sport sessions.

Assigns players or teams to courts round by round for the Americano and
Mexicano family of formats, while keeping anyone from resting more than a
configured number of rounds in a row when courts allow.
"""

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

from courtpairing.exceptions import (
    CourtPairingException,
    MissingContextException,
    UnsupportedFormatException,
)
from courtpairing.formats import PairingFormat
from courtpairing.models import (
    EngineConfig,
    Gender,
    ProposedMatch,
    RoundContext,
    RoundData,
    RoundProposal,
)
from courtpairing.pairing import (
    compute_rest_streaks,
    generate_round,
    propose_round,
    select_active,
    select_active_pool,
)

__version__ = "0.1.0"

__all__ = [
    "CourtPairingException",
    "EngineConfig",
    "Gender",
    "MissingContextException",
    "PairingFormat",
    "ProposedMatch",
    "RoundContext",
    "RoundData",
    "RoundProposal",
    "UnsupportedFormatException",
    "compute_rest_streaks",
    "generate_round",
    "propose_round",
    "select_active",
    "select_active_pool",
]
