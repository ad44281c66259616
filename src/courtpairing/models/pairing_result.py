"""RoundProposal data class."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List

from courtpairing.formats import PairingFormat
from courtpairing.models.match import ProposedMatch
from courtpairing.type_hints import ParticipantId


@dataclass
class RoundProposal:
    """Result of a pairing computation for a single round.

    Attributes
    ----------
    pairing_format : PairingFormat
        Format the round was generated for.
    round_number : int
        Round the proposal is meant for.
    matches : list of ProposedMatch
        Court assignments, in strategy order.
    active_pool : list of str
        Participants selected to play.
    unmatched : list of str
        Active participants the strategy could not place (odd pool, gender
        imbalance, court cap). They rest involuntarily.
    resting : list of str
        Eligible participants left out of the active pool.
    must_play_count : int
        Participants whose rest streak reached the threshold.
    capacity_shortfall : int
        Must-play participants forced out because courts ran out.
    """

    pairing_format: PairingFormat
    round_number: int
    matches: List[ProposedMatch] = field(default_factory=list)
    active_pool: List[ParticipantId] = field(default_factory=list)
    unmatched: List[ParticipantId] = field(default_factory=list)
    resting: List[ParticipantId] = field(default_factory=list)
    must_play_count: int = 0
    capacity_shortfall: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.matches

    def sitting_out(self) -> List[ParticipantId]:
        """Everyone without a match this round, selected or not."""
        return list(self.resting) + list(self.unmatched)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize proposal to dictionary."""
        return {
            "format": self.pairing_format.value,
            "round_number": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
            "active_pool": list(self.active_pool),
            "unmatched": list(self.unmatched),
            "resting": list(self.resting),
            "must_play_count": self.must_play_count,
            "capacity_shortfall": self.capacity_shortfall,
        }


#  LocalWords:  RoundProposal
