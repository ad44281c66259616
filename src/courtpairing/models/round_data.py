"""Data model for a generated round."""

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
from typing import Any, Dict, Iterable, List, Sequence, Set

from courtpairing.models.match import ProposedMatch
from courtpairing.type_hints import ParticipantId


@dataclass
class RoundData:
    """Container for all data related to a single round.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    matches : list of ProposedMatch
        Court assignments of the round.
    resting : list of str
        Eligible participants left out of the active pool.
    unmatched : list of str
        Active participants the format could not place on a court.
    is_completed : bool
        Indicates whether the round has been played out.
    """

    round_number: int
    matches: List[ProposedMatch] = field(default_factory=list)
    resting: List[ParticipantId] = field(default_factory=list)
    unmatched: List[ParticipantId] = field(default_factory=list)
    is_completed: bool = False

    @property
    def active_ids(self) -> Set[ParticipantId]:
        """Participants selected to play, placed or not."""
        return self.played_ids | set(self.unmatched)

    @property
    def played_ids(self) -> Set[ParticipantId]:
        """Every participant that appears in one of the round's matches."""
        return {pid for match in self.matches for pid in match.participant_ids}

    @classmethod
    def from_pairings(
        cls,
        round_number: int,
        pairings: Iterable[Sequence[ParticipantId]],
        is_completed: bool = True,
    ) -> "RoundData":
        """Build a round from raw ``(a, b)`` id pairs."""
        matches = [ProposedMatch(first=a, second=b) for a, b in pairings]
        return cls(round_number=round_number, matches=matches, is_completed=is_completed)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "round_number": self.round_number,
            "matches": [m.to_dict() for m in self.matches],
            "resting": list(self.resting),
            "unmatched": list(self.unmatched),
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundData":
        """Deserialize round data from dictionary."""
        return cls(
            round_number=data["round_number"],
            matches=[ProposedMatch.from_dict(m) for m in data.get("matches", [])],
            resting=list(data.get("resting", [])),
            unmatched=list(data.get("unmatched", [])),
            is_completed=data.get("is_completed", False),
        )
