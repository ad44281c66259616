"""ProposedMatch data class."""

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
from typing import Any, Dict, FrozenSet

from courtpairing.type_hints import PairingIDs, ParticipantId


@dataclass
class ProposedMatch:
    """A court assignment for the round being generated.

    The two sides are unordered; ``first`` is the higher seeded side where the
    format ranks participants and otherwise simply the side drawn first.
    Court index and round number are assigned by whoever stores the round.

    Attributes
    ----------
    first : str
        Participant id (player or team) of one side.
    second : str
        Participant id of the other side.
    metadata : dict
        Optional format parameters. Only Super Mexicano fills it, with
        ``bonus_points`` and ``bonus_from_round``.
    """

    first: ParticipantId
    second: ParticipantId
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def participant_ids(self) -> PairingIDs:
        return (self.first, self.second)

    @property
    def pair_key(self) -> FrozenSet[ParticipantId]:
        """Order-insensitive identity of the pairing."""
        return frozenset(self.participant_ids)

    def involves(self, participant_id: ParticipantId) -> bool:
        return participant_id in (self.first, self.second)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        data: Dict[str, Any] = {"participants": [self.first, self.second]}
        if self.metadata:
            data["metadata"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProposedMatch":
        """Deserialize match from dictionary."""
        first, second = data["participants"]
        return cls(first=first, second=second, metadata=dict(data.get("metadata", {})))
