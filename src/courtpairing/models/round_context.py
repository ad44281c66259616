"""Per-call input of the pairing engine."""

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

import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

from courtpairing.exceptions import MissingContextException
from courtpairing.formats import PairingFormat
from courtpairing.models.gender import Gender, parse_gender_map
from courtpairing.models.round_data import RoundData
from courtpairing.type_hints import GenderMap, ParticipantId, ScoreMap


@dataclass
class RoundContext:
    """Snapshot of everything a strategy may consume for one round.

    The context copies the id list and the side maps on construction, so the
    caller may keep mutating its own structures while a round is generated.

    Attributes
    ----------
    participant_ids : list of str
        Eligible participants in caller order. This order is the tie-break
        for equal rest streaks and equal scores. Repeated ids are collapsed
        to their first occurrence.
    history : list of RoundData
        Completed rounds, oldest first.
    genders : dict or None
        Participant id -> gender category, for mixed formats.
    scores : dict or None
        Participant id -> cumulative score, for the Mexicano family.
    rng : random.Random or None
        Random source for permutation formats. A fresh unseeded generator is
        used when omitted.
    round_number : int or None
        Number of the round being generated, defaults to ``len(history) + 1``.
    """

    participant_ids: List[ParticipantId]
    history: List[RoundData] = field(default_factory=list)
    genders: Optional[Dict[ParticipantId, Union[Gender, str]]] = None
    scores: Optional[ScoreMap] = None
    rng: Optional[random.Random] = None
    round_number: Optional[int] = None

    def __post_init__(self):
        self.participant_ids = list(dict.fromkeys(self.participant_ids))
        self.history = list(self.history)
        if self.genders is not None:
            self.genders = dict(self.genders)
        if self.scores is not None:
            self.scores = dict(self.scores)
        if self.round_number is None:
            self.round_number = len(self.history) + 1

    @classmethod
    def for_format(
        cls,
        pairing_format: Union[PairingFormat, str],
        participant_ids: Sequence[ParticipantId],
        history: Sequence[RoundData] = (),
        genders: Optional[Mapping[ParticipantId, Union[Gender, str]]] = None,
        scores: Optional[Mapping[ParticipantId, float]] = None,
        rng: Optional[random.Random] = None,
        round_number: Optional[int] = None,
    ) -> "RoundContext":
        """Build a context and check it carries what the format needs.

        Raises:
            UnsupportedFormatException: If the format is unknown
            MissingContextException: If a required side map is absent or incomplete
        """
        context = cls(
            participant_ids=list(participant_ids),
            history=list(history),
            genders=dict(genders) if genders is not None else None,
            scores=dict(scores) if scores is not None else None,
            rng=rng,
            round_number=round_number,
        )
        context.require(pairing_format)
        return context

    def require(self, pairing_format: Union[PairingFormat, str]) -> PairingFormat:
        """Validate the context against a format.

        Gender values are normalised to ``Gender`` members in place.

        Returns:
            The resolved ``PairingFormat``

        Raises:
            UnsupportedFormatException: If the format is unknown
            MissingContextException: If a required side map is absent or incomplete
        """
        fmt = PairingFormat.parse(pairing_format)
        if fmt.needs_scores and self.scores is None:
            raise MissingContextException(fmt.value, "scores")
        if fmt.needs_genders:
            self.genders = self._checked_genders(fmt)
        return fmt

    def _checked_genders(self, fmt: PairingFormat) -> GenderMap:
        if self.genders is None:
            raise MissingContextException(fmt.value, "genders")
        missing = [pid for pid in self.participant_ids if pid not in self.genders]
        if missing:
            raise MissingContextException(
                fmt.value, "genders", f"no gender for {', '.join(map(str, missing))}"
            )
        try:
            return parse_gender_map(self.genders)
        except ValueError as e:
            raise MissingContextException(fmt.value, "genders", str(e)) from e

    def random_source(self) -> random.Random:
        return self.rng if self.rng is not None else random.Random()
