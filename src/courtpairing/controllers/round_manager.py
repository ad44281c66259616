"""Round management for a social session.

This module drives the pairing engine across a session: it keeps the
participant list, side maps and generated rounds in memory and feeds the
completed rounds back to the engine as history.
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

import random
from typing import Any, Dict, List, Mapping, Optional, Union

from courtpairing.exceptions import (
    DuplicateParticipantException,
    InvalidConfigurationException,
    ParticipantNotFoundException,
    RoundNotFoundException,
    TournamentStateException,
)
from courtpairing.formats import PairingFormat
from courtpairing.models import (
    EngineConfig,
    Gender,
    RoundContext,
    RoundData,
    RoundProposal,
)
from courtpairing.pairing import compute_rest_streaks, propose_round
from courtpairing.type_hints import ParticipantId, RestStreak, ScoreMap
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for a session.

    This class is responsible for:
    - Tracking who is eligible to play
    - Generating the next round through the format dispatcher
    - Keeping round history and round state transitions
    """

    def __init__(
        self,
        pairing_format: Union[PairingFormat, str],
        court_count: int,
        config: Optional[EngineConfig] = None,
        num_rounds: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the round manager.

        Args:
            pairing_format: Format used for every round of the session
            court_count: Courts available per round
            config: Engine knobs, defaults when omitted
            num_rounds: Optional limit on the number of rounds
            rng: Random source shared by the session's permutation rounds
        """
        if court_count < 0:
            raise InvalidConfigurationException(
                f"court_count must be non-negative, got {court_count}"
            )
        self.pairing_format = PairingFormat.parse(pairing_format)
        self.court_count = court_count
        self.config = config or EngineConfig()
        self.num_rounds = num_rounds
        self.rng = rng
        self.participants: List[ParticipantId] = []
        self.withdrawn: List[ParticipantId] = []
        self.genders: Dict[ParticipantId, Gender] = {}
        self.scores: ScoreMap = {}
        self.rounds: List[RoundData] = []

    @property
    def current_round_number(self) -> int:
        """Get the current round number (1-indexed).

        Returns:
            The current round number, or 0 if no rounds have been created.
        """
        return len(self.rounds)

    @property
    def completed_rounds_count(self) -> int:
        return sum(1 for round_data in self.rounds if round_data.is_completed)

    @property
    def history(self) -> List[RoundData]:
        """Completed rounds, oldest first."""
        return [round_data for round_data in self.rounds if round_data.is_completed]

    def add_participant(
        self,
        participant_id: ParticipantId,
        gender: Optional[Union[Gender, str]] = None,
        score: Optional[float] = None,
    ) -> None:
        """Register a participant; a withdrawn one is re-admitted.

        Raises:
            DuplicateParticipantException: If the id is already active
        """
        if participant_id in self.participants:
            raise DuplicateParticipantException(
                f"Participant {participant_id} is already registered"
            )
        if participant_id in self.withdrawn:
            self.withdrawn.remove(participant_id)
        self.participants.append(participant_id)
        if gender is not None:
            self.genders[participant_id] = Gender.parse(gender)
        if score is not None:
            self.scores[participant_id] = score
        logger.debug(f"Added participant {participant_id}")

    def withdraw_participant(self, participant_id: ParticipantId) -> None:
        """Stop scheduling a participant; their past rounds are kept.

        Raises:
            ParticipantNotFoundException: If the id is not an active participant
        """
        if participant_id not in self.participants:
            raise ParticipantNotFoundException(
                f"Participant {participant_id} is not registered"
            )
        self.participants.remove(participant_id)
        self.withdrawn.append(participant_id)
        logger.info(f"Withdrew participant {participant_id}")

    def set_scores(self, scores: Mapping[ParticipantId, float]) -> None:
        """Replace the cumulative score map used by score-ranked formats."""
        self.scores = dict(scores)

    def get_round(self, round_number: int) -> Optional[RoundData]:
        """Get data for a specific round.

        Args:
            round_number: The round number (1-indexed)

        Returns:
            RoundData for the specified round, or None if invalid round number
        """
        if 1 <= round_number <= len(self.rounds):
            return self.rounds[round_number - 1]
        return None

    def build_context(self) -> RoundContext:
        """Snapshot the session state for the next round."""
        return RoundContext(
            participant_ids=list(self.participants),
            history=self.history,
            genders=dict(self.genders) if self.pairing_format.needs_genders else None,
            scores=dict(self.scores) if self.pairing_format.needs_scores else None,
            rng=self.rng,
            round_number=len(self.rounds) + 1,
        )

    def create_next_round(
        self, scores: Optional[Mapping[ParticipantId, float]] = None
    ) -> RoundProposal:
        """Generate and store the next round.

        Args:
            scores: Optional fresh score map, replacing the stored one

        Returns:
            The proposal produced by the engine

        Raises:
            TournamentStateException: If the last round is still open or the
                round limit was reached
            MissingContextException: If a mixed format lacks genders
        """
        if self.rounds and not self.rounds[-1].is_completed:
            raise TournamentStateException(
                f"Round {self.rounds[-1].round_number} must be completed first"
            )
        if self.num_rounds is not None and len(self.rounds) >= self.num_rounds:
            raise TournamentStateException(
                f"Cannot create more rounds: already at {self.num_rounds} rounds"
            )
        if scores is not None:
            self.set_scores(scores)

        proposal = propose_round(
            self.pairing_format, self.build_context(), self.court_count, self.config
        )
        round_data = RoundData(
            round_number=proposal.round_number,
            matches=list(proposal.matches),
            resting=list(proposal.resting),
            unmatched=list(proposal.unmatched),
        )
        self.rounds.append(round_data)

        logger.info(
            f"Created round {round_data.round_number}: {len(round_data.matches)} matches, "
            f"{len(round_data.resting) + len(round_data.unmatched)} resting"
        )
        if proposal.capacity_shortfall:
            logger.warning(
                f"Round {round_data.round_number}: {proposal.capacity_shortfall} "
                "participants exceeded the rest limit for lack of courts"
            )
        return proposal

    def mark_round_completed(self, round_number: int) -> None:
        """Mark a round as completed so it counts as history.

        Raises:
            RoundNotFoundException: If the round does not exist
        """
        round_data = self.get_round(round_number)
        if round_data is None:
            raise RoundNotFoundException(f"Round {round_number} does not exist")
        round_data.is_completed = True
        logger.info(f"Round {round_number} marked as completed")

    def undo_last_round(self) -> RoundData:
        """Remove the last round if it hasn't been completed.

        Returns:
            The removed round

        Raises:
            TournamentStateException: If there is no round or it was completed
        """
        if not self.rounds:
            raise TournamentStateException("Cannot undo: no rounds exist")

        last_round = self.rounds[-1]
        if last_round.is_completed:
            raise TournamentStateException(
                f"Cannot undo completed round {last_round.round_number}"
            )

        self.rounds.pop()
        logger.info(f"Undid round {last_round.round_number}")
        return last_round

    def rest_streaks(self) -> RestStreak:
        """Current rest streak of every active participant."""
        return compute_rest_streaks(self.participants, self.history)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize session state to dictionary."""
        return {
            "format": self.pairing_format.value,
            "court_count": self.court_count,
            "num_rounds": self.num_rounds,
            "config": self.config.to_dict(),
            "participants": list(self.participants),
            "withdrawn": list(self.withdrawn),
            "genders": {pid: g.value for pid, g in self.genders.items()},
            "scores": dict(self.scores),
            "rounds": [r.to_dict() for r in self.rounds],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RoundManager":
        """Deserialize session state from dictionary."""
        manager = cls(
            pairing_format=data["format"],
            court_count=data["court_count"],
            config=EngineConfig.from_dict(data.get("config", {})),
            num_rounds=data.get("num_rounds"),
        )
        manager.participants = list(data.get("participants", []))
        manager.withdrawn = list(data.get("withdrawn", []))
        manager.genders = {
            pid: Gender.parse(value) for pid, value in data.get("genders", {}).items()
        }
        manager.scores = dict(data.get("scores", {}))
        manager.rounds = [RoundData.from_dict(r) for r in data.get("rounds", [])]
        return manager
