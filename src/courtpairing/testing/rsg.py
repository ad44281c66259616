"""Random Session Generator (RSG) - synthetic sessions for exercising the engine.

Builds a participant pool, plays a number of rounds through the round
manager with simulated point splits, and checks every round with the
round pairing checker.
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
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from courtpairing.constants import (
    DEFAULT_BONUS_FROM_ROUND,
    DEFAULT_BONUS_POINTS,
    DEFAULT_FORMAT,
    DEFAULT_MAX_REST_STREAK,
    META_BONUS_FROM_ROUND,
    META_BONUS_POINTS,
    SIMULATED_POINTS_PER_MATCH,
)
from courtpairing.controllers import RoundManager
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.formats import PairingFormat
from courtpairing.models import EngineConfig, Gender, ProposedMatch
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger
from courtpairing.validation import create_round_checker

logger = setup_logger(__name__)


@dataclass
class RSGConfig:
    """Configuration for Random Session Generator."""

    num_participants: int
    num_rounds: int
    court_count: int
    pairing_format: str = DEFAULT_FORMAT
    female_ratio: float = 0.5
    seed: Optional[int] = None
    max_rest_streak: int = DEFAULT_MAX_REST_STREAK
    bonus_points: int = DEFAULT_BONUS_POINTS
    bonus_from_round: int = DEFAULT_BONUS_FROM_ROUND
    points_per_match: int = SIMULATED_POINTS_PER_MATCH
    validate: bool = True


class ParticipantFactory:
    """Factory for creating session participants."""

    def __init__(self, config: RSGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_participants(self) -> List[Tuple[ParticipantId, Gender]]:
        """Create participant ids with a gender split following the ratio."""
        fmt = PairingFormat.parse(self.config.pairing_format)
        prefix = "T" if fmt.is_team_format else "P"
        count = self.config.num_participants
        women = round(count * self.config.female_ratio)
        genders = [Gender.FEMALE] * women + [Gender.MALE] * (count - women)
        self.random.shuffle(genders)

        participants = [
            (f"{prefix}-{number:03d}", genders[number - 1])
            for number in range(1, count + 1)
        ]
        logger.info(
            "Created %s participants (%s women)", len(participants), women
        )
        return participants


class ResultSimulator:
    """Simulates point splits for played matches."""

    def __init__(self, config: RSGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate_match(
        self, match: ProposedMatch, round_number: int
    ) -> Tuple[float, float]:
        """Return the points won by each side of a match.

        Sides split the fixed number of points of a match. When the match
        carries bonus metadata and the round qualifies, the winner receives
        the bonus on top.
        """
        first_points = self.random.randint(0, self.config.points_per_match)
        second_points = self.config.points_per_match - first_points

        bonus = match.metadata.get(META_BONUS_POINTS, 0)
        bonus_from = match.metadata.get(META_BONUS_FROM_ROUND)
        if bonus and bonus_from is not None and round_number >= bonus_from:
            if first_points > second_points:
                first_points += bonus
            elif second_points > first_points:
                second_points += bonus
        return float(first_points), float(second_points)


class RandomSessionGenerator:
    """Main session generator orchestrating participants, rounds and results."""

    def __init__(self, config: RSGConfig):
        if config.num_participants < 0 or config.num_rounds < 0:
            raise InvalidConfigurationException(
                "Participant and round counts must be non-negative"
            )
        if not 0.0 <= config.female_ratio <= 1.0:
            raise InvalidConfigurationException(
                f"female_ratio must be within [0, 1], got {config.female_ratio}"
            )
        self.config = config
        self.pairing_format = PairingFormat.parse(config.pairing_format)
        self.participant_factory = ParticipantFactory(config)
        self.result_simulator = ResultSimulator(config)
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def generate_session(self) -> Dict:
        """Generate a complete session with participants and round results."""
        logger.info(
            "Generating %s session: %s participants, %s rounds, %s courts",
            self.pairing_format.display_name,
            self.config.num_participants,
            self.config.num_rounds,
            self.config.court_count,
        )
        manager = RoundManager(
            self.pairing_format,
            self.config.court_count,
            config=EngineConfig(
                max_rest_streak=self.config.max_rest_streak,
                bonus_points=self.config.bonus_points,
                bonus_from_round=self.config.bonus_from_round,
            ),
            num_rounds=self.config.num_rounds,
            rng=self.random,
        )
        for participant_id, gender in self.participant_factory.create_participants():
            manager.add_participant(participant_id, gender=gender, score=0.0)

        rounds = []
        for _ in range(self.config.num_rounds):
            rounds.append(self._simulate_round(manager))

        session = manager.to_dict()
        session["rounds"] = rounds

        if self.config.validate:
            report = create_round_checker().validate_session(session)
            session["report"] = {
                "summary": report.summary,
                "compliance_percentage": report.compliance_percentage,
                "violations": [v.criterion for v in report.violations],
                "warnings": [w.criterion for w in report.quality_warnings],
            }

        logger.info("Session generation complete")
        return session

    def _simulate_round(self, manager: RoundManager) -> Dict:
        """Pair one round, play it out and record it as completed."""
        scores_before = dict(manager.scores)
        proposal = manager.create_next_round()

        for match in proposal.matches:
            first_points, second_points = self.result_simulator.simulate_match(
                match, proposal.round_number
            )
            manager.scores[match.first] = manager.scores.get(match.first, 0.0) + first_points
            manager.scores[match.second] = (
                manager.scores.get(match.second, 0.0) + second_points
            )

        manager.mark_round_completed(proposal.round_number)
        round_dict = manager.get_round(proposal.round_number).to_dict()
        if self.pairing_format.needs_scores:
            round_dict["scores"] = scores_before
        return round_dict
