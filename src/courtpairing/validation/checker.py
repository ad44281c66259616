"""Round Pairing Checker (RPC) - validation of generated rounds.

Checks proposed or stored rounds against the rotation guarantees of the
engine: nobody plays twice, mixed formats stay mixed, ranked formats pair
neighbours, and nobody rests past the limit while a seat was free.
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

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from courtpairing.constants import DEFAULT_MAX_REST_STREAK, SLOTS_PER_MATCH
from courtpairing.exceptions import SessionFormatException
from courtpairing.formats import PairingFormat
from courtpairing.models.gender import Gender, parse_gender_map
from courtpairing.models.match import ProposedMatch
from courtpairing.models.round_data import RoundData
from courtpairing.pairing.americano import pair_adjacent
from courtpairing.pairing.mexicano import sort_by_score
from courtpairing.pairing.rest import compute_rest_streaks
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of criterion validation."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of criterion violations."""

    ABSOLUTE = "ABSOLUTE"  # R1-R6: Must not violate
    QUALITY = "QUALITY"  # Q1: Legitimate but worth reporting


@dataclass
class CriterionResult:
    """Result of validating a single criterion."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        """Extract criterion ID from criterion string."""
        return self.criterion.split(":")[0].strip()

    @property
    def message(self) -> str:
        return self.description


@dataclass
class ValidationReport:
    """Complete validation report for one round or a whole session."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)
    criteria_results: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    @property
    def is_compliant(self) -> bool:
        return not self.violations


def _ok(criterion: str) -> CriterionResult:
    return CriterionResult(criterion, CriterionStatus.COMPLIANT)


def _not_applicable(criterion: str) -> CriterionResult:
    return CriterionResult(criterion, CriterionStatus.NOT_APPLICABLE)


def _violation(criterion: str, description: str, **details) -> CriterionResult:
    return CriterionResult(
        criterion,
        CriterionStatus.VIOLATION,
        ViolationType.ABSOLUTE,
        description,
        details,
    )


class RoundChecker:
    """Validates rounds produced by the pairing engine."""

    def check_r1_no_double_booking(
        self, matches: Sequence[ProposedMatch]
    ) -> CriterionResult:
        """R1: Nobody appears in two matches or on both sides of one."""
        criterion = "R1: No double booking"
        seen: Set[ParticipantId] = set()
        repeated: List[ParticipantId] = []
        for match in matches:
            if match.first == match.second:
                return _violation(
                    criterion,
                    f"{match.first} is paired with itself",
                    participant=match.first,
                )
            for pid in match.participant_ids:
                if pid in seen:
                    repeated.append(pid)
                seen.add(pid)
        if repeated:
            return _violation(
                criterion,
                f"Participants in more than one match: {', '.join(map(str, repeated))}",
                participants=repeated,
            )
        return _ok(criterion)

    def check_r2_known_participants(
        self, matches: Sequence[ProposedMatch], eligible: Set[ParticipantId]
    ) -> CriterionResult:
        """R2: Every matched participant belongs to the pool."""
        criterion = "R2: Known participants"
        unknown = [
            pid
            for match in matches
            for pid in match.participant_ids
            if pid not in eligible
        ]
        if unknown:
            return _violation(
                criterion,
                f"Participants outside the pool: {', '.join(map(str, unknown))}",
                participants=unknown,
            )
        return _ok(criterion)

    def check_r3_mixed_gender(
        self,
        matches: Sequence[ProposedMatch],
        pairing_format: PairingFormat,
        genders: Optional[Mapping[ParticipantId, Union[Gender, str]]],
    ) -> CriterionResult:
        """R3: Mixed formats only pair different gender categories."""
        criterion = "R3: Mixed gender"
        if not pairing_format.needs_genders:
            return _not_applicable(criterion)
        if genders is None:
            return _violation(criterion, "No gender map to check against")
        try:
            parsed = parse_gender_map(genders)
        except ValueError as e:
            return _violation(criterion, str(e))
        missing = sorted(
            {pid for match in matches for pid in match.participant_ids}
            - set(parsed)
        )
        if missing:
            return _violation(
                criterion,
                f"No gender recorded for: {', '.join(map(str, missing))}",
                participants=missing,
            )
        same = [
            match.participant_ids
            for match in matches
            if parsed[match.first] is parsed[match.second]
        ]
        if same:
            return _violation(
                criterion,
                f"{len(same)} matches pair the same gender category",
                pairs=same,
            )
        return _ok(criterion)

    def check_r4_rank_adjacency(
        self,
        matches: Sequence[ProposedMatch],
        pairing_format: PairingFormat,
        scores: Optional[Mapping[ParticipantId, float]],
        active_pool: Optional[Sequence[ParticipantId]] = None,
    ) -> CriterionResult:
        """R4: Ranked formats pair rank 1 with 2, rank 3 with 4, and so on.

        With the active pool in selection order the expected pairs are
        rebuilt exactly. Without it, the matched scores read in match order
        must never increase, which tolerates reordering among equal scores.
        """
        criterion = "R4: Rank adjacency"
        if pairing_format not in (PairingFormat.MEXICANO, PairingFormat.TEAM_MEXICANO):
            return _not_applicable(criterion)
        if scores is None:
            return _not_applicable(criterion)

        if active_pool is not None:
            expected = {
                m.pair_key for m in pair_adjacent(sort_by_score(active_pool, scores))
            }
            actual = {m.pair_key for m in matches}
            if expected != actual:
                return _violation(
                    criterion,
                    "Matches differ from neighbouring ranks",
                    expected=sorted(sorted(pair) for pair in expected),
                    actual=sorted(sorted(pair) for pair in actual),
                )
            return _ok(criterion)

        sequence = [scores.get(pid, 0) for m in matches for pid in m.participant_ids]
        for position in range(1, len(sequence)):
            if sequence[position] > sequence[position - 1]:
                return _violation(
                    criterion,
                    f"Rank order broken at seat {position + 1}",
                    scores=sequence,
                )
        return _ok(criterion)

    def check_r5_rest_limit(
        self,
        active_pool: Set[ParticipantId],
        participant_ids: Sequence[ParticipantId],
        history: Sequence[RoundData],
        court_count: int,
        max_rest_streak: int,
    ) -> CriterionResult:
        """R5: Everyone at the rest limit is selected unless seats ran out."""
        criterion = "R5: Rest limit"
        slots = court_count * SLOTS_PER_MATCH
        streaks = compute_rest_streaks(participant_ids, history)
        must_play = [pid for pid in participant_ids if streaks[pid] >= max_rest_streak]

        if len(must_play) > slots:
            intruders = [pid for pid in active_pool if pid not in must_play]
            if intruders:
                return _violation(
                    criterion,
                    "Seats given away while rest-limited participants sat out",
                    participants=intruders,
                )
            return _ok(criterion)

        left_out = [pid for pid in must_play if pid not in active_pool]
        if left_out:
            return _violation(
                criterion,
                f"Rested past the limit with seats free: {', '.join(map(str, left_out))}",
                participants=left_out,
            )
        return _ok(criterion)

    def check_r6_court_capacity(
        self, matches: Sequence[ProposedMatch], court_count: int
    ) -> CriterionResult:
        """R6: No more matches than courts."""
        criterion = "R6: Court capacity"
        if len(matches) > court_count:
            return _violation(
                criterion,
                f"{len(matches)} matches for {court_count} courts",
                matches=len(matches),
                courts=court_count,
            )
        return _ok(criterion)

    def check_q1_involuntary_rest(
        self, matches: Sequence[ProposedMatch], active_pool: Set[ParticipantId]
    ) -> CriterionResult:
        """Q1: Selected participants the format could not place."""
        criterion = "Q1: Involuntary rest"
        matched = {pid for m in matches for pid in m.participant_ids}
        unplaced = sorted(active_pool - matched)
        if unplaced:
            return CriterionResult(
                criterion,
                CriterionStatus.VIOLATION,
                ViolationType.QUALITY,
                f"{len(unplaced)} selected participants rest involuntarily",
                {"participants": unplaced},
            )
        return _ok(criterion)

    def check_round(
        self,
        matches: Sequence[ProposedMatch],
        pairing_format: Union[PairingFormat, str],
        participant_ids: Sequence[ParticipantId],
        history: Sequence[RoundData],
        court_count: int,
        active_pool: Optional[Sequence[ParticipantId]] = None,
        genders: Optional[Mapping[ParticipantId, Union[Gender, str]]] = None,
        scores: Optional[Mapping[ParticipantId, float]] = None,
        max_rest_streak: int = DEFAULT_MAX_REST_STREAK,
        known_ids: Optional[Set[ParticipantId]] = None,
        exact_ranking: bool = True,
    ) -> List[CriterionResult]:
        """Run every criterion against one round.

        When ``active_pool`` is omitted, the matched participants stand in for it.
        ``exact_ranking`` rebuilds ranked pairs from the pool, which needs the
        pool in selection order.
        """
        fmt = PairingFormat.parse(pairing_format)
        matched = {pid for m in matches for pid in m.participant_ids}
        pool_set = set(active_pool) if active_pool is not None else matched
        eligible = known_ids if known_ids is not None else set(participant_ids)

        return [
            self.check_r1_no_double_booking(matches),
            self.check_r2_known_participants(matches, eligible),
            self.check_r3_mixed_gender(matches, fmt, genders),
            self.check_r4_rank_adjacency(
                matches, fmt, scores, active_pool if exact_ranking else None
            ),
            self.check_r5_rest_limit(
                pool_set, participant_ids, history, court_count, max_rest_streak
            ),
            self.check_r6_court_capacity(matches, court_count),
            self.check_q1_involuntary_rest(matches, pool_set),
        ]

    def validate_round(self, *args, **kwargs) -> ValidationReport:
        """Validate one round; arguments as for :meth:`check_round`."""
        return build_report(self.check_round(*args, **kwargs))

    def validate_session(self, session_data: Dict[str, Any]) -> ValidationReport:
        """Validate every stored round of a serialized session.

        ``session_data`` follows ``RoundManager.to_dict``. A round may carry
        the ``scores`` it was generated with; the final score map is not used
        for earlier rounds.

        Raises:
            SessionFormatException: If required keys are missing
        """
        try:
            fmt = PairingFormat.parse(session_data["format"])
            court_count = int(session_data["court_count"])
            participants = list(session_data["participants"])
            raw_rounds = list(session_data["rounds"])
        except (KeyError, TypeError, ValueError) as e:
            raise SessionFormatException(f"Malformed session data: {e}") from e

        config = session_data.get("config", {})
        max_rest_streak = config.get("max_rest_streak", DEFAULT_MAX_REST_STREAK)
        genders = session_data.get("genders")
        if genders is not None and not isinstance(genders, Mapping):
            raise SessionFormatException("Malformed session data: genders must map ids")
        known = set(participants) | set(session_data.get("withdrawn", []))

        results: List[CriterionResult] = []
        history: List[RoundData] = []
        for raw in raw_rounds:
            round_data = RoundData.from_dict(raw)
            round_results = self.check_round(
                round_data.matches,
                fmt,
                _eligible_for_round(raw, round_data, participants),
                history,
                court_count,
                active_pool=sorted(round_data.active_ids),
                genders=genders,
                scores=raw.get("scores"),
                max_rest_streak=max_rest_streak,
                known_ids=known,
                exact_ranking=False,
            )
            for result in round_results:
                result.criterion = f"Round {round_data.round_number} {result.criterion}"
            results.extend(round_results)
            if round_data.is_completed:
                history.append(round_data)

        report = build_report(results)
        logger.info(
            "Validated %s rounds: %s", len(raw_rounds), report.summary
        )
        return report


def _eligible_for_round(
    raw: Mapping[str, Any],
    round_data: RoundData,
    participants: Sequence[ParticipantId],
) -> List[ParticipantId]:
    """Participants who were eligible when a stored round was generated.

    A stored round records everyone it seated or rested, so participants
    added later or withdrawn since are judged only on rounds they were part
    of. Rounds without a ``resting`` entry fall back to the final list.
    """
    if "resting" not in raw:
        return list(participants)
    eligible = round_data.active_ids | set(round_data.resting)
    ordered = [pid for pid in participants if pid in eligible]
    return ordered + sorted(eligible - set(ordered))


def build_report(results: Sequence[CriterionResult]) -> ValidationReport:
    """Fold criterion results into a report."""
    applicable = [r for r in results if r.status != CriterionStatus.NOT_APPLICABLE]
    violations = [
        r
        for r in applicable
        if r.status == CriterionStatus.VIOLATION
        and r.violation_type == ViolationType.ABSOLUTE
    ]
    warnings = [
        r
        for r in applicable
        if r.status == CriterionStatus.VIOLATION
        and r.violation_type == ViolationType.QUALITY
    ]
    compliant = len(applicable) - len(violations) - len(warnings)
    status = CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
    summary = (
        f"{len(violations)} violations, {len(warnings)} warnings "
        f"across {len(applicable)} checks"
    )
    return ValidationReport(
        total_criteria=len(applicable),
        compliant_count=compliant,
        violations=violations,
        overall_status=status,
        summary=summary,
        quality_warnings=warnings,
        criteria_results=list(results),
    )


def load_session(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a session file written by the generator or ``RoundManager.to_dict``.

    Raises:
        SessionFormatException: If the file is not readable JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SessionFormatException(f"Cannot read session file {path}: {e}") from e


def create_round_checker() -> RoundChecker:
    """Factory function to create a round checker."""
    return RoundChecker()
