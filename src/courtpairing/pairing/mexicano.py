"""Mexicano family: pairings seeded by cumulative score."""

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

from typing import List, Mapping, Optional, Sequence

from courtpairing.constants import (
    DEFAULT_BONUS_FROM_ROUND,
    DEFAULT_BONUS_POINTS,
    META_BONUS_FROM_ROUND,
    META_BONUS_POINTS,
)
from courtpairing.models.gender import parse_gender_map
from courtpairing.models.match import ProposedMatch
from courtpairing.pairing.americano import pair_adjacent
from courtpairing.type_hints import GenderMap, ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def sort_by_score(
    pool: Sequence[ParticipantId], scores: Mapping[ParticipantId, float]
) -> List[ParticipantId]:
    """Order the pool by descending score; unscored participants count as 0.

    Equal scores keep pool order.
    """
    return sorted(pool, key=lambda pid: -scores.get(pid, 0))


def create_mexicano_pairings(
    pool: Sequence[ParticipantId],
    scores: Mapping[ParticipantId, float],
    court_count: Optional[int] = None,
) -> List[ProposedMatch]:
    """Rank the pool and play rank 1 vs 2, rank 3 vs 4, and so on."""
    return pair_adjacent(sort_by_score(pool, scores), court_count)


def create_team_mexicano_pairings(
    pool: Sequence[ParticipantId],
    scores: Mapping[ParticipantId, float],
    court_count: Optional[int] = None,
) -> List[ProposedMatch]:
    """Mexicano over team ids and team scores."""
    return create_mexicano_pairings(pool, scores, court_count)


def create_mixicano_pairings(
    pool: Sequence[ParticipantId],
    scores: Mapping[ParticipantId, float],
    genders: GenderMap,
    court_count: int,
) -> List[ProposedMatch]:
    """Greedy score-ranked pairing across gender categories.

    Walk the ranked pool; each participant still free is paired with the
    next free participant of the other category further down the ranking.
    A participant with nobody suitable below them stays unpaired. Matches
    beyond ``court_count`` are dropped from the bottom of the ranking.

    Args:
        pool: Active participants
        scores: Cumulative scores, missing entries count as 0
        genders: Gender of every pooled participant, members or codes
        court_count: Cap on matches

    Returns:
        Proposed matches, highest ranked first
    """
    genders = parse_gender_map(genders)
    ranked = sort_by_score(pool, scores)
    used = set()
    matches: List[ProposedMatch] = []

    for i, first in enumerate(ranked):
        if first in used:
            continue
        partner = next(
            (
                candidate
                for candidate in ranked[i + 1 :]
                if candidate not in used and genders[candidate] is not genders[first]
            ),
            None,
        )
        if partner is None:
            logger.debug("No opposite-gender partner left for %s", first)
            continue
        used.update((first, partner))
        matches.append(ProposedMatch(first=first, second=partner))

    if len(matches) > court_count:
        logger.debug(
            "Dropping %s lowest ranked matches beyond %s courts",
            len(matches) - court_count,
            court_count,
        )
    return matches[:court_count]


def create_super_mexicano_pairings(
    pool: Sequence[ParticipantId],
    scores: Mapping[ParticipantId, float],
    genders: GenderMap,
    court_count: int,
    bonus_points: int = DEFAULT_BONUS_POINTS,
    bonus_from_round: int = DEFAULT_BONUS_FROM_ROUND,
) -> List[ProposedMatch]:
    """Mixicano pairings annotated with the bonus parameters."""
    matches = create_mixicano_pairings(pool, scores, genders, court_count)
    for match in matches:
        match.metadata[META_BONUS_POINTS] = bonus_points
        match.metadata[META_BONUS_FROM_ROUND] = bonus_from_round
    return matches
