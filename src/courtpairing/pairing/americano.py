"""Americano family: randomly drawn and mixed-gender pairings."""

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
from typing import List, Optional, Sequence

from courtpairing.models.gender import Gender, parse_gender_map
from courtpairing.models.match import ProposedMatch
from courtpairing.type_hints import GenderMap, ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def pair_adjacent(
    ordered: Sequence[ParticipantId], court_count: Optional[int] = None
) -> List[ProposedMatch]:
    """Pair positions 0-1, 2-3, ... of an already ordered pool.

    An odd participant at the end stays unpaired. ``court_count`` caps the
    number of matches when given.
    """
    limit = len(ordered) // 2
    if court_count is not None:
        limit = min(limit, court_count)
    return [
        ProposedMatch(first=ordered[2 * i], second=ordered[2 * i + 1])
        for i in range(limit)
    ]


def create_americano_pairings(
    pool: Sequence[ParticipantId],
    court_count: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[ProposedMatch]:
    """Shuffle the pool uniformly and pair neighbours.

    Args:
        pool: Active participants
        court_count: Optional cap on matches
        rng: Random source, a fresh unseeded one when omitted

    Returns:
        Proposed matches
    """
    shuffled = list(pool)
    (rng or random.Random()).shuffle(shuffled)
    return pair_adjacent(shuffled, court_count)


def create_team_americano_pairings(
    pool: Sequence[ParticipantId],
    court_count: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[ProposedMatch]:
    """Americano over team ids; teams are drawn against each other at random."""
    return create_americano_pairings(pool, court_count, rng)


def create_mixed_americano_pairings(
    pool: Sequence[ParticipantId],
    genders: GenderMap,
    court_count: int,
) -> List[ProposedMatch]:
    """Pair the i-th man with the i-th woman of the pool.

    Both groups keep pool order. Surplus participants of the larger group
    are left unpaired.

    Args:
        pool: Active participants
        genders: Gender of every pooled participant, members or codes
        court_count: Cap on matches

    Returns:
        Proposed matches, one man and one woman each
    """
    genders = parse_gender_map(genders)
    men = [pid for pid in pool if genders[pid] is Gender.MALE]
    women = [pid for pid in pool if genders[pid] is Gender.FEMALE]
    count = min(len(men), len(women), court_count)
    if len(men) != len(women):
        logger.debug(
            "Gender imbalance in pool: %s men, %s women", len(men), len(women)
        )
    return [ProposedMatch(first=men[i], second=women[i]) for i in range(count)]
