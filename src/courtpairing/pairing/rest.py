"""Rest streak accounting and active pool selection."""

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
from typing import List, Sequence

from courtpairing.constants import DEFAULT_MAX_REST_STREAK, SLOTS_PER_MATCH
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.models.round_data import RoundData
from courtpairing.type_hints import ParticipantId, RestStreak
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class ActivePoolSelection:
    """Outcome of choosing who plays the next round.

    Attributes
    ----------
    active : list of str
        Participants who play, must-play first, then by descending streak.
    resting : list of str
        Eligible participants left out, in input order.
    must_play : list of str
        Participants at or above the rest threshold, in input order.
    streaks : dict
        Rest streak of every eligible participant.
    slots : int
        Seats available this round (``courts * 2``).
    """

    active: List[ParticipantId] = field(default_factory=list)
    resting: List[ParticipantId] = field(default_factory=list)
    must_play: List[ParticipantId] = field(default_factory=list)
    streaks: RestStreak = field(default_factory=dict)
    slots: int = 0

    @property
    def capacity_shortfall(self) -> int:
        """Must-play participants that did not fit on the courts."""
        return max(0, len(self.must_play) - self.slots)


def compute_rest_streaks(
    participant_ids: Sequence[ParticipantId], history: Sequence[RoundData]
) -> RestStreak:
    """Count the consecutive most recent rounds each participant sat out.

    History is walked from the newest round backward and counting stops at
    the first round the participant played in. Someone who never played gets
    ``len(history)``.

    Args:
        participant_ids: Participants to report on
        history: Completed rounds, oldest first

    Returns:
        Mapping of participant id to rest streak
    """
    played_per_round = [round_data.played_ids for round_data in reversed(history)]
    streaks: RestStreak = {}
    for pid in participant_ids:
        streak = 0
        for played in played_per_round:
            if pid in played:
                break
            streak += 1
        streaks[pid] = streak
    return streaks


def select_active_pool(
    participant_ids: Sequence[ParticipantId],
    history: Sequence[RoundData],
    court_count: int,
    max_rest_streak: int = DEFAULT_MAX_REST_STREAK,
) -> ActivePoolSelection:
    """Choose the participants who play the next round.

    Participants whose streak reached ``max_rest_streak`` are seated first.
    When they alone overflow the courts, the longest resting of them win the
    seats. Remaining seats go to the others, longest resting first. Equal
    streaks keep the order of ``participant_ids``.

    Args:
        participant_ids: Eligible participants in caller order
        history: Completed rounds, oldest first
        court_count: Courts available this round
        max_rest_streak: Rest streak at which a participant must play

    Returns:
        The full selection record

    Raises:
        InvalidConfigurationException: If court count or threshold is negative
    """
    if court_count < 0:
        raise InvalidConfigurationException(
            f"court_count must be non-negative, got {court_count}"
        )
    if max_rest_streak < 0:
        raise InvalidConfigurationException(
            f"max_rest_streak must be non-negative, got {max_rest_streak}"
        )

    ids = list(dict.fromkeys(participant_ids))
    slots = court_count * SLOTS_PER_MATCH
    streaks = compute_rest_streaks(ids, history)

    must_play = [pid for pid in ids if streaks[pid] >= max_rest_streak]
    others = [pid for pid in ids if streaks[pid] < max_rest_streak]

    # sorted() is stable, so equal streaks keep input order
    def by_streak(pid: ParticipantId) -> int:
        return -streaks[pid]

    if len(must_play) >= slots:
        active = sorted(must_play, key=by_streak)[:slots]
        if len(must_play) > slots:
            logger.warning(
                "%s participants reached the rest limit of %s but only %s seats "
                "exist; %s of them sit out again",
                len(must_play),
                max_rest_streak,
                slots,
                len(must_play) - slots,
            )
    else:
        fill = slots - len(must_play)
        active = sorted(must_play, key=by_streak) + sorted(others, key=by_streak)[:fill]

    chosen = set(active)
    resting = [pid for pid in ids if pid not in chosen]

    logger.debug(
        "Selected %s of %s participants for %s seats (%s must play)",
        len(active),
        len(ids),
        slots,
        len(must_play),
    )
    return ActivePoolSelection(
        active=active,
        resting=resting,
        must_play=must_play,
        streaks=streaks,
        slots=slots,
    )


def select_active(
    participant_ids: Sequence[ParticipantId],
    history: Sequence[RoundData],
    court_count: int,
    max_rest_streak: int = DEFAULT_MAX_REST_STREAK,
) -> List[ParticipantId]:
    """Return only the active pool of :func:`select_active_pool`."""
    return select_active_pool(
        participant_ids, history, court_count, max_rest_streak
    ).active
