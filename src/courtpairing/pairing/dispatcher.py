"""Format dispatcher: rest-aware round generation for every format."""

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

from typing import Callable, Dict, List, Optional, Union

from courtpairing.constants import SLOTS_PER_MATCH
from courtpairing.formats import PairingFormat
from courtpairing.models.engine_config import EngineConfig
from courtpairing.models.match import ProposedMatch
from courtpairing.models.pairing_result import RoundProposal
from courtpairing.models.round_context import RoundContext
from courtpairing.pairing.americano import (
    create_americano_pairings,
    create_mixed_americano_pairings,
    create_team_americano_pairings,
)
from courtpairing.pairing.mexicano import (
    create_mexicano_pairings,
    create_mixicano_pairings,
    create_super_mexicano_pairings,
    create_team_mexicano_pairings,
)
from courtpairing.pairing.rest import select_active_pool
from courtpairing.type_hints import ParticipantId
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

Strategy = Callable[
    [List[ParticipantId], RoundContext, int, EngineConfig], List[ProposedMatch]
]


def _americano(pool, context, court_count, config):
    return create_americano_pairings(pool, court_count, context.random_source())


def _mixed_americano(pool, context, court_count, config):
    return create_mixed_americano_pairings(pool, context.genders, court_count)


def _team_americano(pool, context, court_count, config):
    return create_team_americano_pairings(pool, court_count, context.random_source())


def _mexicano(pool, context, court_count, config):
    return create_mexicano_pairings(pool, context.scores, court_count)


def _mixicano(pool, context, court_count, config):
    return create_mixicano_pairings(pool, context.scores, context.genders, court_count)


def _team_mexicano(pool, context, court_count, config):
    return create_team_mexicano_pairings(pool, context.scores, court_count)


def _super_mexicano(pool, context, court_count, config):
    return create_super_mexicano_pairings(
        pool,
        context.scores,
        context.genders,
        court_count,
        bonus_points=config.bonus_points,
        bonus_from_round=config.bonus_from_round,
    )


STRATEGIES: Dict[PairingFormat, Strategy] = {
    PairingFormat.AMERICANO: _americano,
    PairingFormat.MIXED_AMERICANO: _mixed_americano,
    PairingFormat.TEAM_AMERICANO: _team_americano,
    PairingFormat.MEXICANO: _mexicano,
    PairingFormat.MIXICANO: _mixicano,
    PairingFormat.TEAM_MEXICANO: _team_mexicano,
    PairingFormat.SUPER_MEXICANO: _super_mexicano,
}

_unmapped = set(PairingFormat) - set(STRATEGIES)
if _unmapped:
    raise RuntimeError(f"No strategy registered for {sorted(f.value for f in _unmapped)}")


def propose_round(
    pairing_format: Union[PairingFormat, str],
    context: RoundContext,
    court_count: int,
    config: Optional[EngineConfig] = None,
) -> RoundProposal:
    """Generate the next round with its selection bookkeeping.

    Args:
        pairing_format: Format member or identifier
        context: Participants, history and side maps for this call
        court_count: Courts available this round
        config: Engine knobs, defaults when omitted

    Returns:
        Proposal with matches, active pool, involuntary and regular rests

    Raises:
        UnsupportedFormatException: If the format is unknown
        MissingContextException: If the format's side data is absent
        InvalidConfigurationException: If the court count is negative
    """
    fmt = context.require(pairing_format)
    config = config or EngineConfig()

    selection = select_active_pool(
        context.participant_ids,
        context.history,
        court_count,
        config.max_rest_streak,
    )
    logger.info(
        "Generating %s round %s: %s eligible, %s active, %s courts",
        fmt.display_name,
        context.round_number,
        len(context.participant_ids),
        len(selection.active),
        court_count,
    )

    if len(selection.active) < SLOTS_PER_MATCH:
        logger.info("Not enough active participants for a match")
        matches: List[ProposedMatch] = []
    else:
        matches = STRATEGIES[fmt](list(selection.active), context, court_count, config)

    matched = {pid for match in matches for pid in match.participant_ids}
    unmatched = [pid for pid in selection.active if pid not in matched]
    if unmatched:
        logger.info(
            "%s active participants could not be placed: %s",
            len(unmatched),
            ", ".join(map(str, unmatched)),
        )

    return RoundProposal(
        pairing_format=fmt,
        round_number=context.round_number,
        matches=matches,
        active_pool=list(selection.active),
        unmatched=unmatched,
        resting=list(selection.resting),
        must_play_count=len(selection.must_play),
        capacity_shortfall=selection.capacity_shortfall,
    )


def generate_round(
    pairing_format: Union[PairingFormat, str],
    context: RoundContext,
    court_count: int,
    config: Optional[EngineConfig] = None,
) -> List[ProposedMatch]:
    """Generate the matches of the next round.

    See :func:`propose_round` for arguments and errors.
    """
    return propose_round(pairing_format, context, court_count, config).matches
