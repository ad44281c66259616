"""Pairing engine: rest rotation, format strategies and dispatch."""

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

from courtpairing.pairing.americano import (
    create_americano_pairings,
    create_mixed_americano_pairings,
    create_team_americano_pairings,
    pair_adjacent,
)
from courtpairing.pairing.dispatcher import generate_round, propose_round
from courtpairing.pairing.mexicano import (
    create_mexicano_pairings,
    create_mixicano_pairings,
    create_super_mexicano_pairings,
    create_team_mexicano_pairings,
    sort_by_score,
)
from courtpairing.pairing.rest import (
    ActivePoolSelection,
    compute_rest_streaks,
    select_active,
    select_active_pool,
)

__all__ = [
    "ActivePoolSelection",
    "compute_rest_streaks",
    "create_americano_pairings",
    "create_mexicano_pairings",
    "create_mixed_americano_pairings",
    "create_mixicano_pairings",
    "create_super_mexicano_pairings",
    "create_team_americano_pairings",
    "create_team_mexicano_pairings",
    "generate_round",
    "pair_adjacent",
    "propose_round",
    "select_active",
    "select_active_pool",
    "sort_by_score",
]
