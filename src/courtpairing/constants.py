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

# --- Constants ---
SESSION_FILE_EXTENSION = ".json"

# Every format puts two participants (players or teams) on a court
SLOTS_PER_MATCH = 2

# Rest rotation
DEFAULT_MAX_REST_STREAK = 2

# Super Mexicano bonus knobs
DEFAULT_BONUS_POINTS = 1
DEFAULT_BONUS_FROM_ROUND = 2

# Keys of the metadata bag carried by a proposed match
META_BONUS_POINTS = "bonus_points"
META_BONUS_FROM_ROUND = "bonus_from_round"

# Gender categories
GENDER_MALE = "M"
GENDER_FEMALE = "F"

# Format identifiers
FORMAT_AMERICANO = "americano"
FORMAT_MIXED_AMERICANO = "mixed_americano"
FORMAT_TEAM_AMERICANO = "team_americano"
FORMAT_MEXICANO = "mexicano"
FORMAT_MIXICANO = "mixicano"
FORMAT_TEAM_MEXICANO = "team_mexicano"
FORMAT_SUPER_MEXICANO = "super_mexicano"

# Default display names for formats
FORMAT_NAMES = {
    FORMAT_AMERICANO: "Americano",
    FORMAT_MIXED_AMERICANO: "Mixed Americano",
    FORMAT_TEAM_AMERICANO: "Team Americano",
    FORMAT_MEXICANO: "Mexicano",
    FORMAT_MIXICANO: "Mixicano",
    FORMAT_TEAM_MEXICANO: "Team Mexicano",
    FORMAT_SUPER_MEXICANO: "Super Mexicano",
}

DEFAULT_FORMAT = FORMAT_AMERICANO

# Environment overrides for the deployment-wide defaults
ENV_LOG_LEVEL = "COURTPAIRING_LOG_LEVEL"
ENV_MAX_REST_STREAK = "COURTPAIRING_MAX_REST_STREAK"
ENV_BONUS_POINTS = "COURTPAIRING_BONUS_POINTS"
ENV_BONUS_FROM_ROUND = "COURTPAIRING_BONUS_FROM_ROUND"

# Points played per match when simulating sessions (padel Americano to 24)
SIMULATED_POINTS_PER_MATCH = 24
