# Tally Board
# Copyright (C) 2025  Tally Board developers
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

# Game outcome credit added to the wins counter
WIN_VALUE = 1.0
DEFAULT_TIE_WIN_VALUE = 0.5
LOSS_VALUE = 0.0

# Outcome codes (for snapshots and display)
OUTCOME_WIN = "W"
OUTCOME_LOSS = "L"
OUTCOME_TIE = "T"
OUTCOME_BYE = "B"

# Player status values
STATUS_ACTIVE = "active"
STATUS_WITHDRAWN = "withdrawn"
STATUS_REMOVED = "removed"
STATUS_INACTIVE = "inactive"
PLAYER_STATUSES = (STATUS_ACTIVE, STATUS_WITHDRAWN, STATUS_REMOVED, STATUS_INACTIVE)

# Players with these statuses are aggregated but never ranked
DEFAULT_EXCLUDED_STATUSES = [STATUS_REMOVED]

# Seed used when a player has none; sorts after every real seed
DEFAULT_SEED = 999

# Tiebreaker Keys
TB_MATCH_WINS = "match_wins"  # Best-of series won
TB_POINTS = "points"  # Wins with ties folded in
TB_SPREAD = "spread"
TB_HEAD_TO_HEAD = "h2h"  # Among exactly the tied subset
TB_OPP_WIN_PCT = "opp_win_pct"  # Strength of schedule
TB_SEED = "seed"  # Always applied last

TIEBREAK_NAMES = {
    TB_MATCH_WINS: "Series Won",
    TB_POINTS: "Wins",
    TB_SPREAD: "Spread",
    TB_HEAD_TO_HEAD: "Head-to-Head",
    TB_OPP_WIN_PCT: "Opp Win %",
    TB_SEED: "Seed",
}

# Seed is not listed; the ranker always appends it
DEFAULT_TIEBREAK_ORDER = [
    TB_POINTS,
    TB_SPREAD,
    TB_HEAD_TO_HEAD,
    TB_OPP_WIN_PCT,
]

# Adjacent rows equal on this many leading criteria are statistical ties
DEFAULT_TIE_DEPTH = 2

# Carry-over policy names (as persisted by the carry-over configuration)
POLICY_NONE = "none"
POLICY_FULL = "full"
POLICY_PARTIAL = "partial"
POLICY_CAPPED = "capped"
POLICY_SEEDING_ONLY = "seedingOnly"
CARRYOVER_POLICIES = (
    POLICY_NONE,
    POLICY_FULL,
    POLICY_PARTIAL,
    POLICY_CAPPED,
    POLICY_SEEDING_ONLY,
)

POLICY_DESCRIPTIONS = {
    POLICY_NONE: "No carry-over - player starts fresh",
    POLICY_FULL: "Full carry-over of all wins and spread",
    POLICY_PARTIAL: "{percentage}% carry-over of wins and spread",
    POLICY_CAPPED: "Full wins, spread capped at {spread_cap} per game",
    POLICY_SEEDING_ONLY: "Carry-over used for seeding only",
}

CARRYOVER_DECIMAL_PLACES = 2

# Prize splitting
PRIZE_ROUNDING_TOLERANCE = 1  # Whole units of drift allowed per split group
SPLIT_DESCRIPTION_SEPARATOR = " / "

# Statistics views
DEFAULT_STATISTICS_LIMIT = 100

# Diagnostic kinds
DIAG_UNKNOWN_PLAYER = "unknown_player"
DIAG_INVALID_RESULT = "invalid_result"
DIAG_DUPLICATE_RESULT = "duplicate_result"
DIAG_ROUND_OUT_OF_RANGE = "round_out_of_range"
