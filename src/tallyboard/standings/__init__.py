"""Standings computation for Tally Board.

This package turns a stream of game results into standings, tie-broken
rankings, prize distributions, carry-overs between divisions and
round-by-round history views.
"""

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

from tallyboard.standings.carryover_calculator import (
    CarryOverCalculator,
    CarryOverPreview,
)
from tallyboard.standings.cross_table import CrossTable, CrossTableBuilder
from tallyboard.standings.engine import Standings, StandingsEngine
from tallyboard.standings.head_to_head import (
    Encounter,
    HeadToHead,
    opponents_win_percentage,
)
from tallyboard.standings.prize_splitter import PrizeSplitter
from tallyboard.standings.result_aggregator import ResultAggregator, screen_results
from tallyboard.standings.round_history import RoundHistory, RoundHistoryBuilder
from tallyboard.standings.statistics import (
    GameHighlight,
    OpponentScoreAverage,
    average_opponent_scores,
    giant_killers,
    high_combined_scores,
    tough_breaks,
)
from tallyboard.standings.tiebreak_ranker import TiebreakRanker, tie_blocks

__all__ = [
    "StandingsEngine",
    "Standings",
    "ResultAggregator",
    "screen_results",
    "HeadToHead",
    "Encounter",
    "opponents_win_percentage",
    "TiebreakRanker",
    "tie_blocks",
    "CarryOverCalculator",
    "CarryOverPreview",
    "PrizeSplitter",
    "RoundHistoryBuilder",
    "RoundHistory",
    "CrossTableBuilder",
    "CrossTable",
    "GameHighlight",
    "OpponentScoreAverage",
    "giant_killers",
    "high_combined_scores",
    "tough_breaks",
    "average_opponent_scores",
]
