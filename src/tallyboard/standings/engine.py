"""Standings engine: one pipeline behind every standings view.

Every view (standings, prizes, wall chart, cross-table, statistics) is
recomputed from the full result list on each call. The engine holds only its
immutable configuration, so it can be shared freely.
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

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence

from tallyboard.constants import DEFAULT_STATISTICS_LIMIT
from tallyboard.exceptions import DataIntegrityError
from tallyboard.models import (
    AggregateRecord,
    CarryOverPolicy,
    CarryOverResult,
    Diagnostic,
    MatchResult,
    Player,
    Prize,
    PrizeReport,
    StandingsConfig,
    StandingsRow,
)
from tallyboard.standings.carryover_calculator import (
    CarryOverCalculator,
    CarryOverPreview,
)
from tallyboard.standings.cross_table import CrossTable, CrossTableBuilder
from tallyboard.standings.head_to_head import HeadToHead, opponents_win_percentage
from tallyboard.standings.prize_splitter import PrizeSplitter
from tallyboard.standings.result_aggregator import ResultAggregator, screen_results
from tallyboard.standings.round_history import RoundHistory, RoundHistoryBuilder
from tallyboard.standings.statistics import (
    average_opponent_scores,
    giant_killers,
    high_combined_scores,
    tough_breaks,
)
from tallyboard.standings.tiebreak_ranker import TiebreakRanker
from tallyboard.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class Standings:
    """Standings as of one point of the event.

    Attributes
    ----------
    rows : list of StandingsRow
        Ranked players, best first.
    records : dict
        Record of every registered player in the view, ranked or not, with
        carry-overs applied.
    diagnostics : list of Diagnostic
        Result rows that were skipped.
    as_of_round : int or None
        Last round included, or None for all rounds.
    """

    rows: List[StandingsRow] = field(default_factory=list)
    records: Dict[str, AggregateRecord] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    as_of_round: Optional[int] = None

    def row_for(self, player_id: str) -> Optional[StandingsRow]:
        for row in self.rows:
            if row.player_id == player_id:
                return row
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize standings to dictionary."""
        return {
            "as_of_round": self.as_of_round,
            "rows": [row.to_dict() for row in self.rows],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class _Pipeline(NamedTuple):
    roster: List[Player]
    accepted: List[MatchResult]
    records: Dict[str, AggregateRecord]
    diagnostics: List[Diagnostic]


class StandingsEngine:
    """Entry point for computing standings and the views derived from them.

    Args:
        config: Standings settings; defaults to ``StandingsConfig()``
    """

    def __init__(self, config: Optional[StandingsConfig] = None) -> None:
        self.config = config or StandingsConfig()
        self.aggregator = ResultAggregator(self.config.tie_win_value)
        self.ranker = TiebreakRanker(self.config)
        self.carryover_calculator = CarryOverCalculator()
        self.prize_splitter = PrizeSplitter()
        self.history_builder = RoundHistoryBuilder(self.config)
        self.cross_table_builder = CrossTableBuilder()

    # ========== Standings ==========

    def compute_standings(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        as_of_round: Optional[int] = None,
        division: Optional[str] = None,
        carryovers: Optional[Dict[str, CarryOverResult]] = None,
        for_seeding: bool = False,
    ) -> Standings:
        """Compute ranked standings.

        Args:
            results: All result rows of the tournament
            players: The roster
            as_of_round: Only count results up to this round
            division: Restrict the view to one division; games against
                players of other divisions are left out
            carryovers: Carried values per player id, from earlier divisions
            for_seeding: Include ``seedingOnly`` carry-overs in the totals

        Returns:
            Standings with rows, records and diagnostics
        """
        pipeline = self._run(results, players, as_of_round, division)
        return self._standings(pipeline, as_of_round, carryovers, for_seeding)

    def _standings(
        self,
        pipeline: "_Pipeline",
        as_of_round: Optional[int],
        carryovers: Optional[Dict[str, CarryOverResult]] = None,
        for_seeding: bool = False,
    ) -> Standings:
        records = pipeline.records
        opp_win_pct = opponents_win_percentage(records, pipeline.accepted)

        if carryovers:
            records = dict(records)
            for pid, carryover in sorted(carryovers.items()):
                if pid not in records:
                    logger.warning("Carry-over for %s ignored: not in this view", pid)
                    continue
                records[pid] = self.carryover_calculator.apply(
                    records[pid], carryover, for_seeding=for_seeding
                )

        rows = self.ranker.rank(
            records,
            pipeline.roster,
            head_to_head=HeadToHead(pipeline.accepted, self.config.tie_win_value),
            opp_win_pct=opp_win_pct,
        )
        logger.info(
            "Computed standings for %s players%s",
            len(rows),
            f" as of round {as_of_round}" if as_of_round is not None else "",
        )
        return Standings(
            rows=rows,
            records=records,
            diagnostics=pipeline.diagnostics,
            as_of_round=as_of_round,
        )

    def distribute_prizes(
        self, rows: Sequence[StandingsRow], prizes: Sequence[Prize]
    ) -> PrizeReport:
        """Distribute prizes over final standings rows."""
        return self.prize_splitter.distribute(rows, prizes)

    def build_round_history(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        total_rounds: Optional[int] = None,
    ) -> RoundHistory:
        """Round-by-round snapshots of every player, for wall charts."""
        return self.history_builder.build(results, players, total_rounds)

    def build_cross_table(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        as_of_round: Optional[int] = None,
        division: Optional[str] = None,
    ) -> CrossTable:
        """Head-to-head matrix ordered by the standings."""
        pipeline = self._run(results, players, as_of_round, division)
        standings = self._standings(pipeline, as_of_round)
        head_to_head = HeadToHead(pipeline.accepted, self.config.tie_win_value)
        return self.cross_table_builder.build(standings.rows, head_to_head)

    # ========== Carry-Over ==========

    def calculate_carryover(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        player_id: str,
        policy: CarryOverPolicy,
        as_of_round: Optional[int] = None,
    ) -> CarryOverResult:
        """Carry-over for a player leaving their current division.

        The source record is the player's record within their own division.

        Raises:
            DataIntegrityError: If the player is not on the roster
            ConfigurationError: If the policy lacks its required parameter
        """
        record = self._source_record(results, players, player_id, as_of_round)
        return self.carryover_calculator.calculate(record, policy)

    def preview_carryover(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        player_id: str,
        policy: CarryOverPolicy,
        as_of_round: Optional[int] = None,
    ) -> CarryOverPreview:
        """Current record, carried values and starting totals for a move."""
        record = self._source_record(results, players, player_id, as_of_round)
        return self.carryover_calculator.preview(record, policy)

    # ========== Statistics ==========

    def statistics(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        limit: int = DEFAULT_STATISTICS_LIMIT,
        as_of_round: Optional[int] = None,
    ) -> Dict[str, list]:
        """Every statistics view computed from the screened results."""
        pipeline = self._run(results, players, as_of_round, None)
        return {
            "giant_killers": giant_killers(pipeline.accepted, pipeline.roster, limit),
            "high_combined_scores": high_combined_scores(pipeline.accepted, limit),
            "tough_breaks": tough_breaks(pipeline.accepted, limit),
            "average_opponent_scores": average_opponent_scores(
                pipeline.accepted, pipeline.roster, limit
            ),
        }

    # ========== Internals ==========

    def _run(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        as_of_round: Optional[int],
        division: Optional[str],
    ) -> _Pipeline:
        """Screen and aggregate results for one view."""
        players = list(players)
        results = list(results)

        roster = players
        if division is not None:
            roster = [p for p in players if p.division == division]
            results = self._division_results(results, players, roster)

        accepted, diagnostics = screen_results(
            results,
            {p.id for p in roster},
            as_of_round=as_of_round,
            last_round=self.config.total_rounds,
        )
        records = self.aggregator.fold(
            self.aggregator.empty_records(p.id for p in roster), accepted
        )
        if self.config.series_best_of:
            records = self.aggregator.count_series(
                records, accepted, self.config.series_best_of
            )
        return _Pipeline(roster, accepted, records, diagnostics)

    @staticmethod
    def _division_results(
        results: List[MatchResult], players: List[Player], roster: List[Player]
    ) -> List[MatchResult]:
        """Drop games involving registered players of other divisions.

        Rows naming unregistered players are kept so screening reports them.
        """
        registered = {p.id for p in players}
        in_division = {p.id for p in roster}
        return [
            result
            for result in results
            if all(
                pid in in_division or pid not in registered
                for pid in result.player_ids()
            )
        ]

    def _source_record(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        player_id: str,
        as_of_round: Optional[int],
    ) -> AggregateRecord:
        players = list(players)
        player = next((p for p in players if p.id == player_id), None)
        if player is None:
            raise DataIntegrityError(f"Player {player_id} is not on the roster")

        pipeline = self._run(results, players, as_of_round, player.division)
        return pipeline.records[player_id]
