"""Round-by-round history for wall charts and scoreboards."""

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

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from tallyboard.constants import OUTCOME_BYE, OUTCOME_LOSS, OUTCOME_TIE, OUTCOME_WIN
from tallyboard.models import (
    AggregateRecord,
    Diagnostic,
    MatchResult,
    Player,
    RoundSnapshot,
    StandingsConfig,
    StandingsRow,
)
from tallyboard.standings.head_to_head import HeadToHead, opponents_win_percentage
from tallyboard.standings.result_aggregator import ResultAggregator, screen_results
from tallyboard.standings.tiebreak_ranker import TiebreakRanker
from tallyboard.utils import setup_logger

logger = setup_logger(__name__)


@dataclass(frozen=True)
class RoundHistory:
    """Per-player round history plus the standings after every round.

    Attributes
    ----------
    total_rounds : int
        Number of rounds covered.
    histories : dict
        Player id to a list of ``total_rounds`` entries; entry ``i`` holds the
        snapshot of round ``i + 1`` or None when the player has no result in
        that round.
    standings_by_round : dict
        Round number to the standings as of the end of that round.
    diagnostics : list of Diagnostic
        Result rows that were skipped.
    """

    total_rounds: int
    histories: Dict[str, List[Optional[RoundSnapshot]]] = field(default_factory=dict)
    standings_by_round: Dict[int, List[StandingsRow]] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def snapshot(self, player_id: str, round_number: int) -> Optional[RoundSnapshot]:
        """Snapshot of one player in one round (1-based), if any."""
        return self.histories[player_id][round_number - 1]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history to dictionary."""
        return {
            "total_rounds": self.total_rounds,
            "histories": {
                pid: [snap.to_dict() if snap else None for snap in snaps]
                for pid, snaps in self.histories.items()
            },
            "standings_by_round": {
                round_number: [row.to_dict() for row in rows]
                for round_number, rows in self.standings_by_round.items()
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class RoundHistoryBuilder:
    """Builds cumulative per-round snapshots.

    The whole field is re-ranked once per round, so every snapshot's rank and
    opponent rank reflect the standings at the end of that round.
    """

    def __init__(self, config: Optional[StandingsConfig] = None) -> None:
        self.config = config or StandingsConfig()
        self.aggregator = ResultAggregator(self.config.tie_win_value)
        self.ranker = TiebreakRanker(self.config)

    def build(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        total_rounds: Optional[int] = None,
    ) -> RoundHistory:
        """Build the round history of every player.

        Args:
            results: All result rows of the tournament
            players: The roster
            total_rounds: Number of rounds; defaults to the configured number,
                then to the highest round with a result

        Returns:
            RoundHistory with one list of snapshots per player
        """
        roster = list(players)
        names = {p.id: p.name for p in roster}
        if total_rounds is None:
            total_rounds = self.config.total_rounds

        accepted, diagnostics = screen_results(
            results, set(names), last_round=total_rounds
        )
        if total_rounds is None:
            total_rounds = max((r.round_number for r in accepted), default=0)

        by_round: Dict[int, List[MatchResult]] = defaultdict(list)
        for result in accepted:
            by_round[result.round_number].append(result)

        histories: Dict[str, List[Optional[RoundSnapshot]]] = {
            p.id: [None] * total_rounds for p in roster
        }
        standings_by_round: Dict[int, List[StandingsRow]] = {}
        records = self.aggregator.empty_records(names)
        played: List[MatchResult] = []

        for round_number in range(1, total_rounds + 1):
            round_results = by_round.get(round_number, [])
            records = self.aggregator.fold(records, round_results)
            played.extend(round_results)

            rows = self._rank(records, roster, played)
            standings_by_round[round_number] = rows
            ranks = {row.player_id: row.rank for row in rows}

            for result in round_results:
                for snapshot_pid, snapshot in self._snapshots(
                    result, records, ranks, names
                ):
                    histories[snapshot_pid][round_number - 1] = snapshot

        logger.debug(
            "Built round history for %s players over %s rounds",
            len(roster),
            total_rounds,
        )
        return RoundHistory(
            total_rounds=total_rounds,
            histories=histories,
            standings_by_round=standings_by_round,
            diagnostics=diagnostics,
        )

    def _rank(
        self,
        records: Dict[str, AggregateRecord],
        roster: List[Player],
        played: List[MatchResult],
    ) -> List[StandingsRow]:
        if self.config.series_best_of:
            records = self.aggregator.count_series(
                records, played, self.config.series_best_of
            )
        return self.ranker.rank(
            records,
            roster,
            head_to_head=HeadToHead(played, self.config.tie_win_value),
            opp_win_pct=opponents_win_percentage(records, played),
        )

    @staticmethod
    def _snapshots(
        result: MatchResult,
        records: Dict[str, AggregateRecord],
        ranks: Dict[str, int],
        names: Dict[str, str],
    ):
        """Yield (player id, snapshot) for each side of one result."""
        for side in result.sides():
            record = records[side.player_id]
            if result.is_bye_result:
                outcome = OUTCOME_BYE
            elif side.own_score > side.opponent_score:
                outcome = OUTCOME_WIN
            elif side.own_score < side.opponent_score:
                outcome = OUTCOME_LOSS
            else:
                outcome = OUTCOME_TIE

            yield side.player_id, RoundSnapshot(
                round_number=result.round_number,
                opponent_id=side.opponent_id,
                opponent_name=names.get(side.opponent_id),
                own_score=side.own_score,
                opponent_score=side.opponent_score,
                outcome=outcome,
                wins=record.wins,
                losses=record.losses,
                ties=record.ties,
                spread=record.spread,
                rank=ranks.get(side.player_id),
                opponent_rank=ranks.get(side.opponent_id),
                is_bye=result.is_bye_result,
            )
