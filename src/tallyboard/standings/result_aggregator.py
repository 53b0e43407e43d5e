"""Result aggregation for tournaments.

This module folds raw match results into per-player win/loss/tie/spread totals.
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

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from tallyboard.constants import (
    DEFAULT_TIE_WIN_VALUE,
    DIAG_DUPLICATE_RESULT,
    DIAG_INVALID_RESULT,
    DIAG_ROUND_OUT_OF_RANGE,
    DIAG_UNKNOWN_PLAYER,
)
from tallyboard.models import (
    AggregateRecord,
    AggregationResult,
    Diagnostic,
    MatchResult,
    Player,
)
from tallyboard.utils import setup_logger
from tallyboard.utils.validation import validate_match_result

logger = setup_logger(__name__)


def screen_results(
    results: Iterable[MatchResult],
    roster_ids: Set[str],
    as_of_round: Optional[int] = None,
    last_round: Optional[int] = None,
) -> Tuple[List[MatchResult], List[Diagnostic]]:
    """Split results into usable rows and diagnostics.

    Rows are returned ordered by round; within a round the input order is
    kept. Rows after ``as_of_round`` are dropped silently (that is a view
    choice, not an anomaly). Rows after ``last_round`` are reported.

    Args:
        results: Raw result rows, in any order
        roster_ids: IDs of every registered player
        as_of_round: Only keep rounds up to and including this one
        last_round: Configured final round; later rows are anomalies

    Returns:
        Tuple of (accepted results, diagnostics)
    """
    accepted: List[MatchResult] = []
    diagnostics: List[Diagnostic] = []
    seen: Set[Tuple[int, str]] = set()

    ordered = sorted(
        enumerate(results),
        key=lambda item: (_round_sort_key(item[1].round_number), item[0]),
    )

    for _, result in ordered:
        validation = validate_match_result(result)
        if not validation:
            diagnostics.append(
                _diagnose(DIAG_INVALID_RESULT, validation.error_message, result)
            )
            continue

        if as_of_round is not None and result.round_number > as_of_round:
            continue

        if last_round is not None and result.round_number > last_round:
            diagnostics.append(
                _diagnose(
                    DIAG_ROUND_OUT_OF_RANGE,
                    f"Round {result.round_number} is beyond the last round "
                    f"({last_round})",
                    result,
                )
            )
            continue

        unknown = [pid for pid in result.player_ids() if pid not in roster_ids]
        if unknown:
            diagnostics.append(
                _diagnose(
                    DIAG_UNKNOWN_PLAYER,
                    f"Result references unknown player(s): {', '.join(unknown)}",
                    result,
                )
            )
            continue

        keys = [(result.round_number, pid) for pid in result.player_ids()]
        repeated = [pid for (_, pid) in keys if (result.round_number, pid) in seen]
        if repeated:
            diagnostics.append(
                _diagnose(
                    DIAG_DUPLICATE_RESULT,
                    f"Player(s) {', '.join(repeated)} already have a result in "
                    f"round {result.round_number}",
                    result,
                )
            )
            continue

        seen.update(keys)
        accepted.append(result)

    for diagnostic in diagnostics:
        logger.warning("Skipped result: %s", diagnostic.message)

    return accepted, diagnostics


def _round_sort_key(round_number) -> int:
    # Invalid rounds are rejected by validation; keep the sort total anyway.
    return round_number if isinstance(round_number, int) else 0


def _diagnose(kind: str, message: str, result: MatchResult) -> Diagnostic:
    round_number = result.round_number if isinstance(result.round_number, int) else None
    player_ids = tuple(
        pid for pid in (result.player_a_id, result.player_b_id) if pid is not None
    )
    return Diagnostic(
        kind=kind, message=message, round_number=round_number, player_ids=player_ids
    )


class ResultAggregator:
    """Folds match results into cumulative player records.

    This class is responsible for:
    - Initialising every registered player's record at zero
    - Folding games, ties and byes with one consistent convention
    - Skipping anomalous rows and reporting them as diagnostics
    - Series (best-of) standings for league play
    """

    def __init__(self, tie_win_value: float = DEFAULT_TIE_WIN_VALUE) -> None:
        self.tie_win_value = tie_win_value

    def aggregate(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        as_of_round: Optional[int] = None,
        last_round: Optional[int] = None,
    ) -> AggregationResult:
        """Aggregate results into a record for every registered player.

        Args:
            results: All result rows of the tournament
            players: The roster
            as_of_round: Ignore results of later rounds
            last_round: Configured final round, if any

        Returns:
            AggregationResult with one record per player and the diagnostics
        """
        records, accepted, diagnostics = self._screen_and_fold(
            results, players, as_of_round, last_round
        )

        logger.debug(
            "Aggregated %s results for %s players (%s skipped)",
            len(accepted),
            len(records),
            len(diagnostics),
        )
        return AggregationResult(records=records, diagnostics=diagnostics)

    def aggregate_series(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        best_of: int,
        as_of_round: Optional[int] = None,
        last_round: Optional[int] = None,
    ) -> AggregationResult:
        """Aggregate results and count best-of series won and lost.

        Every game between the same two players belongs to one series. A
        player takes the series once their game wins reach a majority of
        ``best_of``; an undecided series counts for neither side.

        Args:
            results: All result rows of the tournament
            players: The roster
            best_of: Series length (a best-of-15 is won with 8 games)
            as_of_round: Ignore results of later rounds
            last_round: Configured final round, if any

        Returns:
            AggregationResult whose records carry match wins and losses
        """
        records, accepted, diagnostics = self._screen_and_fold(
            results, players, as_of_round, last_round
        )
        records = self.count_series(records, accepted, best_of)
        return AggregationResult(records=records, diagnostics=diagnostics)

    @staticmethod
    def count_series(
        records: Dict[str, AggregateRecord],
        results: Iterable[MatchResult],
        best_of: int,
    ) -> Dict[str, AggregateRecord]:
        """Return new records with decided best-of series counted.

        Args:
            records: Current records; not modified
            results: Screened results whose players all have a record
            best_of: Series length

        Returns:
            A new mapping of player id to record
        """
        records = dict(records)
        majority = best_of // 2 + 1
        game_wins: Dict[frozenset, Dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        for result in results:
            if result.is_bye_result:
                continue
            series = game_wins[frozenset((result.player_a_id, result.player_b_id))]
            if result.points_a > result.points_b:
                series[result.player_a_id] += 1
            elif result.points_b > result.points_a:
                series[result.player_b_id] += 1

        # Fixed pair order keeps the output independent of result order
        for pair in sorted(game_wins, key=sorted):
            first, second = sorted(pair)
            wins = game_wins[pair]
            if wins[first] >= majority:
                winner, loser = first, second
            elif wins[second] >= majority:
                winner, loser = second, first
            else:
                continue
            records[winner] = records[winner].with_series(won=True)
            records[loser] = records[loser].with_series(won=False)
        return records

    @staticmethod
    def empty_records(player_ids: Iterable[str]) -> Dict[str, AggregateRecord]:
        """A zero record for each player id."""
        return {pid: AggregateRecord(player_id=pid) for pid in player_ids}

    def fold(
        self,
        records: Dict[str, AggregateRecord],
        results: Iterable[MatchResult],
    ) -> Dict[str, AggregateRecord]:
        """Return new records with already-screened results folded in.

        Args:
            records: Current records; not modified
            results: Screened results whose players all have a record

        Returns:
            A new mapping of player id to record
        """
        folded = dict(records)
        for result in results:
            if result.is_bye_result:
                pid = result.player_a_id
                folded[pid] = folded[pid].with_bye(result.points_a)
                continue

            for side in result.sides():
                folded[side.player_id] = folded[side.player_id].with_game(
                    side.own_score, side.opponent_score, self.tie_win_value
                )
        return folded

    def _screen_and_fold(
        self,
        results: Iterable[MatchResult],
        players: Iterable[Player],
        as_of_round: Optional[int],
        last_round: Optional[int],
    ) -> Tuple[Dict[str, AggregateRecord], List[MatchResult], List[Diagnostic]]:
        roster = [p.id for p in players]
        accepted, diagnostics = screen_results(
            results, set(roster), as_of_round=as_of_round, last_round=last_round
        )
        records = self.fold(self.empty_records(roster), accepted)
        return records, accepted, diagnostics
