"""Tie-break ranking for tournament standings.

This module orders aggregated player records into final standings.

Criteria (applied in the configured order, first difference wins):
- Series won (best-of league standings only, always first)
- Points: wins with ties folded in
- Spread: cumulative score differential
- Head-to-head: points among exactly the tied subset, only when every pair
  of that subset has played; otherwise the criterion is skipped
- Opponents' win percentage (strength of schedule), when available
- Seed ascending, then player id, as the final deterministic fallback
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

from itertools import groupby
from typing import Dict, Iterable, List, Optional

from tallyboard.constants import (
    TB_HEAD_TO_HEAD,
    TB_MATCH_WINS,
    TB_OPP_WIN_PCT,
    TB_POINTS,
    TB_SEED,
    TB_SPREAD,
)
from tallyboard.models import AggregateRecord, Player, StandingsConfig, StandingsRow
from tallyboard.standings.head_to_head import HeadToHead
from tallyboard.type_hints import CriterionValues, TieBlock
from tallyboard.utils import setup_logger

logger = setup_logger(__name__)


class TiebreakRanker:
    """Ranks players into a strict total order.

    Ranks are positional (1, 2, 3, ...) and never shared. Rows that are
    equal on the tie-relevant criteria are flagged so prize splitting and
    display can treat them as tied.
    """

    def __init__(self, config: Optional[StandingsConfig] = None) -> None:
        self.config = config or StandingsConfig()

    def rank(
        self,
        records: Dict[str, AggregateRecord],
        players: Iterable[Player],
        head_to_head: Optional[HeadToHead] = None,
        opp_win_pct: Optional[Dict[str, float]] = None,
    ) -> List[StandingsRow]:
        """Rank the players into standings.

        Args:
            records: Aggregated record per player id
            players: Players to rank; excluded statuses are left out
            head_to_head: Head-to-head lookup; criterion skipped when None
            opp_win_pct: Strength of schedule; criterion skipped when None

        Returns:
            Standings rows ordered best to worst
        """
        ranked_players = {
            p.id: p
            for p in players
            if p.status not in self.config.excluded_statuses
        }
        if not ranked_players:
            return []

        player_records = {
            pid: records.get(pid) or AggregateRecord(player_id=pid)
            for pid in ranked_players
        }
        criteria = self.config.ranking_criteria
        values: Dict[str, Dict[str, Optional[float]]] = {
            pid: {} for pid in ranked_players
        }

        def criterion_values(key: str, group: List[str]) -> Optional[CriterionValues]:
            if key == TB_MATCH_WINS:
                return {pid: float(player_records[pid].match_wins) for pid in group}
            if key == TB_POINTS:
                return {pid: player_records[pid].points for pid in group}
            if key == TB_SPREAD:
                return {pid: float(player_records[pid].spread) for pid in group}
            if key == TB_OPP_WIN_PCT:
                if opp_win_pct is None:
                    return None
                return {pid: opp_win_pct.get(pid, 0.0) for pid in group}
            raise KeyError(key)

        # Every criterion but head-to-head is a property of the player alone
        field_values: Dict[str, Optional[CriterionValues]] = {}
        for key in criteria:
            if key == TB_HEAD_TO_HEAD:
                continue
            field_values[key] = criterion_values(key, list(ranked_players))
            for pid in ranked_players:
                values[pid][key] = (
                    field_values[key][pid] if field_values[key] is not None else None
                )

        def refine(group: List[str], depth: int) -> List[str]:
            if depth == len(criteria) or len(group) == 1:
                return sorted(
                    group, key=lambda pid: self._seed_key(ranked_players[pid])
                )

            key = criteria[depth]
            if key == TB_HEAD_TO_HEAD:
                group_values = self._head_to_head_values(group, head_to_head)
                for pid in group:
                    values[pid][key] = (
                        group_values[pid] if group_values is not None else None
                    )
            else:
                group_values = field_values[key]
            if group_values is None:
                return refine(group, depth + 1)

            ordered: List[str] = []
            by_value = sorted(group, key=lambda pid: -group_values[pid])
            for _, bucket in groupby(by_value, key=lambda pid: group_values[pid]):
                ordered.extend(refine(list(bucket), depth + 1))
            return ordered

        order = refine(sorted(ranked_players), 0)
        rows = self._build_rows(order, ranked_players, player_records, values, criteria)

        logger.debug("Ranked %s players", len(rows))
        return rows

    def _head_to_head_values(
        self, group: List[str], head_to_head: Optional[HeadToHead]
    ) -> Optional[CriterionValues]:
        if head_to_head is None or not head_to_head.is_complete(group):
            return None
        return head_to_head.group_points(group)

    def _seed_key(self, player: Player):
        seed = player.seed if player.seed is not None else self.config.default_seed
        return (seed, player.id)

    def _build_rows(
        self,
        order: List[str],
        players: Dict[str, Player],
        records: Dict[str, AggregateRecord],
        values: Dict[str, Dict[str, Optional[float]]],
        criteria: List[str],
    ) -> List[StandingsRow]:
        depth = self.config.tie_depth + (1 if self.config.series_best_of else 0)
        tie_criteria = criteria[:depth]

        def tie_key(pid: str):
            return tuple(values[pid].get(key) for key in tie_criteria)

        rows: List[StandingsRow] = []
        for index, pid in enumerate(order):
            player = players[pid]
            tiebreak_values = tuple(
                (key, values[pid].get(key)) for key in criteria
            ) + ((TB_SEED, float(self._seed_key(player)[0])),)

            tied_prev = index > 0 and tie_key(order[index - 1]) == tie_key(pid)
            tied_next = index + 1 < len(order) and tie_key(order[index + 1]) == tie_key(
                pid
            )
            rows.append(
                StandingsRow(
                    rank=index + 1,
                    player=player,
                    record=records[pid],
                    tiebreak_values=tiebreak_values,
                    tied_with_previous=tied_prev,
                    tied_with_next=tied_next,
                )
            )
        return rows


def tie_blocks(rows: List[StandingsRow]) -> List[TieBlock]:
    """Contiguous spans of statistically tied rows.

    Every row belongs to exactly one block; untied rows form blocks of one.

    Args:
        rows: Standings rows in rank order

    Returns:
        List of inclusive (start, end) row indexes
    """
    blocks: List[TieBlock] = []
    start = 0
    for index, row in enumerate(rows):
        if not row.tied_with_next:
            blocks.append((start, index))
            start = index + 1
    return blocks
