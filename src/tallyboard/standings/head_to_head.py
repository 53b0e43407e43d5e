"""Head-to-head lookups between players.

Built once from screened results and shared by the ranker and the
cross-table, so both views read the same games.
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

import math
from collections import defaultdict
from itertools import combinations
from typing import Dict, Iterable, List, NamedTuple, Sequence, Tuple

from tallyboard.constants import DEFAULT_TIE_WIN_VALUE, LOSS_VALUE, WIN_VALUE
from tallyboard.models import AggregateRecord, MatchResult


class Encounter(NamedTuple):
    """One game seen from one player's side."""

    round_number: int
    own_score: int
    opponent_score: int


class HeadToHead:
    """Games between each pair of players.

    Args:
        results: Screened results (byes are ignored)
        tie_win_value: Points a tie is worth to each side
    """

    def __init__(
        self,
        results: Iterable[MatchResult],
        tie_win_value: float = DEFAULT_TIE_WIN_VALUE,
    ) -> None:
        self.tie_win_value = tie_win_value
        self._games: Dict[Tuple[str, str], List[Encounter]] = defaultdict(list)

        for result in results:
            if result.is_bye_result:
                continue
            for side in result.sides():
                self._games[(side.player_id, side.opponent_id)].append(
                    Encounter(result.round_number, side.own_score, side.opponent_score)
                )

    def encounters(self, player_id: str, opponent_id: str) -> List[Encounter]:
        """Games ``player_id`` played against ``opponent_id``, in round order."""
        return sorted(self._games.get((player_id, opponent_id), []))

    def has_played(self, player_id: str, opponent_id: str) -> bool:
        return bool(self._games.get((player_id, opponent_id)))

    def points(self, player_id: str, opponent_id: str) -> float:
        """Points ``player_id`` scored against ``opponent_id``."""
        total = 0.0
        for game in self._games.get((player_id, opponent_id), []):
            if game.own_score > game.opponent_score:
                total += WIN_VALUE
            elif game.own_score < game.opponent_score:
                total += LOSS_VALUE
            else:
                total += self.tie_win_value
        return total

    def is_complete(self, group: Sequence[str]) -> bool:
        """Has every pair in ``group`` met at least once?"""
        return all(self.has_played(a, b) for a, b in combinations(group, 2))

    def group_points(self, group: Sequence[str]) -> Dict[str, float]:
        """Points each member scored against the rest of ``group``."""
        return {
            pid: sum(self.points(pid, other) for other in group if other != pid)
            for pid in group
        }


def opponents_win_percentage(
    records: Dict[str, AggregateRecord],
    results: Iterable[MatchResult],
) -> Dict[str, float]:
    """Average win percentage of each player's opponents (strength of schedule).

    Every game counts once, so an opponent met twice weighs double. Byes are
    not games against an opponent and are ignored.

    Args:
        records: Records of every player, as aggregated from ``results``
        results: Screened results

    Returns:
        Mapping of player id to average opponent win percentage
    """
    percentages: Dict[str, List[float]] = {pid: [] for pid in records}

    for result in results:
        if result.is_bye_result:
            continue
        for side in result.sides():
            opponent = records.get(side.opponent_id)
            if opponent is None or side.player_id not in percentages:
                continue
            percentages[side.player_id].append(opponent.win_percentage)

    # Exact sum, so the result does not depend on result order
    return {
        pid: math.fsum(pcts) / len(pcts) if pcts else 0.0
        for pid, pcts in percentages.items()
    }
