"""Cross-table (head-to-head matrix) in standings order."""

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
from typing import Any, Dict, List, Sequence, Tuple

from tallyboard.models import StandingsRow
from tallyboard.standings.head_to_head import Encounter, HeadToHead


@dataclass(frozen=True)
class CrossTable:
    """Every game between every pair of ranked players.

    Attributes
    ----------
    rows : list of StandingsRow
        Standings the table is ordered by.
    cells : dict
        ``(player_id, opponent_id)`` to the games between them, seen from
        ``player_id``. Pairs that never met are absent.
    """

    rows: List[StandingsRow] = field(default_factory=list)
    cells: Dict[Tuple[str, str], List[Encounter]] = field(default_factory=dict)

    @property
    def player_ids(self) -> List[str]:
        return [row.player_id for row in self.rows]

    def cell(self, player_id: str, opponent_id: str) -> List[Encounter]:
        return self.cells.get((player_id, opponent_id), [])

    def to_dict(self) -> Dict[str, Any]:
        """Serialize cross-table as a list of rows with one cell per opponent."""
        order = self.player_ids
        return {
            "players": order,
            "rows": [
                {
                    "rank": row.rank,
                    "player_id": row.player_id,
                    "name": row.player.name,
                    "cells": [
                        [game._asdict() for game in self.cell(row.player_id, other)]
                        for other in order
                    ],
                }
                for row in self.rows
            ],
        }


class CrossTableBuilder:
    """Builds a cross-table from standings and head-to-head data."""

    def build(
        self, rows: Sequence[StandingsRow], head_to_head: HeadToHead
    ) -> CrossTable:
        """Build the cross-table.

        Args:
            rows: Standings; rows and columns follow this order
            head_to_head: Games between players

        Returns:
            CrossTable with a cell for every pair that has met
        """
        cells: Dict[Tuple[str, str], List[Encounter]] = {}
        for row in rows:
            for other in rows:
                if row.player_id == other.player_id:
                    continue
                games = head_to_head.encounters(row.player_id, other.player_id)
                if games:
                    cells[(row.player_id, other.player_id)] = games
        return CrossTable(rows=list(rows), cells=cells)
