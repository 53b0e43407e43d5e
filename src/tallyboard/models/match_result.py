"""Match result data class."""

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

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional


class Side(NamedTuple):
    """One player's view of a result."""

    player_id: str
    opponent_id: Optional[str]
    own_score: int
    opponent_score: int


@dataclass(frozen=True)
class MatchResult:
    """Represents the result of a single game.

    Attributes
    ----------
    round_number : int
        Round the game belongs to (1-indexed).
    player_a_id : str
        ID of the first listed player.
    player_b_id : str or None
        ID of the second listed player, or None for a bye.
    score_a : int or None
        Score of player A. None is treated as 0.
    score_b : int or None
        Score of player B. None is treated as 0.
    tournament_id : str or None
        Tournament the result belongs to.
    is_bye : bool
        Whether player A received a bye this round.
    is_forfeit : bool
        Whether the game was decided by forfeit. Forfeits are scored as
        entered.
    """

    round_number: int
    player_a_id: str
    player_b_id: Optional[str]
    score_a: Optional[int] = 0
    score_b: Optional[int] = 0
    tournament_id: Optional[str] = None
    is_bye: bool = False
    is_forfeit: bool = False

    @property
    def is_bye_result(self) -> bool:
        """A bye is flagged explicitly or has no second player."""
        return self.is_bye or self.player_b_id is None

    @property
    def points_a(self) -> int:
        return self.score_a or 0

    @property
    def points_b(self) -> int:
        return self.score_b or 0

    def sides(self) -> List[Side]:
        """Return each participating player's view of this result.

        A bye yields a single side for player A with no opponent.
        """
        if self.is_bye_result:
            return [Side(self.player_a_id, None, self.points_a, 0)]
        return [
            Side(self.player_a_id, self.player_b_id, self.points_a, self.points_b),
            Side(self.player_b_id, self.player_a_id, self.points_b, self.points_a),
        ]

    def player_ids(self) -> List[str]:
        """IDs of the players taking part (one for a bye)."""
        return [side.player_id for side in self.sides()]

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match result to dictionary."""
        return {
            "tournament_id": self.tournament_id,
            "round_number": self.round_number,
            "player_a_id": self.player_a_id,
            "player_b_id": self.player_b_id,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "is_bye": self.is_bye,
            "is_forfeit": self.is_forfeit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """Deserialize match result from dictionary."""
        player_b_id = data.get("player_b_id")
        return cls(
            tournament_id=data.get("tournament_id"),
            round_number=data["round_number"],
            player_a_id=str(data["player_a_id"]),
            player_b_id=str(player_b_id) if player_b_id is not None else None,
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            is_bye=data.get("is_bye", False),
            is_forfeit=data.get("is_forfeit", False),
        )
