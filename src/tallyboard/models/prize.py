"""Prize configuration and prize assignment data classes."""

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
from typing import Any, Dict, List, Optional, Union

Amount = Union[int, float]


@dataclass(frozen=True)
class Prize:
    """A prize for a final rank.

    Attributes
    ----------
    rank : int
        Rank the prize is awarded to; unique within a tournament.
    amount : int or float or None
        Monetary amount, if any.
    description : str or None
        Non-monetary description (a trophy, a book), if any.
    """

    rank: int
    amount: Optional[Amount] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize prize to dictionary."""
        return {
            "rank": self.rank,
            "amount": self.amount,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prize":
        """Deserialize prize from dictionary."""
        return cls(
            rank=data["rank"],
            amount=data.get("amount"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class PrizeAssignment:
    """What one standings position receives.

    Attributes
    ----------
    position : int
        Positional rank of the player.
    player_id : str
        The recipient.
    prize : Prize or None
        The prize awarded at this position. For a split, a combined prize
        carrying the pooled amount and descriptions. None beyond the last prize.
    amount : int or float or None
        The recipient's share (whole units when split).
    is_split : bool
        Whether the prize was pooled across tied players.
    original_amount : int or float or None
        Pooled total before splitting, kept for display.
    split_count : int
        Number of players sharing the pool (1 when not split).
    is_tied : bool
        Whether the player is in a statistical tie.
    """

    position: int
    player_id: str
    prize: Optional[Prize] = None
    amount: Optional[Amount] = None
    is_split: bool = False
    original_amount: Optional[Amount] = None
    split_count: int = 1
    is_tied: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize assignment to dictionary."""
        return {
            "position": self.position,
            "player_id": self.player_id,
            "prize": self.prize.to_dict() if self.prize else None,
            "amount": self.amount,
            "is_split": self.is_split,
            "original_amount": self.original_amount,
            "split_count": self.split_count,
            "is_tied": self.is_tied,
        }


@dataclass(frozen=True)
class PrizeReport:
    """Result of distributing a prize list over the standings."""

    assignments: List[PrizeAssignment] = field(default_factory=list)
    unassigned: List[Prize] = field(default_factory=list)
    total_pool: Amount = 0
    distributed_amount: Amount = 0

    def for_player(self, player_id: str) -> Optional[PrizeAssignment]:
        for assignment in self.assignments:
            if assignment.player_id == player_id:
                return assignment
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize report to dictionary."""
        return {
            "assignments": [a.to_dict() for a in self.assignments],
            "unassigned": [p.to_dict() for p in self.unassigned],
            "total_pool": self.total_pool,
            "distributed_amount": self.distributed_amount,
        }
