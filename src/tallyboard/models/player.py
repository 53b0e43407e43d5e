"""Tournament-scoped player registration."""

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
from typing import Any, Dict, Optional

from tallyboard.constants import PLAYER_STATUSES, STATUS_ACTIVE
from tallyboard.exceptions import ConfigurationError


@dataclass(frozen=True)
class Player:
    """A player registered in one tournament.

    Attributes
    ----------
    id : str
        Stable identity; results refer to the player by this id.
    name : str
        Display name.
    rating : int or None
        Numeric rating, if the player has one.
    division : str or None
        Identifier of the division (group) the player currently plays in.
    status : str
        One of ``active``, ``withdrawn``, ``removed`` or ``inactive``.
    seed : int or None
        Seed number; lower seeds win the final tie-break.
    """

    id: str
    name: str
    rating: Optional[int] = None
    division: Optional[str] = None
    status: str = STATUS_ACTIVE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.status not in PLAYER_STATUSES:
            raise ConfigurationError(
                f"Unknown status {self.status!r} for player {self.id}"
            )

    @property
    def is_active(self) -> bool:
        """Is the player still playing?"""
        return self.status == STATUS_ACTIVE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "rating": self.rating,
            "division": self.division,
            "status": self.status,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data.get("name", "Unknown Player"),
            rating=data.get("rating"),
            division=data.get("division"),
            status=data.get("status", STATUS_ACTIVE),
            seed=data.get("seed"),
        )
