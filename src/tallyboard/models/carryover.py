"""Carry-over policy and result value objects."""

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

from tallyboard.constants import (
    CARRYOVER_POLICIES,
    POLICY_CAPPED,
    POLICY_DESCRIPTIONS,
    POLICY_FULL,
    POLICY_NONE,
    POLICY_PARTIAL,
    POLICY_SEEDING_ONLY,
)
from tallyboard.exceptions import ConfigurationError


@dataclass(frozen=True)
class CarryOverPolicy:
    """How much of a record follows a player into a new division.

    The required parameter is only checked when the policy is applied, so a
    stored configuration that lacks it can still be loaded and reported.

    Attributes
    ----------
    name : str
        One of ``none``, ``full``, ``partial``, ``capped`` or ``seedingOnly``.
    percentage : float or None
        Share of wins and spread carried (``partial`` only), 0 to 100.
    spread_cap : float or None
        Maximum carried spread per game played (``capped`` only).
    """

    name: str = POLICY_NONE
    percentage: Optional[float] = None
    spread_cap: Optional[float] = None

    def __post_init__(self) -> None:
        if self.name not in CARRYOVER_POLICIES:
            raise ConfigurationError(f"Unknown carry-over policy: {self.name}")

    @classmethod
    def none(cls) -> "CarryOverPolicy":
        return cls(POLICY_NONE)

    @classmethod
    def full(cls) -> "CarryOverPolicy":
        return cls(POLICY_FULL)

    @classmethod
    def partial(cls, percentage: Optional[float]) -> "CarryOverPolicy":
        return cls(POLICY_PARTIAL, percentage=percentage)

    @classmethod
    def capped(cls, spread_cap: Optional[float]) -> "CarryOverPolicy":
        return cls(POLICY_CAPPED, spread_cap=spread_cap)

    @classmethod
    def seeding_only(cls) -> "CarryOverPolicy":
        return cls(POLICY_SEEDING_ONLY)

    @property
    def counts_toward_totals(self) -> bool:
        """Carried values join official totals for every policy but seedingOnly."""
        return self.name != POLICY_SEEDING_ONLY

    def describe(self) -> str:
        """Human-readable summary, as shown before a promotion or demotion."""
        return POLICY_DESCRIPTIONS[self.name].format(
            percentage=self.percentage, spread_cap=self.spread_cap
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize policy to dictionary."""
        return {
            "policy": self.name,
            "percentage": self.percentage,
            "spread_cap": self.spread_cap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CarryOverPolicy":
        """Deserialize policy from a stored carry-over configuration.

        Raises:
            ConfigurationError: If the policy name is unknown
        """
        return cls(
            name=data.get("policy", POLICY_NONE),
            percentage=data.get("percentage"),
            spread_cap=data.get("spread_cap"),
        )


@dataclass(frozen=True)
class CarryOverResult:
    """Values to seed into the destination division.

    Attributes
    ----------
    wins : float
        Carried wins, rounded to 2 decimals.
    spread : float
        Carried spread, rounded to 2 decimals.
    counts_toward_totals : bool
        False for ``seedingOnly``: the values only seed the initial ranking.
    policy : str
        Name of the policy that produced this result.
    """

    wins: float
    spread: float
    counts_toward_totals: bool = True
    policy: str = POLICY_NONE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize carry-over result to dictionary."""
        return {
            "carryover_wins": self.wins,
            "carryover_spread": self.spread,
            "counts_toward_totals": self.counts_toward_totals,
            "policy": self.policy,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CarryOverResult":
        """Deserialize carry-over result from dictionary."""
        return cls(
            wins=data.get("carryover_wins", 0.0),
            spread=data.get("carryover_spread", 0.0),
            counts_toward_totals=data.get("counts_toward_totals", True),
            policy=data.get("policy", POLICY_NONE),
        )
