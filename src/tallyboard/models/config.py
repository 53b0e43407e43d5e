"""StandingsConfig data class."""

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
from typing import Any, Dict, List, Optional

from tallyboard.constants import (
    DEFAULT_EXCLUDED_STATUSES,
    DEFAULT_SEED,
    DEFAULT_TIE_DEPTH,
    DEFAULT_TIE_WIN_VALUE,
    DEFAULT_TIEBREAK_ORDER,
    PLAYER_STATUSES,
    TB_MATCH_WINS,
    TB_SEED,
    TIEBREAK_NAMES,
)
from tallyboard.exceptions import ConfigurationError


@dataclass(frozen=True)
class StandingsConfig:
    """Standings computation settings for one tournament.

    Attributes
    ----------
    tie_win_value : float
        Amount a tie adds to each side's wins.
    tiebreak_order : list of str
        Ranking criteria in priority order. The seed fallback is always
        applied after them and must not be listed.
    tie_depth : int
        Number of leading criteria on which adjacent players must be equal to
        count as a statistical tie (for prize splitting).
    total_rounds : int or None
        Configured number of rounds; inferred from results when None.
    series_best_of : int or None
        Best-of length for series (league) standings. When set, series won
        are compared before every other criterion.
    excluded_statuses : list of str
        Player statuses left out of the ranking.
    default_seed : int
        Seed assumed for players without one.
    """

    tie_win_value: float = DEFAULT_TIE_WIN_VALUE
    tiebreak_order: List[str] = field(
        default_factory=lambda: list(DEFAULT_TIEBREAK_ORDER)
    )
    tie_depth: int = DEFAULT_TIE_DEPTH
    total_rounds: Optional[int] = None
    series_best_of: Optional[int] = None
    excluded_statuses: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_STATUSES)
    )
    default_seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if not 0 <= self.tie_win_value <= 1:
            raise ConfigurationError(
                f"tie_win_value must be between 0 and 1, got {self.tie_win_value}"
            )

        for key in self.tiebreak_order:
            if key not in TIEBREAK_NAMES or key in (TB_SEED, TB_MATCH_WINS):
                raise ConfigurationError(f"Unsupported tiebreak criterion: {key!r}")
        if len(set(self.tiebreak_order)) != len(self.tiebreak_order):
            raise ConfigurationError("Tiebreak criteria must not repeat")

        if self.tie_depth < 1:
            raise ConfigurationError(
                f"tie_depth must be positive, got {self.tie_depth}"
            )
        if self.total_rounds is not None and self.total_rounds < 0:
            raise ConfigurationError(
                f"total_rounds must not be negative, got {self.total_rounds}"
            )
        if self.series_best_of is not None and self.series_best_of < 1:
            raise ConfigurationError(
                f"series_best_of must be positive, got {self.series_best_of}"
            )
        for status in self.excluded_statuses:
            if status not in PLAYER_STATUSES:
                raise ConfigurationError(f"Unknown player status: {status!r}")

    @property
    def ranking_criteria(self) -> List[str]:
        """Criteria actually compared, in order, before the seed fallback."""
        if self.series_best_of:
            return [TB_MATCH_WINS] + list(self.tiebreak_order)
        return list(self.tiebreak_order)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "tie_win_value": self.tie_win_value,
            "tiebreak_order": list(self.tiebreak_order),
            "tie_depth": self.tie_depth,
            "total_rounds": self.total_rounds,
            "series_best_of": self.series_best_of,
            "excluded_statuses": list(self.excluded_statuses),
            "default_seed": self.default_seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StandingsConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            tie_win_value=data.get("tie_win_value", DEFAULT_TIE_WIN_VALUE),
            tiebreak_order=data.get("tiebreak_order", list(DEFAULT_TIEBREAK_ORDER)),
            tie_depth=data.get("tie_depth", DEFAULT_TIE_DEPTH),
            total_rounds=data.get("total_rounds"),
            series_best_of=data.get("series_best_of"),
            excluded_statuses=data.get(
                "excluded_statuses", list(DEFAULT_EXCLUDED_STATUSES)
            ),
            default_seed=data.get("default_seed", DEFAULT_SEED),
        )
