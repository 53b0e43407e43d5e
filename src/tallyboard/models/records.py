"""Derived records produced by the standings engine.

None of these are persisted. They are rebuilt from match results on demand.
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

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from tallyboard.constants import DEFAULT_TIE_WIN_VALUE, WIN_VALUE
from tallyboard.models.player import Player


@dataclass(frozen=True)
class AggregateRecord:
    """Cumulative record of one player.

    Ties add the tie value (0.5 by default) to ``wins`` and are also counted
    in ``ties``. ``points`` is therefore just ``wins``.

    Attributes
    ----------
    player_id : str
        The player this record belongs to.
    wins : float
        Wins with ties folded in.
    losses : int
        Games lost.
    ties : int
        Games tied.
    spread : int or float
        Sum of (own score - opponent score); a bye adds the bye score.
        Fractional only after a partial carry-over is applied.
    games_played : int
        Games played, byes included.
    byes : int
        Byes received.
    match_wins : int
        Best-of series won (series standings only).
    match_losses : int
        Best-of series lost (series standings only).
    """

    player_id: str
    wins: float = 0.0
    losses: int = 0
    ties: int = 0
    spread: float = 0
    games_played: int = 0
    byes: int = 0
    match_wins: int = 0
    match_losses: int = 0

    @property
    def points(self) -> float:
        """Total points used for ranking. Ties are already in ``wins``."""
        return self.wins

    @property
    def win_percentage(self) -> float:
        """Points per game played, 0.0 before the first game."""
        if self.games_played == 0:
            return 0.0
        return self.wins / self.games_played

    def with_game(
        self,
        own_score: int,
        opponent_score: int,
        tie_value: float = DEFAULT_TIE_WIN_VALUE,
    ) -> "AggregateRecord":
        """Return a new record with one played game folded in."""
        if own_score > opponent_score:
            wins, losses, ties = self.wins + WIN_VALUE, self.losses, self.ties
        elif own_score < opponent_score:
            wins, losses, ties = self.wins, self.losses + 1, self.ties
        else:
            wins, losses, ties = self.wins + tie_value, self.losses, self.ties + 1

        return replace(
            self,
            wins=wins,
            losses=losses,
            ties=ties,
            spread=self.spread + (own_score - opponent_score),
            games_played=self.games_played + 1,
        )

    def with_bye(self, bye_score: int) -> "AggregateRecord":
        """Return a new record with a bye folded in (a win worth its score)."""
        return replace(
            self,
            wins=self.wins + WIN_VALUE,
            spread=self.spread + bye_score,
            games_played=self.games_played + 1,
            byes=self.byes + 1,
        )

    def with_series(self, won: bool) -> "AggregateRecord":
        """Return a new record with one decided best-of series folded in."""
        if won:
            return replace(self, match_wins=self.match_wins + 1)
        return replace(self, match_losses=self.match_losses + 1)

    def plus(self, wins: float, spread: float) -> "AggregateRecord":
        """Return a new record with extra wins and spread (carry-over)."""
        return replace(self, wins=self.wins + wins, spread=self.spread + spread)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to dictionary."""
        return {
            "player_id": self.player_id,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "spread": self.spread,
            "games_played": self.games_played,
            "byes": self.byes,
            "match_wins": self.match_wins,
            "match_losses": self.match_losses,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregateRecord":
        """Deserialize record from dictionary."""
        return cls(
            player_id=str(data["player_id"]),
            wins=data.get("wins", 0.0),
            losses=data.get("losses", 0),
            ties=data.get("ties", 0),
            spread=data.get("spread", 0),
            games_played=data.get("games_played", 0),
            byes=data.get("byes", 0),
            match_wins=data.get("match_wins", 0),
            match_losses=data.get("match_losses", 0),
        )


@dataclass(frozen=True)
class Diagnostic:
    """A skipped or suspicious input row, meant for an administrator."""

    kind: str
    message: str
    round_number: Optional[int] = None
    player_ids: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "round_number": self.round_number,
            "player_ids": list(self.player_ids),
        }


@dataclass(frozen=True)
class StandingsRow:
    """One ranked entry in the standings.

    Attributes
    ----------
    rank : int
        Positional rank, unique within the standings (1 is first).
    player : Player
        The ranked player.
    record : AggregateRecord
        The record the rank was computed from.
    tiebreak_values : tuple
        ``(criterion, value)`` pairs in the order they were applied. A value
        of None means the criterion was skipped for this player's group.
    tied_with_previous : bool
        The row above has identical values on the tie-relevant criteria.
    tied_with_next : bool
        The row below has identical values on the tie-relevant criteria.
    """

    rank: int
    player: Player
    record: AggregateRecord
    tiebreak_values: Tuple[Tuple[str, Optional[float]], ...] = ()
    tied_with_previous: bool = False
    tied_with_next: bool = False

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def is_tied(self) -> bool:
        return self.tied_with_previous or self.tied_with_next

    def tiebreak(self, criterion: str) -> Optional[float]:
        """Value this row held for ``criterion``, if it was applied."""
        for key, value in self.tiebreak_values:
            if key == criterion:
                return value
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize row to dictionary."""
        return {
            "rank": self.rank,
            "player": self.player.to_dict(),
            "record": self.record.to_dict(),
            "tiebreak_values": [list(pair) for pair in self.tiebreak_values],
            "tied_with_previous": self.tied_with_previous,
            "tied_with_next": self.tied_with_next,
        }


@dataclass(frozen=True)
class RoundSnapshot:
    """A player's state at the end of one round, for wall charts.

    Running totals and both ranks are as of the standings computed from every
    result up to and including ``round_number``. A rank is None for a
    player left out of the ranking (for example a removed player).
    """

    round_number: int
    opponent_id: Optional[str]
    opponent_name: Optional[str]
    own_score: int
    opponent_score: int
    outcome: str
    wins: float
    losses: int
    ties: int
    spread: float
    rank: Optional[int]
    opponent_rank: Optional[int]
    is_bye: bool = False

    @property
    def round_spread(self) -> int:
        """Spread earned in this round alone."""
        if self.is_bye:
            return self.own_score
        return self.own_score - self.opponent_score

    def to_dict(self) -> Dict[str, Any]:
        """Serialize snapshot to dictionary."""
        return {
            "round_number": self.round_number,
            "opponent_id": self.opponent_id,
            "opponent_name": self.opponent_name,
            "own_score": self.own_score,
            "opponent_score": self.opponent_score,
            "round_spread": self.round_spread,
            "outcome": self.outcome,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "spread": self.spread,
            "rank": self.rank,
            "opponent_rank": self.opponent_rank,
            "is_bye": self.is_bye,
        }


@dataclass(frozen=True)
class AggregationResult:
    """Records for every registered player plus the rows that were skipped."""

    records: Dict[str, AggregateRecord]
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def __getitem__(self, player_id: str) -> AggregateRecord:
        return self.records[player_id]
