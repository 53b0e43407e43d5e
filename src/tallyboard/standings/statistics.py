"""Game statistics for public tournament pages.

All views skip byes and return at most ``limit`` entries, best first. Sort
keys always end with round number and player ids so equal values come out
in a fixed order.
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

from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from tallyboard.constants import DEFAULT_STATISTICS_LIMIT
from tallyboard.models import MatchResult, Player


class GameHighlight(NamedTuple):
    """A single game worth listing.

    ``player_id`` is the winner; for a tied game it is player A.
    """

    round_number: int
    player_id: str
    opponent_id: str
    player_score: int
    opponent_score: int
    rating_gap: Optional[int] = None

    @property
    def combined_score(self) -> int:
        return self.player_score + self.opponent_score

    def to_dict(self) -> Dict[str, Any]:
        data = self._asdict()
        data["combined_score"] = self.combined_score
        return data


class OpponentScoreAverage(NamedTuple):
    """Average score a player's opponents made against them."""

    player_id: str
    games_played: int
    average_opponent_score: float

    def to_dict(self) -> Dict[str, Any]:
        return self._asdict()


def _games(results: Iterable[MatchResult]) -> List[GameHighlight]:
    """Played games with the winner listed first."""
    games = []
    for result in results:
        if result.is_bye_result:
            continue
        if result.points_b > result.points_a:
            games.append(
                GameHighlight(
                    result.round_number,
                    result.player_b_id,
                    result.player_a_id,
                    result.points_b,
                    result.points_a,
                )
            )
        else:
            games.append(
                GameHighlight(
                    result.round_number,
                    result.player_a_id,
                    result.player_b_id,
                    result.points_a,
                    result.points_b,
                )
            )
    return games


def _order(game: GameHighlight):
    return (game.round_number, game.player_id, game.opponent_id)


def giant_killers(
    results: Iterable[MatchResult],
    players: Iterable[Player],
    limit: int = DEFAULT_STATISTICS_LIMIT,
) -> List[GameHighlight]:
    """Wins by the lower-rated player, biggest rating gap first.

    Ties and games involving an unrated player are left out.
    """
    ratings = {p.id: p.rating for p in players}
    upsets = []
    for game in _games(results):
        if game.player_score == game.opponent_score:
            continue
        winner_rating = ratings.get(game.player_id)
        loser_rating = ratings.get(game.opponent_id)
        if winner_rating is None or loser_rating is None:
            continue
        if winner_rating < loser_rating:
            upsets.append(game._replace(rating_gap=loser_rating - winner_rating))

    upsets.sort(key=lambda g: (-g.rating_gap,) + _order(g))
    return upsets[:limit]


def high_combined_scores(
    results: Iterable[MatchResult], limit: int = DEFAULT_STATISTICS_LIMIT
) -> List[GameHighlight]:
    """Games with the highest combined score."""
    games = _games(results)
    games.sort(key=lambda g: (-g.combined_score,) + _order(g))
    return games[:limit]


def tough_breaks(
    results: Iterable[MatchResult], limit: int = DEFAULT_STATISTICS_LIMIT
) -> List[GameHighlight]:
    """Losses with the highest losing score."""
    losses = [g for g in _games(results) if g.player_score > g.opponent_score]
    losses.sort(key=lambda g: (-g.opponent_score,) + _order(g))
    return losses[:limit]


def average_opponent_scores(
    results: Iterable[MatchResult],
    players: Iterable[Player],
    limit: int = DEFAULT_STATISTICS_LIMIT,
) -> List[OpponentScoreAverage]:
    """Average opponent score per player, lowest (best defence) first.

    Players without a game are listed last.
    """
    totals: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for player in players:
        totals[player.id] = 0
        counts[player.id] = 0

    for result in results:
        if result.is_bye_result:
            continue
        for side in result.sides():
            if side.player_id not in totals:
                continue
            totals[side.player_id] += side.opponent_score
            counts[side.player_id] += 1

    averages = [
        OpponentScoreAverage(
            pid, counts[pid], totals[pid] / counts[pid] if counts[pid] else 0.0
        )
        for pid in totals
    ]
    averages.sort(
        key=lambda a: (a.games_played == 0, a.average_opponent_score, a.player_id)
    )
    return averages[:limit]
