"""Carry-over of a player's record when moving between divisions."""

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

from decimal import Decimal
from typing import NamedTuple

from tallyboard.constants import (
    CARRYOVER_DECIMAL_PLACES,
    POLICY_CAPPED,
    POLICY_FULL,
    POLICY_NONE,
    POLICY_PARTIAL,
    POLICY_SEEDING_ONLY,
)
from tallyboard.exceptions import ConfigurationError
from tallyboard.models import AggregateRecord, CarryOverPolicy, CarryOverResult
from tallyboard.utils import round_half_up, setup_logger, to_decimal
from tallyboard.utils.validation import (
    require,
    validate_percentage,
    validate_spread_cap,
)

logger = setup_logger(__name__)


class CarryOverPreview(NamedTuple):
    """What a move would look like, before it is applied.

    ``total`` is the record the player starts with in the destination
    division; for ``seedingOnly`` it carries nothing.
    """

    current: AggregateRecord
    carryover: CarryOverResult
    total: AggregateRecord


def _rounded(value) -> float:
    return float(round_half_up(value, CARRYOVER_DECIMAL_PLACES))


class CarryOverCalculator:
    """Computes the wins and spread that follow a player to a new division.

    Policies:
    - ``none``: nothing is carried
    - ``full``: all wins and spread
    - ``partial``: a percentage of wins and spread, rounded half-up to 2 places
    - ``capped``: all wins, spread limited to ``spread_cap`` per game played
      (negative spread is never raised by the cap)
    - ``seedingOnly``: all wins and spread, used for the initial seeding only
    """

    def calculate(
        self, record: AggregateRecord, policy: CarryOverPolicy
    ) -> CarryOverResult:
        """Calculate the carry-over for one player.

        Args:
            record: The player's record in the source division
            policy: The carry-over policy to apply

        Returns:
            CarryOverResult with wins and spread rounded to 2 decimals

        Raises:
            ConfigurationError: If the policy lacks its required parameter
        """
        wins = to_decimal(record.wins)
        spread = to_decimal(record.spread)

        if policy.name == POLICY_NONE:
            carried_wins, carried_spread = Decimal(0), Decimal(0)
        elif policy.name in (POLICY_FULL, POLICY_SEEDING_ONLY):
            carried_wins, carried_spread = wins, spread
        elif policy.name == POLICY_PARTIAL:
            require(validate_percentage(policy.percentage))
            share = to_decimal(policy.percentage) / 100
            carried_wins, carried_spread = wins * share, spread * share
        elif policy.name == POLICY_CAPPED:
            require(validate_spread_cap(policy.spread_cap))
            limit = to_decimal(policy.spread_cap) * record.games_played
            carried_wins, carried_spread = wins, min(spread, limit)
        else:
            raise ConfigurationError(f"Unknown carry-over policy: {policy.name}")

        result = CarryOverResult(
            wins=_rounded(carried_wins),
            spread=_rounded(carried_spread),
            counts_toward_totals=policy.counts_toward_totals,
            policy=policy.name,
        )
        logger.debug(
            "Carry-over for %s (%s): wins=%s spread=%s",
            record.player_id,
            policy.name,
            result.wins,
            result.spread,
        )
        return result

    @staticmethod
    def apply(
        record: AggregateRecord,
        carryover: CarryOverResult,
        for_seeding: bool = False,
    ) -> AggregateRecord:
        """Add a carry-over to a destination-division record.

        Official totals leave out ``seedingOnly`` carry-overs; seeding totals
        include every carry-over.

        Args:
            record: The player's record in the destination division
            carryover: The carried values
            for_seeding: Build the record used for the initial seeding

        Returns:
            A new record; ``record`` is not modified
        """
        if not (carryover.counts_toward_totals or for_seeding):
            return record
        return record.plus(carryover.wins, carryover.spread)

    def preview(
        self, record: AggregateRecord, policy: CarryOverPolicy
    ) -> CarryOverPreview:
        """Current record, carried values and starting totals for a move."""
        carryover = self.calculate(record, policy)
        start = AggregateRecord(player_id=record.player_id)
        return CarryOverPreview(
            current=record, carryover=carryover, total=self.apply(start, carryover)
        )
