"""Prize distribution over final standings.

Prizes are matched to standings positions by rank. When a block of
statistically tied players covers one or more prize ranks, the prizes of those
ranks are pooled and shared evenly across the whole block.
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

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from tallyboard.constants import PRIZE_ROUNDING_TOLERANCE, SPLIT_DESCRIPTION_SEPARATOR
from tallyboard.exceptions import RoundingToleranceError
from tallyboard.models import Prize, PrizeAssignment, PrizeReport, StandingsRow
from tallyboard.standings.tiebreak_ranker import tie_blocks
from tallyboard.utils import as_number, round_half_up, setup_logger, to_decimal
from tallyboard.utils.validation import validate_prizes_strict

logger = setup_logger(__name__)


class PrizeSplitter:
    """Assigns prizes to ranked players, splitting across tied blocks."""

    def __init__(self, tolerance: int = PRIZE_ROUNDING_TOLERANCE) -> None:
        self.tolerance = tolerance

    def distribute(
        self, rows: Sequence[StandingsRow], prizes: Sequence[Prize]
    ) -> PrizeReport:
        """Distribute prizes over the standings.

        Args:
            rows: Final standings in rank order
            prizes: Prize list; ranks must be unique and positive

        Returns:
            PrizeReport with one assignment per row and any prizes left over

        Raises:
            ConfigurationError: If the prize list is invalid
            RoundingToleranceError: If split shares drift from their pool
        """
        validate_prizes_strict(prizes)
        by_rank: Dict[int, Prize] = {prize.rank: prize for prize in prizes}

        assignments: List[PrizeAssignment] = []
        for start, end in tie_blocks(list(rows)):
            block = list(rows[start : end + 1])
            # Positions are 1-based
            covered = [
                by_rank[position]
                for position in range(start + 1, end + 2)
                if position in by_rank
            ]
            if not covered:
                assignments.extend(
                    PrizeAssignment(
                        position=index + 1,
                        player_id=row.player_id,
                        is_tied=row.is_tied,
                    )
                    for index, row in enumerate(block, start=start)
                )
            elif len(block) == 1:
                prize = covered[0]
                assignments.append(
                    PrizeAssignment(
                        position=start + 1,
                        player_id=block[0].player_id,
                        prize=prize,
                        amount=prize.amount,
                        is_tied=block[0].is_tied,
                    )
                )
            else:
                assignments.extend(self._split(block, start, covered))

        unassigned = [
            prize
            for prize in sorted(prizes, key=lambda p: p.rank)
            if prize.rank > len(rows)
        ]
        total_pool = sum(
            (to_decimal(p.amount) for p in prizes if p.amount is not None), Decimal(0)
        )
        distributed = sum(
            (to_decimal(a.amount) for a in assignments if a.amount is not None),
            Decimal(0),
        )

        if unassigned:
            logger.info("%s prize(s) left unassigned", len(unassigned))

        return PrizeReport(
            assignments=assignments,
            unassigned=unassigned,
            total_pool=as_number(total_pool),
            distributed_amount=as_number(distributed),
        )

    def _split(
        self, block: List[StandingsRow], start: int, covered: List[Prize]
    ) -> List[PrizeAssignment]:
        """Pool the covered prizes and share them across a tied block."""
        amounts = [to_decimal(p.amount) for p in covered if p.amount is not None]
        pool: Optional[Decimal] = sum(amounts, Decimal(0)) if amounts else None
        descriptions = [p.description for p in covered if p.description]
        combined = Prize(
            rank=start + 1,
            amount=as_number(pool) if pool is not None else None,
            description=SPLIT_DESCRIPTION_SEPARATOR.join(descriptions) or None,
        )

        shares: List[Optional[Decimal]] = [None] * len(block)
        if pool is not None:
            shares = self._shares(pool, len(block))

        logger.debug(
            "Splitting %s prize(s) worth %s across %s tied players",
            len(covered),
            combined.amount,
            len(block),
        )
        return [
            PrizeAssignment(
                position=start + 1 + offset,
                player_id=row.player_id,
                prize=combined,
                amount=as_number(share) if share is not None else None,
                is_split=True,
                original_amount=combined.amount,
                split_count=len(block),
                is_tied=True,
            )
            for offset, (row, share) in enumerate(zip(block, shares))
        ]

    def _shares(self, pool: Decimal, count: int) -> List[Decimal]:
        """Whole-unit shares of ``pool`` that add back up to it.

        Each share is the even share rounded half-up. The rounding remainder is
        handed out one unit at a time: extra units go to the highest-placed
        recipients, missing units are taken from the lowest-placed.

        Raises:
            RoundingToleranceError: If the shares still miss the pool by more
                than the tolerance
        """
        base = round_half_up(pool / count, 0)
        shares = [base] * count

        remainder = pool - base * count
        index = 0
        while remainder >= 1:
            shares[index % count] += 1
            remainder -= 1
            index += 1
        index = count - 1
        while remainder <= -1:
            shares[index % count] -= 1
            remainder += 1
            index -= 1

        drift = abs(pool - sum(shares, Decimal(0)))
        if drift > self.tolerance:
            raise RoundingToleranceError(
                f"Split of {pool} across {count} players drifts by {drift}"
            )
        return shares
