from tallyboard.models.carryover import CarryOverPolicy, CarryOverResult
from tallyboard.models.config import StandingsConfig
from tallyboard.models.match_result import MatchResult, Side
from tallyboard.models.player import Player
from tallyboard.models.prize import Prize, PrizeAssignment, PrizeReport
from tallyboard.models.records import (
    AggregateRecord,
    AggregationResult,
    Diagnostic,
    RoundSnapshot,
    StandingsRow,
)

__all__ = [
    "AggregateRecord",
    "AggregationResult",
    "CarryOverPolicy",
    "CarryOverResult",
    "Diagnostic",
    "MatchResult",
    "Player",
    "Prize",
    "PrizeAssignment",
    "PrizeReport",
    "RoundSnapshot",
    "Side",
    "StandingsConfig",
    "StandingsRow",
]
