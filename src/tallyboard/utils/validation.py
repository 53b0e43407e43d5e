"""Validation utilities for Tally Board.

This module provides reusable validation functions with consistent error handling.
Row-level checks return a ValidationResult so callers can collect diagnostics;
the ``*_strict`` variants raise ConfigurationError for configuration input.
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

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, Optional, Union

from tallyboard.exceptions import ConfigurationError

if TYPE_CHECKING:
    from tallyboard.models.match_result import MatchResult
    from tallyboard.models.prize import Prize


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
    """

    def __init__(self, is_valid: bool, error_message: Optional[str] = None):
        self.is_valid = is_valid
        self.error_message = error_message

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return "ValidationResult(VALID)"
        return f"ValidationResult(INVALID, {self.error_message!r})"


VALID = ValidationResult(is_valid=True)


def _invalid(message: str) -> ValidationResult:
    return ValidationResult(is_valid=False, error_message=message)


def _is_finite_number(value: Union[int, float, None]) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


# ========== Match Result Validation ==========


def validate_match_result(result: "MatchResult") -> ValidationResult:
    """Validate a single match result row.

    A missing score (None) is valid and later treated as 0. Negative or
    non-numeric scores, non-positive rounds and self pairings are not.

    Args:
        result: The result row to check

    Returns:
        ValidationResult with validation status
    """
    if not isinstance(result.round_number, int) or result.round_number < 1:
        return _invalid(f"Invalid round number: {result.round_number!r}")

    if not result.player_a_id:
        return _invalid("Result has no player")

    for label, score in (("score_a", result.score_a), ("score_b", result.score_b)):
        if score is None:
            continue
        if not _is_finite_number(score):
            return _invalid(f"Invalid {label}: {score!r}")
        if score < 0:
            return _invalid(f"Negative {label}: {score}")

    if not result.is_bye_result and result.player_a_id == result.player_b_id:
        return _invalid(f"Player {result.player_a_id} is paired against themselves")

    return VALID


# ========== Carry-Over Parameter Validation ==========


def validate_percentage(percentage: Optional[float]) -> ValidationResult:
    """Validate a partial carry-over percentage (0 to 100 inclusive)."""
    if percentage is None:
        return _invalid("Percentage required for partial carry-over policy")
    if not _is_finite_number(percentage):
        return _invalid(f"Invalid percentage: {percentage!r}")
    if not 0 <= percentage <= 100:
        return _invalid(f"Percentage must be between 0 and 100, got {percentage}")
    return VALID


def validate_spread_cap(spread_cap: Optional[float]) -> ValidationResult:
    """Validate a capped carry-over spread cap (per game, non-negative)."""
    if spread_cap is None:
        return _invalid("Spread cap required for capped carry-over policy")
    if not _is_finite_number(spread_cap):
        return _invalid(f"Invalid spread cap: {spread_cap!r}")
    if spread_cap < 0:
        return _invalid(f"Spread cap must not be negative, got {spread_cap}")
    return VALID


def require(result: ValidationResult) -> None:
    """Raise ConfigurationError if the validation failed.

    Raises:
        ConfigurationError: If ``result`` is invalid
    """
    if not result.is_valid:
        raise ConfigurationError(result.error_message)


# ========== Prize Validation ==========


def validate_prize(prize: "Prize") -> ValidationResult:
    """Validate a single prize entry."""
    if (
        not isinstance(prize.rank, int)
        or isinstance(prize.rank, bool)
        or prize.rank < 1
    ):
        return _invalid(f"Prize rank must be a positive integer, got {prize.rank!r}")
    if prize.amount is None and not prize.description:
        return _invalid(f"Prize for rank {prize.rank} needs an amount or a description")
    if prize.amount is not None:
        if not _is_finite_number(prize.amount):
            return _invalid(f"Invalid amount for rank {prize.rank}: {prize.amount!r}")
        if prize.amount < 0:
            return _invalid(f"Negative amount for rank {prize.rank}: {prize.amount}")
    return VALID


def validate_prizes_strict(prizes: Iterable["Prize"]) -> None:
    """Validate a prize list and raise if it is unusable.

    Raises:
        ConfigurationError: If any prize is invalid or two prizes share a rank
    """
    seen = set()
    for prize in prizes:
        require(validate_prize(prize))
        if prize.rank in seen:
            raise ConfigurationError(f"Duplicate prize rank: {prize.rank}")
        seen.add(prize.rank)
