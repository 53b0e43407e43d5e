"""Shared helpers for Tally Board: logging setup and exact rounding."""

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

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

PACKAGE_LOGGER_NAME = "tallyboard"

# The library never configures the root logger; applications attach handlers.
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logger(name: str) -> logging.Logger:
    """Return the logger for a module inside the package.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        A logger that propagates to the ``tallyboard`` package logger
    """
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal through its shortest repr.

    ``Decimal(str(0.1))`` is ``Decimal("0.1")`` while ``Decimal(0.1)`` carries
    the binary expansion, which would break half-up rounding at the boundary.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number, places: int = 2) -> Decimal:
    """Round to ``places`` decimals with half-up rounding.

    Half-way values round away from zero, for negatives too.

    Args:
        value: The number to round
        places: Number of decimal places to keep

    Returns:
        The rounded value as a Decimal

    Example:
        >>> round_half_up(66.5, 2)
        Decimal('66.50')
        >>> round_half_up(2.345, 2)
        Decimal('2.35')
    """
    quantum = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def as_number(value: Decimal) -> Union[int, float]:
    """Return an int for whole Decimals and a float otherwise."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
