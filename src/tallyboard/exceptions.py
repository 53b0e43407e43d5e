"""Exceptions for use in Tally Board"""

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


# ========== Base Application Exception ==========


class TallyBoardException(Exception):
    """Base exception for all Tally Board errors.

    All custom exceptions in the engine inherit from this class.
    This enables catching all engine-specific errors with a single except clause.
    """

    pass


# ========== Configuration Exceptions ==========


class ConfigurationError(TallyBoardException):
    """Raised when configuration is missing or invalid.

    Covers carry-over policies without their required parameter, unknown
    policy names, malformed prize lists and invalid standings settings.
    """

    pass


# ========== Data Exceptions ==========


class DataIntegrityError(TallyBoardException):
    """Raised when requested data cannot exist in the supplied snapshot.

    Row-level anomalies (a result naming an unknown player) are not raised;
    they are returned as diagnostics alongside the computed value.
    """

    pass


# ========== Prize Exceptions ==========


class RoundingToleranceError(TallyBoardException):
    """Raised when split prize shares drift beyond the rounding tolerance."""

    pass
