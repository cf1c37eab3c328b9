"""Exceptions for use in Archon Seating"""

# Archon Seating
# Copyright (C) 2025  Archon Seating developers
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

from typing import Hashable


# ========== Base Application Exception ==========


class ArchonSeatingException(Exception):
    """Base exception for all Archon Seating errors.

    All custom exceptions in the package inherit from this class, so callers
    can catch every seating-specific error with a single except clause.
    """

    pass


# ========== Seating Exceptions ==========


class SeatingException(ArchonSeatingException):
    """Base exception for round and seating errors."""

    pass


class InsufficientPlayersException(SeatingException):
    """Raised when fewer than 6 players are supplied for a round."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Need at least 6 players, got {count}")


class RequiresStaggeredSeatingException(SeatingException):
    """Raised when the player count cannot be split into tables of 4 and 5.

    6, 7 and 11 players require a staggered round, which is not supported.
    """

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"{count} players require a staggered round")


class InvalidRoundException(SeatingException):
    """Raised when a round breaks the table size or unique player invariants."""

    pass


class IndexOutOfRangeException(SeatingException, IndexError):
    """Raised when a seat, table or player index is out of bounds."""

    pass


# ========== Player Exceptions ==========


class PlayerException(ArchonSeatingException):
    """Base exception for player-related errors."""

    pass


class UnknownPlayerException(PlayerException, KeyError):
    """Raised when a player was never registered in the player index."""

    def __init__(self, player: Hashable):
        self.player = player
        super().__init__(f"Unknown player: {player!r}")

    def __str__(self) -> str:
        return self.args[0]


# ========== Configuration Exceptions ==========


class ConfigurationException(ArchonSeatingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
