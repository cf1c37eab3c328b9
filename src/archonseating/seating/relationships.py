"""Static seating geometry of 4 and 5 seat tables.

Seat ``i``'s prey sits at seat ``i + 1`` and its predator at seat ``i - 1``
(modulo the table size). On a 5-seat table the players two seats away are the
grand-prey and grand-predator. On a 4-seat table the player two seats away is
the cross-table opponent.

The lookup arrays below are computed once at import time and are read-only.
"""

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

from enum import Enum
from typing import Dict, Optional

import numpy as np

from archonseating.constants import (
    OPP_CROSS_TABLE,
    OPP_GRAND_PREDATOR,
    OPP_GRAND_PREY,
    OPP_NEIGHBOUR,
    OPP_NON_NEIGHBOUR,
    OPP_OPPONENT,
    OPP_PREDATOR,
    OPP_PREY,
    OPPONENT_FLAGS,
    POS_PLAYED,
    POS_SEAT_1,
    POS_TRANSFERS,
    POS_VPS,
    POSITION_COLUMNS,
    SEAT_TRANSFERS,
    TABLE_SIZES,
)
from archonseating.exceptions import IndexOutOfRangeException, InvalidRoundException


class Relationship(Enum):
    """Relative position of another player at the same table."""

    PREY = OPP_PREY
    GRAND_PREY = OPP_GRAND_PREY
    GRAND_PREDATOR = OPP_GRAND_PREDATOR
    PREDATOR = OPP_PREDATOR
    CROSS_TABLE = OPP_CROSS_TABLE

    @property
    def is_neighbour(self) -> bool:
        return self in (Relationship.PREY, Relationship.PREDATOR)


# Relationship of the player ``offset`` seats further, per table size
_RELATIONSHIPS: Dict[int, Dict[int, Relationship]] = {
    4: {
        1: Relationship.PREY,
        2: Relationship.CROSS_TABLE,
        3: Relationship.PREDATOR,
    },
    5: {
        1: Relationship.PREY,
        2: Relationship.GRAND_PREY,
        3: Relationship.GRAND_PREDATOR,
        4: Relationship.PREDATOR,
    },
}


def _freeze(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


def _build_opponent_rows(size: int) -> np.ndarray:
    """Opponent flags indexed by seat offset (offset 0 is the player itself)."""
    rows = np.zeros((size, OPPONENT_FLAGS), dtype=np.int32)
    for offset, relationship in _RELATIONSHIPS[size].items():
        rows[offset, OPP_OPPONENT] = 1
        rows[offset, relationship.value] = 1
        if relationship.is_neighbour:
            rows[offset, OPP_NEIGHBOUR] = 1
        else:
            rows[offset, OPP_NON_NEIGHBOUR] = 1
    return _freeze(rows)


def _build_position_rows(size: int) -> np.ndarray:
    """Position row of every seat: played, vps, transfers, one-hot seat."""
    rows = np.zeros((size, POSITION_COLUMNS), dtype=np.int32)
    for seat in range(size):
        rows[seat, POS_PLAYED] = 1
        rows[seat, POS_VPS] = size
        rows[seat, POS_TRANSFERS] = SEAT_TRANSFERS[seat]
        rows[seat, POS_SEAT_1 + seat] = 1
    return _freeze(rows)


def _build_pair_block(size: int) -> np.ndarray:
    """(size x size x 8) block: flags of seat j as seen from seat i."""
    seats = np.arange(size)
    offsets = (seats[np.newaxis, :] - seats[:, np.newaxis]) % size
    return _freeze(OPPONENT_ROWS[size][offsets])


OPPONENT_ROWS: Dict[int, np.ndarray] = {
    size: _build_opponent_rows(size) for size in TABLE_SIZES
}
POSITION_ROWS: Dict[int, np.ndarray] = {
    size: _build_position_rows(size) for size in TABLE_SIZES
}
PAIR_BLOCKS: Dict[int, np.ndarray] = {
    size: _build_pair_block(size) for size in TABLE_SIZES
}


class RelationshipTable:
    """Lookup of the positional relationship between two seats of a table."""

    @staticmethod
    def _check_size(table_size: int) -> None:
        if table_size not in TABLE_SIZES:
            raise InvalidRoundException(
                f"Unsupported table size {table_size}, expected 4 or 5"
            )

    @classmethod
    def _check_seat(cls, table_size: int, seat_index: int) -> None:
        cls._check_size(table_size)
        if not 0 <= seat_index < table_size:
            raise IndexOutOfRangeException(
                f"Seat index {seat_index} out of range for a table of {table_size}"
            )

    @classmethod
    def relationship(cls, table_size: int, offset: int) -> Optional[Relationship]:
        """Relationship of the player ``offset`` seats after the reference seat.

        Returns None for offset 0 (the reference player itself). Negative
        offsets count backwards, so ``-1`` is the predator.
        """
        cls._check_size(table_size)
        offset %= table_size
        if offset == 0:
            return None
        return _RELATIONSHIPS[table_size][offset]

    @classmethod
    def between(cls, table_size: int, seat: int, other: int) -> Optional[Relationship]:
        """Relationship of ``other`` as seen from ``seat`` (both 0-based)."""
        cls._check_seat(table_size, seat)
        cls._check_seat(table_size, other)
        return cls.relationship(table_size, other - seat)

    @classmethod
    def opponent_flags(cls, table_size: int, offset: int) -> np.ndarray:
        """The 8 opponent flags for a seat offset (read-only array)."""
        cls._check_size(table_size)
        return OPPONENT_ROWS[table_size][offset % table_size]

    @classmethod
    def position_row(cls, table_size: int, seat_index: int) -> np.ndarray:
        """The 8 position columns for a seat (read-only array)."""
        cls._check_seat(table_size, seat_index)
        return POSITION_ROWS[table_size][seat_index]

    @classmethod
    def position_rows(cls, table_size: int) -> np.ndarray:
        """Position rows of every seat of a table (read-only)."""
        cls._check_size(table_size)
        return POSITION_ROWS[table_size]

    @classmethod
    def pair_block(cls, table_size: int) -> np.ndarray:
        """Opponent flags of every ordered seat pair of a table (read-only)."""
        cls._check_size(table_size)
        return PAIR_BLOCKS[table_size]
