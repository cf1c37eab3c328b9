"""Round data model and default partition of players into tables."""

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

import random
from typing import Iterable, Iterator, List, Sequence, Tuple

from archonseating.constants import MIN_PLAYERS, STAGGERED_COUNTS, TABLE_SIZES
from archonseating.exceptions import (
    IndexOutOfRangeException,
    InsufficientPlayersException,
    InvalidRoundException,
    RequiresStaggeredSeatingException,
)
from archonseating.type_hints import Player, SeatAddress, Table
from archonseating.utils import setup_logger

logger = setup_logger(__name__)


def table_layout(players_count: int) -> List[int]:
    """Return the table sizes for ``players_count`` players.

    Tables of 5 come first, followed by the minimal number of tables of 4.

    Raises:
        InsufficientPlayersException: If fewer than 6 players are given
        RequiresStaggeredSeatingException: For 6, 7 or 11 players
    """
    if players_count < MIN_PLAYERS:
        raise InsufficientPlayersException(players_count)
    if players_count in STAGGERED_COUNTS:
        raise RequiresStaggeredSeatingException(players_count)
    fours = (5 - players_count % 5) % 5
    fives = (players_count - 4 * fours) // 5
    return [5] * fives + [4] * fours


def partition_players(players: Sequence[Player]) -> "Round":
    """Split an ordered list of players into one round's worth of tables.

    The first ``5 * fives`` players fill the 5-seat tables in order, the
    remaining players fill the 4-seat tables. The optimizer is responsible for
    reshuffling seats afterwards.

    Args:
        players: Ordered list of distinct players

    Returns:
        A new Round

    Raises:
        InsufficientPlayersException: If fewer than 6 players are given
        RequiresStaggeredSeatingException: For 6, 7 or 11 players
        InvalidRoundException: If a player appears twice
    """
    players = list(players)
    layout = table_layout(len(players))
    tables = []
    seated = 0
    for size in layout:
        tables.append(players[seated : seated + size])
        seated += size
    logger.debug(f"Partitioned {len(players)} players into tables {layout}")
    return Round(tables)


def get_rounds(players: Sequence[Player], count: int) -> List["Round"]:
    """Build ``count`` default-partitioned rounds of the same players."""
    return [partition_players(players) for _ in range(count)]


class Round:
    """An ordered sequence of tables, each an ordered sequence of players.

    Seat order is significant: it encodes the predator / prey relationships.
    The round owns its tables. Reads return copies and writes go through
    explicit ``(table_index, seat_index)`` addresses, so no caller can hold a
    reference into the internal lists.
    """

    def __init__(self, tables: Iterable[Iterable[Player]] = ()):
        self._tables: List[Table] = [list(table) for table in tables]
        self._validate()

    @classmethod
    def from_players(cls, players: Sequence[Player]) -> "Round":
        """Alias of :func:`partition_players`."""
        return partition_players(players)

    def _validate(self) -> None:
        seen = set()
        for index, table in enumerate(self._tables):
            if len(table) not in TABLE_SIZES:
                raise InvalidRoundException(
                    f"Table {index + 1} has {len(table)} seats, expected 4 or 5"
                )
            for player in table:
                if player in seen:
                    raise InvalidRoundException(
                        f"Player {player!r} is seated more than once"
                    )
                seen.add(player)

    # ---- container protocol ----

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[Tuple[Player, ...]]:
        return (tuple(table) for table in self._tables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Round):
            return NotImplemented
        return self._tables == other._tables

    def __repr__(self) -> str:
        return f"Round({self._tables!r})"

    def copy(self) -> "Round":
        return Round(self._tables)

    def to_list(self) -> List[List[Player]]:
        """Return a plain nested list of the tables (serialization)."""
        return [list(table) for table in self._tables]

    # ---- iteration ----

    def iter_players(self) -> Iterator[Player]:
        for table in self._tables:
            yield from table

    def iter_seats(self) -> Iterator[Tuple[int, int, int, Player]]:
        """Yield ``(table_index, seat_index, table_size, player)`` for every seat."""
        for table_index, table in enumerate(self._tables):
            size = len(table)
            for seat_index, player in enumerate(table):
                yield table_index, seat_index, size, player

    @property
    def tables_count(self) -> int:
        return len(self._tables)

    @property
    def players_count(self) -> int:
        return sum(len(table) for table in self._tables)

    @property
    def table_sizes(self) -> List[int]:
        return [len(table) for table in self._tables]

    # ---- addressing ----

    def _check_table(self, table_index: int) -> None:
        if not 0 <= table_index < len(self._tables):
            raise IndexOutOfRangeException(
                f"Table index {table_index} out of range (0..{len(self._tables) - 1})"
            )

    def _check_address(self, address: SeatAddress) -> None:
        table_index, seat_index = address
        self._check_table(table_index)
        size = len(self._tables[table_index])
        if not 0 <= seat_index < size:
            raise IndexOutOfRangeException(
                f"Seat index {seat_index} out of range for table {table_index} "
                f"of {size} seats"
            )

    def address_of_index(self, index: int) -> SeatAddress:
        """Convert a global seat index (0..players_count-1) to a seat address."""
        if index < 0:
            raise IndexOutOfRangeException(f"Negative seat index {index}")
        remaining = index
        for table_index, table in enumerate(self._tables):
            if remaining < len(table):
                return table_index, remaining
            remaining -= len(table)
        raise IndexOutOfRangeException(
            f"Seat index {index} out of range ({self.players_count} seats)"
        )

    def get_table(self, table_index: int) -> Table:
        self._check_table(table_index)
        return list(self._tables[table_index])

    def set_table(self, table_index: int, players: Sequence[Player]) -> None:
        """Replace the contents of one table.

        The table keeps its size and the round must still seat every player once.
        """
        self._check_table(table_index)
        players = list(players)
        if len(players) != len(self._tables[table_index]):
            raise InvalidRoundException(
                f"Table {table_index + 1} has {len(self._tables[table_index])} "
                f"seats, got {len(players)} players"
            )
        previous = self._tables[table_index]
        self._tables[table_index] = players
        try:
            self._validate()
        except InvalidRoundException:
            self._tables[table_index] = previous
            raise

    def get_player(self, address: SeatAddress) -> Player:
        self._check_address(address)
        table_index, seat_index = address
        return self._tables[table_index][seat_index]

    def set_player(self, address: SeatAddress, player: Player) -> None:
        """Seat ``player`` at ``address``, replacing whoever sat there.

        Only the replaced player leaves the round, so ``player`` must not be
        seated elsewhere.
        """
        self._check_address(address)
        table_index, seat_index = address
        current = self._tables[table_index][seat_index]
        if player != current and player in set(self.iter_players()):
            raise InvalidRoundException(f"Player {player!r} is already seated")
        self._tables[table_index][seat_index] = player

    def player_at_index(self, index: int) -> Player:
        return self.get_player(self.address_of_index(index))

    def swap(self, first: SeatAddress, second: SeatAddress) -> Tuple[int, ...]:
        """Swap the players of two seats.

        Returns:
            The indices of the tables whose contents changed (one or two)
        """
        self._check_address(first)
        self._check_address(second)
        (t1, s1), (t2, s2) = first, second
        self._tables[t1][s1], self._tables[t2][s2] = (
            self._tables[t2][s2],
            self._tables[t1][s1],
        )
        if t1 == t2:
            return (t1,)
        return (t1, t2)

    def shuffle(self, rng: random.Random) -> None:
        """Reshuffle players over the existing table structure."""
        players = list(self.iter_players())
        rng.shuffle(players)
        seated = 0
        for table in self._tables:
            size = len(table)
            table[:] = players[seated : seated + size]
            seated += size
