"""Additive measure of one or more seated rounds.

A measure is two integer matrices keyed by the player index:

position (players x 8):
    for each player: played, vps, transfers,
    seat1, seat2, seat3, seat4, seat5 (1 for the seat they occupy)
opponents (players x players x 8):
    for each ordered pair of players, flags indicating if they were:
    opponent, prey, grand-prey, grand-predator, predator,
    cross-table, neighbour, non-neighbour

Cross-table marks the opposite seat of a 4-seat table and every pair of
players seated at different tables of the same round.

Simply adding each round measure gives the total measure. This allows to
re-compute a single round contribution when a single round is changed, and
the contribution of the (at most two) tables a seat swap touches while
searching for an optimum.
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

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from archonseating.constants import (
    OPP_CROSS_TABLE,
    OPPONENT_FLAGS,
    POS_TRANSFERS,
    POS_VPS,
    POSITION_COLUMNS,
    TABLE_SIZES,
)
from archonseating.exceptions import IndexOutOfRangeException, InvalidRoundException
from archonseating.models.player_index import PlayerIndex
from archonseating.models.round import Round
from archonseating.seating.relationships import RelationshipTable
from archonseating.type_hints import ChangedTables, Player, PlayerValues, RoundValues

MEASURE_DTYPE = np.int32


def _build_table_block(size: int) -> np.ndarray:
    """Pair block of a table, net of the round-wide cross-table mark.

    Every pair of a round is first marked cross-table, each table then takes
    the mark back from its own pairs.
    """
    block = RelationshipTable.pair_block(size).astype(MEASURE_DTYPE)
    block[:, :, OPP_CROSS_TABLE] -= 1 - np.eye(size, dtype=MEASURE_DTYPE)
    block.setflags(write=False)
    return block


_TABLE_BLOCKS: Dict[int, np.ndarray] = {
    size: _build_table_block(size) for size in TABLE_SIZES
}


def per_round_values(
    values: Optional[RoundValues], rounds_count: int
) -> List[Optional[PlayerValues]]:
    """Expand optional per-round player values to one entry per round.

    Raises:
        IndexOutOfRangeException: If ``values`` does not have one entry per round
    """
    if values is None:
        return [None] * rounds_count
    values = list(values)
    if len(values) != rounds_count:
        raise IndexOutOfRangeException(
            f"Got player values for {len(values)} rounds, expected {rounds_count}"
        )
    return values


@dataclass(eq=False)
class Measure:
    """Position and opponents matrices of one or more rounds."""

    position: np.ndarray
    opponents: np.ndarray

    @classmethod
    def zeros(cls, players_count: int) -> "Measure":
        return cls(
            position=np.zeros((players_count, POSITION_COLUMNS), dtype=MEASURE_DTYPE),
            opponents=np.zeros(
                (players_count, players_count, OPPONENT_FLAGS), dtype=MEASURE_DTYPE
            ),
        )

    @property
    def players_count(self) -> int:
        return self.position.shape[0]

    def copy(self) -> "Measure":
        return Measure(position=self.position.copy(), opponents=self.opponents.copy())

    def _check_compatible(self, other: "Measure") -> None:
        if self.players_count != other.players_count:
            raise ValueError(
                f"Cannot combine measures of {self.players_count} and "
                f"{other.players_count} players"
            )

    def __add__(self, other: "Measure") -> "Measure":
        if not isinstance(other, Measure):
            return NotImplemented
        self._check_compatible(other)
        return Measure(
            position=self.position + other.position,
            opponents=self.opponents + other.opponents,
        )

    def __sub__(self, other: "Measure") -> "Measure":
        if not isinstance(other, Measure):
            return NotImplemented
        self._check_compatible(other)
        return Measure(
            position=self.position - other.position,
            opponents=self.opponents - other.opponents,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measure):
            return NotImplemented
        return np.array_equal(self.position, other.position) and np.array_equal(
            self.opponents, other.opponents
        )


class MeasureEngine:
    """Computes and incrementally updates measures for one player index.

    Available vps and starting transfers default to the seat geometry (table
    size and seat transfers). Callers may override them per player with the
    ``vps`` and ``transfers`` mappings; overrides must be integers so that
    incremental updates stay exact.
    """

    def __init__(self, player_index: PlayerIndex):
        self.player_index = player_index

    def zeros(self) -> Measure:
        return Measure.zeros(len(self.player_index))

    def measure_round(
        self,
        round_: Round,
        vps: Optional[PlayerValues] = None,
        transfers: Optional[PlayerValues] = None,
    ) -> Measure:
        """Measure a single round from scratch."""
        measure = self.zeros()
        for table in round_:
            self._add_table(measure, table, 1, vps, transfers)
        self._mark_cross_table(measure, round_.iter_players(), 1)
        return measure

    def measure_rounds(
        self,
        rounds: Iterable[Round],
        vps: Optional[RoundValues] = None,
        transfers: Optional[RoundValues] = None,
    ) -> Measure:
        """Tournament-wide measure of several rounds.

        ``vps`` and ``transfers``, when given, hold one optional mapping of
        player overrides per round.
        """
        rounds = list(rounds)
        vps = per_round_values(vps, len(rounds))
        transfers = per_round_values(transfers, len(rounds))
        return self.combine(
            self.measure_round(round_, round_vps, round_transfers)
            for round_, round_vps, round_transfers in zip(rounds, vps, transfers)
        )

    def combine(self, measures: Iterable[Measure]) -> Measure:
        """Elementwise sum of measures (a zero measure if there are none)."""
        total = self.zeros()
        for measure in measures:
            total._check_compatible(measure)
            total.position += measure.position
            total.opponents += measure.opponents
        return total

    def recompute_incremental(
        self,
        previous: Measure,
        round_: Round,
        changed: ChangedTables,
        vps: Optional[PlayerValues] = None,
        transfers: Optional[PlayerValues] = None,
    ) -> Measure:
        """Update ``previous`` for the tables of ``round_`` listed in ``changed``.

        Args:
            previous: Measure including the prior contribution of the round
                (a single round measure or a tournament-wide one)
            round_: The round in its updated state
            changed: Dirty table index -> prior contents of that table
            vps: Optional per-player available vps overrides
            transfers: Optional per-player starting transfers overrides

        Returns:
            A new measure, equal to measuring the updated round from scratch
            in place of the prior one. ``previous`` is left untouched.
        """
        measure = previous.copy()
        self.apply_incremental(measure, round_, changed, vps, transfers)
        return measure

    def apply_incremental(
        self,
        measure: Measure,
        round_: Round,
        changed: ChangedTables,
        vps: Optional[PlayerValues] = None,
        transfers: Optional[PlayerValues] = None,
    ) -> None:
        """In-place variant of :meth:`recompute_incremental`."""
        self._check_measure(measure)
        current = {index: round_.get_table(index) for index in changed}
        for index, prior in changed.items():
            if len(prior) != len(current[index]):
                raise InvalidRoundException(
                    f"Table {index + 1} changed size from {len(prior)} "
                    f"to {len(current[index])}"
                )
            self._add_table(measure, prior, -1, vps, transfers)
        for table in current.values():
            self._add_table(measure, table, 1, vps, transfers)

        # the round-wide cross-table mark only moves when players join or leave
        leaving = {player for table in changed.values() for player in table}
        joining = {player for table in current.values() for player in table}
        if leaving != joining:
            seated = list(round_.iter_players())
            prior_round = [p for p in seated if p not in joining] + list(leaving)
            self._mark_cross_table(measure, prior_round, -1)
            self._mark_cross_table(measure, seated, 1)

    def _check_measure(self, measure: Measure) -> None:
        if measure.players_count != len(self.player_index):
            raise IndexOutOfRangeException(
                f"Measure covers {measure.players_count} players, "
                f"index has {len(self.player_index)}"
            )

    def _indices(self, players: Iterable[Player]) -> np.ndarray:
        return np.array(
            [self.player_index.index_of(player) for player in players], dtype=np.intp
        )

    def _mark_cross_table(
        self, measure: Measure, players: Iterable[Player], sign: int
    ) -> None:
        """Mark every ordered pair of ``players`` cross-table."""
        indices = self._indices(players)
        off_diagonal = 1 - np.eye(len(indices), dtype=MEASURE_DTYPE)
        measure.opponents[np.ix_(indices, indices, [OPP_CROSS_TABLE])] += (
            sign * off_diagonal[:, :, np.newaxis]
        )

    def _add_table(
        self,
        measure: Measure,
        table: Sequence[Player],
        sign: int,
        vps: Optional[PlayerValues],
        transfers: Optional[PlayerValues],
    ) -> None:
        size = len(table)
        if size not in TABLE_SIZES:
            raise InvalidRoundException(f"Unsupported table size {size}")
        indices = self._indices(table)
        rows = RelationshipTable.position_rows(size)
        if vps or transfers:
            rows = rows.copy()
            for seat, player in enumerate(table):
                if vps and player in vps:
                    rows[seat, POS_VPS] = vps[player]
                if transfers and player in transfers:
                    rows[seat, POS_TRANSFERS] = transfers[player]
        # indices are distinct within a table, so fancy-index += is safe
        measure.position[indices] += sign * rows
        measure.opponents[np.ix_(indices, indices)] += sign * _TABLE_BLOCKS[size]
