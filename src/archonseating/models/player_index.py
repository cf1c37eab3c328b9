"""Bijective mapping between players and dense matrix indices."""

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

from typing import Dict, Iterable, Iterator, List

from archonseating.exceptions import IndexOutOfRangeException, UnknownPlayerException
from archonseating.models.round import Round
from archonseating.type_hints import Player


class PlayerIndex:
    """Maps every player to an integer ``0..N-1`` in first-encounter order.

    The index must stay stable for the whole optimization run: measures are
    keyed by it, so re-indexing invalidates all of them.
    """

    def __init__(self, players: Iterable[Player] = ()):
        self._forward: Dict[Player, int] = {}
        self._backward: List[Player] = []
        for player in players:
            self.register(player)

    @classmethod
    def from_rounds(cls, rounds: Iterable[Round]) -> "PlayerIndex":
        """Build the index from every player of every round."""
        index = cls()
        for round_ in rounds:
            for player in round_.iter_players():
                index.register(player)
        return index

    def register(self, player: Player) -> int:
        """Register ``player`` if needed and return its index."""
        if player not in self._forward:
            self._forward[player] = len(self._backward)
            self._backward.append(player)
        return self._forward[player]

    def index_of(self, player: Player) -> int:
        try:
            return self._forward[player]
        except KeyError:
            raise UnknownPlayerException(player) from None

    def player_at(self, index: int) -> Player:
        if not 0 <= index < len(self._backward):
            raise IndexOutOfRangeException(
                f"Player index {index} out of range (0..{len(self._backward) - 1})"
            )
        return self._backward[index]

    def __len__(self) -> int:
        return len(self._backward)

    def __contains__(self, player: object) -> bool:
        return player in self._forward

    def __iter__(self) -> Iterator[Player]:
        return iter(list(self._backward))

    def __repr__(self) -> str:
        return f"PlayerIndex({self._backward!r})"
