"""Type hints used in Archon Seating."""

from typing import Hashable, List, Mapping, Optional, Sequence, Tuple

# Players are opaque: only compared for equality and used as mapping keys
Player = Hashable

# Seated players of one table, in seat order
Table = List[Player]
# (table_index, seat_index) inside a round
SeatAddress = Tuple[int, int]
# Dirty table index -> prior contents of that table
ChangedTables = Mapping[int, Sequence[Player]]
# Per-player integer inputs (available vps, starting transfers)
PlayerValues = Mapping[Player, int]
# One optional PlayerValues per round
RoundValues = Sequence[Optional[PlayerValues]]

# A move: round index and two global seat indices
Move = Tuple[int, int, int]

#  LocalWords:  SeatAddress ChangedTables
