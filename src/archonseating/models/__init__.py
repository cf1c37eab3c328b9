"""Data models: rounds, player index and configuration."""

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

from archonseating.models.player_index import PlayerIndex
from archonseating.models.round import (
    Round,
    get_rounds,
    partition_players,
    table_layout,
)
from archonseating.models.seating_config import SeatingConfig

__all__ = [
    "PlayerIndex",
    "Round",
    "SeatingConfig",
    "get_rounds",
    "partition_players",
    "table_layout",
]
