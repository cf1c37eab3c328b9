"""Archon Seating: fair seating of multi-round tournaments at tables of 4 and 5."""

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

__version__ = "0.1.0"

from archonseating.exceptions import (
    ArchonSeatingException,
    IndexOutOfRangeException,
    InsufficientPlayersException,
    InvalidConfigurationException,
    InvalidRoundException,
    RequiresStaggeredSeatingException,
    UnknownPlayerException,
)
from archonseating.models import (
    PlayerIndex,
    Round,
    SeatingConfig,
    get_rounds,
    partition_players,
)
from archonseating.seating import (
    ConvergenceStatus,
    Measure,
    MeasureEngine,
    OptimizationResult,
    RelationshipTable,
    RuleEngine,
    Score,
    SeatingOptimizer,
    optimise,
    optimise_multistart,
    optimise_table,
)

__all__ = [
    "ArchonSeatingException",
    "IndexOutOfRangeException",
    "InsufficientPlayersException",
    "InvalidConfigurationException",
    "InvalidRoundException",
    "RequiresStaggeredSeatingException",
    "UnknownPlayerException",
    "PlayerIndex",
    "Round",
    "SeatingConfig",
    "get_rounds",
    "partition_players",
    "ConvergenceStatus",
    "Measure",
    "MeasureEngine",
    "OptimizationResult",
    "RelationshipTable",
    "RuleEngine",
    "Score",
    "SeatingOptimizer",
    "optimise",
    "optimise_multistart",
    "optimise_table",
]
