"""Random Tournament Generator (RTG) - Internal testing system for seatings.

This module generates random players and randomly seated rounds, used to
exercise the measure and rule engines and to seed demo runs.
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

import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from archonseating.constants import MIN_PLAYERS, STAGGERED_COUNTS
from archonseating.models.round import Round, partition_players
from archonseating.type_hints import Player
from archonseating.utils import setup_logger

logger = setup_logger(__name__)


class PlayerIdStyle(Enum):
    """How generated players are identified."""

    INTEGER = "integer"
    NAME = "name"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    num_rounds: int
    seed: Optional[int] = None
    id_style: PlayerIdStyle = PlayerIdStyle.NAME
    # Percentage of players sitting out each round, when the count allows it
    dropout_rate: float = 0.0


class RandomTournamentGenerator:
    """Generates randomly seated tournaments."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_players(self) -> List[Player]:
        """Create players based on configuration."""
        if self.config.id_style == PlayerIdStyle.INTEGER:
            return list(range(1, self.config.num_players + 1))
        width = max(3, len(str(self.config.num_players)))
        return [f"P{i:0{width}d}" for i in range(1, self.config.num_players + 1)]

    def generate_round(self, players: List[Player]) -> Round:
        """Seat the given players at random."""
        shuffled = list(players)
        self.random.shuffle(shuffled)
        return partition_players(shuffled)

    def _round_players(self, players: List[Player]) -> List[Player]:
        """Pick who plays a round, skipping dropouts that break the layout."""
        if self.config.dropout_rate <= 0:
            return list(players)
        playing = [
            p for p in players if self.random.random() * 100 >= self.config.dropout_rate
        ]
        while len(playing) < MIN_PLAYERS or len(playing) in STAGGERED_COUNTS:
            missing = [p for p in players if p not in playing]
            if not missing:
                break
            playing.append(self.random.choice(missing))
        return playing

    def generate_rounds(self) -> List[Round]:
        """Generate every round of the tournament."""
        players = self.create_players()
        rounds = [
            self.generate_round(self._round_players(players))
            for _ in range(self.config.num_rounds)
        ]
        logger.info(f"Generated {len(rounds)} random rounds for {len(players)} players")
        return rounds
