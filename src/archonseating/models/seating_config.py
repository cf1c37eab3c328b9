"""SeatingConfig data class."""

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

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from archonseating.constants import (
    DEFAULT_ITERATIONS,
    DEFAULT_RESTARTS,
    DEFAULT_ROUNDS,
)
from archonseating.exceptions import InvalidConfigurationException


@dataclass
class SeatingConfig:
    """Seating optimization settings.

    Attributes
    ----------
    rounds : int
        Number of rounds to seat, previously played rounds included.
    iterations : int
        Budget of candidate moves the optimizer may evaluate.
    fixed_rounds : int
        Number of leading rounds already played. They are measured but never
        changed.
    restarts : int
        Number of independent optimizer runs, the best one is kept.
    seed : int or None
        Seed of the pseudorandom source. None seeds from the system.
    shuffle : bool
        Whether the non-fixed rounds are shuffled before the search starts.
    """

    rounds: int = DEFAULT_ROUNDS
    iterations: int = DEFAULT_ITERATIONS
    fixed_rounds: int = 0
    restarts: int = DEFAULT_RESTARTS
    seed: Optional[int] = None
    shuffle: bool = True

    def validate(self) -> None:
        """Check the settings are consistent.

        Raises:
            InvalidConfigurationException: If a setting is out of range
        """
        if self.rounds < 1:
            raise InvalidConfigurationException("At least one round is required")
        if self.iterations < 0:
            raise InvalidConfigurationException("Iterations cannot be negative")
        if not 0 <= self.fixed_rounds <= self.rounds:
            raise InvalidConfigurationException(
                f"Fixed rounds ({self.fixed_rounds}) must be between 0 "
                f"and the number of rounds ({self.rounds})"
            )
        if self.restarts < 1:
            raise InvalidConfigurationException("At least one restart is required")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "rounds": self.rounds,
            "iterations": self.iterations,
            "fixed_rounds": self.fixed_rounds,
            "restarts": self.restarts,
            "seed": self.seed,
            "shuffle": self.shuffle,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeatingConfig":
        """Deserialize configuration from dictionary."""
        try:
            config = cls(
                rounds=int(data.get("rounds", DEFAULT_ROUNDS)),
                iterations=int(data.get("iterations", DEFAULT_ITERATIONS)),
                fixed_rounds=int(data.get("fixed_rounds", 0)),
                restarts=int(data.get("restarts", DEFAULT_RESTARTS)),
                seed=data.get("seed"),
                shuffle=bool(data.get("shuffle", True)),
            )
        except (TypeError, ValueError) as e:
            raise InvalidConfigurationException(f"Invalid configuration: {e}") from e
        config.validate()
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SeatingConfig":
        """Load configuration from a JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidConfigurationException(
                f"Cannot load configuration from {path}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise InvalidConfigurationException(
                f"Configuration in {path} must be a JSON object"
            )
        return cls.from_dict(data)
