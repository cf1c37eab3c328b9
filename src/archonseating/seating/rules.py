"""Reduction of a measure into an ordered, weighted seating score.

Rules in precedence order (R1 highest):

- R1 predator-prey: no pair of players repeats their predator-prey relationship
- R2 opponent thrice: no pair of players share a table 3 times or more
- R3 available vps: available victory points are equitably distributed
- R4 opponent twice: no pair of players share a table twice
- R5 fifth seat: nobody sits in the fifth seat more than once
- R6 position: every player spreads evenly over the seat numbers
- R7 same seat: nobody sits in the same seat more than once
- R8 starting transfers: starting transfers are equitably distributed
- R9 position group: every player gets a fair share of 4- and 5-seat tables
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

import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

import numpy as np

from archonseating.constants import (
    OPP_OPPONENT,
    OPP_PREY,
    POS_PLAYED,
    POS_SEAT_1,
    POS_SEAT_5,
    POS_TRANSFERS,
    POS_VPS,
    RULES,
    SEATS_COUNT,
    STDDEV_AMPLIFICATION,
    STDDEV_RULES,
    TABLE_SIZES,
)
from archonseating.seating.measure import Measure


def rule_weights() -> Tuple[float, ...]:
    """Effective weight of each rule, stddev amplification included."""
    return tuple(
        weight * (STDDEV_AMPLIFICATION if code in STDDEV_RULES else 1)
        for code, _label, weight in RULES
    )


WEIGHTS = rule_weights()


@dataclass(frozen=True)
class RuleResult:
    """Evaluation of a single rule, for diagnostics."""

    code: str
    label: str
    raw: float
    weighted: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "label": self.label,
            "raw": self.raw,
            "weighted": self.weighted,
        }


@functools.total_ordering
@dataclass(frozen=True)
class Score:
    """Raw value of the nine rules, ordered by precedence.

    Scores compare lexicographically on their weighted values: a difference on
    a higher rule always prevails over any difference on lower rules. Lower
    is better.
    """

    rules: Tuple[float, ...]

    def __post_init__(self):
        if len(self.rules) != len(RULES):
            raise ValueError(
                f"A score needs {len(RULES)} rule values, got {len(self.rules)}"
            )

    @property
    def weighted(self) -> Tuple[float, ...]:
        return tuple(raw * weight for raw, weight in zip(self.rules, WEIGHTS))

    @property
    def total(self) -> float:
        """Weighted sum, for display only.

        Stddev rules are amplified up to the weight of the rules above them, so
        the sum does not follow the lexicographic order. Use comparisons to
        rank scores.
        """
        return float(sum(self.weighted))

    def breakdown(self) -> List[RuleResult]:
        return [
            RuleResult(code=code, label=label, raw=raw, weighted=weighted)
            for (code, label, _), raw, weighted in zip(
                RULES, self.rules, self.weighted
            )
        ]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Score):
            return NotImplemented
        return self.weighted < other.weighted

    def __str__(self) -> str:
        return ", ".join(
            f"{code}: {raw:g}" for (code, _, _), raw in zip(RULES, self.rules)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rules": list(self.rules),
            "breakdown": [result.to_dict() for result in self.breakdown()],
        }


def _mean_stddev(position: np.ndarray, column: int) -> float:
    """Population standard deviation of a position column averaged per round.

    Only players who played count. With fewer than two of them there is no
    spread and the result is 0.
    """
    played = position[:, POS_PLAYED]
    mask = played > 0
    if np.count_nonzero(mask) < 2:
        return 0.0
    values = position[mask, column] / played[mask]
    return float(np.std(values))


def five_seat_rounds(measure: Measure) -> np.ndarray:
    """Rounds each player spent at a 5-seat table.

    Each round at a table of ``size`` seats adds ``size - 1`` opponents, so
    the opponent count over the rounds played tells the 5-seat rounds apart.
    """
    played = measure.position[:, POS_PLAYED].astype(np.int64)
    opponents = measure.opponents[:, :, OPP_OPPONENT].sum(axis=1, dtype=np.int64)
    return opponents - (min(TABLE_SIZES) - 1) * played


class RuleEngine:
    """Computes the seating score of a measure."""

    def __init__(self):
        self._checks: List[Callable[[Measure], float]] = [
            self._check_r1_predator_prey,
            self._check_r2_opponent_thrice,
            self._check_r3_available_vps,
            self._check_r4_opponent_twice,
            self._check_r5_fifth_seat,
            self._check_r6_position,
            self._check_r7_same_seat,
            self._check_r8_starting_transfers,
            self._check_r9_position_group,
        ]

    def score(self, measure: Measure) -> Score:
        return Score(rules=tuple(check(measure) for check in self._checks))

    def breakdown(self, measure: Measure) -> List[RuleResult]:
        """Score a measure and detail every rule."""
        return self.score(measure).breakdown()

    # Opponents flags are symmetric (or mirrored prey/predator), so pair
    # counts over the full matrix are halved to count each pair once.

    def _check_r1_predator_prey(self, measure: Measure) -> float:
        """R1: ordered pairs whose prey relation occurred more than once."""
        return int(np.count_nonzero(measure.opponents[:, :, OPP_PREY] > 1))

    def _check_r2_opponent_thrice(self, measure: Measure) -> float:
        """R2: pairs who were opponents 3 times or more."""
        return int(np.count_nonzero(measure.opponents[:, :, OPP_OPPONENT] > 2)) // 2

    def _check_r3_available_vps(self, measure: Measure) -> float:
        """R3: spread of the available vps per round played."""
        return _mean_stddev(measure.position, POS_VPS)

    def _check_r4_opponent_twice(self, measure: Measure) -> float:
        """R4: pairs who were opponents exactly twice."""
        return int(np.count_nonzero(measure.opponents[:, :, OPP_OPPONENT] == 2)) // 2

    def _check_r5_fifth_seat(self, measure: Measure) -> float:
        """R5: players seated in the fifth seat more than once."""
        return int(np.count_nonzero(measure.position[:, POS_SEAT_5] > 1))

    def _check_r6_position(self, measure: Measure) -> float:
        """R6: seat occupancies above each player's even share of seats.

        A player who played ``p`` rounds should occupy each seat number at
        most ``ceil(p / 5)`` times. The excess is summed over every seat of
        every player.
        """
        played = measure.position[:, POS_PLAYED]
        seats = measure.position[:, POS_SEAT_1 : POS_SEAT_5 + 1]
        share = -(-played // SEATS_COUNT)
        excess = np.maximum(seats - share[:, np.newaxis], 0)
        return int(excess.sum())

    def _check_r7_same_seat(self, measure: Measure) -> float:
        """R7: players who occupied the same seat more than once."""
        seats = measure.position[:, POS_SEAT_1 : POS_SEAT_5 + 1]
        return int(np.count_nonzero(np.any(seats > 1, axis=1)))

    def _check_r8_starting_transfers(self, measure: Measure) -> float:
        """R8: spread of the starting transfers per round played."""
        return _mean_stddev(measure.position, POS_TRANSFERS)

    def _check_r9_position_group(self, measure: Measure) -> float:
        """R9: rounds at 5-seat tables outside each player's fair share.

        Over the whole measure, a fraction ``F / P`` of the seatings were at
        5-seat tables. A player who played ``p`` rounds should sit at a 5-seat
        table between ``floor(p * F / P)`` and ``ceil(p * F / P)`` times. The
        rounds outside that range are summed over players.
        """
        played = measure.position[:, POS_PLAYED].astype(np.int64)
        fives = five_seat_rounds(measure)
        total_played = int(played.sum())
        if total_played == 0:
            return 0
        total_fives = int(fives.sum())
        low = played * total_fives // total_played
        high = -(-played * total_fives // total_played)
        excess = np.maximum(fives - high, 0) + np.maximum(low - fives, 0)
        return int(excess.sum())
