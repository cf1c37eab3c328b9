"""Local search over tournament seatings.

The optimizer swaps two seats of a round at a time and keeps the swap only if
it strictly improves the score. Every candidate is evaluated by updating the
tournament-wide measure for the (at most two) tables the swap touches, never
by measuring the whole tournament again.
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

import itertools
import random
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from archonseating.exceptions import IndexOutOfRangeException
from archonseating.models.player_index import PlayerIndex
from archonseating.models.round import Round
from archonseating.models.seating_config import SeatingConfig
from archonseating.seating.measure import MeasureEngine, per_round_values
from archonseating.seating.rules import RuleEngine, Score
from archonseating.type_hints import Move, RoundValues, SeatAddress
from archonseating.utils import setup_logger

logger = setup_logger(__name__)


class ConvergenceStatus(Enum):
    """State of a seating search."""

    INITIAL = "initial"
    SEARCHING = "searching"
    CONVERGED = "converged"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


@dataclass
class OptimizationResult:
    """Outcome of a seating search.

    Attributes:
        rounds: Best rounds found (copies, safe to mutate)
        score: Score of those rounds
        status: CONVERGED, TIMED_OUT or CANCELLED
        moves_evaluated: Number of candidate moves evaluated
        moves_accepted: Number of candidate moves kept
        passes: Number of passes started over the candidate moves
        history: Score after the initial seating and after each accepted move
        elapsed: Search duration in seconds
    """

    rounds: List[Round]
    score: Score
    status: ConvergenceStatus
    moves_evaluated: int = 0
    moves_accepted: int = 0
    passes: int = 0
    history: List[Score] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def converged(self) -> bool:
        return self.status == ConvergenceStatus.CONVERGED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rounds": [round_.to_list() for round_ in self.rounds],
            "score": self.score.to_dict(),
            "status": self.status.value,
            "moves_evaluated": self.moves_evaluated,
            "moves_accepted": self.moves_accepted,
            "passes": self.passes,
            "elapsed": self.elapsed,
        }


class SeatingOptimizer:
    """Hill-climbing search over the seats of the non-fixed rounds.

    The optimizer owns copies of the rounds it is given, so independent
    instances can run side by side. Between two move evaluations the current
    rounds and score are always consistent, and :meth:`cancel` stops the
    search at the next such point.
    """

    def __init__(
        self,
        rounds: Sequence[Round],
        config: Optional[SeatingConfig] = None,
        rng: Optional[random.Random] = None,
        vps: Optional[RoundValues] = None,
        transfers: Optional[RoundValues] = None,
    ):
        """Initialize the optimizer.

        Args:
            rounds: Every round of the tournament, the fixed ones first
            config: Search settings, ``config.rounds`` is ignored in favour of
                ``len(rounds)``
            rng: Pseudorandom source, defaults to ``random.Random(config.seed)``
            vps: Available vps overrides, one optional mapping per round
            transfers: Starting transfers overrides, one optional mapping per
                round

        Raises:
            InvalidConfigurationException: If the configuration is invalid or
                fixed rounds exceed the rounds
            IndexOutOfRangeException: If vps or transfers do not match the rounds
        """
        self.config = config or SeatingConfig(rounds=max(len(rounds), 1))
        replace(self.config, rounds=max(len(rounds), 1)).validate()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.status = ConvergenceStatus.INITIAL

        self._rounds: List[Round] = [round_.copy() for round_ in rounds]
        self._vps = per_round_values(vps, len(rounds))
        self._transfers = per_round_values(transfers, len(rounds))
        if self.config.shuffle:
            for round_ in self._rounds[self.config.fixed_rounds :]:
                round_.shuffle(self.rng)

        self.player_index = PlayerIndex.from_rounds(self._rounds)
        self.measure_engine = MeasureEngine(self.player_index)
        self.rule_engine = RuleEngine()
        self._measure = self.measure_engine.measure_rounds(
            self._rounds, self._vps, self._transfers
        )
        self._score = self.rule_engine.score(self._measure)

        # table sizes never change, so seat addresses are computed once
        self._addresses: Dict[int, List[SeatAddress]] = {
            round_index: [
                (table_index, seat_index)
                for table_index, seat_index, _, _ in self._rounds[
                    round_index
                ].iter_seats()
            ]
            for round_index in range(self.config.fixed_rounds, len(self._rounds))
        }

        self.moves_evaluated = 0
        self.moves_accepted = 0
        self.passes = 0
        self.history: List[Score] = [self._score]
        self._cancelled = False
        self._elapsed = 0.0

    @property
    def best_rounds(self) -> List[Round]:
        return [round_.copy() for round_ in self._rounds]

    @property
    def best_score(self) -> Score:
        return self._score

    def cancel(self) -> None:
        """Ask the search to stop before the next move evaluation."""
        self._cancelled = True

    def candidate_moves(self) -> List[Move]:
        """Every swap of two seats within a non-fixed round."""
        moves: List[Move] = []
        for round_index, addresses in self._addresses.items():
            for first, second in itertools.combinations(range(len(addresses)), 2):
                moves.append((round_index, first, second))
        return moves

    def run(self) -> OptimizationResult:
        """Search until converged, out of budget or cancelled."""
        start = time.perf_counter()
        candidates = self.candidate_moves()
        self.status = ConvergenceStatus.SEARCHING
        logger.info(
            f"Optimizing {len(self._rounds)} rounds ({self.config.fixed_rounds} "
            f"fixed), {len(candidates)} candidate moves, initial score {self._score}"
        )

        while self.status == ConvergenceStatus.SEARCHING:
            if not candidates:
                self.status = ConvergenceStatus.CONVERGED
                break
            self.rng.shuffle(candidates)
            self.passes += 1
            improved = False
            for move in candidates:
                if self._cancelled:
                    self.status = ConvergenceStatus.CANCELLED
                    break
                if self.moves_evaluated >= self.config.iterations:
                    self.status = ConvergenceStatus.TIMED_OUT
                    break
                if self._try_move(move):
                    improved = True
            else:
                if not improved:
                    self.status = ConvergenceStatus.CONVERGED

        self._elapsed += time.perf_counter() - start
        logger.info(
            f"Search {self.status.value} after {self.moves_evaluated} moves "
            f"({self.moves_accepted} accepted, {self.passes} passes): {self._score}"
        )
        return self.result()

    def result(self) -> OptimizationResult:
        return OptimizationResult(
            rounds=self.best_rounds,
            score=self._score,
            status=self.status,
            moves_evaluated=self.moves_evaluated,
            moves_accepted=self.moves_accepted,
            passes=self.passes,
            history=list(self.history),
            elapsed=self._elapsed,
        )

    def _try_move(self, move: Move) -> bool:
        """Apply a swap, keep it if the score strictly improves, else revert."""
        round_index, first, second = move
        round_ = self._rounds[round_index]
        addresses = self._addresses[round_index]
        seat_a, seat_b = addresses[first], addresses[second]
        dirty = {seat_a[0], seat_b[0]}

        prior = {table: round_.get_table(table) for table in dirty}
        round_.swap(seat_a, seat_b)
        self.measure_engine.apply_incremental(
            self._measure,
            round_,
            prior,
            self._vps[round_index],
            self._transfers[round_index],
        )
        self.moves_evaluated += 1

        score = self.rule_engine.score(self._measure)
        if score < self._score:
            self._score = score
            self.moves_accepted += 1
            self.history.append(score)
            logger.debug(
                f"Round {round_index + 1}: swapped seats {seat_a} and {seat_b}, "
                f"score {score}"
            )
            return True

        prior = {table: round_.get_table(table) for table in dirty}
        round_.swap(seat_a, seat_b)
        self.measure_engine.apply_incremental(
            self._measure,
            round_,
            prior,
            self._vps[round_index],
            self._transfers[round_index],
        )
        return False


def optimise(
    rounds: Sequence[Round],
    config: Optional[SeatingConfig] = None,
    rng: Optional[random.Random] = None,
    vps: Optional[RoundValues] = None,
    transfers: Optional[RoundValues] = None,
) -> OptimizationResult:
    """Run a single seating search."""
    return SeatingOptimizer(rounds, config, rng, vps, transfers).run()


def optimise_multistart(
    rounds: Sequence[Round],
    config: Optional[SeatingConfig] = None,
    vps: Optional[RoundValues] = None,
    transfers: Optional[RoundValues] = None,
) -> OptimizationResult:
    """Run ``config.restarts`` independent searches and keep the best.

    Each restart owns its copy of the rounds and its own pseudorandom source,
    seeded ``config.seed + restart`` when a seed is configured.

    Raises:
        InvalidConfigurationException: If the configuration is invalid
    """
    config = config or SeatingConfig(rounds=max(len(rounds), 1))
    replace(config, rounds=max(len(rounds), 1)).validate()
    best: Optional[OptimizationResult] = None
    for restart in range(config.restarts):
        seed = None if config.seed is None else config.seed + restart
        result = SeatingOptimizer(
            rounds, config, random.Random(seed), vps, transfers
        ).run()
        logger.info(
            f"Restart {restart + 1}/{config.restarts}: "
            f"{result.status.value}, score {result.score}"
        )
        if best is None or result.score < best.score:
            best = result
    return best


def optimise_table(
    rounds: Sequence[Round],
    table_index: int,
    round_index: int = -1,
    vps: Optional[RoundValues] = None,
    transfers: Optional[RoundValues] = None,
) -> Score:
    """Reseat a single table optimally, leaving every other seat untouched.

    Every seat permutation of the table is tried (at most 120). The round is
    modified in place.

    Args:
        rounds: Every round of the tournament
        table_index: Table to reseat (0-based)
        round_index: Round of the table, the last one by default
        vps: Available vps overrides, one optional mapping per round
        transfers: Starting transfers overrides, one optional mapping per round

    Returns:
        The score of the tournament with the best seating of that table
    """
    if not -len(rounds) <= round_index < len(rounds):
        raise IndexOutOfRangeException(f"Round index {round_index} out of range")
    vps = per_round_values(vps, len(rounds))
    transfers = per_round_values(transfers, len(rounds))
    round_ = rounds[round_index]
    original = round_.get_table(table_index)

    player_index = PlayerIndex.from_rounds(rounds)
    measure_engine = MeasureEngine(player_index)
    rule_engine = RuleEngine()
    measure = measure_engine.measure_rounds(rounds, vps, transfers)

    best_score = rule_engine.score(measure)
    best_seating = original
    for seating in itertools.permutations(original):
        prior = {table_index: round_.get_table(table_index)}
        round_.set_table(table_index, seating)
        measure_engine.apply_incremental(
            measure, round_, prior, vps[round_index], transfers[round_index]
        )
        score = rule_engine.score(measure)
        if score < best_score:
            best_score = score
            best_seating = list(seating)

    round_.set_table(table_index, best_seating)
    logger.info(f"Table {table_index + 1} reseated: {best_seating}, score {best_score}")
    return best_score
