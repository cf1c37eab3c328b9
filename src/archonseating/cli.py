"""Command-line interface for the seating optimizer.

This module seats a tournament from the command line and prints every round
together with the rule-by-rule score breakdown.
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

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence, TextIO, Tuple

from archonseating.exceptions import (
    ArchonSeatingException,
    InvalidConfigurationException,
)
from archonseating.models.round import Round, get_rounds
from archonseating.models.seating_config import SeatingConfig
from archonseating.seating.optimizer import OptimizationResult, optimise_multistart
from archonseating.testing.rtg import RandomTournamentGenerator, RTGConfig
from archonseating.type_hints import Player
from archonseating.utils import configure_logging, setup_logger

logger = setup_logger(__name__)

PlayedRounds = Tuple[
    List[Round], List[Optional[Dict[Player, int]]], List[Optional[Dict[Player, int]]]
]


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not a positive integer
    """
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid integer '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"Value must be at least 1, got {number}")
    return number


def parse_names(value: str) -> List[str]:
    """Parse a comma separated list of player names."""
    names = [name.strip() for name in value.split(",") if name.strip()]
    if len(set(names)) != len(names):
        raise argparse.ArgumentTypeError("Player names must be unique")
    return names


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="archon-seating",
        description="Compute a fair seating for a multi-round tournament",
    )

    players = parser.add_mutually_exclusive_group(required=True)
    players.add_argument(
        "--players", type=positive_int, help="Number of players (generated ids)"
    )
    players.add_argument(
        "--names", type=parse_names, help="Comma separated list of player names"
    )

    parser.add_argument("--rounds", type=positive_int, help="Number of rounds")
    parser.add_argument(
        "--iterations", type=int, help="Budget of candidate moves to evaluate"
    )
    parser.add_argument(
        "--fixed", type=int, help="Number of leading rounds to keep as they are"
    )
    parser.add_argument(
        "--restarts", type=positive_int, help="Number of independent searches"
    )
    parser.add_argument("--seed", type=int, help="Seed of the pseudorandom source")
    parser.add_argument("--config", help="Load configuration from JSON file")
    parser.add_argument(
        "--played",
        help="JSON file of rounds already played, kept fixed (overrides --fixed)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the result as JSON"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    return parser


def build_config(args: argparse.Namespace) -> SeatingConfig:
    """Merge the JSON configuration file (if any) with command-line flags."""
    config = SeatingConfig.from_file(args.config) if args.config else SeatingConfig()
    if args.rounds is not None:
        config.rounds = args.rounds
    if args.iterations is not None:
        config.iterations = args.iterations
    if args.fixed is not None:
        config.fixed_rounds = args.fixed
    if args.restarts is not None:
        config.restarts = args.restarts
    if args.seed is not None:
        config.seed = args.seed
    config.validate()
    return config


def build_players(args: argparse.Namespace) -> List[Player]:
    if args.names:
        return list(args.names)
    generator = RandomTournamentGenerator(
        RTGConfig(num_players=args.players, num_rounds=0)
    )
    return generator.create_players()


def _player_values(data: Any, path: str) -> Optional[Dict[Player, int]]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise InvalidConfigurationException(
            f"Player values in {path} must be a JSON object"
        )
    try:
        return {player: int(value) for player, value in data.items()}
    except (TypeError, ValueError) as e:
        raise InvalidConfigurationException(
            f"Invalid player value in {path}: {e}"
        ) from e


def load_played(path: str) -> PlayedRounds:
    """Load previously played rounds from a JSON file.

    The file holds a list of rounds. Each round is either a list of tables
    (lists of player ids in seat order) or an object with a ``tables`` list
    and optional ``vps`` and ``transfers`` objects mapping players to values.

    Returns:
        The rounds, and their vps and transfers overrides (one per round)
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidConfigurationException(
            f"Cannot load played rounds from {path}: {e}"
        ) from e
    if not isinstance(data, list):
        raise InvalidConfigurationException(
            f"Played rounds in {path} must be a JSON list"
        )

    rounds, vps, transfers = [], [], []
    for entry in data:
        if isinstance(entry, dict):
            tables = entry.get("tables", [])
            vps.append(_player_values(entry.get("vps"), path))
            transfers.append(_player_values(entry.get("transfers"), path))
        else:
            tables = entry
            vps.append(None)
            transfers.append(None)
        if not isinstance(tables, list) or not all(
            isinstance(table, list)
            and all(isinstance(player, (str, int)) for player in table)
            for table in tables
        ):
            raise InvalidConfigurationException(
                f"Tables in {path} must be lists of player ids"
            )
        rounds.append(Round(tables))
    logger.info(f"Loaded {len(rounds)} played rounds from {path}")
    return rounds, vps, transfers


def format_result(result: OptimizationResult, out: TextIO) -> None:
    """Print every round and the score breakdown."""
    for round_number, round_ in enumerate(result.rounds, start=1):
        out.write(f"Round {round_number}\n")
        for table_number, table in enumerate(round_, start=1):
            seats = ", ".join(str(player) for player in table)
            out.write(f"  Table {table_number}: {seats}\n")
    out.write(f"\nStatus: {result.status.value} ")
    out.write(
        f"({result.moves_evaluated} moves evaluated, "
        f"{result.moves_accepted} accepted, {result.elapsed:.2f}s)\n"
    )
    out.write("Score:\n")
    for rule in result.score.breakdown():
        out.write(f"  {rule.code} {rule.label:<20} {rule.raw:>10.4g}\n")


def run_seating(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    config = build_config(args)
    players = build_players(args)
    played, vps, transfers = load_played(args.played) if args.played else ([], [], [])
    if args.played:
        config.fixed_rounds = len(played)
        config.validate()
    new_rounds = config.rounds - len(played)
    rounds = played + get_rounds(players, new_rounds)
    vps += [None] * new_rounds
    transfers += [None] * new_rounds
    logger.info(
        f"Seating {len(players)} players over {config.rounds} rounds "
        f"({config.iterations} moves, {config.restarts} restarts)"
    )
    result = optimise_multistart(rounds, config, vps, transfers)
    if args.json:
        json.dump(result.to_dict(), out, indent=2, default=str)
        out.write("\n")
    else:
        format_result(result, out)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run_seating(args)
    except KeyboardInterrupt:
        logger.info("Seating interrupted by user")
        return 130
    except ArchonSeatingException as e:
        logger.error(f"Seating failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
