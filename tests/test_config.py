import json

import pytest

from archonseating.exceptions import (
    ArchonSeatingException,
    InvalidConfigurationException,
)
from archonseating.models.seating_config import SeatingConfig


def test_defaults():
    config = SeatingConfig()

    assert config.rounds == 3
    assert config.iterations == 20000
    assert config.fixed_rounds == 0
    assert config.restarts == 1
    assert config.seed is None
    assert config.shuffle is True
    config.validate()


def test_dict_round_trip():
    config = SeatingConfig(rounds=4, iterations=500, fixed_rounds=2, seed=12)
    assert SeatingConfig.from_dict(config.to_dict()) == config


def test_from_dict_fills_missing_values():
    config = SeatingConfig.from_dict({"rounds": "5"})

    assert config.rounds == 5
    assert config.iterations == 20000


@pytest.mark.parametrize(
    "data",
    [
        {"rounds": 0},
        {"iterations": -5},
        {"rounds": 2, "fixed_rounds": 3},
        {"fixed_rounds": -1},
        {"restarts": 0},
        {"rounds": "many"},
        {"iterations": None},
    ],
)
def test_invalid_values(data):
    with pytest.raises(InvalidConfigurationException):
        SeatingConfig.from_dict(data)


def test_from_file(tmp_path):
    path = tmp_path / "seating.json"
    path.write_text(json.dumps({"rounds": 4, "seed": 3, "shuffle": False}))

    config = SeatingConfig.from_file(path)
    assert config.rounds == 4
    assert config.seed == 3
    assert config.shuffle is False


def test_from_file_errors(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{rounds: 4")
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]")

    with pytest.raises(InvalidConfigurationException):
        SeatingConfig.from_file(broken)
    with pytest.raises(InvalidConfigurationException):
        SeatingConfig.from_file(listed)
    with pytest.raises(ArchonSeatingException):
        SeatingConfig.from_file(tmp_path / "missing.json")
