import numpy as np
import pytest

from archonseating.constants import POS_PLAYED, POS_VPS, RULES
from archonseating.models.player_index import PlayerIndex
from archonseating.models.round import Round, partition_players
from archonseating.seating.measure import MeasureEngine
from archonseating.seating.rules import (
    WEIGHTS,
    RuleEngine,
    Score,
    _mean_stddev,
    five_seat_rounds,
)


def _score(rounds):
    engine = MeasureEngine(PlayerIndex.from_rounds(rounds))
    return RuleEngine().score(engine.measure_rounds(rounds))


def _score_of(*values):
    rules = list(values) + [0] * (len(RULES) - len(values))
    return Score(rules=tuple(rules))


def test_single_round_only_spreads_vps_and_transfers():
    score = _score([partition_players(list(range(9)))])

    assert score.rules[0] == 0
    assert score.rules[1] == 0
    assert score.rules[2] > 0
    assert score.rules[3:7] == (0, 0, 0, 0)
    assert score.rules[7] > 0
    assert score.rules[8] == 0


def test_same_round_twice():
    round_ = partition_players(list(range(9)))
    score = _score([round_, round_.copy()])

    # 9 ordered prey pairs, 10 + 6 pairs sharing a table
    assert score.rules[0] == 9
    assert score.rules[1] == 0
    assert score.rules[3] == 16
    assert score.rules[4] == 1
    # everyone repeats their seat once
    assert score.rules[5] == 9
    assert score.rules[6] == 9
    # the four players at the 4-seat table twice miss their 5-seat round
    assert score.rules[8] == 4
    # the same seats twice keep the same per-round averages
    assert score.rules[2] == pytest.approx(_score([round_]).rules[2])


def test_same_round_thrice():
    round_ = partition_players(list(range(9)))
    score = _score([round_, round_.copy(), round_.copy()])

    assert score.rules[1] == 16
    assert score.rules[3] == 0
    assert score.rules[5] == 18


def test_equal_tables_have_no_vps_spread():
    score = _score([partition_players(list(range(10)))])

    assert score.rules[2] == 0
    assert score.rules[7] > 0


def test_vps_spread_value():
    # 5 players with 5 vps, 4 players with 4 vps
    score = _score([partition_players(list(range(9)))])
    assert score.rules[2] == pytest.approx(np.std([5] * 5 + [4] * 4))


def test_mean_stddev_needs_two_players():
    position = np.zeros((3, 8), dtype=np.int32)
    assert _mean_stddev(position, POS_VPS) == 0.0

    position[0, POS_PLAYED] = 1
    position[0, POS_VPS] = 5
    assert _mean_stddev(position, POS_VPS) == 0.0

    position[1, POS_PLAYED] = 2
    position[1, POS_VPS] = 8
    assert _mean_stddev(position, POS_VPS) == pytest.approx(0.5)


def test_stddev_rules_are_amplified():
    assert WEIGHTS[0] == 10**9
    assert WEIGHTS[2] == 10**9
    assert WEIGHTS[7] == 10**4
    assert WEIGHTS[8] == 10


def test_higher_rule_prevails():
    assert _score_of(0, 1) < _score_of(1)
    assert _score_of(0, 0, 0, 0, 0, 0, 0, 0, 10**6) < _score_of(0, 0, 0, 0, 0, 0, 0, 1)
    assert _score_of(0, 0, 0.01) > _score_of(0, 0, 0, 10**5)


@pytest.mark.parametrize("rule", range(len(RULES)))
def test_score_is_monotonic_per_rule(rule):
    base = [1] * len(RULES)
    worse = list(base)
    worse[rule] += 1

    assert Score(rules=tuple(base)) < Score(rules=tuple(worse))
    assert Score(rules=tuple(base)) == Score(rules=tuple(base))


def test_score_breakdown():
    score = _score_of(2, 0, 0.5)
    breakdown = score.breakdown()

    assert [result.code for result in breakdown] == [code for code, _, _ in RULES]
    assert breakdown[0].raw == 2
    assert breakdown[0].weighted == 2 * 10**9
    assert breakdown[2].weighted == pytest.approx(0.5 * 10**9)
    assert score.total == pytest.approx(2 * 10**9 + 0.5 * 10**9)
    assert str(score).startswith("R1: 2, R2: 0, R3: 0.5")
    assert score.to_dict()["rules"][0] == 2
    # the weighted sum does not follow the rule order, so it is not exported
    assert "total" not in score.to_dict()
    assert _score_of(0, 4).total < _score_of(0, 0, 0.5).total
    assert _score_of(0, 4) > _score_of(0, 0, 0.5)


def test_score_needs_every_rule():
    with pytest.raises(ValueError):
        Score(rules=(0, 0, 0))


def test_rule_engine_breakdown_matches_score():
    rounds = [partition_players(list(range(12)))] * 2
    engine = MeasureEngine(PlayerIndex.from_rounds(rounds))
    measure = engine.measure_rounds(rounds)

    breakdown = RuleEngine().breakdown(measure)
    assert tuple(result.raw for result in breakdown) == RuleEngine().score(measure).rules


def test_same_table_size_every_round_is_fair():
    round_ = partition_players(list(range(10)))
    score = _score([round_, round_.copy()])

    assert score.rules[8] == 0
    assert score.rules[5] == 10


def test_table_sizes_rotated():
    first = partition_players(list(range(9)))
    # the 4-seat table players move to the 5-seat table
    second = Round([[5, 6, 7, 8, 0], [1, 2, 3, 4]])
    score = _score([first, second])

    assert score.rules[8] == 0


def test_five_seat_rounds():
    first = partition_players(list(range(9)))
    second = Round([[5, 6, 7, 8, 0], [1, 2, 3, 4]])
    index = PlayerIndex.from_rounds([first, second])
    measure = MeasureEngine(index).measure_rounds([first, second])

    fives = five_seat_rounds(measure)
    assert fives[index.index_of(0)] == 2
    assert fives[index.index_of(1)] == 1
    assert fives[index.index_of(8)] == 1
    assert fives.sum() == 10


def test_seat_spread_allows_one_seat_per_five_rounds():
    players = list(range(10))
    # player 0 takes seats 1 to 5 of the first table, then seat 1 again
    rounds = []
    for shift in range(6):
        order = players[-shift:] + players[:-shift] if shift else list(players)
        rounds.append(partition_players(order))
    engine = MeasureEngine(PlayerIndex.from_rounds(rounds))
    measure = engine.measure_rounds(rounds)

    # 6 rounds allow two occupancies of a seat, nobody exceeds it
    assert RuleEngine().score(measure).rules[5] == 0
    assert RuleEngine().score(engine.measure_rounds(rounds[:2] * 2)).rules[5] > 0
