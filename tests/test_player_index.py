import pytest

from archonseating.exceptions import IndexOutOfRangeException, UnknownPlayerException
from archonseating.models.player_index import PlayerIndex
from archonseating.models.round import Round, partition_players


def test_first_encounter_order():
    first = partition_players(["a", "b", "c", "d", "e", "f", "g", "h"])
    second = Round([["h", "i", "a", "b"], ["c", "d", "e", "f"]])
    index = PlayerIndex.from_rounds([first, second])

    assert len(index) == 9
    assert index.index_of("a") == 0
    assert index.index_of("h") == 7
    assert index.index_of("i") == 8
    assert list(index) == ["a", "b", "c", "d", "e", "f", "g", "h", "i"]


def test_bijection():
    index = PlayerIndex([10, "x", (1, 2), 3.5])

    for i in range(len(index)):
        assert index.index_of(index.player_at(i)) == i
    for player in index:
        assert index.player_at(index.index_of(player)) == player


def test_register_is_idempotent():
    index = PlayerIndex()

    assert index.register("a") == 0
    assert index.register("b") == 1
    assert index.register("a") == 0
    assert len(index) == 2
    assert "a" in index
    assert "c" not in index


def test_unknown_player():
    index = PlayerIndex(["a"])

    with pytest.raises(UnknownPlayerException) as excinfo:
        index.index_of("z")
    assert excinfo.value.player == "z"
    # also a KeyError for callers treating the index as a mapping
    with pytest.raises(KeyError):
        index.index_of("z")


def test_player_at_out_of_range():
    index = PlayerIndex(["a", "b"])

    with pytest.raises(IndexOutOfRangeException):
        index.player_at(2)
    with pytest.raises(IndexOutOfRangeException):
        index.player_at(-1)
