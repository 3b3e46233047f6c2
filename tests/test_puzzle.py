from collections import Counter

import pytest

from water_sort.errors import IllegalPourError, InvalidPuzzleSizeError, InvalidSlotError, InvalidTubeError
from water_sort.puzzle import Move, Puzzle, format_moves
from water_sort.state import EMPTY, UNKNOWN, SlotState
from water_sort.tube import Tube
from water_sort.water import Water


def P(text: str) -> Puzzle:
    return Puzzle.from_text(text)


def _waters(puzzle: Puzzle) -> Counter:
    return Counter(s.water for t in puzzle for s in t if s.is_water)


MIXED = """
green blue red green
blue red green blue
red green blue red
empty
empty
"""


def test_new_puzzle_reserves_two_empty_tubes():
    p = Puzzle.new(5)
    assert p.size == 5
    for tube in p.tubes[:3]:
        assert list(tube) == [UNKNOWN] * 4
    for tube in p.tubes[3:]:
        assert tube.is_empty()


@pytest.mark.parametrize("size", [0, 1, 2])
def test_new_puzzle_rejects_small_sizes(size):
    with pytest.raises(InvalidPuzzleSizeError, match="greater than 2"):
        Puzzle.new(size)


def test_merging_two_half_tubes_solves_puzzle():
    p = Puzzle.new(3)
    p.set_tube(0, P("r r . .").tube(0))
    p.set_tube(1, P("r r . .").tube(0))
    assert not p.is_solved()

    p.pour(0, 1)

    assert p.tube(0).is_empty()
    assert list(p.tube(1)) == [SlotState.of(Water.RED)] * 4
    assert p.is_solved()


def test_valid_moves_order_and_format():
    p = P("r b . .\nb r . .\nempty")
    moves = p.valid_moves()
    assert moves == [Move(0, 2), Move(1, 2)]
    assert format_moves(moves) == "(0, 2), (1, 2)"


def test_valid_moves_are_ordered_by_source_then_dest():
    p = P(MIXED)
    moves = p.valid_moves()
    assert moves == sorted(moves)
    assert all(m.source != m.dest for m in moves)
    assert moves[0] == Move(0, 3)


def test_complete_tube_is_never_a_source():
    p = P("r r r r\nb b . .\nempty")
    moves = p.valid_moves()
    assert moves == [Move(1, 2)]
    assert all(m.source != 0 for m in moves)


def test_illegal_pour_reports_indices_and_keeps_state():
    p = P("r . . .\nb . . .")
    before = p.copy()
    with pytest.raises(IllegalPourError) as exc:
        p.pour(0, 1)
    assert (exc.value.source, exc.value.dest) == (0, 1)
    assert "cannot pour from 0 to 1" in str(exc.value)
    assert p == before


def test_pour_onto_itself_is_illegal():
    p = P("r . . .\nempty")
    with pytest.raises(IllegalPourError):
        p.pour(0, 0)


def test_out_of_range_indices_are_errors():
    p = Puzzle.new(4)
    with pytest.raises(InvalidTubeError, match="between 0 and 3"):
        p.set(4, 0, EMPTY)
    with pytest.raises(IndexError):
        p.tube(-1)
    with pytest.raises(InvalidSlotError):
        p.set(0, 4, EMPTY)
    with pytest.raises(InvalidTubeError):
        p.pour(0, 9)


def test_has_unknown():
    assert Puzzle.new(4).has_unknown()
    assert not P(MIXED).has_unknown()
    assert P("? r . .\nempty").has_unknown()


def test_is_solved():
    assert P("r r r r\nempty\nb b b b").is_solved()
    assert not P("r r . .\nempty").is_solved()
    assert not Puzzle.new(3).is_solved()


def test_is_solved_is_stable_across_queries():
    p = P("r r r r\nempty\nempty")
    assert p.is_solved()
    p.valid_moves()
    p.has_unknown()
    assert p.is_solved()


def test_every_valid_pour_conserves_water():
    p = P(MIXED)
    total = _waters(p)
    for move in p.valid_moves():
        after = p.copy()
        after.pour(*move)
        assert _waters(after) == total


def test_equality_and_hash_are_structural():
    a, b = P(MIXED), P(MIXED)
    assert a == b and hash(a) == hash(b)
    assert len({a, b}) == 1
    b.pour(0, 3)
    assert a != b


def test_copy_and_set_do_not_share_tubes():
    p = P("r . . .\nempty")
    tube = Tube.empty()
    p.set_tube(1, tube)
    tube.set(0, UNKNOWN)
    assert p.tube(1).is_empty()

    q = p.copy()
    q.pour(0, 1)
    assert p.tube(0).get(0) == SlotState.of(Water.RED)


def test_reset_replaces_whole_state():
    p = Puzzle.new(6)
    other = P(MIXED)
    p.reset(other)
    assert p == other
    p.pour(0, 3)
    assert p != other


def test_apply_moves_replays_in_order():
    p = P("r r . .\nr r . .\nempty")
    out = p.apply_moves([Move(0, 1)])
    assert out.is_solved()
    assert not p.is_solved()
    with pytest.raises(IllegalPourError):
        p.apply_moves([Move(2, 0)])
