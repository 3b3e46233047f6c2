import pytest

from water_sort.errors import IllegalPourError, InvalidSlotError
from water_sort.state import EMPTY, UNKNOWN, SlotState
from water_sort.tube import Tube
from water_sort.water import Water


def T(text: str) -> Tube:
    return Tube(SlotState.parse(tok) for tok in text.split())


RED = SlotState.of(Water.RED)
BLUE = SlotState.of(Water.BLUE)


def test_default_tube_is_unknown_and_empty_tube_is_empty():
    assert list(Tube()) == [UNKNOWN] * 4
    assert list(Tube.empty()) == [EMPTY] * 4
    assert Tube.empty().top() == EMPTY


def test_tube_needs_four_slots():
    with pytest.raises(ValueError):
        Tube([EMPTY, EMPTY])


@pytest.mark.parametrize(
    "text, top, free, to_pour",
    [
        ("r r b .", BLUE, 1, 1),
        ("r b b .", BLUE, 1, 2),
        ("r r r r", RED, 0, 4),
        (". . . .", EMPTY, 4, 0),
        ("? ? ? ?", UNKNOWN, 0, 0),
        ("? r . .", RED, 2, 1),
        ("r . r .", RED, 1, 1),
    ],
)
def test_derived_queries(text, top, free, to_pour):
    tube = T(text)
    assert tube.top() == top
    assert tube.num_free() == free
    assert tube.num_to_pour() == to_pour


@pytest.mark.parametrize(
    "src, dst, expected",
    [
        ("r r . .", ". . . .", True),
        ("r r . .", "r . . .", True),
        ("r r . .", "r r r .", False),
        ("b r . .", "r r r .", True),
        ("r . . .", "b . . .", False),
        (". . . .", ". . . .", False),
        ("? . . .", ". . . .", False),
        ("r . . .", "r ? . .", False),
        ("r . . .", "? ? ? ?", False),
    ],
)
def test_can_pour_to(src, dst, expected):
    a, b = T(src), T(dst)
    assert a.can_pour_to(b) is expected
    # pure function of contents
    assert a.can_pour_to(b) is expected
    assert a == T(src) and b == T(dst)


def test_pour_moves_whole_top_run():
    a, b = T("b r r ."), T("r . . .")
    a.pour_to(b)
    assert a == T("b . . .")
    assert b == T("r r r .")


def test_pour_into_empty_tube():
    a, b = T("r b b b"), T(". . . .")
    a.pour_to(b)
    assert a == T("r . . .")
    assert b == T("b b b .")


def test_pour_last_unit_into_single_free_slot():
    a, b = T("r . . ."), T("r r r .")
    a.pour_to(b)
    assert a.is_empty()
    assert b.is_complete()


def test_illegal_pour_leaves_tubes_unchanged():
    a, b = T("r r . ."), T("b . . .")
    with pytest.raises(IllegalPourError):
        a.pour_to(b)
    assert a == T("r r . .")
    assert b == T("b . . .")


def test_slot_index_is_checked():
    tube = Tube.empty()
    with pytest.raises(InvalidSlotError):
        tube.set(4, RED)
    with pytest.raises(IndexError):
        tube.get(-1)


def test_equality_and_hash_follow_contents():
    assert T("r b . .") == T("r b . .")
    assert hash(T("r b . .")) == hash(T("r b . ."))
    assert T("r b . .") != T("b r . .")


def test_copy_is_independent():
    a = T("r . . .")
    b = a.copy()
    b.set(1, BLUE)
    assert a == T("r . . .")
