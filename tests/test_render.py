from water_sort.puzzle import Puzzle
from water_sort.render import DIVIDER, color_cell, plain_cell, render_puzzle
from water_sort.state import EMPTY, UNKNOWN, SlotState
from water_sort.water import Water


def test_layout_of_new_puzzle():
    lines = render_puzzle(Puzzle.new(3)).splitlines()
    assert len(lines) == 11
    assert lines[0] == "    0     1"
    assert lines[1] == "0 | ? | |   |"
    assert lines[5] == DIVIDER
    assert lines[6] == "    2"
    assert lines[7] == "0 |   |"


def test_rows_follow_slot_index():
    p = Puzzle.from_text("r b . .\nempty\nempty\nempty")
    lines = render_puzzle(p).splitlines()
    assert lines[0] == "    0     1"
    assert "re" in lines[1] and "bl" in lines[2]
    assert lines[3].startswith("2 |   |")
    assert lines[6] == "    2     3"


def test_odd_sizes_put_extra_tube_on_first_row():
    lines = render_puzzle(Puzzle.new(5)).splitlines()
    assert lines[0] == "    0     1     2"
    assert lines[6] == "    3     4"


def test_cells_are_three_wide():
    for state in (UNKNOWN, EMPTY, SlotState.of(Water.LIME)):
        assert len(plain_cell(state)) == 3
    assert plain_cell(UNKNOWN) == " ? "


def test_color_cell_wraps_plain_glyph():
    state = SlotState.of(Water.CYAN)
    assert plain_cell(state) in color_cell(state)
