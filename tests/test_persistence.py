import json

import pytest

from water_sort.errors import PuzzleFormatError, UnknownWaterError
from water_sort.puzzle import Puzzle
from water_sort.state import EMPTY, UNKNOWN, SlotState
from water_sort.water import Water


def _edited_puzzle() -> Puzzle:
    p = Puzzle.new(4)
    p.set(0, 0, SlotState.of(Water.PINK))
    p.set(0, 1, EMPTY)
    p.set(1, 3, SlotState.of(Water.OLIVE))
    return p


def test_dict_round_trip_keeps_every_slot():
    p = _edited_puzzle()
    data = p.to_dict()
    assert data["tubes"][0] == ["pink", "empty", "unknown", "unknown"]
    assert data["tubes"][3] == ["empty"] * 4
    assert Puzzle.from_dict(data) == p


def test_json_round_trip():
    p = _edited_puzzle()
    text = p.to_json()
    assert json.loads(text) == p.to_dict()
    assert Puzzle.from_json(text) == p


def test_text_round_trip():
    p = _edited_puzzle()
    assert Puzzle.from_text(p.to_text()) == p


def test_from_text_accepts_aliases_comments_and_commas():
    p = Puzzle.from_text(
        """
        # a comment line
        r, bl, ?, .
        empty
        """
    )
    assert p.size == 2
    assert list(p.tube(0)) == [SlotState.of(Water.RED), SlotState.of(Water.BLUE), UNKNOWN, EMPTY]
    assert p.tube(1).is_empty()


def test_from_text_rejects_short_lines():
    with pytest.raises(PuzzleFormatError, match="Line 1"):
        Puzzle.from_text("r r r")


def test_from_text_rejects_blank_input():
    with pytest.raises(PuzzleFormatError):
        Puzzle.from_text("# nothing here\n")


def test_unknown_colour_is_reported():
    with pytest.raises(UnknownWaterError, match="mauve"):
        Puzzle.from_text("mauve . . .")


@pytest.mark.parametrize(
    "obj",
    [
        [],
        {"tubes": "nope"},
        {"tubes": [["red", "red"]]},
    ],
)
def test_from_dict_rejects_malformed_input(obj):
    with pytest.raises(PuzzleFormatError):
        Puzzle.from_dict(obj)


def test_from_json_rejects_invalid_json():
    with pytest.raises(PuzzleFormatError):
        Puzzle.from_json("{not json")


@pytest.mark.parametrize("name", ["puzzle.json", "puzzle.tubes"])
def test_save_and_load(tmp_path, name):
    p = _edited_puzzle()
    path = p.save(tmp_path / "sub" / name)
    assert path.exists()
    assert Puzzle.from_file(path) == p


def test_water_aliases():
    assert Water.parse("Gray") is Water.ASH
    assert Water.parse("o") is Water.ORANGE
    assert Water.parse(" purple ") is Water.PURPLE
    with pytest.raises(UnknownWaterError):
        Water.parse("")


@pytest.mark.parametrize("name", ["bad.json", "bad.tubes"])
def test_non_utf8_file_is_a_format_error(tmp_path, name):
    path = tmp_path / name
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(PuzzleFormatError, match="is not UTF-8 text"):
        Puzzle.from_file(path)
