from __future__ import annotations

from typing import Callable, Dict, List

from termcolor import colored

from .puzzle import Puzzle
from .state import SlotState
from .tube import CAPACITY
from .water import Water

CellRenderer = Callable[[SlotState], str]

DIVIDER = "-" * 25

# Closest terminal highlight for each water colour; the abbreviation inside
# the cell tells apart colours that share a highlight.
_HIGHLIGHT: Dict[Water, str] = {
    Water.ASH: "on_dark_grey",
    Water.BLUE: "on_blue",
    Water.BROWN: "on_red",
    Water.CYAN: "on_light_cyan",
    Water.GREEN: "on_green",
    Water.LIME: "on_light_green",
    Water.OLIVE: "on_yellow",
    Water.ORANGE: "on_light_red",
    Water.PINK: "on_light_magenta",
    Water.PURPLE: "on_magenta",
    Water.RED: "on_red",
    Water.YELLOW: "on_light_yellow",
}


def plain_cell(state: SlotState) -> str:
    if state.water is not None:
        return state.water.abbr.center(3)
    if state.is_unknown:
        return " ? "
    return "   "


def color_cell(state: SlotState) -> str:
    text = plain_cell(state)
    if state.water is not None:
        return colored(text, "white", _HIGHLIGHT[state.water], attrs=["bold"])
    return colored(text, "white", "on_black")


def _render_half(puzzle: Puzzle, start: int, end: int, cell: CellRenderer) -> List[str]:
    if start >= end:
        return []
    lines = ["  " + "   ".join(f"{i:3}" for i in range(start, end))]
    for row in range(CAPACITY):
        cells = " ".join(f"|{cell(puzzle.tube(i).get(row))}|" for i in range(start, end))
        lines.append(f"{row} {cells}")
    return lines


def render_puzzle(puzzle: Puzzle, *, cell: CellRenderer = plain_cell) -> str:
    """Lay the tubes out in two stacked halves, one line per slot index."""
    size = puzzle.size
    mid = (size + 1) // 2
    lines = _render_half(puzzle, 0, mid, cell)
    lines.append(DIVIDER)
    lines += _render_half(puzzle, mid, size, cell)
    return "\n".join(lines)
