"""Water sort puzzle model and solver."""

from .errors import (
    IllegalPourError,
    InvalidPuzzleSizeError,
    InvalidSlotError,
    InvalidTubeError,
    PuzzleFormatError,
    UnknownWaterError,
    WaterSortError,
)
from .puzzle import Move, Puzzle, format_moves
from .state import EMPTY, UNKNOWN, SlotState
from .tube import CAPACITY, Tube
from .water import Water

__all__ = [
    "CAPACITY",
    "EMPTY",
    "IllegalPourError",
    "InvalidPuzzleSizeError",
    "InvalidSlotError",
    "InvalidTubeError",
    "Move",
    "Puzzle",
    "PuzzleFormatError",
    "SlotState",
    "Tube",
    "UNKNOWN",
    "UnknownWaterError",
    "Water",
    "WaterSortError",
    "format_moves",
]
