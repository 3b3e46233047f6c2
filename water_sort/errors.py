from __future__ import annotations

from typing import Optional


class WaterSortError(ValueError):
    """Base class for every error raised by the puzzle model."""


class InvalidPuzzleSizeError(WaterSortError):
    def __init__(self, size: int) -> None:
        super().__init__("size must be greater than 2")
        self.size = size


class InvalidTubeError(WaterSortError, IndexError):
    def __init__(self, tube: int, size: int) -> None:
        super().__init__(f"tube must be between 0 and {size - 1}")
        self.tube = tube
        self.size = size


class InvalidSlotError(WaterSortError, IndexError):
    def __init__(self, slot: int) -> None:
        super().__init__("index must be between 0 and 3")
        self.slot = slot


class IllegalPourError(WaterSortError):
    def __init__(self, source: Optional[int] = None, dest: Optional[int] = None) -> None:
        if source is None or dest is None:
            super().__init__("cannot pour between these tubes")
        else:
            super().__init__(f"cannot pour from {source} to {dest}")
        self.source = source
        self.dest = dest


class UnknownWaterError(WaterSortError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown colour: {token}" if token else "missing colour")
        self.token = token


class PuzzleFormatError(WaterSortError):
    pass
