from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .water import Water

SlotKind = Literal["unknown", "empty", "water"]

_UNKNOWN_TOKENS = {"?", "unknown"}
_EMPTY_TOKENS = {".", "-", "_", "empty"}


@dataclass(frozen=True)
class SlotState:
    """What one position of a tube holds.

    - `unknown`: not yet observed by the player (the default).
    - `empty`: nothing there.
    - `water`: occupied by `water`.
    """

    kind: SlotKind = "unknown"
    water: Optional[Water] = None

    def __post_init__(self) -> None:
        if self.kind == "water":
            if self.water is None:
                raise ValueError("An occupied slot needs a water colour")
        elif self.water is not None:
            raise ValueError(f"A {self.kind} slot cannot hold {self.water}")

    @staticmethod
    def of(water: Water) -> "SlotState":
        return SlotState("water", water)

    @property
    def is_unknown(self) -> bool:
        return self.kind == "unknown"

    @property
    def is_empty(self) -> bool:
        return self.kind == "empty"

    @property
    def is_water(self) -> bool:
        return self.kind == "water"

    def to_token(self) -> str:
        if self.water is not None:
            return self.water.value
        return self.kind

    @staticmethod
    def parse(token: str) -> "SlotState":
        key = token.strip().lower()
        if key in _UNKNOWN_TOKENS:
            return UNKNOWN
        if key in _EMPTY_TOKENS:
            return EMPTY
        return SlotState.of(Water.parse(key))

    def __str__(self) -> str:
        return self.to_token()


UNKNOWN = SlotState("unknown")
EMPTY = SlotState("empty")
