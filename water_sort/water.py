from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

from .errors import UnknownWaterError


class Water(str, Enum):
    """The liquid colours a tube slot can hold."""

    ASH = "ash"
    BLUE = "blue"
    BROWN = "brown"
    CYAN = "cyan"
    GREEN = "green"
    LIME = "lime"
    OLIVE = "olive"
    ORANGE = "orange"
    PINK = "pink"
    PURPLE = "purple"
    RED = "red"
    YELLOW = "yellow"

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return _RGB[self]

    @property
    def hex(self) -> str:
        r, g, b = self.rgb
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def abbr(self) -> str:
        return _ABBR[self]

    @staticmethod
    def parse(token: str) -> "Water":
        key = token.strip().lower()
        try:
            return _ALIASES[key]
        except KeyError as e:
            raise UnknownWaterError(token.strip()) from e

    def __str__(self) -> str:
        return self.value


_RGB: Dict[Water, Tuple[int, int, int]] = {
    Water.ASH: (99, 100, 101),
    Water.BLUE: (58, 46, 195),
    Water.BROWN: (126, 74, 7),
    Water.CYAN: (84, 163, 228),
    Water.GREEN: (17, 101, 51),
    Water.LIME: (98, 214, 124),
    Water.OLIVE: (120, 150, 15),
    Water.ORANGE: (232, 140, 66),
    Water.PINK: (234, 94, 123),
    Water.PURPLE: (113, 43, 147),
    Water.RED: (197, 42, 35),
    Water.YELLOW: (241, 217, 87),
}

_ABBR: Dict[Water, str] = {
    Water.ASH: "as",
    Water.BLUE: "bl",
    Water.BROWN: "br",
    Water.CYAN: "cy",
    Water.GREEN: "gr",
    Water.LIME: "li",
    Water.OLIVE: "ol",
    Water.ORANGE: "or",
    Water.PINK: "pi",
    Water.PURPLE: "pu",
    Water.RED: "re",
    Water.YELLOW: "ye",
}

# Short forms accepted by the editor. "gr" is grey (ash), not green.
_ALIASES: Dict[str, Water] = {
    "a": Water.ASH,
    "grey": Water.ASH,
    "gray": Water.ASH,
    "b": Water.BLUE,
    "bl": Water.BLUE,
    "c": Water.CYAN,
    "cy": Water.CYAN,
    "g": Water.GREEN,
    "l": Water.LIME,
    "o": Water.ORANGE,
    "or": Water.ORANGE,
    "p": Water.PINK,
    "pi": Water.PINK,
    "pu": Water.PURPLE,
    "r": Water.RED,
    "y": Water.YELLOW,
    "br": Water.BROWN,
    "ol": Water.OLIVE,
    "gr": Water.ASH,
}
_ALIASES.update({w.value: w for w in Water})
