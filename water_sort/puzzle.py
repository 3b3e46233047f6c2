from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Sequence

from .errors import IllegalPourError, InvalidPuzzleSizeError, InvalidTubeError, PuzzleFormatError
from .state import SlotState
from .tube import CAPACITY, Tube

logger = logging.getLogger(__name__)

RESERVED_EMPTY_TUBES = 2


class Move(NamedTuple):
    source: int
    dest: int

    def __str__(self) -> str:
        return f"({self.source}, {self.dest})"


def format_moves(moves: Iterable[Move]) -> str:
    return ", ".join(str(Move(*m)) for m in moves)


def read_puzzle_text(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise PuzzleFormatError(f"{path} is not UTF-8 text") from e


class Puzzle:
    """An ordered row of tubes.

    Puzzles compare and hash by content (tube by tube, slot by slot), which is
    what lets the solver keep a set of visited states.
    """

    __slots__ = ("_tubes",)

    def __init__(self, tubes: Iterable[Tube] = ()) -> None:
        self._tubes: List[Tube] = [t.copy() for t in tubes]

    @classmethod
    def new(cls, size: int) -> "Puzzle":
        """All tubes unknown, except the last two which always start empty."""
        if size <= RESERVED_EMPTY_TUBES:
            raise InvalidPuzzleSizeError(size)
        tubes = [Tube() for _ in range(size - RESERVED_EMPTY_TUBES)]
        tubes += [Tube.empty() for _ in range(RESERVED_EMPTY_TUBES)]
        return cls(tubes)

    @property
    def size(self) -> int:
        return len(self._tubes)

    @property
    def tubes(self) -> Sequence[Tube]:
        return tuple(self._tubes)

    def tube(self, idx: int) -> Tube:
        self._check_tube(idx)
        return self._tubes[idx]

    def copy(self) -> "Puzzle":
        out = Puzzle()
        out._tubes = [t.copy() for t in self._tubes]
        return out

    # -- editing -----------------------------------------------------------

    def set(self, tube: int, slot: int, state: SlotState) -> None:
        self._check_tube(tube)
        self._tubes[tube].set(slot, state)

    def set_tube(self, idx: int, tube: Tube) -> None:
        self._check_tube(idx)
        self._tubes[idx] = tube.copy()

    def reset(self, other: "Puzzle") -> None:
        self._tubes = [t.copy() for t in other._tubes]

    def pour(self, source: int, dest: int) -> None:
        self._check_tube(source)
        self._check_tube(dest)
        src, dst = self._tubes[source], self._tubes[dest]
        if source == dest or not src.can_pour_to(dst):
            raise IllegalPourError(source, dest)
        src.pour_to(dst)

    def apply_moves(self, moves: Iterable[Move]) -> "Puzzle":
        out = self.copy()
        for source, dest in moves:
            out.pour(source, dest)
        return out

    # -- queries -----------------------------------------------------------

    def is_solved(self) -> bool:
        return all(t.is_empty() or t.is_complete() for t in self._tubes)

    def has_unknown(self) -> bool:
        return any(s.is_unknown for t in self._tubes for s in t)

    def valid_moves(self) -> List[Move]:
        moves: List[Move] = []
        for i, src in enumerate(self._tubes):
            if src.is_complete():
                continue
            for j, dst in enumerate(self._tubes):
                if i != j and src.can_pour_to(dst):
                    moves.append(Move(i, j))
        return moves

    def _check_tube(self, idx: int) -> None:
        if not 0 <= idx < len(self._tubes):
            raise InvalidTubeError(idx, len(self._tubes))

    def __iter__(self) -> Iterator[Tube]:
        return iter(self._tubes)

    def __len__(self) -> int:
        return len(self._tubes)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Puzzle):
            return NotImplemented
        return self._tubes == other._tubes

    def __hash__(self) -> int:
        return hash(tuple(tuple(t) for t in self._tubes))

    def __repr__(self) -> str:
        return f"Puzzle({self._tubes!r})"

    def __str__(self) -> str:
        from .render import render_puzzle

        return render_puzzle(self)

    # -- persistence -------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {"tubes": [[s.to_token() for s in t] for t in self._tubes]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def to_text(self) -> str:
        return "".join(" ".join(s.to_token() for s in t) + "\n" for t in self._tubes)

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = self.to_json() + "\n" if path.suffix.lower() == ".json" else self.to_text()
        path.write_text(text, encoding="utf-8")
        logger.info("Saved %d-tube puzzle to %s", self.size, path)
        return path

    @staticmethod
    def from_dict(obj: Any) -> "Puzzle":
        if not isinstance(obj, dict) or not isinstance(obj.get("tubes"), list):
            raise PuzzleFormatError('Puzzle JSON must be an object with a "tubes" list')
        tubes: List[Tube] = []
        for i, row in enumerate(obj["tubes"]):
            if not isinstance(row, list) or len(row) != CAPACITY:
                raise PuzzleFormatError(f"Tube {i} must be a list of {CAPACITY} slot states")
            tubes.append(Tube(SlotState.parse(str(tok)) for tok in row))
        return Puzzle(tubes)

    @staticmethod
    def from_json(text: str) -> "Puzzle":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"Invalid puzzle JSON: {e}") from e
        return Puzzle.from_dict(obj)

    @staticmethod
    def from_text(text: str) -> "Puzzle":
        """Parse one tube per line, slot tokens listed bottom to top.

        Tokens are separated by whitespace or commas. `?` is unknown, `.` is
        empty, anything else is a colour. A line reading just `empty` stands
        for an empty tube. Lines starting with `#` are comments.
        """
        tubes: List[Tube] = []
        for lineno, ln in enumerate(text.splitlines(), start=1):
            raw = ln.strip()
            if not raw or raw.startswith("#"):
                continue
            toks = [t for t in raw.replace(",", " ").split() if t]
            if len(toks) == 1 and toks[0].lower() == "empty":
                tubes.append(Tube.empty())
                continue
            if len(toks) != CAPACITY:
                raise PuzzleFormatError(
                    f"Line {lineno}: expected {CAPACITY} slot tokens, found {len(toks)}"
                )
            tubes.append(Tube(SlotState.parse(t) for t in toks))
        if not tubes:
            raise PuzzleFormatError("No tubes found in puzzle text")
        return Puzzle(tubes)

    @staticmethod
    def from_file(path: str | Path) -> "Puzzle":
        path = Path(path)
        text = read_puzzle_text(path)
        if path.suffix.lower() == ".json":
            puzzle = Puzzle.from_json(text)
        else:
            puzzle = Puzzle.from_text(text)
        logger.info("Loaded %d-tube puzzle from %s", puzzle.size, path)
        return puzzle

    @staticmethod
    def parse(text: str, *, name: str = "puzzle.json") -> "Puzzle":
        if name.lower().endswith(".json"):
            return Puzzle.from_json(text)
        return Puzzle.from_text(text)
