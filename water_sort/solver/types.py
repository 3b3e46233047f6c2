from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Literal, Union

from ..puzzle import Move, Puzzle, format_moves

SolverName = Literal["dfs"]


@dataclass(frozen=True)
class AlreadySolved:
    status: ClassVar[str] = "already_solved"

    @property
    def moves(self) -> List[Move]:
        return []

    def describe(self) -> str:
        return "Puzzle is already solved."


@dataclass(frozen=True)
class HasUnknown:
    """The puzzle still has unobserved slots, so no search was attempted."""

    status: ClassVar[str] = "has_unknown"
    puzzle: Puzzle
    moves: List[Move] = field(default_factory=list)

    def describe(self) -> str:
        return "Puzzle has unknown slots; fill them in before solving."


@dataclass(frozen=True)
class CannotBeSolved:
    """No solved state is reachable.

    `moves` leads to the deepest dead end the search ran into and
    `max_depth` is its length; both are diagnostics only.
    """

    status: ClassVar[str] = "cannot_be_solved"
    moves: List[Move]
    max_depth: int
    explored: int = 0

    def describe(self) -> str:
        path = format_moves(self.moves) or "-"
        return f"Puzzle cannot be solved. Deepest dead end at depth {self.max_depth}: {path}"


@dataclass(frozen=True)
class Solved:
    status: ClassVar[str] = "solved"
    moves: List[Move]
    explored: int = 0

    def describe(self) -> str:
        return f"Solved in {len(self.moves)} moves: {format_moves(self.moves)}"


SolveResult = Union[AlreadySolved, HasUnknown, CannotBeSolved, Solved]
