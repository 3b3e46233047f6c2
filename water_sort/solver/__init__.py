from __future__ import annotations

from ..puzzle import Puzzle
from .dfs_solver import Arena, DfsTimeoutError, SearchLimitError, SearchNode, SearchTree, solve_with_dfs
from .types import AlreadySolved, CannotBeSolved, HasUnknown, Solved, SolveResult, SolverName

SOLVER_CHOICES: tuple[SolverName, ...] = ("dfs",)


def solve_puzzle(
    puzzle: Puzzle,
    *,
    solver: SolverName = "dfs",
    timeout_ms: int | None = None,
    max_nodes: int | None = None,
) -> SolveResult:
    if solver == "dfs":
        return solve_with_dfs(puzzle, timeout_ms=timeout_ms, max_nodes=max_nodes)
    raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")


__all__ = [
    "AlreadySolved",
    "Arena",
    "CannotBeSolved",
    "DfsTimeoutError",
    "HasUnknown",
    "SOLVER_CHOICES",
    "SearchLimitError",
    "SearchNode",
    "SearchTree",
    "SolveResult",
    "Solved",
    "SolverName",
    "solve_puzzle",
    "solve_with_dfs",
]
