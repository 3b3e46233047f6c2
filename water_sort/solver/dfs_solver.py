from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Generic, List, Optional, Set, TypeVar

from ..puzzle import Move, Puzzle
from .types import AlreadySolved, CannotBeSolved, HasUnknown, Solved, SolveResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

TIMEOUT_CHECK_INTERVAL = 1000


class DfsTimeoutError(ValueError):
    pass


class SearchLimitError(ValueError):
    pass


@dataclass
class SearchNode:
    puzzle: Puzzle
    move: Move
    parent: Optional[int]
    depth: int


class Arena(Generic[T]):
    """Append-only node store addressed by integer handles.

    Discarded entries are tombstoned in place so every handle handed out stays
    valid for the lifetime of the arena.
    """

    def __init__(self) -> None:
        self._items: List[Optional[T]] = []
        self._live = 0

    def add(self, item: T) -> int:
        self._items.append(item)
        self._live += 1
        return len(self._items) - 1

    def get(self, handle: int) -> T:
        item = self._items[handle]
        if item is None:
            raise KeyError(f"Arena handle {handle} was discarded")
        return item

    def discard(self, handle: int) -> None:
        if self._items[handle] is not None:
            self._items[handle] = None
            self._live -= 1

    @property
    def live(self) -> int:
        return self._live

    def __len__(self) -> int:
        return len(self._items)


class SearchTree(Arena[SearchNode]):
    def path_to(self, handle: int) -> List[Move]:
        """Moves from the starting puzzle to the node at `handle`."""
        moves: List[Move] = []
        cur: Optional[int] = handle
        while cur is not None:
            node = self.get(cur)
            moves.append(node.move)
            cur = node.parent
        moves.reverse()
        return moves


def solve_with_dfs(
    puzzle: Puzzle,
    *,
    timeout_ms: int | None = None,
    max_nodes: int | None = None,
) -> SolveResult:
    """Depth-first search over reachable puzzle states.

    Returns the first solution found, which is not necessarily the shortest.
    States already expanded are skipped, so the search always terminates.
    `timeout_ms` and `max_nodes` are optional caller-imposed bounds.
    """

    if puzzle.is_solved():
        return AlreadySolved()
    if puzzle.has_unknown():
        return HasUnknown(puzzle=puzzle.copy(), moves=[])

    start_time = time.monotonic()

    def check_timeout() -> None:
        if timeout_ms is None:
            return
        elapsed_ms = (time.monotonic() - start_time) * 1000.0
        if elapsed_ms >= timeout_ms:
            raise DfsTimeoutError(f"DFS solver timed out after {timeout_ms}ms")

    arena = SearchTree()
    stack: List[int] = []
    visited: Set[Puzzle] = set()

    for move in puzzle.valid_moves():
        child = puzzle.copy()
        child.pour(*move)
        stack.append(arena.add(SearchNode(child, move, None, 1)))

    max_depth = 0
    deepest: List[Move] = []
    steps = 0

    while stack:
        steps += 1
        if steps % TIMEOUT_CHECK_INTERVAL == 0:
            check_timeout()
        if max_nodes is not None and len(arena) > max_nodes:
            raise SearchLimitError(f"DFS solver exceeded {max_nodes} search nodes")

        handle = stack.pop()
        node = arena.get(handle)

        if node.puzzle.is_solved():
            moves = arena.path_to(handle)
            logger.info(
                "DFS found a %d-move solution after %d steps (%d nodes)", len(moves), steps, len(arena)
            )
            return Solved(moves=moves, explored=steps)

        if node.puzzle in visited:
            arena.discard(handle)
            continue
        visited.add(node.puzzle)

        moves = node.puzzle.valid_moves()
        if not moves:
            if node.depth > max_depth:
                max_depth = node.depth
                deepest = arena.path_to(handle)
            arena.discard(handle)
            continue

        for move in moves:
            child = node.puzzle.copy()
            child.pour(*move)
            stack.append(arena.add(SearchNode(child, move, handle, node.depth + 1)))

    logger.info(
        "DFS exhausted %d states without a solution (deepest dead end: %d)", len(visited), max_depth
    )
    return CannotBeSolved(moves=deepest, max_depth=max_depth, explored=steps)
