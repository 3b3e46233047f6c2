from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .errors import WaterSortError
from .puzzle import Puzzle, format_moves
from .render import color_cell, plain_cell, render_puzzle
from .repl import Session, run_repl
from .solver import SOLVER_CHOICES, AlreadySolved, DfsTimeoutError, SearchLimitError, Solved, solve_puzzle
from .viz import write_plotly_html


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="water-sort", description="Water sort puzzle editor + solver")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_new = sub.add_parser("new", help="Write a fresh puzzle (all unknown, last two tubes empty)")
    p_new.add_argument("size", type=int, help="Number of tubes (> 2)")
    p_new.add_argument("--out", type=str, required=True, help="Output path (.json or text)")

    p_show = sub.add_parser("show", help="Print the puzzle grid")
    p_show.add_argument("puzzle", type=str, help="Path to .json or text puzzle file")
    p_show.add_argument("--plain", action="store_true", help="Disable terminal colours")

    p_moves = sub.add_parser("moves", help="List the valid moves")
    p_moves.add_argument("puzzle", type=str, help="Path to .json or text puzzle file")

    p_solve = sub.add_parser("solve", help="Solve a puzzle and print the moves")
    p_solve.add_argument("puzzle", type=str, help="Path to .json or text puzzle file")
    p_solve.add_argument("--solver", choices=SOLVER_CHOICES, default="dfs", help="Solver backend")
    p_solve.add_argument("--timeout-ms", type=int, default=None, help="Give up after this many milliseconds")
    p_solve.add_argument("--max-nodes", type=int, default=None, help="Give up after this many search nodes")
    p_solve.add_argument("--out", type=str, default=None, help="Also write an animated HTML replay")
    p_solve.add_argument("--plain", action="store_true", help="Disable terminal colours")

    p_viz = sub.add_parser("visualize", help="Render the puzzle to an HTML file")
    p_viz.add_argument("puzzle", type=str, help="Path to .json or text puzzle file")
    p_viz.add_argument("--out", type=str, default="out/puzzle.html", help="Output HTML path")

    p_repl = sub.add_parser("repl", help="Edit and solve a puzzle interactively")
    p_repl.add_argument("puzzle", type=str, nargs="?", default=None, help="Optional puzzle file to start from")
    p_repl.add_argument("--history", type=str, default="history.txt", help="Line history file")
    p_repl.add_argument("--plain", action="store_true", help="Disable terminal colours")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run(args)
    except (WaterSortError, DfsTimeoutError, SearchLimitError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


def _run(args: argparse.Namespace) -> int:
    cell = plain_cell if getattr(args, "plain", False) else color_cell

    if args.cmd == "new":
        out = Puzzle.new(args.size).save(args.out)
        print(f"Wrote new puzzle: {out}")
        return 0

    if args.cmd == "repl":
        puzzle = Puzzle.from_file(args.puzzle) if args.puzzle else None
        run_repl(Session(puzzle, cell=cell), history_file=args.history)
        return 0

    puzzle_path = Path(args.puzzle)
    puzzle = Puzzle.from_file(puzzle_path)

    if args.cmd == "show":
        print(render_puzzle(puzzle, cell=cell))
        return 0

    if args.cmd == "moves":
        print(format_moves(puzzle.valid_moves()) or "no valid moves")
        return 0

    if args.cmd == "visualize":
        out = write_plotly_html(puzzle, out_path=args.out, title=f"Puzzle: {puzzle_path.name}")
        print(f"Wrote puzzle visualization: {out}")
        return 0

    if args.cmd == "solve":
        print(render_puzzle(puzzle, cell=cell))
        res = solve_puzzle(puzzle, solver=args.solver, timeout_ms=args.timeout_ms, max_nodes=args.max_nodes)
        print(res.describe())
        if isinstance(res, Solved) and args.out:
            out = write_plotly_html(
                puzzle, out_path=args.out, moves=res.moves, title=f"Solution: {puzzle_path.name}"
            )
            print(f"Wrote solution visualization: {out}")
        return 0 if isinstance(res, (Solved, AlreadySolved)) else 1

    raise AssertionError("unreachable")


