from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from .errors import WaterSortError
from .puzzle import Puzzle, format_moves
from .render import CellRenderer, plain_cell, render_puzzle
from .solver import solve_puzzle
from .state import EMPTY, UNKNOWN, SlotState
from .tube import CAPACITY, Tube
from .water import Water

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 12
PROMPT = ">> "

USAGE = {
    "init": "init <size>",
    "set": "set <tube> <idx> <colour>",
    "unset": "unset <tube> <idx>",
    "clear": "clear <tube> <idx>",
    "tube": "tube [<tube> <c0> <c1> <c2> <c3>]+",
    "tt": "tt [<tube> <colour>+]+",
    "pour": "pour <from> <to>",
    "load": "load <file>",
    "save": "save <file>",
}

HELP = """\
init <size>                          start a new puzzle
set <tube> <idx> <colour>            put a colour in one slot
unset <tube> <idx>                   mark a slot unknown
clear <tube> <idx>                   mark a slot empty
tube [<tube> <c0> <c1> <c2> <c3>]+   replace whole tubes (bottom to top, ? unknown, . empty)
tt [<tube> <colour>+]+               refill tubes from the bottom, rest empty
pour <from> <to>                     pour one tube into another
moves                                list the valid moves
solve                                search for a solution
undo                                 revert the last change
print                                show the puzzle
save <file> / load <file>            persist the puzzle
quit                                 leave"""


class ReplError(Exception):
    pass


class Quit(Exception):
    pass


def _usage(cmd: str) -> ReplError:
    return ReplError(f"usage: {USAGE[cmd]}")


def _parse_int(args: Sequence[str], pos: int, cmd: str) -> int:
    try:
        return int(args[pos])
    except (IndexError, ValueError):
        raise _usage(cmd) from None


class Session:
    """One interactive editing session over a single puzzle."""

    def __init__(self, puzzle: Optional[Puzzle] = None, *, cell: CellRenderer = plain_cell) -> None:
        self.puzzle = puzzle if puzzle is not None else Puzzle.new(DEFAULT_SIZE)
        self.cell = cell
        self._undo: List[Puzzle] = []
        self._commands: Dict[str, Callable[[List[str]], str]] = {}
        for names, fn in (
            (("init", "i"), self._cmd_init),
            (("set", "s"), self._cmd_set),
            (("unset", "u"), self._cmd_unset),
            (("clear",), self._cmd_clear),
            (("tube", "t"), self._cmd_tube),
            (("tt",), self._cmd_quick_tube),
            (("pour", "p"), self._cmd_pour),
            (("moves", "m"), self._cmd_moves),
            (("solve",), self._cmd_solve),
            (("undo",), self._cmd_undo),
            (("print", "pp"), self._cmd_print),
            (("save",), self._cmd_save),
            (("load", "l"), self._cmd_load),
            (("help", "h", "?"), self._cmd_help),
            (("quit", "q", "exit"), self._cmd_quit),
        ):
            for name in names:
                self._commands[name] = fn

    def execute(self, line: str) -> str:
        """Run one command line and return what it prints.

        Raises `ReplError` for bad input and `Quit` when asked to leave.
        """
        args = line.split()
        if not args:
            return ""
        cmd = self._commands.get(args[0].lower())
        if cmd is None:
            raise ReplError(f"Unrecognized command: {args[0]}")
        try:
            return cmd(args[1:])
        except WaterSortError as e:
            raise ReplError(str(e)) from e
        except OSError as e:
            raise ReplError(f"io error: {e}") from e

    def _checkpoint(self) -> None:
        self._undo.append(self.puzzle.copy())

    def _cmd_init(self, args: List[str]) -> str:
        size = _parse_int(args, 0, "init")
        puzzle = Puzzle.new(size)
        self._checkpoint()
        self.puzzle = puzzle
        return render_puzzle(self.puzzle, cell=self.cell)

    def _edit_slot(self, args: List[str], cmd: str, state: SlotState) -> str:
        tube = _parse_int(args, 0, cmd)
        idx = _parse_int(args, 1, cmd)
        self.puzzle.tube(tube).get(idx)
        self._checkpoint()
        self.puzzle.set(tube, idx, state)
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_set(self, args: List[str]) -> str:
        if len(args) < 3:
            raise _usage("set")
        return self._edit_slot(args, "set", SlotState.of(Water.parse(args[2])))

    def _cmd_unset(self, args: List[str]) -> str:
        return self._edit_slot(args, "unset", UNKNOWN)

    def _cmd_clear(self, args: List[str]) -> str:
        return self._edit_slot(args, "clear", EMPTY)

    def _cmd_tube(self, args: List[str]) -> str:
        group = CAPACITY + 1
        if not args or len(args) % group:
            raise _usage("tube")
        updates = []
        for k in range(0, len(args), group):
            idx = _parse_int(args, k, "tube")
            self.puzzle.tube(idx)
            updates.append((idx, Tube(SlotState.parse(tok) for tok in args[k + 1 : k + group])))
        self._checkpoint()
        for idx, tube in updates:
            self.puzzle.set_tube(idx, tube)
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_quick_tube(self, args: List[str]) -> str:
        if not args or not args[0].isdigit():
            raise _usage("tt")
        groups: List[List[str]] = []
        for tok in args:
            if tok.isdigit():
                groups.append([tok])
            else:
                groups[-1].append(tok)
        updates = []
        for idx_tok, *colours in groups:
            if not colours or len(colours) > CAPACITY:
                raise _usage("tt")
            idx = int(idx_tok)
            self.puzzle.tube(idx)
            slots = [SlotState.of(Water.parse(c)) for c in colours]
            slots += [EMPTY] * (CAPACITY - len(slots))
            updates.append((idx, Tube(slots)))
        self._checkpoint()
        for idx, tube in updates:
            self.puzzle.set_tube(idx, tube)
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_pour(self, args: List[str]) -> str:
        source = _parse_int(args, 0, "pour")
        dest = _parse_int(args, 1, "pour")
        before = self.puzzle.copy()
        self.puzzle.pour(source, dest)
        self._undo.append(before)
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_moves(self, args: List[str]) -> str:
        return format_moves(self.puzzle.valid_moves()) or "no valid moves"

    def _cmd_solve(self, args: List[str]) -> str:
        return solve_puzzle(self.puzzle).describe()

    def _cmd_undo(self, args: List[str]) -> str:
        if not self._undo:
            raise ReplError("nothing to undo")
        self.puzzle.reset(self._undo.pop())
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_print(self, args: List[str]) -> str:
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_save(self, args: List[str]) -> str:
        if len(args) != 1:
            raise _usage("save")
        path = self.puzzle.save(args[0])
        return f"saved to {path}"

    def _cmd_load(self, args: List[str]) -> str:
        if len(args) != 1:
            raise _usage("load")
        puzzle = Puzzle.from_file(args[0])
        self._checkpoint()
        self.puzzle = puzzle
        return render_puzzle(self.puzzle, cell=self.cell)

    def _cmd_help(self, args: List[str]) -> str:
        return HELP

    def _cmd_quit(self, args: List[str]) -> str:
        raise Quit()


def run_repl(
    session: Session,
    *,
    history_file: Optional[str | Path] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> None:
    """Read-eval-print loop until quit, Ctrl-C or Ctrl-D."""
    try:
        import readline
    except ImportError:  # pragma: no cover - not available on Windows
        readline = None  # type: ignore[assignment]

    if readline is not None and history_file is not None:
        try:
            readline.read_history_file(str(history_file))
        except OSError:
            output_fn("No previous history.")

    try:
        while True:
            try:
                line = input_fn(PROMPT)
            except KeyboardInterrupt:
                output_fn("CTRL-C")
                break
            except EOFError:
                output_fn("CTRL-D")
                break
            try:
                out = session.execute(line)
            except Quit:
                break
            except ReplError as e:
                output_fn(str(e))
                continue
            if out:
                output_fn(out)
    finally:
        if readline is not None and history_file is not None:
            try:
                readline.write_history_file(str(history_file))
            except OSError as e:
                logger.warning("Could not save history to %s: %s", history_file, e)
