from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Allow running `python backend/app.py` from repo root.
_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from backend.image_utils import render_puzzle_png
from water_sort.errors import WaterSortError
from water_sort.puzzle import Puzzle, format_moves, read_puzzle_text
from water_sort.render import render_puzzle
from water_sort.solver import CannotBeSolved, SolveResult, solve_puzzle

logger = logging.getLogger(__name__)

MAX_TIMEOUT_MS = int(os.environ.get("MAX_TIMEOUT_MS", "1000000"))
PUZZLE_SUFFIXES = {".json", ".txt", ".tubes"}


def _puzzles_dir() -> Path:
    return Path(os.environ.get("WATER_SORT_PUZZLES_DIR", str(_ROOT / "puzzles")))


def _parse_puzzle(text: str, *, name: str) -> Puzzle:
    return Puzzle.parse(text, name=name)


def _puzzle_payload(puzzle: Puzzle) -> Dict[str, Any]:
    return {
        "tubes": puzzle.to_dict()["tubes"],
        "size": puzzle.size,
        "solved": puzzle.is_solved(),
        "has_unknown": puzzle.has_unknown(),
        "grid": render_puzzle(puzzle),
    }


def _result_payload(res: SolveResult) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "status": res.status,
        "moves": [[m.source, m.dest] for m in res.moves],
        "formatted": format_moves(res.moves),
        "message": res.describe(),
    }
    if isinstance(res, CannotBeSolved):
        out["max_depth"] = res.max_depth
    out["explored"] = getattr(res, "explored", 0)
    return out


def _puzzle_path(name: str) -> Path:
    rel = Path(name)
    if rel.is_absolute() or ".." in rel.parts:
        raise HTTPException(status_code=400, detail="Invalid puzzle path")
    base = _puzzles_dir().resolve()
    full = (base / rel).resolve()
    if not full.is_relative_to(base):
        raise HTTPException(status_code=400, detail="Invalid puzzle path")
    return full


def _list_puzzle_files() -> List[Path]:
    base = _puzzles_dir().resolve()
    if not base.exists():
        return []
    return [p for p in sorted(base.rglob("*")) if p.is_file() and p.suffix.lower() in PUZZLE_SUFFIXES]


def _build_entry(path: Path) -> Dict[str, Any]:
    error: Optional[str] = None
    size = solved = has_unknown = None
    try:
        puzzle = Puzzle.from_file(path)
        size = puzzle.size
        solved = puzzle.is_solved()
        has_unknown = puzzle.has_unknown()
    except (WaterSortError, OSError) as e:
        error = f"Parse error: {e}"
    return {
        "name": str(path.relative_to(_puzzles_dir().resolve())),
        "size": size,
        "solved": solved,
        "has_unknown": has_unknown,
        "error": error,
    }


class ParseRequest(BaseModel):
    name: str = Field(default="puzzle.json")
    text: str


class PourRequest(ParseRequest):
    source: int = Field(ge=0)
    dest: int = Field(ge=0)


class SolveRequest(ParseRequest):
    solver: str = Field(default="dfs")
    timeout_ms: Optional[int] = Field(default=30_000, ge=1, le=MAX_TIMEOUT_MS)
    max_nodes: Optional[int] = Field(default=None, ge=1)


class SavePuzzleRequest(BaseModel):
    name: str
    text: str
    overwrite: bool = False


class ThumbnailRequest(ParseRequest):
    width: int = Field(default=320, ge=32, le=2048)
    height: int = Field(default=200, ge=32, le=2048)


app = FastAPI(title="Water Sort API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/puzzles")
def list_puzzles() -> Dict[str, Any]:
    return {"puzzles": [_build_entry(path) for path in _list_puzzle_files()]}


@app.get("/puzzles/{name:path}")
def get_puzzle(name: str) -> Dict[str, Any]:
    path = _puzzle_path(name)
    if not path.exists():
        raise HTTPException(status_code=404, detail="Puzzle not found")
    try:
        text = read_puzzle_text(path)
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return {"name": name, "text": text, "entry": _build_entry(path)}


@app.post("/puzzles/save")
def save_puzzle(req: SavePuzzleRequest) -> Dict[str, Any]:
    path = _puzzle_path(req.name)
    if path.suffix.lower() not in PUZZLE_SUFFIXES:
        raise HTTPException(status_code=400, detail="Puzzle name must end with .json, .txt or .tubes")
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=f"Puzzle validation failed: {e}") from e
    if path.exists() and not req.overwrite:
        raise HTTPException(status_code=409, detail="Puzzle already exists")
    puzzle.save(path)
    return {"saved": True, "entry": _build_entry(path)}


@app.post("/parse")
def parse_puzzle(req: ParseRequest) -> Dict[str, Any]:
    try:
        return _puzzle_payload(_parse_puzzle(req.text, name=req.name))
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@app.post("/moves")
def list_moves(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    moves = puzzle.valid_moves()
    return {"moves": [[m.source, m.dest] for m in moves], "formatted": format_moves(moves)}


@app.post("/pour")
def pour(req: PourRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
        puzzle.pour(req.source, req.dest)
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _puzzle_payload(puzzle)


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
        res = solve_puzzle(puzzle, solver=req.solver, timeout_ms=req.timeout_ms, max_nodes=req.max_nodes)
    except ValueError as e:
        logger.warning("Solve request failed: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _result_payload(res)


@app.post("/thumbnail")
def thumbnail(req: ThumbnailRequest):
    try:
        puzzle = _parse_puzzle(req.text, name=req.name)
    except WaterSortError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return Response(render_puzzle_png(puzzle, size=(req.width, req.height)), media_type="image/png")
