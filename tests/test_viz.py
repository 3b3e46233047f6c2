from water_sort.puzzle import Puzzle
from water_sort.solver import solve_with_dfs
from water_sort.viz import build_plotly_figure, build_solution_figure, write_plotly_html
from water_sort.water import Water

PUZZLE = "green blue . .\n? . . .\nempty"


def test_one_trace_per_slot_level():
    fig = build_plotly_figure(Puzzle.from_text(PUZZLE), title="t")
    assert len(fig.data) == 4
    bottom = fig.data[0]
    assert list(bottom.x) == ["0", "1", "2"]
    assert bottom.marker.color[0] == Water.GREEN.hex
    assert fig.data[1].marker.color[0] == Water.BLUE.hex
    assert bottom.text[1] == "?"


def test_solution_figure_has_a_frame_per_move():
    p = Puzzle.from_text("r r . .\nr r . .\nempty")
    moves = solve_with_dfs(p).moves
    fig = build_solution_figure(p, moves)
    assert len(fig.frames) == len(moves) + 1
    assert len(fig.layout.sliders[0].steps) == len(moves) + 1


def test_write_html(tmp_path):
    out = write_plotly_html(Puzzle.from_text(PUZZLE), out_path=tmp_path / "a" / "p.html")
    assert out.exists()
    assert "plotly" in out.read_text(encoding="utf-8").lower()
