from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..puzzle import Move, Puzzle
from ..state import SlotState
from ..tube import CAPACITY

_UNKNOWN_COLOR = "#bbbbbb"
_EMPTY_COLOR = "rgba(0,0,0,0)"
_OUTLINE = "rgba(90,90,90,0.6)"


def _slot_style(state: SlotState) -> tuple[str, str]:
    if state.water is not None:
        return state.water.hex, state.water.value
    if state.is_unknown:
        return _UNKNOWN_COLOR, "?"
    return _EMPTY_COLOR, ""


def _tube_traces(puzzle: Puzzle) -> List:
    """One stacked bar trace per slot level, bottom level first."""
    import plotly.graph_objects as go

    xs = [str(i) for i in range(puzzle.size)]
    traces = []
    for level in range(CAPACITY):
        colors, labels = [], []
        for tube in puzzle:
            color, label = _slot_style(tube.get(level))
            colors.append(color)
            labels.append(label)
        traces.append(
            go.Bar(
                x=xs,
                y=[1] * puzzle.size,
                marker=dict(color=colors, line=dict(width=1, color=_OUTLINE)),
                text=[lbl if lbl == "?" else "" for lbl in labels],
                hovertext=[f"tube {i}, slot {level}: {lbl or 'empty'}" for i, lbl in enumerate(labels)],
                hoverinfo="text",
                textposition="inside",
                name=f"slot {level}",
                showlegend=False,
            )
        )
    return traces


def _layout(title: str) -> dict:
    return dict(
        title=title,
        barmode="stack",
        bargap=0.35,
        xaxis=dict(title="tube", type="category"),
        yaxis=dict(visible=False, range=[0, CAPACITY]),
        plot_bgcolor="#15171c",
        margin=dict(l=20, r=20, t=50, b=40),
    )


def build_plotly_figure(puzzle: Puzzle, *, title: str = "Water Sort"):
    import plotly.graph_objects as go

    fig = go.Figure(data=_tube_traces(puzzle))
    fig.update_layout(**_layout(title))
    return fig


def build_solution_figure(puzzle: Puzzle, moves: Sequence[Move], *, title: str = "Water Sort"):
    """Animate `moves` replayed on `puzzle`, one frame per pour."""
    import plotly.graph_objects as go

    states = [puzzle.copy()]
    for move in moves:
        nxt = states[-1].copy()
        nxt.pour(*move)
        states.append(nxt)

    labels = ["start"] + [f"{k + 1}: {m}" for k, m in enumerate(moves)]
    frames = [go.Frame(data=_tube_traces(s), name=lbl) for s, lbl in zip(states, labels)]
    steps = [
        dict(
            method="animate",
            label=lbl,
            args=[[lbl], dict(mode="immediate", frame=dict(duration=0, redraw=True), transition=dict(duration=0))],
        )
        for lbl in labels
    ]

    fig = go.Figure(data=_tube_traces(puzzle), frames=frames)
    fig.update_layout(**_layout(f"{title} ({len(moves)} moves)"))
    fig.update_layout(sliders=[dict(active=0, currentvalue=dict(prefix="move "), steps=steps)])
    return fig


def write_plotly_html(
    puzzle: Puzzle,
    *,
    out_path: str | Path,
    moves: Optional[Sequence[Move]] = None,
    title: str = "Water Sort",
) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if moves:
        fig = build_solution_figure(puzzle, moves, title=title)
    else:
        fig = build_plotly_figure(puzzle, title=title)
    fig.write_html(str(out_path), include_plotlyjs="cdn", full_html=True)
    return out_path
