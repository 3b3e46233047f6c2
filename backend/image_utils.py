from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, ImageDraw

from water_sort.puzzle import Puzzle
from water_sort.tube import CAPACITY

BACKGROUND = (15, 17, 22)
OUTLINE = (110, 110, 110)
UNKNOWN_FILL = (200, 200, 200)


def render_puzzle_image(puzzle: Puzzle, *, size: Tuple[int, int] = (320, 200)) -> Image.Image:
    """Draw the tubes side by side, two rows when there are more than seven."""
    width, height = size
    img = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(img)
    if puzzle.size == 0:
        return img

    rows = 1 if puzzle.size <= 7 else 2
    per_row = -(-puzzle.size // rows)
    pad = 10
    cell_w = (width - pad * 2) / per_row
    row_h = (height - pad * (rows + 1)) / rows
    tube_w = cell_w * 0.6
    slot_h = row_h / CAPACITY

    for i, tube in enumerate(puzzle):
        row, col = divmod(i, per_row)
        x0 = pad + col * cell_w + (cell_w - tube_w) / 2
        y_bottom = pad + (row + 1) * row_h + row * pad
        for level, state in enumerate(tube):
            y1 = y_bottom - level * slot_h
            y0 = y1 - slot_h
            if state.water is not None:
                draw.rectangle((x0, y0, x0 + tube_w, y1), fill=state.water.rgb)
            elif state.is_unknown:
                draw.rectangle((x0, y0, x0 + tube_w, y1), fill=UNKNOWN_FILL)
                draw.text((x0 + tube_w / 2 - 3, y0 + slot_h / 2 - 6), "?", fill=BACKGROUND)
        draw.rectangle((x0, y_bottom - row_h, x0 + tube_w, y_bottom), outline=OUTLINE)

    return img


def render_puzzle_png(puzzle: Puzzle, *, size: Tuple[int, int] = (320, 200)) -> bytes:
    buf = io.BytesIO()
    render_puzzle_image(puzzle, size=size).save(buf, format="PNG")
    return buf.getvalue()
