from __future__ import annotations

from typing import TypeAlias

import numpy as np

from plotview.axis import Axis
from plotview.defaults import BLANK


# A text block is a (rows, cols) array of single characters.
TextBlock: TypeAlias = np.ndarray


def blank_block(width: int, height: int) -> TextBlock:
    if width < 0 or height < 0:
        raise ValueError("block width/height must be >= 0")
    return np.full((height, width), BLANK, dtype="<U1")


def block_from_string(text: str) -> TextBlock:
    lines = text.split("\n")
    block = blank_block(max(len(line) for line in lines), len(lines))
    for row, line in enumerate(lines):
        _write_text(block, 0, row, line)
    return block


def block_to_string(block: TextBlock) -> str:
    return "\n".join("".join(row) for row in block.tolist())


def overlay(canvas: TextBlock, block: TextBlock, x: int, y: int) -> TextBlock:
    """Return a copy of ``canvas`` with ``block`` placed at column ``x``, row ``y``.

    Blank cells in ``block`` are transparent. Cells landing outside ``canvas`` are
    dropped, so negative offsets and oversized blocks are both valid.
    """
    out = canvas.copy()
    h, w = block.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(out.shape[1], x + w)
    y1 = min(out.shape[0], y + h)
    if x0 >= x1 or y0 >= y1:
        return out

    patch = block[y0 - y : y1 - y, x0 - x : x1 - x]
    view = out[y0:y1, x0:x1]
    opaque = patch != BLANK
    view[opaque] = patch[opaque]
    return out


def render_y_axis_strings(axis: Axis, face_height: int) -> tuple[TextBlock, int]:
    """Tick label column plus axis rule, ``face_height`` rows tall.

    Layout per row is ``<label right-aligned> <rule>`` where the rule shows ``+``
    on tick rows and ``|`` elsewhere. When several ticks land on one row only the
    tick nearest the row centre is labelled. Returns the block and the widest
    drawn label.
    """
    ticks = axis.ticks()
    labels = axis.tick_labels(ticks)
    exact = np.asarray(axis.fraction(ticks), dtype=np.float64) * (face_height - 1)
    cells = axis.to_cell(ticks, face_height)

    nearest: dict[int, tuple[float, str]] = {}
    for cell, position, label in zip(cells.tolist(), exact.tolist(), labels):
        error = abs(position - cell)
        if cell not in nearest or error < nearest[cell][0]:
            nearest[cell] = (error, label)
    longest = max((len(label) for _, label in nearest.values()), default=0)

    block = blank_block(longest + 2, face_height)
    block[:, longest + 1] = "|"
    for cell in cells.tolist():
        block[(face_height - 1) - cell, longest + 1] = "+"
    for cell, (_, label) in nearest.items():
        _write_text(block, longest - len(label), (face_height - 1) - cell, label)
    return block, longest


def render_x_axis_strings(axis: Axis, face_width: int) -> tuple[TextBlock, int]:
    """Axis rule, tick labels and axis title as a three-row block.

    Positions are measured from the axis corner (the y-axis column). Labels are
    centred on their tick, so low ticks can start left of the corner; the block is
    widened to the left to hold them and ``start_offset`` (always <= 0) reports how
    far its first column sits before the corner. Labels never run past the
    trailing separator column; one that would is pulled left to end there.
    """
    ticks = axis.ticks()
    labels = axis.tick_labels(ticks)
    tick_cols = (1 + axis.to_cell(ticks, face_width)).tolist()
    right_limit = face_width + 2

    placements: list[tuple[int, str]] = []
    last_end = None
    for col, label in zip(tick_cols, labels):
        start = min(col - len(label) // 2, right_limit - len(label))
        if last_end is not None and start <= last_end:
            continue
        placements.append((start, label))
        last_end = start + len(label)

    title = axis.label
    title_start = 1 + (face_width - len(title)) // 2

    starts = [start for start, _ in placements] + ([title_start] if title else [])
    start_offset = min([0, *starts])
    shift = -start_offset

    ends = [face_width + 1] + [start + len(label) for start, label in placements]
    if title:
        ends.append(title_start + len(title))
    block = blank_block(max(ends) + shift, 3)

    block[0, shift] = "+"
    block[0, shift + 1 : shift + 1 + face_width] = "-"
    for col in tick_cols:
        block[0, shift + col] = "+"
    for start, label in placements:
        _write_text(block, shift + start, 1, label)
    if title:
        _write_text(block, shift + title_start, 2, title)
    return block, start_offset


def render_face_points(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: int,
    face_height: int,
    glyph: str,
) -> TextBlock:
    face = blank_block(face_width, face_height)
    cols, rows = _face_cells(xs, ys, x_axis, y_axis, face_width, face_height)
    inside = (cols >= 0) & (cols < face_width) & (rows >= 0) & (rows < face_height)
    face[rows[inside], cols[inside]] = glyph
    return face


def render_face_line(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: int,
    face_height: int,
    glyph: str,
) -> TextBlock:
    face = blank_block(face_width, face_height)
    cols, rows = _face_cells(xs, ys, x_axis, y_axis, face_width, face_height)
    if cols.size == 1:
        _put(face, int(cols[0]), int(rows[0]), glyph)
    for i in range(cols.size - 1):
        _draw_segment(face, int(cols[i]), int(rows[i]), int(cols[i + 1]), int(rows[i + 1]), glyph)
    return face


def render_face_bars(
    lefts: np.ndarray,
    rights: np.ndarray,
    heights: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: int,
    face_height: int,
    glyph: str,
) -> TextBlock:
    face = blank_block(face_width, face_height)
    base = min(max(0.0, y_axis.lower), y_axis.upper)
    base_row = (face_height - 1) - int(y_axis.to_cell(base, face_height, clip=False))
    col_a = x_axis.to_cell(lefts, face_width, clip=False)
    col_b = x_axis.to_cell(rights, face_width, clip=False)
    top_rows = (face_height - 1) - y_axis.to_cell(heights, face_height, clip=False)
    for left, right, top in zip(col_a.tolist(), col_b.tolist(), top_rows.tolist()):
        c0 = max(0, min(left, right))
        c1 = min(face_width - 1, max(left, right))
        r0 = max(0, min(top, base_row))
        r1 = min(face_height - 1, max(top, base_row))
        if c0 > c1 or r0 > r1:
            continue
        face[r0 : r1 + 1, c0 : c1 + 1] = glyph
    return face


def _face_cells(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: int,
    face_height: int,
) -> tuple[np.ndarray, np.ndarray]:
    cols = x_axis.to_cell(xs, face_width, clip=False)
    rows = (face_height - 1) - y_axis.to_cell(ys, face_height, clip=False)
    return cols, rows


def _draw_segment(face: TextBlock, x0: int, y0: int, x1: int, y1: int, glyph: str) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _put(face, x0, y0, glyph)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _put(face: TextBlock, x: int, y: int, glyph: str) -> None:
    if y < 0 or y >= face.shape[0] or x < 0 or x >= face.shape[1]:
        return
    face[y, x] = glyph


def _write_text(block: TextBlock, x: int, y: int, text: str) -> None:
    if y < 0 or y >= block.shape[0]:
        return
    for i, ch in enumerate(text):
        col = x + i
        if 0 <= col < block.shape[1]:
            block[y, col] = ch
