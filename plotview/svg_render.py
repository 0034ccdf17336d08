from __future__ import annotations

from typing import Literal
import xml.etree.ElementTree as ET

import numpy as np

from plotview.axis import Axis
from plotview.defaults import DEFAULT_PAGE_STYLE, PageStyle


MarkerKind = Literal["circle", "square", "cross"]

# Face coordinates put the origin at the bottom-left corner of the plotting face:
# x grows right over [0, face_width], data y grows upward over [0, -face_height].


def draw_x_axis(axis: Axis, face_width: float, *, style: PageStyle = DEFAULT_PAGE_STYLE) -> ET.Element:
    group = ET.Element("g", {"class": "x-axis"})
    _line(group, 0.0, 0.0, face_width, 0.0, style.axis_colour)

    ticks = axis.ticks()
    labels = axis.tick_labels(ticks)
    tick_text_y = style.tick_length + style.font_size_px
    for tick, label in zip(ticks.tolist(), labels):
        x = float(axis.fraction(tick)) * face_width
        _line(group, x, 0.0, x, style.tick_length, style.axis_colour)
        _text(group, x, tick_text_y, label, style, anchor="middle")

    if axis.label:
        _text(group, face_width / 2.0, tick_text_y + 1.5 * style.font_size_px, axis.label, style, anchor="middle")
    return group


def draw_y_axis(axis: Axis, face_height: float, *, style: PageStyle = DEFAULT_PAGE_STYLE) -> ET.Element:
    group = ET.Element("g", {"class": "y-axis"})
    _line(group, 0.0, 0.0, 0.0, -face_height, style.axis_colour)

    ticks = axis.ticks()
    labels = axis.tick_labels(ticks)
    label_x = -(style.tick_length + 2.0)
    for tick, label in zip(ticks.tolist(), labels):
        y = -float(axis.fraction(tick)) * face_height
        _line(group, 0.0, y, -style.tick_length, y, style.axis_colour)
        text = _text(group, label_x, y, label, style, anchor="end")
        text.set("dominant-baseline", "middle")

    if axis.label:
        longest = max((len(label) for label in labels), default=0)
        # Monospace glyphs are roughly 0.6em wide.
        title_x = label_x - longest * style.font_size_px * 0.6 - style.font_size_px
        title_y = -face_height / 2.0
        title = _text(group, title_x, title_y, axis.label, style, anchor="middle")
        title.set("transform", f"rotate(-90 {_num(title_x)} {_num(title_y)})")
    return group


def draw_face_points(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: float,
    face_height: float,
    *,
    marker: MarkerKind,
    colour: str,
    size: float,
) -> ET.Element:
    group = ET.Element("g", {"class": "points"})
    px, py = _face_coords(xs, ys, x_axis, y_axis, face_width, face_height)
    inside = (px >= 0.0) & (px <= face_width) & (py <= 0.0) & (py >= -face_height)
    half = size / 2.0
    for x, y in zip(px[inside].tolist(), py[inside].tolist()):
        if marker == "circle":
            ET.SubElement(group, "circle", {"cx": _num(x), "cy": _num(y), "r": _num(half), "fill": colour})
        elif marker == "square":
            ET.SubElement(
                group,
                "rect",
                {"x": _num(x - half), "y": _num(y - half), "width": _num(size), "height": _num(size), "fill": colour},
            )
        elif marker == "cross":
            _line(group, x - half, y - half, x + half, y + half, colour)
            _line(group, x - half, y + half, x + half, y - half, colour)
        else:
            raise ValueError(f"unsupported marker: {marker}")
    return group


def draw_face_line(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: float,
    face_height: float,
    *,
    colour: str,
    width: float,
) -> ET.Element:
    group = ET.Element("g", {"class": "line"})
    px, py = _face_coords(xs, ys, x_axis, y_axis, face_width, face_height)
    points = " ".join(f"{_num(x)},{_num(y)}" for x, y in zip(px.tolist(), py.tolist()))
    ET.SubElement(
        group,
        "polyline",
        {"points": points, "fill": "none", "stroke": colour, "stroke-width": _num(width)},
    )
    return group


def draw_face_bars(
    lefts: np.ndarray,
    rights: np.ndarray,
    heights: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: float,
    face_height: float,
    *,
    colour: str,
) -> ET.Element:
    group = ET.Element("g", {"class": "bars"})
    base = min(max(0.0, y_axis.lower), y_axis.upper)
    base_y = -float(y_axis.fraction(base)) * face_height
    x0s = np.asarray(x_axis.fraction(lefts), dtype=np.float64) * face_width
    x1s = np.asarray(x_axis.fraction(rights), dtype=np.float64) * face_width
    tops = -np.asarray(y_axis.fraction(heights), dtype=np.float64) * face_height
    for x0, x1, top in zip(x0s.tolist(), x1s.tolist(), tops.tolist()):
        left = max(0.0, min(x0, x1))
        right = min(face_width, max(x0, x1))
        upper = max(-face_height, min(top, base_y))
        lower = min(0.0, max(top, base_y))
        if right <= left or lower <= upper:
            continue
        ET.SubElement(
            group,
            "rect",
            {
                "x": _num(left),
                "y": _num(upper),
                "width": _num(right - left),
                "height": _num(lower - upper),
                "fill": colour,
                "stroke": "black",
                "stroke-width": "0.5",
            },
        )
    return group


def _face_coords(
    xs: np.ndarray,
    ys: np.ndarray,
    x_axis: Axis,
    y_axis: Axis,
    face_width: float,
    face_height: float,
) -> tuple[np.ndarray, np.ndarray]:
    px = np.asarray(x_axis.fraction(xs), dtype=np.float64) * face_width
    py = -np.asarray(y_axis.fraction(ys), dtype=np.float64) * face_height
    return px, py


def _line(group: ET.Element, x1: float, y1: float, x2: float, y2: float, colour: str) -> ET.Element:
    return ET.SubElement(
        group,
        "line",
        {"x1": _num(x1), "y1": _num(y1), "x2": _num(x2), "y2": _num(y2), "stroke": colour, "stroke-width": "1"},
    )


def _text(group: ET.Element, x: float, y: float, content: str, style: PageStyle, *, anchor: str) -> ET.Element:
    text = ET.SubElement(
        group,
        "text",
        {
            "x": _num(x),
            "y": _num(y),
            "text-anchor": anchor,
            "font-family": style.font_family,
            "font-size": _num(style.font_size_px),
            "fill": style.text_colour,
        },
    )
    text.text = content
    return text


def _num(value: float) -> str:
    out = f"{float(value):.3f}".rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
