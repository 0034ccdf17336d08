from __future__ import annotations

from typing import Any
import xml.etree.ElementTree as ET

import numpy as np

from plotview.adapters import normalize_values, normalize_xy
from plotview.axis import Axis
from plotview.errors import PlotDataError
from plotview.representation import Representation, check_dim, single_glyph
from plotview.svg_render import draw_face_bars
from plotview.text_render import TextBlock, render_face_bars


class _Bars(Representation):
    lefts: np.ndarray
    rights: np.ndarray
    heights: np.ndarray
    colour: str
    glyph: str

    def range(self, dim: int) -> tuple[float, float]:
        check_dim(dim)
        if dim == 0:
            return float(np.min(self.lefts)), float(np.max(self.rights))
        return min(0.0, float(np.min(self.heights))), max(0.0, float(np.max(self.heights)))

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        return draw_face_bars(
            self.lefts, self.rights, self.heights, x_axis, y_axis, face_width, face_height, colour=self.colour
        )

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        return render_face_bars(
            self.lefts, self.rights, self.heights, x_axis, y_axis, face_width, face_height, self.glyph
        )


class Histogram(_Bars):
    """Counts of ``values`` in ``bins`` bins (``numpy.histogram`` semantics)."""

    def __init__(
        self,
        values: Any,
        *,
        bins: int | Any = 10,
        colour: str = "#6ea9ff",
        glyph: str = "#",
    ) -> None:
        finite = normalize_values(values, label="histogram values")
        counts, edges = np.histogram(finite, bins=bins)
        self.counts = counts.astype(np.int64)
        self.edges = edges.astype(np.float64)
        self.lefts = self.edges[:-1]
        self.rights = self.edges[1:]
        self.heights = self.counts.astype(np.float64)
        self.colour = colour
        self.glyph = single_glyph(glyph)


class BarChart(_Bars):
    """Bars of ``heights`` centred on ``x`` (default: the bar index)."""

    def __init__(
        self,
        heights: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        width: float = 0.8,
        colour: str = "#6ea9ff",
        glyph: str = "#",
    ) -> None:
        if width <= 0:
            raise ValueError("bar width must be > 0")
        series = normalize_xy(y=heights, x=x, data=data)
        centres = series.finite_x()
        half = float(width) * 0.5
        if centres.size == 0:
            raise PlotDataError("bar chart contains no finite bars")
        self.lefts = centres - half
        self.rights = centres + half
        self.heights = series.finite_y()
        self.bar_width = float(width)
        self.colour = colour
        self.glyph = single_glyph(glyph)
