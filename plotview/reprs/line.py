from __future__ import annotations

from typing import Any
import xml.etree.ElementTree as ET

import numpy as np

from plotview.adapters import normalize_xy
from plotview.axis import Axis
from plotview.representation import Representation, single_glyph
from plotview.series import SeriesData
from plotview.svg_render import draw_face_line
from plotview.text_render import TextBlock, render_face_line


class Line(Representation):
    """Polyline through the finite points in the order given.

    Non-finite points are skipped and their neighbours joined directly.
    """

    def __init__(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        colour: str = "#ffa500",
        width: float = 1.0,
        glyph: str = "·",
    ) -> None:
        if width <= 0:
            raise ValueError("line width must be > 0")
        self.data: SeriesData = normalize_xy(y=y, x=x, data=data)
        self.colour = colour
        self.width = float(width)
        self.glyph = single_glyph(glyph)

    def range(self, dim: int) -> tuple[float, float]:
        return self.data.extent(dim)

    def points(self) -> tuple[np.ndarray, np.ndarray]:
        return self.data.finite_x(), self.data.finite_y()

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        xs, ys = self.points()
        return draw_face_line(xs, ys, x_axis, y_axis, face_width, face_height, colour=self.colour, width=self.width)

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        xs, ys = self.points()
        return render_face_line(xs, ys, x_axis, y_axis, face_width, face_height, self.glyph)
