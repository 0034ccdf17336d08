from __future__ import annotations

from typing import Any
import xml.etree.ElementTree as ET

from plotview.adapters import normalize_xy
from plotview.axis import Axis
from plotview.errors import PlotDataError
from plotview.representation import Representation, single_glyph
from plotview.svg_render import MarkerKind, draw_face_points
from plotview.text_render import TextBlock, render_face_points


MARKER_GLYPHS: dict[str, str] = {"circle": "●", "square": "■", "cross": "×"}


class Scatter(Representation):
    def __init__(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        marker: MarkerKind = "circle",
        colour: str = "#3e95ff",
        size: float = 5.0,
        glyph: str | None = None,
    ) -> None:
        if marker not in MARKER_GLYPHS:
            raise PlotDataError(f"unsupported marker: {marker}")
        if size <= 0:
            raise ValueError("marker size must be > 0")
        self.data = normalize_xy(y=y, x=x, data=data)
        self.marker = marker
        self.colour = colour
        self.size = float(size)
        self.glyph = single_glyph(glyph if glyph is not None else MARKER_GLYPHS[marker])

    def range(self, dim: int) -> tuple[float, float]:
        return self.data.extent(dim)

    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        return draw_face_points(
            self.data.finite_x(),
            self.data.finite_y(),
            x_axis,
            y_axis,
            face_width,
            face_height,
            marker=self.marker,
            colour=self.colour,
            size=self.size,
        )

    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        return render_face_points(
            self.data.finite_x(),
            self.data.finite_y(),
            x_axis,
            y_axis,
            face_width,
            face_height,
            self.glyph,
        )
