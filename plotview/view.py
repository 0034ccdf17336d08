"""Single-view composition: range resolution, axis construction and the two
render paths (SVG group and fixed-width text canvas)."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from plotview.axis import EMPTY_RANGE, Axis, Range
from plotview.defaults import DEFAULT_PAGE_STYLE, PageStyle
from plotview.errors import EmptyViewError, FaceShapeError
from plotview.representation import Representation
from plotview.svg_render import draw_x_axis, draw_y_axis
from plotview.text_render import (
    TextBlock,
    blank_block,
    block_to_string,
    overlay,
    render_x_axis_strings,
    render_y_axis_strings,
)


LOGGER = logging.getLogger(__name__)

_DIM_NAMES = ("x", "y")


class View:
    """Plots representations against one continuous x/y coordinate space.

    The view keeps references to the representations it is given and never
    copies their data; callers own that data and must not mutate it while a
    render is in progress. Builder methods mutate the view and return it.
    """

    def __init__(self) -> None:
        self._representations: list[Representation] = []
        self._x_range: Range | None = None
        self._y_range: Range | None = None
        self._x_label = ""
        self._y_label = ""

    @property
    def representations(self) -> tuple[Representation, ...]:
        return tuple(self._representations)

    def add(self, representation: Representation) -> "View":
        self._representations.append(representation)
        return self

    def x_range(self, lower: float, upper: float) -> "View":
        self._x_range = Range(float(lower), float(upper))
        return self

    def y_range(self, lower: float, upper: float) -> "View":
        self._y_range = Range(float(lower), float(upper))
        return self

    def x_label(self, text: str) -> "View":
        self._x_label = str(text)
        return self

    def y_label(self, text: str) -> "View":
        self._y_label = str(text)
        return self

    def default_x_range(self) -> Range:
        return self._default_range(0)

    def default_y_range(self) -> Range:
        return self._default_range(1)

    def _default_range(self, dim: int) -> Range:
        lower = EMPTY_RANGE.lower
        upper = EMPTY_RANGE.upper
        for representation in self._representations:
            this_lower, this_upper = representation.range(dim)
            lower = min(lower, this_lower)
            upper = max(upper, this_upper)
        return Range(lower, upper)

    def resolved_ranges(self) -> tuple[Range, Range]:
        x_range = self._x_range if self._x_range is not None else self.default_x_range()
        y_range = self._y_range if self._y_range is not None else self.default_y_range()
        return x_range, y_range

    def axes(self) -> tuple[Axis, Axis]:
        x_range, y_range = self.resolved_ranges()
        for name, rng in zip(_DIM_NAMES, (x_range, y_range)):
            if rng.is_inverted or not rng.is_finite:
                raise EmptyViewError(
                    f"cannot build {name} axis: resolved {name} range ({rng.lower}, {rng.upper}) is "
                    f"inverted or non-finite; add a representation or set an explicit {name} range"
                )
        LOGGER.debug("view ranges resolved x=%s y=%s", x_range, y_range)
        return Axis.from_range(x_range, label=self._x_label), Axis.from_range(y_range, label=self._y_label)

    def to_svg(self, face_width: float, face_height: float, *, style: PageStyle = DEFAULT_PAGE_STYLE) -> ET.Element:
        if face_width <= 0 or face_height <= 0:
            raise ValueError("face width/height must be > 0")
        x_axis, y_axis = self.axes()

        view_group = ET.Element("g", {"class": "view"})
        for representation in self._representations:
            view_group.append(representation.to_svg(x_axis, y_axis, face_width, face_height))

        # Axis furniture goes last so data never hides it.
        view_group.append(draw_x_axis(x_axis, face_width, style=style))
        view_group.append(draw_y_axis(y_axis, face_height, style=style))
        return view_group

    def to_text_block(self, face_width: int, face_height: int) -> TextBlock:
        """Composite faces and axis labels onto one character canvas.

        Canvas rows: ``0 .. face_height - 1`` face, then the x-axis rule, the x tick
        labels and the x-axis title. Columns: left gutter, y-axis rule, face, and
        one trailing separator column.
        """
        face_width = _cell_count(face_width, "face width")
        face_height = _cell_count(face_height, "face height")
        x_axis, y_axis = self.axes()

        y_axis_block, longest_y_label_width = render_y_axis_strings(y_axis, face_height)
        x_axis_block, start_offset = render_x_axis_strings(x_axis, face_width)

        left_gutter_width = max(longest_y_label_width + 1, -start_offset)
        view_width = face_width + 1 + left_gutter_width + 1
        view_height = face_height + 3
        LOGGER.debug(
            "text layout gutter=%d (longest_y_label=%d start_offset=%d) canvas=%dx%d",
            left_gutter_width,
            longest_y_label_width,
            start_offset,
            view_width,
            view_height,
        )

        canvas = blank_block(view_width, view_height)
        for representation in self._representations:
            face = representation.to_text(x_axis, y_axis, face_width, face_height)
            if face.shape != (face_height, face_width):
                raise FaceShapeError(
                    f"{type(representation).__name__} returned a text face of shape {face.shape}, "
                    f"expected (rows={face_height}, cols={face_width})"
                )
            canvas = overlay(canvas, face, left_gutter_width + 1, 0)

        canvas = overlay(canvas, y_axis_block, left_gutter_width - 1 - longest_y_label_width, 0)
        canvas = overlay(canvas, x_axis_block, left_gutter_width + start_offset, face_height)
        return canvas

    def to_text(self, face_width: int, face_height: int) -> str:
        return block_to_string(self.to_text_block(face_width, face_height))


def _cell_count(value: float, name: str) -> int:
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    if int(value) != value:
        raise ValueError(f"{name} must be a whole number of cells, got {value}")
    return int(value)
