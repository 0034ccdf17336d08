from __future__ import annotations

from abc import ABC, abstractmethod
import xml.etree.ElementTree as ET

from plotview.axis import Axis
from plotview.errors import PlotDataError
from plotview.text_render import TextBlock


class Representation(ABC):
    """One plotted shape drawn against a shared pair of axes.

    ``range`` reports the data extent along dimension 0 (x) or 1 (y). The two
    renderers must not mutate the representation; a view may call them any
    number of times.
    """

    @abstractmethod
    def range(self, dim: int) -> tuple[float, float]:
        raise NotImplementedError

    @abstractmethod
    def to_svg(self, x_axis: Axis, y_axis: Axis, face_width: float, face_height: float) -> ET.Element:
        raise NotImplementedError

    @abstractmethod
    def to_text(self, x_axis: Axis, y_axis: Axis, face_width: int, face_height: int) -> TextBlock:
        """Return exactly ``face_height`` rows of ``face_width`` cells."""
        raise NotImplementedError


def check_dim(dim: int) -> None:
    if dim not in (0, 1):
        raise ValueError(f"dimension must be 0 or 1, got {dim}")


def single_glyph(glyph: str) -> str:
    if len(glyph) != 1 or glyph.isspace():
        raise PlotDataError(f"glyph must be one non-blank character, got {glyph!r}")
    return glyph
