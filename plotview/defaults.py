from __future__ import annotations

from dataclasses import dataclass


DEFAULT_TICK_TARGET = 5
DEFAULT_TEXT_FACE_WIDTH = 60
DEFAULT_TEXT_FACE_HEIGHT = 15
DEFAULT_PAGE_WIDTH = 600
DEFAULT_PAGE_HEIGHT = 400
DEFAULT_FONT_FAMILY = "monospace"
DEFAULT_FONT_SIZE_PX = 12.0

BLANK = " "


@dataclass(frozen=True)
class PageStyle:
    margin_left: float = 90.0
    margin_right: float = 40.0
    margin_top: float = 40.0
    margin_bottom: float = 60.0
    background: str = "white"
    axis_colour: str = "black"
    text_colour: str = "black"
    tick_length: float = 6.0
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX

    def face_size(self, width: float, height: float) -> tuple[float, float]:
        face_w = width - self.margin_left - self.margin_right
        face_h = height - self.margin_top - self.margin_bottom
        if face_w <= 0 or face_h <= 0:
            raise ValueError("page too small for plotting face")
        return face_w, face_h


DEFAULT_PAGE_STYLE = PageStyle()
