from __future__ import annotations

import logging
from pathlib import Path
import xml.etree.ElementTree as ET

from plotview.defaults import (
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_STYLE,
    DEFAULT_PAGE_WIDTH,
    DEFAULT_TEXT_FACE_HEIGHT,
    DEFAULT_TEXT_FACE_WIDTH,
    PageStyle,
)
from plotview.errors import PlotDataError
from plotview.view import View


LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


class Page:
    """Wraps one view in a standalone document."""

    def __init__(self, view: View, *, style: PageStyle = DEFAULT_PAGE_STYLE) -> None:
        self.view = view
        self.style = style
        self.width: float = DEFAULT_PAGE_WIDTH
        self.height: float = DEFAULT_PAGE_HEIGHT

    @classmethod
    def single(cls, view: View) -> "Page":
        return cls(view)

    def dimensions(self, width: float, height: float) -> "Page":
        if width <= 0:
            raise ValueError("width must be > 0")
        if height <= 0:
            raise ValueError("height must be > 0")
        self.width = float(width)
        self.height = float(height)
        return self

    def to_svg(self) -> ET.Element:
        face_w, face_h = self.style.face_size(self.width, self.height)
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": f"{self.width:g}",
                "height": f"{self.height:g}",
                "viewBox": f"0 0 {self.width:g} {self.height:g}",
            },
        )
        ET.SubElement(root, "rect", {"width": "100%", "height": "100%", "fill": self.style.background})
        view_group = self.view.to_svg(face_w, face_h, style=self.style)
        origin_y = self.height - self.style.margin_bottom
        view_group.set("transform", f"translate({self.style.margin_left:g}, {origin_y:g})")
        root.append(view_group)
        return root

    def to_svg_markup(self) -> str:
        return ET.tostring(self.to_svg(), encoding="unicode")

    def to_text(self, face_width: int = DEFAULT_TEXT_FACE_WIDTH, face_height: int = DEFAULT_TEXT_FACE_HEIGHT) -> str:
        return self.view.to_text(face_width, face_height)

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        suffix = out.suffix.lower()
        if suffix == ".svg":
            content = self.to_svg_markup()
        elif suffix == ".txt":
            content = self.to_text() + "\n"
        else:
            raise PlotDataError(f"unsupported output format: {out.suffix or '(none)'}")
        out.write_text(content, encoding="utf-8")
        LOGGER.info("saved page to %s", out)
        return out
