from __future__ import annotations

from typing import Callable

import numpy as np

from plotview.errors import PlotDataError
from plotview.reprs.line import Line


class Function(Line):
    """A Line sampled from ``func`` on ``samples`` evenly spaced points of [lower, upper]."""

    def __init__(
        self,
        func: Callable[[float], float],
        lower: float,
        upper: float,
        *,
        samples: int = 100,
        colour: str = "#ffa500",
        width: float = 1.0,
        glyph: str = "·",
    ) -> None:
        if samples <= 1:
            raise ValueError("samples must be > 1")
        if not lower < upper:
            raise PlotDataError(f"function domain must satisfy lower < upper, got ({lower}, {upper})")
        xs = np.linspace(float(lower), float(upper), samples, dtype=np.float64)
        ys = np.asarray([float(func(float(v))) for v in xs], dtype=np.float64)
        super().__init__(x=xs, y=ys, colour=colour, width=width, glyph=glyph)
        self.func = func
        self.lower = float(lower)
        self.upper = float(upper)

    def range(self, dim: int) -> tuple[float, float]:
        if dim == 0:
            return self.lower, self.upper
        return super().range(dim)
