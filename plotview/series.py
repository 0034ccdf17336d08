from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray

    def finite_x(self) -> np.ndarray:
        return self.x[self.mask]

    def finite_y(self) -> np.ndarray:
        return self.y[self.mask]

    def extent(self, dim: int) -> tuple[float, float]:
        if dim == 0:
            values = self.finite_x()
        elif dim == 1:
            values = self.finite_y()
        else:
            raise ValueError(f"dimension must be 0 or 1, got {dim}")
        return float(np.min(values)), float(np.max(values))
