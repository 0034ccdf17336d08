from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import math

import numpy as np

from plotview.defaults import DEFAULT_TICK_TARGET
from plotview.errors import EmptyViewError


@dataclass(frozen=True)
class Range:
    """Closed numeric interval. Not validated; may be inverted when no data backs it."""

    lower: float
    upper: float

    @property
    def span(self) -> float:
        return self.upper - self.lower

    @property
    def is_inverted(self) -> bool:
        return self.lower > self.upper

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.lower) and math.isfinite(self.upper)


EMPTY_RANGE = Range(math.inf, -math.inf)

# (mantissa bound, chosen mantissa); anything past the last bound becomes 10.
_SPAN_MANTISSAS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
_STEP_MANTISSAS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))


def tick_step(rng: Range, target: int = DEFAULT_TICK_TARGET) -> float:
    """Spacing between ticks for ``rng``: 1, 2 or 5 times a power of ten.

    The span is first rounded up to such a value, then split into roughly
    ``target - 1`` intervals and the interval rounded to the nearest such value.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if not rng.span > 0:
        raise ValueError(f"tick step needs a positive span, got {rng}")
    span = _snap(rng.span, _SPAN_MANTISSAS, inclusive=True)
    return _snap(span / max(target - 1, 1), _STEP_MANTISSAS, inclusive=False)


def tick_label(value: float, step: float) -> str:
    """Format a tick with just enough decimals to tell ``step``-spaced ticks apart."""
    if not math.isfinite(value):
        return str(value)
    if abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= 1e6 or magnitude < 1e-6 or step < 1e-4):
        return f"{value:.4e}"
    text = f"{value:.{_step_decimals(step)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _snap(value: float, mantissas: tuple[tuple[float, float], ...], *, inclusive: bool) -> float:
    scale = 10.0 ** math.floor(math.log10(value))
    mantissa = value / scale
    for bound, chosen in mantissas:
        if mantissa < bound or (inclusive and mantissa == bound):
            return chosen * scale
    return 10.0 * scale


def _step_decimals(step: float) -> int:
    if not (math.isfinite(step) and step > 0):
        return 6
    exponent = Decimal(repr(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))


@dataclass(frozen=True)
class Axis:
    lower: float
    upper: float
    label: str = ""

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lower) and math.isfinite(self.upper)):
            raise EmptyViewError(f"cannot build axis from non-finite range ({self.lower}, {self.upper})")
        if self.lower > self.upper:
            raise EmptyViewError(f"cannot build axis from inverted range ({self.lower}, {self.upper})")

    @classmethod
    def from_range(cls, rng: Range, *, label: str = "") -> "Axis":
        return cls(lower=float(rng.lower), upper=float(rng.upper), label=label)

    @property
    def range(self) -> Range:
        return Range(self.lower, self.upper)

    def mapping_range(self) -> Range:
        """The range data is projected through; zero-width ranges are widened by 1 each side."""
        if self.lower == self.upper:
            return Range(self.lower - 1.0, self.upper + 1.0)
        return self.range

    def ticks(self, target: int = DEFAULT_TICK_TARGET) -> np.ndarray:
        """Every multiple of the tick step that lies inside the mapping range."""
        bounds = self.mapping_range()
        step = tick_step(bounds, target)
        first = math.ceil(bounds.lower / step - 1e-9)
        last = math.floor(bounds.upper / step + 1e-9)
        return np.arange(first, last + 1, dtype=np.float64) * step

    def tick_labels(self, ticks: np.ndarray | None = None) -> list[str]:
        if ticks is None:
            ticks = self.ticks()
        if ticks.size > 1:
            step = float(abs(ticks[1] - ticks[0]))
        else:
            step = tick_step(self.mapping_range())
        return [tick_label(float(value), step) for value in ticks.tolist()]

    def fraction(self, value: float | np.ndarray) -> float | np.ndarray:
        bounds = self.mapping_range()
        return (value - bounds.lower) / bounds.span

    def to_cell(self, value: float | np.ndarray, cells: int, *, clip: bool = True) -> np.ndarray:
        """Map values onto integer grid indices ``0 .. cells - 1`` (nearest cell).

        With ``clip=False`` out-of-range values map past the grid edges so callers
        can drop or rasterize through them.
        """
        if cells <= 0:
            raise ValueError("cells must be > 0")
        frac = np.asarray(self.fraction(np.asarray(value, dtype=np.float64)), dtype=np.float64)
        idx = np.rint(frac * (cells - 1)).astype(np.int64)
        if clip:
            np.clip(idx, 0, cells - 1, out=idx)
        return idx
