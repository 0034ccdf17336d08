from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from plotview.errors import PlotDataError
from plotview.series import SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
) -> SeriesData:
    """Coerce y (and optional x) into float64 arrays with a finiteness mask.

    ``y`` may also be a sequence of ``(x, y)`` pairs when ``x`` is omitted.
    Without ``x`` and without pairs, x defaults to the sample index.
    """
    y_values = _resolve_column(y, key="y", data=data)
    if y_values is None:
        raise PlotDataError("y input is required")

    if x is None and data is None:
        pairs = _as_pairs(y_values)
        if pairs is not None:
            x_arr, y_arr = pairs
            return _finish(x_arr, y_arr)

    y_arr = _coerce_1d_numeric(y_values, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_values = _resolve_column(x, key="x", data=data)
        x_arr = _coerce_1d_numeric(x_values, label="x")

    return _finish(x_arr, y_arr)


def normalize_values(values: Any, *, label: str = "values") -> np.ndarray:
    """Coerce a 1-D input and return only its finite entries."""
    arr = _coerce_1d_numeric(_resolve_column(values, key="y", data=None), label=label)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        raise PlotDataError(f"{label} contains no finite values")
    return finite


def _finish(x_arr: np.ndarray, y_arr: np.ndarray) -> SeriesData:
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    if y_arr.size == 0:
        raise PlotDataError("empty series")
    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not np.any(mask):
        raise PlotDataError("series contains no finite points")
    return SeriesData(x=x_arr, y=y_arr, mask=mask)


def _as_pairs(value: Any) -> tuple[np.ndarray, np.ndarray] | None:
    if torch is not None and isinstance(value, torch.Tensor):
        if value.ndim != 2 or value.shape[1] != 2:
            return None
        arr = value.detach().cpu().to(torch.float64).numpy()
        return arr[:, 0].copy(), arr[:, 1].copy()
    if isinstance(value, np.ndarray):
        if value.ndim != 2 or value.shape[1] != 2:
            return None
        arr = value.astype(np.float64, copy=False)
        return arr[:, 0].copy(), arr[:, 1].copy()
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)) and value:
        first = value[0]
        if isinstance(first, (tuple, list)) and len(first) == 2:
            xs = _coerce_ndarray(np.asarray([p[0] for p in value], dtype=object), label="x")
            ys = _coerce_ndarray(np.asarray([p[1] for p in value], dtype=object), label="y")
            return xs, ys
    return None


def _resolve_column(value: Any, key: str, data: Any) -> Any:
    if data is not None:
        if pd is None:
            raise PlotDataError("pandas is required when using `data=`")
        if not isinstance(data, pd.DataFrame):
            raise PlotDataError("`data` must be a pandas DataFrame")
        if isinstance(value, str):
            if value not in data.columns:
                raise PlotDataError(f"column not found: {value}")
            return data[value]
        if value is None:
            if key == "y":
                numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
                if len(numeric_cols) != 1:
                    raise PlotDataError("when y is omitted, data must have exactly one numeric column")
                return data[numeric_cols[0]]
            return None
        return value

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 1:
            raise PlotDataError("1-D DataFrame input must contain exactly one numeric column")
        return value[numeric_cols[0]]

    return value


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except (TypeError, ValueError):
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
