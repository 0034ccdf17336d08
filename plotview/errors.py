from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when plot input or layout state cannot be rendered."""


class EmptyViewError(PlotDataError):
    """Raised when an axis would be built from an inverted or non-finite range.

    A view with no representations and no explicit override for a dimension
    reduces to ``Range(inf, -inf)`` for that dimension; building an axis from
    it is refused rather than guessed.
    """


class FaceShapeError(PlotDataError):
    """Raised when a representation's text face is not face_width x face_height."""
