from plotview.axis import Axis, Range
from plotview.errors import EmptyViewError, FaceShapeError, PlotDataError
from plotview.page import Page
from plotview.representation import Representation
from plotview.reprs import BarChart, Function, Histogram, Line, Scatter
from plotview.view import View

__all__ = [
    "Axis",
    "BarChart",
    "EmptyViewError",
    "FaceShapeError",
    "Function",
    "Histogram",
    "Line",
    "Page",
    "PlotDataError",
    "Range",
    "Representation",
    "Scatter",
    "View",
]
