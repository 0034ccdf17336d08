from .bars import BarChart, Histogram
from .function import Function
from .line import Line
from .scatter import Scatter

__all__ = ["BarChart", "Function", "Histogram", "Line", "Scatter"]
