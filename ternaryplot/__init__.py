"""ternaryplot: barycentric conversion and zoomable ternary plot geometry."""

from ternaryplot.config import Settings, configure_logging, settings
from ternaryplot.engine import Barycentric, LinearScale, PlotDefaults, TernaryPlot
from ternaryplot.errors import DegenerateTriangleError, DomainError, TernaryError
from ternaryplot.layout import build_layout
from ternaryplot.models.chart import ChartConfig, ChartLayout, Series
from ternaryplot.models.geometry import AxisLabel, Tick, Transform

__version__ = "0.1.0"

__all__ = [
    "Barycentric",
    "LinearScale",
    "PlotDefaults",
    "TernaryPlot",
    "TernaryError",
    "DomainError",
    "DegenerateTriangleError",
    "build_layout",
    "ChartConfig",
    "ChartLayout",
    "Series",
    "AxisLabel",
    "Tick",
    "Transform",
    "Settings",
    "settings",
    "configure_logging",
]
