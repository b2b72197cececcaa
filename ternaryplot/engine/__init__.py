"""Ternary plot coordinate-transform engine."""

from ternaryplot.engine.barycentric import Barycentric, default_vertices
from ternaryplot.engine.config import PlotDefaults
from ternaryplot.engine.plot import TernaryPlot
from ternaryplot.engine.scale import LinearScale

__all__ = [
    "Barycentric",
    "default_vertices",
    "PlotDefaults",
    "TernaryPlot",
    "LinearScale",
]
