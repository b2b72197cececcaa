"""Plot defaults: initial presentation state of a new TernaryPlot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PlotDefaults:
    """Starting values for radius, axis attributes and tick generation."""

    # Plot radius in px; vertices sit on a circle of this radius
    radius: float = 300.0

    # Axis presentation, in order (A, B, C)
    labels: tuple[str, str, str] = ("A", "B", "C")
    label_angles: tuple[float, float, float] = (0.0, 60.0, -60.0)
    label_offset: float = 45.0  # px beyond the vertex
    tick_angles: tuple[float, float, float] = (0.0, 60.0, -60.0)
    tick_size: float = 6.0
    tick_text_anchors: tuple[str, str, str] = ("start", "end", "end")

    # Tick generation
    tick_format: str = "%"
    tick_count: int = 10
    grid_count: int = 20

    # Bound correction: side distances above -epsilon count as inside
    bound_epsilon: float = 1e-4

    # Domain lengths are compared after rounding to this many decimals
    domain_precision: int = 2
