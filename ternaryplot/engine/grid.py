"""Grid lines, ticks and axis labels derived from axis state. No mutation."""

from __future__ import annotations

from typing import Callable, Sequence, Union

from ternaryplot.engine.axis import Axis, broadcast, conjugate_index
from ternaryplot.models.geometry import AxisLabel, Tick
from ternaryplot.utils.geometry import Coord

TickFormat = Union[str, Callable[[float], str]]
Counts = Union[int, Sequence[int]]
Segment = tuple[Coord, Coord]


def edge_fraction(axis: Axis, value: float, reverse: bool) -> float:
    """Position of value along the axis gridline, 0 at its start."""
    fraction = axis.scale(value)
    return 1 - fraction if reverse else fraction


def grid_lines(axes: Sequence[Axis], counts: Counts, reverse: bool = False) -> list[list[Segment]]:
    """Segments of constant composition for each axis.

    Each runs from the axis's own edge to its conjugate's edge, so the three
    sets cross into the triangular lattice. Values come from
    ``scale.ticks(count - 1)``, which for a [0, 1] domain and count 10 gives
    the 11 values 0, 0.1, ... 1 (the outer edge and the opposite vertex
    included).
    """
    per_axis = broadcast(counts, int)
    result = []
    for i, axis in enumerate(axes):
        conjugate = axes[conjugate_index(i, reverse)]
        segments = []
        for value in axis.scale.ticks(per_axis[i] - 1):
            f = edge_fraction(axis, value, reverse)
            segments.append((axis.grid_line(f), conjugate.grid_line(1 - f)))
        result.append(segments)
    return result


def ticks(
    axes: Sequence[Axis],
    counts: Counts,
    tick_format: TickFormat,
    reverse: bool = False,
) -> list[list[Tick]]:
    per_axis = broadcast(counts, int)
    result = []
    for i, axis in enumerate(axes):
        count = per_axis[i]
        values = axis.scale.ticks(count)
        if not values:
            result.append([])
            continue
        fmt = tick_format if callable(tick_format) else axis.scale.tick_format(count, tick_format)
        result.append(
            [
                Tick(
                    text=str(fmt(value)),
                    position=axis.grid_line(edge_fraction(axis, value, reverse)),
                    angle=axis.tick_angle,
                    size=axis.tick_size,
                    text_anchor=axis.tick_text_anchor,
                )
                for value in values
            ]
        )
    return result


def axis_labels(axes: Sequence[Axis], radius: float, center: bool = False) -> list[AxisLabel]:
    """Labels at each axis's vertex (or edge midpoint), pushed outward by label_offset."""
    labels = []
    for axis in axes:
        x, y = axis.grid_line(0.5 if center else 1)
        factor = (radius + axis.label_offset) / radius
        labels.append(AxisLabel(position=(x * factor, y * factor), label=axis.label, angle=axis.label_angle))
    return labels
