"""TernaryPlot: radius, zoom/pan transform and axis state over a Barycentric converter.

The viewport triangle (``outline_vertices``) is fixed for a given radius.
Zooming and panning move the converter's vertices instead: a transform
(k, tx, ty) scales and shifts the data triangle so that the requested
sub-triangle of composition space fills the viewport. ``evaluate`` is then
just ``radius * barycentric(record)``.

Configuration follows a query/command split: read through properties,
write through ``set_*`` methods that return the plot for chaining::

    plot = TernaryPlot(Barycentric()).set_radius(100).set_labels(["Ga", "Yb", "Au"])
    plot.set_domains([(0.2, 0.7), (0, 0.5), (0.3, 0.8)])
    plot.scale  # 2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Point, Polygon

from ternaryplot.engine import grid
from ternaryplot.engine import transform as tf
from ternaryplot.engine.axis import Axis, broadcast, grid_line_functions
from ternaryplot.engine.barycentric import Barycentric, Ternary
from ternaryplot.engine.config import PlotDefaults
from ternaryplot.engine.scale import LinearScale
from ternaryplot.models.geometry import AxisLabel, Tick, Transform, text_anchor_adapter
from ternaryplot.svg.path import polygon_path
from ternaryplot.utils.format import parse_specifier
from ternaryplot.utils.geometry import Coord, Triple, scale_points

logger = logging.getLogger(__name__)


@dataclass
class PlotState:
    """Everything a TernaryPlot knows besides its converter."""

    # Converter vertices at construction, screen order, radius 1
    base_vertices: Triple
    radius: float
    k: float = 1.0
    tx: float = 0.0
    ty: float = 0.0
    reverse: bool = False
    tick_format: grid.TickFormat = "%"
    axes: tuple[Axis, Axis, Axis] = field(default_factory=tuple)  # type: ignore[assignment]

    @property
    def unscaled_vertices(self) -> Triple:
        """Base vertices in data order; reversal relabels A, B, C → C, A, B."""
        v_a, v_b, v_c = self.base_vertices
        return (v_c, v_a, v_b) if self.reverse else (v_a, v_b, v_c)

    @property
    def outline_vertices(self) -> Triple:
        return scale_points(self.base_vertices, self.radius)


class TernaryPlot:
    """Presentation state and render data for one ternary chart."""

    def __init__(self, barycentric: Barycentric | None = None, defaults: PlotDefaults | None = None) -> None:
        self._barycentric = barycentric if barycentric is not None else Barycentric()
        self._defaults = defaults if defaults is not None else PlotDefaults()
        d = self._defaults

        self._state = PlotState(
            base_vertices=self._barycentric.vertices,
            radius=_positive(d.radius, "radius"),
            tick_format=d.tick_format,
        )
        lines = grid_line_functions(self._state.outline_vertices)
        anchors = broadcast(d.tick_text_anchors, text_anchor_adapter.validate_python)
        self._state.axes = tuple(
            Axis(
                label=str(d.labels[i]),
                label_angle=float(d.label_angles[i]),
                label_offset=float(d.label_offset),
                tick_angle=float(d.tick_angles[i]),
                tick_size=float(d.tick_size),
                tick_text_anchor=anchors[i],
                grid_line=lines[i],
                scale=LinearScale((0.0, 1.0)),
            )
            for i in range(3)
        )

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def evaluate(self, record: Any) -> Coord:
        """Pixel position of a record."""
        x, y = self._barycentric(record)
        r = self._state.radius
        return (x * r, y * r)

    __call__ = evaluate

    def evaluate_many(self, records: Iterable[Any]) -> NDArray[np.float64]:
        return self._barycentric.convert_many(records) * self._state.radius

    def invert(self, point: Coord) -> Ternary:
        """Ternary values of a pixel position (plot centred at the origin)."""
        r = self._state.radius
        return self._barycentric.invert((point[0] / r, point[1] / r))

    def contains(self, point: Coord) -> bool:
        """True when a pixel position lies on or inside the viewport triangle."""
        return Polygon(self._state.outline_vertices).covers(Point(point))

    @property
    def barycentric(self) -> Barycentric:
        return self._barycentric

    # ------------------------------------------------------------------
    # Vertices and radius
    # ------------------------------------------------------------------

    @property
    def vertices(self) -> Triple:
        """Current (transformed) converter vertices, scaled by radius."""
        return scale_points(self._barycentric.vertices, self._state.radius)

    def set_vertices(self, vertices: Triple) -> "TernaryPlot":
        """Unscale by radius and hand to the converter, e.g. after an external pan."""
        self._barycentric.set_vertices(scale_points(vertices, 1 / self._state.radius))
        return self

    @property
    def outline_vertices(self) -> Triple:
        """The fixed viewport triangle, scaled by radius."""
        return self._state.outline_vertices

    @property
    def radius(self) -> float:
        return self._state.radius

    def set_radius(self, radius: float) -> "TernaryPlot":
        self._state.radius = _positive(radius, "radius")
        self._rebuild_grid_lines()
        logger.debug("Radius set to %s", self._state.radius)
        return self

    def triangle(self) -> str:
        """SVG path of the viewport outline, usable as a clip path."""
        return polygon_path(self._state.outline_vertices)

    # ------------------------------------------------------------------
    # Transform
    # ------------------------------------------------------------------

    @property
    def scale(self) -> float:
        return self._state.k

    def set_scale(self, k: float) -> "TernaryPlot":
        k = _positive(k, "scale")
        if k < 1:
            logger.warning("Scale %s would show compositions outside [0, 1]; using 1", k)
            k = 1.0
        self._state.k = k
        return self.transform()

    @property
    def translate(self) -> tuple[float, float]:
        """Current translation, unscaled by radius."""
        return (self._state.tx, self._state.ty)

    def set_translate(self, offset: Sequence[float]) -> "TernaryPlot":
        tx, ty = offset
        self._state.tx = float(tx)
        self._state.ty = float(ty)
        return self.transform()

    @property
    def current_transform(self) -> Transform:
        return Transform(k=self._state.k, x=self._state.tx, y=self._state.ty)

    def transform(self) -> "TernaryPlot":
        """Apply (k, tx, ty) to the converter after moving t back within bounds."""
        state = self._state
        vertices = state.unscaled_vertices

        if math.isclose(state.k, 1.0, rel_tol=0, abs_tol=1e-12):
            state.k, state.tx, state.ty = 1.0, 0.0, 0.0
            self._barycentric.set_vertices(vertices)
            return self

        state.tx, state.ty = tf.correct_translation(
            vertices, state.k, state.tx, state.ty, self._defaults.bound_epsilon
        )
        self._barycentric.set_vertices(tf.scale_and_translate(vertices, state.k, state.tx, state.ty))
        return self

    def transform_from_domains(self, domains: Sequence[tf.Domain]) -> Transform:
        """Transform that shows exactly these domains. Translation is unscaled by radius."""
        return tf.transform_from_domains(domains, self._state.unscaled_vertices, self._defaults.domain_precision)

    def domains_from_vertices(self) -> tf.Domains:
        """Domains visible under the current converter vertices.

        Use after an external pan/zoom moved the vertices, then store them
        with ``set_axis_domains``.
        """
        return tf.domains_from_vertices(
            self._state.unscaled_vertices, self._barycentric.invert, self._state.reverse
        )

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    @property
    def domains(self) -> tf.Domains:
        return tuple(axis.scale.domain for axis in self._state.axes)  # type: ignore[return-value]

    @property
    def reversed(self) -> bool:
        return self._state.reverse

    def set_domains(self, domains: Sequence[Sequence[float]]) -> "TernaryPlot":
        """Show the given domains (A, B, C) by zooming and panning the data triangle.

        All domains must have the same length. When every domain is descending
        the vertices are relabelled clockwise; ascending domains undo that.
        Invalid domains raise DomainError and leave the plot untouched.
        """
        parsed = tf.validate_domains(domains, self._defaults.domain_precision)
        reverse = tf.is_reversed(parsed)
        _warn_if_not_simplex(parsed)

        if reverse != self._state.reverse:
            self.reverse_vertices()

        self.set_axis_domains(parsed)
        target = self.transform_from_domains(parsed)
        self._state.k, self._state.tx, self._state.ty = target.k, target.x, target.y
        self.transform()

        logger.debug("Domains set to %s (k=%.4f, reverse=%s)", parsed, self._state.k, reverse)
        return self

    def set_axis_domains(self, domains: Sequence[Sequence[float]]) -> "TernaryPlot":
        """Store domains on the axis scales without touching the transform."""
        if len(domains) != 3:
            raise ValueError(f"Expected three domains, got {len(domains)}")
        for axis, (lo, hi) in zip(self._state.axes, domains):
            axis.scale.set_domain((lo, hi))
        return self

    def sync_domains(self) -> "TernaryPlot":
        """Read the domains back from the converter vertices and store them."""
        return self.set_axis_domains(self.domains_from_vertices())

    def reverse_vertices(self) -> "TernaryPlot":
        """Toggle the clockwise relabelling of the vertices (A, B, C → C, A, B).

        Calling it twice restores the original order. ``set_domains`` calls
        this whenever the orientation of the domains changes.
        """
        self._state.reverse = not self._state.reverse
        self._rebuild_grid_lines()
        self.transform()
        logger.debug("Vertex order %s", "reversed" if self._state.reverse else "restored")
        return self

    # ------------------------------------------------------------------
    # Render data
    # ------------------------------------------------------------------

    def grid_lines(self, counts: grid.Counts | None = None) -> list[list[grid.Segment]]:
        """Grid line segments per axis, in order (A, B, C)."""
        if counts is None:
            counts = self._defaults.grid_count
        return grid.grid_lines(self._state.axes, counts, self._state.reverse)

    def ticks(self, counts: grid.Counts | None = None) -> list[list[Tick]]:
        """Tick descriptors per axis, in order (A, B, C)."""
        if counts is None:
            counts = self._defaults.tick_count
        return grid.ticks(self._state.axes, counts, self._state.tick_format, self._state.reverse)

    def axis_labels(self, center: bool = False) -> list[AxisLabel]:
        return grid.axis_labels(self._state.axes, self._state.radius, center)

    # ------------------------------------------------------------------
    # Axis attributes: one value for all axes or three values (A, B, C)
    # ------------------------------------------------------------------

    @property
    def tick_format(self) -> grid.TickFormat:
        return self._state.tick_format

    def set_tick_format(self, tick_format: grid.TickFormat) -> "TernaryPlot":
        """d3 format specifier such as ``"%"`` or ``".1f"``, or a callable."""
        if not callable(tick_format):
            parse_specifier(tick_format)
        self._state.tick_format = tick_format
        return self

    @property
    def tick_angles(self) -> tuple[float, float, float]:
        return self._get("tick_angle")

    def set_tick_angles(self, angles: float | Sequence[float]) -> "TernaryPlot":
        return self._set("tick_angle", broadcast(angles, float))

    @property
    def tick_sizes(self) -> tuple[float, float, float]:
        return self._get("tick_size")

    def set_tick_sizes(self, sizes: float | Sequence[float]) -> "TernaryPlot":
        return self._set("tick_size", broadcast(sizes, float))

    @property
    def tick_text_anchors(self) -> tuple[str, str, str]:
        return self._get("tick_text_anchor")

    def set_tick_text_anchors(self, anchors: str | Sequence[str]) -> "TernaryPlot":
        return self._set("tick_text_anchor", broadcast(anchors, text_anchor_adapter.validate_python))

    @property
    def labels(self) -> tuple[str, str, str]:
        return self._get("label")

    def set_labels(self, labels: Any) -> "TernaryPlot":
        return self._set("label", broadcast(labels, str))

    @property
    def label_angles(self) -> tuple[float, float, float]:
        return self._get("label_angle")

    def set_label_angles(self, angles: float | Sequence[float]) -> "TernaryPlot":
        return self._set("label_angle", broadcast(angles, float))

    @property
    def label_offsets(self) -> tuple[float, float, float]:
        return self._get("label_offset")

    def set_label_offsets(self, offsets: float | Sequence[float]) -> "TernaryPlot":
        return self._set("label_offset", broadcast(offsets, float))

    # ------------------------------------------------------------------

    def _get(self, name: str) -> tuple:
        return tuple(getattr(axis, name) for axis in self._state.axes)

    def _set(self, name: str, values: tuple) -> "TernaryPlot":
        for axis, value in zip(self._state.axes, values):
            setattr(axis, name, value)
        return self

    def _rebuild_grid_lines(self) -> None:
        lines = grid_line_functions(self._state.outline_vertices, self._state.reverse)
        for axis, line in zip(self._state.axes, lines):
            axis.grid_line = line


def _positive(value: float, name: str) -> float:
    value = float(value)
    if not (math.isfinite(value) and value > 0):
        raise ValueError(f"{name} must be a positive number, got {value!r}")
    return value


def _warn_if_not_simplex(domains: tf.Domains) -> None:
    """Domain minima of a real sub-triangle sum to 1 - L; otherwise the view gets shifted."""
    length = abs(domains[0][1] - domains[0][0])
    total = sum(min(lo, hi) for lo, hi in domains)
    if not math.isclose(total + length, 1.0, abs_tol=1e-6):
        logger.warning(
            "Domain minima sum to %.4f, expected %.4f; the view will be shifted to stay in bounds",
            total,
            1 - length,
        )
