"""Barycentric converter: ternary values ↔ 2-D points in unit space.

By default the triangle is equilateral and inscribed in the unit circle with
vertices at -90°, 150° and 30° (SVG y-down, so A is at the top).
See https://en.wikipedia.org/wiki/Barycentric_coordinate_system
"""

from __future__ import annotations

import logging
import math
from operator import itemgetter
from typing import Any, Callable, Iterable

import numpy as np
from numpy.typing import NDArray

from ternaryplot.errors import DegenerateTriangleError
from ternaryplot.utils.geometry import Coord, Triple, as_triple, is_degenerate

logger = logging.getLogger(__name__)

Accessor = Callable[[Any], float]
Ternary = tuple[float, float, float]

DEFAULT_ANGLES = (-90.0, 150.0, 30.0)


def default_vertices(angles: Iterable[float] = DEFAULT_ANGLES) -> Triple:
    """Vertices on the unit circle at the given angles in degrees."""
    return tuple((math.cos(math.radians(a)), math.sin(math.radians(a))) for a in angles)  # type: ignore[return-value]


class Barycentric:
    """Maps records to points via three value accessors and three vertices."""

    def __init__(self, vertices: Triple | None = None) -> None:
        self._a: Accessor = itemgetter(0)
        self._b: Accessor = itemgetter(1)
        self._c: Accessor = itemgetter(2)
        self._normalize_data = True
        self._vertices: Triple = default_vertices()
        if vertices is not None:
            self.set_vertices(vertices)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    @staticmethod
    def normalize(values: Iterable[float]) -> Ternary:
        """Scale a ternary triple so it sums to 1. Zero sum gives (0, 0, 0)."""
        a, b, c = (float(v) for v in values)
        total = a + b + c
        if total == 0:
            return (0.0, 0.0, 0.0)
        return (a / total, b / total, c / total)

    def convert(self, record: Any) -> Coord:
        values = (self._a(record), self._b(record), self._c(record))
        w_a, w_b, w_c = self.normalize(values) if self._normalize_data else values
        (xa, ya), (xb, yb), (xc, yc) = self._vertices
        return (xa * w_a + xb * w_b + xc * w_c, ya * w_a + yb * w_b + yc * w_c)

    __call__ = convert

    def convert_many(self, records: Iterable[Any]) -> NDArray[np.float64]:
        """Vectorized convert: returns an (N, 2) array."""
        weights = np.array(
            [(self._a(r), self._b(r), self._c(r)) for r in records], dtype=np.float64
        ).reshape(-1, 3)
        if self._normalize_data:
            totals = weights.sum(axis=1, keepdims=True)
            safe = np.where(totals == 0, 1.0, totals)
            weights = np.where(totals == 0, 0.0, weights / safe)
        return weights @ np.asarray(self._vertices, dtype=np.float64)

    def invert(self, point: Coord) -> Ternary:
        """Ternary weights of a point, solved with Cramer's rule.

        Weights are returned as absolute values; points outside the triangle
        give triples that do not sum to 1.
        """
        x, y = point
        (xa, ya), (xb, yb), (xc, yc) = self._vertices

        y_b_c = yb - yc
        x_c_b = xc - xb
        x_a_c = xa - xc
        y_a_c = ya - yc
        y_c_a = yc - ya
        x_x_c = x - xc
        y_y_c = y - yc

        det = y_b_c * x_a_c + x_c_b * y_a_c
        if det == 0:
            raise DegenerateTriangleError("Cannot invert through a degenerate triangle")

        a = (y_b_c * x_x_c + x_c_b * y_y_c) / det
        b = (y_c_a * x_x_c + x_a_c * y_y_c) / det
        return (abs(a), abs(b), abs(1 - a - b))

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def a(self) -> Accessor:
        return self._a

    def set_a(self, fn: Accessor) -> "Barycentric":
        self._a = fn
        return self

    @property
    def b(self) -> Accessor:
        return self._b

    def set_b(self, fn: Accessor) -> "Barycentric":
        self._b = fn
        return self

    @property
    def c(self) -> Accessor:
        return self._c

    def set_c(self, fn: Accessor) -> "Barycentric":
        self._c = fn
        return self

    @property
    def normalized(self) -> bool:
        return self._normalize_data

    def set_normalized(self, flag: bool) -> "Barycentric":
        self._normalize_data = bool(flag)
        return self

    @property
    def vertices(self) -> Triple:
        return self._vertices

    def set_vertices(self, vertices: Triple) -> "Barycentric":
        triple = as_triple(vertices)
        if is_degenerate(triple):
            raise DegenerateTriangleError(f"Vertices {triple} are collinear or coincident")
        self._vertices = triple
        logger.debug("Barycentric vertices set to %s", triple)
        return self
