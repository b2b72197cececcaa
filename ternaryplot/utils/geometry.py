"""Leaf-node triangle helpers. No engine imports."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Coord = tuple[float, float]
Triple = tuple[Coord, Coord, Coord]

# Twice the area below which a triangle counts as degenerate.
_DEGENERATE_AREA = 1e-12


@dataclass(frozen=True)
class LineBetween:
    """Parametric segment: t=0 at start, t=1 at end."""

    start: Coord
    end: Coord

    def __call__(self, t: float) -> Coord:
        x1, y1 = self.start
        x2, y2 = self.end
        return (x1 + t * (x2 - x1), y1 + t * (y2 - y1))


def as_triple(points) -> Triple:
    """Coerce any 3x2 sequence into a tuple of float pairs."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.shape != (3, 2):
        raise ValueError(f"Expected three (x, y) vertices, got shape {arr.shape}")
    return tuple((float(x), float(y)) for x, y in arr)  # type: ignore[return-value]


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over a closed polygon. Positive = CCW in y-up space."""
    x = points[:, 0]
    y = points[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def is_degenerate(vertices: Triple) -> bool:
    """True when the three vertices are collinear or coincident."""
    pts = np.asarray(vertices, dtype=np.float64)
    if not np.all(np.isfinite(pts)):
        return True
    return abs(signed_area(pts)) * 2 < _DEGENERATE_AREA


def centroid(vertices: Triple) -> Coord:
    pts = np.asarray(vertices, dtype=np.float64)
    return (float(np.mean(pts[:, 0])), float(np.mean(pts[:, 1])))


def scale_points(points, factor: float) -> Triple:
    """Multiply every coordinate by factor."""
    return tuple((x * factor, y * factor) for x, y in points)  # type: ignore[return-value]


def outward_normal(p1: Coord, p2: Coord, inside: Coord) -> NDArray[np.float64]:
    """Unit normal of the line p1→p2 pointing away from the inside point."""
    direction = np.subtract(p2, p1)
    length = float(np.hypot(direction[0], direction[1]))
    if length == 0:
        raise ValueError("Side endpoints coincide")
    normal = np.array([direction[1], -direction[0]]) / length
    # Flip so the inside point lies on the negative side
    if np.dot(normal, np.subtract(inside, p1)) > 0:
        normal = -normal
    return normal
