"""Zoom/pan transform helpers. Pure functions over vertex triples and domains.

A transform (k, tx, ty) moves the data triangle: vertex' = k * vertex + t.
The viewport (outline) triangle never moves, so zooming in means growing the
data triangle around it. The data triangle must always cover the viewport,
otherwise grid lines and the clip path would show compositions outside [0, 1].
"""

from __future__ import annotations

import logging
import math
import sys
from typing import Callable, Sequence

import numpy as np

from ternaryplot.errors import DomainError
from ternaryplot.models.geometry import Transform
from ternaryplot.utils.geometry import Coord, Triple, centroid, outward_normal

logger = logging.getLogger(__name__)

Domain = tuple[float, float]
Domains = tuple[Domain, Domain, Domain]

# Sides of the triangle as vertex index pairs: AB, AC, BC
_SIDES = ((0, 1), (0, 2), (1, 2))

# Each pass fixes at least one violated side; three sides bound the work.
_MAX_CORRECTION_PASSES = 4

# Endpoint slack when checking domains against [0, 1].
_RANGE_TOLERANCE = 1e-9


def _js_round(value: float, decimals: int) -> float:
    """Round half up to the given decimals, nudged by machine epsilon."""
    factor = 10**decimals
    return math.floor((value + sys.float_info.epsilon) * factor + 0.5) / factor


def domain_lengths(domains: Sequence[Domain], precision: int = 2) -> set[float]:
    """Distinct interval lengths after rounding endpoints and lengths."""
    lengths = set()
    for lo, hi in domains:
        d0 = _js_round(lo, precision)
        d1 = _js_round(hi, precision)
        lengths.add(_js_round(abs(d1 - d0), precision))
    return lengths


def is_reversed(domains: Sequence[Domain]) -> bool:
    return all(lo > hi for lo, hi in domains)


def validate_domains(domains: Sequence[Sequence[float]], precision: int = 2) -> Domains:
    """Check a domain triple and return it as float tuples.

    Raises DomainError for wrong arity, unequal or zero lengths, endpoints
    outside [0, 1] and mixed orientation.
    """
    if len(domains) != 3:
        raise DomainError(f"Expected three domains, got {len(domains)}")
    parsed = []
    for domain in domains:
        if len(domain) != 2:
            raise DomainError(f"Each domain needs two endpoints, got {domain!r}")
        lo, hi = float(domain[0]), float(domain[1])
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise DomainError(f"Domain endpoints must be finite, got {domain!r}")
        if min(lo, hi) < -_RANGE_TOLERANCE or max(lo, hi) > 1 + _RANGE_TOLERANCE:
            raise DomainError(f"Domain {domain!r} extends outside [0, 1]")
        parsed.append((lo, hi))

    lengths = domain_lengths(parsed, precision)
    if len(lengths) != 1:
        raise DomainError("Domains must all be of equal length")
    if next(iter(lengths)) == 0:
        raise DomainError("Domains must have non-zero length")

    descending = [lo > hi for lo, hi in parsed]
    if any(descending) and not all(descending):
        raise DomainError("Domains must be all ascending or all descending")

    return tuple(parsed)  # type: ignore[return-value]


def transform_from_domains(domains: Sequence[Domain], vertices: Triple, precision: int = 2) -> Transform:
    """Scale and (unscaled) translation that map the domains onto the full triangle.

    k = 1 / L for the common length L. Each axis is shifted by the distance
    between its domain start and the start of a centred domain of the same
    length, (1 - L) / 3; the translation is the vertex combination weighted by
    those shifts. The centroid term vanishes for triangles centred on the
    origin.
    """
    length = next(iter(domain_lengths(domains, precision)))
    k = 1 / length
    start = (1 - length) / 3
    shifts = np.array([start - domain[0] for domain in domains])
    verts = np.asarray(vertices, dtype=np.float64)

    cx, cy = centroid(vertices)
    tx, ty = k * (shifts @ verts) - (k - 1) * np.array([cx, cy])
    return Transform(k=k, x=float(tx), y=float(ty))


def scale_and_translate(vertices: Triple, k: float, tx: float, ty: float) -> Triple:
    return tuple((x * k + tx, y * k + ty) for x, y in vertices)  # type: ignore[return-value]


def side_distances(original: Triple, transformed: Triple) -> list[float]:
    """Signed distance between each original side line and its transformed twin.

    Positive when the transformed side lies outside the original triangle,
    negative when it has moved inside. Sides are ordered AB, AC, BC.
    """
    inside = centroid(original)
    distances = []
    for i, j in _SIDES:
        normal = outward_normal(original[i], original[j], inside)
        # Parallel lines: the offset of any point on one, projected on the normal
        distances.append(float(np.dot(normal, np.subtract(transformed[i], original[i]))))
    return distances


def correct_translation(
    vertices: Triple,
    k: float,
    tx: float,
    ty: float,
    epsilon: float = 1e-4,
) -> tuple[float, float]:
    """Shift (tx, ty) until the scaled triangle covers the original one.

    A side whose distance is below -epsilon is pushed outward along its
    normal. Once two sides have needed correction they are solved together,
    landing on their shared corner; pushing them one at a time would undo
    each other since the normals are not orthogonal.
    """
    inside = centroid(vertices)
    normals = [outward_normal(vertices[i], vertices[j], inside) for i, j in _SIDES]
    active: list[int] = []

    for _ in range(_MAX_CORRECTION_PASSES):
        distances = side_distances(vertices, scale_and_translate(vertices, k, tx, ty))
        violated = sorted((s for s, d in enumerate(distances) if d < -epsilon), key=lambda s: distances[s])
        if not violated:
            break
        for s in violated:
            if s in active:
                active.remove(s)
            active.append(s)

        if len(active) == 1:
            s = active[0]
            dx, dy = -distances[s] * normals[s]
        else:
            # With k >= 1 the corner of two sides also satisfies the third
            pair = active[-2:]
            matrix = np.array([normals[s] for s in pair])
            target = np.array([-distances[s] for s in pair])
            dx, dy = np.linalg.solve(matrix, target)

        logger.debug(
            "Bound correction on sides %s: translate by (%.6f, %.6f)",
            [("AB", "AC", "BC")[s] for s in violated],
            dx,
            dy,
        )
        tx += float(dx)
        ty += float(dy)

    return tx, ty


def domains_from_vertices(
    vertices: Triple,
    invert: Callable[[Coord], tuple[float, float, float]],
    reverse: bool = False,
) -> Domains:
    """Domains visible through the viewport triangle given by vertices.

    Each viewport corner is inverted through the current (transformed)
    converter; axis X runs from its value at the next corner to its value at
    its own corner.
    """
    b_a, b_b, b_c = (invert(v) for v in vertices)

    pairs = (
        (b_b[0], b_a[0]),
        (b_c[1], b_b[1]),
        (b_a[2], b_c[2]),
    )
    domains = tuple(tuple(_inside_domain(v) for v in pair) for pair in pairs)
    if reverse:
        domains = tuple((hi, lo) for lo, hi in domains)
    return domains  # type: ignore[return-value]


def _inside_domain(value: float) -> float:
    return min(1.0, max(0.0, value))
