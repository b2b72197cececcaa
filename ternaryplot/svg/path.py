"""SVG path-command strings for the plot outline and grid lines.

Numbers are written the way JavaScript stringifies them, so paths are
byte-identical to those produced by browser-side charting code:
integral values lose their ".0" and exponents drop the padding zero.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Iterable

from ternaryplot.utils.geometry import Coord


def format_number(value: float) -> str:
    """JavaScript Number#toString for finite floats.

    Shortest round-trip digits (Python repr) laid out with the ECMAScript
    rules: plain notation for 1e-6 <= |x| < 1e21, exponent otherwise.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot write non-finite coordinate {value!r}")
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(float(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * (-n) + digits

    e = n - 1
    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    return f"{prefix}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def format_coord(point: Coord) -> str:
    return f"{format_number(point[0])},{format_number(point[1])}"


def polygon_path(points: Iterable[Coord]) -> str:
    """Closed path: M<p0>L<p1>...Z."""
    return polyline_path(points) + "Z"


def polyline_path(points: Iterable[Coord]) -> str:
    """Open path: M<p0>L<p1>... Empty string for no points."""
    coords = [format_coord(p) for p in points]
    if not coords:
        return ""
    return "M" + "L".join(coords)


def join_paths(segments: Iterable[Iterable[Coord]]) -> str:
    """One path string per segment, space separated."""
    return " ".join(polyline_path(segment) for segment in segments)
