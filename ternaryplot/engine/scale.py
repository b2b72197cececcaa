"""Linear scale with d3-compatible nice ticks and tick formats.

Axis domains map onto the [0, 1] edge fraction. Tick values must match what
d3-scale produces for the same domain and count, since those values end up as
tick labels: a domain of [0.2, 0.7] with 10 ticks gives 0.2, 0.25, ... 0.7.
"""

from __future__ import annotations

import math
from typing import Callable

from ternaryplot.utils.format import make_formatter, parse_specifier

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)


def _js_round(value: float) -> int:
    """Round half toward +inf (JavaScript Math.round)."""
    return int(math.floor(value + 0.5))


def _tick_spec(start: float, stop: float, count: float) -> tuple[int, int, float]:
    step = (stop - start) / max(0.0, count)
    power = math.floor(math.log10(step))
    error = step / 10**power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1

    if power < 0:
        inc = 10 ** (-power) / factor
        i1 = _js_round(start * inc)
        i2 = _js_round(stop * inc)
        if i1 / inc < start:
            i1 += 1
        if i2 / inc > stop:
            i2 -= 1
        inc = -inc
    else:
        inc = 10**power * factor
        i1 = _js_round(start / inc)
        i2 = _js_round(stop / inc)
        if i1 * inc < start:
            i1 += 1
        if i2 * inc > stop:
            i2 -= 1

    if i2 < i1 and 0.5 <= count < 2:
        return _tick_spec(start, stop, count * 2)
    return i1, i2, inc


def ticks(start: float, stop: float, count: float) -> list[float]:
    """Roughly count+1 evenly spaced round values between start and stop.

    A negative increment encodes its reciprocal, so ticks are produced by
    division and 0.1 steps stay exact (0.3, not 0.30000000000000004).
    """
    if not count > 0:
        return []
    if start == stop:
        return [start]

    reverse = stop < start
    i1, i2, inc = _tick_spec(stop, start, count) if reverse else _tick_spec(start, stop, count)
    if not i2 >= i1:
        return []

    n = i2 - i1 + 1
    if reverse:
        if inc < 0:
            return [(i2 - i) / -inc for i in range(n)]
        return [(i2 - i) * inc for i in range(n)]
    if inc < 0:
        return [(i1 + i) / -inc for i in range(n)]
    return [(i1 + i) * inc for i in range(n)]


def tick_increment(start: float, stop: float, count: float) -> float:
    return _tick_spec(start, stop, count)[2]


def tick_step(start: float, stop: float, count: float) -> float:
    """Signed tick spacing; NaN when no ticks can be placed."""
    if not count > 0 or start == stop:
        return math.nan
    reverse = stop < start
    inc = tick_increment(stop, start, count) if reverse else tick_increment(start, stop, count)
    step = 1 / -inc if inc < 0 else inc
    return -step if reverse else step


def _exponent(value: float) -> int:
    """Decimal exponent of value as written in exponential notation."""
    if value == 0 or not math.isfinite(value):
        return 0
    return int(f"{abs(value):e}".split("e")[1])


def precision_fixed(step: float) -> int:
    return max(0, -_exponent(abs(step)))


def precision_round(step: float, max_value: float) -> int:
    step = abs(step)
    max_value = abs(max_value) - step
    return max(0, _exponent(max_value) - _exponent(step)) + 1


class LinearScale:
    """Continuous map from a domain interval onto a range interval."""

    def __init__(
        self,
        domain: tuple[float, float] = (0.0, 1.0),
        range_: tuple[float, float] = (0.0, 1.0),
    ) -> None:
        self._domain = (float(domain[0]), float(domain[1]))
        self._range = (float(range_[0]), float(range_[1]))

    @property
    def domain(self) -> tuple[float, float]:
        return self._domain

    def set_domain(self, domain: tuple[float, float]) -> "LinearScale":
        self._domain = (float(domain[0]), float(domain[1]))
        return self

    @property
    def range(self) -> tuple[float, float]:
        return self._range

    def __call__(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if d1 == d0:
            # Collapsed domain maps everything to the middle of the range
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, value: float) -> float:
        d0, d1 = self._domain
        r0, r1 = self._range
        if r1 == r0:
            return (d0 + d1) / 2
        return d0 + (value - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: float = 10) -> list[float]:
        return ticks(self._domain[0], self._domain[1], count)

    def tick_format(self, count: float = 10, specifier: str | None = None) -> Callable[[float], str]:
        """Formatter whose precision suits the tick step for count ticks.

        With the default ``"%"`` on a 0.1 step this yields "10%", "20%", ...
        """
        start, stop = self._domain
        step = tick_step(start, stop, count)
        spec = parse_specifier(",f" if specifier is None else specifier)

        if spec.precision is None:
            if spec.type in ("f", "%"):
                precision = precision_fixed(step) - (2 if spec.type == "%" else 0)
                spec = spec.with_precision(max(0, precision))
            elif spec.type in ("", "e", "g"):
                precision = precision_round(step, max(abs(start), abs(stop)))
                precision -= 1 if spec.type == "e" else 0
                spec = spec.with_precision(max(0 if spec.type == "e" else 1, precision))

        return make_formatter(spec)

    def copy(self) -> "LinearScale":
        return LinearScale(self._domain, self._range)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self._domain}, range={self._range})"
