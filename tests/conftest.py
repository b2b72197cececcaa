"""Shared test fixtures."""

from __future__ import annotations

import pytest

from ternaryplot.engine import Barycentric, TernaryPlot

# Visible sub-triangle used by the example chart: every interval is 0.5 long
# and the minima sum to 1 - 0.5.
ZOOM_DOMAINS = ((0.2, 0.7), (0.0, 0.5), (0.3, 0.8))
REVERSED_ZOOM_DOMAINS = ((0.7, 0.2), (0.5, 0.0), (0.8, 0.3))
FULL_DOMAINS = ((0.0, 1.0), (0.0, 1.0), (0.0, 1.0))

SQRT3_2 = 3**0.5 / 2

# Compositions from the example data set (Ga, Yb, Au in percent)
SAMPLE_RECORDS = [
    (36.45, 15.2, 48.35),
    (49.19, 2.25, 48.56),
    (28.84, 16.42, 54.74),
]


@pytest.fixture
def barycentric() -> Barycentric:
    return Barycentric()


@pytest.fixture
def plot() -> TernaryPlot:
    return TernaryPlot(Barycentric())


@pytest.fixture
def small_plot() -> TernaryPlot:
    return TernaryPlot(Barycentric()).set_radius(100)


@pytest.fixture
def zoomed_plot() -> TernaryPlot:
    return TernaryPlot(Barycentric()).set_radius(100).set_domains(ZOOM_DOMAINS)


def flatten(pairs) -> list[float]:
    """Domains or segments as one flat list, for pytest.approx."""
    return [float(v) for pair in pairs for v in pair]
