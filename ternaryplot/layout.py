"""Assemble everything a renderer needs for one chart from a ChartConfig."""

from __future__ import annotations

import logging

from ternaryplot.engine import Barycentric, TernaryPlot
from ternaryplot.models.chart import ChartConfig, ChartLayout, PlotPoint
from ternaryplot.svg.path import join_paths

logger = logging.getLogger(__name__)


def build_plot(config: ChartConfig) -> TernaryPlot:
    """Engine configured for the chart: radius, labels, label offsets, domains."""
    return (
        TernaryPlot(Barycentric())
        .set_radius(config.radius)
        .set_labels(config.labels)
        .set_label_offsets(config.label_offset)
        .set_domains(config.domains)
    )


def build_layout(config: ChartConfig) -> ChartLayout:
    plot = build_plot(config)

    points = []
    for series in config.series:
        if not series.data:
            continue
        positions = plot.evaluate_many(series.data)
        points.extend(
            PlotPoint(position=(float(x), float(y)), color=series.color) for x, y in positions
        )

    layout = ChartLayout(
        outline=plot.triangle(),
        grid_paths=[join_paths(axis_grid) for axis_grid in plot.grid_lines(config.ticks)],
        ticks=plot.ticks(config.ticks),
        axis_labels=plot.axis_labels(center=config.center_labels),
        points=points,
    )
    logger.info(
        "Built layout: %d points in %d series, domains %s",
        len(points),
        len(config.series),
        plot.domains,
    )
    return layout
