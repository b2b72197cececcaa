"""Tests for the TernaryPlot engine: vertices, domains, transform and render data."""

from __future__ import annotations

import logging

import pytest

from ternaryplot.engine import Barycentric, PlotDefaults, TernaryPlot
from ternaryplot.engine.transform import side_distances
from ternaryplot.errors import DegenerateTriangleError, DomainError
from ternaryplot.models.geometry import Tick
from ternaryplot.utils.geometry import scale_points
from tests.conftest import (
    FULL_DOMAINS,
    REVERSED_ZOOM_DOMAINS,
    SAMPLE_RECORDS,
    SQRT3_2,
    ZOOM_DOMAINS,
    flatten,
)

EPSILON = 1e-4


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _min_side_distance(plot: TernaryPlot) -> float:
    """Smallest signed distance between viewport and data triangle sides.

    Both triangles are taken in data order, which differs from the outline
    order once the plot is reversed.
    """
    data_vertices = scale_points(plot.vertices, 1 / plot.radius)
    return min(side_distances(plot._state.unscaled_vertices, data_vertices))


# ---------------------------------------------------------------------------
# Points and vertices
# ---------------------------------------------------------------------------

class TestEvaluate:
    def test_default_radius(self, plot):
        assert plot.radius == 300
        assert plot((1, 0, 0)) == pytest.approx((0.0, -300.0), abs=1e-9)

    def test_zero_record(self, plot):
        assert plot((0, 0, 0)) == (0.0, 0.0)

    def test_scaled_by_radius(self, small_plot):
        assert small_plot((0, 1, 0)) == pytest.approx((-100 * SQRT3_2, 50.0))
        assert small_plot.evaluate((0, 0, 1)) == pytest.approx((100 * SQRT3_2, 50.0))

    def test_evaluate_many(self, small_plot):
        many = small_plot.evaluate_many(SAMPLE_RECORDS)
        for row, record in zip(many, SAMPLE_RECORDS):
            assert tuple(row) == pytest.approx(small_plot(record))

    @pytest.mark.parametrize("record", SAMPLE_RECORDS)
    def test_invert_pixel_position(self, small_plot, record):
        assert small_plot.invert(small_plot(record)) == pytest.approx(Barycentric.normalize(record))

    def test_contains(self, small_plot):
        assert small_plot.contains((0, 0))
        assert small_plot.contains(small_plot.outline_vertices[0])
        assert not small_plot.contains((0, 80))
        assert not small_plot.contains((200, 0))


class TestVertices:
    def test_vertices_scaled(self, small_plot):
        v_a, v_b, v_c = small_plot.vertices
        assert v_a == pytest.approx((0.0, -100.0), abs=1e-9)
        assert v_b == pytest.approx((-100 * SQRT3_2, 50.0))

    def test_set_vertices_unscales(self, small_plot):
        small_plot.set_vertices(((0, -200), (-200, 100), (200, 100)))
        assert small_plot.barycentric.vertices == ((0.0, -2.0), (-2.0, 1.0), (2.0, 1.0))

    def test_set_degenerate_vertices(self, small_plot):
        with pytest.raises(DegenerateTriangleError):
            small_plot.set_vertices(((0, 0), (10, 10), (20, 20)))

    def test_outline_independent_of_zoom(self, small_plot):
        before = small_plot.outline_vertices
        small_plot.set_domains(ZOOM_DOMAINS)
        assert small_plot.outline_vertices == before
        assert small_plot.vertices != before

    def test_set_radius(self, plot):
        assert plot.set_radius(50) is plot
        assert plot.outline_vertices[1] == pytest.approx((-50 * SQRT3_2, 25.0))
        # Axis A gridline ends at vertex A
        label = plot.set_label_offsets(0).axis_labels()[0]
        assert label.position == pytest.approx((0.0, -50.0), abs=1e-9)

    @pytest.mark.parametrize("radius", [0, -10, float("nan"), float("inf")])
    def test_radius_must_be_positive(self, plot, radius):
        with pytest.raises(ValueError):
            plot.set_radius(radius)

    def test_defaults_override(self):
        plot = TernaryPlot(Barycentric(), defaults=PlotDefaults(radius=10, labels=("x", "y", "z")))
        assert plot.radius == 10
        assert plot.labels == ("x", "y", "z")


class TestTriangle:
    def test_path_format(self, small_plot):
        path = small_plot.triangle()
        assert path.startswith("M") and path.endswith("Z")
        assert path.count("L") == 2
        assert ",-100L-86.6025403784438" in path

    def test_exact_path(self):
        conv = Barycentric([(0, -1), (-0.5, 0.5), (0.5, 0.5)])
        plot = TernaryPlot(conv).set_radius(100)
        assert plot.triangle() == "M0,-100L-50,50L50,50Z"

    def test_path_unchanged_by_zoom(self, small_plot):
        before = small_plot.triangle()
        small_plot.set_domains(ZOOM_DOMAINS)
        assert small_plot.triangle() == before


# ---------------------------------------------------------------------------
# Domains and transform
# ---------------------------------------------------------------------------

class TestDomains:
    def test_default_domains(self, plot):
        assert plot.domains == FULL_DOMAINS
        assert plot.scale == 1
        assert plot.translate == (0, 0)

    def test_zoom_scale_and_translate(self, zoomed_plot):
        assert zoomed_plot.scale == pytest.approx(2.0)
        assert zoomed_plot.translate == pytest.approx((-0.3 * 3**0.5, 0.1))
        assert zoomed_plot.current_transform.k == pytest.approx(2.0)

    def test_domains_stored_on_axes(self, zoomed_plot):
        assert zoomed_plot.domains == ZOOM_DOMAINS

    def test_zoom_stays_in_bounds(self, zoomed_plot):
        assert _min_side_distance(zoomed_plot) >= -EPSILON

    def test_sub_triangle_fills_viewport(self, zoomed_plot):
        v_a, v_b, v_c = zoomed_plot.outline_vertices
        assert zoomed_plot((0.7, 0.0, 0.3)) == pytest.approx(v_a, abs=1e-9)
        assert zoomed_plot((0.2, 0.5, 0.3)) == pytest.approx(v_b, abs=1e-9)
        assert zoomed_plot((0.2, 0.0, 0.8)) == pytest.approx(v_c, abs=1e-9)

    def test_domain_round_trip(self, zoomed_plot):
        assert flatten(zoomed_plot.domains_from_vertices()) == pytest.approx(flatten(ZOOM_DOMAINS), abs=1e-9)

    @pytest.mark.parametrize(
        "domains",
        [
            ((0.0, 0.5), (0.0, 0.5), (0.5, 1.0)),
            ((0.1, 0.4), (0.3, 0.6), (0.3, 0.6)),
            ((0.25, 0.5), (0.25, 0.5), (0.25, 0.5)),
            ((0.0, 0.1), (0.9, 1.0), (0.0, 0.1)),
        ],
    )
    def test_round_trip_and_bounds(self, small_plot, domains):
        small_plot.set_domains(domains)
        assert small_plot.scale == pytest.approx(1 / (domains[0][1] - domains[0][0]))
        assert _min_side_distance(small_plot) >= -EPSILON
        assert flatten(small_plot.domains_from_vertices()) == pytest.approx(flatten(domains), abs=1e-9)

    def test_full_domains_restore_identity(self, zoomed_plot):
        zoomed_plot.set_domains(FULL_DOMAINS)
        assert zoomed_plot.scale == 1
        assert zoomed_plot.translate == (0, 0)
        assert flatten(zoomed_plot.vertices) == pytest.approx(flatten(zoomed_plot.outline_vertices))

    def test_unequal_lengths_leave_state_untouched(self, zoomed_plot):
        before = (zoomed_plot.domains, zoomed_plot.vertices, zoomed_plot.scale, zoomed_plot.translate)
        with pytest.raises(DomainError, match="equal length"):
            zoomed_plot.set_domains([(0, 0.5), (0, 0.6), (0.3, 0.8)])
        after = (zoomed_plot.domains, zoomed_plot.vertices, zoomed_plot.scale, zoomed_plot.translate)
        assert after == before

    def test_inconsistent_domains_warn(self, small_plot, caplog):
        with caplog.at_level(logging.WARNING, logger="ternaryplot.engine.plot"):
            small_plot.set_domains([(0, 0.5), (0, 0.5), (0, 0.5)])
        assert "Domain minima" in caplog.text
        assert _min_side_distance(small_plot) >= -EPSILON

    def test_transform_from_domains_does_not_apply(self, small_plot):
        t = small_plot.transform_from_domains(ZOOM_DOMAINS)
        assert t.k == pytest.approx(2.0)
        assert small_plot.scale == 1

    def test_set_axis_domains_only_touches_scales(self, small_plot):
        small_plot.set_axis_domains(ZOOM_DOMAINS)
        assert small_plot.domains == ZOOM_DOMAINS
        assert small_plot.scale == 1


class TestScaleAndTranslate:
    def test_scale_one_forces_identity(self, small_plot):
        small_plot.set_translate((0.3, 0.3))
        assert small_plot.translate == (0, 0)

    def test_scale_then_translate_corrected(self, small_plot):
        small_plot.set_scale(2).set_translate((0, -1))
        assert small_plot.translate == pytest.approx((0.0, -0.5))
        assert _min_side_distance(small_plot) >= -EPSILON

    @pytest.mark.parametrize("offset", [(3, 3), (-3, 3), (0, -5), (1, -0.2)])
    def test_any_pan_stays_in_bounds(self, small_plot, offset):
        small_plot.set_scale(3).set_translate(offset)
        assert _min_side_distance(small_plot) >= -EPSILON

    def test_zoom_out_clamped(self, small_plot, caplog):
        with caplog.at_level(logging.WARNING, logger="ternaryplot.engine.plot"):
            small_plot.set_scale(0.5)
        assert small_plot.scale == 1
        assert "outside [0, 1]" in caplog.text

    def test_scale_must_be_positive(self, small_plot):
        with pytest.raises(ValueError):
            small_plot.set_scale(0)

    def test_external_pan_syncs_domains(self, zoomed_plot):
        target = ((0.1, 0.6), (0.1, 0.6), (0.3, 0.8))
        other = TernaryPlot(Barycentric()).set_radius(100).set_domains(target)
        zoomed_plot.set_vertices(other.vertices).sync_domains()
        assert flatten(zoomed_plot.domains) == pytest.approx(flatten(target), abs=1e-9)


# ---------------------------------------------------------------------------
# Reversal
# ---------------------------------------------------------------------------

class TestReversal:
    def test_reversed_domains_flag(self, small_plot):
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        assert small_plot.reversed
        assert small_plot.domains == REVERSED_ZOOM_DOMAINS
        assert small_plot.scale == pytest.approx(2.0)
        assert _min_side_distance(small_plot) >= -EPSILON

    def test_reversed_relabels_clockwise(self, small_plot):
        v_a, v_b, v_c = small_plot.outline_vertices
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        # The A-rich corner now sits where C was
        assert small_plot((0.7, 0.0, 0.3)) == pytest.approx(v_c, abs=1e-9)
        assert small_plot((0.2, 0.5, 0.3)) == pytest.approx(v_a, abs=1e-9)
        assert small_plot((0.2, 0.0, 0.8)) == pytest.approx(v_b, abs=1e-9)

    def test_full_reversed_domains(self, small_plot):
        small_plot.set_domains([(1, 0), (1, 0), (1, 0)])
        v_a, v_b, v_c = small_plot.outline_vertices
        assert small_plot.scale == 1
        assert small_plot((1, 0, 0)) == pytest.approx(v_c, abs=1e-9)

    def test_reverse_twice_restores_order(self, small_plot):
        before = small_plot.vertices
        small_plot.reverse_vertices()
        assert small_plot.reversed
        assert small_plot.vertices != before
        small_plot.reverse_vertices()
        assert not small_plot.reversed
        assert small_plot.vertices == before

    def test_reversed_domains_twice_is_stable(self, small_plot):
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        once = small_plot.vertices
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        assert small_plot.reversed
        assert flatten(small_plot.vertices) == pytest.approx(flatten(once))

    def test_back_to_normal_resets(self, small_plot):
        small_plot.set_domains(ZOOM_DOMAINS)
        normal = small_plot.vertices
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS).set_domains(ZOOM_DOMAINS)
        assert not small_plot.reversed
        assert flatten(small_plot.vertices) == pytest.approx(flatten(normal))

    def test_reversed_round_trip(self, small_plot):
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        assert flatten(small_plot.domains_from_vertices()) == pytest.approx(
            flatten(REVERSED_ZOOM_DOMAINS), abs=1e-9
        )


# ---------------------------------------------------------------------------
# Grid lines
# ---------------------------------------------------------------------------

class TestGridLines:
    def test_count_minus_one_sampling(self, small_plot):
        grid = small_plot.grid_lines(10)
        assert len(grid) == 3
        assert [len(axis) for axis in grid] == [11, 11, 11]

    def test_default_count(self, small_plot):
        # 20 → ticks(19) → 0.05 step
        assert [len(axis) for axis in small_plot.grid_lines()] == [21, 21, 21]

    def test_per_axis_counts(self, small_plot):
        assert [len(axis) for axis in small_plot.grid_lines([3, 6, 11])] == [3, 6, 11]

    def test_endpoints_on_two_edges(self, small_plot):
        grid = small_plot.grid_lines(10)
        for i, axis in enumerate(grid):
            # Skip the outer edge (0) and the degenerate vertex line (1)
            for start, end in axis[1:-1]:
                start_w = small_plot.invert(start)
                end_w = small_plot.invert(end)
                assert start_w[(i + 1) % 3] == pytest.approx(0, abs=1e-9)
                assert end_w[(i + 2) % 3] == pytest.approx(0, abs=1e-9)
                assert start_w[(i + 2) % 3] > 1e-9
                assert end_w[(i + 1) % 3] > 1e-9

    @pytest.mark.parametrize("domains", [FULL_DOMAINS, ZOOM_DOMAINS, REVERSED_ZOOM_DOMAINS])
    def test_lines_have_constant_composition(self, small_plot, domains):
        small_plot.set_domains(domains)
        grid = small_plot.grid_lines(10)
        for i, axis in enumerate(grid):
            values = small_plot._state.axes[i].scale.ticks(9)
            assert len(values) == len(axis)
            for value, (start, end) in zip(values, axis):
                assert small_plot.invert(start)[i] == pytest.approx(value, abs=1e-9)
                assert small_plot.invert(end)[i] == pytest.approx(value, abs=1e-9)


# ---------------------------------------------------------------------------
# Ticks and labels
# ---------------------------------------------------------------------------

class TestTicks:
    def test_default_percent_ticks(self, small_plot):
        ticks = small_plot.ticks()
        assert [len(axis) for axis in ticks] == [11, 11, 11]
        assert [t.text for t in ticks[0]] == [f"{p}%" for p in range(0, 101, 10)]
        assert all(isinstance(t, Tick) for axis in ticks for t in axis)

    @pytest.mark.parametrize("counts", [0, -1, [10, 0, 10]])
    def test_zero_or_negative_count_gives_no_ticks(self, small_plot, counts):
        ticks = small_plot.ticks(counts)
        per_axis = counts if isinstance(counts, list) else [counts] * 3
        assert [len(axis) for axis in ticks] == [11 if c == 10 else 0 for c in per_axis]

    def test_attributes(self, small_plot):
        first = [axis[0] for axis in small_plot.ticks(5)]
        assert [t.angle for t in first] == [0, 60, -60]
        assert [t.size for t in first] == [6, 6, 6]
        assert [t.text_anchor for t in first] == ["start", "end", "end"]

    @pytest.mark.parametrize("domains", [FULL_DOMAINS, ZOOM_DOMAINS, REVERSED_ZOOM_DOMAINS])
    def test_positions_match_values(self, small_plot, domains):
        small_plot.set_domains(domains)
        for i, axis in enumerate(small_plot.ticks(10)):
            values = small_plot._state.axes[i].scale.ticks(10)
            for value, tick in zip(values, axis):
                assert small_plot.invert(tick.position)[i] == pytest.approx(value, abs=1e-9)

    def test_zoomed_ticks(self, zoomed_plot):
        texts = [t.text for t in zoomed_plot.ticks(10)[0]]
        assert texts[0] == "20%"
        assert texts[1] == "25%"
        assert texts[-1] == "70%"

    def test_reversed_tick_order(self, small_plot):
        small_plot.set_domains(REVERSED_ZOOM_DOMAINS)
        texts = [t.text for t in small_plot.ticks(10)[0]]
        assert texts[0] == "70%"
        assert texts[-1] == "20%"

    def test_format_specifier(self, small_plot):
        small_plot.set_tick_format(".1f")
        assert small_plot.tick_format == ".1f"
        assert small_plot.ticks(10)[0][3].text == "0.3"

    def test_callable_format(self, small_plot):
        small_plot.set_tick_format(lambda v: f"{v * 100:.0f} at%")
        assert small_plot.ticks(2)[1][1].text == "50 at%"

    def test_bad_specifier(self, small_plot):
        with pytest.raises(ValueError):
            small_plot.set_tick_format("not a format")
        assert small_plot.tick_format == "%"

    def test_ticks_on_axis_edges(self, small_plot):
        v_a, v_b, v_c = small_plot.outline_vertices
        a_ticks = small_plot.ticks(10)[0]
        # Axis A runs from C (0%) to A (100%)
        assert a_ticks[0].position == pytest.approx(v_c)
        assert a_ticks[-1].position == pytest.approx(v_a, abs=1e-9)


class TestAxisLabels:
    def test_at_vertices(self, small_plot):
        labels = small_plot.axis_labels()
        assert [l.label for l in labels] == ["A", "B", "C"]
        assert [l.angle for l in labels] == [0, 60, -60]
        # (100 + 45) / 100 beyond each vertex
        assert labels[0].position == pytest.approx((0.0, -145.0), abs=1e-9)
        assert labels[1].position == pytest.approx((-145 * SQRT3_2, 72.5))

    def test_centered(self, small_plot):
        labels = small_plot.set_label_offsets(100).axis_labels(center=True)
        # Midpoint of C→A is (sqrt(3)/4, -1/4) * 100, doubled by the offset
        assert labels[0].position == pytest.approx((200 * SQRT3_2 / 2, -50.0))

    def test_custom_labels(self, small_plot):
        small_plot.set_labels(["Ga", "Yb", "Au"]).set_label_angles([10, 20, 30])
        labels = small_plot.axis_labels()
        assert [l.label for l in labels] == ["Ga", "Yb", "Au"]
        assert [l.angle for l in labels] == [10, 20, 30]


# ---------------------------------------------------------------------------
# Axis attribute setters
# ---------------------------------------------------------------------------

class TestAxisAttributes:
    def test_scalar_broadcast(self, small_plot):
        assert small_plot.set_tick_sizes(8).tick_sizes == (8, 8, 8)
        assert small_plot.set_label_offsets(20).label_offsets == (20, 20, 20)
        assert small_plot.set_tick_angles(15).tick_angles == (15, 15, 15)

    def test_per_axis(self, small_plot):
        assert small_plot.set_tick_sizes([1, 2, 3]).tick_sizes == (1, 2, 3)
        assert small_plot.set_tick_text_anchors(["middle", "start", "end"]).tick_text_anchors == (
            "middle",
            "start",
            "end",
        )

    def test_string_counts_as_scalar(self, small_plot):
        assert small_plot.set_tick_text_anchors("middle").tick_text_anchors == ("middle",) * 3
        assert small_plot.set_labels("X").labels == ("X", "X", "X")

    def test_labels_stringified(self, small_plot):
        assert small_plot.set_labels([1, 2, 3]).labels == ("1", "2", "3")

    def test_wrong_arity(self, small_plot):
        with pytest.raises(ValueError):
            small_plot.set_tick_angles([0, 60])

    def test_unknown_anchor(self, small_plot):
        with pytest.raises(ValueError):
            small_plot.set_tick_text_anchors("left")
        assert small_plot.tick_text_anchors == ("start", "end", "end")
