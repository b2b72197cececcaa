"""Per-axis state of a ternary plot.

Axes live in a fixed (A, B, C) tuple. The conjugate of an axis, whose
gridline holds the far end of each of its grid lines, is found by index
rather than stored as a back-reference.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from ternaryplot.engine.scale import LinearScale
from ternaryplot.utils.geometry import LineBetween, Triple

T = TypeVar("T")


@dataclass
class Axis:
    label: str
    label_angle: float
    label_offset: float
    tick_angle: float
    tick_size: float
    tick_text_anchor: str
    grid_line: LineBetween
    scale: LinearScale = field(default_factory=LinearScale)


def next_index(i: int) -> int:
    return (i + 1) % 3


def conjugate_index(i: int, reverse: bool = False) -> int:
    """Next axis in the rotation; reversal runs the rotation the other way."""
    return (i - 1) % 3 if reverse else next_index(i)


def grid_line_functions(vertices: Triple, reverse: bool = False) -> tuple[LineBetween, LineBetween, LineBetween]:
    """Gridline of each axis over the scaled viewport vertices (A, B, C).

    Normally axis X runs along the edge from the previous vertex to X
    (A: C→A, B: A→B, C: B→C), ending at X. Reversed plots keep every axis on
    the same screen edge but run it the other way (A: A→C, B: B→A, C: C→B),
    matching the clockwise relabelling of the data vertices.
    """
    v_a, v_b, v_c = vertices
    if reverse:
        return (LineBetween(v_a, v_c), LineBetween(v_b, v_a), LineBetween(v_c, v_b))
    return (LineBetween(v_c, v_a), LineBetween(v_a, v_b), LineBetween(v_b, v_c))


def broadcast(value: Any, cast: Callable[[Any], T]) -> tuple[T, T, T]:
    """One value for every axis, or one per axis in order (A, B, C).

    Strings count as a single value.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        item = cast(value)
        return (item, item, item)
    items = tuple(cast(v) for v in value)
    if len(items) != 3:
        raise ValueError(f"Expected one value or three (A, B, C), got {len(items)}")
    return items  # type: ignore[return-value]
