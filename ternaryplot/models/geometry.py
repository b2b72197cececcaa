"""Render data emitted by the plot engine."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

TextAnchor = Literal["start", "middle", "end"]

text_anchor_adapter = TypeAdapter(TextAnchor)


class Transform(BaseModel):
    """Scale k and translation (x, y), unscaled by the plot radius."""

    model_config = ConfigDict(frozen=True)

    k: float = 1.0
    x: float = 0.0
    y: float = 0.0


class Tick(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Formatted tick value")
    position: tuple[float, float] = Field(..., description="Pixel position on the axis edge")
    angle: float = 0.0
    size: float = 6.0
    text_anchor: TextAnchor = "start"


class AxisLabel(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: tuple[float, float]
    label: str
    angle: float = 0.0
