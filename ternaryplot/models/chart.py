"""Declarative chart input and the assembled layout handed to a renderer."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from ternaryplot.engine.transform import validate_domains
from ternaryplot.models.geometry import AxisLabel, Tick

FULL_DOMAINS = ((0.0, 1.0), (0.0, 1.0), (0.0, 1.0))


class Series(BaseModel):
    data: list[tuple[float, float, float]] = Field(..., description="Ternary records in label order")
    color: str = Field(default="black", description="Passed through to the renderer untouched")


class ChartConfig(BaseModel):
    series: list[Series] = Field(default_factory=list)
    labels: tuple[str, str, str] = ("A", "B", "C")
    domains: tuple[tuple[float, float], tuple[float, float], tuple[float, float]] = FULL_DOMAINS
    ticks: int = Field(default=10, ge=1, description="Tick and grid count per axis")
    radius: float = Field(default=100.0, gt=0)
    label_offset: float = Field(default=100.0, description="Label distance beyond the vertex, px")
    center_labels: bool = True

    @field_validator("domains")
    @classmethod
    def _equal_length_domains(cls, value):
        return validate_domains(value)


class PlotPoint(BaseModel):
    position: tuple[float, float]
    color: str


class ChartLayout(BaseModel):
    outline: str = Field(..., description="SVG path of the viewport triangle, also the clip path")
    grid_paths: list[str] = Field(default_factory=list, description="One joined path per axis (A, B, C)")
    ticks: list[list[Tick]] = Field(default_factory=list)
    axis_labels: list[AxisLabel] = Field(default_factory=list)
    points: list[PlotPoint] = Field(default_factory=list)
