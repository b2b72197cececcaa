"""Exceptions raised by the ternary plot engine."""

from __future__ import annotations


class TernaryError(ValueError):
    """Base class for every error raised by ternaryplot."""


class DomainError(TernaryError):
    """Invalid domain configuration: unequal lengths, empty or out-of-range intervals."""


class DegenerateTriangleError(TernaryError):
    """Vertices are collinear or coincident, so barycentric math is undefined."""
