"""Separating axis test for convex polygons."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence

from .vec2 import Vec2

Interval = tuple[float, float]


def is_overlap(a: Interval, b: Interval) -> bool:
    """Return whether two (low, high) intervals overlap strictly."""
    return a[1] > b[0] and b[1] > a[0]


def project(vertices: Iterable[Vec2], axis: Vec2) -> Interval:
    """Project vertices onto an axis and return the (low, high) interval."""
    low, high = math.inf, -math.inf
    for vertex in vertices:
        projection = vertex.dot(axis)
        if projection < low:
            low = projection
        if projection > high:
            high = projection
    return low, high


def _edge_normals(polygon: Sequence[Vec2]) -> Iterator[Vec2]:
    for start, end in zip(polygon, [*polygon[1:], *polygon[:1]]):
        yield (end - start).perpendicular().normalized()


def intersect(first: Iterable[Vec2], second: Iterable[Vec2]) -> Vec2 | None:
    """Test two convex polygons for intersection.

    Returns None when the polygons are separated, otherwise the axis of
    least penetration scaled by its depth.
    """
    first = list(first)
    second = list(second)
    axes = [*_edge_normals(first), *_edge_normals(second)]

    minimal = Vec2(0.0, 0.0)
    minimal_depth = math.inf
    for axis in axes:
        a = project(first, axis)
        b = project(second, axis)
        if not is_overlap(a, b):
            return None
        depth = max(b[0], a[1]) - min(b[1], a[0])
        if depth < minimal_depth:
            minimal_depth = depth
            minimal = axis * minimal_depth
    return minimal