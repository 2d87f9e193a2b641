## polygon containment and helpers for geokernel
## Copyright (c) 2026 the geokernel authors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
# 
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
# 
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Polygon helpers and point-in-polygon testing.

A polygon is any ordered sequence of ``Vertex`` (or ``Vector``)
objects.  It is implicitly closed: edge ``i`` runs from item ``i`` to
item ``(i+1) % n``.  Polygon *edge parameters* address the boundary by
edge index plus fraction, so ``2.5`` is the midpoint of edge 2.

Containment uses the even-odd rule with a half-line cast in +X.  An
edge counts as crossed when exactly one of its endpoints lies strictly
above the ray, i.e. each edge is treated as half-open in Y (the lower
endpoint is included, the upper one excluded).  The same rule applies
to every edge regardless of its direction, so a ray through a shared
vertex is counted once and a ray along a horizontal edge not at all.
Points within ``tol.distance`` of an edge are reported as on the
boundary.
"""

from __future__ import annotations

import enum
import math
from typing import Iterator, List, Sequence, Tuple, TypeVar

from geokernel.config import DEFAULT_TOLERANCE, Tolerance
from geokernel.primitives import Vector, Vertex, asPosition

__all__ = [
    "Containment",
    "polygonEdges",
    "xRayCrossingXY",
    "pointInPolygonXY",
    "polygonContainmentXY",
    "segmentDistanceXY",
    "polygonEdgePointAt",
    "allBetween",
    "averagePoint",
    "signedAreaXY",
    "cleanTinyEdges",
]

T = TypeVar("T")


class Containment(enum.Enum):
    OUTSIDE = 0
    INSIDE = 1
    BOUNDARY = 2


def polygonEdges(polygon: Sequence["Vertex | Vector"]) -> Iterator[Tuple[int, Vector, Vector]]:
    """yield ``(i, start, end)`` for every edge of ``polygon``"""
    n = len(polygon)
    for i in range(n):
        yield i, asPosition(polygon[i]), asPosition(polygon[(i + 1) % n])


def segmentDistanceXY(point: Vector, segStart: Vector, segEnd: Vector) -> float:
    """XY distance from ``point`` to the segment ``segStart``-``segEnd``"""
    dx = segEnd.x - segStart.x
    dy = segEnd.y - segStart.y
    lsq = dx * dx + dy * dy
    if lsq == 0.0:
        return point.xyDistanceTo(segStart)
    u = ((point.x - segStart.x) * dx + (point.y - segStart.y) * dy) / lsq
    u = min(max(u, 0.0), 1.0)
    return math.hypot(segStart.x + u * dx - point.x, segStart.y + u * dy - point.y)


def xRayCrossingXY(point: Vector, segStart: Vector, segEnd: Vector,
                   tol: Tolerance = DEFAULT_TOLERANCE) -> Tuple[bool, bool]:
    """Does the half-line from ``point`` in +X cross the segment?

    Returns ``(crosses, onBoundary)``.
    """
    onBoundary = segmentDistanceXY(point, segStart, segEnd) <= tol.distance
    if (segStart.y > point.y) == (segEnd.y > point.y):
        return False, onBoundary
    x = segStart.x + (point.y - segStart.y) * (segEnd.x - segStart.x) / (segEnd.y - segStart.y)
    return x >= point.x, onBoundary


def pointInPolygonXY(polygon: Sequence["Vertex | Vector"], point: Vector,
                     tol: Tolerance = DEFAULT_TOLERANCE) -> Containment:
    """Classify ``point`` against ``polygon`` in the XY plane."""
    if len(polygon) < 3:
        return Containment.OUTSIDE
    inside = False
    for _, p0, p1 in polygonEdges(polygon):
        crosses, onBoundary = xRayCrossingXY(point, p0, p1, tol)
        if onBoundary:
            return Containment.BOUNDARY
        if crosses:
            inside = not inside
    return Containment.INSIDE if inside else Containment.OUTSIDE


def polygonContainmentXY(polygon: Sequence["Vertex | Vector"], point: Vector,
                         tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
    """True if ``point`` is inside or on the boundary of ``polygon``."""
    return pointInPolygonXY(polygon, point, tol) is not Containment.OUTSIDE


def polygonEdgePointAt(polygon: Sequence["Vertex | Vector"], t: float) -> Vector:
    """point on the polygon boundary at edge parameter ``t`` (wrapping)"""
    n = len(polygon)
    i = math.floor(t)
    frac = t - i
    p0 = asPosition(polygon[i % n])
    p1 = asPosition(polygon[(i + 1) % n])
    return p0.interpolate(p1, frac)


def allBetween(items: Sequence[T], start: float, end: float, tol: float = 0.0) -> List[T]:
    """Items whose index lies strictly between the edge parameters
    ``start`` and ``end``, walking forward and wrapping past the last
    item.  ``end <= start`` walks all the way round."""
    n = len(items)
    if n == 0:
        return []
    if end <= start:
        end += n
    result = []
    k = math.floor(start + tol) + 1
    while k < end - tol:
        result.append(items[k % n])
        k += 1
    return result


def averagePoint(polygon: Sequence["Vertex | Vector"]) -> Vector:
    return Vector.average(asPosition(p) for p in polygon)


def signedAreaXY(polygon: Sequence["Vertex | Vector"]) -> float:
    """shoelace area; positive for anticlockwise polygons"""
    area = 0.0
    for _, p0, p1 in polygonEdges(polygon):
        area += p0.x * p1.y - p1.x * p0.y
    return 0.5 * area


def cleanTinyEdges(polygon: Sequence[T], tol: Tolerance = DEFAULT_TOLERANCE) -> List[T]:
    """Drop items closer than ``tol.distance`` to the previous kept one,
    including the wrap from the last item back to the first."""
    result: List[T] = []
    for item in polygon:
        if result and asPosition(item).distanceTo(asPosition(result[-1])) <= tol.distance:
            continue
        result.append(item)
    while len(result) > 1 and asPosition(result[-1]).distanceTo(asPosition(result[0])) <= tol.distance:
        result.pop()
    return result
