## curve and polygon clipping for geokernel
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

"""Clipping curves and polygons against polygons in the XY plane.

curve in polygon
================

``curveDomainInPolygonXY`` finds the parts of a curve's parameter
domain that lie inside a polygon, and ``curveInPolygonXY`` cuts those
parts out as curves.  The crossings of the curve with each polygon edge
are collected and sorted; starting from whether the curve's start
point is inside, alternate spans between crossings are inside.

Where the curve passes through a polygon corner both edges meeting
there report the same curve parameter.  The pair is one crossing when
the two edges leave the corner on opposite sides of the curve, and no
crossing at all when they are on the same side (the curve only touches
the corner).

polygon overlap
===============

``polygonOverlapXY`` computes the intersection of two simple polygons
in the manner of Weiler-Atherton / Greiner-Hormann.  Every crossing of
an edge of A with an edge of B is classified as *entry* (A goes into B
there) or *exit*.  The overlap loops are then traced by a small state
machine: from an entry follow A to the next crossing along A, from an
exit follow B to the next crossing along B, until the loop closes.
Each crossing is visited once and the walk is bounded by the number of
crossings, so degenerate input cannot make it spin.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from geokernel.config import DEFAULT_TOLERANCE, Tolerance
from geokernel.curves import Arc, Curve, Line, PolyCurve, PolyLine
from geokernel.errors import UnsupportedOperationError
from geokernel.intersect import lineArcXY, lineLineXY
from geokernel.polygon import (
    Containment,
    allBetween,
    averagePoint,
    pointInPolygonXY,
    polygonContainmentXY,
    polygonEdgePointAt,
    polygonEdges,
    signedAreaXY,
)
from geokernel.primitives import Interval, Vector, Vertex

logger = logging.getLogger(__name__)

__all__ = [
    "lineDomainInPolygonXY",
    "arcDomainInPolygonXY",
    "polyLineDomainInPolygonXY",
    "polyCurveDomainInPolygonXY",
    "curveDomainInPolygonXY",
    "lineInPolygonXY",
    "arcInPolygonXY",
    "curveInPolygonXY",
    "polygonOverlapXY",
]

Polygon = Sequence["Vertex | Vector"]


## crossings of a simple curve with a polygon boundary

def _sign(x: float) -> int:
    return (x > 0.0) - (x < 0.0)


def _cornerSide(pt: Vector, tangent: Vector, edgeStart: Vector, edgeEnd: Vector,
                tEdge: float, tol: Tolerance) -> Optional[int]:
    """Side of the curve on which an edge that ends (or starts) at the
    crossing lies; ``None`` if the crossing is mid-edge."""
    if tEdge <= tol.distance:
        other = edgeEnd
    elif tEdge >= 1.0 - tol.distance:
        other = edgeStart
    else:
        return None
    return _sign(tangent.crossZ(other - pt))


def _mergeCrossings(found: List[Tuple[float, Optional[int]]], tol: Tolerance) -> List[float]:
    """Collapse crossings that share a curve parameter."""
    found.sort(key=lambda c: c[0])
    groups: List[List[Tuple[float, Optional[int]]]] = []
    for c in found:
        if groups and abs(c[0] - groups[-1][0][0]) <= tol.distance:
            groups[-1].append(c)
        else:
            groups.append([c])

    result = []
    for group in groups:
        sides = [s for _, s in group if s]
        if len(group) == 2 and len(sides) == 2 and sides[0] == sides[1]:
            # curve grazes a corner
            continue
        result.append(min(max(group[0][0], 0.0), 1.0))
    return result


def _lineCrossings(line: Line, polygon: Polygon, tol: Tolerance) -> List[float]:
    origin = line.startPoint
    direction = line.direction
    found = []
    for _, p0, p1 in polygonEdges(polygon):
        edge = p1 - p0
        if edge.isZero(tol.distance):
            continue
        pt, tLine, tEdge = lineLineXY(origin, direction, p0, edge, params=True, tol=tol)
        if not pt.isValid():
            continue
        if not (Interval.UNIT.contains(tLine, tol.distance) and Interval.UNIT.contains(tEdge, tol.distance)):
            continue
        found.append((tLine, _cornerSide(pt, direction, p0, p1, tEdge, tol)))
    return _mergeCrossings(found, tol)


def _arcCrossings(arc: Arc, polygon: Polygon, tol: Tolerance) -> List[float]:
    found = []
    for _, p0, p1 in polygonEdges(polygon):
        edge = p1 - p0
        lsq = edge.magnitudeSquared()
        if lsq <= tol.distance * tol.distance:
            continue
        for pt in lineArcXY(p0, edge, arc, Interval.UNIT, Interval.UNIT, tol):
            tEdge = (pt - p0).dot(edge) / lsq
            radial = pt - arc.center
            tangent = radial.perpendicularXY() * (1.0 if arc.sweep > 0 else -1.0)
            found.append((arc.closestParameter(pt), _cornerSide(pt, tangent, p0, p1, tEdge, tol)))
    return _mergeCrossings(found, tol)


def _insideSpans(curve: Curve, crossings: List[float], polygon: Polygon,
                 tol: Tolerance) -> List[Tuple[float, float]]:
    """Alternate inside/outside spans between sorted crossing parameters."""

    startInside = polygonContainmentXY(polygon, curve.startPoint, tol)
    if not crossings:
        return [(0.0, 1.0)] if startInside else []

    j = 0
    spans = []
    if startInside:
        if crossings[0] > tol.distance:
            spans.append((0.0, crossings[0]))
            j = 1
        else:
            # starting on the boundary, see which way the curve goes
            nxt = crossings[1] if len(crossings) > 1 else 1.0
            if not polygonContainmentXY(polygon, curve.pointAt(0.5 * (crossings[0] + nxt)), tol):
                j = 1
    while j < len(crossings):
        t0 = crossings[j]
        t1 = crossings[j + 1] if j + 1 < len(crossings) else 1.0
        spans.append((t0, t1))
        j += 2
    return [(t0, t1) for t0, t1 in spans if t1 - t0 > tol.distance]


def _joinIntervals(intervals: List[Interval], tol: Tolerance) -> List[Interval]:
    result: List[Interval] = []
    for iv in sorted(intervals, key=lambda i: i.start):
        if result and iv.start <= result[-1].end + tol.distance:
            last = result.pop()
            iv = Interval(last.start, max(last.end, iv.end))
        result.append(iv)
    return result


## domains

def lineDomainInPolygonXY(line: Line, polygon: Polygon, domain: Interval = Interval.UNIT,
                          tol: Tolerance = DEFAULT_TOLERANCE) -> List[Interval]:
    """Sub-domains of ``line`` inside ``polygon``, mapped into ``domain``."""
    spans = _insideSpans(line, _lineCrossings(line, polygon, tol), polygon, tol)
    return [domain.window(Interval(t0, t1)) for t0, t1 in spans]


def arcDomainInPolygonXY(arc: Arc, polygon: Polygon, domain: Interval = Interval.UNIT,
                         tol: Tolerance = DEFAULT_TOLERANCE) -> List[Interval]:
    """Sub-domains of ``arc`` inside ``polygon``, mapped into ``domain``."""
    spans = _insideSpans(arc, _arcCrossings(arc, polygon, tol), polygon, tol)
    return [domain.window(Interval(t0, t1)) for t0, t1 in spans]


def polyLineDomainInPolygonXY(pline: PolyLine, polygon: Polygon, domain: Interval = Interval.UNIT,
                              tol: Tolerance = DEFAULT_TOLERANCE) -> List[Interval]:
    result = []
    for seg, window in pline.domains:
        result.extend(lineDomainInPolygonXY(seg, polygon, domain.window(window), tol))
    return _joinIntervals(result, tol)


def polyCurveDomainInPolygonXY(pcurve: PolyCurve, polygon: Polygon, domain: Interval = Interval.UNIT,
                               tol: Tolerance = DEFAULT_TOLERANCE) -> List[Interval]:
    result = []
    for crv, window in pcurve.domains:
        result.extend(curveDomainInPolygonXY(crv, polygon, domain.window(window), tol))
    return _joinIntervals(result, tol)


def curveDomainInPolygonXY(curve: Curve, polygon: Polygon, domain: Interval = Interval.UNIT,
                           tol: Tolerance = DEFAULT_TOLERANCE) -> List[Interval]:
    """The parts of the parameter domain of ``curve`` lying inside
    ``polygon``, as increasing intervals remapped into ``domain``.
    Touching intervals are joined."""

    if isinstance(curve, Line):
        return lineDomainInPolygonXY(curve, polygon, domain, tol)
    if isinstance(curve, Arc):
        return arcDomainInPolygonXY(curve, polygon, domain, tol)
    if isinstance(curve, PolyLine):
        return polyLineDomainInPolygonXY(curve, polygon, domain, tol)
    if isinstance(curve, PolyCurve):
        return polyCurveDomainInPolygonXY(curve, polygon, domain, tol)
    raise UnsupportedOperationError("curveDomainInPolygonXY", curve)


## segments

def curveInPolygonXY(curve: Curve, polygon: Polygon,
                     tol: Tolerance = DEFAULT_TOLERANCE) -> List[Curve]:
    """The pieces of ``curve`` inside ``polygon``, each of the same
    variant as ``curve``."""
    return [curve.extract(iv) for iv in curveDomainInPolygonXY(curve, polygon, Interval.UNIT, tol)]


def lineInPolygonXY(line: Line, polygon: Polygon, tol: Tolerance = DEFAULT_TOLERANCE) -> List[Line]:
    return [line.extract(iv) for iv in lineDomainInPolygonXY(line, polygon, Interval.UNIT, tol)]


def arcInPolygonXY(arc: Arc, polygon: Polygon, tol: Tolerance = DEFAULT_TOLERANCE) -> List[Arc]:
    return [arc.extract(iv) for iv in arcDomainInPolygonXY(arc, polygon, Interval.UNIT, tol)]


## polygon overlap

@dataclass(eq=False)
class _Crossing:
    vertex: Vertex
    at: float
    bt: float
    entry: bool


def _snapEdgeParameter(i: int, t: float, n: int, tol: Tolerance) -> float:
    if t <= tol.distance:
        return float(i)
    if t >= 1.0 - tol.distance:
        return float((i + 1) % n)
    return i + t


def _sameEdgeParameter(p: float, q: float, n: int, tol: Tolerance) -> bool:
    d = abs(p - q) % n
    return min(d, n - d) <= tol.distance


def _asVertices(polygon: Polygon) -> List[Vertex]:
    return [v if isinstance(v, Vertex) else Vertex(v) for v in polygon]


def _collectCrossings(a: List[Vertex], b: List[Vertex], pool: Optional[List[Vertex]],
                      tol: Tolerance) -> List[_Crossing]:
    nA, nB = len(a), len(b)
    crossings: List[_Crossing] = []
    for i, a0, a1 in polygonEdges(a):
        va = a1 - a0
        if va.isZero(tol.distance):
            continue
        for j, b0, b1 in polygonEdges(b):
            vb = b1 - b0
            if vb.isZero(tol.distance):
                continue
            pt, t0, t1 = lineLineXY(a0, va, b0, vb, params=True, tol=tol)
            if not pt.isValid():
                continue
            if not (Interval.UNIT.contains(t0, tol.distance) and Interval.UNIT.contains(t1, tol.distance)):
                continue
            at = _snapEdgeParameter(i, t0, nA, tol)
            bt = _snapEdgeParameter(j, t1, nB, tol)
            if any(_sameEdgeParameter(c.at, at, nA, tol) or _sameEdgeParameter(c.bt, bt, nB, tol)
                   for c in crossings):
                continue

            before = polygonContainmentXY(b, polygonEdgePointAt(a, at - tol.nudge), tol)
            entry = polygonContainmentXY(b, polygonEdgePointAt(a, at + tol.nudge), tol)
            if before == entry:
                # boundaries touch here without crossing
                continue

            corners = (a[i], a[(i + 1) % nA], b[j], b[(j + 1) % nB])
            vertex = next((v for v in corners if v.position.equals(pt, tol.distance)), None)
            if vertex is None:
                vertex = Vertex(pt)
                if pool is not None:
                    pool.append(vertex)

            crossings.append(_Crossing(vertex, at, bt, entry))
    return crossings


class _OverlapWalk:
    """Traces overlap loops through a set of classified crossings."""

    def __init__(self, a: List[Vertex], b: List[Vertex], crossings: List[_Crossing], tol: Tolerance):
        self.a = a
        self.b = b
        self.tol = tol
        self.crossings = crossings
        self.byA = sorted(crossings, key=lambda c: c.at)
        self.byB = sorted(crossings, key=lambda c: c.bt)
        self.visited: Set[int] = set()

    @staticmethod
    def _following(order: List[_Crossing], crossing: _Crossing) -> _Crossing:
        i = next(k for k, c in enumerate(order) if c is crossing)
        return order[(i + 1) % len(order)]

    def _append(self, loop: List[Vertex], vertex: Vertex) -> None:
        if loop and (loop[-1] is vertex or loop[-1].position.equals(vertex.position, self.tol.distance)):
            return
        loop.append(vertex)

    def _step(self, current: _Crossing) -> Tuple[_Crossing, List[Vertex]]:
        if current.entry:
            nxt = self._following(self.byA, current)
            return nxt, allBetween(self.a, current.at, nxt.at, self.tol.distance)
        nxt = self._following(self.byB, current)
        return nxt, allBetween(self.b, current.bt, nxt.bt, self.tol.distance)

    def trace(self, start: _Crossing) -> List[Vertex]:
        loop: List[Vertex] = [start.vertex]
        self.visited.add(id(start))
        current = start
        for _ in range(len(self.crossings)):
            nxt, between = self._step(current)
            for v in between:
                self._append(loop, v)
            if nxt is start:
                break
            if id(nxt) in self.visited:
                logger.warning("overlap walk re-entered a visited crossing; loop abandoned")
                return []
            self._append(loop, nxt.vertex)
            self.visited.add(id(nxt))
            current = nxt
        else:
            logger.warning("overlap walk stopped after %d steps without closing", len(self.crossings))
            return []
        if len(loop) > 1 and loop[-1].position.equals(loop[0].position, self.tol.distance):
            loop.pop()
        return loop

    def loops(self) -> List[List[Vertex]]:
        result = []
        for start in self.byA:
            if id(start) in self.visited:
                continue
            loop = self.trace(start)
            if len(loop) >= 3:
                result.append(loop)
        return result


def _containedIn(outer: List[Vertex], inner: List[Vertex], tol: Tolerance) -> bool:
    first = inner[0].position
    where = pointInPolygonXY(outer, first, tol)
    if where is Containment.BOUNDARY:
        # corner on the boundary: step towards the middle of inner
        inward = first.interpolate(averagePoint(inner), tol.nudge)
        return polygonContainmentXY(outer, inward, tol)
    return where is Containment.INSIDE


def polygonOverlapXY(polygonA: Polygon, polygonB: Polygon,
                     vertexPool: Optional[List[Vertex]] = None,
                     tol: Tolerance = DEFAULT_TOLERANCE) -> List[List[Vertex]]:
    """The region common to two simple polygons, as a list of polygons.

    Crossing points that coincide with a corner of either polygon reuse
    that corner's ``Vertex``; new crossing vertices are appended to
    ``vertexPool`` if one is given.  If the boundaries do not cross, the
    result is whichever polygon lies inside the other, or nothing if
    they are disjoint.  The input sequences are not modified.
    """

    a = _asVertices(polygonA)
    b = _asVertices(polygonB)
    if len(a) < 3 or len(b) < 3:
        return []
    if signedAreaXY(a) * signedAreaXY(b) < 0.0:
        # walk B in the same winding as A
        b = b[::-1]

    crossings = _collectCrossings(a, b, vertexPool, tol)
    if not crossings:
        if _containedIn(b, a, tol):
            return [a]
        if _containedIn(a, b, tol):
            return [b]
        return []

    return _OverlapWalk(a, b, crossings, tol).loops()
