## curve variants for geokernel
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

"""Curve variants: ``Line``, ``Arc``, ``PolyLine`` and ``PolyCurve``.

The set of curve types is closed.  ``Curve`` is the union of the four
variants and every kernel operation dispatches over it explicitly,
raising :class:`~geokernel.errors.UnsupportedOperationError` for a
variant (or pair of variants) it does not handle.

parameterization
================

Every curve maps the parameter range [0, 1] onto its extent.  Lines
and arcs are linear in their parameter (by length and by angle
respectively).  PolyLines and PolyCurves are parameterized by *span*,
not by length: a PolyLine with ``n`` segments places vertex ``i`` at
``i/n``, and a PolyCurve gives each sub-curve a window of its domain
proportional to that sub-curve's ``segmentCount``.  The windows are
computed once and cached in ``domains``.

"""

from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import cached_property
from typing import List, Sequence, Tuple, Union

from geokernel.config import DEFAULT_TOLERANCE, Tolerance
from geokernel.errors import UnsupportedOperationError
from geokernel.primitives import Angle, Interval, Vector, Vertex, pi2

__all__ = [
    "Line",
    "Circle",
    "Arc",
    "PolyLine",
    "PolyCurve",
    "Curve",
    "SimpleCurve",
    "simpleCurves",
    "simpleCurveDomains",
]


def _asVertex(item: "Vertex | Vector") -> Vertex:
    if isinstance(item, Vertex):
        return item
    return Vertex(item)


@dataclass(eq=False)
class Line:
    """A straight segment between two vertices."""

    start: Vertex
    end: Vertex

    def __post_init__(self) -> None:
        self.start = _asVertex(self.start)
        self.end = _asVertex(self.end)

    @classmethod
    def fromCoordinates(cls, x0: float, y0: float, x1: float, y1: float) -> "Line":
        return cls(Vector(x0, y0), Vector(x1, y1))

    @property
    def startPoint(self) -> Vector:
        return self.start.position

    @property
    def endPoint(self) -> Vector:
        return self.end.position

    @property
    def direction(self) -> Vector:
        return self.end.position - self.start.position

    @property
    def vertices(self) -> Tuple[Vertex, Vertex]:
        return (self.start, self.end)

    @property
    def length(self) -> float:
        return self.direction.magnitude()

    @property
    def closed(self) -> bool:
        return False

    def isClosed(self, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
        return False

    @property
    def segmentCount(self) -> int:
        return 1

    def pointAt(self, t: float) -> Vector:
        return self.startPoint.interpolate(self.endPoint, t)

    def closestParameter(self, point: Vector) -> float:
        """Parameter of the projection of ``point`` onto the infinite
        line through this segment."""
        d = self.direction
        lsq = d.magnitudeSquared()
        if lsq == 0.0:
            return 0.0
        return (point - self.startPoint).dot(d) / lsq

    def parameterAt(self, span: int, t: float) -> float:
        return t

    def extract(self, domain: Interval) -> "Line":
        return Line(self.pointAt(domain.start), self.pointAt(domain.end))

    def reversed(self) -> "Line":
        return Line(self.end, self.start)


@dataclass(frozen=True)
class Circle:
    """A circle in a plane parallel to XY."""

    center: Vector
    radius: float

    def __post_init__(self) -> None:
        if self.radius < 0.0:
            raise ValueError(f"circle radius must be non-negative, got {self.radius}")

    def azimuth(self, point: Vector) -> Angle:
        """angle of ``point`` about the centre, measured from +X"""
        return Angle(math.atan2(point.y - self.center.y, point.x - self.center.x))

    def pointAtAngle(self, angle: "Angle | float") -> Vector:
        a = float(angle)
        return Vector(self.center.x + self.radius * math.cos(a),
                      self.center.y + self.radius * math.sin(a),
                      self.center.z)


@dataclass(frozen=True)
class Arc:
    """A circular arc: a ``Circle`` swept from ``startAngle`` through the
    signed angle ``sweep`` (radians, positive anticlockwise)."""

    circle: Circle
    startAngle: float
    sweep: float

    @classmethod
    def fromCenter(cls, center: Vector, radius: float, startAngle: float, sweep: float) -> "Arc":
        return cls(Circle(center, radius), startAngle, sweep)

    @classmethod
    def fullCircle(cls, circle: Circle, startAngle: float = 0.0) -> "Arc":
        return cls(circle, startAngle, pi2)

    @classmethod
    def fromThreePoints(cls, start: Vector, mid: Vector, end: Vector,
                        tol: Tolerance = DEFAULT_TOLERANCE) -> "Arc":
        """Arc through ``start``, ``mid`` and ``end`` in that order.

        Raises ``ValueError`` if the points are collinear.
        """
        ax, ay = start.x, start.y
        bx, by = mid.x, mid.y
        cx, cy = end.x, end.y
        d = 2.0 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if abs(d) <= tol.tiny:
            raise ValueError("cannot build an arc through collinear points")
        a2 = ax * ax + ay * ay
        b2 = bx * bx + by * by
        c2 = cx * cx + cy * cy
        ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
        uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
        center = Vector(ux, uy, start.z)
        circle = Circle(center, center.xyDistanceTo(start))
        a0 = circle.azimuth(start)
        # anticlockwise when mid is to the left of start->end
        ccw = (mid - start).crossZ(end - start) > 0.0
        sign = 1.0 if ccw else -1.0
        sweep = (circle.azimuth(end) - a0).toSign(sign).radians
        return cls(circle, a0.radians, sweep)

    @property
    def center(self) -> Vector:
        return self.circle.center

    @property
    def radius(self) -> float:
        return self.circle.radius

    @property
    def endAngle(self) -> float:
        return self.startAngle + self.sweep

    @property
    def startPoint(self) -> Vector:
        return self.circle.pointAtAngle(self.startAngle)

    @property
    def endPoint(self) -> Vector:
        return self.circle.pointAtAngle(self.endAngle)

    @property
    def length(self) -> float:
        return self.radius * abs(self.sweep)

    @property
    def closed(self) -> bool:
        return self.isClosed()

    def isClosed(self, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
        """True if the sweep is a full turn to within ``tol.tiny``."""
        return abs(self.sweep) >= pi2 - tol.tiny

    @property
    def segmentCount(self) -> int:
        return 1

    def pointAt(self, t: float) -> Vector:
        return self.circle.pointAtAngle(self.startAngle + t * self.sweep)

    def parameterAt(self, span: int, t: float) -> float:
        return t

    def angleFromStart(self, point: Vector) -> float:
        """Angle from the start of the arc to ``point``, measured in the
        sweep direction: [0, 2pi) for an anticlockwise arc, (-2pi, 0]
        for a clockwise one."""
        return (self.circle.azimuth(point) - self.startAngle).toSign(self.sweep).radians

    def isInAngleRange(self, point: Vector, bounds: Interval = Interval.UNIT,
                       tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
        """Does the azimuth of ``point`` fall within the swept range of the
        arc, restricted to the arc parameter range ``bounds``?"""
        if self.sweep == 0.0:
            return False
        angTol = tol.distance / self.radius if self.radius > 0.0 else 0.0
        d = self.angleFromStart(point)
        if abs(d) > abs(self.sweep) + angTol:
            # just short of the start, on the far side of the wrap
            if pi2 - abs(d) <= angTol:
                d = 0.0
            else:
                return False
        t = d / self.sweep
        return bounds.contains(t, angTol / abs(self.sweep))

    def closestParameter(self, point: Vector) -> float:
        """Parameter of the point on the arc nearest the azimuth of
        ``point``; outside the sweep this snaps to the nearer end."""
        if self.sweep == 0.0:
            return 0.0
        d = self.angleFromStart(point)
        if abs(d) <= abs(self.sweep):
            return d / self.sweep
        if abs(d) < abs(self.sweep) + (pi2 - abs(self.sweep)) / 2.0:
            return 1.0
        return 0.0

    def extract(self, domain: Interval) -> "Arc":
        return Arc(self.circle,
                   self.startAngle + domain.start * self.sweep,
                   (domain.end - domain.start) * self.sweep)


@dataclass(eq=False)
class PolyLine:
    """An ordered chain of vertices, optionally closed by a final
    segment from the last vertex back to the first."""

    vertices: List[Vertex]
    closed: bool = False

    def __post_init__(self) -> None:
        self.vertices = [_asVertex(v) for v in self.vertices]

    @classmethod
    def fromPoints(cls, points: Sequence[Vector], closed: bool = False) -> "PolyLine":
        return cls([Vertex(p) for p in points], closed)

    def isClosed(self, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
        return self.closed

    @property
    def segmentCount(self) -> int:
        n = len(self.vertices)
        if n < 2:
            return 0
        return n if self.closed else n - 1

    def segment(self, i: int) -> Line:
        n = len(self.vertices)
        return Line(self.vertices[i], self.vertices[(i + 1) % n])

    def segments(self) -> List[Line]:
        return [self.segment(i) for i in range(self.segmentCount)]

    @cached_property
    def domains(self) -> Tuple[Tuple[Line, Interval], ...]:
        """(segment, window) pairs, in order"""
        n = self.segmentCount
        return tuple((self.segment(i), Interval(i / n, (i + 1) / n)) for i in range(n))

    @property
    def startPoint(self) -> Vector:
        return self.vertices[0].position

    @property
    def endPoint(self) -> Vector:
        if self.closed:
            return self.vertices[0].position
        return self.vertices[-1].position

    @property
    def length(self) -> float:
        return sum(seg.length for seg in self.segments())

    def parameterAtVertexIndex(self, i: int) -> float:
        return i / self.segmentCount

    def parameterAt(self, span: int, t: float) -> float:
        return (span + t) / self.segmentCount

    def pointAt(self, t: float) -> Vector:
        n = self.segmentCount
        if n == 0:
            return self.startPoint if self.vertices else Vector.UNSET
        s = t * n
        i = min(max(int(math.floor(s)), 0), n - 1)
        return self.segment(i).pointAt(s - i)

    def closestParameter(self, point: Vector) -> float:
        best = math.inf
        result = 0.0
        for seg, window in self.domains:
            u = min(max(seg.closestParameter(point), 0.0), 1.0)
            d = seg.pointAt(u).distanceTo(point)
            if d < best:
                best = d
                result = window.valueAt(u)
        return result

    def extract(self, domain: Interval) -> "PolyLine":
        """The open polyline covering ``domain`` (increasing)."""
        n = self.segmentCount
        t0, t1 = domain.min, domain.max
        points = [self.pointAt(t0)]
        verts = self.vertices + [self.vertices[0]] if self.closed else self.vertices
        for i in range(n + 1):
            ti = i / n
            if t0 < ti < t1:
                points.append(verts[i].position)
        points.append(self.pointAt(t1))
        return PolyLine.fromPoints(points)


@dataclass(eq=False)
class PolyCurve:
    """An ordered chain of sub-curves forming one logical curve.

    The sub-curve sequence is frozen into a tuple on construction, since
    the cached ``domains`` depend on it.
    """

    subCurves: Sequence["Curve"] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.subCurves = tuple(self.subCurves)

    @classmethod
    def fromPoints(cls, points: Sequence[Vector], closed: bool = False) -> "PolyCurve":
        """A PolyCurve of Lines through ``points``; the lines share
        vertices at their joins."""
        verts = [Vertex(p) for p in points]
        if closed:
            verts.append(verts[0])
        return cls(Line(a, b) for a, b in zip(verts, verts[1:]))

    @cached_property
    def segmentCount(self) -> int:
        return sum(c.segmentCount for c in self.subCurves)

    @cached_property
    def domains(self) -> Tuple[Tuple["Curve", Interval], ...]:
        """(sub-curve, window) pairs, in order"""
        total = self.segmentCount
        result = []
        before = 0
        for crv in self.subCurves:
            n = crv.segmentCount
            if total:
                result.append((crv, Interval(before / total, (before + n) / total)))
            before += n
        return tuple(result)

    @cached_property
    def _windowStarts(self) -> List[float]:
        return [w.start for _, w in self.domains]

    def _locate(self, t: float) -> Tuple["Curve", Interval]:
        i = bisect_right(self._windowStarts, t) - 1
        i = min(max(i, 0), len(self.domains) - 1)
        return self.domains[i]

    @property
    def startPoint(self) -> Vector:
        return self.subCurves[0].startPoint

    @property
    def endPoint(self) -> Vector:
        return self.subCurves[-1].endPoint

    @property
    def closed(self) -> bool:
        return self.isClosed()

    def isClosed(self, tol: Tolerance = DEFAULT_TOLERANCE) -> bool:
        """True if the chain ends within ``tol.distance`` of where it starts."""
        if not self.subCurves:
            return False
        return self.startPoint.equals(self.endPoint, tol.distance)

    @property
    def length(self) -> float:
        return sum(c.length for c in self.subCurves)

    def pointAt(self, t: float) -> Vector:
        if not self.domains:
            return Vector.UNSET
        crv, window = self._locate(t)
        return crv.pointAt(window.parameterOf(t))

    def parameterAt(self, span: int, t: float) -> float:
        before = 0
        for crv, window in self.domains:
            n = crv.segmentCount
            if span < before + n:
                return window.valueAt(crv.parameterAt(span - before, t))
            before += n
        raise IndexError(f"span {span} out of range for {self.segmentCount} segments")

    def closestParameter(self, point: Vector) -> float:
        best = math.inf
        result = 0.0
        for crv, window in self.domains:
            u = crv.closestParameter(point)
            if isinstance(crv, Line):
                u = min(max(u, 0.0), 1.0)
            d = crv.pointAt(u).distanceTo(point)
            if d < best:
                best = d
                result = window.valueAt(u)
        return result

    def extract(self, domain: Interval) -> "PolyCurve":
        t0, t1 = domain.min, domain.max
        parts = []
        for crv, window in self.domains:
            if window.end <= t0 or window.start >= t1:
                continue
            lo = max(window.parameterOf(t0), 0.0)
            hi = min(window.parameterOf(t1), 1.0)
            if hi > lo:
                parts.append(crv.extract(Interval(lo, hi)))
        return PolyCurve(parts)


SimpleCurve = Union[Line, Arc]
Curve = Union[Line, Arc, PolyLine, PolyCurve]


def simpleCurveDomains(curve: Curve, domain: Interval = Interval.UNIT) -> List[Tuple[SimpleCurve, Interval]]:
    """Flatten ``curve`` into (Line or Arc, window) pairs, in order.

    Each window is the stretch of ``curve``'s parameter, mapped through
    ``domain``, that the piece covers, so ``window.valueAt(s)`` turns a
    piece parameter ``s`` back into a parameter of ``curve``.
    """
    if isinstance(curve, (Line, Arc)):
        return [(curve, domain)]
    if isinstance(curve, (PolyLine, PolyCurve)):
        result: List[Tuple[SimpleCurve, Interval]] = []
        for crv, window in curve.domains:
            result.extend(simpleCurveDomains(crv, domain.window(window)))
        return result
    raise UnsupportedOperationError("simpleCurveDomains", curve)


def simpleCurves(curve: Curve) -> List[SimpleCurve]:
    """Flatten ``curve`` into its Lines and Arcs, in order."""
    return [crv for crv, _ in simpleCurveDomains(curve)]
