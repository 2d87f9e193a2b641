## pairwise intersection kernel for geokernel
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

"""Intersection of lines, circles, arcs and composite curves in the XY
plane.

conventions
===========

Lines are given either as ``Line`` objects or as an origin point plus a
direction vector, in which case the line parameter ``t`` places the
point ``origin + t*direction``.  For a ``Line`` the direction is
``end - start``, so the segment itself spans ``t`` in [0, 1].

Bounds are ``Interval`` objects over a parameter; ``Interval.UNSET``
means "unbounded".  Parameters within ``tol.distance`` of a bound are
accepted.

No routine raises for degenerate geometry.  Parallel lines give
``Vector.UNSET`` (and ``nan`` parameters), circles that miss give an
empty list.  Asking the generic dispatchers about a curve variant they
have no solver for raises ``UnsupportedOperationError``.

Z coordinates are carried through from the first argument but never
examined.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Tuple, Union

import mpmath as mpm

from geokernel.config import DEFAULT_TOLERANCE, Tolerance
from geokernel.curves import Arc, Circle, Curve, Line, PolyCurve, PolyLine, SimpleCurve, simpleCurveDomains
from geokernel.errors import UnsupportedOperationError
from geokernel.primitives import Angle, Interval, Vector

logger = logging.getLogger(__name__)

__all__ = [
    "lineLineXY",
    "intersectLinesXY",
    "lineCircleXY",
    "intersectLineCircleXY",
    "lineArcXY",
    "intersectLineArcXY",
    "circleCircleXY",
    "arcArcXY",
    "curveLineXY",
    "curveCurveXY",
    "selfIntersectionsXY",
    "rayLineSegmentXY",
    "lineSegmentsXY",
    "offsetExtensionDistance",
]

LineLineResult = Union[Vector, Tuple[Vector, float, float]]


def _inBounds(t: float, bounds: Interval, tol: Tolerance) -> bool:
    if not bounds.isValid():
        return True
    return bounds.contains(t, tol.distance)


## line-line

def lineLineXY(pt0: Vector, v0: Vector, pt1: Vector, v1: Vector,
               params: bool = False, tol: Tolerance = DEFAULT_TOLERANCE) -> LineLineResult:
    """Intersection of two infinite lines in the XY plane.

    Each line is an origin and a direction.  Returns the point of
    intersection, or ``Vector.UNSET`` if the lines are parallel,
    coincident or degenerate.  With ``params=True`` returns
    ``(point, t0, t1)`` where ``t0`` and ``t1`` are the parameters of the
    point on each line (``nan`` when there is no intersection).

    The solution is by slope-intercept elimination.  A direction whose
    X component is within ``tol.parallel`` of zero has no usable slope,
    so the solving branch is picked by which line (if either) is
    vertical.
    """

    vert0 = abs(v0.x) <= tol.parallel
    vert1 = abs(v1.x) <= tol.parallel

    if vert0 and vert1:
        # parallel verticals, or a zero-length direction
        return _noIntersection(params)
    if vert0:
        if abs(v0.y) <= tol.parallel:
            return _noIntersection(params)
        m1 = v1.y / v1.x
        c1 = pt1.y - m1 * pt1.x
        x = pt0.x
        y = m1 * x + c1
        t0 = (y - pt0.y) / v0.y
        t1 = (x - pt1.x) / v1.x
    elif vert1:
        if abs(v1.y) <= tol.parallel:
            return _noIntersection(params)
        m0 = v0.y / v0.x
        c0 = pt0.y - m0 * pt0.x
        x = pt1.x
        y = m0 * x + c0
        t0 = (x - pt0.x) / v0.x
        t1 = (y - pt1.y) / v1.y
    else:
        m0 = v0.y / v0.x
        m1 = v1.y / v1.x
        if abs(m0 - m1) <= tol.tiny:
            return _noIntersection(params)
        c0 = pt0.y - m0 * pt0.x
        c1 = pt1.y - m1 * pt1.x
        x = (c1 - c0) / (m0 - m1)
        y = m0 * x + c0
        t0 = (x - pt0.x) / v0.x
        t1 = (x - pt1.x) / v1.x

    result = Vector(x, y, pt0.z)
    if params:
        return result, t0, t1
    return result


def _noIntersection(params: bool) -> LineLineResult:
    if params:
        return Vector.UNSET, math.nan, math.nan
    return Vector.UNSET


def intersectLinesXY(lineA: Line, lineB: Line,
                     boundsA: Interval = Interval.UNIT, boundsB: Interval = Interval.UNIT,
                     tol: Tolerance = DEFAULT_TOLERANCE) -> Vector:
    """Intersection of two ``Line`` objects, restricted to the parameter
    ranges ``boundsA`` and ``boundsB`` (the segments themselves by
    default).  Returns ``Vector.UNSET`` if there is none."""

    pt, t0, t1 = lineLineXY(lineA.startPoint, lineA.direction,
                            lineB.startPoint, lineB.direction, params=True, tol=tol)
    if not pt.isValid():
        return pt
    if not (_inBounds(t0, boundsA, tol) and _inBounds(t1, boundsB, tol)):
        return Vector.UNSET
    return pt


## line-circle

def lineCircleXY(origin: Vector, direction: Vector, center: Vector, radius: float,
                 tol: Tolerance = DEFAULT_TOLERANCE) -> List[float]:
    """Parameters along the line ``origin + t*direction`` at which it
    meets the circle, in increasing order.

    Zero, one (tangent) or two values.  The general branch solves a
    quadratic in x with mpmath at extended precision; the vertical
    branch (|direction.x| within ``tol.parallel`` of zero) solves for y
    directly.
    """

    ox, oy = origin.x, origin.y
    dx, dy = direction.x, direction.y
    cx, cy = center.x, center.y

    if abs(dx) <= tol.parallel:
        if abs(dy) <= tol.parallel:
            logger.debug("zero-length direction in lineCircleXY")
            return []
        ## vertical line x = ox
        offset = abs(cx - ox)
        if offset > radius + tol.distance:
            return []
        dY = cy - oy
        if abs(offset - radius) <= tol.distance:
            return [dY / dy]
        half = math.sqrt(radius * radius - offset * offset)
        return sorted([(dY - half) / dy, (dY + half) / dy])

    ## y = m*x + y0, substituted into (x-cx)^2 + (y-cy)^2 = r^2
    mpdx = mpm.mpf(dx)
    m = mpm.mpf(dy) / mpdx
    y0 = mpm.mpf(oy) - m * mpm.mpf(ox)
    mpcx = mpm.mpf(cx)
    mpcy = mpm.mpf(cy)
    mpr = mpm.mpf(radius)
    a = m * m + 1
    b = 2 * (m * y0 - m * mpcy - mpcx)
    c = mpcy * mpcy - mpr * mpr + mpcx * mpcx - 2 * y0 * mpcy + y0 * y0
    d = b * b - 4 * a * c

    mpepsilon = mpm.mpf(tol.distance)
    if mpm.fabs(d) < mpm.sqrt(a) * 2 * mpepsilon:
        xs = [-b / (2 * a)]
    elif d < 0:
        return []
    else:
        root = mpm.sqrt(d)
        xs = [(-b - root) / (2 * a), (-b + root) / (2 * a)]

    return sorted(float((x - mpm.mpf(ox)) / mpdx) for x in xs)


def intersectLineCircleXY(line: Line, circle: Circle, bounded: bool = True,
                          tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """Points where ``line`` meets ``circle``, in order along the line.
    With ``bounded`` only points on the segment itself are returned."""

    bounds = Interval.UNIT if bounded else Interval.UNSET
    ts = lineCircleXY(line.startPoint, line.direction, circle.center, circle.radius, tol)
    return [line.pointAt(t) for t in ts if _inBounds(t, bounds, tol)]


## line-arc

def _lineArcHits(origin: Vector, direction: Vector, arc: Arc,
                 lineBounds: Interval, arcBounds: Interval,
                 tol: Tolerance) -> List[Tuple[float, Vector]]:
    result = []
    for t in lineCircleXY(origin, direction, arc.center, arc.radius, tol):
        if not _inBounds(t, lineBounds, tol):
            continue
        pt = origin + direction * t
        if arc.isInAngleRange(pt, arcBounds, tol):
            result.append((t, pt))
    return result


def lineArcXY(origin: Vector, direction: Vector, arc: Arc,
              lineBounds: Interval = Interval.UNSET, arcBounds: Interval = Interval.UNIT,
              tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """Points where the line ``origin + t*direction`` meets ``arc``.

    Line-circle solutions are filtered to the line parameter range
    ``lineBounds`` (unbounded by default) and to the part of the arc
    within the arc parameter range ``arcBounds``.
    """
    return [pt for _, pt in _lineArcHits(origin, direction, arc, lineBounds, arcBounds, tol)]


def intersectLineArcXY(line: Line, arc: Arc,
                       lineBounds: Interval = Interval.UNIT, arcBounds: Interval = Interval.UNIT,
                       tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """``lineArcXY`` for a ``Line`` object, bounded to the segment by default"""
    return lineArcXY(line.startPoint, line.direction, arc, lineBounds, arcBounds, tol)


## circle-circle

def circleCircleXY(c0: Circle, c1: Circle, tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """Intersection points of two circles in the XY plane.

    Returns no points if the circles are separate, one inside the other,
    or concentric; one point where they touch (externally or
    internally, within ``tol.distance``); two points otherwise.  The
    points lie on the radical line, offset either side of the line of
    centres.
    """

    delta = (c1.center - c0.center).withZ(0.0)
    dist = delta.magnitude()
    r0, r1 = c0.radius, c1.radius

    if dist <= tol.distance:
        return []
    if dist > r0 + r1 + tol.distance or dist < abs(r0 - r1) - tol.distance:
        return []

    unit = delta / dist
    ## distance from c0 along the line of centres to the radical line
    a = (r0 * r0 - r1 * r1 + dist * dist) / (2.0 * dist)
    base = c0.center + unit * a

    if abs(dist - (r0 + r1)) <= tol.distance or abs(dist - abs(r0 - r1)) <= tol.distance:
        return [base]

    h = math.sqrt(max(r0 * r0 - a * a, 0.0))
    perp = unit.perpendicularXY()
    return [base + perp * h, base - perp * h]


def arcArcXY(arc0: Arc, arc1: Arc,
             firstArcBounds: Interval = Interval.UNIT, secondArcBounds: Interval = Interval.UNIT,
             tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """Circle-circle intersections lying within both arcs.

    ``firstArcBounds`` restricts the candidate parameter range on
    ``arc0``, ``secondArcBounds`` that on ``arc1``.
    """
    return [pt for pt in circleCircleXY(arc0.circle, arc1.circle, tol)
            if arc0.isInAngleRange(pt, firstArcBounds, tol)
            and arc1.isInAngleRange(pt, secondArcBounds, tol)]


## generic curve dispatch

def _curveLineHits(curve: Curve, lnPt: Vector, lnDir: Vector, lineBounds: Interval,
                   domain: Interval, tol: Tolerance) -> List[Tuple[float, float]]:
    if isinstance(curve, Line):
        pt, t0, t1 = lineLineXY(curve.startPoint, curve.direction, lnPt, lnDir, params=True, tol=tol)
        if pt.isValid() and Interval.UNIT.contains(t0, tol.distance) and _inBounds(t1, lineBounds, tol):
            return [(domain.valueAt(t0), t1)]
        return []
    if isinstance(curve, Arc):
        return [(domain.valueAt(curve.closestParameter(pt)), t)
                for t, pt in _lineArcHits(lnPt, lnDir, curve, lineBounds, Interval.UNIT, tol)]
    if isinstance(curve, (PolyLine, PolyCurve)):
        result = []
        for crv, window in curve.domains:
            result.extend(_curveLineHits(crv, lnPt, lnDir, lineBounds, domain.window(window), tol))
        return result
    raise UnsupportedOperationError("curveLineXY", curve)


def curveLineXY(curve: Curve, lnPt: Vector, lnDir: Vector,
                lineBounded: bool = False, lineParams: bool = False,
                tol: Tolerance = DEFAULT_TOLERANCE) -> Union[List[float], List[Tuple[float, float]]]:
    """Intersections of any curve with the line ``lnPt + t*lnDir``.

    Returns the sorted curve parameters of the crossings.  With
    ``lineParams=True`` returns ``(curveParameter, lineParameter)``
    pairs instead, sorted by curve parameter.  With ``lineBounded`` only
    crossings with line parameter in [0, 1] count.

    A crossing exactly at the join between two segments is found on
    both; it is reported once.
    """

    lineBounds = Interval.UNIT if lineBounded else Interval.UNSET
    hits = sorted(_curveLineHits(curve, lnPt, lnDir, lineBounds, Interval.UNIT, tol))
    unique: List[Tuple[float, float]] = []
    for hit in hits:
        if unique and abs(hit[0] - unique[-1][0]) <= tol.distance:
            continue
        unique.append(hit)
    if lineParams:
        return unique
    return [tc for tc, _ in unique]


def _simpleCurveXY(crv0: SimpleCurve, crv1: SimpleCurve, bounds0: Interval, bounds1: Interval,
                   tol: Tolerance) -> List[Vector]:
    if isinstance(crv0, Line):
        if isinstance(crv1, Line):
            pt = intersectLinesXY(crv0, crv1, bounds0, bounds1, tol)
            return [pt] if pt.isValid() else []
        if isinstance(crv1, Arc):
            return intersectLineArcXY(crv0, crv1, bounds0, bounds1, tol)
    elif isinstance(crv0, Arc):
        if isinstance(crv1, Line):
            return intersectLineArcXY(crv1, crv0, bounds1, bounds0, tol)
        if isinstance(crv1, Arc):
            return arcArcXY(crv0, crv1, bounds0, bounds1, tol)
    raise UnsupportedOperationError("curveCurveXY", crv0, crv1)


def curveCurveXY(crv0: SimpleCurve, crv1: SimpleCurve, endStartTolerance: float = 0.0,
                 tol: Tolerance = DEFAULT_TOLERANCE) -> List[Vector]:
    """Intersection points of two simple curves (Lines or Arcs).

    ``endStartTolerance`` excludes the last ``endStartTolerance`` of
    ``crv0``'s parameter range and the first of ``crv1``'s, so that the
    point where ``crv0`` ends and ``crv1`` begins is not reported.  Any
    pair other than Line/Arc combinations raises
    ``UnsupportedOperationError``.
    """
    bounds0 = Interval(0.0, 1.0 - endStartTolerance)
    bounds1 = Interval(endStartTolerance, 1.0)
    return _simpleCurveXY(crv0, crv1, bounds0, bounds1, tol)


def selfIntersectionsXY(curve: Curve, endStartTolerance: float = 1e-4, params: bool = False,
                        tol: Tolerance = DEFAULT_TOLERANCE) -> List[Any]:
    """Points where ``curve`` crosses itself.

    The curve is broken into Lines and Arcs and every pair is tested.
    Consecutive pieces ignore their shared join, and on a closed curve
    the last and first pieces ignore the closing join.  Whether the
    curve is closed is judged with ``tol``.

    With ``params=True`` each hit is a ``(point, t0, t1)`` tuple, where
    ``t0 < t1`` are the two parameters of ``curve`` that meet at
    ``point``.
    """

    pieces = simpleCurveDomains(curve)
    n = len(pieces)
    closed = curve.isClosed(tol)
    result: List[Any] = []
    seen: List[Vector] = []
    for i in range(n):
        for j in range(i + 1, n):
            lo0, hi0, lo1, hi1 = 0.0, 1.0, 0.0, 1.0
            if j == i + 1:
                hi0 -= endStartTolerance
                lo1 += endStartTolerance
            if closed and i == 0 and j == n - 1:
                lo0 += endStartTolerance
                hi1 -= endStartTolerance
            crv0, window0 = pieces[i]
            crv1, window1 = pieces[j]
            for pt in _simpleCurveXY(crv0, crv1, Interval(lo0, hi0), Interval(lo1, hi1), tol):
                if any(pt.equals(q, tol.distance) for q in seen):
                    continue
                seen.append(pt)
                if params:
                    result.append((pt, window0.valueAt(crv0.closestParameter(pt)),
                                   window1.valueAt(crv1.closestParameter(pt))))
                else:
                    result.append(pt)
    return result


## segment helpers

def rayLineSegmentXY(rayStart: Vector, rayDir: Vector, segStart: Vector, segEnd: Vector,
                     tol: Tolerance = DEFAULT_TOLERANCE) -> Vector:
    """Where the half-line from ``rayStart`` along ``rayDir`` crosses the
    segment, or ``Vector.UNSET``.  The segment is half-open: its start
    point counts, its end point does not."""

    pt, tRay, tSeg = lineLineXY(rayStart, rayDir, segStart, segEnd - segStart, params=True, tol=tol)
    if not pt.isValid():
        return pt
    if tRay < 0.0 or not (0.0 <= tSeg < 1.0):
        return Vector.UNSET
    return pt


def lineSegmentsXY(startA: Vector, endA: Vector, startB: Vector, endB: Vector,
                   tol: Tolerance = DEFAULT_TOLERANCE) -> Vector:
    """Crossing of two half-open segments, or ``Vector.UNSET``"""

    pt, tA, tB = lineLineXY(startA, endA - startA, startB, endB - startB, params=True, tol=tol)
    if not pt.isValid():
        return pt
    if not (0.0 <= tA < 1.0 and 0.0 <= tB < 1.0):
        return Vector.UNSET
    return pt


def offsetExtensionDistance(angle: "Angle | float", offsetA: float, offsetB: float,
                            tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """How far to extend a line offset sideways by ``offsetA`` so that it
    meets a second line, at ``angle`` to the first, offset by
    ``offsetB``.  ``nan`` if the lines are parallel."""

    theta = float(angle)
    s = math.sin(theta)
    if abs(s) <= tol.tiny:
        return math.nan
    return (offsetA * math.cos(theta) - offsetB) / s
