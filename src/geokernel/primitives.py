## numeric primitives for geokernel
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

"""Numeric primitives: vectors, intervals, angles and vertices.

``Vector`` and ``Interval`` reserve an all-NaN "unset" value
(``Vector.UNSET``, ``Interval.UNSET``) that the kernel returns instead
of raising when a query has no answer.  Use ``isValid()`` before
consuming a result.

Vector equality is tolerance based: ``a == b`` compares within
``DEFAULT_TOLERANCE.distance``; ``a.equals(b, tol)`` takes an explicit
threshold.  Since tolerant equality is not transitive, vectors are not
hashable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterable

from geokernel.config import DEFAULT_TOLERANCE

__all__ = ["Vector", "Interval", "Angle", "Vertex", "asPosition", "pi2"]

pi2 = 2.0 * math.pi


@dataclass(frozen=True, eq=False)
class Vector:
    """An immutable (x, y, z) triple."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    UNSET: ClassVar["Vector"]
    ZERO: ClassVar["Vector"]

    def isValid(self) -> bool:
        return not (math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z))

    ## arithmetic

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector":
        return Vector(-self.x, -self.y, -self.z)

    def __mul__(self, s: float) -> "Vector":
        return Vector(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> "Vector":
        return Vector(self.x / s, self.y / s, self.z / s)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector") -> "Vector":
        return Vector(self.y * other.z - self.z * other.y,
                      self.z * other.x - self.x * other.z,
                      self.x * other.y - self.y * other.x)

    def crossZ(self, other: "Vector") -> float:
        """z component of the cross product, the signed XY area term"""
        return self.x * other.y - self.y * other.x

    def magnitudeSquared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def magnitude(self) -> float:
        return math.sqrt(self.magnitudeSquared())

    def unitize(self) -> "Vector":
        """Return the unit vector in this direction, or ``UNSET`` for a
        zero-length vector."""
        m = self.magnitude()
        if m == 0.0:
            return Vector.UNSET
        return self / m

    def distanceTo(self, other: "Vector") -> float:
        return (other - self).magnitude()

    def xyDistanceTo(self, other: "Vector") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def perpendicularXY(self) -> "Vector":
        """rotate 90 degrees anticlockwise about Z"""
        return Vector(-self.y, self.x, self.z)

    def angleXY(self) -> "Angle":
        return Angle(math.atan2(self.y, self.x))

    def interpolate(self, other: "Vector", t: float) -> "Vector":
        return Vector(self.x + (other.x - self.x) * t,
                      self.y + (other.y - self.y) * t,
                      self.z + (other.z - self.z) * t)

    def withZ(self, z: float) -> "Vector":
        return Vector(self.x, self.y, z)

    ## tolerant comparison

    def equals(self, other: "Vector", tol: float = DEFAULT_TOLERANCE.distance) -> bool:
        return (abs(self.x - other.x) <= tol
                and abs(self.y - other.y) <= tol
                and abs(self.z - other.z) <= tol)

    def xyEquals(self, other: "Vector", tol: float = DEFAULT_TOLERANCE.distance) -> bool:
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    def isZero(self, tol: float = DEFAULT_TOLERANCE.distance) -> bool:
        return self.equals(Vector.ZERO, tol)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        if not self.isValid():
            return "Vector.UNSET"
        return f"Vector({self.x:g}, {self.y:g}, {self.z:g})"

    @staticmethod
    def average(points: Iterable["Vector"]) -> "Vector":
        """Mean of ``points``; ``UNSET`` if there are none."""
        sx = sy = sz = 0.0
        n = 0
        for p in points:
            sx += p.x
            sy += p.y
            sz += p.z
            n += 1
        if n == 0:
            return Vector.UNSET
        return Vector(sx / n, sy / n, sz / n)


Vector.UNSET = Vector(math.nan, math.nan, math.nan)
Vector.ZERO = Vector(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Interval:
    """An ordered numeric domain from ``start`` to ``end``.

    ``start`` may exceed ``end``; such an interval is *decreasing* and
    ``min``/``max`` still report the true bounds.
    """

    start: float
    end: float

    UNSET: ClassVar["Interval"]
    UNIT: ClassVar["Interval"]

    def isValid(self) -> bool:
        return not (math.isnan(self.start) or math.isnan(self.end))

    @property
    def min(self) -> float:
        return min(self.start, self.end)

    @property
    def max(self) -> float:
        return max(self.start, self.end)

    @property
    def mid(self) -> float:
        return 0.5 * (self.start + self.end)

    @property
    def size(self) -> float:
        return self.end - self.start

    def isDecreasing(self) -> bool:
        return self.end < self.start

    def valueAt(self, t: float) -> float:
        """value at normalized parameter ``t`` (0 at start, 1 at end)"""
        return self.start + (self.end - self.start) * t

    def parameterOf(self, value: float) -> float:
        """inverse of ``valueAt``; ``nan`` for a zero-size interval"""
        size = self.end - self.start
        if size == 0.0:
            return math.nan
        return (value - self.start) / size

    def remap(self, value: float, target: "Interval") -> float:
        """Map ``value`` from this domain into ``target``."""
        return target.valueAt(self.parameterOf(value))

    def window(self, inner: "Interval") -> "Interval":
        """Map a normalized sub-interval through this interval."""
        return Interval(self.valueAt(inner.start), self.valueAt(inner.end))

    def contains(self, value: float, tol: float = 0.0) -> bool:
        return self.min - tol <= value <= self.max + tol

    def overlaps(self, other: "Interval") -> bool:
        return self.min <= other.max and other.min <= self.max

    def include(self, value: float) -> "Interval":
        """Smallest increasing interval holding this one and ``value``."""
        if not self.isValid():
            return Interval(value, value)
        return Interval(min(self.min, value), max(self.max, value))

    def union(self, other: "Interval") -> "Interval":
        if not self.isValid():
            return other
        if not other.isValid():
            return self
        return Interval(min(self.min, other.min), max(self.max, other.max))

    def __repr__(self) -> str:
        if not self.isValid():
            return "Interval.UNSET"
        return f"Interval({self.start:g}, {self.end:g})"


Interval.UNSET = Interval(math.nan, math.nan)
Interval.UNIT = Interval(0.0, 1.0)


@dataclass(frozen=True, order=True)
class Angle:
    """An angle in radians."""

    radians: float = 0.0

    @classmethod
    def fromDegrees(cls, degrees: float) -> "Angle":
        return cls(math.radians(degrees))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def __float__(self) -> float:
        return self.radians

    def __add__(self, other: "Angle | float") -> "Angle":
        return Angle(self.radians + float(other))

    def __sub__(self, other: "Angle | float") -> "Angle":
        return Angle(self.radians - float(other))

    def __neg__(self) -> "Angle":
        return Angle(-self.radians)

    def __mul__(self, s: float) -> "Angle":
        return Angle(self.radians * s)

    __rmul__ = __mul__

    def __abs__(self) -> "Angle":
        return Angle(abs(self.radians))

    def normalized(self) -> "Angle":
        """equivalent angle in [0, 2pi)"""
        r = self.radians % pi2
        if r >= pi2:
            r = 0.0
        return Angle(r)

    def toSign(self, sign: float) -> "Angle":
        """Equivalent angle carrying ``sign``: [0, 2pi) for a
        non-negative sign, (-2pi, 0] otherwise."""
        r = self.normalized().radians
        if sign < 0 and r > 0.0:
            r -= pi2
        return Angle(r)

    def explement(self) -> "Angle":
        """the angle that completes this one to a full turn"""
        return Angle(math.copysign(pi2, self.radians) - self.radians)

    def sin(self) -> float:
        return math.sin(self.radians)

    def cos(self) -> float:
        return math.cos(self.radians)

    def tan(self) -> float:
        return math.tan(self.radians)


@dataclass(eq=False)
class Vertex:
    """A point owned by a curve or polygon.

    Vertices compare by identity so that the same corner shared by two
    curves (or reused by a polygon overlap) can be recognised.
    """

    position: Vector

    @classmethod
    def at(cls, x: float, y: float, z: float = 0.0) -> "Vertex":
        return cls(Vector(x, y, z))

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def z(self) -> float:
        return self.position.z

    def __repr__(self) -> str:
        return f"Vertex({self.position!r})"


def asPosition(item: "Vertex | Vector") -> Vector:
    """position of a Vertex, or the Vector itself"""
    if isinstance(item, Vertex):
        return item.position
    return item
