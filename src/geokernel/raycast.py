## ray and plane queries for geokernel
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

"""Ray/triangle, ray/face, ray/mesh and line/plane intersection.

All queries return the hit parameter ``t`` along the ray, so the hit
point is ``origin + t*direction``.  The ray is treated as a full line:
``t`` may be negative for hits behind the origin.  A miss is ``nan``;
test with ``math.isnan``.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import List, Sequence

from geokernel.config import DEFAULT_TOLERANCE, Tolerance
from geokernel.primitives import Vector, Vertex, asPosition

logger = logging.getLogger(__name__)

__all__ = [
    "Axis",
    "CoordinateAxis",
    "MeshFace",
    "Mesh",
    "rayTriangle",
    "rayFace",
    "rayMesh",
    "linePlane",
    "lineAxisPlane",
    "lineXYPlane",
    "lineXZPlane",
    "lineYZPlane",
]


class CoordinateAxis(enum.Enum):
    X = 0
    Y = 1
    Z = 2


@dataclass(frozen=True)
class Axis:
    """A ray: an origin and a direction."""

    origin: Vector
    direction: Vector

    def pointAt(self, t: float) -> Vector:
        return self.origin + self.direction * t

    def hitFace(self, face: "MeshFace | Sequence[Vertex]", tol: Tolerance = DEFAULT_TOLERANCE) -> float:
        return rayFace(self.origin, self.direction, face, tol)

    def hitMesh(self, mesh: "Mesh", tol: Tolerance = DEFAULT_TOLERANCE) -> float:
        return rayMesh(self.origin, self.direction, mesh, tol)


@dataclass(eq=False)
class MeshFace:
    """An ordered loop of (at least three) vertices."""

    vertices: List[Vertex]

    def __post_init__(self) -> None:
        self.vertices = [v if isinstance(v, Vertex) else Vertex(v) for v in self.vertices]

    def __len__(self) -> int:
        return len(self.vertices)

    def __getitem__(self, i: int) -> Vertex:
        return self.vertices[i]

    def __iter__(self):
        return iter(self.vertices)


@dataclass(eq=False)
class Mesh:
    faces: List[MeshFace] = field(default_factory=list)

    @classmethod
    def fromIndexed(cls, points: Sequence[Vector], faces: Sequence[Sequence[int]]) -> "Mesh":
        """Build a mesh whose faces share vertices, from a point list and
        per-face index lists."""
        verts = [Vertex(p) for p in points]
        return cls([MeshFace([verts[i] for i in face]) for face in faces])


def rayTriangle(origin: Vector, direction: Vector, p0: Vector, p1: Vector, p2: Vector,
                tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Moller-Trumbore ray/triangle intersection.

    Returns the ray parameter of the hit, or ``nan`` if the ray is
    parallel to the triangle's plane or passes outside the triangle.
    """
    e1 = p1 - p0
    e2 = p2 - p0
    h = direction.cross(e2)
    a = e1.dot(h)
    if abs(a) < tol.parallel:
        return math.nan
    f = 1.0 / a
    s = origin - p0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return math.nan
    q = s.cross(e1)
    v = f * direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return math.nan
    return f * e2.dot(q)


def rayFace(origin: Vector, direction: Vector, face: "MeshFace | Sequence[Vertex]",
            tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Ray against a planar face, fan-triangulated from its first vertex.

    Returns the parameter of the first triangle hit, or
    ``nan``; faces with fewer than three vertices never hit.
    """
    if len(face) < 3:
        logger.debug("face with %d vertices ignored", len(face))
        return math.nan
    p0 = asPosition(face[0])
    for i in range(1, len(face) - 1):
        t = rayTriangle(origin, direction, p0, asPosition(face[i]), asPosition(face[i + 1]), tol)
        if not math.isnan(t):
            return t
    return math.nan


def rayMesh(origin: Vector, direction: Vector, mesh: "Mesh",
            tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Nearest hit of a ray against every face of ``mesh``.

    The first hit found fixes the side of the origin that counts: later
    hits replace it only if they have the same sign and are closer to
    the origin.
    """
    best = math.nan
    for face in mesh.faces:
        t = rayFace(origin, direction, face, tol=tol)
        if math.isnan(t):
            continue
        if math.isnan(best):
            best = t
        elif (t >= 0.0) == (best >= 0.0) and abs(t) < abs(best):
            best = t
    return best


def linePlane(lineOrigin: Vector, lineDirection: Vector, planeOrigin: Vector, planeNormal: Vector,
              tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Parameter along the line at which it meets the plane through
    ``planeOrigin`` with normal ``planeNormal``; ``nan`` if the line is
    parallel to the plane."""
    denom = lineDirection.dot(planeNormal)
    if abs(denom) <= tol.tiny:
        return math.nan
    return (planeOrigin.dot(planeNormal) - lineOrigin.dot(planeNormal)) / denom


def _axisPlane(origin: float, direction: float, position: float, tol: Tolerance) -> float:
    if abs(direction) <= tol.tiny:
        return math.nan
    return (position - origin) / direction


def lineXYPlane(lineOrigin: Vector, lineDirection: Vector, z: float,
                tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """line against the plane ``Z == z``"""
    return _axisPlane(lineOrigin.z, lineDirection.z, z, tol)


def lineXZPlane(lineOrigin: Vector, lineDirection: Vector, y: float,
                tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """line against the plane ``Y == y``"""
    return _axisPlane(lineOrigin.y, lineDirection.y, y, tol)


def lineYZPlane(lineOrigin: Vector, lineDirection: Vector, x: float,
                tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """line against the plane ``X == x``"""
    return _axisPlane(lineOrigin.x, lineDirection.x, x, tol)


def lineAxisPlane(lineOrigin: Vector, lineDirection: Vector, axis: CoordinateAxis, position: float,
                  tol: Tolerance = DEFAULT_TOLERANCE) -> float:
    """Line against the plane normal to ``axis`` at ``position`` along it."""
    if axis is CoordinateAxis.X:
        return lineYZPlane(lineOrigin, lineDirection, position, tol)
    if axis is CoordinateAxis.Y:
        return lineXZPlane(lineOrigin, lineDirection, position, tol)
    return lineXYPlane(lineOrigin, lineDirection, position, tol)
