import math

import pytest

from geokernel.primitives import Vector, Vertex
from geokernel.raycast import (
    Axis,
    CoordinateAxis,
    Mesh,
    MeshFace,
    lineAxisPlane,
    linePlane,
    lineXYPlane,
    lineXZPlane,
    lineYZPlane,
    rayFace,
    rayMesh,
    rayTriangle,
)

TRIANGLE = (Vector(-1, -1, 0), Vector(1, -1, 0), Vector(0, 1, 0))
UP = Vector(0, 0, 1)


def _plate(z):
    return [Vector(-10, -10, z), Vector(10, -10, z), Vector(0, 10, z)]


class TestRayTriangle:
    def test_hit(self):
        assert rayTriangle(Vector(0, 0, -1), UP, *TRIANGLE) == pytest.approx(1.0)

    def test_hit_behind_origin(self):
        assert rayTriangle(Vector(0, 0, 1), UP, *TRIANGLE) == pytest.approx(-1.0)

    def test_outside(self):
        assert math.isnan(rayTriangle(Vector(5, 5, -1), UP, *TRIANGLE))
        assert math.isnan(rayTriangle(Vector(0, -2, -1), UP, *TRIANGLE))

    def test_parallel(self):
        assert math.isnan(rayTriangle(Vector(0, 0, 1), Vector(1, 0, 0), *TRIANGLE))

    def test_oblique(self):
        t = rayTriangle(Vector(0, 0, -2), Vector(0, 0.1, 1), *TRIANGLE)
        assert t == pytest.approx(2.0)


class TestRayFace:
    QUAD = [Vector(-1, -1, 0), Vector(1, -1, 0), Vector(1, 1, 0), Vector(-1, 1, 0)]

    def test_second_fan_triangle(self):
        face = MeshFace(self.QUAD)
        assert rayFace(Vector(-0.5, 0.5, -2), UP, face) == pytest.approx(2.0)

    def test_plain_vertex_list(self):
        face = [Vertex(p) for p in self.QUAD]
        assert rayFace(Vector(0.5, -0.5, -2), UP, face) == pytest.approx(2.0)

    def test_miss(self):
        assert math.isnan(rayFace(Vector(3, 0, -2), UP, MeshFace(self.QUAD)))

    def test_degenerate_face(self):
        assert math.isnan(rayFace(Vector(0, 0, -2), UP, MeshFace(self.QUAD[:2])))

    def test_axis(self):
        axis = Axis(Vector(-0.5, 0.5, -2), UP)
        t = axis.hitFace(MeshFace(self.QUAD))
        assert axis.pointAt(t) == Vector(-0.5, 0.5, 0)


class TestRayMesh:
    def test_nearest(self):
        mesh = Mesh([MeshFace(_plate(5)), MeshFace(_plate(0))])
        assert rayMesh(Vector(0, 0, -1), UP, mesh) == pytest.approx(1.0)

    def test_first_hit_fixes_sign(self):
        below_first = Mesh([MeshFace(_plate(0)), MeshFace(_plate(5))])
        above_first = Mesh([MeshFace(_plate(5)), MeshFace(_plate(0))])
        origin = Vector(0, 0, 2)
        assert rayMesh(origin, UP, below_first) == pytest.approx(-2.0)
        assert rayMesh(origin, UP, above_first) == pytest.approx(3.0)

    def test_closer_same_sign_replaces(self):
        mesh = Mesh([MeshFace(_plate(5)), MeshFace(_plate(0)), MeshFace(_plate(3))])
        assert rayMesh(Vector(0, 0, 2), UP, mesh) == pytest.approx(1.0)

    def test_miss(self):
        mesh = Mesh([MeshFace(_plate(0))])
        assert math.isnan(rayMesh(Vector(50, 0, -1), UP, mesh))
        assert math.isnan(rayMesh(Vector(0, 0, -1), UP, Mesh()))

    def test_indexed(self):
        points = [Vector(-1, -1, 0), Vector(1, -1, 0), Vector(1, 1, 0), Vector(-1, 1, 0)]
        mesh = Mesh.fromIndexed(points, [(0, 1, 2), (0, 2, 3)])
        assert len(mesh.faces) == 2
        assert mesh.faces[0][0] is mesh.faces[1][0]
        assert Axis(Vector(-0.5, 0.5, 4), -UP).hitMesh(mesh) == pytest.approx(4.0)


class TestLinePlane:
    def test_general(self):
        t = linePlane(Vector(0, 0, 0), Vector(1, 1, 1), Vector(0, 0, 2), Vector(0, 0, 1))
        assert t == pytest.approx(2.0)

    def test_tilted_plane(self):
        t = linePlane(Vector(0, 0, 0), Vector(1, 0, 0), Vector(3, 0, 0), Vector(1, 1, 0))
        assert t == pytest.approx(3.0)

    def test_parallel(self):
        assert math.isnan(linePlane(Vector(0, 0, 0), Vector(1, 0, 0), Vector(0, 0, 2), UP))

    def test_axis_planes(self):
        origin = Vector(1, 2, 3)
        direction = Vector(2, 4, -6)
        assert lineYZPlane(origin, direction, 5) == pytest.approx(2.0)
        assert lineXZPlane(origin, direction, 0) == pytest.approx(-0.5)
        assert lineXYPlane(origin, direction, 0) == pytest.approx(0.5)
        assert math.isnan(lineXYPlane(origin, Vector(1, 0, 0), 0))

    @pytest.mark.parametrize("axis,position,expected", [
        (CoordinateAxis.X, 5, 2.0),
        (CoordinateAxis.Y, 0, -0.5),
        (CoordinateAxis.Z, 0, 0.5),
    ])
    def test_axis_dispatch(self, axis, position, expected):
        t = lineAxisPlane(Vector(1, 2, 3), Vector(2, 4, -6), axis, position)
        assert t == pytest.approx(expected)
