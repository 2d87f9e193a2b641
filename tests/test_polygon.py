import pytest

from geokernel.config import Tolerance
from geokernel.polygon import (
    Containment,
    allBetween,
    averagePoint,
    cleanTinyEdges,
    pointInPolygonXY,
    polygonContainmentXY,
    polygonEdgePointAt,
    polygonEdges,
    segmentDistanceXY,
    signedAreaXY,
)
from geokernel.primitives import Vector, Vertex

SQUARE = [Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1)]
DIAMOND = [Vector(1, 0), Vector(2, 1), Vector(1, 2), Vector(0, 1)]
ELL = [Vector(0, 0), Vector(2, 0), Vector(2, 1), Vector(1, 1), Vector(1, 2), Vector(0, 2)]


class TestPointInPolygon:
    def test_square(self):
        assert pointInPolygonXY(SQUARE, Vector(0.5, 0.5)) is Containment.INSIDE
        assert pointInPolygonXY(SQUARE, Vector(1.5, 0.5)) is Containment.OUTSIDE
        assert pointInPolygonXY(SQUARE, Vector(-0.5, 0.5)) is Containment.OUTSIDE

    def test_boundary(self):
        assert pointInPolygonXY(SQUARE, Vector(1, 0.5)) is Containment.BOUNDARY
        assert pointInPolygonXY(SQUARE, Vector(0, 0)) is Containment.BOUNDARY
        assert polygonContainmentXY(SQUARE, Vector(1, 0.5))
        assert not polygonContainmentXY(SQUARE, Vector(1.1, 0.5))

    def test_boundary_tolerance(self):
        near = Vector(1.001, 0.5)
        assert pointInPolygonXY(SQUARE, near) is Containment.OUTSIDE
        assert pointInPolygonXY(SQUARE, near, Tolerance(distance=0.01)) is Containment.BOUNDARY

    def test_ray_through_vertices(self):
        ## the +X ray from these points runs through the corners at y=1
        assert pointInPolygonXY(DIAMOND, Vector(0.5, 1)) is Containment.INSIDE
        assert pointInPolygonXY(DIAMOND, Vector(1.5, 1)) is Containment.INSIDE
        assert pointInPolygonXY(DIAMOND, Vector(-0.5, 1)) is Containment.OUTSIDE

    def test_ray_along_edge(self):
        assert pointInPolygonXY(ELL, Vector(0.5, 1)) is Containment.INSIDE
        assert pointInPolygonXY(ELL, Vector(-1, 1)) is Containment.OUTSIDE

    def test_concave(self):
        assert pointInPolygonXY(ELL, Vector(1.5, 1.5)) is Containment.OUTSIDE
        assert pointInPolygonXY(ELL, Vector(0.5, 1.5)) is Containment.INSIDE
        assert pointInPolygonXY(ELL, Vector(1.5, 0.5)) is Containment.INSIDE

    def test_accepts_vertices(self):
        poly = [Vertex(p) for p in SQUARE]
        assert pointInPolygonXY(poly, Vector(0.5, 0.5)) is Containment.INSIDE

    def test_degenerate(self):
        assert pointInPolygonXY([], Vector(0, 0)) is Containment.OUTSIDE
        assert pointInPolygonXY(SQUARE[:2], Vector(0.5, 0)) is Containment.OUTSIDE


def test_edges_wrap():
    edges = list(polygonEdges(SQUARE))
    assert len(edges) == 4
    i, p0, p1 = edges[-1]
    assert i == 3
    assert p0 == Vector(0, 1) and p1 == Vector(0, 0)


def test_segment_distance():
    assert segmentDistanceXY(Vector(0.5, 1), Vector(0, 0), Vector(1, 0)) == pytest.approx(1)
    assert segmentDistanceXY(Vector(2, 0), Vector(0, 0), Vector(1, 0)) == pytest.approx(1)
    assert segmentDistanceXY(Vector(3, 4), Vector(0, 0), Vector(0, 0)) == pytest.approx(5)


@pytest.mark.parametrize("t,expected", [
    (0.0, Vector(0, 0)),
    (1.5, Vector(1, 0.5)),
    (3.5, Vector(0, 0.5)),
    (4.5, Vector(0.5, 0)),
])
def test_edge_point_at(t, expected):
    assert polygonEdgePointAt(SQUARE, t) == expected


@pytest.mark.parametrize("start,end,expected", [
    (0.5, 2.5, ["b", "c"]),
    (1.0, 3.0, ["c"]),
    (3.5, 0.5, ["a"]),
    (2.0, 2.0, ["d", "a", "b"]),
    (0.25, 0.75, []),
])
def test_all_between(start, end, expected):
    assert allBetween(list("abcd"), start, end) == expected


def test_all_between_tolerance():
    ## a start parameter a hair short of an index still skips that index
    assert allBetween(list("abcd"), 0.9999999, 3.0, tol=1e-6) == ["c"]
    assert allBetween([], 0, 1) == []


def test_area_and_average():
    assert signedAreaXY(SQUARE) == pytest.approx(1.0)
    assert signedAreaXY(list(reversed(SQUARE))) == pytest.approx(-1.0)
    assert signedAreaXY(ELL) == pytest.approx(3.0)
    assert averagePoint(SQUARE) == Vector(0.5, 0.5)


def test_clean_tiny_edges():
    poly = [Vector(0, 0), Vector(1, 0), Vector(1, 1e-7), Vector(1, 1), Vector(0, 1), Vector(0, 1e-8)]
    cleaned = cleanTinyEdges(poly)
    assert cleaned == [Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1)]
