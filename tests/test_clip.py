import math

import pytest

from geokernel.clip import (
    arcDomainInPolygonXY,
    arcInPolygonXY,
    curveDomainInPolygonXY,
    curveInPolygonXY,
    lineDomainInPolygonXY,
    lineInPolygonXY,
    polyLineDomainInPolygonXY,
    polygonOverlapXY,
)
from geokernel.curves import Arc, Circle, Line, PolyCurve, PolyLine
from geokernel.errors import UnsupportedOperationError
from geokernel.polygon import signedAreaXY
from geokernel.primitives import Interval, Vector, Vertex

SQUARE = [Vector(0, 0), Vector(1, 0), Vector(1, 1), Vector(0, 1)]
U_SHAPE = [Vector(0, 0), Vector(3, 0), Vector(3, 3), Vector(2, 3),
           Vector(2, 1), Vector(1, 1), Vector(1, 3), Vector(0, 3)]


def _square(x0, y0, size):
    return [Vertex.at(x0, y0), Vertex.at(x0 + size, y0),
            Vertex.at(x0 + size, y0 + size), Vertex.at(x0, y0 + size)]


def _positions(loop):
    return [v.position for v in loop]


def _domains(intervals):
    return [x for iv in intervals for x in (iv.start, iv.end)]


class TestLineInPolygon:
    def test_fully_inside(self):
        line = Line.fromCoordinates(0.2, 0.3, 0.7, 0.6)
        pieces = lineInPolygonXY(line, SQUARE)
        assert len(pieces) == 1
        assert pieces[0].startPoint == line.startPoint
        assert pieces[0].endPoint == line.endPoint

    def test_through(self):
        line = Line.fromCoordinates(-1, 0.5, 2, 0.5)
        assert _domains(lineDomainInPolygonXY(line, SQUARE)) == pytest.approx([1 / 3, 2 / 3])
        pieces = lineInPolygonXY(line, SQUARE)
        assert pieces[0].startPoint == Vector(0, 0.5)
        assert pieces[0].endPoint == Vector(1, 0.5)

    def test_starts_inside(self):
        line = Line.fromCoordinates(0.5, 0.5, 2, 0.5)
        assert _domains(lineDomainInPolygonXY(line, SQUARE)) == pytest.approx([0, 1 / 3])

    def test_outside(self):
        assert lineInPolygonXY(Line.fromCoordinates(2, 2, 3, 3), SQUARE) == []

    def test_grazes_corner(self):
        assert lineInPolygonXY(Line.fromCoordinates(-1, 1, 1, -1), SQUARE) == []

    def test_through_corners(self):
        line = Line.fromCoordinates(-1, -1, 2, 2)
        assert _domains(lineDomainInPolygonXY(line, SQUARE)) == pytest.approx([1 / 3, 2 / 3])

    def test_concave(self):
        line = Line.fromCoordinates(-1, 2, 4, 2)
        assert _domains(lineDomainInPolygonXY(line, U_SHAPE)) == pytest.approx([0.2, 0.4, 0.6, 0.8])
        pieces = lineInPolygonXY(line, U_SHAPE)
        assert [(p.startPoint, p.endPoint) for p in pieces] == [
            (Vector(0, 2), Vector(1, 2)), (Vector(2, 2), Vector(3, 2))]

    def test_starts_on_boundary(self):
        inward = Line.fromCoordinates(0, 0.5, 0.5, 0.5)
        outward = Line.fromCoordinates(0, 0.5, -1, 0.5)
        assert _domains(lineDomainInPolygonXY(inward, SQUARE)) == pytest.approx([0, 1])
        assert lineDomainInPolygonXY(outward, SQUARE) == []

    def test_domain_remapped(self):
        line = Line.fromCoordinates(-1, 0.5, 2, 0.5)
        result = lineDomainInPolygonXY(line, SQUARE, Interval(0, 3))
        assert _domains(result) == pytest.approx([1, 2])


class TestArcInPolygon:
    RIGHT_BAND = [Vector(0.5, -3), Vector(3, -3), Vector(3, 3), Vector(0.5, 3)]

    def _rightHalf(self):
        return Arc.fromCenter(Vector(0, 0), 1, -math.pi / 2, math.pi)

    def test_domain(self):
        assert _domains(arcDomainInPolygonXY(self._rightHalf(), self.RIGHT_BAND)) == \
            pytest.approx([1 / 6, 5 / 6])

    def test_segment(self):
        pieces = arcInPolygonXY(self._rightHalf(), self.RIGHT_BAND)
        assert len(pieces) == 1
        assert pieces[0].startAngle == pytest.approx(-math.pi / 3)
        assert pieces[0].sweep == pytest.approx(2 * math.pi / 3)
        assert pieces[0].startPoint == Vector(0.5, -math.sqrt(0.75))

    def test_inside(self):
        assert _domains(arcDomainInPolygonXY(self._rightHalf(), [Vector(-5, -5), Vector(5, -5),
                                                                  Vector(5, 5), Vector(-5, 5)])) == [0.0, 1.0]


class TestCurveInPolygon:
    POINTS = [Vector(-1, 0.5), Vector(0.5, 0.5), Vector(0.5, 2)]

    def test_polyline_domains_joined(self):
        pline = PolyLine.fromPoints(self.POINTS)
        assert _domains(polyLineDomainInPolygonXY(pline, SQUARE)) == pytest.approx([1 / 3, 2 / 3])

    def test_polyline_segment(self):
        pieces = curveInPolygonXY(PolyLine.fromPoints(self.POINTS), SQUARE)
        assert len(pieces) == 1
        assert isinstance(pieces[0], PolyLine)
        assert [v.position for v in pieces[0].vertices] == [
            Vector(0, 0.5), Vector(0.5, 0.5), Vector(0.5, 1)]

    def test_polycurve(self):
        pcurve = PolyCurve.fromPoints(self.POINTS)
        assert _domains(curveDomainInPolygonXY(pcurve, SQUARE)) == pytest.approx([1 / 3, 2 / 3])
        pieces = curveInPolygonXY(pcurve, SQUARE)
        assert len(pieces) == 1
        assert pieces[0].startPoint == Vector(0, 0.5)
        assert pieces[0].endPoint == Vector(0.5, 1)

    def test_dispatch_simple(self):
        line = Line.fromCoordinates(-1, 0.5, 2, 0.5)
        assert curveDomainInPolygonXY(line, SQUARE) == lineDomainInPolygonXY(line, SQUARE)

    def test_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            curveDomainInPolygonXY(Circle(Vector(0, 0), 1), SQUARE)


class TestPolygonOverlap:
    def test_offset_squares(self):
        a = _square(0, 0, 1)
        b = _square(0.5, 0.5, 1)
        pool = []
        loops = polygonOverlapXY(a, b, vertexPool=pool)
        assert len(loops) == 1
        loop = loops[0]
        assert signedAreaXY(loop) == pytest.approx(0.25)
        assert _positions(loop) == [Vector(1, 0.5), Vector(1, 1), Vector(0.5, 1), Vector(0.5, 0.5)]
        ## corners are reused, crossings are new
        assert loop[1] is a[2]
        assert loop[3] is b[0]
        assert len(pool) == 2
        assert all(any(v is p for p in pool) for v in (loop[0], loop[2]))

    def test_identical(self):
        a = _square(0, 0, 1)
        b = _square(0, 0, 1)
        pool = []
        loops = polygonOverlapXY(a, b, vertexPool=pool)
        assert len(loops) == 1
        assert _positions(loops[0]) == _positions(a)
        assert signedAreaXY(loops[0]) == pytest.approx(1.0)
        assert pool == []

    def test_triangle_corner_inside(self):
        a = _square(0, 0, 2)
        b = [Vertex.at(1, 1), Vertex.at(4, 1), Vertex.at(1, 4)]
        loops = polygonOverlapXY(a, b)
        assert len(loops) == 1
        assert _positions(loops[0]) == [Vector(2, 1), Vector(2, 2), Vector(1, 2), Vector(1, 1)]
        assert signedAreaXY(loops[0]) == pytest.approx(1.0)

    def test_two_regions(self):
        bar = [Vector(-1, 2), Vector(4, 2), Vector(4, 2.5), Vector(-1, 2.5)]
        loops = polygonOverlapXY(U_SHAPE, bar)
        assert len(loops) == 2
        assert [abs(signedAreaXY(loop)) for loop in loops] == pytest.approx([0.5, 0.5])
        assert _positions(loops[0]) == [Vector(3, 2), Vector(3, 2.5), Vector(2, 2.5), Vector(2, 2)]
        assert _positions(loops[1]) == [Vector(1, 2), Vector(1, 2.5), Vector(0, 2.5), Vector(0, 2)]

    def test_contained(self):
        big = _square(0, 0, 4)
        small = _square(1, 1, 1)
        assert polygonOverlapXY(big, small) == [small]
        assert polygonOverlapXY(small, big) == [small]

    def test_disjoint(self):
        assert polygonOverlapXY(_square(0, 0, 1), _square(5, 5, 1)) == []

    def test_degenerate(self):
        assert polygonOverlapXY(_square(0, 0, 1)[:2], _square(0, 0, 1)) == []

    def test_inputs_unchanged(self):
        a = _square(0, 0, 1)
        b = _square(0.5, 0.5, 1)
        polygonOverlapXY(a, b)
        assert len(a) == 4 and len(b) == 4
        assert _positions(b)[0] == Vector(0.5, 0.5)

    def test_corner_touch(self):
        pool = []
        assert polygonOverlapXY(_square(0, 0, 1), _square(1, 1, 1), vertexPool=pool) == []
        assert pool == []

    def test_shared_edge(self):
        assert polygonOverlapXY(_square(0, 0, 1), _square(1, 0, 1)) == []

    def test_opposite_winding(self):
        a = _square(0, 0, 1)
        b = [Vertex.at(0.5, 0.5), Vertex.at(0.5, 1.5), Vertex.at(1.5, 1.5), Vertex.at(1.5, 0.5)]
        loops = polygonOverlapXY(a, b)
        assert len(loops) == 1
        assert signedAreaXY(loops[0]) == pytest.approx(0.25)
        assert _positions(loops[0]) == [Vector(1, 0.5), Vector(1, 1), Vector(0.5, 1), Vector(0.5, 0.5)]
        assert loops[0][3] is b[0]
        ## caller's sequence keeps its order
        assert _positions(b)[1] == Vector(0.5, 1.5)
