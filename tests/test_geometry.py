from geoserde.geometry import Coord, Line, LineString, Point, Polygon, Rect
from geoserde.model import Serializer, serialize


class Recorder(Serializer):
    def serialize_bool(self, value):
        return ("bool", value)

    def serialize_int(self, value):
        return ("int", value)

    def serialize_float(self, value):
        return ("float", value)

    def serialize_str(self, value):
        return ("str", value)

    def serialize_bytes(self, value):
        return ("bytes", value)

    def serialize_none(self):
        return ("none",)

    def serialize_unit(self):
        return ("unit",)

    def serialize_unit_variant(self, name, variant):
        return ("unit_variant", name, variant)

    def serialize_newtype_struct(self, name, value):
        return ("newtype", name, serialize(value, self))

    def serialize_newtype_variant(self, name, variant, value):
        return ("newtype_variant", name, variant, serialize(value, self))

    def serialize_seq(self, items):
        return ("seq", [serialize(item, self) for item in items])

    def serialize_tuple(self, items):
        return ("tuple", [serialize(item, self) for item in items])

    def serialize_tuple_struct(self, name, items):
        return ("tuple_struct", name, [serialize(item, self) for item in items])

    def serialize_map(self, items):
        return ("map", [(serialize(k, self), serialize(v, self)) for k, v in items])

    def serialize_struct(self, name, fields):
        return ("struct", name, [(k, serialize(v, self)) for k, v in fields])


def coord_tree(x, y):
    return ("struct", "Coord", [("x", ("float", x)), ("y", ("float", y))])


def test_coord():
    assert serialize(Coord(1.0, 2.0), Recorder()) == coord_tree(1.0, 2.0)


def test_point_is_newtype_of_coord():
    assert serialize(Point(1.0, 2.0), Recorder()) == ("newtype", "Point", coord_tree(1.0, 2.0))


def test_line_struct():
    line = Line((0.0, 0.1), Point(1.0, 1.1))
    assert serialize(line, Recorder()) == (
        "struct",
        "Line",
        [("start", coord_tree(0.0, 0.1)), ("end", coord_tree(1.0, 1.1))],
    )


def test_linestring_newtype_of_seq():
    ls = LineString([(0.0, 0.1), (1.0, 1.1)])
    assert serialize(ls, Recorder()) == (
        "newtype",
        "LineString",
        ("seq", [coord_tree(0.0, 0.1), coord_tree(1.0, 1.1)]),
    )
    assert len(ls) == 2
    assert list(ls) == [Coord(0.0, 0.1), Coord(1.0, 1.1)]


def test_polygon_struct():
    poly = Polygon(LineString([(0.0, 0.0), (1.0, 1.0), (1.0, 0.0), (0.0, 0.0)]))
    result = serialize(poly, Recorder())
    assert result[:2] == ("struct", "Polygon")
    keys = [k for k, _ in result[2]]
    assert keys == ["exterior", "interiors"]
    assert result[2][1][1] == ("seq", [])


def test_polygon_closes_rings():
    poly = Polygon([(0, 0), (1, 1), (1, 0)], [[(0.1, 0.1), (0.9, 0.9), (0.9, 0.1)]])
    assert poly.exterior.coords[0] == poly.exterior.coords[-1]
    assert len(poly.exterior) == 4
    assert poly.interiors[0].coords[-1] == Coord(0.1, 0.1)


def test_polygon_keeps_empty_ring_empty():
    assert len(Polygon(LineString()).exterior) == 0


def test_rect_normalises_corners():
    rect = Rect((1, 0), (0, 1))
    assert rect.min == Coord(0, 0)
    assert rect.max == Coord(1, 1)


def test_rect_struct():
    result = serialize(Rect((0.0, 0.0), (1.0, 1.0)), Recorder())
    assert result == (
        "struct",
        "Rect",
        [("min", coord_tree(0.0, 0.0)), ("max", coord_tree(1.0, 1.0))],
    )