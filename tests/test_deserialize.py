from __future__ import annotations

import dataclasses
from dataclasses import dataclass

import pytest

from geoserde.deserialize import (
    FeatureParser,
    FeatureProperties,
    PropertiesAdapter,
    deserialize_feature,
    deserialize_geometry,
    deserialize_properties,
    geo_deserialize,
    geometry_field,
)
from geoserde.geometry import LineString, Point, Polygon


def line(i: int) -> LineString:
    org = float(i)
    return LineString([(org, org + 0.1), (org + 0.2, org + 0.3)])


@dataclass
class MyObj:
    number: int
    text: str


class MyFmt(FeatureProperties):
    def process_properties(self, processor):
        if processor.property(0, "number", 9):
            return True
        if processor.property(0, "text", "b"):
            return True
        return False


@geo_deserialize
@dataclass
class MyStruct:
    my_geom: Point = geometry_field()
    my_prop: int = 0


@geo_deserialize
@dataclass
class NoGeom:
    my_prop: int


@geo_deserialize
@dataclass
class MyFeature:
    number: int
    shape: LineString = geometry_field()


class RecordingParser:
    def __init__(self, geometry, properties):
        self.geometry = geometry
        self.properties = properties
        self.requested = None

    def parse_feature(self, geometry_type, properties_type):
        self.requested = (geometry_type, properties_type)
        props = properties_type(**self.properties)
        return self.geometry, props


def test_deserialize_geometry_point():
    result = deserialize_geometry(Point, Point(1.0, 2.0))
    assert result.x == 1.0
    assert result.y == 2.0


def test_deserialize_geometry_unit_ignores_geometry():
    assert deserialize_geometry(None, Point(1.0, 2.0)) is None


def test_deserialize_geometry_mismatch():
    with pytest.raises(TypeError):
        deserialize_geometry(Point, line(0))


def test_deserialize_geometry_unsupported_type():
    with pytest.raises(TypeError):
        deserialize_geometry(Polygon, Polygon(line(0)))


def test_properties_adapter_from_feature_properties():
    obj = PropertiesAdapter(MyFmt()).deserialize(MyObj)
    assert obj.number == 9
    assert obj.text == "b"


def test_properties_from_mapping():
    obj = deserialize_properties(MyObj, {"number": 3, "text": "c", "extra": 1.5})
    assert obj == MyObj(3, "c")


def test_properties_none_is_ignored():
    assert deserialize_properties(None, {"number": 3}) is None


def test_properties_missing_key():
    with pytest.raises(KeyError):
        deserialize_properties(MyObj, {"number": 3})


def test_properties_missing_in_feature_properties():
    @dataclass
    class Other:
        absent: int

    with pytest.raises(KeyError):
        PropertiesAdapter(MyFmt()).deserialize(Other)


def test_properties_wrong_type():
    with pytest.raises(TypeError):
        deserialize_properties(MyObj, {"number": "one", "text": "c"})


def test_properties_into_non_dataclass():
    with pytest.raises(TypeError):
        deserialize_properties(dict, {"number": 3})


def test_float_property_accepts_int():
    @dataclass
    class Length:
        length: float

    result = deserialize_properties(Length, {"length": 2})
    assert result.length == 2.0
    assert isinstance(result.length, float)


def test_geo_deserialize_basic():
    parser = RecordingParser(Point(1.0, 2.0), {"my_prop": 7})
    result = deserialize_feature(MyStruct, parser)
    geometry_type, properties_type = parser.requested
    assert geometry_type is Point
    assert [f.name for f in dataclasses.fields(properties_type)] == ["my_prop"]
    assert result == MyStruct(my_geom=Point(1.0, 2.0), my_prop=7)


def test_geo_deserialize_no_geom():
    parser = RecordingParser("ignored", {"my_prop": 4})
    result = deserialize_feature(NoGeom, parser)
    geometry_type, properties_type = parser.requested
    assert geometry_type is None
    assert [f.name for f in dataclasses.fields(properties_type)] == ["my_prop"]
    assert result == NoGeom(my_prop=4)


def test_geo_deserialize_multiple_geometry():
    with pytest.raises(TypeError):

        @geo_deserialize
        @dataclass
        class Twice:
            a: Point = geometry_field()
            b: Point = geometry_field()


def test_geo_deserialize_requires_dataclass():
    class Plain:
        pass

    with pytest.raises(TypeError):
        geo_deserialize(Plain)


def test_geometry_field_keeps_metadata():
    made = geometry_field(metadata={"doc": "location"})
    assert made.metadata["doc"] == "location"
    assert len(made.metadata) == 2


def test_parse_features_like_layer():
    parsers = [
        FeatureParser(line(1), {"number": 2, "text": "two"}),
        FeatureParser(line(0), {"number": 1, "text": "one"}),
    ]
    features = sorted(
        (deserialize_feature(MyFeature, p) for p in parsers), key=lambda f: f.number
    )
    assert len(features) == 2
    assert features[0].number == 1
    assert features[0].shape == line(0)
    assert features[1].number == 2
    assert features[1].shape == line(1)


def test_feature_parser_with_feature_properties():
    parser = FeatureParser(line(3), MyFmt())
    geometry, props = parser.parse_feature(LineString, MyObj)
    assert geometry == line(3)
    assert props == MyObj(9, "b")


def test_deserialize_feature_point_only():
    result = deserialize_feature(Point, FeatureParser(Point(5.0, 6.0), {"name": "x"}))
    assert result == Point(5.0, 6.0)


def test_deserialize_feature_linestring_only():
    result = deserialize_feature(LineString, FeatureParser(line(2)))
    assert result == line(2)


def test_deserialize_feature_unsupported_class():
    with pytest.raises(TypeError):
        deserialize_feature(int, FeatureParser(Point(0.0, 0.0)))


def test_deserialize_feature_geometry_mismatch():
    with pytest.raises(TypeError):
        deserialize_feature(MyFeature, FeatureParser(Point(0.0, 0.0), {"number": 1}))