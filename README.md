# geoserde

Geoserde is an adapter between geographic feature objects and GIS formats.
A feature is a record with named fields (a dataclass, a named tuple, or any
object with a `serialize(serializer)` method that describes itself as a
struct). The first field that can be written as a geometry becomes the
feature's geometry; every other field becomes a property.

## Installation

```sh
pip install geoserde
```

## How it fits together

- `geoserde.model` defines the `Serializer` interface and the `serialize(value, serializer)`
  function, which maps Python values onto that interface: `None`, booleans,
  integers, floats, strings, bytes, enum members, dataclasses and named tuples
  (as structs), tuples, mappings, sets, sequences and other iterables.
- `geoserde.geometry` holds the geometry types `Coord`, `Point`, `Line`,
  `LineString`, `Polygon` and `Rect`. `Polygon` closes its rings on creation;
  `Rect` normalises its corners to `min` and `max`.
- `geoserde.sink` defines the sink interfaces `GeometrySink`, `PropertySink` and
  `FeatureSink`, and three ready sinks:
  - `GeoJsonWriter(out)` writes GeoJSON `Feature` objects to a text stream,
    separated by `,\n`.
  - `WktWriter(out)` writes geometries as Well-Known Text and drops properties;
    features are separated by a newline.
  - `NullSink()` accepts every event and counts them in its `discarded` attribute.
- `GeometrySerializer`, `PropertySerializer` and `FeatureSerializer` turn values
  into sink events.
- `geoserde.deserialize` reads features back into dataclasses.

## Writing features

```python
import io
from dataclasses import dataclass

from geoserde.feature_serializer import FeatureSerializer
from geoserde.geometry import Point
from geoserde.model import serialize
from geoserde.sink import GeoJsonWriter


@dataclass
class Station:
    name: str
    europe: bool
    loc: Point


stations = [
    Station("King's Cross", True, Point(51.5321, -0.1233)),
    Station("Tokyo", False, Point(139.7661, 35.6812)),
]

out = io.StringIO()
ser = FeatureSerializer(GeoJsonWriter(out))
serialize(stations, ser)
print(out.getvalue())
print(len(ser), "features")
```

`len(ser)` is the number of features written. A sequence of features is
written one after another; a feature that is not a struct raises
`InvalidFeatureStructureError`, and a struct without any geometry field
raises `NoGeometryFieldError`.

## Writing geometries

`GeometrySerializer(sink)` writes a single geometry to a `GeometrySink`. It
understands `Point`, `Line`, `LineString`, `Polygon` (with holes) and `Rect`;
any other value raises `InvalidGeometryStructureError`. `is_sink_used()`
tells whether anything reached the sink.

```python
import io

from geoserde.geometry import Coord, Rect
from geoserde.geometry_serializer import GeometrySerializer
from geoserde.model import serialize
from geoserde.sink import WktWriter

out = io.StringIO()
serialize(Rect(Coord(0, 0), Coord(1, 1)), GeometrySerializer(WktWriter(out)))
print(out.getvalue())  # POLYGON((0 0,0 1,1 1,1 0,0 0))
```

## Writing properties

`PropertySerializer(index, key, sink)` writes scalar values (booleans,
integers, floats, strings, bytes) as columns named by the current key.
Fields of nested structs are flattened, each under its own field name.
`None` takes up an index without writing anything, and enum members are
written as their member name. Non-empty sequences, tuples and maps raise
`UnsupportedPropertyStructureError`. `len()` of the serializer is the index
of the next property.

## Reading features

`geoserde.deserialize` builds objects from a `FeatureParser`, which holds one
feature's geometry and its properties (a mapping, or a `FeatureProperties`
object that reports its values through `process_properties`).

```python
from dataclasses import dataclass

from geoserde.deserialize import (
    FeatureParser,
    deserialize_feature,
    geo_deserialize,
    geometry_field,
)
from geoserde.geometry import LineString


@geo_deserialize
@dataclass
class Road:
    number: int
    shape: LineString = geometry_field()


parser = FeatureParser(LineString([(0.0, 0.1), (0.2, 0.3)]), {"number": 1})
road = deserialize_feature(Road, parser)
print(road.number, road.shape)
```

Each property field is looked up by name and checked against its annotated
type (`bool`, `int`, `float`, `str`); a mismatch raises `TypeError` and a
missing property raises `KeyError`. `deserialize_feature(Point, parser)` and
`deserialize_feature(LineString, parser)` return the geometry alone.
`PropertiesAdapter`, `deserialize_geometry` and `deserialize_properties` are
the building blocks used underneath.

## Errors

All serializer failures raise subclasses of `geoserde.errors.SerializeError`:
`SourceCausedError`, `SinkCausedError` (wrapping the sink's own exception as
`cause`), `NoGeometryFieldError`, `InvalidFeatureStructureError`,
`InvalidGeometryStructureError`, `UnsupportedPropertyStructureError` and
`InvalidStateError`. Errors of the same class with the same arguments compare
equal.

## What it does not do

- It does not read or write files in any GIS format on its own: there is no
  shapefile, FlatGeobuf or GeoJSON parser. Reading starts from a
  `FeatureParser` you fill in, and writing goes to a sink you supply.
- Reading supports only `Point` and `LineString` geometries; writing supports
  only the five geometry types listed above, with no multi-geometries or
  geometry collections.
- There is no command-line tool.