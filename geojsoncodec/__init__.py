from geojsoncodec.codec.decoder import GeometryDecoder, decode_geometry
from geojsoncodec.codec.encoder import GeometryEncoder, encode_geometry
from geojsoncodec.codec.formatter import DEFAULT_FORMATTER, CoordinateFormatter
from geojsoncodec.codec.wire import dump_file, dumps, load_file, loads
from geojsoncodec.constructs.coordinate import Coordinate
from geojsoncodec.constructs.geometry import (
    Geometry,
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geojsoncodec.exceptions import (
    DecodeError,
    GeoJsonError,
    MalformedNumber,
    UnsupportedGeometryType,
)
from geojsoncodec.utils.bbox import bounding_box
