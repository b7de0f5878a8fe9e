"""Error types raised by the geometry codec.

Every failure is surfaced synchronously; the codec never returns a partially
built geometry.
"""


class GeoJsonError(Exception):
    """Base class for all errors raised by geojsoncodec."""


class UnsupportedGeometryType(GeoJsonError, TypeError):
    """
    Raised when the encoder is handed a value that is not one of the seven
    GeoJSON geometry variants.
    """

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"Geometry [{type(value).__name__}] is unsupported. It must be an "
            "instance of Point, LineString, Polygon, MultiPoint, "
            "MultiLineString, MultiPolygon or GeometryCollection."
        )


class DecodeError(GeoJsonError, ValueError):
    """
    Raised when a JSON value or token stream cannot be turned into a geometry:
    an unknown `type`, a missing or malformed `coordinates` / `geometries`
    member, or a stream that ends in the middle of an object.
    """


class MalformedNumber(GeoJsonError, ValueError):
    """Raised when a coordinate ordinate is not a number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"cannot interpret {value!r} as a coordinate ordinate")
