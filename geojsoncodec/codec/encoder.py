from __future__ import annotations

import logging
from typing import Any, Dict, List

from geojsoncodec.codec.coordinates import coordinate_to_list, sequence_to_list
from geojsoncodec.codec.formatter import DEFAULT_FORMATTER, CoordinateFormatter
from geojsoncodec.constructs.geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from geojsoncodec.exceptions import UnsupportedGeometryType
from geojsoncodec.utils.bbox import bounding_box
from geojsoncodec.utils.keys import (
    BBOX_KEY,
    COORDINATES_KEY,
    GEOMETRIES_KEY,
    TYPE_KEY,
)

log = logging.getLogger(__name__)

JsonMap = Dict[str, Any]


class GeometryEncoder:
    """
    Encodes geometries into GeoJSON geometry objects (plain dicts).

    The encoder dispatches on the geometry variant. Non-collection variants contribute
    a `coordinates` member built from their coordinates, and a GeometryCollection
    contributes a `geometries` member with each member encoded recursively. Keys are
    always inserted in the order type, bbox, coordinates|geometries, so equal input
    encodes to byte-identical output.

    Args:
        formatter: The formatter applied to every ordinate. Default is DEFAULT_FORMATTER
            (17 integer / 9 fraction digits, float output).
        with_bounding_box: If True, a `bbox` member is added to the top-level object.
            It is left out when the geometry has no coordinate with both an x and a y.

    Examples:
        >>> from geojsoncodec.constructs.geometry import Point
        >>> GeometryEncoder().encode(Point.from_xy(8.456, 3.567))
        {'type': 'Point', 'coordinates': [8.456, 3.567]}
        >>> GeometryEncoder(with_bounding_box=True).encode(Point.from_xy(1, 2))
        {'type': 'Point', 'bbox': [1.0, 2.0, 1.0, 2.0], 'coordinates': [1.0, 2.0]}
    """

    def __init__(
        self,
        formatter: CoordinateFormatter = DEFAULT_FORMATTER,
        with_bounding_box: bool = False,
    ):
        self.formatter = formatter
        self.with_bounding_box = with_bounding_box

        self._encoders = {
            Point: self._point_coordinates,
            LineString: self._line_coordinates,
            Polygon: self._polygon_coordinates,
            MultiPoint: self._multi_point_coordinates,
            MultiLineString: self._multi_line_coordinates,
            MultiPolygon: self._multi_polygon_coordinates,
        }

    def encode(self, geometry: Geometry) -> JsonMap:
        """
        Encode a geometry into a GeoJSON geometry object.

        Args:
            geometry: The geometry to encode

        Returns:
            A dict with the keys type, bbox (optional) and coordinates or geometries

        Raises:
            UnsupportedGeometryType: If the value is not one of the seven geometry
                variants
        """
        return self._encode(geometry, self.with_bounding_box)

    def _encode(self, geometry: Geometry, with_bounding_box: bool) -> JsonMap:
        if isinstance(geometry, GeometryCollection):
            body_key = GEOMETRIES_KEY
            body: List[Any] = [self._encode(g, False) for g in geometry.geometries]
        else:
            body_key = COORDINATES_KEY
            body = self._coordinates(geometry)

        json_map: JsonMap = {TYPE_KEY: geometry.geom_type}

        if with_bounding_box:
            box = bounding_box(geometry)
            if box is not None:
                json_map[BBOX_KEY] = [self.formatter.round(v) for v in box]
            else:
                log.warning(
                    "bounding box requested but %s has no coordinates",
                    geometry.geom_type,
                )

        json_map[body_key] = body
        return json_map

    def _coordinates(self, geometry: Geometry) -> List[Any]:
        for cls in type(geometry).__mro__:
            encoder = self._encoders.get(cls)
            if encoder is not None:
                return encoder(geometry)
        raise UnsupportedGeometryType(geometry)

    def _point_coordinates(self, point: Point) -> List[Any]:
        return coordinate_to_list(point.coord, self.formatter)

    def _line_coordinates(self, line: LineString) -> List[Any]:
        return sequence_to_list(line.coords, self.formatter)

    def _polygon_coordinates(self, polygon: Polygon) -> List[Any]:
        return [sequence_to_list(ring.coords, self.formatter) for ring in polygon.rings]

    def _multi_point_coordinates(self, multi_point: MultiPoint) -> List[Any]:
        return [self._point_coordinates(p) for p in multi_point.points]

    def _multi_line_coordinates(self, multi_line: MultiLineString) -> List[Any]:
        return [self._line_coordinates(line) for line in multi_line.lines]

    def _multi_polygon_coordinates(self, multi_polygon: MultiPolygon) -> List[Any]:
        return [self._polygon_coordinates(p) for p in multi_polygon.polygons]


def encode_geometry(geometry: Geometry, with_bounding_box: bool = False) -> JsonMap:
    """
    Encode a geometry with the default formatter.

    This is a shorthand for GeometryEncoder(with_bounding_box=...).encode(geometry).
    """
    return GeometryEncoder(with_bounding_box=with_bounding_box).encode(geometry)
