"""Conversion between geojsoncodec geometries, shapely geometries and WKT."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import shapely.geometry as sg
import shapely.wkt as wkt
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

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
from geojsoncodec.exceptions import UnsupportedGeometryType


def _tuples(coords: Sequence[Coordinate]) -> List[Tuple[float, ...]]:
    # shapely needs one dimension per geometry; z is kept only if every coordinate has one
    if coords and all(c.has_z() for c in coords):
        return [(c.x, c.y, c.z) for c in coords]
    return [(c.x, c.y) for c in coords]


def _coordinate(t: Sequence[float]) -> Coordinate:
    return Coordinate(*(float(v) for v in t[:3]))


def _coordinates(shape: BaseGeometry) -> List[Coordinate]:
    return [_coordinate(t) for t in shape.coords]


def _shapely_polygon(polygon: Polygon) -> sg.Polygon:
    if not polygon.exterior.coords:
        return sg.Polygon()
    return sg.Polygon(
        _tuples(polygon.exterior.coords),
        [_tuples(h.coords) for h in polygon.holes],
    )


def _polygon(shape: sg.Polygon) -> Polygon:
    if shape.is_empty:
        return Polygon()
    return Polygon(
        exterior=LinearRing(_coordinates(shape.exterior)),
        holes=[LinearRing(_coordinates(r)) for r in shape.interiors],
    )


def to_shapely(geometry: Geometry) -> BaseGeometry:
    """
    Convert a geometry into the equivalent shapely geometry.

    A Point whose x or y is NaN becomes an empty shapely Point.

    Args:
        geometry: The geometry to convert

    Returns:
        A shapely geometry of the same type

    Raises:
        UnsupportedGeometryType: If the value is not one of the seven geometry variants

    Examples:
        >>> to_shapely(Point.from_xy(1.0, 2.0)).wkt
        'POINT (1 2)'
    """
    if isinstance(geometry, Point):
        if not geometry.coord.is_set():
            return sg.Point()
        return sg.Point(geometry.coord.as_tuple())
    if isinstance(geometry, LineString):
        return sg.LineString(_tuples(geometry.coords))
    if isinstance(geometry, Polygon):
        return _shapely_polygon(geometry)
    if isinstance(geometry, MultiPoint):
        return sg.MultiPoint(
            [p.coord.as_tuple() for p in geometry.points if p.coord.is_set()]
        )
    if isinstance(geometry, MultiLineString):
        return sg.MultiLineString([_tuples(line.coords) for line in geometry.lines])
    if isinstance(geometry, MultiPolygon):
        return sg.MultiPolygon([_shapely_polygon(p) for p in geometry.polygons])
    if isinstance(geometry, GeometryCollection):
        return sg.GeometryCollection([to_shapely(g) for g in geometry.geometries])
    raise UnsupportedGeometryType(geometry)


def from_shapely(shape: BaseGeometry) -> Geometry:
    """
    Convert a shapely geometry into a geojsoncodec geometry.

    An empty shapely Point becomes a Point with NaN ordinates; shapely LinearRings
    become LinearRings.

    Raises:
        UnsupportedGeometryType: If the shapely geometry has no GeoJSON counterpart
    """
    geom_type = shape.geom_type
    if geom_type == "Point":
        if shape.is_empty:
            return Point()
        return Point(_coordinate(shape.coords[0]))
    if geom_type == "LinearRing":
        return LinearRing(_coordinates(shape))
    if geom_type == "LineString":
        return LineString(_coordinates(shape))
    if geom_type == "Polygon":
        return _polygon(shape)
    if geom_type == "MultiPoint":
        return MultiPoint([Point(_coordinate(p.coords[0])) for p in shape.geoms])
    if geom_type == "MultiLineString":
        return MultiLineString([LineString(_coordinates(g)) for g in shape.geoms])
    if geom_type == "MultiPolygon":
        return MultiPolygon([_polygon(g) for g in shape.geoms])
    if geom_type == "GeometryCollection":
        return GeometryCollection([from_shapely(g) for g in shape.geoms])
    raise UnsupportedGeometryType(shape)


def to_wkt(geometry: Geometry) -> Optional[str]:
    """
    Write a geometry as Well-Known Text.

    Examples:
        >>> to_wkt(Point.from_xy(1.5, 2.0))
        'POINT (1.5 2)'
    """
    if geometry is None:
        return None
    return wkt.dumps(to_shapely(geometry), trim=True)


def from_wkt(text: Optional[str]) -> Optional[Geometry]:
    """
    Read a geometry from Well-Known Text.

    Args:
        text: The WKT string

    Returns:
        The geometry, or None if the text is None or blank

    Raises:
        ValueError: If the text is not valid WKT
    """
    if text is None or not text.strip():
        return None
    try:
        shape = wkt.loads(text)
    except ShapelyError as e:
        raise ValueError(f"Parsing WKT [{text}] failed.") from e
    return from_shapely(shape)
