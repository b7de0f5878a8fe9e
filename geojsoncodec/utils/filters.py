from __future__ import annotations

import logging
import math
from typing import Any, NamedTuple

from pyproj import CRS
from pyproj.exceptions import ProjError

from geojsoncodec.constructs.coordinate import Coordinate
from geojsoncodec.constructs.geometry import CoordinateFilter, Geometry
from geojsoncodec.utils.crs import (
    EARTH_RADIUS_METERS,
    LATLON_CRS,
    MERCATOR_ALIAS,
    MERCATOR_MAX_LAT,
    MERCATOR_MIN_LAT,
    XY_CRS,
)

log = logging.getLogger(__name__)


class Wgs84ToMercatorFilter(NamedTuple):
    """
    Projects a WGS84 longitude/latitude coordinate onto the spherical Mercator plane.

    x' = x * R * pi / 180 and y' = R * ln(tan(pi / 4 + radians(y) / 2)), where y is
    first clamped to [-85.05112878, 85.05112878] so the poles do not project to
    infinity. NaN ordinates are left untouched.

    Attributes:
        earth_radius_meters: The sphere radius R. Default is 6378137 m.
        removing_z: If True, the z ordinate of every visited coordinate is unset

    Examples:
        >>> from geojsoncodec.constructs.coordinate import Coordinate
        >>> c = Coordinate(180.0, 0.0)
        >>> Wgs84ToMercatorFilter()(c)
        >>> round(c.x, 2)
        20037508.34
    """

    earth_radius_meters: float = EARTH_RADIUS_METERS
    removing_z: bool = False

    def __call__(self, coord: Coordinate):
        if coord is None:
            return
        if not math.isnan(coord.x):
            coord.x = coord.x * self.earth_radius_meters * math.pi / 180.0
        if not math.isnan(coord.y):
            lat = min(max(coord.y, MERCATOR_MIN_LAT), MERCATOR_MAX_LAT)
            coord.y = (
                math.log(math.tan(math.pi / 4 + math.radians(lat) / 2))
                * self.earth_radius_meters
            )
        if self.removing_z:
            coord.z = math.nan


class MercatorToWgs84Filter(NamedTuple):
    """
    Unprojects a spherical Mercator coordinate back to WGS84 longitude/latitude.

    x' = x * 180 / (R * pi) and y' = degrees(2 * atan(exp(y / R)) - pi / 2).
    NaN ordinates are left untouched.

    Attributes:
        earth_radius_meters: The sphere radius R. Default is 6378137 m.
        removing_z: If True, the z ordinate of every visited coordinate is unset
    """

    earth_radius_meters: float = EARTH_RADIUS_METERS
    removing_z: bool = False

    def __call__(self, coord: Coordinate):
        if coord is None:
            return
        if not math.isnan(coord.x):
            coord.x = (coord.x * 180.0) / (self.earth_radius_meters * math.pi)
        if not math.isnan(coord.y):
            coord.y = math.degrees(
                2 * math.atan(math.exp(coord.y / self.earth_radius_meters))
                - math.pi / 2
            )
        if self.removing_z:
            coord.z = math.nan


class SwapAxesFilter(NamedTuple):
    """Exchanges x and y, for sources that write coordinates in latitude, longitude order."""

    def __call__(self, coord: Coordinate):
        if coord is None:
            return
        coord.x, coord.y = coord.y, coord.x


def apply_filter(
    geometry: Geometry, coordinate_filter: CoordinateFilter, in_place: bool = False
) -> Geometry:
    """
    Run a coordinate filter over every leaf coordinate of a geometry.

    Args:
        geometry: The geometry to transform
        coordinate_filter: A callable that mutates a single Coordinate
        in_place: If True, the given geometry is rewritten. If False (the default), a
            deep copy is transformed and the given geometry stays unmodified.

    Returns:
        The transformed geometry; the given instance when in_place is True
    """
    if geometry is None:
        return None
    target = geometry if in_place else geometry.copy()
    log.debug("applying %s to %s", type(coordinate_filter).__name__, target.geom_type)
    return target.apply(coordinate_filter)


def transform_wgs84_to_mercator(
    geometry: Geometry, in_place: bool = False, remove_z: bool = False
) -> Geometry:
    """
    Project a WGS84 geometry to spherical Mercator.

    Examples:
        >>> from geojsoncodec.constructs.geometry import Point
        >>> projected = transform_wgs84_to_mercator(Point.from_xy(8.456, 3.567))
        >>> round(projected.x)
        941318
    """
    return apply_filter(geometry, Wgs84ToMercatorFilter(removing_z=remove_z), in_place)


def transform_mercator_to_wgs84(
    geometry: Geometry, in_place: bool = False, remove_z: bool = False
) -> Geometry:
    """Unproject a spherical Mercator geometry to WGS84."""
    return apply_filter(geometry, MercatorToWgs84Filter(removing_z=remove_z), in_place)


def swap_axes(geometry: Geometry, in_place: bool = False) -> Geometry:
    """Exchange x and y of every coordinate of a geometry."""
    return apply_filter(geometry, SwapAxesFilter(), in_place)


def parse_crs(crs: Any) -> CRS:
    """
    Parse anything pyproj.CRS accepts, plus the legacy EPSG:900913 code for Web Mercator.

    Raises:
        ValueError: If the value cannot be parsed into a CRS
    """
    if isinstance(crs, CRS):
        return crs
    if str(crs).strip().upper() in (MERCATOR_ALIAS, "900913"):
        return XY_CRS
    try:
        return CRS(crs)
    except ProjError as e:
        raise ValueError(f"Could not parse crs: {crs}") from e


def transform(
    geometry: Geometry, from_crs: Any, to_crs: Any, in_place: bool = False
) -> Geometry:
    """
    Transform a geometry between WGS84 (EPSG:4326) and Web Mercator (EPSG:3857).

    Args:
        geometry: The geometry to transform
        from_crs: The CRS of the geometry. Can be a pyproj.CRS object, an EPSG code as a
            string (e.g., 'EPSG:4326'), an integer EPSG code, or any CRS format that
            pyproj.CRS() accepts
        to_crs: The target CRS, in the same forms
        in_place: If True, the given geometry is rewritten instead of a copy

    Returns:
        The transformed geometry. If both CRS are equal the geometry is returned
        unchanged (a copy unless in_place is True).

    Raises:
        ValueError: If a CRS cannot be parsed, or the pair is not EPSG:4326 <-> EPSG:3857
    """
    source, target = parse_crs(from_crs), parse_crs(to_crs)

    if source == target:
        return geometry if in_place else geometry.copy()
    if source == LATLON_CRS and target == XY_CRS:
        return transform_wgs84_to_mercator(geometry, in_place)
    if source == XY_CRS and target == LATLON_CRS:
        return transform_mercator_to_wgs84(geometry, in_place)

    raise ValueError(
        f"Unable to transform {source.to_string()} -> {target.to_string()}; only "
        "EPSG:4326 and EPSG:3857 are supported"
    )
