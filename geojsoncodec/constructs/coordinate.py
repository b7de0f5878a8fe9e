from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple


def _same(a: float, b: float, tolerance: float) -> bool:
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    return abs(a - b) <= tolerance


@dataclass
class Coordinate:
    """
    Represents a single position with an x, a y and an optional z ordinate.

    A Coordinate is the leaf of every geometry. NaN in an ordinate means "not set":
    a coordinate without a finite z is two-dimensional, and a coordinate whose x or y
    is NaN is not set at all and encodes to an empty coordinate array.

    Coordinates are mutable so that the CRS filters can rewrite a geometry in place;
    call copy() (or Geometry.copy()) when the source must stay unmodified.

    Attributes:
        x: The x ordinate (longitude in lat/lon systems, easting in projected systems)
        y: The y ordinate (latitude in lat/lon systems, northing in projected systems)
        z: The optional z ordinate; NaN when absent

    Examples:
        >>> from geojsoncodec.constructs.coordinate import Coordinate
        >>> c = Coordinate(8.456, 3.567)
        >>> c.has_z()
        False
        >>> Coordinate(1.0, 2.0, 3.0).as_tuple()
        (1.0, 2.0, 3.0)
    """

    x: float = math.nan
    y: float = math.nan
    z: float = math.nan

    def __repr__(self):
        if self.has_z():
            return f"Coordinate(x={self.x}, y={self.y}, z={self.z})"
        return f"Coordinate(x={self.x}, y={self.y})"

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> Coordinate:
        """
        Create a coordinate from WGS84 latitude and longitude values.

        GeoJSON positions are written longitude first, so the longitude becomes x and
        the latitude becomes y.

        Args:
            lat: The latitude in decimal degrees
            lon: The longitude in decimal degrees

        Returns:
            A two-dimensional coordinate

        Examples:
            >>> Coordinate.from_lat_lon(3.567, 8.456)
            Coordinate(x=8.456, y=3.567)
        """
        return cls(float(lon), float(lat))

    @property
    def latitude(self) -> float:
        """The y ordinate, read as a WGS84 latitude."""
        return self.y

    @property
    def longitude(self) -> float:
        """The x ordinate, read as a WGS84 longitude."""
        return self.x

    def is_set(self) -> bool:
        """True when both x and y carry a value."""
        return not (math.isnan(self.x) or math.isnan(self.y))

    def has_z(self) -> bool:
        """True when z is a finite number."""
        return math.isfinite(self.z)

    def as_tuple(self) -> Tuple[float, ...]:
        if self.has_z():
            return self.x, self.y, self.z
        return self.x, self.y

    def copy(self) -> Coordinate:
        return Coordinate(self.x, self.y, self.z)

    def equals_exact(self, other: Coordinate, tolerance: float = 0.0) -> bool:
        """
        Compare two coordinates ordinate by ordinate.

        Unlike ==, two NaN ordinates compare equal, so an unset coordinate equals
        another unset coordinate.

        Args:
            other: The coordinate to compare with
            tolerance: The maximum absolute difference allowed per ordinate

        Returns:
            True if every ordinate matches within the tolerance
        """
        if not isinstance(other, Coordinate):
            return False
        return (
            _same(self.x, other.x, tolerance)
            and _same(self.y, other.y, tolerance)
            and _same(self.z, other.z, tolerance)
        )


def create_coordinate(x: float, y: float, z: Optional[float] = None) -> Coordinate:
    """
    Create a coordinate, leaving z unset when it is None or not finite.

    Examples:
        >>> create_coordinate(1.0, 2.0, float("nan")).has_z()
        False
    """
    if z is None or not math.isfinite(z):
        return Coordinate(float(x), float(y))
    return Coordinate(float(x), float(y), float(z))
