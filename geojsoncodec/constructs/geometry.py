from __future__ import annotations

import copy
import math
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Iterable, Iterator, List, Optional, Sequence

from geojsoncodec.constructs.coordinate import Coordinate
from geojsoncodec.utils import keys

CoordinateFilter = Callable[[Coordinate], None]


class Geometry(metaclass=ABCMeta):
    """
    Abstract base class of the seven GeoJSON geometry variants.

    The set of variants is closed: Point, LineString (with its LinearRing subclass),
    Polygon, MultiPoint, MultiLineString, MultiPolygon and GeometryCollection. The
    encoder, decoder, bounding box calculator and CRS filters all dispatch over
    exactly these classes.

    Every geometry is a tree whose leaves are Coordinate objects. coordinates() walks
    the leaves in document order and apply() runs a filter over each of them in place.
    """

    geom_type: ClassVar[str]

    @abstractmethod
    def parts(self) -> Sequence:
        """
        Get the direct children of this geometry.

        Returns:
            Coordinates for Point and LineString, rings for Polygon, member geometries
            for the multi variants and GeometryCollection
        """

    @abstractmethod
    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every leaf coordinate in document order."""

    def apply(self, coordinate_filter: CoordinateFilter) -> Geometry:
        """
        Run a filter over every leaf coordinate of this geometry, mutating it in place.

        Nested rings, multi-part members and collection members are all visited.
        Use copy() first when the original geometry has to stay unmodified.

        Args:
            coordinate_filter: A callable that receives each Coordinate and mutates it

        Returns:
            This geometry, for chaining
        """
        for c in self.coordinates():
            coordinate_filter(c)
        return self

    def copy(self) -> Geometry:
        return copy.deepcopy(self)

    @property
    def is_empty(self) -> bool:
        return not any(c.is_set() for c in self.coordinates())

    @property
    def dimension(self) -> Optional[int]:
        """
        Get the highest ordinate index carrying a value.

        Returns:
            2 if any coordinate has a z, 1 if any has a y, 0 if only x values are set,
            None if the geometry has no coordinate with a value
        """
        max_dim = -1
        for c in self.coordinates():
            if c.has_z():
                return 2
            if not math.isnan(c.y):
                max_dim = max(max_dim, 1)
            elif not math.isnan(c.x):
                max_dim = max(max_dim, 0)
        return max_dim if max_dim > -1 else None

    def equals_exact(self, other: Geometry, tolerance: float = 0.0) -> bool:
        """
        Compare two geometries structurally.

        The geometries must be of the same type, have the same number of parts at every
        level and matching coordinates within the tolerance. NaN ordinates compare equal
        to NaN, and collections are compared member by member in order.

        Args:
            other: The geometry to compare with
            tolerance: The maximum absolute difference allowed per ordinate

        Returns:
            True if both geometries are equal within the tolerance
        """
        if not isinstance(other, Geometry) or self.geom_type != other.geom_type:
            return False
        mine, theirs = self.parts(), other.parts()
        if len(mine) != len(theirs):
            return False
        return all(a.equals_exact(b, tolerance) for a, b in zip(mine, theirs))


@dataclass
class Point(Geometry):
    geom_type: ClassVar[str] = keys.POINT

    coord: Coordinate = field(default_factory=Coordinate)

    @classmethod
    def from_xy(cls, x: float, y: float, z: float = float("nan")) -> Point:
        return cls(Coordinate(x, y, z))

    @classmethod
    def from_lat_lon(cls, lat: float, lon: float) -> Point:
        """
        Create a point from WGS84 latitude and longitude values.

        Examples:
            >>> Point.from_lat_lon(3.567, 8.456).coord
            Coordinate(x=8.456, y=3.567)
        """
        return cls(Coordinate.from_lat_lon(lat, lon))

    @property
    def x(self) -> float:
        return self.coord.x

    @property
    def y(self) -> float:
        return self.coord.y

    @property
    def latitude(self) -> float:
        return self.coord.latitude

    @property
    def longitude(self) -> float:
        return self.coord.longitude

    def parts(self) -> Sequence[Coordinate]:
        return [self.coord]

    def coordinates(self) -> Iterator[Coordinate]:
        yield self.coord


@dataclass
class LineString(Geometry):
    geom_type: ClassVar[str] = keys.LINE_STRING

    coords: List[Coordinate] = field(default_factory=list)

    def __len__(self):
        return len(self.coords)

    def parts(self) -> Sequence[Coordinate]:
        return self.coords

    def coordinates(self) -> Iterator[Coordinate]:
        yield from self.coords


@dataclass
class LinearRing(LineString):
    """
    A closed LineString used as a polygon boundary.

    The first and the last coordinate are expected to be equal. The codec does not
    check this; use closed() to build a ring that is guaranteed to be closed.
    """

    @classmethod
    def closed(cls, coords: Iterable[Coordinate]) -> LinearRing:
        """
        Build a ring, appending a copy of the first coordinate if the ring is open.

        Examples:
            >>> ring = LinearRing.closed([Coordinate(0, 0), Coordinate(1, 0), Coordinate(1, 1)])
            >>> len(ring)
            4
        """
        coords = list(coords)
        if coords and not coords[0].equals_exact(coords[-1]):
            coords.append(coords[0].copy())
        return cls(coords)

    @property
    def is_closed(self) -> bool:
        return not self.coords or self.coords[0].equals_exact(self.coords[-1])


@dataclass
class Polygon(Geometry):
    geom_type: ClassVar[str] = keys.POLYGON

    exterior: LinearRing = field(default_factory=LinearRing)
    holes: List[LinearRing] = field(default_factory=list)

    @property
    def rings(self) -> List[LinearRing]:
        """The exterior ring followed by the holes, in encoding order."""
        return [self.exterior, *self.holes]

    def parts(self) -> Sequence[LinearRing]:
        return self.rings

    def coordinates(self) -> Iterator[Coordinate]:
        for ring in self.rings:
            yield from ring.coords


@dataclass
class MultiPoint(Geometry):
    geom_type: ClassVar[str] = keys.MULTI_POINT

    points: List[Point] = field(default_factory=list)

    def parts(self) -> Sequence[Point]:
        return self.points

    def coordinates(self) -> Iterator[Coordinate]:
        for p in self.points:
            yield p.coord


@dataclass
class MultiLineString(Geometry):
    geom_type: ClassVar[str] = keys.MULTI_LINE_STRING

    lines: List[LineString] = field(default_factory=list)

    def parts(self) -> Sequence[LineString]:
        return self.lines

    def coordinates(self) -> Iterator[Coordinate]:
        for line in self.lines:
            yield from line.coords


@dataclass
class MultiPolygon(Geometry):
    geom_type: ClassVar[str] = keys.MULTI_POLYGON

    polygons: List[Polygon] = field(default_factory=list)

    def parts(self) -> Sequence[Polygon]:
        return self.polygons

    def coordinates(self) -> Iterator[Coordinate]:
        for polygon in self.polygons:
            yield from polygon.coordinates()


@dataclass
class GeometryCollection(Geometry):
    geom_type: ClassVar[str] = keys.GEOMETRY_COLLECTION

    geometries: List[Geometry] = field(default_factory=list)

    def __len__(self):
        return len(self.geometries)

    def parts(self) -> Sequence[Geometry]:
        return self.geometries

    def coordinates(self) -> Iterator[Coordinate]:
        for g in self.geometries:
            yield from g.coordinates()
