from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from geojsoncodec.constructs.coordinate import Coordinate, create_coordinate
from geojsoncodec.constructs.geometry import Geometry, LinearRing, Polygon

log = logging.getLogger(__name__)

BoundingBox = List[float]


def _coordinate_array(geometries: Iterable[Geometry]) -> np.ndarray:
    rows = [(c.x, c.y, c.z) for g in geometries for c in g.coordinates()]
    if not rows:
        return np.empty((0, 3), dtype=float)
    return np.array(rows, dtype=float)


def bounding_box(
    geometry: Union[Geometry, Iterable[Geometry]],
) -> Optional[BoundingBox]:
    """
    Compute the minimal axis-aligned box enclosing every coordinate of a geometry.

    Every leaf coordinate is scanned, recursing through rings, multi-part members and
    collections. A sequence of geometries is boxed as if it were one collection, which
    is how a feature collection is boxed without building a GeometryCollection.

    Coordinates without a finite x and y are skipped. The box is three-dimensional when at
    least one remaining coordinate has a finite z; the z bounds are then taken over the
    coordinates that have one and are not widened by those that don't.

    Args:
        geometry: A geometry or a sequence of geometries

    Returns:
        [min_x, min_y, max_x, max_y] or [min_x, min_y, min_z, max_x, max_y, max_z],
        or None when no coordinate has both an x and a y

    Examples:
        >>> from geojsoncodec.constructs.geometry import MultiPoint, Point
        >>> bounding_box(MultiPoint([Point.from_xy(1, 20), Point.from_xy(10, 2)]))
        [1.0, 2.0, 10.0, 20.0]
    """
    if geometry is None:
        return None
    geometries = [geometry] if isinstance(geometry, Geometry) else list(geometry)

    coords = _coordinate_array(geometries)
    coords = coords[np.isfinite(coords[:, 0]) & np.isfinite(coords[:, 1])]
    if len(coords) == 0:
        return None

    min_x, min_y = coords[:, :2].min(axis=0)
    max_x, max_y = coords[:, :2].max(axis=0)

    z = coords[:, 2]
    z = z[np.isfinite(z)]
    if len(z) == 0:
        return [float(min_x), float(min_y), float(max_x), float(max_y)]

    return [
        float(min_x),
        float(min_y),
        float(z.min()),
        float(max_x),
        float(max_y),
        float(z.max()),
    ]


def _is_box(box: Optional[Sequence[float]]) -> bool:
    return box is not None and len(box) in (4, 6)


def south_west(box: Optional[Sequence[float]]) -> Optional[Coordinate]:
    """The (min_x, min_y) corner, or None if box is not a 4 or 6 number box."""
    if not _is_box(box):
        return None
    return create_coordinate(box[0], box[1])


def south_east(box: Optional[Sequence[float]]) -> Optional[Coordinate]:
    """The (max_x, min_y) corner, or None if box is not a 4 or 6 number box."""
    if not _is_box(box):
        return None
    if len(box) == 6:
        # x0, y0, z0, x1, y1, z1
        return create_coordinate(box[3], box[1])
    return create_coordinate(box[2], box[1])


def north_east(box: Optional[Sequence[float]]) -> Optional[Coordinate]:
    """The (max_x, max_y) corner, or None if box is not a 4 or 6 number box."""
    if not _is_box(box):
        return None
    if len(box) == 6:
        return create_coordinate(box[3], box[4])
    return create_coordinate(box[2], box[3])


def north_west(box: Optional[Sequence[float]]) -> Optional[Coordinate]:
    """The (min_x, max_y) corner, or None if box is not a 4 or 6 number box."""
    if not _is_box(box):
        return None
    if len(box) == 6:
        return create_coordinate(box[0], box[4])
    return create_coordinate(box[0], box[3])


def box_as_polygon(box: Optional[Sequence[float]]) -> Optional[Polygon]:
    """
    Build the rectangle of a bounding box as a two-dimensional polygon.

    The exterior ring is the closed five-point ring [SW, SE, NE, NW, SW].

    Args:
        box: A 4 or 6 number bounding box

    Returns:
        The rectangle polygon, or None if box is not a 4 or 6 number box
    """
    if not _is_box(box):
        return None
    sw = south_west(box)
    ring = LinearRing([sw, south_east(box), north_east(box), north_west(box), sw.copy()])
    return Polygon(exterior=ring)


def bounding_box_as_polygon(
    geometry: Union[Geometry, Iterable[Geometry]],
) -> Optional[Polygon]:
    """
    Compute the bounding box of a geometry and return it as a rectangle polygon.

    Returns:
        The rectangle polygon, or None when the geometry has no coordinate with both
        an x and a y
    """
    box = bounding_box(geometry)
    if box is None:
        log.debug("no bounding box for an empty geometry")
        return None
    return box_as_polygon(box)
