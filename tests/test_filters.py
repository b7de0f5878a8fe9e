import math
from unittest import TestCase
from unittest.mock import Mock

from pyproj import CRS, Transformer

from geojsoncodec.constructs.coordinate import Coordinate
from geojsoncodec.constructs.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiPolygon,
    Point,
    Polygon,
)
from geojsoncodec.utils.crs import LATLON_CRS, MERCATOR_MAX_LAT, XY_CRS
from geojsoncodec.utils.filters import (
    MercatorToWgs84Filter,
    SwapAxesFilter,
    Wgs84ToMercatorFilter,
    apply_filter,
    parse_crs,
    swap_axes,
    transform,
    transform_mercator_to_wgs84,
    transform_wgs84_to_mercator,
)


def _polygon():
    exterior = LinearRing.closed(
        [Coordinate(8.0, 50.0), Coordinate(9.0, 50.0), Coordinate(9.0, 51.0, 120.0)]
    )
    return Polygon(exterior)


class TestMercatorFilters(TestCase):
    def test_projection_matches_pyproj(self):
        transformer = Transformer.from_crs(LATLON_CRS, XY_CRS, always_xy=True)
        expected_x, expected_y = transformer.transform(8.456, 3.567)

        c = Coordinate(8.456, 3.567)
        Wgs84ToMercatorFilter()(c)

        self.assertAlmostEqual(c.x, expected_x, places=3)
        self.assertAlmostEqual(c.y, expected_y, places=3)

    def test_round_trip_is_within_tolerance(self):
        projected = transform_wgs84_to_mercator(Point.from_xy(8.456, 3.567))
        unprojected = transform_mercator_to_wgs84(projected)

        self.assertAlmostEqual(unprojected.x, 8.456, delta=0.001)
        self.assertAlmostEqual(unprojected.y, 3.567, delta=0.001)

    def test_latitude_is_clamped(self):
        beyond, at_limit = Coordinate(0.0, 86.0), Coordinate(0.0, MERCATOR_MAX_LAT)
        south = Coordinate(0.0, -90.0)

        for c in (beyond, at_limit, south):
            Wgs84ToMercatorFilter()(c)

        self.assertEqual(beyond.y, at_limit.y)
        self.assertAlmostEqual(beyond.y, 20037508.34, places=0)
        self.assertAlmostEqual(south.y, -at_limit.y, places=6)
        self.assertTrue(math.isfinite(south.y))

    def test_nan_ordinates_are_left_alone(self):
        c = Coordinate(math.nan, 10.0)

        Wgs84ToMercatorFilter()(c)
        self.assertTrue(math.isnan(c.x))
        self.assertNotEqual(c.y, 10.0)

        c = Coordinate(10.0, math.nan)
        MercatorToWgs84Filter()(c)
        self.assertTrue(math.isnan(c.y))

    def test_none_is_ignored(self):
        Wgs84ToMercatorFilter()(None)
        MercatorToWgs84Filter()(None)
        SwapAxesFilter()(None)

    def test_z_is_kept_unless_removed(self):
        c = Coordinate(1.0, 2.0, 3.0)
        Wgs84ToMercatorFilter()(c)
        self.assertEqual(c.z, 3.0)

        Wgs84ToMercatorFilter(removing_z=True)(c)
        self.assertFalse(c.has_z())

        c = Coordinate(1.0, 2.0, 3.0)
        MercatorToWgs84Filter(removing_z=True)(c)
        self.assertFalse(c.has_z())

    def test_custom_earth_radius(self):
        c = Coordinate(180.0, 0.0)

        Wgs84ToMercatorFilter(earth_radius_meters=1.0)(c)

        self.assertAlmostEqual(c.x, math.pi)
        self.assertAlmostEqual(c.y, 0.0)


class TestApplyFilter(TestCase):
    def test_copy_by_default(self):
        polygon = _polygon()

        projected = transform_wgs84_to_mercator(polygon)

        self.assertIsNot(projected, polygon)
        self.assertEqual(polygon.exterior.coords[0].x, 8.0)
        self.assertGreater(projected.exterior.coords[0].x, 800000)

    def test_in_place(self):
        polygon = _polygon()

        projected = transform_wgs84_to_mercator(polygon, in_place=True)

        self.assertIs(projected, polygon)
        self.assertGreater(polygon.exterior.coords[0].x, 800000)

    def test_remove_z(self):
        projected = transform_wgs84_to_mercator(_polygon(), remove_z=True)

        self.assertEqual(projected.dimension, 1)

    def test_filter_visits_every_coordinate(self):
        collection = GeometryCollection(
            [
                Point.from_xy(1, 2),
                MultiPolygon([_polygon(), _polygon()]),
                GeometryCollection([LineString([Coordinate(0, 0), Coordinate(1, 1)])]),
            ]
        )
        coordinate_filter = Mock()

        apply_filter(collection, coordinate_filter)

        self.assertEqual(coordinate_filter.call_count, 1 + 4 + 4 + 2)

    def test_apply_filter_none(self):
        self.assertIsNone(apply_filter(None, SwapAxesFilter()))

    def test_swap_axes(self):
        line = LineString([Coordinate(50.0, 8.0), Coordinate(51.0, 9.0, 4.0)])

        swapped = swap_axes(line)

        self.assertEqual([c.as_tuple() for c in swapped.coords], [(8.0, 50.0), (9.0, 51.0, 4.0)])
        self.assertEqual(line.coords[0].x, 50.0)

    def test_swap_axes_in_place(self):
        point = Point.from_xy(1, 2)

        swap_axes(point, in_place=True)

        self.assertEqual(point.coord.as_tuple(), (2.0, 1.0))


class TestTransform(TestCase):
    def test_parse_crs(self):
        self.assertEqual(parse_crs("EPSG:4326"), LATLON_CRS)
        self.assertEqual(parse_crs(3857), XY_CRS)
        self.assertEqual(parse_crs("EPSG:900913"), XY_CRS)
        self.assertIs(parse_crs(XY_CRS), XY_CRS)

    def test_invalid_crs(self):
        with self.assertRaises(ValueError):
            parse_crs("not a crs")

    def test_wgs84_to_mercator(self):
        projected = transform(Point.from_xy(8.456, 3.567), "EPSG:4326", "EPSG:900913")

        self.assertEqual(round(projected.x), 941318)

    def test_mercator_to_wgs84(self):
        point = transform(Point.from_xy(941318.0, 397333.0), 3857, CRS(4326))

        self.assertAlmostEqual(point.x, 8.456, delta=0.001)
        self.assertAlmostEqual(point.y, 3.567, delta=0.001)

    def test_same_crs_returns_copy(self):
        point = Point.from_xy(1, 2)

        result = transform(point, "EPSG:4326", 4326)

        self.assertIsNot(result, point)
        self.assertTrue(result.equals_exact(point))
        self.assertIs(transform(point, 4326, 4326, in_place=True), point)

    def test_unsupported_pair(self):
        with self.assertRaises(ValueError):
            transform(Point.from_xy(1, 2), "EPSG:4326", "EPSG:32632")
