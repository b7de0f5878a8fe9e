"""Coordinate Reference System (CRS) constants used throughout geojsoncodec.

This module defines the CRS objects and the spherical-Mercator parameters used by
the coordinate filters:
- LATLON_CRS: WGS84 geographic coordinates (EPSG:4326)
- XY_CRS: Web Mercator projected coordinates (EPSG:3857)
"""

from pyproj import CRS

# WGS84 latitude/longitude coordinate system (EPSG:4326)
# Range: latitude [-90, 90], longitude [-180, 180]
LATLON_CRS = CRS(4326)

# Web Mercator projected coordinate system (EPSG:3857)
# Coordinates are in meters (easting, northing)
XY_CRS = CRS(3857)

# The legacy "Google" code for Web Mercator; PROJ does not know it
MERCATOR_ALIAS = "EPSG:900913"

# Sphere radius used by the closed-form Mercator formulas (WGS84 semi-major axis)
EARTH_RADIUS_METERS = 6378137.0

# Latitude bounds of the square Web Mercator world
MERCATOR_MAX_LAT = 85.05112878
MERCATOR_MIN_LAT = -85.05112878
