"""Attribute names of the GeoJSON geometry object.

The encoder writes these keys in the order type, bbox, coordinates|geometries.
"""

TYPE_KEY = "type"

BBOX_KEY = "bbox"

COORDINATES_KEY = "coordinates"

GEOMETRIES_KEY = "geometries"

# geometry type tags, RFC 7946 section 1.4
POINT = "Point"
LINE_STRING = "LineString"
POLYGON = "Polygon"
MULTI_POINT = "MultiPoint"
MULTI_LINE_STRING = "MultiLineString"
MULTI_POLYGON = "MultiPolygon"
GEOMETRY_COLLECTION = "GeometryCollection"
