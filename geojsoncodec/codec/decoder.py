from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from geojsoncodec.codec.coordinates import list_to_coordinate, to_ordinate
from geojsoncodec.codec.tokens import Token, TokenKind, tokens_from_value
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
from geojsoncodec.exceptions import DecodeError
from geojsoncodec.utils import keys

log = logging.getLogger(__name__)


class DecoderState(Enum):
    """
    States of the geometry object reader.

    AWAIT_KEY: between members of the geometry object
    IN_COORDINATES: inside the `coordinates` array; the reader tracks the nesting depth
    IN_GEOMETRIES: inside the `geometries` array, between member objects
    DONE: the closing brace of the geometry object has been consumed
    """

    AWAIT_KEY = "await_key"
    IN_COORDINATES = "in_coordinates"
    IN_GEOMETRIES = "in_geometries"
    DONE = "done"


def _position(value: Any) -> List[float]:
    if not isinstance(value, list):
        raise DecodeError(f"expected a position array but found {value!r}")
    if any(isinstance(v, list) for v in value):
        raise DecodeError(f"position {value!r} is nested too deep")
    return value


def _positions(value: Any) -> List[Coordinate]:
    if not isinstance(value, list):
        raise DecodeError(f"expected an array of positions but found {value!r}")
    return [list_to_coordinate(_position(v)) for v in value]


def _rings(value: Any) -> List[List[Coordinate]]:
    if not isinstance(value, list):
        raise DecodeError(f"expected an array of rings but found {value!r}")
    return [_positions(v) for v in value]


def _point(tree: Any) -> Point:
    return Point(list_to_coordinate(_position(tree)))


def _line_string(tree: Any) -> LineString:
    return LineString(_positions(tree))


def _polygon(tree: Any) -> Polygon:
    rings = _rings(tree)
    if not rings:
        return Polygon()
    return Polygon(
        exterior=LinearRing(rings[0]),
        holes=[LinearRing(r) for r in rings[1:]],
    )


def _multi_point(tree: Any) -> MultiPoint:
    return MultiPoint([Point(c) for c in _positions(tree)])


def _multi_line_string(tree: Any) -> MultiLineString:
    return MultiLineString([LineString(r) for r in _rings(tree)])


def _multi_polygon(tree: Any) -> MultiPolygon:
    if not isinstance(tree, list):
        raise DecodeError(f"expected an array of polygons but found {tree!r}")
    return MultiPolygon([_polygon(p) for p in tree])


# the coordinate tree is interpreted according to the declared type, never its shape
_BUILDERS: Dict[str, Callable[[Any], Geometry]] = {
    keys.POINT: _point,
    keys.LINE_STRING: _line_string,
    keys.POLYGON: _polygon,
    keys.MULTI_POINT: _multi_point,
    keys.MULTI_LINE_STRING: _multi_line_string,
    keys.MULTI_POLYGON: _multi_polygon,
}


class _GeometryObjectReader:
    """
    Reads the members of one geometry object from a token cursor.

    The opening brace has already been consumed when the reader starts. Tokens are
    pulled strictly forward and each one is handled by the transition registered for
    the current state and the token kind. Nested geometries of a collection are read
    to their closing brace by a child reader before the next sibling starts.
    """

    def __init__(self, cursor: Iterator[Token]):
        self._cursor = cursor
        self.state = DecoderState.AWAIT_KEY
        self.geom_type: Optional[str] = None
        self.coordinates: Optional[List[Any]] = None
        self.geometries: Optional[List[Geometry]] = None
        self._open_arrays: List[List[Any]] = []

    @property
    def depth(self) -> int:
        """Number of coordinate arrays currently open."""
        return len(self._open_arrays)

    def _next(self) -> Token:
        try:
            return next(self._cursor)
        except StopIteration:
            raise DecodeError(
                "token stream ended in the middle of a geometry object"
            ) from None

    def _expect_array(self, key: str):
        token = self._next()
        if token.kind is not TokenKind.START_ARRAY:
            raise DecodeError(f"member `{key}` must be an array")

    def _skip_value(self):
        nesting = 0
        while True:
            token = self._next()
            if token.kind in (TokenKind.START_OBJECT, TokenKind.START_ARRAY):
                nesting += 1
            elif token.kind in (TokenKind.END_OBJECT, TokenKind.END_ARRAY):
                nesting -= 1
                if nesting < 0:
                    raise DecodeError("member has no value")
            if nesting == 0 and token.kind is not TokenKind.KEY:
                return

    def read(self) -> Geometry:
        while self.state is not DecoderState.DONE:
            token = self._next()
            transition = _TRANSITIONS.get((self.state, token.kind))
            if transition is None:
                raise DecodeError(
                    f"unexpected {token.kind.value} token in state {self.state.value}"
                )
            transition(self, token)
        return self.build()

    def build(self) -> Geometry:
        if self.geom_type is None:
            raise DecodeError("geometry object has no `type` member")

        if self.geom_type == keys.GEOMETRY_COLLECTION:
            if self.geometries is None:
                raise DecodeError("GeometryCollection has no `geometries` member")
            return GeometryCollection(self.geometries)

        builder = _BUILDERS.get(self.geom_type)
        if builder is None:
            raise DecodeError(f"Geometry type [{self.geom_type}] is unsupported.")
        if self.coordinates is None:
            raise DecodeError(f"{self.geom_type} has no `coordinates` member")
        return builder(self.coordinates)

    # AWAIT_KEY

    def _on_key(self, token: Token):
        key = token.value
        if key == keys.TYPE_KEY:
            value = self._next()
            if value.kind is not TokenKind.VALUE or not isinstance(value.value, str):
                raise DecodeError("member `type` must be a string")
            self.geom_type = value.value
        elif key == keys.COORDINATES_KEY:
            self._expect_array(key)
            self.coordinates = []
            self._open_arrays = [self.coordinates]
            self.state = DecoderState.IN_COORDINATES
        elif key == keys.GEOMETRIES_KEY:
            self._expect_array(key)
            self.geometries = []
            self.state = DecoderState.IN_GEOMETRIES
        else:
            log.debug("skipping member %r of geometry object", key)
            self._skip_value()

    def _on_end_object(self, token: Token):
        self.state = DecoderState.DONE

    # IN_COORDINATES

    def _on_open_array(self, token: Token):
        nested: List[Any] = []
        self._open_arrays[-1].append(nested)
        self._open_arrays.append(nested)

    def _on_close_array(self, token: Token):
        self._open_arrays.pop()
        if not self._open_arrays:
            self.state = DecoderState.AWAIT_KEY

    def _on_ordinate(self, token: Token):
        self._open_arrays[-1].append(to_ordinate(token.value))

    # IN_GEOMETRIES

    def _on_member_geometry(self, token: Token):
        self.geometries.append(_GeometryObjectReader(self._cursor).read())

    def _on_geometries_end(self, token: Token):
        self.state = DecoderState.AWAIT_KEY


_TRANSITIONS: Dict[
    Tuple[DecoderState, TokenKind], Callable[[_GeometryObjectReader, Token], None]
] = {
    (DecoderState.AWAIT_KEY, TokenKind.KEY): _GeometryObjectReader._on_key,
    (DecoderState.AWAIT_KEY, TokenKind.END_OBJECT): _GeometryObjectReader._on_end_object,
    (DecoderState.IN_COORDINATES, TokenKind.START_ARRAY): _GeometryObjectReader._on_open_array,
    (DecoderState.IN_COORDINATES, TokenKind.END_ARRAY): _GeometryObjectReader._on_close_array,
    (DecoderState.IN_COORDINATES, TokenKind.VALUE): _GeometryObjectReader._on_ordinate,
    (DecoderState.IN_GEOMETRIES, TokenKind.START_OBJECT): _GeometryObjectReader._on_member_geometry,
    (DecoderState.IN_GEOMETRIES, TokenKind.END_ARRAY): _GeometryObjectReader._on_geometries_end,
}


class GeometryDecoder:
    """
    Decodes GeoJSON geometry objects into geometries.

    Two entry points share one state machine: decode() takes an already-parsed JSON
    value and decode_tokens() takes a forward-only token stream. The `type` member
    decides how the coordinate tree is read: Point expects a single position,
    LineString and MultiPoint an array of positions, Polygon and MultiLineString an
    array of those, and MultiPolygon one more level. Members other than type,
    coordinates and geometries (bbox, crs, ...) are consumed and ignored.

    Examples:
        >>> decoder = GeometryDecoder()
        >>> decoder.decode({"type": "Point", "coordinates": [1, 2]})
        Point(coord=Coordinate(x=1.0, y=2.0))
    """

    def decode(self, json_value: Mapping[str, Any]) -> Geometry:
        """
        Decode a geometry from an already-parsed JSON object.

        Args:
            json_value: The JSON object as a mapping

        Returns:
            The decoded geometry

        Raises:
            DecodeError: If the object is not a valid GeoJSON geometry
            MalformedNumber: If an ordinate is not a number
        """
        if not isinstance(json_value, Mapping):
            raise DecodeError(
                f"expected a geometry object but found {type(json_value).__name__}"
            )
        return self.decode_tokens(tokens_from_value(json_value))

    def decode_tokens(self, tokens: Iterable[Token]) -> Geometry:
        """
        Decode one geometry object from a token stream without buffering the document.

        The next token must open the geometry object. Tokens are consumed up to and
        including its closing brace, so an iterator passed in is left positioned right
        after the object.

        Each nested GeometryCollection is read by a recursive call, so the nesting
        depth is bounded by the interpreter's recursion limit (a few hundred levels
        with the default limit). Deeper documents are rejected with a DecodeError.

        Args:
            tokens: An iterable of Token values

        Returns:
            The decoded geometry

        Raises:
            DecodeError: If the stream is empty, does not start with an object, ends in
                the middle of the object, nests collections too deep, or the object is
                not a valid geometry
            MalformedNumber: If an ordinate is not a finite number
        """
        cursor = iter(tokens)
        first = next(cursor, None)
        if first is None:
            raise DecodeError("token stream is empty")
        if first.kind is not TokenKind.START_OBJECT:
            raise DecodeError(f"expected the start of an object but found {first.kind.value}")
        try:
            return _GeometryObjectReader(cursor).read()
        except RecursionError as e:
            raise DecodeError("geometry collections are nested too deep") from e


_DEFAULT_DECODER = GeometryDecoder()


def decode_geometry(json_value: Mapping[str, Any]) -> Geometry:
    return _DEFAULT_DECODER.decode(json_value)


def decode_geometry_tokens(tokens: Iterable[Token]) -> Geometry:
    return _DEFAULT_DECODER.decode_tokens(tokens)
