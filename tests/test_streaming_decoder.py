from unittest import TestCase

from geojsoncodec.codec.decoder import GeometryDecoder, decode_geometry_tokens
from geojsoncodec.codec.tokens import (
    END_ARRAY,
    END_OBJECT,
    START_ARRAY,
    START_OBJECT,
    Token,
    TokenKind,
    tokens_from_events,
    tokens_from_value,
)
from geojsoncodec.constructs.geometry import GeometryCollection, LineString, Point
from geojsoncodec.exceptions import DecodeError


def _key(name):
    return Token(TokenKind.KEY, name)


def _value(v):
    return Token(TokenKind.VALUE, v)


POINT_EVENTS = [
    ("start_map", None),
    ("map_key", "type"),
    ("string", "Point"),
    ("map_key", "coordinates"),
    ("start_array", None),
    ("number", 8.456),
    ("number", 3.567),
    ("end_array", None),
    ("end_map", None),
]


class TestTokens(TestCase):
    def test_tokens_from_value(self):
        tokens = list(tokens_from_value({"type": "Point", "coordinates": [1, 2]}))

        self.assertEqual(
            tokens,
            [
                START_OBJECT,
                _key("type"),
                _value("Point"),
                _key("coordinates"),
                START_ARRAY,
                _value(1),
                _value(2),
                END_ARRAY,
                END_OBJECT,
            ],
        )

    def test_tokens_from_events(self):
        tokens = list(tokens_from_events(POINT_EVENTS))

        self.assertEqual(tokens[0], START_OBJECT)
        self.assertEqual(tokens[1], _key("type"))
        self.assertEqual(tokens[5], _value(8.456))
        self.assertEqual(tokens[-1], END_OBJECT)

    def test_container_events_drop_their_value(self):
        tokens = list(tokens_from_events([("start_array", "ignored"), ("end_array", 3)]))

        self.assertEqual(tokens, [START_ARRAY, END_ARRAY])

    def test_unknown_event(self):
        with self.assertRaises(ValueError):
            list(tokens_from_events([("start_map", None), ("comment", "x")]))


class TestStreamingDecoder(TestCase):
    def setUp(self):
        self.decoder = GeometryDecoder()

    def test_decode_from_events(self):
        point = self.decoder.decode_tokens(tokens_from_events(POINT_EVENTS))

        self.assertIsInstance(point, Point)
        self.assertEqual(point.coord.as_tuple(), (8.456, 3.567))

    def test_integer_and_double_events(self):
        events = [
            ("start_map", None),
            ("map_key", "type"),
            ("string", "LineString"),
            ("map_key", "coordinates"),
            ("start_array", None),
            ("start_array", None),
            ("integer", 1),
            ("double", 2.5),
            ("end_array", None),
            ("end_array", None),
            ("end_map", None),
        ]

        line = decode_geometry_tokens(tokens_from_events(events))

        self.assertIsInstance(line, LineString)
        self.assertEqual(line.coords[0].as_tuple(), (1.0, 2.5))

    def test_reads_consecutive_objects_from_one_stream(self):
        """The cursor is left right after each decoded object"""
        values = [
            {"type": "Point", "coordinates": [1, 2]},
            {"type": "GeometryCollection", "geometries": [{"type": "Point", "coordinates": [3, 4]}]},
        ]
        cursor = (t for v in values for t in tokens_from_value(v))

        first = self.decoder.decode_tokens(cursor)
        second = self.decoder.decode_tokens(cursor)

        self.assertEqual(first.x, 1.0)
        self.assertIsInstance(second, GeometryCollection)
        self.assertEqual(second.geometries[0].x, 3.0)
        self.assertIsNone(next(cursor, None))

    def test_tokens_are_consumed_lazily(self):
        consumed = []

        def tokens():
            for t in tokens_from_value({"type": "Point", "coordinates": [1, 2]}):
                consumed.append(t)
                yield t
            raise AssertionError("read past the end of the geometry object")

        cursor = tokens()
        self.decoder.decode_tokens(cursor)

        self.assertEqual(len(consumed), 9)

    def test_type_after_coordinates(self):
        tokens = [
            START_OBJECT,
            _key("coordinates"),
            START_ARRAY,
            _value(1),
            _value(2),
            END_ARRAY,
            _key("type"),
            _value("Point"),
            END_OBJECT,
        ]

        point = self.decoder.decode_tokens(tokens)

        self.assertEqual(point.coord.as_tuple(), (1.0, 2.0))

    def test_skips_nested_unknown_member(self):
        tokens = tokens_from_value(
            {
                "type": "Point",
                "properties": {"nested": {"deeper": [1, [2, {"x": None}]]}},
                "coordinates": [5, 6],
            }
        )

        point = self.decoder.decode_tokens(tokens)

        self.assertEqual(point.coord.as_tuple(), (5.0, 6.0))

    def test_truncated_stream(self):
        tokens = list(tokens_from_events(POINT_EVENTS))[:-1]

        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens(tokens)

    def test_truncated_inside_collection(self):
        tokens = list(
            tokens_from_value(
                {"type": "GeometryCollection", "geometries": [{"type": "Point", "coordinates": [1, 2]}]}
            )
        )[:-4]

        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens(tokens)

    def test_empty_stream(self):
        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens([])

    def test_stream_must_start_with_object(self):
        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens(tokens_from_value([1, 2]))

    def test_key_without_value(self):
        tokens = [START_OBJECT, _key("type"), _value("Point"), _key("bbox"), END_OBJECT]

        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens(tokens)

    def test_unexpected_token_in_geometries(self):
        tokens = [
            START_OBJECT,
            _key("type"),
            _value("GeometryCollection"),
            _key("geometries"),
            START_ARRAY,
            START_ARRAY,
            END_ARRAY,
            END_ARRAY,
            END_OBJECT,
        ]

        with self.assertRaises(DecodeError):
            self.decoder.decode_tokens(tokens)

    def test_unsupported_type_in_stream(self):
        tokens = tokens_from_value({"type": "Circle", "coordinates": [0, 0]})

        with self.assertRaises(DecodeError) as ctx:
            self.decoder.decode_tokens(tokens)
        self.assertIn("Circle", str(ctx.exception))
