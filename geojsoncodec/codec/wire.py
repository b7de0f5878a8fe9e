"""Reading and writing GeoJSON geometry documents as bytes and files."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Union

import msgspec

from geojsoncodec.codec.decoder import decode_geometry
from geojsoncodec.codec.encoder import GeometryEncoder
from geojsoncodec.codec.formatter import DEFAULT_FORMATTER, CoordinateFormatter
from geojsoncodec.constructs.geometry import Geometry
from geojsoncodec.exceptions import DecodeError

GEOJSON_SUFFIXES = (".json", ".geojson")

# Decimal ordinates are written as JSON numbers, not strings
_json_encoder = msgspec.json.Encoder(decimal_format="number")
_json_decoder = msgspec.json.Decoder()
_exact_json_decoder = msgspec.json.Decoder(float_hook=Decimal)


def dumps(
    geometry: Geometry,
    with_bounding_box: bool = False,
    formatter: CoordinateFormatter = DEFAULT_FORMATTER,
) -> bytes:
    """
    Serialize a geometry to GeoJSON bytes.

    Args:
        geometry: The geometry to serialize
        with_bounding_box: If True, write a `bbox` member. Default is False.
        formatter: The formatter applied to every ordinate

    Returns:
        The UTF-8 encoded JSON document

    Examples:
        >>> from geojsoncodec.constructs.geometry import Point
        >>> dumps(Point.from_xy(8.456, 3.567))
        b'{"type":"Point","coordinates":[8.456,3.567]}'
    """
    json_map = GeometryEncoder(formatter, with_bounding_box).encode(geometry)
    return _json_encoder.encode(json_map)


def loads(data: Union[bytes, str], arbitrary_precision: bool = False) -> Geometry:
    """
    Parse a GeoJSON geometry document.

    Args:
        data: The JSON document as bytes or str
        arbitrary_precision: If True, JSON numbers are parsed as Decimal before they
            are converted to coordinate ordinates. Default is False.

    Returns:
        The decoded geometry

    Raises:
        DecodeError: If the document is not valid JSON or not a valid geometry
        MalformedNumber: If an ordinate is not a number
    """
    decoder = _exact_json_decoder if arbitrary_precision else _json_decoder
    try:
        value = decoder.decode(data)
    except msgspec.DecodeError as e:
        raise DecodeError(f"invalid JSON document: {e}") from e
    return decode_geometry(value)


def _check_suffix(filepath: Path):
    if filepath.suffix not in GEOJSON_SUFFIXES:
        raise TypeError(
            f"file of type {filepath.suffix} does not appear to be a geojson file"
        )


def load_file(file: Union[str, Path], arbitrary_precision: bool = False) -> Geometry:
    """
    Read a geometry from a .json or .geojson file.

    Raises:
        FileNotFoundError: If the file does not exist
        TypeError: If the file does not have a .json or .geojson extension
    """
    filepath = Path(file)
    if not filepath.is_file():
        raise FileNotFoundError(file)
    _check_suffix(filepath)
    return loads(filepath.read_bytes(), arbitrary_precision)


def dump_file(
    geometry: Geometry,
    file: Union[str, Path],
    with_bounding_box: bool = False,
    formatter: CoordinateFormatter = DEFAULT_FORMATTER,
):
    """
    Write a geometry to a .json or .geojson file.

    Raises:
        TypeError: If the file does not have a .json or .geojson extension
    """
    filepath = Path(file)
    _check_suffix(filepath)
    filepath.write_bytes(dumps(geometry, with_bounding_box, formatter))
