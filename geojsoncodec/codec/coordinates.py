"""Conversion between coordinates and nested JSON number arrays."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, List, Sequence

from geojsoncodec.codec.formatter import DEFAULT_FORMATTER, CoordinateFormatter
from geojsoncodec.constructs.coordinate import Coordinate
from geojsoncodec.exceptions import MalformedNumber


def coordinate_to_list(
    c: Coordinate, formatter: CoordinateFormatter = DEFAULT_FORMATTER
) -> List[Any]:
    """
    Convert a coordinate into its GeoJSON position array.

    Args:
        c: The coordinate to convert
        formatter: The formatter applied to every ordinate

    Returns:
        [x, y], or [x, y, z] when z is set, or an empty list when x or y is NaN

    Examples:
        >>> coordinate_to_list(Coordinate(1.0, 2.0))
        [1.0, 2.0]
        >>> coordinate_to_list(Coordinate(float("nan"), 2.0))
        []
    """
    if c is None or not c.is_set():
        return []
    position = [formatter.round(c.x), formatter.round(c.y)]
    if c.has_z():
        position.append(formatter.round(c.z))
    return position


def sequence_to_list(
    seq: Sequence[Coordinate], formatter: CoordinateFormatter = DEFAULT_FORMATTER
) -> List[List[Any]]:
    """Convert an ordered coordinate sequence; an empty sequence gives an empty list."""
    if not seq:
        return []
    return [coordinate_to_list(c, formatter) for c in seq]


def to_ordinate(value: Any) -> float:
    """
    Normalize a single decoded ordinate to a float.

    Floats, integers, Decimals and numeric strings are accepted. A float NaN is
    passed through as an unset ordinate; every other non-finite value is rejected,
    so "NaN" and "Infinity" strings never reach a coordinate.

    Args:
        value: The scalar read from JSON

    Returns:
        The ordinate as a float

    Raises:
        MalformedNumber: If the value is not a finite number (null, a boolean, a
            non-numeric string, infinity, a container)
    """
    if isinstance(value, bool) or value is None:
        raise MalformedNumber(value)
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except ArithmeticError as e:
            raise MalformedNumber(value) from e
        if not number.is_finite():
            raise MalformedNumber(value)
    elif isinstance(value, Decimal):
        if not value.is_finite():
            raise MalformedNumber(value)
        number = value
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise MalformedNumber(value)

    try:
        ordinate = float(number)
    except OverflowError as e:
        raise MalformedNumber(value) from e
    # values beyond the float range round to infinity
    if math.isinf(ordinate):
        raise MalformedNumber(value)
    return ordinate


def list_to_coordinate(position: Sequence[Any]) -> Coordinate:
    """
    Convert a GeoJSON position array into a coordinate.

    Missing elements default to NaN, never to 0, so an empty array gives an unset
    coordinate.

    Examples:
        >>> list_to_coordinate([1, 2])
        Coordinate(x=1.0, y=2.0)
    """
    x = to_ordinate(position[0]) if len(position) > 0 else math.nan
    y = to_ordinate(position[1]) if len(position) > 1 else math.nan
    z = to_ordinate(position[2]) if len(position) > 2 else math.nan
    return Coordinate(x, y, z)


def list_to_sequence(positions: Sequence[Sequence[Any]]) -> List[Coordinate]:
    return [list_to_coordinate(p) for p in positions]
