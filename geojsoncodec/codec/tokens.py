"""Forward-only JSON token streams consumed by the geometry decoder.

The decoder does not depend on a particular JSON library. It reads Token values from
any iterator. This module builds such iterators from an already-parsed JSON value
(dicts, lists and scalars), and from (event, value) pairs as produced by incremental
JSON parsers (start_map, map_key, end_map, start_array, end_array, string, number,
boolean, null).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator, Mapping, NamedTuple, Tuple


class TokenKind(Enum):
    START_OBJECT = "start_object"
    KEY = "key"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    VALUE = "value"


class Token(NamedTuple):
    """
    A single JSON parse event.

    Attributes:
        kind: The kind of event
        value: The member name for KEY tokens, the scalar for VALUE tokens, None otherwise
    """

    kind: TokenKind
    value: Any = None


START_OBJECT = Token(TokenKind.START_OBJECT)
END_OBJECT = Token(TokenKind.END_OBJECT)
START_ARRAY = Token(TokenKind.START_ARRAY)
END_ARRAY = Token(TokenKind.END_ARRAY)

_EVENT_KINDS = {
    "start_map": TokenKind.START_OBJECT,
    "map_key": TokenKind.KEY,
    "end_map": TokenKind.END_OBJECT,
    "start_array": TokenKind.START_ARRAY,
    "end_array": TokenKind.END_ARRAY,
    "string": TokenKind.VALUE,
    "number": TokenKind.VALUE,
    "integer": TokenKind.VALUE,
    "double": TokenKind.VALUE,
    "boolean": TokenKind.VALUE,
    "null": TokenKind.VALUE,
}


def tokens_from_value(value: Any) -> Iterator[Token]:
    """
    Walk an already-parsed JSON value and yield its tokens in document order.

    The walk recurses once per nested container, so values nested deeper than the
    interpreter's recursion limit raise RecursionError while they are iterated.

    Args:
        value: A JSON value tree made of mappings, lists/tuples and scalars

    Returns:
        A lazy iterator over the tokens of the value

    Examples:
        >>> [t.kind.value for t in tokens_from_value({"a": [1]})]
        ['start_object', 'key', 'start_array', 'value', 'end_array', 'end_object']
    """
    if isinstance(value, Mapping):
        yield START_OBJECT
        for k, v in value.items():
            yield Token(TokenKind.KEY, k)
            yield from tokens_from_value(v)
        yield END_OBJECT
    elif isinstance(value, (list, tuple)):
        yield START_ARRAY
        for v in value:
            yield from tokens_from_value(v)
        yield END_ARRAY
    else:
        yield Token(TokenKind.VALUE, value)


def tokens_from_events(events: Iterable[Tuple[str, Any]]) -> Iterator[Token]:
    """
    Adapt (event, value) pairs from an incremental JSON parser to tokens.

    Args:
        events: An iterable of (event name, value) pairs

    Returns:
        A lazy iterator over the corresponding tokens

    Raises:
        ValueError: If an event name is not recognized
    """
    for event, value in events:
        kind = _EVENT_KINDS.get(event)
        if kind is None:
            raise ValueError(f"unknown JSON parse event {event!r}")
        if kind in (TokenKind.KEY, TokenKind.VALUE):
            yield Token(kind, value)
        else:
            yield Token(kind)
