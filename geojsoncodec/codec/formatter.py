from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Union

from geojsoncodec.exceptions import MalformedNumber

log = logging.getLogger(__name__)

Number = Union[float, Decimal]

DEFAULT_MAX_INTEGER_DIGITS = 17
DEFAULT_MAX_FRACTION_DIGITS = 9

# wide enough for every finite float written out in full
_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def _strip_trailing_zeros(d: Decimal) -> Decimal:
    sign, digits, exponent = d.as_tuple()
    if exponent >= 0:
        return d
    digits = list(digits)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    return Decimal((sign, tuple(digits), exponent))


def _digit_counts(d: Decimal):
    """Integer and fraction digit counts of a finite decimal, trailing zeros excluded."""
    sign, digits, exponent = _strip_trailing_zeros(d).as_tuple()
    if exponent >= 0:
        return len(digits) + exponent, 0
    fraction = -exponent
    return max(len(digits) - fraction, 0), fraction


@dataclass(frozen=True)
class CoordinateFormatter:
    """
    Converts a single ordinate into the number written to JSON.

    The formatter is an immutable value: build one with the precision you need and pass
    it to the encoder, or use DEFAULT_FORMATTER.

    Rounding follows a two-tier policy. A value whose shortest decimal representation
    already fits into max_integer_digits / max_fraction_digits is returned unrounded,
    so short numbers never pick up rounding error. Only a value that exceeds either
    budget is rounded half-up to max_fraction_digits; integer digits beyond
    max_integer_digits are dropped from the high-order end. No output ever exceeds
    the digit budget.

    Attributes:
        use_arbitrary_precision: If True, round() returns a Decimal carrying the exact
            digits after rounding; otherwise it returns a float.
        max_integer_digits: The maximum number of digits before the decimal point
        max_fraction_digits: The maximum number of digits after the decimal point

    Examples:
        >>> formatter = CoordinateFormatter()
        >>> formatter.round(1.5)
        1.5
        >>> formatter.round(0.1234567895)
        0.12345679
        >>> CoordinateFormatter(use_arbitrary_precision=True).round(0.1234567895)
        Decimal('0.12345679')
    """

    use_arbitrary_precision: bool = False
    max_integer_digits: int = DEFAULT_MAX_INTEGER_DIGITS
    max_fraction_digits: int = DEFAULT_MAX_FRACTION_DIGITS

    def __post_init__(self):
        if self.max_integer_digits < 1:
            raise ValueError("max_integer_digits must be greater than 0")
        if self.max_fraction_digits < 0:
            raise ValueError("max_fraction_digits must not be negative")

    def exceeds_budget(self, value: float) -> bool:
        """
        Check whether a value needs rounding to fit the digit budget.

        Args:
            value: A finite float

        Returns:
            True if the shortest decimal representation of the value has more integer
            or fraction digits than allowed
        """
        integer_digits, fraction_digits = _digit_counts(Decimal(repr(value)))
        return (
            integer_digits > self.max_integer_digits
            or fraction_digits > self.max_fraction_digits
        )

    def round(self, value: float) -> Optional[Number]:
        """
        Format a single ordinate for output.

        Args:
            value: The ordinate to format

        Returns:
            None if the value is NaN (the caller omits the ordinate), otherwise the
            value, rounded only if it exceeds the digit budget, as a float or as a
            Decimal in arbitrary precision mode

        Raises:
            MalformedNumber: If the value is infinite; JSON has no representation for it
        """
        value = float(value)
        if math.isnan(value):
            return None
        if math.isinf(value):
            raise MalformedNumber(value)

        if not self.exceeds_budget(value):
            if self.use_arbitrary_precision:
                return _strip_trailing_zeros(Decimal(repr(value)))
            return value

        rounded = self._round_half_up(Decimal(repr(value)))
        log.debug("rounded ordinate %r to %s", value, rounded)
        if self.use_arbitrary_precision:
            return rounded
        return float(rounded)

    def _round_half_up(self, d: Decimal) -> Decimal:
        quantum = Decimal(1).scaleb(-self.max_fraction_digits)
        rounded = d.quantize(quantum, context=_CONTEXT)

        integer_digits, _ = _digit_counts(rounded)
        if integer_digits > self.max_integer_digits:
            limit = Decimal(10) ** self.max_integer_digits
            rounded = _CONTEXT.remainder(abs(rounded), limit).copy_sign(d)

        return _strip_trailing_zeros(rounded)


DEFAULT_FORMATTER = CoordinateFormatter()
