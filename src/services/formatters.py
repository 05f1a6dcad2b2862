"""Field formatting helpers.

Normalizes raw field values before validation or persistence:
- Decimal rounding to 2 places (half-up)
- Dollar strings rendered with exactly 2 fractional digits
- Upper-casing unit strings

All helpers raise NumberFormatError on non-numeric input. They are meant to be
called on values that already passed validation.

Example Usage:
    >>> from src.services.formatters import format_amount, format_dollar_value
    >>> format_amount("10.505")
    Decimal('10.51')
    >>> format_dollar_value("30")
    '30.00'
"""

import re
from contextlib import contextmanager
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any

from .exceptions import NumberFormatError

TWO_PLACES = Decimal("0.01")

# Values with more integer digits than this are not treated as numbers
MAX_INTEGER_DIGITS = 1000

# Plain decimal or exponent notation; no padding, no NaN/Infinity, no underscores
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def parse_decimal(value: Any) -> Decimal:
    """Parse a value into a Decimal.

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Decimal equal to the value

    Raises:
        NumberFormatError: If the value is None, a bool, not numeric, or has
            more than MAX_INTEGER_DIGITS integer digits
    """
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, bool) or value is None:
        raise NumberFormatError(value)
    else:
        # str() first so floats keep their shortest repr, not binary noise
        text = str(value) if isinstance(value, (int, float)) else value
        if not isinstance(text, str) or not _NUMBER_PATTERN.match(text):
            raise NumberFormatError(value)
        try:
            number = Decimal(text)
        except InvalidOperation as e:
            raise NumberFormatError(value) from e

    if not number.is_finite():
        raise NumberFormatError(value)
    if number and number.adjusted() >= MAX_INTEGER_DIGITS:
        raise NumberFormatError(value)
    return number


def is_number(value: Any) -> bool:
    """Return True if parse_decimal() would accept the value."""
    try:
        parse_decimal(value)
    except NumberFormatError:
        return False
    return True


@contextmanager
def amount_context(*numbers: Decimal):
    """Decimal context wide enough to hold the integer digits of ``numbers``
    multiplied together, plus cents."""
    integer_digits = sum(max(number.adjusted(), 0) + 1 for number in numbers if number)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, integer_digits + 4)
        yield ctx


def format_amount(value: Any) -> Decimal:
    """Round a numeric value to exactly 2 fractional digits, half-up.

    Raises:
        NumberFormatError: If the value is not numeric
    """
    number = parse_decimal(value)
    with amount_context(number):
        try:
            return number.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise NumberFormatError(value) from e


def format_dollar_value(value: str) -> str:
    """Render a numeric string with exactly 2 fractional digits.

    Raises:
        NumberFormatError: If the value is not numeric
    """
    return f"{format_amount(value):f}"


def uppercase(value: str) -> str:
    """Return the upper-cased string. None is a caller error."""
    return value.upper()
