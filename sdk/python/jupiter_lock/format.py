"""Display helpers for addresses and token amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Optional, Union

MOBILE_MAX_WIDTH = 480
MAX_FRACTION_DIGITS = 9


def is_mobile(screen_width: Optional[int] = None) -> bool:
    """True when the client reports a screen no wider than a phone."""
    return screen_width is not None and screen_width <= MOBILE_MAX_WIDTH


def shorten_address(address: str, chars: int = 4) -> str:
    """Keep ``chars`` characters at the start and end of an address."""
    return f"{address[:chars]}...{address[-chars:]}"


def _plain(value: Decimal) -> str:
    # negative zero keeps its sign
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
        return format(value.normalize(), "f")


def _round(value: Decimal, places: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_number(value: Union[int, float, str, Decimal, None], precision: int = 2) -> str:
    """
    Group thousands en-US style and round to ``precision`` fraction digits.

    Missing values render as ``--``. Trailing zeros are dropped and no more
    than nine fraction digits are ever shown. Small negatives that round to
    zero render as ``-0``.
    """
    if value is None or value == "":
        return "--"
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        return "--"
    if not number.is_finite():
        return "--"

    number = _round(number, min(precision, MAX_FRACTION_DIGITS))
    whole, _, fraction = _plain(number).partition(".")
    negative = whole.startswith("-")
    grouped = f"{int(whole.lstrip('-')):,}"
    text = f"-{grouped}" if negative else grouped
    return f"{text}.{fraction}" if fraction else text


def format_number_to_reading_unit(value: Decimal, decimal: int = 2) -> str:
    """
    Compact a raw base-unit amount into ``k``/``m`` notation.

    ``decimal`` is the token's decimals; values between 999 and one million are
    shown in thousands, values above one million in millions.
    """
    value = Decimal(value)
    scale = Decimal(10) ** decimal
    if Decimal(999) < value < Decimal(1_000_000):
        return f"{_plain(value / 1_000 / scale)}k"
    if value > Decimal(1_000_000):
        return f"{_plain(value / 1_000_000 / scale)}m"
    return _plain(_round(value, decimal))
