"""Coercion helpers shared by the provider response models."""
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_FOUR_PLACES = Decimal("0.0001")


def to_number(value: Any) -> float:
    """Return value as a finite float, or 0.0 if it is missing or not a number.

    Only real JSON numbers count: strings, booleans, None, NaN and infinities
    all become 0.0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    try:
        number = float(value)
    except OverflowError:  # ints beyond the float range
        return 0.0
    return number if math.isfinite(number) else 0.0


def parse_currency(value: Any) -> float:
    """Parse a number that may arrive formatted as currency (e.g. "$1,234.5")."""
    if isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value)
        try:
            return to_number(float(cleaned))
        except ValueError:
            return 0.0
    return to_number(value)


def to_price_series(value: Any) -> tuple[float, ...]:
    """Coerce a list of prices, replacing any non-numeric point with 0."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(to_number(v) for v in value)


def format_units(raw: Any, decimals: int, places: Decimal = _FOUR_PLACES) -> str:
    """Convert a raw integer amount in smallest units to a fixed-point string.

    ``format_units("1500000", 6)`` returns ``"1.5000"``. Unparseable amounts
    format as zero.
    """
    zero = str(Decimal(0).quantize(places))
    try:
        amount = Decimal(str(raw))
        shift = -int(decimals)
    except (InvalidOperation, ValueError, TypeError):
        return zero
    if not amount.is_finite():
        return zero
    with localcontext() as ctx:
        # Enough digits for the integer part plus the requested places.
        ctx.prec = max(
            ctx.prec,
            amount.adjusted() + shift + 2 - places.as_tuple().exponent,
        )
        try:
            return str(amount.scaleb(shift).quantize(places, rounding=ROUND_HALF_UP))
        except ArithmeticError:
            return zero
