"""Deterministic rounding and decimal rendering of coordinates.

Rounding goes through the shortest decimal representation of the float
(repr) so values like 1.005 round the way they read, not the way their
binary approximation would.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext


def _require_finite(value: float) -> None:
    if not math.isfinite(value):
        raise ValueError(f"Expected a finite number, got {value!r}")


def round_half_away(value: float, precision: int) -> float:
    """Round to a number of decimal digits, halves away from zero.

    Args:
        value: Finite number to round
        precision: Number of decimal digits to keep (>= 0)

    Returns:
        Rounded value

    Raises:
        ValueError: If value is not finite or precision is negative

    Examples:
        >>> round_half_away(2.5, 0)
        3.0
        >>> round_half_away(-2.5, 0)
        -3.0
        >>> round_half_away(1.005, 2)
        1.01
    """
    _require_finite(value)
    if precision < 0:
        raise ValueError(f"precision must be >= 0, got {precision}")

    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + precision + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    return float(rounded)


def to_minimal_decimal_string(value: float) -> str:
    """Render a number as the shortest exact fixed-point decimal string.

    Never uses scientific notation, strips trailing zeros and a trailing
    decimal point, and renders negative zero as "0".

    Args:
        value: Finite number to render

    Returns:
        Decimal string

    Raises:
        ValueError: If value is not finite

    Examples:
        >>> to_minimal_decimal_string(1.50)
        '1.5'
        >>> to_minimal_decimal_string(1e-7)
        '0.0000001'
        >>> to_minimal_decimal_string(-0.0)
        '0'
    """
    _require_finite(value)

    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_coordinate(value: float, precision: int) -> str:
    """Round a coordinate and render it for export.

    Args:
        value: Coordinate value
        precision: Number of decimal digits to keep

    Returns:
        Minimal decimal string of the rounded value
    """
    return to_minimal_decimal_string(round_half_away(value, precision))
