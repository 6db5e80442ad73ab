"""
Decimal helpers shared by every engine component.

Internal arithmetic keeps full ``Decimal`` precision; rounding happens only
when a result model is built, so chained calculations (aggregate ->
intensity -> percentage) never compound rounding error.

- ROUND_HALF_UP rounding per reporting convention
- Safe conversion from int/str/float/Decimal (floats via ``str``)
- Zero-guarded percentages and ratios
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Optional


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a numeric value to Decimal without float artefacts.

    Floats go through ``str`` so that 0.1 becomes Decimal('0.1').

    Raises:
        TypeError: If value is a bool or not numeric
        ValueError: If a string value is not a number

    Example:
        >>> to_decimal(0.1) + to_decimal(0.2) == Decimal("0.3")
        True
    """
    if isinstance(value, bool):
        raise TypeError("Cannot convert bool to Decimal")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            return Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid numeric string: {value!r}") from e
    raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")


def round_decimal(value: Any, places: int) -> Decimal:
    """
    Round to a fixed number of decimal places (ROUND_HALF_UP).

    Example:
        >>> round_decimal(Decimal("28.5714"), 1)
        Decimal('28.6')
    """
    quantum = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)


def percentage(part: Any, whole: Any, places: int) -> Decimal:
    """
    Share of ``part`` in ``whole`` as a rounded percentage.

    Returns 0 (at the requested precision) when ``whole`` is zero or
    negative, never NaN and never an exception.
    """
    whole_d = to_decimal(whole)
    if whole_d <= ZERO:
        return round_decimal(ZERO, places)
    return round_decimal(to_decimal(part) / whole_d * HUNDRED, places)


def safe_ratio(numerator: Any, denominator: Any) -> Optional[Decimal]:
    """
    Divide, or return None when the denominator is absent or not positive.

    Full precision; callers round at the boundary.
    """
    if denominator is None:
        return None
    denominator_d = to_decimal(denominator)
    if denominator_d <= ZERO:
        return None
    return to_decimal(numerator) / denominator_d


__all__ = [
    "ZERO",
    "HUNDRED",
    "to_decimal",
    "round_decimal",
    "percentage",
    "safe_ratio",
]
