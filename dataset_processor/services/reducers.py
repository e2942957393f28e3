from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..errors import (
    DivisionByZeroError,
    EmptyInputError,
    InvalidDiscountError,
    LookupNotFoundError,
)

"""Pure reducer functions over record values.

None of these functions has side effects; errors are raised as DatasetError
subclasses and the caller decides whether to log and continue or to halt.
"""

__all__ = [
    "average",
    "min_max",
    "safe_divide",
    "total",
    "apply_discount",
    "validate_ip",
    "count_active",
    "longest_name",
    "get_status",
    "lookup_price",
]


def average(values: Sequence[float]) -> float:
    """Arithmetic mean as a float.

    Raises:
        EmptyInputError: If ``values`` is empty
    """
    if not values:
        raise EmptyInputError("cannot average an empty collection")
    return sum(values) / len(values)


def min_max(values: Sequence[float]) -> tuple[float, float]:
    """Return ``(minimum, maximum)`` of ``values``.

    Raises:
        EmptyInputError: If ``values`` is empty
    """
    if not values:
        raise EmptyInputError("cannot take min/max of an empty collection")
    lowest = highest = values[0]
    for v in values:
        if v < lowest:
            lowest = v
        if v > highest:
            highest = v
    return lowest, highest


def safe_divide(a: int, b: int) -> int:
    """Integer quotient of ``a / b`` truncated toward zero.

    Raises:
        DivisionByZeroError: If ``b == 0``
    """
    if b == 0:
        raise DivisionByZeroError("division by zero is not allowed")
    quotient = abs(a) // abs(b)
    # floor division rounds toward -inf; keep the truncating behaviour for negative operands
    return quotient if (a < 0) == (b < 0) else -quotient


def total(*prices: float) -> float:
    """Sum of any number of prices; ``0.0`` when called with none."""
    return sum(prices, 0.0)


def apply_discount(amount: float, percent: float) -> float:
    """Return ``amount`` reduced by ``percent`` percent.

    Raises:
        InvalidDiscountError: If ``percent`` is outside [0, 100]
    """
    if percent < 0 or percent > 100:
        raise InvalidDiscountError(f"invalid discount: {percent:.2f}%")
    return amount - (amount * percent / 100)


def validate_ip(candidate: str) -> bool:
    """Format-only IP check: exactly four dot-separated segments.

    Segment contents are not checked, so ``"a.b.c.d"`` passes.
    """
    return len(candidate.split(".")) == 4


def count_active(status: Mapping[str, bool]) -> int:
    return sum(1 for active in status.values() if active)


def longest_name(names: Sequence[str]) -> str:
    """Longest string by length; the first one seen wins on ties.

    Raises:
        EmptyInputError: If ``names`` is empty
    """
    if not names:
        raise EmptyInputError("no names to compare")
    longest = names[0]
    for name in names:
        if len(name) > len(longest):
            longest = name
    return longest


def get_status(name: str, status: Mapping[str, bool]) -> bool:
    try:
        return status[name]
    except KeyError:
        raise LookupNotFoundError(f"device {name} not found") from None


def lookup_price(item: str, catalog: Mapping[str, float]) -> float:
    try:
        return catalog[item]
    except KeyError:
        raise LookupNotFoundError(f"item '{item}' not available in store") from None
