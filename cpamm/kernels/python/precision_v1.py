"""
Decimal precision normalization kernel (v1 semantics).

Two assets may carry different decimal precisions. To compare or combine
amounts, the amount with the smaller precision is scaled up so both are
expressed at the larger one:

    common   = max(precision_a, precision_b)
    padding  = 10 ** |precision_a - precision_b|
    smaller' = smaller * padding            (checked against the 64-bit width)

Precisions are restricted to [1, 12] so the padding itself always fits.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.checked import U64_MAX, checked_mul, require_int, require_u64
from ...core.errors import InvalidPrecisionError


MIN_PRECISION = 1
MAX_PRECISION = 12


@dataclass(frozen=True)
class NormalizedAmounts:
    amount_a: int
    amount_b: int
    precision: int


def validate_precision(name: str, precision: int) -> int:
    require_int(name, precision)
    if not (MIN_PRECISION <= precision <= MAX_PRECISION):
        raise InvalidPrecisionError(
            f"{name} must be in [{MIN_PRECISION}, {MAX_PRECISION}]: {precision}"
        )
    return precision


def common_precision(precision_a: int, precision_b: int) -> int:
    """The precision both amounts are expressed in after normalization."""
    return max(precision_a, precision_b)


def normalize_amounts(
    *,
    amount_a: int,
    precision_a: int,
    amount_b: int,
    precision_b: int,
) -> NormalizedAmounts:
    """
    Scale the lower-precision amount up to the common precision.

    Raises:
        InvalidPrecisionError: a precision is outside [1, 12]
        MathOverflowError: the scaled amount does not fit in 64 bits
    """
    validate_precision("precision_a", precision_a)
    validate_precision("precision_b", precision_b)
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)

    padding = 10 ** abs(precision_a - precision_b)
    if precision_a > precision_b:
        amount_b = checked_mul(amount_b, padding, limit=U64_MAX)
    elif precision_b > precision_a:
        amount_a = checked_mul(amount_a, padding, limit=U64_MAX)

    return NormalizedAmounts(
        amount_a=amount_a,
        amount_b=amount_b,
        precision=common_precision(precision_a, precision_b),
    )
