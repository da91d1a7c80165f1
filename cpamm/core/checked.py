"""Checked integer arithmetic at fixed widths.

Python ints never overflow, but the amounts handled here are bounded by the
ledger's native 64-bit unit, and intermediate products are bounded by a
128-bit working width. Every helper fails closed with ``MathOverflowError``
instead of silently growing past those widths.

Division is always floor (``//``) on non-negative operands.
"""

from __future__ import annotations

import math

from .errors import DivisionByZeroError, MathOverflowError

U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1


def require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


def require_u64(name: str, value: int) -> int:
    """Validate *value* as a native amount (0 <= value <= U64_MAX)."""
    require_int(name, value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if value > U64_MAX:
        raise MathOverflowError(f"{name} exceeds the 64-bit amount width: {value}")
    return value


def to_u64(value: int) -> int:
    """Narrow a working-width result back to a native amount."""
    if value < 0 or value > U64_MAX:
        raise MathOverflowError(f"value does not fit in 64 bits: {value}")
    return value


def checked_add(a: int, b: int, *, limit: int = U128_MAX) -> int:
    out = a + b
    if out > limit:
        raise MathOverflowError(f"addition overflowed: {a} + {b}")
    return out


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise MathOverflowError(f"subtraction underflowed: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int, *, limit: int = U128_MAX) -> int:
    out = a * b
    if out > limit:
        raise MathOverflowError(f"multiplication overflowed: {a} * {b}")
    return out


def checked_div(numerator: int, denominator: int) -> int:
    if denominator == 0:
        raise DivisionByZeroError()
    return numerator // denominator


def isqrt(n: int) -> int:
    """Floor square root (exact, no floats)."""
    if n < 0:
        raise ValueError(f"cannot take the square root of a negative value: {n}")
    return math.isqrt(n)
