"""
CPMM quote and swap kernel (v1 semantics).

- `quote` is the ratio-preserving counter-amount used by deposits:
      amount_out = floor(amount_in * reserve_out / reserve_in)
- `get_amount_out` is the constant-product swap output. The fee is taken off
  the input before pricing (Uniswap-v2 style):
      net_in     = floor(amount_in * fee_numerator / fee_denominator)
      amount_out = floor(reserve_out * net_in / (reserve_in + net_in))
  A 0.3% fee is fee_numerator=997, fee_denominator=1000.

All products are checked against the 128-bit working width. Rounding is
always floor, which systematically favours the pool.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.checked import checked_add, checked_div, checked_mul, checked_sub, require_int, to_u64
from ...core.errors import (
    InsufficientLiquidityError,
    InvariantViolationError,
    ZeroAmountError,
)


@dataclass(frozen=True)
class SwapExactInResult:
    amount_out: int
    net_in: int
    fee_total: int
    gross_in: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def _require_fee(fee_numerator: int, fee_denominator: int) -> None:
    require_int("fee_numerator", fee_numerator)
    require_int("fee_denominator", fee_denominator)
    if fee_numerator < 0 or fee_denominator < 0:
        raise ValueError("fee fraction must be non-negative")
    if fee_numerator > fee_denominator:
        raise ValueError(
            f"fee_numerator ({fee_numerator}) must not exceed fee_denominator ({fee_denominator})"
        )


def quote(*, amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    Proportional counter-amount for `amount_in` at the current reserve ratio.

    Raises:
        ZeroAmountError: amount_in is zero
        InsufficientLiquidityError: either reserve is zero
        MathOverflowError: the intermediate product exceeds 128 bits
    """
    for name, v in (("amount_in", amount_in), ("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")

    if amount_in == 0:
        raise ZeroAmountError("quote amount must be positive")
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidityError("cannot quote against an empty reserve")

    return checked_div(checked_mul(amount_in, reserve_out), reserve_in)


def apply_fee(*, amount_in: int, fee_numerator: int, fee_denominator: int) -> int:
    """Input left for pricing after the LP fee: floor(amount_in * num / den)."""
    require_int("amount_in", amount_in)
    _require_fee(fee_numerator, fee_denominator)
    return checked_div(checked_mul(amount_in, fee_numerator), fee_denominator)


def get_amount_out(
    *,
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_numerator: int,
    fee_denominator: int,
) -> int:
    """
    Constant-product swap output for `amount_in`, derived from (x+dx)(y-dy) = xy.

    The engine is directionless: callers pass whichever reserve is being sold
    into as `reserve_in`.
    """
    for name, v in (("amount_in", amount_in), ("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")
    if amount_in == 0:
        raise ZeroAmountError("amount_in must be positive")

    net_in = apply_fee(amount_in=amount_in, fee_numerator=fee_numerator, fee_denominator=fee_denominator)
    numerator = checked_mul(reserve_out, net_in)
    denominator = checked_add(reserve_in, net_in)
    return checked_div(numerator, denominator)


def swap_exact_in(
    *,
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_numerator: int,
    fee_denominator: int,
) -> SwapExactInResult:
    """
    Exact-in swap quote + post-state.

    The whole gross input stays in the pool, so the fee grows k.
    """
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidityError("cannot swap against an empty reserve")

    net_in = apply_fee(amount_in=amount_in, fee_numerator=fee_numerator, fee_denominator=fee_denominator)
    amount_out = get_amount_out(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        fee_numerator=fee_numerator,
        fee_denominator=fee_denominator,
    )
    if amount_out <= 0:
        raise InsufficientLiquidityError("amount_out is zero (trade too small)")
    if amount_out >= reserve_out:
        raise InsufficientLiquidityError("swap would drain reserve_out")

    new_reserve_in = to_u64(checked_add(reserve_in, amount_in))
    new_reserve_out = checked_sub(reserve_out, amount_out)
    k_before = checked_mul(reserve_in, reserve_out)
    k_after = checked_mul(new_reserve_in, new_reserve_out)
    if k_after < k_before:
        raise InvariantViolationError(f"new_k ({k_after}) < old_k ({k_before})")

    return SwapExactInResult(
        amount_out=amount_out,
        net_in=net_in,
        fee_total=amount_in - net_in,
        gross_in=amount_in,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )
