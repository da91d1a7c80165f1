"""
Liquidity math kernel (v1 semantics).

Pure functions with explicit rounding rules for:
- choosing a ratio-preserving deposit from desired/minimum amounts,
- minting shares for the first and for subsequent deposits,
- computing proportional withdrawals for a share burn.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.checked import checked_div, checked_mul, isqrt, require_int
from ...core.errors import (
    InsufficientInitialLiquidityError,
    InsufficientLiquidityError,
    SlippageExceededError,
)
from .cpmm_swap_v1 import quote


MINIMUM_LIQUIDITY = 1000


@dataclass(frozen=True)
class OptimalDepositResult:
    amount_a: int
    amount_b: int
    refund_a: int
    refund_b: int


@dataclass(frozen=True)
class InitialMintResult:
    total_minted: int
    locked: int
    depositor_shares: int


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount_a_out: int
    amount_b_out: int


def optimal_deposit(
    *,
    desired_a: int,
    desired_b: int,
    min_a: int,
    min_b: int,
    reserve_a: int,
    reserve_b: int,
) -> OptimalDepositResult:
    """
    Pick the ratio-preserving deposit that uses as much as possible.

    First assume all of `desired_a` is deposited and quote the matching B.
    If that fits inside `desired_b` the pair is used (bounded by `min_b`);
    otherwise the computation is flipped and all of `desired_b` is used
    (bounded by `min_a`). Neither returned amount exceeds its desired amount.
    """
    for name, v in (("min_a", min_a), ("min_b", min_b)):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")

    optimal_b = quote(amount_in=desired_a, reserve_in=reserve_a, reserve_out=reserve_b)
    if optimal_b <= desired_b:
        if optimal_b < min_b:
            raise SlippageExceededError(f"optimal amount_b ({optimal_b}) < min_b ({min_b})")
        amount_a, amount_b = desired_a, optimal_b
    else:
        optimal_a = quote(amount_in=desired_b, reserve_in=reserve_b, reserve_out=reserve_a)
        if optimal_a < min_a:
            raise SlippageExceededError(f"optimal amount_a ({optimal_a}) < min_a ({min_a})")
        amount_a, amount_b = optimal_a, desired_b

    if amount_a > desired_a or amount_b > desired_b:
        raise AssertionError("deposit exceeds desired amounts")

    return OptimalDepositResult(
        amount_a=amount_a,
        amount_b=amount_b,
        refund_a=desired_a - amount_a,
        refund_b=desired_b - amount_b,
    )


def mint_initial(*, amount_a: int, amount_b: int, minimum_liquidity: int = MINIMUM_LIQUIDITY) -> InitialMintResult:
    """
    Shares for the first deposit into an empty pool.

    total = floor(sqrt(amount_a * amount_b)); it must exceed the
    minimum-liquidity floor, which is locked permanently.
    """
    for name, v in (("amount_a", amount_a), ("amount_b", amount_b), ("minimum_liquidity", minimum_liquidity)):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")

    total = isqrt(checked_mul(amount_a, amount_b))
    if total <= minimum_liquidity:
        raise InsufficientInitialLiquidityError(
            f"sqrt(amount_a * amount_b) = {total} does not exceed minimum liquidity {minimum_liquidity}"
        )
    return InitialMintResult(
        total_minted=total,
        locked=minimum_liquidity,
        depositor_shares=total - minimum_liquidity,
    )


def mint_proportional(
    *,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
    amount_a: int,
    amount_b: int,
) -> int:
    """Shares for a ratio-preserving deposit: the smaller of the two per-asset ratios."""
    if reserve_a == 0 or reserve_b == 0:
        raise InsufficientLiquidityError("cannot mint into an empty reserve")
    shares_a = checked_div(checked_mul(amount_a, total_supply), reserve_a)
    shares_b = checked_div(checked_mul(amount_b, total_supply), reserve_b)
    minted = min(shares_a, shares_b)
    if minted <= 0:
        raise InsufficientLiquidityError("deposit too small to mint any shares")
    return minted


def withdraw_amount(*, reserve: int, shares_burned: int, share_supply: int) -> int:
    """floor(reserve * shares_burned / share_supply)."""
    for name, v in (("reserve", reserve), ("shares_burned", shares_burned), ("share_supply", share_supply)):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")
    return checked_div(checked_mul(reserve, shares_burned), share_supply)


def burn_liquidity(*, shares: int, reserve_a: int, reserve_b: int, total_supply: int) -> BurnLiquidityResult:
    """Both assets' payouts for a share burn, using the same shares/supply ratio."""
    if shares > total_supply:
        raise InsufficientLiquidityError(f"cannot burn more than total supply: {shares} > {total_supply}")
    amount_a_out = withdraw_amount(reserve=reserve_a, shares_burned=shares, share_supply=total_supply)
    amount_b_out = withdraw_amount(reserve=reserve_b, shares_burned=shares, share_supply=total_supply)
    return BurnLiquidityResult(amount_a_out=amount_a_out, amount_b_out=amount_b_out)
