"""
Constant Product Market Maker (CPMM) swap planning.

This module applies the swap kernel to a pool record with the boundary
policies that are not part of the formula itself: direction resolution and
the caller's slippage bound.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap operation
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= x * y (the fee stays in the pool)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..kernels.python.cpmm_swap_v1 import get_amount_out as _kernel_get_amount_out
from ..kernels.python.cpmm_swap_v1 import swap_exact_in as _kernel_swap_exact_in
from ..state.balances import Amount, AssetId
from ..state.pools import LiquidityPool
from .errors import InsufficientLiquidityError, MintMismatchError, SlippageExceededError, ZeroAmountError


class SwapDirection(Enum):
    A_TO_B = "A_TO_B"
    B_TO_A = "B_TO_A"


@dataclass(frozen=True)
class SwapPlan:
    direction: SwapDirection
    asset_in: AssetId
    asset_out: AssetId
    amount_in: Amount
    amount_out: Amount
    net_in: Amount
    fee_total: Amount
    k_before: int
    k_after: int


def resolve_direction(pool: LiquidityPool, asset_in: AssetId, asset_out: AssetId) -> SwapDirection:
    """
    Map an (asset_in, asset_out) pair onto the pool's orientation.

    Raises:
        MintMismatchError: the pair is not (asset_a, asset_b) in either order
    """
    if asset_in == pool.asset_a and asset_out == pool.asset_b:
        return SwapDirection.A_TO_B
    if asset_in == pool.asset_b and asset_out == pool.asset_a:
        return SwapDirection.B_TO_A
    raise MintMismatchError(f"({asset_in}, {asset_out}) is not an asset pair of pool {pool.pool_id}")


def oriented_reserves(pool: LiquidityPool, direction: SwapDirection) -> tuple[Amount, Amount]:
    """(reserve_in, reserve_out) for a swap in `direction`."""
    if direction is SwapDirection.A_TO_B:
        return pool.reserve_a, pool.reserve_b
    return pool.reserve_b, pool.reserve_a


def require_min_output(amount_out: Amount, minimum: Amount) -> None:
    if amount_out < minimum:
        raise SlippageExceededError(f"amount_out ({amount_out}) < min_amount_out ({minimum})")


def get_amount_out(pool: LiquidityPool, asset_in: AssetId, amount_in: Amount) -> Amount:
    """Read-only swap quote for selling `amount_in` of `asset_in` into the pool."""
    asset_out = pool.asset_b if asset_in == pool.asset_a else pool.asset_a
    direction = resolve_direction(pool, asset_in, asset_out)
    reserve_in, reserve_out = oriented_reserves(pool, direction)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientLiquidityError("cannot quote against an empty reserve")
    return _kernel_get_amount_out(
        amount_in=amount_in,
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        fee_numerator=pool.policy.fee_numerator,
        fee_denominator=pool.policy.fee_denominator,
    )


def plan_swap(
    pool: LiquidityPool,
    *,
    asset_in: AssetId,
    asset_out: AssetId,
    amount_in: Amount,
    min_amount_out: Amount,
) -> SwapPlan:
    """
    Compute an exact-in swap against `pool` without touching any state.

    All bounds use the stored reserves. They equal the vault balances after
    every committed operation; tokens sent to a vault outside an operation
    are not priced or counted until `sync` absorbs them.

    Raises:
        ZeroAmountError: amount_in is zero
        MintMismatchError: the asset pair does not match the pool
        InsufficientLiquidityError: empty reserve, zero output, or min_amount_out
            not strictly below the output reserve
        SlippageExceededError: output below min_amount_out
    """
    if amount_in <= 0:
        raise ZeroAmountError("amount_in must be positive")
    direction = resolve_direction(pool, asset_in, asset_out)
    reserve_in, reserve_out = oriented_reserves(pool, direction)
    if min_amount_out >= reserve_out:
        raise InsufficientLiquidityError(
            f"min_amount_out ({min_amount_out}) must be below reserve_out ({reserve_out})"
        )

    res = _kernel_swap_exact_in(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=amount_in,
        fee_numerator=pool.policy.fee_numerator,
        fee_denominator=pool.policy.fee_denominator,
    )
    require_min_output(res.amount_out, min_amount_out)

    return SwapPlan(
        direction=direction,
        asset_in=asset_in,
        asset_out=asset_out,
        amount_in=amount_in,
        amount_out=res.amount_out,
        net_in=res.net_in,
        fee_total=res.fee_total,
        k_before=res.k_before,
        k_after=res.k_after,
    )
