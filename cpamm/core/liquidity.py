"""
Liquidity management planning: deposits and withdrawals.

Both plans accrue the protocol fee first, because minting those shares
changes the supply that the proportional math divides by.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..kernels.python.lp_math_v1 import burn_liquidity, mint_initial, mint_proportional, optimal_deposit
from ..state.balances import Amount
from ..state.pools import LiquidityPool
from .checked import checked_add, to_u64
from .errors import InsufficientLiquidityError, SlippageExceededError, ZeroAmountError
from .fees import accrue_protocol_fee


@dataclass(frozen=True)
class DepositPlan:
    amount_a: Amount
    amount_b: Amount
    depositor_shares: Amount
    locked_shares: Amount
    protocol_fee_shares: Amount
    is_initial: bool


@dataclass(frozen=True)
class WithdrawPlan:
    amount_a: Amount
    amount_b: Amount
    shares_burned: Amount
    protocol_fee_shares: Amount


def _require_reserves_fit(pool: LiquidityPool, amount_a: Amount, amount_b: Amount) -> None:
    """Post-deposit reserves must stay within the native 64-bit amount width."""
    to_u64(checked_add(pool.reserve_a, amount_a))
    to_u64(checked_add(pool.reserve_b, amount_b))


def plan_deposit(
    pool: LiquidityPool,
    *,
    share_supply: Amount,
    desired_a: Amount,
    desired_b: Amount,
    min_a: Amount,
    min_b: Amount,
) -> DepositPlan:
    """
    Choose deposit amounts and the shares they mint.

    For the first deposit (share_supply == 0) the desired amounts are taken
    as-is and `floor(sqrt(a * b))` shares are minted, of which the policy's
    minimum liquidity is locked. Otherwise the ratio-preserving optimizer
    picks the amounts and shares are minted pro rata.

    Raises:
        ZeroAmountError: either desired amount is zero
        InsufficientInitialLiquidityError: first deposit too small
        SlippageExceededError: optimal amounts below the minimums
        InsufficientLiquidityError: the deposit mints no shares
        MathOverflowError: a reserve or the share count would exceed 64 bits
    """
    if desired_a <= 0 or desired_b <= 0:
        raise ZeroAmountError(f"desired amounts must be positive: ({desired_a}, {desired_b})")

    fee = accrue_protocol_fee(pool, share_supply)

    if share_supply == 0:
        if desired_a < min_a or desired_b < min_b:
            raise SlippageExceededError(
                f"desired amounts ({desired_a}, {desired_b}) below minimums ({min_a}, {min_b})"
            )
        initial = mint_initial(
            amount_a=desired_a,
            amount_b=desired_b,
            minimum_liquidity=pool.policy.minimum_liquidity,
        )
        _require_reserves_fit(pool, desired_a, desired_b)
        return DepositPlan(
            amount_a=desired_a,
            amount_b=desired_b,
            depositor_shares=to_u64(initial.depositor_shares),
            locked_shares=initial.locked,
            protocol_fee_shares=fee.liquidity,
            is_initial=True,
        )

    opt = optimal_deposit(
        desired_a=desired_a,
        desired_b=desired_b,
        min_a=min_a,
        min_b=min_b,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
    )
    _require_reserves_fit(pool, opt.amount_a, opt.amount_b)
    shares = mint_proportional(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_supply=fee.share_supply_after,
        amount_a=opt.amount_a,
        amount_b=opt.amount_b,
    )
    # share supply is a native amount too
    to_u64(checked_add(fee.share_supply_after, shares))
    return DepositPlan(
        amount_a=opt.amount_a,
        amount_b=opt.amount_b,
        depositor_shares=shares,
        locked_shares=0,
        protocol_fee_shares=fee.liquidity,
        is_initial=False,
    )


def plan_withdraw(
    pool: LiquidityPool,
    *,
    share_supply: Amount,
    shares: Amount,
    min_a: Amount,
    min_b: Amount,
) -> WithdrawPlan:
    """
    Proportional payout for burning `shares`.

    Raises:
        ZeroAmountError: shares is zero
        InsufficientLiquidityError: a payout rounds to zero, or shares exceed supply
        SlippageExceededError: a payout is below its minimum
    """
    if shares <= 0:
        raise ZeroAmountError("shares to burn must be positive")
    if share_supply == 0:
        raise InsufficientLiquidityError("pool has no shares outstanding")

    fee = accrue_protocol_fee(pool, share_supply)
    out = burn_liquidity(
        shares=shares,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_supply=fee.share_supply_after,
    )
    if out.amount_a_out <= 0 or out.amount_b_out <= 0:
        raise InsufficientLiquidityError(
            f"withdrawal rounds to zero: ({out.amount_a_out}, {out.amount_b_out})"
        )
    if out.amount_a_out < min_a:
        raise SlippageExceededError(f"amount_a_out ({out.amount_a_out}) < min_a ({min_a})")
    if out.amount_b_out < min_b:
        raise SlippageExceededError(f"amount_b_out ({out.amount_b_out}) < min_b ({min_b})")

    return WithdrawPlan(
        amount_a=out.amount_a_out,
        amount_b=out.amount_b_out,
        shares_burned=shares,
        protocol_fee_shares=fee.liquidity,
    )
