"""
Protocol fee checkpointing.

Before a deposit or withdrawal uses the share supply, the protocol's cut of
the fees accumulated since `k_last` is minted as new shares. After the
liquidity event the checkpoint moves to the new `reserve_a * reserve_b`
(or is cleared when protocol fees are disabled).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..kernels.python.protocol_fee_v1 import protocol_fee_liquidity
from ..state.balances import Amount
from ..state.pools import LiquidityPool
from .checked import checked_add, checked_mul, to_u64


@dataclass(frozen=True)
class FeeAccrual:
    liquidity: Amount
    share_supply_after: Amount


def accrue_protocol_fee(pool: LiquidityPool, share_supply: Amount) -> FeeAccrual:
    """Shares owed to the protocol at this checkpoint and the resulting supply."""
    if not pool.policy.protocol_fee_enabled:
        return FeeAccrual(liquidity=0, share_supply_after=share_supply)
    res = protocol_fee_liquidity(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        k_last=pool.k_last,
        total_shares=share_supply,
        share_divisor=pool.policy.protocol_fee_share_divisor,
    )
    return FeeAccrual(
        liquidity=to_u64(res.liquidity),
        share_supply_after=to_u64(checked_add(share_supply, res.liquidity)),
    )


def next_k_last(pool: LiquidityPool, reserve_a: Amount, reserve_b: Amount) -> int:
    """Checkpoint to store after a liquidity event that left (reserve_a, reserve_b)."""
    if not pool.policy.protocol_fee_enabled:
        return 0
    return checked_mul(reserve_a, reserve_b)
