# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

from cpamm.core.fees import accrue_protocol_fee, next_k_last
from cpamm.core.policy import PoolPolicy
from cpamm.state.pools import LiquidityPool

ASSET_A = "0x" + "01" * 32
ASSET_B = "0x" + "02" * 32


def _pool(reserve_a: int, reserve_b: int, k_last: int, **policy) -> LiquidityPool:
    pool = LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=6, policy=PoolPolicy(**policy))
    return replace(pool, reserve_a=reserve_a, reserve_b=reserve_b, k_last=k_last)


def test_accrual_grows_supply() -> None:
    fee = accrue_protocol_fee(_pool(32, 32, 900), 1_000)
    assert fee.liquidity == 10
    assert fee.share_supply_after == 1_010


def test_accrual_is_zero_when_disabled() -> None:
    fee = accrue_protocol_fee(_pool(32, 32, 900, protocol_fee_enabled=False), 1_000)
    assert fee.liquidity == 0
    assert fee.share_supply_after == 1_000


def test_next_k_last_tracks_reserves_or_clears() -> None:
    assert next_k_last(_pool(0, 0, 0), 1_000, 2_000) == 2_000_000
    assert next_k_last(_pool(0, 0, 0, protocol_fee_enabled=False), 1_000, 2_000) == 0
