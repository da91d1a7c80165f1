# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from cpamm.core.cpmm import SwapDirection, get_amount_out, plan_swap, resolve_direction
from cpamm.core.errors import (
    InsufficientLiquidityError,
    MintMismatchError,
    SlippageExceededError,
    ZeroAmountError,
)
from cpamm.core.policy import PoolPolicy
from cpamm.state.pools import LiquidityPool

ASSET_A = "0x" + "01" * 32
ASSET_B = "0x" + "02" * 32
OTHER = "0x" + "03" * 32


def _pool(reserve_a: int, reserve_b: int, **policy) -> LiquidityPool:
    pool = LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=6, policy=PoolPolicy(**policy))
    return replace(pool, reserve_a=reserve_a, reserve_b=reserve_b)


def test_direction_is_resolved_from_the_asset_pair() -> None:
    pool = _pool(1, 1)
    assert resolve_direction(pool, ASSET_A, ASSET_B) is SwapDirection.A_TO_B
    assert resolve_direction(pool, ASSET_B, ASSET_A) is SwapDirection.B_TO_A
    for pair in ((ASSET_A, ASSET_A), (ASSET_A, OTHER), (OTHER, ASSET_B)):
        with pytest.raises(MintMismatchError):
            resolve_direction(pool, *pair)


def test_plan_swap_a_to_b() -> None:
    plan = plan_swap(_pool(1_000_000, 1_000_000), asset_in=ASSET_A, asset_out=ASSET_B, amount_in=1_000, min_amount_out=996)
    assert plan.direction is SwapDirection.A_TO_B
    assert plan.amount_out == 996
    assert plan.net_in == 997
    assert plan.fee_total == 3
    assert plan.k_after >= plan.k_before


def test_plan_swap_b_to_a_uses_oriented_reserves() -> None:
    pool = _pool(1_000_000, 2_000_000)
    plan = plan_swap(pool, asset_in=ASSET_B, asset_out=ASSET_A, amount_in=2_000, min_amount_out=0)
    # net 1994, out floor(1_000_000 * 1994 / 2_001_994)
    assert plan.direction is SwapDirection.B_TO_A
    assert plan.amount_out == 996


def test_slippage_bound_is_inclusive() -> None:
    pool = _pool(1_000_000, 1_000_000)
    with pytest.raises(SlippageExceededError, match="min_amount_out"):
        plan_swap(pool, asset_in=ASSET_A, asset_out=ASSET_B, amount_in=1_000, min_amount_out=997)


def test_min_amount_out_must_be_below_output_reserve() -> None:
    pool = _pool(1_000, 1_000)
    with pytest.raises(InsufficientLiquidityError, match="reserve_out"):
        plan_swap(pool, asset_in=ASSET_A, asset_out=ASSET_B, amount_in=10, min_amount_out=1_000)


def test_zero_amount_and_empty_pool_are_rejected() -> None:
    with pytest.raises(ZeroAmountError):
        plan_swap(_pool(10, 10), asset_in=ASSET_A, asset_out=ASSET_B, amount_in=0, min_amount_out=0)
    with pytest.raises(InsufficientLiquidityError):
        plan_swap(_pool(0, 0), asset_in=ASSET_A, asset_out=ASSET_B, amount_in=10, min_amount_out=0)


def test_fee_comes_from_pool_policy() -> None:
    no_fee = _pool(1_000_000, 1_000_000, fee_numerator=1_000, fee_denominator=1_000)
    plan = plan_swap(no_fee, asset_in=ASSET_A, asset_out=ASSET_B, amount_in=1_000, min_amount_out=0)
    assert plan.fee_total == 0
    assert plan.amount_out == 999


def test_get_amount_out_is_read_only_quote() -> None:
    pool = _pool(1_000_000, 1_000_000)
    assert get_amount_out(pool, ASSET_A, 1_000) == 996
    assert get_amount_out(pool, ASSET_B, 1_000) == 996
    assert pool.reserve_a == 1_000_000
    with pytest.raises(MintMismatchError):
        get_amount_out(pool, OTHER, 1_000)
    with pytest.raises(InsufficientLiquidityError):
        get_amount_out(_pool(0, 0), ASSET_A, 1_000)
