# [TESTER] v1

from __future__ import annotations

from dataclasses import replace

import pytest

from cpamm.core.errors import IdenticalMintsError, InvalidPrecisionError, MintMismatchError
from cpamm.core.policy import PoolPolicy
from cpamm.state.pools import (
    LiquidityPool,
    PoolStatus,
    compute_pool_id,
    derive_pool_authority,
)

ASSET_A = "0x" + "01" * 32
ASSET_B = "0x" + "02" * 32


def test_create_starts_empty_and_uninitialized() -> None:
    pool = LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=9)
    assert (pool.reserve_a, pool.reserve_b, pool.k_last) == (0, 0, 0)
    assert pool.status is PoolStatus.UNINITIALIZED
    assert pool.precision == 9
    assert pool.pool_id == compute_pool_id(ASSET_A, ASSET_B)


def test_pool_id_and_authority_are_deterministic_and_pair_scoped() -> None:
    assert compute_pool_id(ASSET_A, ASSET_B) == compute_pool_id(ASSET_A, ASSET_B)
    assert compute_pool_id(ASSET_A, ASSET_B) != compute_pool_id(ASSET_B, ASSET_A)
    auth = derive_pool_authority(ASSET_A, ASSET_B)
    assert auth.verify(ASSET_A, ASSET_B)
    assert not auth.verify(ASSET_B, ASSET_A)
    assert derive_pool_authority(ASSET_A, ASSET_B, bump=254) != auth


def test_invalid_pools() -> None:
    with pytest.raises(IdenticalMintsError):
        LiquidityPool.create(ASSET_A, ASSET_A, precision_a=6, precision_b=6)
    with pytest.raises(InvalidPrecisionError):
        LiquidityPool.create(ASSET_A, ASSET_B, precision_a=0, precision_b=6)
    with pytest.raises(InvalidPrecisionError):
        LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=13)
    pool = LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=6)
    with pytest.raises(ValueError, match="non-negative"):
        replace(pool, reserve_a=-1)


def test_get_reserve_and_constant_product() -> None:
    pool = replace(LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=6), reserve_a=3, reserve_b=7)
    assert pool.get_reserve(ASSET_A) == 3
    assert pool.get_reserve(ASSET_B) == 7
    assert pool.get_constant_product() == 21
    with pytest.raises(MintMismatchError):
        pool.get_reserve("0x" + "09" * 32)


def test_normalized_reserves_pad_the_lower_precision() -> None:
    pool = replace(LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=8), reserve_a=5, reserve_b=5)
    norm = pool.normalized_reserves()
    assert (norm.amount_a, norm.amount_b, norm.precision) == (500, 5, 8)


def test_fee_recipient_defaults_to_authority() -> None:
    pool = LiquidityPool.create(ASSET_A, ASSET_B, precision_a=6, precision_b=6)
    assert pool.fee_recipient == pool.authority.address
    custom = LiquidityPool.create(
        ASSET_A, ASSET_B, precision_a=6, precision_b=6, policy=PoolPolicy(fee_recipient="treasury")
    )
    assert custom.fee_recipient == "treasury"


def test_status_advances_through_lifecycle() -> None:
    assert PoolStatus.UNINITIALIZED.advanced() is PoolStatus.SEEDED
    assert PoolStatus.SEEDED.advanced() is PoolStatus.ACTIVE
    assert PoolStatus.ACTIVE.advanced() is PoolStatus.ACTIVE
