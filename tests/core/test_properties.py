# [TESTER] v1

from __future__ import annotations

import hypothesis.strategies as st
import pytest
from hypothesis import assume, given, settings

from cpamm.core.errors import InsufficientLiquidityError, NothingToSkimError
from cpamm.core.reserves import compute_skim
from cpamm.kernels.python.cpmm_swap_v1 import quote, swap_exact_in
from cpamm.kernels.python.lp_math_v1 import burn_liquidity, mint_proportional, optimal_deposit


RESERVE = st.integers(min_value=1, max_value=10**15)
AMOUNT = st.integers(min_value=1, max_value=10**12)


@settings(max_examples=300, deadline=None)
@given(reserve_in=RESERVE, reserve_out=RESERVE, amount_in=AMOUNT, fee_numerator=st.integers(min_value=1, max_value=1_000))
def test_swap_never_decreases_k(reserve_in: int, reserve_out: int, amount_in: int, fee_numerator: int) -> None:
    try:
        res = swap_exact_in(
            reserve_in=reserve_in,
            reserve_out=reserve_out,
            amount_in=amount_in,
            fee_numerator=fee_numerator,
            fee_denominator=1_000,
        )
    except InsufficientLiquidityError:
        return
    assert res.new_reserve_in * res.new_reserve_out >= reserve_in * reserve_out
    assert 0 < res.amount_out < reserve_out


@settings(max_examples=300, deadline=None)
@given(a=AMOUNT, b=AMOUNT, reserve_in=RESERVE, reserve_out=RESERVE)
def test_quote_is_monotonic(a: int, b: int, reserve_in: int, reserve_out: int) -> None:
    lo, hi = sorted((a, b))
    assert quote(amount_in=lo, reserve_in=reserve_in, reserve_out=reserve_out) <= quote(
        amount_in=hi, reserve_in=reserve_in, reserve_out=reserve_out
    )


@settings(max_examples=200, deadline=None)
@given(
    reserve_a=st.integers(min_value=10**6, max_value=10**12),
    reserve_b=st.integers(min_value=10**6, max_value=10**12),
    supply=st.integers(min_value=10**6, max_value=10**12),
    fraction=st.integers(min_value=1, max_value=999),
)
def test_withdraw_then_redeposit_preserves_share_value(reserve_a: int, reserve_b: int, supply: int, fraction: int) -> None:
    shares = supply * fraction // 1_000
    assume(shares > 0)
    out = burn_liquidity(shares=shares, reserve_a=reserve_a, reserve_b=reserve_b, total_supply=supply)
    ra, rb, s = reserve_a - out.amount_a_out, reserve_b - out.amount_b_out, supply - shares
    assume(out.amount_a_out > 0 and out.amount_b_out > 0)

    opt = optimal_deposit(
        desired_a=out.amount_a_out,
        desired_b=out.amount_b_out,
        min_a=0,
        min_b=0,
        reserve_a=ra,
        reserve_b=rb,
    )
    try:
        minted = mint_proportional(reserve_a=ra, reserve_b=rb, total_supply=s, amount_a=opt.amount_a, amount_b=opt.amount_b)
    except InsufficientLiquidityError:
        return
    # Floor rounding on both legs can only cost the round-tripper shares.
    assert minted <= shares
    # Reserves per share never decrease for the remaining holders.
    new_a, new_b, new_s = ra + opt.amount_a, rb + opt.amount_b, s + minted
    assert new_a * supply >= reserve_a * new_s - supply
    assert new_b * supply >= reserve_b * new_s - supply


@given(reserve_a=st.integers(min_value=0, max_value=10**18), reserve_b=st.integers(min_value=0, max_value=10**18))
def test_skim_at_equilibrium_is_rejected(reserve_a: int, reserve_b: int) -> None:
    with pytest.raises(NothingToSkimError):
        compute_skim(observed_a=reserve_a, observed_b=reserve_b, reserve_a=reserve_a, reserve_b=reserve_b)
