"""
Protocol fee accrual kernel (v1 semantics).

Checkpointed fee capture in the Uniswap-v2 style: swap fees grow
k = reserve_a * reserve_b between liquidity events; at the next event a
fraction of that growth is minted to the protocol as new shares.

    root_k      = isqrt(reserve_a * reserve_b)
    root_k_last = isqrt(k_last)
    liquidity   = floor(total_shares * (root_k - root_k_last)
                        / (root_k * (divisor - 1) + root_k_last))

With divisor = 6 the denominator is `root_k * 5 + root_k_last` and the
protocol captures one sixth of the fee-driven growth. `k_last == 0` means
there is no baseline yet (first deposit, or protocol fees disabled).
"""

from __future__ import annotations

from dataclasses import dataclass

from ...core.checked import checked_add, checked_div, checked_mul, isqrt, require_int


DEFAULT_SHARE_DIVISOR = 6


@dataclass(frozen=True)
class ProtocolFeeResult:
    liquidity: int
    root_k: int
    root_k_last: int


def protocol_fee_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    k_last: int,
    total_shares: int,
    share_divisor: int = DEFAULT_SHARE_DIVISOR,
) -> ProtocolFeeResult:
    """
    Shares owed to the protocol for k growth since the `k_last` checkpoint.

    Returns a zero-liquidity result when there is nothing to accrue.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("k_last", k_last),
        ("total_shares", total_shares),
        ("share_divisor", share_divisor),
    ):
        require_int(name, v)
        if v < 0:
            raise ValueError(f"{name} must be non-negative")
    if share_divisor < 2:
        raise ValueError(f"share_divisor must be at least 2: {share_divisor}")

    if k_last == 0:
        return ProtocolFeeResult(liquidity=0, root_k=0, root_k_last=0)

    root_k = isqrt(checked_mul(reserve_a, reserve_b))
    root_k_last = isqrt(k_last)
    if root_k <= root_k_last:
        return ProtocolFeeResult(liquidity=0, root_k=root_k, root_k_last=root_k_last)

    numerator = checked_mul(total_shares, root_k - root_k_last)
    denominator = checked_add(checked_mul(root_k, share_divisor - 1), root_k_last)
    return ProtocolFeeResult(
        liquidity=checked_div(numerator, denominator),
        root_k=root_k,
        root_k_last=root_k_last,
    )
