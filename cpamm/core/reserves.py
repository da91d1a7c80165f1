"""
Reserve synchronization against observed vault balances.

Reserves are resynchronized after every transfer rather than adjusted with
arithmetic, so any drift (direct donations, rounding in external transfers)
self-heals at the next operation. `skim` is the opposite reconciliation: it
pays the excess out instead of absorbing it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from ..state.balances import Amount
from ..state.pools import LiquidityPool
from .errors import NothingToSkimError


@dataclass(frozen=True)
class SkimAmounts:
    excess_a: Amount
    excess_b: Amount


def sync_reserves(observed_a: Amount, observed_b: Amount) -> Tuple[Amount, Amount]:
    """Unconditional overwrite: the new reserves are the observed balances."""
    if observed_a < 0 or observed_b < 0:
        raise ValueError(f"observed balances must be non-negative: ({observed_a}, {observed_b})")
    return observed_a, observed_b


def synced(pool: LiquidityPool, observed_a: Amount, observed_b: Amount) -> LiquidityPool:
    reserve_a, reserve_b = sync_reserves(observed_a, observed_b)
    return replace(pool, reserve_a=reserve_a, reserve_b=reserve_b)


def compute_skim(
    *,
    observed_a: Amount,
    observed_b: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
) -> SkimAmounts:
    """
    Excess of observed vault balances over stored reserves.

    Raises:
        NothingToSkimError: neither vault holds more than its reserve
    """
    excess_a = max(0, observed_a - reserve_a)
    excess_b = max(0, observed_b - reserve_b)
    if excess_a == 0 and excess_b == 0:
        raise NothingToSkimError()
    return SkimAmounts(excess_a=excess_a, excess_b=excess_b)
