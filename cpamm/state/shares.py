"""
Liquidity-share balance tracking.

Shares are scoped per pool_id and tracked separately from asset holdings.
Total supply is maintained alongside the balances so it can be read on every
call without summing.
"""

from __future__ import annotations

from typing import Dict, Tuple

from .balances import Amount, Owner

# Type alias
PoolId = str


class ShareTable:
    """
    Share balance table mapping (holder, pool_id) -> shares.

    Notes:
    - Share balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    - `total_supply(pool_id)` always equals the sum of that pool's balances.
    """

    def __init__(self) -> None:
        self._balances: Dict[Tuple[Owner, PoolId], Amount] = {}
        self._supply: Dict[PoolId, Amount] = {}

    def get(self, holder: Owner, pool_id: PoolId) -> Amount:
        """Share balance for (holder, pool_id). Returns 0 if not found."""
        return self._balances.get((holder, pool_id), 0)

    def total_supply(self, pool_id: PoolId) -> Amount:
        return self._supply.get(pool_id, 0)

    def mint(self, holder: Owner, pool_id: PoolId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        if amount == 0:
            return
        self._balances[(holder, pool_id)] = self.get(holder, pool_id) + amount
        self._supply[pool_id] = self.total_supply(pool_id) + amount

    def burn(self, holder: Owner, pool_id: PoolId, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Burn amount must be non-negative: {amount}")
        current = self.get(holder, pool_id)
        if amount > current:
            raise ValueError(f"Insufficient share balance: {current} < {amount}")
        remaining = current - amount
        if remaining == 0:
            self._balances.pop((holder, pool_id), None)
        else:
            self._balances[(holder, pool_id)] = remaining
        self._supply[pool_id] = self.total_supply(pool_id) - amount

    def get_all_balances(self) -> Dict[Tuple[Owner, PoolId], Amount]:
        """Return all share balances."""
        return dict(self._balances)

    def verify_supply(self) -> bool:
        """Verify each pool's supply equals the sum of its balances."""
        sums: Dict[PoolId, Amount] = {}
        for (_holder, pool_id), amount in self._balances.items():
            sums[pool_id] = sums.get(pool_id, 0) + amount
        return all(sums.get(pool_id, 0) == supply for pool_id, supply in self._supply.items())

    def copy(self) -> "ShareTable":
        out = ShareTable()
        out._balances = dict(self._balances)
        out._supply = dict(self._supply)
        return out

    def __repr__(self) -> str:
        return f"ShareTable({len(self._balances)} entries, {len(self._supply)} pools)"
