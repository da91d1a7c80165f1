"""
Multi-asset holding tracking.

Implements BalanceTable[Owner, AssetId] -> Amount. Pool vaults are ordinary
entries owned by the pool's authority id.
"""

from typing import Dict, Tuple


# Type aliases
Owner = str  # holder / authority identifier (hex string)
AssetId = str  # asset identifier (hex string, 0x...)
Amount = int  # Non-negative integer


class BalanceTable:
    """
    Balance table mapping (owner, asset) -> amount.

    Zero balances are omitted to keep the table sparse. Callers must not rely
    on dict iteration order.
    """

    def __init__(self):
        self._balances: Dict[Tuple[Owner, AssetId], Amount] = {}

    def get(self, owner: Owner, asset: AssetId) -> Amount:
        """Get balance for (owner, asset). Returns 0 if not found."""
        return self._balances.get((owner, asset), 0)

    def set(self, owner: Owner, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (owner, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((owner, asset), None)
        else:
            self._balances[(owner, asset)] = amount

    def add(self, owner: Owner, asset: AssetId, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(owner, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(owner, asset, new_balance)

    def subtract(self, owner: Owner, asset: AssetId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(owner, asset, -delta)

    def move(self, asset: AssetId, source: Owner, destination: Owner, amount: Amount) -> None:
        """
        Debit `source` and credit `destination` by `amount` of `asset`.

        Both sides are validated before either is written.
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        available = self.get(source, asset)
        if amount > available:
            raise ValueError(f"Insufficient balance: {source} holds {available} < {amount}")
        if source == destination:
            return
        self.set(source, asset, available - amount)
        self.set(destination, asset, self.get(destination, asset) + amount)

    def asset_total(self, asset: AssetId) -> Amount:
        """Sum of every holding of `asset`; invariant under `move`."""
        return sum(amount for (_owner, a), amount in self._balances.items() if a == asset)

    def get_all_balances(self) -> Dict[Tuple[Owner, AssetId], Amount]:
        return dict(self._balances)

    def get_balances_for_asset(self, asset: AssetId) -> Dict[Owner, Amount]:
        """All holders of `asset` and their amounts."""
        return {owner: amount for (owner, a), amount in self._balances.items() if a == asset}

    def copy(self) -> "BalanceTable":
        out = BalanceTable()
        out._balances = dict(self._balances)
        return out

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
