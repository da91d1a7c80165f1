"""
Collaborator interfaces consumed by the pool program, and an in-memory ledger.

The pool program never moves value itself: it asks an external ledger to
transfer assets, issue or burn shares, and report balances. Each capability
is a small `Protocol` so a handler only depends on what it calls.

`InMemoryLedger` is a reference implementation over `BalanceTable` and
`ShareTable` with snapshot/restore atomicity. It models the pool's signing
authority as a capability: moving value out of a vault, and minting or
burning shares, requires the registered `PoolAuthority` handle.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import ContextManager, Dict, Iterator, Optional, Protocol, Tuple

from ..state.balances import Amount, AssetId, BalanceTable, Owner
from ..state.pools import PoolAuthority
from ..state.shares import PoolId, ShareTable

logger = logging.getLogger(__name__)


class AssetTransfer(Protocol):
    def transfer(
        self,
        asset: AssetId,
        source: Owner,
        destination: Owner,
        amount: Amount,
        *,
        authority: Optional[PoolAuthority] = None,
    ) -> None: ...


class ShareIssuer(Protocol):
    def mint_shares(self, pool_id: PoolId, to: Owner, amount: Amount, *, authority: PoolAuthority) -> None: ...

    def burn_shares(self, pool_id: PoolId, holder: Owner, amount: Amount, *, authority: PoolAuthority) -> None: ...

    def share_supply(self, pool_id: PoolId) -> Amount: ...


class BalanceReader(Protocol):
    def read_balance(self, owner: Owner, asset: AssetId) -> Amount: ...


class Clock(Protocol):
    def current_time(self) -> int: ...


class AuthorityRegistry(Protocol):
    def register_pool(self, pool_id: PoolId, authority: PoolAuthority, asset_pair: Tuple[AssetId, AssetId]) -> None: ...


class Ledger(AssetTransfer, ShareIssuer, BalanceReader, AuthorityRegistry, Protocol):
    def atomic(self) -> ContextManager[None]: ...


@dataclass
class FixedClock:
    """Deterministic clock for tests and simulations."""

    now: int = 0

    def current_time(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        if seconds < 0:
            raise ValueError("cannot move the clock backwards")
        self.now += seconds


class SystemClock:
    def current_time(self) -> int:
        return int(time.time())


class InMemoryLedger:
    """
    Ledger over in-memory holding and share tables.

    All mutations made inside `atomic()` are rolled back if the block raises.
    """

    def __init__(self, balances: Optional[BalanceTable] = None, shares: Optional[ShareTable] = None) -> None:
        self.balances = balances if balances is not None else BalanceTable()
        self.shares = shares if shares is not None else ShareTable()
        self._authorities: Dict[PoolId, PoolAuthority] = {}
        self._vault_owners: Dict[Owner, PoolId] = {}

    # -- pool registration -----------------------------------------------------

    def register_pool(self, pool_id: PoolId, authority: PoolAuthority, asset_pair: Tuple[AssetId, AssetId]) -> None:
        if not authority.verify(*asset_pair):
            raise PermissionError(f"authority {authority.address} does not derive from {asset_pair}")
        if pool_id in self._authorities:
            raise ValueError(f"pool already registered: {pool_id}")
        self._authorities[pool_id] = authority
        self._vault_owners[authority.address] = pool_id

    def _require_pool_authority(self, pool_id: PoolId, authority: Optional[PoolAuthority]) -> None:
        expected = self._authorities.get(pool_id)
        if expected is None:
            raise KeyError(f"unknown pool: {pool_id}")
        if authority != expected:
            raise PermissionError(f"missing or wrong authority for pool {pool_id}")

    # -- capabilities ------------------------------------------------------------

    def transfer(
        self,
        asset: AssetId,
        source: Owner,
        destination: Owner,
        amount: Amount,
        *,
        authority: Optional[PoolAuthority] = None,
    ) -> None:
        pool_id = self._vault_owners.get(source)
        if pool_id is not None:
            self._require_pool_authority(pool_id, authority)
        self.balances.move(asset, source, destination, amount)
        logger.debug("transfer %s %s: %s -> %s", amount, asset, source, destination)

    def mint_shares(self, pool_id: PoolId, to: Owner, amount: Amount, *, authority: PoolAuthority) -> None:
        self._require_pool_authority(pool_id, authority)
        self.shares.mint(to, pool_id, amount)

    def burn_shares(self, pool_id: PoolId, holder: Owner, amount: Amount, *, authority: PoolAuthority) -> None:
        self._require_pool_authority(pool_id, authority)
        self.shares.burn(holder, pool_id, amount)

    def share_supply(self, pool_id: PoolId) -> Amount:
        return self.shares.total_supply(pool_id)

    def share_balance(self, holder: Owner, pool_id: PoolId) -> Amount:
        return self.shares.get(holder, pool_id)

    def read_balance(self, owner: Owner, asset: AssetId) -> Amount:
        return self.balances.get(owner, asset)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        balances = self.balances.copy()
        shares = self.shares.copy()
        try:
            yield
        except BaseException:
            self.balances = balances
            self.shares = shares
            logger.debug("ledger rolled back")
            raise
