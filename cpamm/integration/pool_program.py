"""
Pool operation handler (imperative shell).

Wraps the functional core:
- Validates inputs and the caller's deadline before touching any state.
- Builds a complete plan from the pure planners (`core.cpmm`, `core.liquidity`).
- Applies transfers, mints and burns through the ledger inside one atomic
  scope, then resynchronizes reserves from the observed vault balances.
- Commits the new pool record only after every effect succeeded.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional

from ..core.checked import require_u64
from ..core.cpmm import SwapDirection, get_amount_out, plan_swap
from ..core.errors import AmmError, DeadlineExceededError, IdenticalMintsError, ZeroAmountError
from ..core.fees import next_k_last
from ..core.liquidity import plan_deposit, plan_withdraw
from ..core.policy import PoolPolicy, default_pool_policy
from ..core.reserves import compute_skim, synced
from ..state.balances import Amount, AssetId, Owner
from ..state.pools import LiquidityPool, PoolStatus
from .ledger import Clock, Ledger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepositResult:
    pool: LiquidityPool
    amount_a: Amount
    amount_b: Amount
    shares_minted: Amount
    locked_shares: Amount
    protocol_fee_shares: Amount


@dataclass(frozen=True)
class WithdrawResult:
    pool: LiquidityPool
    amount_a: Amount
    amount_b: Amount
    shares_burned: Amount
    protocol_fee_shares: Amount


@dataclass(frozen=True)
class SwapResult:
    pool: LiquidityPool
    direction: SwapDirection
    amount_in: Amount
    amount_out: Amount
    fee_total: Amount


@dataclass(frozen=True)
class SkimResult:
    pool: LiquidityPool
    amount_a: Amount
    amount_b: Amount


class PoolProgram:
    """
    Entry points for pool operations against a ledger.

    The program owns the pool records; share supply and holdings are owned by
    the ledger and re-read on every call.
    """

    def __init__(self, ledger: Ledger, clock: Clock, *, default_policy: Optional[PoolPolicy] = None) -> None:
        self._ledger = ledger
        self._clock = clock
        self._default_policy = default_policy
        self._pools: Dict[str, LiquidityPool] = {}

    # -- queries -------------------------------------------------------------------

    def get_pool(self, pool_id: str) -> LiquidityPool:
        try:
            return self._pools[pool_id]
        except KeyError:
            raise KeyError(f"unknown pool: {pool_id}") from None

    def pool_status(self, pool_id: str) -> PoolStatus:
        return self.get_pool(pool_id).status

    def vault_balances(self, pool: LiquidityPool) -> tuple[Amount, Amount]:
        owner = pool.authority.address
        return (
            self._ledger.read_balance(owner, pool.asset_a),
            self._ledger.read_balance(owner, pool.asset_b),
        )

    def get_amount_out(self, pool_id: str, asset_in: AssetId, amount_in: Amount) -> Amount:
        """Swap quote at the current stored reserves; no state is touched."""
        return get_amount_out(self.get_pool(pool_id), asset_in, require_u64("amount_in", amount_in))

    # -- helpers -------------------------------------------------------------------

    def _require_deadline(self, expiration: int) -> None:
        now = self._clock.current_time()
        if expiration <= now:
            raise DeadlineExceededError(f"expiration {expiration} is not after current time {now}")

    @contextmanager
    def _operation(self, name: str, pool_id: str) -> Iterator[None]:
        try:
            yield
        except AmmError as exc:
            logger.warning("%s rejected for pool %s: %s", name, pool_id, exc)
            raise

    def _resynced(self, pool: LiquidityPool) -> LiquidityPool:
        observed_a, observed_b = self.vault_balances(pool)
        out = synced(pool, observed_a, observed_b)
        logger.debug("resync %s: reserves (%s, %s)", pool.pool_id, out.reserve_a, out.reserve_b)
        return out

    def _mint(self, pool: LiquidityPool, to: Owner, amount: Amount) -> None:
        if amount > 0:
            self._ledger.mint_shares(pool.pool_id, to, amount, authority=pool.authority)

    def _mint_protocol_fee(self, pool: LiquidityPool, amount: Amount) -> None:
        if amount > 0:
            logger.debug("protocol fee %s: %s shares to %s", pool.pool_id, amount, pool.fee_recipient)
        self._mint(pool, pool.fee_recipient, amount)

    # -- operations ----------------------------------------------------------------

    def initialize_pool(
        self,
        asset_a: AssetId,
        asset_b: AssetId,
        *,
        precision_a: int,
        precision_b: int,
        policy: Optional[PoolPolicy] = None,
    ) -> LiquidityPool:
        """
        Create an empty pool record (reserves 0, k_last 0) and register its authority.

        Raises:
            IdenticalMintsError: asset_a == asset_b
            InvalidPrecisionError: a precision is outside [1, 12]
            ValueError: a pool for this pair already exists
        """
        if asset_a == asset_b:
            raise IdenticalMintsError(f"asset_a and asset_b are both {asset_a}")
        policy = policy or self._default_policy or default_pool_policy()
        pool = LiquidityPool.create(
            asset_a,
            asset_b,
            precision_a=precision_a,
            precision_b=precision_b,
            policy=policy,
        )
        if pool.pool_id in self._pools:
            raise ValueError(f"pool already exists: {pool.pool_id}")
        self._ledger.register_pool(pool.pool_id, pool.authority, (asset_a, asset_b))
        self._pools[pool.pool_id] = pool
        logger.info("initialized pool %s (%s, %s)", pool.pool_id, asset_a, asset_b)
        return pool

    def deposit(
        self,
        pool_id: str,
        depositor: Owner,
        *,
        desired_a: Amount,
        desired_b: Amount,
        min_a: Amount = 0,
        min_b: Amount = 0,
        expiration: int,
    ) -> DepositResult:
        pool = self.get_pool(pool_id)
        with self._operation("deposit", pool_id):
            for name, v in (("desired_a", desired_a), ("desired_b", desired_b), ("min_a", min_a), ("min_b", min_b)):
                require_u64(name, v)
            if desired_a == 0 or desired_b == 0:
                raise ZeroAmountError(f"desired amounts must be positive: ({desired_a}, {desired_b})")
            self._require_deadline(expiration)

            plan = plan_deposit(
                pool,
                share_supply=self._ledger.share_supply(pool_id),
                desired_a=desired_a,
                desired_b=desired_b,
                min_a=min_a,
                min_b=min_b,
            )

            vault = pool.authority.address
            with self._ledger.atomic():
                self._mint_protocol_fee(pool, plan.protocol_fee_shares)
                self._ledger.transfer(pool.asset_a, depositor, vault, plan.amount_a)
                self._ledger.transfer(pool.asset_b, depositor, vault, plan.amount_b)
                self._mint(pool, pool.policy.locked_shares_holder, plan.locked_shares)
                self._mint(pool, depositor, plan.depositor_shares)
                new_pool = self._resynced(pool)
                new_pool = replace(
                    new_pool,
                    k_last=next_k_last(pool, new_pool.reserve_a, new_pool.reserve_b),
                    status=pool.status.advanced(),
                )

        self._pools[pool_id] = new_pool
        logger.info(
            "deposit %s: (%s, %s) -> %s shares (locked %s, protocol %s)",
            pool_id,
            plan.amount_a,
            plan.amount_b,
            plan.depositor_shares,
            plan.locked_shares,
            plan.protocol_fee_shares,
        )
        return DepositResult(
            pool=new_pool,
            amount_a=plan.amount_a,
            amount_b=plan.amount_b,
            shares_minted=plan.depositor_shares,
            locked_shares=plan.locked_shares,
            protocol_fee_shares=plan.protocol_fee_shares,
        )

    def withdraw(
        self,
        pool_id: str,
        holder: Owner,
        *,
        shares: Amount,
        min_a: Amount = 0,
        min_b: Amount = 0,
        expiration: int,
    ) -> WithdrawResult:
        pool = self.get_pool(pool_id)
        with self._operation("withdraw", pool_id):
            for name, v in (("shares", shares), ("min_a", min_a), ("min_b", min_b)):
                require_u64(name, v)
            if shares == 0:
                raise ZeroAmountError("shares to burn must be positive")
            self._require_deadline(expiration)

            plan = plan_withdraw(
                pool,
                share_supply=self._ledger.share_supply(pool_id),
                shares=shares,
                min_a=min_a,
                min_b=min_b,
            )

            vault = pool.authority.address
            with self._ledger.atomic():
                self._mint_protocol_fee(pool, plan.protocol_fee_shares)
                self._ledger.burn_shares(pool_id, holder, plan.shares_burned, authority=pool.authority)
                self._ledger.transfer(pool.asset_a, vault, holder, plan.amount_a, authority=pool.authority)
                self._ledger.transfer(pool.asset_b, vault, holder, plan.amount_b, authority=pool.authority)
                new_pool = self._resynced(pool)
                new_pool = replace(
                    new_pool,
                    k_last=next_k_last(pool, new_pool.reserve_a, new_pool.reserve_b),
                    status=pool.status.advanced(),
                )

        self._pools[pool_id] = new_pool
        logger.info(
            "withdraw %s: %s shares -> (%s, %s) (protocol %s)",
            pool_id,
            plan.shares_burned,
            plan.amount_a,
            plan.amount_b,
            plan.protocol_fee_shares,
        )
        return WithdrawResult(
            pool=new_pool,
            amount_a=plan.amount_a,
            amount_b=plan.amount_b,
            shares_burned=plan.shares_burned,
            protocol_fee_shares=plan.protocol_fee_shares,
        )

    def swap(
        self,
        pool_id: str,
        trader: Owner,
        *,
        asset_in: AssetId,
        asset_out: AssetId,
        amount_in: Amount,
        min_amount_out: Amount,
        expiration: int,
    ) -> SwapResult:
        pool = self.get_pool(pool_id)
        with self._operation("swap", pool_id):
            require_u64("amount_in", amount_in)
            require_u64("min_amount_out", min_amount_out)
            if amount_in == 0:
                raise ZeroAmountError("amount_in must be positive")
            self._require_deadline(expiration)

            plan = plan_swap(
                pool,
                asset_in=asset_in,
                asset_out=asset_out,
                amount_in=amount_in,
                min_amount_out=min_amount_out,
            )

            vault = pool.authority.address
            with self._ledger.atomic():
                self._ledger.transfer(plan.asset_in, trader, vault, plan.amount_in)
                self._ledger.transfer(plan.asset_out, vault, trader, plan.amount_out, authority=pool.authority)
                new_pool = replace(self._resynced(pool), status=pool.status.advanced())

        self._pools[pool_id] = new_pool
        logger.info(
            "swap %s %s: %s in -> %s out (fee %s)",
            pool_id,
            plan.direction.value,
            plan.amount_in,
            plan.amount_out,
            plan.fee_total,
        )
        return SwapResult(
            pool=new_pool,
            direction=plan.direction,
            amount_in=plan.amount_in,
            amount_out=plan.amount_out,
            fee_total=plan.fee_total,
        )

    def sync(self, pool_id: str) -> LiquidityPool:
        """Overwrite stored reserves with the observed vault balances (idempotent)."""
        pool = self._resynced(self.get_pool(pool_id))
        self._pools[pool_id] = pool
        logger.info("sync %s: reserves (%s, %s)", pool_id, pool.reserve_a, pool.reserve_b)
        return pool

    def skim(self, pool_id: str, destination: Owner) -> SkimResult:
        """
        Pay vault balances in excess of stored reserves to `destination`.

        Reserves and share supply are left untouched.

        Raises:
            NothingToSkimError: observed balances do not exceed reserves
        """
        pool = self.get_pool(pool_id)
        with self._operation("skim", pool_id):
            observed_a, observed_b = self.vault_balances(pool)
            excess = compute_skim(
                observed_a=observed_a,
                observed_b=observed_b,
                reserve_a=pool.reserve_a,
                reserve_b=pool.reserve_b,
            )
            vault = pool.authority.address
            with self._ledger.atomic():
                if excess.excess_a > 0:
                    self._ledger.transfer(pool.asset_a, vault, destination, excess.excess_a, authority=pool.authority)
                if excess.excess_b > 0:
                    self._ledger.transfer(pool.asset_b, vault, destination, excess.excess_b, authority=pool.authority)

        logger.info("skim %s: (%s, %s) -> %s", pool_id, excess.excess_a, excess.excess_b, destination)
        return SkimResult(pool=pool, amount_a=excess.excess_a, amount_b=excess.excess_b)
