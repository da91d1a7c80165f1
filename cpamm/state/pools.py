"""
Liquidity pool record and authority derivation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..core.errors import IdenticalMintsError, MintMismatchError
from ..core.policy import PoolPolicy
from ..kernels.python.precision_v1 import NormalizedAmounts, common_precision, normalize_amounts, validate_precision
from .balances import Amount, AssetId, Owner
from .derivation import derive_address


POOL_SEED = "liquidity_pool"
AUTHORITY_SEED = "pool_authority"
DEFAULT_AUTHORITY_BUMP = 255


class PoolStatus(Enum):
    """
    Coarse pool lifecycle.

    UNINITIALIZED until the first deposit seeds the reserves and mints the
    share floor, SEEDED until the next liquidity or swap operation, ACTIVE
    afterwards. There is no terminal state.
    """
    UNINITIALIZED = "UNINITIALIZED"
    SEEDED = "SEEDED"
    ACTIVE = "ACTIVE"

    def advanced(self) -> "PoolStatus":
        """Status after a committed deposit, withdraw or swap."""
        if self is PoolStatus.UNINITIALIZED:
            return PoolStatus.SEEDED
        return PoolStatus.ACTIVE


def compute_pool_id(asset_a: AssetId, asset_b: AssetId) -> str:
    """Deterministic pool id for an (ordered) asset pair."""
    if not isinstance(asset_a, str) or not isinstance(asset_b, str):
        raise TypeError("asset ids must be strings")
    return derive_address(POOL_SEED, asset_a, asset_b)


@dataclass(frozen=True)
class PoolAuthority:
    """
    Opaque handle for the pool's own signing authority.

    Vaults are holdings owned by `address`; the ledger re-derives the
    authority from the asset pair and `bump` to authorize transfers and
    share issuance on the pool's behalf.
    """
    address: Owner
    bump: int

    def verify(self, asset_a: AssetId, asset_b: AssetId) -> bool:
        return derive_pool_authority(asset_a, asset_b, bump=self.bump) == self


def derive_pool_authority(asset_a: AssetId, asset_b: AssetId, *, bump: int = DEFAULT_AUTHORITY_BUMP) -> PoolAuthority:
    if not isinstance(bump, int) or isinstance(bump, bool) or not (0 <= bump <= 255):
        raise ValueError(f"bump must be in [0, 255]: {bump}")
    return PoolAuthority(address=derive_address(AUTHORITY_SEED, asset_a, asset_b, bump), bump=bump)


@dataclass(frozen=True)
class LiquidityPool:
    """
    Persistent invariant record of a two-asset constant-product pool.

    Attributes:
        pool_id: Deterministic identifier (see `compute_pool_id`)
        asset_a: First asset identifier
        asset_b: Second asset identifier (distinct from asset_a)
        authority: Signing-authority handle owning the vaults
        precision_a: Decimal precision of asset_a (1..12)
        precision_b: Decimal precision of asset_b (1..12)
        policy: Fee and liquidity policy for this pool
        reserve_a: Stored reserve of asset_a in native units
        reserve_b: Stored reserve of asset_b in native units
        k_last: reserve_a * reserve_b at the last deposit/withdraw (0 = no baseline)
        status: Lifecycle state (see `PoolStatus`)

    The record is immutable; operations produce a new record with
    `dataclasses.replace` and commit it only once every effect succeeded.
    """
    pool_id: str
    asset_a: AssetId
    asset_b: AssetId
    authority: PoolAuthority
    precision_a: int
    precision_b: int
    policy: PoolPolicy = field(default_factory=PoolPolicy)
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    k_last: int = 0
    status: PoolStatus = PoolStatus.UNINITIALIZED

    def __post_init__(self) -> None:
        if self.asset_a == self.asset_b:
            raise IdenticalMintsError(f"asset_a and asset_b are both {self.asset_a}")
        validate_precision("precision_a", self.precision_a)
        validate_precision("precision_b", self.precision_b)
        if self.reserve_a < 0 or self.reserve_b < 0:
            raise ValueError(f"Reserves must be non-negative: ({self.reserve_a}, {self.reserve_b})")
        if self.k_last < 0:
            raise ValueError(f"k_last must be non-negative: {self.k_last}")

    @classmethod
    def create(
        cls,
        asset_a: AssetId,
        asset_b: AssetId,
        *,
        precision_a: int,
        precision_b: int,
        policy: PoolPolicy = PoolPolicy(),
    ) -> "LiquidityPool":
        """New empty pool (reserves 0, k_last 0)."""
        if asset_a == asset_b:
            raise IdenticalMintsError(f"asset_a and asset_b are both {asset_a}")
        return cls(
            pool_id=compute_pool_id(asset_a, asset_b),
            asset_a=asset_a,
            asset_b=asset_b,
            authority=derive_pool_authority(asset_a, asset_b),
            precision_a=precision_a,
            precision_b=precision_b,
            policy=policy,
        )

    @property
    def precision(self) -> int:
        """Common precision of the pair."""
        return common_precision(self.precision_a, self.precision_b)

    @property
    def fee_recipient(self) -> Owner:
        return self.policy.fee_recipient or self.authority.address

    def get_reserve(self, asset: AssetId) -> Amount:
        """
        Stored reserve for one of the pool's assets.

        Raises:
            MintMismatchError: If asset is not in this pool
        """
        if asset == self.asset_a:
            return self.reserve_a
        if asset == self.asset_b:
            return self.reserve_b
        raise MintMismatchError(f"Asset {asset} not in pool {self.pool_id}")

    def get_constant_product(self) -> int:
        """k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def normalized_reserves(self) -> NormalizedAmounts:
        """Reserves expressed at the common precision."""
        return normalize_amounts(
            amount_a=self.reserve_a,
            precision_a=self.precision_a,
            amount_b=self.reserve_b,
            precision_b=self.precision_b,
        )

    def __repr__(self) -> str:
        return (
            f"LiquidityPool(pool_id={self.pool_id[:16]}..., "
            f"assets=({self.asset_a[:8]}..., {self.asset_b[:8]}...), "
            f"reserves=({self.reserve_a}, {self.reserve_b}), k_last={self.k_last})"
        )
