"""
Pool fee/liquidity policy.

The fee regime is explicit configuration carried by each pool record rather
than compiled-in constants. The shipped default mirrors the Uniswap-v2
reference design and lives in `cpamm/kernels/dex/pool_policy_v1.yaml`:

- LP fee 0.3%: fee_numerator=997, fee_denominator=1000
- minimum liquidity locked on the first deposit: 1000 shares
- protocol fee: one sixth of fee-driven k growth (share divisor 6)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml


# Dead holder: shares credited here can never be spent.
LOCKED_SHARES_SINK = "0x" + "00" * 32


@dataclass(frozen=True)
class PoolPolicy:
    fee_numerator: int = 997
    fee_denominator: int = 1000
    minimum_liquidity: int = 1000
    protocol_fee_enabled: bool = True
    protocol_fee_share_divisor: int = 6
    # Unspendable holder of the minimum-liquidity lock.
    locked_shares_holder: str = LOCKED_SHARES_SINK
    # None: protocol fee shares are minted to the pool authority.
    fee_recipient: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("fee_numerator", "fee_denominator", "minimum_liquidity", "protocol_fee_share_divisor"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not isinstance(self.protocol_fee_enabled, bool):
            raise TypeError("protocol_fee_enabled must be a bool")
        if self.fee_denominator <= 0:
            raise ValueError(f"fee_denominator must be positive: {self.fee_denominator}")
        if not (0 < self.fee_numerator <= self.fee_denominator):
            raise ValueError(
                f"fee_numerator must be in (0, {self.fee_denominator}]: {self.fee_numerator}"
            )
        if self.minimum_liquidity < 0:
            raise ValueError(f"minimum_liquidity must be non-negative: {self.minimum_liquidity}")
        if self.protocol_fee_share_divisor < 2:
            raise ValueError(
                f"protocol_fee_share_divisor must be at least 2: {self.protocol_fee_share_divisor}"
            )
        if not isinstance(self.locked_shares_holder, str) or not self.locked_shares_holder:
            raise ValueError("locked_shares_holder must be a non-empty string")
        if self.fee_recipient is not None and (not isinstance(self.fee_recipient, str) or not self.fee_recipient):
            raise ValueError("fee_recipient must be a non-empty string when set")

    @property
    def lp_fee_bps(self) -> int:
        """The LP fee in basis points (rounded down), for display."""
        return ((self.fee_denominator - self.fee_numerator) * 10_000) // self.fee_denominator

    @classmethod
    def from_mapping(cls, obj: Mapping[str, Any]) -> "PoolPolicy":
        if not isinstance(obj, Mapping):
            raise TypeError("pool policy must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ValueError(f"unknown pool policy keys: {', '.join(unknown)}")
        return cls(**dict(obj))


def _default_policy_path() -> Path:
    # cpamm/core/policy.py -> cpamm/ -> kernels/dex/pool_policy_v1.yaml
    return Path(__file__).resolve().parents[1] / "kernels" / "dex" / "pool_policy_v1.yaml"


def load_pool_policy(path: Union[str, Path]) -> PoolPolicy:
    """Load a `PoolPolicy` from a YAML file with a top-level `pool_policy` mapping (or a flat one)."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(obj, Mapping):
        raise TypeError("pool policy YAML must be a mapping")
    section = obj["pool_policy"] if "pool_policy" in obj else obj
    return PoolPolicy.from_mapping(section)


@lru_cache(maxsize=1)
def default_pool_policy() -> PoolPolicy:
    return load_pool_policy(_default_policy_path())
