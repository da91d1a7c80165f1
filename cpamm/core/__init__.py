"""
Core pool algorithms.

Planning modules (`cpmm`, `liquidity`, `fees`, `reserves`) import the state
layer and are imported directly; this package only re-exports the leaf
modules that the state layer itself depends on.
"""

from .errors import (
    AmmError,
    DeadlineExceededError,
    DivisionByZeroError,
    IdenticalMintsError,
    InsufficientInitialLiquidityError,
    InsufficientLiquidityError,
    InvalidPrecisionError,
    InvariantViolationError,
    MathError,
    MathOverflowError,
    MintMismatchError,
    NothingToSkimError,
    ProtocolError,
    SlippageExceededError,
    ZeroAmountError,
)
from .policy import PoolPolicy, default_pool_policy, load_pool_policy

__all__ = [
    "AmmError",
    "DeadlineExceededError",
    "DivisionByZeroError",
    "IdenticalMintsError",
    "InsufficientInitialLiquidityError",
    "InsufficientLiquidityError",
    "InvalidPrecisionError",
    "InvariantViolationError",
    "MathError",
    "MathOverflowError",
    "MintMismatchError",
    "NothingToSkimError",
    "ProtocolError",
    "SlippageExceededError",
    "ZeroAmountError",
    "PoolPolicy",
    "default_pool_policy",
    "load_pool_policy",
]
