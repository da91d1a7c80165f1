"""Exception types for the pool invariant engine.

Two families share a common root:

- ``MathError``: a numeric precondition was violated (overflow, division by
  zero, bad precision, broken invariant).
- ``ProtocolError``: a business rule was violated (zero amounts, slippage,
  deadlines, empty pools, ...).

Both are fatal to the current operation and never retried. ``AmmError``
derives from ``ValueError`` so callers written against the plain
``ValueError`` convention of the kernels keep working.
"""

from __future__ import annotations

from typing import Optional


class AmmError(ValueError):
    """Root of every error raised by the engine."""

    code: int = 6000
    default_message: str = "AMM error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MathError(AmmError):
    """Arithmetic precondition violation."""


class MathOverflowError(MathError):
    code = 6001
    default_message = "The calculation overflowed"


class DivisionByZeroError(MathError):
    code = 6002
    default_message = "Division by zero"


class InvalidPrecisionError(MathError):
    code = 6003
    default_message = "The given precision was out of range"


class InvariantViolationError(MathError):
    code = 6004
    default_message = "Constant-product invariant decreased"


class ProtocolError(AmmError):
    """Business-rule violation; the caller must resubmit with corrected parameters."""


class ZeroAmountError(ProtocolError):
    code = 6100
    default_message = "Amount must be greater than zero"


class IdenticalMintsError(ProtocolError):
    code = 6101
    default_message = "Pool assets must be distinct"


class DeadlineExceededError(ProtocolError):
    code = 6102
    default_message = "Deadline exceeded"


class InsufficientLiquidityError(ProtocolError):
    code = 6103
    default_message = "Insufficient liquidity"


class InsufficientInitialLiquidityError(ProtocolError):
    code = 6104
    default_message = "Initial liquidity does not exceed the minimum liquidity lock"


class SlippageExceededError(ProtocolError):
    code = 6105
    default_message = "Slippage limit exceeded"


class NothingToSkimError(ProtocolError):
    code = 6106
    default_message = "Nothing to skim"


class MintMismatchError(ProtocolError):
    code = 6107
    default_message = "Asset does not belong to this pool"


__all__ = [
    "AmmError",
    "MathError",
    "MathOverflowError",
    "DivisionByZeroError",
    "InvalidPrecisionError",
    "InvariantViolationError",
    "ProtocolError",
    "ZeroAmountError",
    "IdenticalMintsError",
    "DeadlineExceededError",
    "InsufficientLiquidityError",
    "InsufficientInitialLiquidityError",
    "SlippageExceededError",
    "NothingToSkimError",
    "MintMismatchError",
]
