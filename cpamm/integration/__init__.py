"""
Imperative shell: the pool program and the ledger it drives.
"""

from .ledger import FixedClock, InMemoryLedger, SystemClock
from .pool_program import DepositResult, PoolProgram, SkimResult, SwapResult, WithdrawResult

__all__ = [
    "DepositResult",
    "FixedClock",
    "InMemoryLedger",
    "PoolProgram",
    "SkimResult",
    "SwapResult",
    "SystemClock",
    "WithdrawResult",
]
