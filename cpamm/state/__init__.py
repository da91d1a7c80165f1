"""
State management for constant-product pools
"""

from .balances import BalanceTable
from .pools import LiquidityPool, PoolAuthority, PoolStatus
from .shares import ShareTable

__all__ = [
    "BalanceTable",
    "LiquidityPool",
    "PoolAuthority",
    "PoolStatus",
    "ShareTable",
]
