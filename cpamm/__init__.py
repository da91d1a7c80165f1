"""
Constant-product AMM pool engine.

Layout:
- `cpamm.kernels.python`: pure integer kernels (swap, liquidity, protocol fee, precision)
- `cpamm.core`: errors, checked arithmetic, policy and the pure operation planners
- `cpamm.state`: holdings, shares and the pool record
- `cpamm.integration`: the pool program that applies plans through a ledger
"""

__version__ = "0.1.0"
