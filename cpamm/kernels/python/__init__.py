"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, floor rounding),
- overflow-checked against the ledger's 64/128-bit widths,
- small surface-area (pure functions, typed results).
"""
