"""
Kernel layer.

- `cpamm/kernels/python/` contains the integer kernels (precision, quote/swap,
  liquidity, protocol fee).
- `cpamm/kernels/dex/` contains the shipped pool policy (.yaml).
"""
