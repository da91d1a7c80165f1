"""
Deterministic address derivation for pools and their signing authorities.

An address is ``0x`` + sha256 over a domain tag followed by length-prefixed
seeds. Length prefixes keep distinct seed lists from colliding through
concatenation (``["ab", "c"]`` vs ``["a", "bc"]``).
"""

from __future__ import annotations

import hashlib
from typing import Union

Seed = Union[str, bytes, int]

DERIVATION_VERSION = 1
MAX_SEED_BYTES = 0xFFFF


def domain_tag(label: str, version: int = DERIVATION_VERSION) -> bytes:
    """ASCII, NUL-terminated prefix naming what is being derived."""
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"cpamm:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"


def seed_bytes(seed: Seed) -> bytes:
    # ints are bump-style small counters, encoded as unsigned 64-bit big-endian.
    if isinstance(seed, bool):
        raise TypeError("bool is not a valid seed")
    if isinstance(seed, int):
        if seed < 0 or seed >= 1 << 64:
            raise ValueError(f"int seed out of range: {seed}")
        raw = seed.to_bytes(8, "big")
    elif isinstance(seed, str):
        raw = seed.encode("utf-8")
    elif isinstance(seed, bytes):
        raw = seed
    else:
        raise TypeError(f"unsupported seed type: {type(seed).__name__}")
    if len(raw) > MAX_SEED_BYTES:
        raise ValueError(f"seed too long: {len(raw)} bytes")
    return len(raw).to_bytes(2, "big") + raw


def derive_address(label: str, *seeds: Seed) -> str:
    h = hashlib.sha256(domain_tag(label))
    for seed in seeds:
        h.update(seed_bytes(seed))
    return "0x" + h.hexdigest()
