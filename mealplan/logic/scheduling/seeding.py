"""Seed handling for reproducible and regenerable plans."""
import time
from typing import Optional

SEED_MODULUS = 2 ** 31 - 1

__all__ = ["SEED_MODULUS", "check_seed", "derive_seed", "next_seed"]


def check_seed(seed) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"Seed must be an integer, got {seed!r}")
    # random.Random seeds from abs(n), so -n would silently replay n
    if seed < 0:
        raise ValueError(f"Seed must be non-negative, got {seed}")
    return seed


def derive_seed(now_ns: Optional[int] = None) -> int:
    """Seed from the wall clock, used when the caller supplies none."""
    ns = time.time_ns() if now_ns is None else now_ns
    return ns % SEED_MODULUS


def next_seed(previous: int, now_ns: Optional[int] = None) -> int:
    """Seed for a regenerate action; never equal to the previous one."""
    check_seed(previous)
    seed = derive_seed(now_ns)
    if seed == previous:
        seed = (seed + 1) % SEED_MODULUS
    return seed
