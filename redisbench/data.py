"""Dataset fixture for the benchmark."""
from __future__ import annotations

import random
from typing import Optional

__all__ = ["generate_records"]


def generate_records(n: int, *, step: int = 100, shuffle: bool = True, seed: Optional[int] = None) -> list[int]:
    """Return ``n`` records ``0, step, 2*step, ...``; randomly ordered if *shuffle*."""
    if n < 0:
        raise ValueError(f"number of records must be non-negative, got {n}")
    records = [i * step for i in range(n)]
    if shuffle:
        random.Random(seed).shuffle(records)
    return records
