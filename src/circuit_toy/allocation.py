# src/circuit_toy/allocation.py
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


# Tolerance used for every share/capacity/remaining comparison.
ALLOCATION_EPS = 1e-7


def fair_share(
    total: float,
    capacities: Sequence[float] | np.ndarray,
    *,
    eps: float = ALLOCATION_EPS,
) -> np.ndarray:
    """
    Max-min fair split of `total` across recipients with per-recipient caps
    (progressive water-filling).

    Each pass offers every open recipient an equal share of what is left.
    Recipients whose capacity is strictly below that share are filled to
    capacity and closed; if nobody was closed, the open ones all get the
    share and we stop. At least one recipient closes per non-final pass,
    so the loop runs at most len(capacities) times.

    Guarantees (up to eps):
      - 0 ≤ a_i ≤ c_i
      - Σ a_i = min(total, Σ c_i)
      - no a_i < c_i can grow without shrinking some a_j ≤ a_i

    Negative total/capacities are treated as zero. Returns a float64 array
    aligned with `capacities`.
    """
    caps = np.clip(np.asarray(capacities, dtype=np.float64).reshape(-1), 0.0, None)
    alloc = np.zeros_like(caps)
    remaining = max(0.0, float(total))
    open_ = np.ones(caps.shape, dtype=bool)

    while open_.any():
        share = remaining / int(open_.sum())
        # equality (within eps) keeps the recipient in the pool
        closing = open_ & (caps < share - eps)
        if not closing.any():
            alloc[open_] = np.minimum(share, caps[open_])
            break
        alloc[closing] = caps[closing]
        remaining = max(0.0, remaining - float(caps[closing].sum()))
        open_ &= ~closing

    return alloc


def split_supply(total_generation: float, consumed: float) -> Tuple[float, float]:
    """
    Attribute consumed power to sources: generation first, batteries cover
    the rest. Returns (from_generation, from_batteries).
    """
    gen = max(0.0, float(total_generation))
    used = max(0.0, float(consumed))
    from_generation = min(gen, used)
    return from_generation, used - from_generation


__all__ = ["ALLOCATION_EPS", "fair_share", "split_supply"]
