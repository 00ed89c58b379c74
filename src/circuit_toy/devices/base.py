# src/circuit_toy/devices/base.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PowerStatus(str, Enum):
    """Outcome of the most recent tick for a consumer."""
    POWERED = "powered"
    INACTIVE = "inactive"


@dataclass(frozen=True)
class Clamp:
    """Utility to clamp values to a range."""
    lo: float
    hi: float

    def __call__(self, x: float) -> float:
        return max(self.lo, min(self.hi, float(x)))


NON_NEGATIVE = Clamp(0.0, float("inf"))
