# src/circuit_toy/devices/battery.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import Clamp


@dataclass(eq=False)
class Battery:
    """
    Energy buffer with a symmetric per-tick rate limit.

      - max_power_rate: cap on charge AND discharge per tick (> 0)
      - max_capacity:   upper bound for stored_power (≥ 0)
      - stored_power:   kept within [0, max_capacity] at all times

    An off battery neither supplies nor accepts power during a tick,
    but add_power/remove_power still work (direct external charging).
    """
    kind: ClassVar[str] = "battery"

    max_power_rate: float
    max_capacity: float
    stored_power: float
    is_on: bool = True
    name: str = ""

    def __post_init__(self) -> None:
        self.stored_power = self._bounds(self.stored_power)

    @property
    def _bounds(self) -> Clamp:
        return Clamp(0.0, max(0.0, float(self.max_capacity)))

    @property
    def headroom(self) -> float:
        return max(0.0, float(self.max_capacity) - self.stored_power)

    @property
    def state_of_charge(self) -> float:
        if self.max_capacity <= 0:
            return 0.0
        return self.stored_power / float(self.max_capacity)

    def discharge_capacity(self) -> float:
        """Most this battery can hand to the circuit in one tick."""
        if not self.is_on:
            return 0.0
        return max(0.0, min(float(self.max_power_rate), self.stored_power))

    def charge_capacity(self) -> float:
        """Most this battery can take from the circuit in one tick."""
        if not self.is_on:
            return 0.0
        return max(0.0, min(float(self.max_power_rate), self.headroom))

    def add_power(self, amount: float) -> float:
        """Store up to `amount`; returns what was actually added."""
        before = self.stored_power
        self.stored_power = self._bounds(before + max(0.0, float(amount)))
        return self.stored_power - before

    def remove_power(self, amount: float) -> float:
        """Draw up to `amount`; returns what was actually removed."""
        before = self.stored_power
        self.stored_power = self._bounds(before - max(0.0, float(amount)))
        return before - self.stored_power
