# src/circuit_toy/devices/consumer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .base import NON_NEGATIVE, PowerStatus


@dataclass(eq=False)
class Consumer:
    """
    Fixed-demand load. Either fully served or not at all:
      status = POWERED  → power_consumption was delivered this tick
      status = INACTIVE → it was not (or the consumer is switched off)
    """
    kind: ClassVar[str] = "consumer"

    power_consumption: float
    is_on: bool = True
    name: str = ""
    status: PowerStatus = PowerStatus.INACTIVE

    @property
    def demand(self) -> float:
        """Power requested this tick; zero when switched off."""
        return NON_NEGATIVE(self.power_consumption) if self.is_on else 0.0

    @property
    def is_powered(self) -> bool:
        return self.status is PowerStatus.POWERED
