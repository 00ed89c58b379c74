from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

@dataclass(frozen=True)
class TickReport:
    """Aggregates of one circuit tick (all values are power per tick)."""
    tick: int
    total_generation: float
    total_discharge_capacity: float
    supply: float
    consumed: float
    from_generation: float
    from_batteries: float
    leftover_generation: float
    discharged: float = 0.0
    charged: float = 0.0
    powered: int = 0
    inactive: int = 0
    info: Dict[str, float] = field(default_factory=dict)

    @property
    def unserved_generation(self) -> float:
        """Generation neither consumed nor stored (batteries full or off)."""
        return max(0.0, self.leftover_generation - self.charged)
