# src/circuit_toy/devices/generator.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(eq=False)
class Generator:
    """
    Power source with a fixed output per tick.

    Generators have no on/off switch: every registered generator
    contributes its full power_production to the supply pool.
    """
    kind: ClassVar[str] = "generator"

    power_production: float
    name: str = ""
