# src/circuit_toy/devices/__init__.py
from __future__ import annotations

from typing import Any, Dict, List, Sequence, Union

from .base import Clamp, PowerStatus
from .battery import Battery
from .consumer import Consumer
from .generator import Generator


Device = Union[Generator, Consumer, Battery]

REGISTRY: Dict[str, type] = {
    Generator.kind: Generator,
    Consumer.kind: Consumer,
    Battery.kind: Battery,
}


def make_device(kind: str, **kwargs) -> Device:
    key = kind.lower()
    if key not in REGISTRY:
        raise ValueError(f"Unknown device kind: {kind}. Known: {list(REGISTRY)}")
    cls = REGISTRY[key]
    return cls(**kwargs)


def make_devices(specs: Sequence[Dict[str, Any]]) -> List[Device]:
    """
    specs = [
      {"kind":"generator", "power_production":9.0},
      {"kind":"battery", "max_power_rate":5.0, "max_capacity":50.0, "stored_power":0.0},
      {"kind":"consumer", "power_consumption":2.0, "name":"lamp"},
    ]
    """
    return [make_device(s["kind"], **{k: v for k, v in s.items() if k != "kind"}) for s in specs]


__all__ = [
    "Device",
    "Generator",
    "Consumer",
    "Battery",
    "PowerStatus",
    "Clamp",
    "REGISTRY",
    "make_device",
    "make_devices",
]
