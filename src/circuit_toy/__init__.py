"""
circuit_toy: per-tick power distribution over a flat circuit of
generators, consumers and batteries.

    from circuit_toy import Circuit, Generator, Consumer, Battery

    circuit = Circuit([Generator(9.0), Battery(5.0, 50.0, 0.0), Consumer(2.0)])
    circuit.update_circuit_power()
"""

from .allocation import ALLOCATION_EPS, fair_share
from .devices import Battery, Consumer, Device, Generator, PowerStatus
from .engine import Circuit, TickReport

__version__ = "0.1.0"

__all__ = [
    "ALLOCATION_EPS",
    "fair_share",
    "Battery",
    "Consumer",
    "Device",
    "Generator",
    "PowerStatus",
    "Circuit",
    "TickReport",
]
