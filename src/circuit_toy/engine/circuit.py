from __future__ import annotations
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from ..allocation import ALLOCATION_EPS, fair_share, split_supply
from ..devices import Battery, Consumer, Device, Generator, PowerStatus
from ..devices.base import NON_NEGATIVE
from .types import TickReport

logger = logging.getLogger(__name__)


class Circuit:
    """
    Flat, insertion-ordered set of devices sharing one power bus.

    Registration order is consumer priority: under shortfall, earlier
    consumers are served first. Each call to update_circuit_power() is one
    tick of energy flow and mutates battery stored_power and consumer status.

    Not thread-safe: callers must not add/remove/mutate devices while a
    tick is running.
    """
    def __init__(
        self,
        devices: Optional[Iterable[Device]] = None,
        *,
        eps: float = ALLOCATION_EPS,
        debug: bool = False,
    ):
        self._devices: List[Device] = []
        self.eps = float(eps)
        self.debug = bool(debug)
        self.tick_count = 0
        self.last_report: Optional[TickReport] = None
        for dev in devices or ():
            self.add_device(dev)

    # ---- registration ----
    def add_device(self, device: Device) -> None:
        if not isinstance(device, (Generator, Consumer, Battery)):
            raise TypeError(f"Not an electric device: {device!r}")
        if device in self:
            raise ValueError(f"Device already registered: {device!r}")
        self._devices.append(device)

    def remove_device(self, device: Device) -> None:
        for i, dev in enumerate(self._devices):
            if dev is device:
                del self._devices[i]
                return
        raise ValueError(f"Device not registered: {device!r}")

    def clear(self) -> None:
        self._devices.clear()

    # ---- views ----
    @property
    def devices(self) -> Tuple[Device, ...]:
        return tuple(self._devices)

    @property
    def generators(self) -> List[Generator]:
        return [d for d in self._devices if isinstance(d, Generator)]

    @property
    def consumers(self) -> List[Consumer]:
        return [d for d in self._devices if isinstance(d, Consumer)]

    @property
    def batteries(self) -> List[Battery]:
        return [d for d in self._devices if isinstance(d, Battery)]

    def __len__(self) -> int:
        return len(self._devices)

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices)

    def __contains__(self, device: object) -> bool:
        return any(dev is device for dev in self._devices)

    # ---- tick ----
    def update_circuit_power(self) -> None:
        """Run one tick: serve consumers by priority, then discharge/charge batteries fairly."""
        eps = self.eps
        generators = self.generators
        consumers = self.consumers
        batteries = [b for b in self.batteries if b.is_on]

        total_generation = sum(NON_NEGATIVE(g.power_production) for g in generators)
        discharge_caps = [b.discharge_capacity() for b in batteries]
        total_discharge_capacity = sum(discharge_caps)
        supply = total_generation + total_discharge_capacity

        # Strict priority by registration order; a consumer that does not
        # fit is skipped and never blocks later, smaller ones.
        remaining = supply
        powered = inactive = 0
        for c in consumers:
            need = c.demand
            if c.is_on and need <= remaining + eps:
                c.status = PowerStatus.POWERED
                remaining = max(0.0, remaining - need)
                powered += 1
            else:
                c.status = PowerStatus.INACTIVE
                inactive += 1

        consumed = supply - remaining
        from_generation, from_batteries = split_supply(total_generation, consumed)

        discharged = 0.0
        if from_batteries > 0.0 and batteries:
            for b, amount in zip(batteries, fair_share(from_batteries, discharge_caps, eps=eps)):
                discharged += b.remove_power(float(amount))

        leftover = total_generation - from_generation
        charged = 0.0
        if leftover > 0.0 and batteries:
            charge_caps = [b.charge_capacity() for b in batteries]
            for b, amount in zip(batteries, fair_share(leftover, charge_caps, eps=eps)):
                charged += b.add_power(float(amount))

        self.tick_count += 1
        info = {
            "tick": float(self.tick_count),
            "total_generation": float(total_generation),
            "total_discharge_capacity": float(total_discharge_capacity),
            "supply": float(supply),
            "consumed": float(consumed),
            "from_generation": float(from_generation),
            "from_batteries": float(from_batteries),
            "leftover_generation": float(leftover),
            "discharged": float(discharged),
            "charged": float(charged),
            "powered": float(powered),
            "inactive": float(inactive),
        }
        self.last_report = TickReport(
            tick=self.tick_count,
            total_generation=total_generation,
            total_discharge_capacity=total_discharge_capacity,
            supply=supply,
            consumed=consumed,
            from_generation=from_generation,
            from_batteries=from_batteries,
            leftover_generation=leftover,
            discharged=discharged,
            charged=charged,
            powered=powered,
            inactive=inactive,
            info=info,
        )

        logger.log(
            logging.INFO if self.debug else logging.DEBUG,
            "[Circuit] tick=%d gen=%.3f dis_cap=%.3f supply=%.3f consumed=%.3f "
            "from_gen=%.3f from_bat=%.3f leftover=%.3f charged=%.3f powered=%d inactive=%d",
            self.tick_count, total_generation, total_discharge_capacity, supply, consumed,
            from_generation, from_batteries, leftover, charged, powered, inactive,
        )
