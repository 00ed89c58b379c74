# src/circuit_toy/io.py
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import pandas as pd
import yaml

from .allocation import ALLOCATION_EPS
from .devices import Battery, Consumer, Device, Generator, make_device
from .engine import Circuit


# -------------------------
# Lightweight data classes
# -------------------------
@dataclass(frozen=True)
class SimulationParams:
    """Run settings read alongside the device list."""
    ticks: int = 1
    eps: float = ALLOCATION_EPS


# Numeric fields per device kind, and whether each must be strictly positive.
_NUMERIC_FIELDS: Dict[str, Dict[str, bool]] = {
    Generator.kind: {"power_production": False},
    Consumer.kind: {"power_consumption": False},
    Battery.kind: {"max_power_rate": True, "max_capacity": False, "stored_power": False},
}


# -------------------------
# Config loading
# -------------------------
def load_config_yaml(path: str) -> Dict:
    """Load YAML config into a plain dict."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError("Config YAML must map to a dict at the top level.")
    return cfg


def _coerce_float(x, name: str) -> float:
    try:
        v = float(x)
    except Exception as e:
        raise ValueError(f"Expected a float for `{name}`, got {x!r}") from e
    if not math.isfinite(v):
        raise ValueError(f"Expected a finite float for `{name}`, got {x!r}")
    return v


def _coerce_int(x, name: str) -> int:
    try:
        return int(x)
    except Exception as e:
        raise ValueError(f"Expected an int for `{name}`, got {x!r}") from e


def _validated_spec(spec: Any, index: int) -> Dict[str, Any]:
    """Coerce and range-check one device entry; the engine itself does not validate."""
    if not isinstance(spec, dict) or "kind" not in spec:
        raise ValueError(f"devices[{index}] must be a mapping with a `kind` key, got {spec!r}")
    kind = str(spec["kind"]).lower()
    if kind not in _NUMERIC_FIELDS:
        raise ValueError(f"devices[{index}]: unknown device kind {spec['kind']!r}")

    out: Dict[str, Any] = dict(spec)
    out["kind"] = kind
    for key, strictly_positive in _NUMERIC_FIELDS[kind].items():
        label = f"devices[{index}].{key}"
        if key not in spec:
            raise ValueError(f"Missing `{label}`")
        v = _coerce_float(spec[key], label)
        if v < 0 or (strictly_positive and v == 0):
            bound = "> 0" if strictly_positive else ">= 0"
            raise ValueError(f"`{label}` must be {bound}, got {v}")
        out[key] = v

    if kind == Battery.kind and out["stored_power"] > out["max_capacity"]:
        raise ValueError(
            f"devices[{index}]: stored_power={out['stored_power']} exceeds "
            f"max_capacity={out['max_capacity']}"
        )
    if "is_on" in out:
        out["is_on"] = bool(out["is_on"])
    if "name" in out:
        out["name"] = str(out["name"])
    return out


def build_devices_from_config(cfg: Dict) -> List[Device]:
    specs = cfg.get("devices")
    if not isinstance(specs, list):
        raise ValueError("Config must contain a `devices` list.")
    devices: List[Device] = []
    for i, raw in enumerate(specs):
        spec = _validated_spec(raw, i)
        try:
            devices.append(make_device(spec.pop("kind"), **spec))
        except TypeError as e:
            raise ValueError(f"devices[{i}]: {e}") from e
    return devices


def build_params_from_config(cfg: Dict) -> SimulationParams:
    ticks = _coerce_int(cfg.get("ticks", 1), "ticks")
    if ticks < 0:
        raise ValueError(f"`ticks` must be >= 0, got {ticks}")
    eps = _coerce_float(cfg.get("epsilon", ALLOCATION_EPS), "epsilon")
    if eps < 0:
        raise ValueError(f"`epsilon` must be >= 0, got {eps}")
    return SimulationParams(ticks=ticks, eps=eps)


def build_circuit_from_config(cfg: Dict, *, debug: bool = False) -> Circuit:
    """Validated devices, registered in the listed (priority) order."""
    params = build_params_from_config(cfg)
    return Circuit(build_devices_from_config(cfg), eps=params.eps, debug=debug)


def load_circuit(path: str, *, debug: bool = False) -> Tuple[Circuit, SimulationParams]:
    """Load YAML config and create a ready-to-tick Circuit along with run params."""
    cfg = load_config_yaml(path)
    return build_circuit_from_config(cfg, debug=debug), build_params_from_config(cfg)


# -------------------------
# Utility exporters
# -------------------------
def device_state(device: Device) -> Dict[str, Any]:
    """Flat view of a device's observable state."""
    row: Dict[str, Any] = {
        "name": device.name,
        "kind": device.kind,
        "is_on": getattr(device, "is_on", True),
        "stored_power": float("nan"),
        "max_capacity": float("nan"),
        "status": None,
        "power": 0.0,
    }
    if isinstance(device, Generator):
        row["power"] = float(device.power_production)
    elif isinstance(device, Consumer):
        row["status"] = device.status.value
        row["power"] = float(device.power_consumption)
    elif isinstance(device, Battery):
        row["stored_power"] = float(device.stored_power)
        row["max_capacity"] = float(device.max_capacity)
        row["power"] = float(device.max_power_rate)
    return row


def circuit_to_dataframe(circuit: Circuit) -> pd.DataFrame:
    """Snapshot of every device in registration order (useful for logging/plots)."""
    rows = [{"index": i, **device_state(d)} for i, d in enumerate(circuit)]
    columns = ["index", "name", "kind", "is_on", "stored_power", "max_capacity", "status", "power"]
    return pd.DataFrame(rows, columns=columns)


__all__ = [
    "SimulationParams",
    "load_config_yaml",
    "build_devices_from_config",
    "build_params_from_config",
    "build_circuit_from_config",
    "load_circuit",
    "device_state",
    "circuit_to_dataframe",
]
