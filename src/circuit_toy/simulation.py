# src/circuit_toy/simulation.py
from __future__ import annotations

import os
import argparse
import logging
from typing import Optional, List, Dict

import numpy as np
import pandas as pd

from .engine import Circuit
from .io import device_state, load_circuit
from .log import setup_logging

logger = logging.getLogger(__name__)


def run_simulation(
    circuit: Circuit,
    ticks: int,
    *,
    ansi: bool = True,
) -> pd.DataFrame:
    """
    Tick the circuit `ticks` times.
    Returns a long DataFrame: one row per (tick, device) with device state
    after the tick plus that tick's aggregates.
    """
    rows: List[Dict] = []
    for _ in range(int(ticks)):
        circuit.update_circuit_power()
        report = circuit.last_report
        aggregates = {k: v for k, v in report.info.items() if k != "tick"}
        for i, dev in enumerate(circuit):
            rows.append({"t": report.tick, "index": i, **device_state(dev), **aggregates})

        if ansi:
            stored = [b.stored_power for b in circuit.batteries]
            print(
                f"t={report.tick:03d} gen={report.total_generation:7.2f} "
                f"supply={report.supply:7.2f} used={report.consumed:7.2f} "
                f"bat-={report.discharged:6.2f} bat+={report.charged:6.2f} "
                f"on={report.powered}/{report.powered + report.inactive} "
                f"stored={np.round(stored, 2).tolist()}"
            )

    return pd.DataFrame(rows)


def run_from_config(
    config_yaml_path: str,
    *,
    ticks: Optional[int] = None,
    ansi: bool = True,
    debug: bool = False,
) -> pd.DataFrame:
    circuit, params = load_circuit(config_yaml_path, debug=debug)
    n = params.ticks if ticks is None else int(ticks)
    logger.info("Loaded %d devices from %s; running %d ticks", len(circuit), config_yaml_path, n)
    return run_simulation(circuit, n, ansi=ansi)


def summarize_rollout(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-device summary of a rollout:
      - final_stored_power: battery level after the last tick (NaN otherwise)
      - powered_fraction:   share of ticks a consumer was powered (NaN otherwise)
    """
    if df.empty:
        return pd.DataFrame(columns=["index", "name", "kind", "final_stored_power", "powered_fraction"])
    grouped = df.sort_values("t").groupby("index", sort=True)
    summary = grouped.agg(
        name=("name", "first"),
        kind=("kind", "first"),
        final_stored_power=("stored_power", "last"),
    )
    powered = (df["status"] == "powered").groupby(df["index"]).mean()
    is_consumer = summary["kind"] == "consumer"
    summary["powered_fraction"] = powered.where(is_consumer.reindex(powered.index), np.nan)
    return summary.reset_index()


def main():
    parser = argparse.ArgumentParser(
        description="Tick a circuit described by a YAML config and record device state."
    )
    parser.add_argument("--config", default="data/circuit.yaml", type=str)
    parser.add_argument("--ticks", type=int, default=None, help="Override `ticks` from config")
    parser.add_argument("--outdir", type=str, default="outputs")
    parser.add_argument("--no-ansi", action="store_true", help="Do not print per-tick HUD")
    parser.add_argument("--log-level", type=str, default="WARNING")
    parser.add_argument("--debug", action="store_true", help="Log per-tick breakdown at INFO")
    args = parser.parse_args()

    level = args.log_level
    if args.debug and logging.getLevelName(level.upper()) in (logging.WARNING, logging.ERROR, logging.CRITICAL):
        level = "INFO"
    setup_logging(level)
    os.makedirs(args.outdir, exist_ok=True)
    df = run_from_config(
        args.config,
        ticks=args.ticks,
        ansi=not args.no_ansi,
        debug=args.debug,
    )

    out_csv = os.path.join(args.outdir, "rollout_circuit.csv")
    df.to_csv(out_csv, index=False)

    print("\n--- Summary ---")
    print(f"Saved CSV: {out_csv}")
    print(summarize_rollout(df).to_string(index=False))


if __name__ == "__main__":
    main()
