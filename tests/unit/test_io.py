"""Unit tests for YAML config loading and device snapshots."""

import math

import pytest

from circuit_toy.devices import Battery, Consumer, Generator
from circuit_toy.io import (
    SimulationParams,
    build_circuit_from_config,
    build_params_from_config,
    circuit_to_dataframe,
    load_circuit,
    load_config_yaml,
)


def _cfg(*devices, **extra):
    return {"devices": list(devices), **extra}


GEN = {"kind": "generator", "power_production": 9.0, "name": "gen"}
BAT = {"kind": "battery", "max_power_rate": 5.0, "max_capacity": 50.0, "stored_power": 0.0}
CON = {"kind": "consumer", "power_consumption": 2.0, "name": "lamp"}


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_yaml(str(tmp_path / "nope.yaml"))

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError, match="dict at the top level"):
            load_config_yaml(str(path))

    def test_load_circuit_round_trip(self, write_config):
        path = write_config(_cfg(GEN, BAT, CON, ticks=4, epsilon=1e-6))
        circuit, params = load_circuit(path)
        assert params == SimulationParams(ticks=4, eps=1e-6)
        assert circuit.eps == 1e-6
        kinds = [type(d) for d in circuit]
        assert kinds == [Generator, Battery, Consumer]
        assert circuit.consumers[0].name == "lamp"


class TestBuildCircuit:
    def test_defaults(self):
        params = build_params_from_config(_cfg())
        assert params.ticks == 1
        assert params.eps == 1e-7

    def test_kind_is_case_insensitive(self):
        circuit = build_circuit_from_config(_cfg({**GEN, "kind": "Generator"}))
        assert isinstance(circuit.devices[0], Generator)

    def test_is_on_flag_passed_through(self):
        circuit = build_circuit_from_config(_cfg({**BAT, "is_on": False}))
        assert circuit.batteries[0].is_on is False

    def test_numeric_strings_coerced(self):
        circuit = build_circuit_from_config(_cfg({**CON, "power_consumption": "2.5"}))
        assert circuit.consumers[0].power_consumption == 2.5

    @pytest.mark.parametrize(
        "spec, match",
        [
            ({**BAT, "max_power_rate": 0.0}, "max_power_rate` must be > 0"),
            ({**BAT, "max_capacity": -1.0}, "max_capacity` must be >= 0"),
            ({**BAT, "stored_power": 60.0}, "exceeds max_capacity"),
            ({**GEN, "power_production": math.inf}, "finite"),
            ({**CON, "power_consumption": "lots"}, "Expected a float"),
            ({"kind": "consumer"}, "Missing"),
            ({"kind": "reactor"}, "unknown device kind"),
            ({"power_production": 1.0}, "`kind` key"),
            ({**GEN, "voltage": 230}, "devices\\[0\\]"),
        ],
    )
    def test_invalid_devices_rejected(self, spec, match):
        with pytest.raises(ValueError, match=match):
            build_circuit_from_config(_cfg(spec))

    def test_devices_list_required(self):
        with pytest.raises(ValueError, match="devices"):
            build_circuit_from_config({"ticks": 3})

    def test_negative_ticks_rejected(self):
        with pytest.raises(ValueError, match="ticks"):
            build_params_from_config(_cfg(ticks=-1))


class TestSnapshot:
    def test_circuit_to_dataframe(self):
        circuit = build_circuit_from_config(_cfg(GEN, BAT, CON))
        circuit.update_circuit_power()
        df = circuit_to_dataframe(circuit)
        assert list(df["kind"]) == ["generator", "battery", "consumer"]
        assert list(df["index"]) == [0, 1, 2]
        assert df.loc[1, "stored_power"] == pytest.approx(5.0)
        assert df.loc[2, "status"] == "powered"
        assert math.isnan(df.loc[0, "stored_power"])
