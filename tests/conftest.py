"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def make_circuit():
    """Build a Circuit registering devices in the given (priority) order."""
    from circuit_toy.engine import Circuit

    def _make(*devices, **kwargs):
        circuit = Circuit(**kwargs)
        for dev in devices:
            circuit.add_device(dev)
        return circuit

    return _make


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML config dict to a temp file and return its path."""
    import yaml

    def _write(cfg, name="circuit.yaml"):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)
