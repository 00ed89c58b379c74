"""Basic import tests to verify package structure."""


def test_import_circuit_toy():
    """Verify main package imports."""
    import circuit_toy
    assert circuit_toy.__version__ == "0.1.0"


def test_import_devices():
    from circuit_toy import devices
    assert set(devices.REGISTRY) == {"generator", "consumer", "battery"}


def test_import_engine():
    from circuit_toy.engine import Circuit, TickReport
    assert hasattr(Circuit, "update_circuit_power")
    assert hasattr(TickReport, "__dataclass_fields__")


def test_top_level_reexports():
    import circuit_toy
    for name in ("Circuit", "Generator", "Consumer", "Battery", "fair_share"):
        assert hasattr(circuit_toy, name)
