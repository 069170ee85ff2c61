"""
Shared test fixtures for the schematic editor test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from controllers.circuit_controller import CircuitController
from models.circuit import CircuitModel
from models.component import ComponentData, ComponentType
from models.wire import WireData, WirePoint


def make_component(component_type, component_id, position=(0, 0), value=None, rotation=0):
    """Helper to create a ComponentData with minimal boilerplate."""
    return ComponentData(
        component_id=component_id,
        component_type=ComponentType(component_type),
        position=position,
        rotation=rotation,
        value=value,
    )


def make_wire(wire_id, *component_ids, is_free_path=False):
    """Helper to create a WireData whose points reference the given components in order."""
    points = [WirePoint(i * 20, 0, comp_id) for i, comp_id in enumerate(component_ids)]
    return WireData(wire_id=wire_id, points=points, is_free_path=is_free_path)


def build_model(components, wires=()):
    model = CircuitModel()
    for comp in components:
        model.add_component(comp)
    for wire in wires:
        model.add_wire(wire)
    return model


@pytest.fixture
def controller():
    """A fresh store with an empty design."""
    return CircuitController()


@pytest.fixture
def lamp_circuit():
    """
    SRC -- BULB -- GND

    A voltage source wired to a bulb, the bulb wired to ground.
    """
    components = [
        make_component("voltage_source", "SRC", (0, 0), "5V"),
        make_component("bulb", "BULB", (100, 0)),
        make_component("ground", "GND", (200, 0)),
    ]
    wires = [
        make_wire("w1", "SRC", "BULB"),
        make_wire("w2", "BULB", "GND"),
    ]
    return build_model(components, wires)


@pytest.fixture
def lamp_controller(lamp_circuit):
    """Store wrapping lamp_circuit."""
    return CircuitController(lamp_circuit)
