"""Tests for SimulationController."""

from unittest.mock import MagicMock

from controllers.circuit_controller import CircuitController
from controllers.simulation_controller import SimulationController, SimulationResult
from models.validation import NO_GROUND, NO_VOLTAGE_SOURCE, ValidationError
from tests.conftest import build_model, make_component, make_wire


class TestSimulationResult:
    def test_errors_and_warnings_split(self):
        result = SimulationResult(
            success=False,
            findings=[ValidationError.error("bad"), ValidationError.warning("meh")],
        )
        assert result.errors == ["bad"]
        assert result.warnings == ["meh"]


class TestValidate:
    def test_standalone_without_store(self):
        ctrl = SimulationController()
        result = ctrl.validate_circuit()
        assert result.success
        assert [f.message for f in result.findings] == ["Circuit is empty"]

    def test_publishes_findings(self, lamp_circuit):
        lamp_circuit.add_component(make_component("resistor", "R9"))
        store = CircuitController(lamp_circuit)
        result = store.simulation.validate_circuit()

        assert store.validation_errors == result.findings
        assert [f.component_id for f in store.validation_errors] == ["R9"]

    def test_replaces_previous_findings(self, controller):
        controller.validate_circuit()
        assert len(controller.validation_errors) == 1
        controller.add_component("ground")
        findings = controller.validate_circuit()
        assert len(findings) == 1
        assert findings[0].component_id is not None

    def test_notifies_views(self, controller):
        observer = MagicMock()
        controller.add_observer(observer)
        controller.validate_circuit()
        observer.assert_any_call('validation_changed', controller.validation_errors)


class TestSimulate:
    def test_lamp_circuit(self, lamp_controller):
        result = lamp_controller.simulation.simulate_circuit()
        assert result.success
        assert result.active_components == {"SRC", "BULB", "GND"}
        assert lamp_controller.active_components == {"SRC", "BULB", "GND"}
        assert lamp_controller.validation_errors == []

    def test_store_delegate_returns_active_set(self, lamp_controller):
        assert lamp_controller.simulate_circuit() == {"SRC", "BULB", "GND"}

    def test_missing_ground_keeps_previous_active_set(self, lamp_controller):
        lamp_controller.simulate_circuit()
        # Remove the ground directly so the store's active set is untouched
        lamp_controller.model.remove_component("GND")

        result = lamp_controller.simulation.simulate_circuit()
        assert not result.success
        assert result.errors == [NO_GROUND]
        assert lamp_controller.active_components == {"SRC", "BULB", "GND"}
        assert lamp_controller.validation_errors[0].message == NO_GROUND

    def test_missing_source_on_empty_store(self, controller):
        result = controller.simulation.simulate_circuit()
        assert result.errors == [NO_VOLTAGE_SOURCE]
        assert controller.active_components == set()

    def test_no_path_clears_active_set(self, lamp_controller):
        lamp_controller.simulate_circuit()
        lamp_controller.delete_wire("w2")

        result = lamp_controller.simulation.simulate_circuit()
        assert not result.success
        assert result.errors == []
        assert len(result.warnings) == 1
        assert lamp_controller.active_components == set()

    def test_standalone_model(self):
        model = build_model(
            [make_component("dc_source", "V"), make_component("ground", "G")],
            [make_wire("w", "V", "G")],
        )
        result = SimulationController(model).simulate_circuit()
        assert result.success
        assert result.active_components == {"V", "G"}

    def test_does_not_touch_history(self, lamp_controller):
        lamp_controller.simulate_circuit()
        lamp_controller.validate_circuit()
        assert not lamp_controller.can_undo()

    def test_results_not_restored_by_undo(self, lamp_controller):
        lamp_controller.rotate_component("BULB")
        lamp_controller.simulate_circuit()
        lamp_controller.undo()
        assert lamp_controller.active_components == {"SRC", "BULB", "GND"}
